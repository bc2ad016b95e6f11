"""
Area of simple shapes.

One ``area`` function over a tagged union, instead of one overload per
parameter list. Every dimension must be strictly positive.
"""

from __future__ import annotations

import math
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, RootModel


class InvalidDimensionError(ValueError):
    pass


class Circle(BaseModel):
    kind: Literal["circle"] = "circle"
    radius: float


class Rectangle(BaseModel):
    kind: Literal["rectangle"] = "rectangle"
    width: float
    height: float


class Triangle(BaseModel):
    kind: Literal["triangle"] = "triangle"
    base: float
    height: float


class Square(BaseModel):
    kind: Literal["square"] = "square"
    side: float


Shape = Annotated[Union[Circle, Rectangle, Triangle, Square], Field(discriminator="kind")]


class ShapeRequest(RootModel[Shape]):
    pass


def _check_dimensions(shape: BaseModel) -> None:
    for name, value in shape.model_dump(exclude={"kind"}).items():
        if not value > 0:
            raise InvalidDimensionError(f"{name} must be positive, got {value}")


def area(shape: Shape) -> float:
    _check_dimensions(shape)

    if isinstance(shape, Circle):
        return math.pi * shape.radius ** 2
    if isinstance(shape, Rectangle):
        return shape.width * shape.height
    if isinstance(shape, Triangle):
        return 0.5 * shape.base * shape.height
    if isinstance(shape, Square):
        return shape.side ** 2
    raise TypeError(f"unsupported shape: {type(shape).__name__}")
