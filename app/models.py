from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PriceRange(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    PREMIUM = "Premium"


class ProductRecord(BaseModel):
    """A data row whose ProductID and Price parsed cleanly."""

    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    price: Decimal
    category: str


class TransformedRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: int
    name_upper: str
    final_price: Decimal
    final_category: str
    price_range: PriceRange


class RunSummary(BaseModel):
    rows_read: int = 0
    rows_transformed: int = 0
    rows_skipped: int = 0
    output_path: Optional[str] = Field(default=None, examples=["data/products_transformed.csv"])
    ok: bool = True

    @property
    def output_written(self) -> bool:
        return self.output_path is not None


class TransformedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class DecodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class TransformResponse(BaseModel):
    transformed_csv: TransformedCsv
    summary: RunSummary
    decoding: DecodingReport


class AreaResponse(BaseModel):
    kind: str
    area: float


class HealthResponse(BaseModel):
    ok: bool = True
