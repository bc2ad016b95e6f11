"""
Fixed transformation rules.

This file exists to keep every constant of the catalog transform in one place.
There are no flags or environment variables; change these to change behavior.
"""

from decimal import Decimal

INPUT_PATH = "data/products.csv"
OUTPUT_PATH = "data/products_transformed.csv"

FILE_ENCODING = "utf-8"
DELIMITER = ","
EXPECTED_FIELDS = 4
OUTPUT_HEADER = "ProductID,Name,Price,Category,PriceRange"

DISCOUNT_CATEGORY = "Electronics"
DISCOUNT_RATE = Decimal("0.10")
PREMIUM_CATEGORY = "Premium Electronics"
PREMIUM_THRESHOLD = Decimal("500.00")

CENT = Decimal("0.01")

# Upper bounds (inclusive) for each price range, checked in order
LOW_MAX = Decimal("10.00")
MEDIUM_MAX = Decimal("100.00")
HIGH_MAX = Decimal("500.00")

# ProductID is a signed 32-bit integer
PRODUCT_ID_MIN = -(2 ** 31)
PRODUCT_ID_MAX = 2 ** 31 - 1

# Digits a price may need once rounded to cents; longer values are skipped
MAX_PRICE_DIGITS = 4096

NO_OUTPUT_MARKER = "(none)"
