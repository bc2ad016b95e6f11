"""
Product catalog transform.

Reads ``ProductID,Name,Price,Category`` rows, applies the catalog rules and
writes ``ProductID,Name,Price,Category,PriceRange`` rows.

Run phases:
- setup: create the output directory, check the input file
- streaming: header handling, then one line in -> at most one line out
- completion: print the run summary, whatever happened before

Per-row transformation order matters:
1. name upper-cased
2. Electronics discount, then rounding to cents (half away from zero)
3. recategorization, on the rounded discounted price
4. price range, on the final price
"""

from __future__ import annotations

import logging
import re
import sys
from decimal import ROUND_HALF_UP, Decimal, localcontext
from pathlib import Path
from typing import Iterable, Optional, TextIO, Union

from .errors import (
    DirectoryCreationFailure,
    FieldParseFailure,
    MalformedRowFailure,
    MissingInputFailure,
    PipelineError,
    RowError,
    StreamIOFailure,
)
from .models import PriceRange, ProductRecord, RunSummary, TransformedRecord
from .rules import (
    CENT,
    DELIMITER,
    DISCOUNT_CATEGORY,
    DISCOUNT_RATE,
    EXPECTED_FIELDS,
    FILE_ENCODING,
    HIGH_MAX,
    INPUT_PATH,
    LOW_MAX,
    MAX_PRICE_DIGITS,
    MEDIUM_MAX,
    NO_OUTPUT_MARKER,
    OUTPUT_HEADER,
    OUTPUT_PATH,
    PREMIUM_CATEGORY,
    PREMIUM_THRESHOLD,
    PRODUCT_ID_MAX,
    PRODUCT_ID_MIN,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# trimmed from each field, like Java's String.trim(): every char up to U+0020
_TRIM_CHARS = "".join(chr(code) for code in range(0x21))


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------
def prepare_output_location(output_path: PathLike) -> None:
    """Create any missing parent directories of ``output_path``."""
    parent = Path(output_path).parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationFailure(f"Could not create output directory: {exc}") from exc


def verify_input_exists(input_path: PathLike) -> None:
    if not Path(input_path).is_file():
        raise MissingInputFailure(f"Missing input file at '{input_path}'.")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------
def _parse_product_id(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise FieldParseFailure(f"ProductID is not an integer: {text!r}")
    value = int(text)
    if not PRODUCT_ID_MIN <= value <= PRODUCT_ID_MAX:
        raise FieldParseFailure(f"ProductID out of range: {text!r}")
    return value


def _price_precision(price: Decimal) -> int:
    """Digits needed to discount and round ``price`` to cents without loss."""
    _, digits, exponent = price.as_tuple()
    # cents plus the discount rate's extra places, with one to spare
    return len(digits) + max(exponent, 0) + 5


def _parse_price(text: str) -> Decimal:
    if not _DECIMAL_RE.fullmatch(text):
        raise FieldParseFailure(f"Price is not a decimal: {text!r}")
    price = Decimal(text)
    if _price_precision(price) > MAX_PRICE_DIGITS:
        raise FieldParseFailure(f"Price has too many digits: {text!r}")
    return price


def parse_row(line: str) -> ProductRecord:
    """
    Turn one data line into a record.

    Raises MalformedRowFailure for blank lines or a field count other than
    four (empty fields count), FieldParseFailure when ProductID or Price
    is not numeric.
    """
    if not line.strip():
        raise MalformedRowFailure("blank line")

    parts = line.split(DELIMITER)
    if len(parts) != EXPECTED_FIELDS:
        raise MalformedRowFailure(f"expected {EXPECTED_FIELDS} fields, got {len(parts)}")

    id_text, name, price_text, category = (part.strip(_TRIM_CHARS) for part in parts)

    return ProductRecord(
        product_id=_parse_product_id(id_text),
        name=name,
        price=_parse_price(price_text),
        category=category,
    )


# ---------------------------------------------------------------------------
# Transformation
# ---------------------------------------------------------------------------
def _is_discount_category(category: str) -> bool:
    return category.casefold() == DISCOUNT_CATEGORY.casefold()


def price_range(price: Decimal) -> PriceRange:
    if price <= LOW_MAX:
        return PriceRange.LOW
    if price <= MEDIUM_MAX:
        return PriceRange.MEDIUM
    if price <= HIGH_MAX:
        return PriceRange.HIGH
    return PriceRange.PREMIUM


def transform_record(record: ProductRecord) -> TransformedRecord:
    discounted = _is_discount_category(record.category)

    with localcontext() as ctx:
        ctx.prec = _price_precision(record.price)
        price = record.price
        if discounted:
            price = price - price * DISCOUNT_RATE
        final_price = price.quantize(CENT, rounding=ROUND_HALF_UP)

    final_category = record.category
    if discounted and final_price > PREMIUM_THRESHOLD:
        final_category = PREMIUM_CATEGORY

    return TransformedRecord(
        product_id=record.product_id,
        # str.upper() does not consult the host locale
        name_upper=record.name.upper(),
        final_price=final_price,
        final_category=final_category,
        price_range=price_range(final_price),
    )


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------
def _plain(price: Decimal) -> str:
    return format(price, "f")


def format_output_row(record: TransformedRecord) -> str:
    return DELIMITER.join(
        (
            str(record.product_id),
            record.name_upper,
            _plain(record.final_price),
            record.final_category,
            record.price_range.value,
        )
    )


def format_progress_line(record: TransformedRecord) -> str:
    return (
        f"ProductID: {record.product_id} | Name: {record.name_upper} | "
        f"Price: ${_plain(record.final_price)} | Category: {record.final_category} | "
        f"PriceRange: {record.price_range.value}"
    )


def format_summary(summary: RunSummary) -> str:
    return "\n".join(
        (
            "---- Run Summary ----",
            f"Rows read       : {summary.rows_read}",
            f"Rows transformed: {summary.rows_transformed}",
            f"Rows skipped    : {summary.rows_skipped}",
            f"Output written  : {summary.output_path if summary.output_written else NO_OUTPUT_MARKER}",
        )
    )


# ---------------------------------------------------------------------------
# Streaming
# ---------------------------------------------------------------------------
def transform_stream(
    source: Iterable[str],
    sink: TextIO,
    summary: RunSummary,
    progress: Optional[TextIO] = None,
) -> RunSummary:
    """
    Write the output header, drop the input header, transform every data line.

    Each transformed row is written to ``sink`` (and echoed to ``progress``)
    as soon as it is built. Row errors are counted as skips. I/O errors from
    ``source`` or ``sink`` propagate with ``summary`` holding the counts so far.
    """
    sink.write(OUTPUT_HEADER + "\n")

    lines = iter(source)
    header = next(lines, None)
    if header is None:
        logger.debug("input is empty, no header line")
        return summary

    for raw_line in lines:
        summary.rows_read += 1
        line = raw_line.rstrip("\r\n")

        try:
            record = parse_row(line)
        except RowError as exc:
            summary.rows_skipped += 1
            logger.debug("skipping row %d: %s", summary.rows_read, exc)
            continue

        transformed = transform_record(record)
        sink.write(format_output_row(transformed) + "\n")
        if progress is not None:
            print(format_progress_line(transformed), file=progress)

        summary.rows_transformed += 1

    return summary


def _stream_files(
    input_path: PathLike,
    output_path: PathLike,
    summary: RunSummary,
    progress: Optional[TextIO],
) -> None:
    try:
        with open(input_path, "r", encoding=FILE_ENCODING, errors="replace") as source, open(
            output_path, "w", encoding=FILE_ENCODING, newline=""
        ) as sink:
            summary.output_path = str(output_path)
            transform_stream(source, sink, summary, progress=progress)
    except OSError as exc:
        raise StreamIOFailure(str(exc)) from exc


def run_pipeline(
    input_path: PathLike = INPUT_PATH,
    output_path: PathLike = OUTPUT_PATH,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> RunSummary:
    """
    Run the full transform and print its summary.

    Never raises for the documented failures: setup errors and mid-stream
    I/O errors are reported on ``err`` and reflected in ``summary.ok``.
    Any partially written output file is left in place.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    summary = RunSummary()

    try:
        prepare_output_location(output_path)
        verify_input_exists(input_path)
        try:
            _stream_files(input_path, output_path, summary, progress=out)
        except StreamIOFailure as exc:
            logger.error("stream failed after %d rows: %s", summary.rows_read, exc)
            print(f"I/O ERROR: {exc}", file=err)
            summary.ok = False
    except PipelineError as exc:
        logger.error("setup failed: %s", exc)
        print(f"ERROR: {exc}", file=err)
        summary.ok = False

    print(format_summary(summary), file=out)
    return summary
