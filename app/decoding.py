"""
Decoding of uploaded CSV bytes into text the transform can stream.

Rules:
- Detect encoding best-effort via charset-normalizer.
- A UTF-8 BOM never leaks into the first header field.
- If the detected encoding fails, retry UTF-8, then decode with replacement.
- Newlines are normalized to LF.
"""

from __future__ import annotations

import logging

from charset_normalizer import from_bytes

from .models import DecodingReport

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"


def decode_csv_bytes(raw: bytes) -> tuple[str, DecodingReport]:
    detected = None

    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(_UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False

    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            logger.warning("could not decode upload as %s or utf-8, replacing bad bytes", decode_used)
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    text = text.replace("\r\n", "\n").replace("\r", "\n")

    return text, DecodingReport(
        detected=detected,
        decode_used=decode_used,
        decode_fallback=decode_fallback,
    )
