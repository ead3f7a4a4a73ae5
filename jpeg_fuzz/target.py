"""
Pillow JPEG decoder as fuzz target.

The bytes are opened with Pillow restricted to the JPEG plugin and fully
decoded with default settings. Errors in RECOGNIZED_ERRORS are Pillow's
clean rejections of malformed input and count as benign; anything else is
re-raised untouched for the engine to report.
"""

import io
import logging
from typing import Optional, Sequence, Tuple, Type

from PIL import Image, UnidentifiedImageError

from jpeg_fuzz.outcome import Outcome, RecognizedErrorKind

logger = logging.getLogger(__name__)

DEFAULT_FORMATS: Tuple[str, ...] = ("JPEG",)

# First isinstance match wins: subclasses go before their bases.
# Review whenever Pillow's exception taxonomy changes.
RECOGNIZED_ERRORS: Tuple[Tuple[Type[BaseException], RecognizedErrorKind], ...] = (
    (UnidentifiedImageError, RecognizedErrorKind.FORMAT_VALIDATION),
    (OSError, RecognizedErrorKind.IO_FAILURE),
    (Image.DecompressionBombError, RecognizedErrorKind.RESOURCE_LIMIT),
)

_RECOGNIZED_TYPES = tuple(exc_type for exc_type, _ in RECOGNIZED_ERRORS)


def classify_error(exc: BaseException) -> Optional[RecognizedErrorKind]:
    """Return the recognized kind of exc, or None if it is not recognized."""
    for exc_type, kind in RECOGNIZED_ERRORS:
        if isinstance(exc, exc_type):
            return kind
    return None


def check_formats(formats: Sequence[str]) -> Tuple[str, ...]:
    """Return formats upper-cased; raise ValueError for ones Pillow cannot open."""
    Image.init()
    normalized = tuple(f.upper() for f in formats)
    unknown = [f for f in normalized if f not in Image.OPEN]
    if not normalized or unknown:
        raise ValueError(f"Unsupported image formats: {unknown or list(formats)}")
    return normalized


def decode_image(data: bytes, formats: Sequence[str] = DEFAULT_FORMATS) -> None:
    """Open and fully decode data. The decoded pixels are not inspected."""
    with Image.open(io.BytesIO(data), formats=list(formats)) as image:
        image.load()


def invoke(data: bytes, formats: Sequence[str] = DEFAULT_FORMATS) -> Outcome:
    """
    Decode one input exactly once.

    Returns Outcome.success() or Outcome.recognized(kind). Every other
    exception propagates as raised.
    """
    try:
        decode_image(data, formats)
    except _RECOGNIZED_TYPES as e:
        kind = classify_error(e)
        if kind is None:
            raise
        logger.debug("Rejected input (%d bytes): %s: %s", len(data), kind.value, e)
        return Outcome.recognized(kind)
    return Outcome.success()
