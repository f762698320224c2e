"""Coercions for loosely typed stored and submitted values.

Records written by earlier clients may hold numbers as strings, blanks
where a value is optional, or dates in arbitrary text. These helpers
normalize such values so one bad field never rejects a whole document.
"""
import logging
import math
from datetime import datetime
from typing import Optional

from tenderbook.time_utils import parse_instant

logger = logging.getLogger(__name__)


def as_text(value) -> str:
    """Stored strings may be missing, null or numeric (e.g. a pincode)."""
    if value is None:
        return ""
    return str(value)


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def as_optional_number(value) -> Optional[float]:
    """
    Parse an optional stored number.

    Blank, non-numeric and non-finite values become None.
    """
    if is_blank(value) or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def as_amount(value) -> float:
    """Absent, blank, non-numeric or non-finite amounts count as 0."""
    number = as_optional_number(value)
    return 0.0 if number is None else number


def as_stored_instant(value, field_name: str) -> Optional[datetime]:
    """Parse a stored date, dropping an unparseable one with a warning."""
    try:
        return parse_instant(value)
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring unparseable %s: %r", field_name, value)
        return None
