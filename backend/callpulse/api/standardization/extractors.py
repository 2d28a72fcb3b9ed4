"""
Extractors - Declarative first-success-wins field cascades

An extractor takes a raw record and returns a value or None. A cascade is an
ordered list of extractors applied by first_success(), which always ends in a
default so that no cascade can fail.
"""

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple, TypeVar, Union
from dateutil import parser as date_parser

T = TypeVar("T")

Record = Mapping[str, Any]
Coercer = Callable[[Any], Optional[T]]
Extractor = Callable[[Record], Optional[T]]

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_LEADING_DATE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})")
# Bare numbers in text are metrics, not dates
_NUMERIC_TEXT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")

# Numeric dates below this are not plausible epoch timestamps (2001-09-09)
EPOCH_SECONDS_FLOOR = 1e9
EPOCH_MILLIS_FLOOR = 1e11


# Coercers

def _finite_float(value: Any) -> Optional[float]:
    """Float of a real number, or None when it is non-finite or out of float range"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    return number if math.isfinite(number) else None


def as_text(value: Any) -> Optional[str]:
    """Non-blank string, trimmed"""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def as_label(value: Any) -> Optional[str]:
    """Non-blank string kept verbatim, or a number rendered as text"""
    if isinstance(value, str):
        return value if value.strip() else None
    if _finite_float(value) is not None:
        return str(value)
    return None


def as_identifier(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def as_number(value: Any) -> Optional[float]:
    """Finite float, parsing the leading number of a string"""
    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return None
        value = float(match.group(0))
    return _finite_float(value)


def as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    return None


def as_text_list(value: Any) -> Optional[List[str]]:
    """Non-empty list of strings verbatim, or one non-blank string wrapped"""
    if isinstance(value, (list, tuple)):
        if value and all(isinstance(item, str) for item in value):
            return list(value)
        return None
    text = as_text(value)
    return [text] if text else None


def _to_calendar_date(moment: datetime) -> date:
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.date()


def _epoch_date(value: Any) -> Optional[date]:
    number = _finite_float(value)
    if number is None or abs(number) < EPOCH_SECONDS_FLOOR:
        return None
    seconds = number / 1000 if abs(number) >= EPOCH_MILLIS_FLOOR else number
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc).date()
    except (OverflowError, OSError, ValueError):
        return None


def as_date(value: Any) -> Optional[date]:
    """Calendar date from date text, date objects, or epoch numbers"""
    if isinstance(value, datetime):
        return _to_calendar_date(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return _epoch_date(value)

    text = value.strip()
    if not text or _NUMERIC_TEXT.match(text):
        return None

    try:
        return _to_calendar_date(date_parser.parse(text))
    except (ValueError, OverflowError):
        pass

    # "2024-01-15 <anything>" still names a day
    match = _LEADING_DATE.match(text)
    if match:
        try:
            return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
        except ValueError:
            return None
    return None


# Extractors

def from_fields(fields: Sequence[str], coerce: Coercer) -> Extractor:
    """Extractor returning the first field, in order, whose value coerces"""
    def extract(record: Record) -> Optional[Any]:
        for field in fields:
            if field in record:
                value = coerce(record[field])
                if value is not None:
                    return value
        return None
    extract.__name__ = f"from_fields({', '.join(fields)})"
    return extract


def first_success(
    record: Record,
    extractors: Sequence[Extractor],
    default: Union[T, Callable[[], T]]
) -> Tuple[T, bool]:
    """
    Apply extractors in order and return the first non-None value

    Args:
        record: Raw record
        extractors: Ordered cascade
        default: Terminal value, or a zero-argument factory for it

    Returns:
        (value, defaulted) where defaulted is True when no extractor matched
    """
    for extractor in extractors:
        value = extractor(record)
        if value is not None:
            return value, False
    return (default() if callable(default) else default), True
