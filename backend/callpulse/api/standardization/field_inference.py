"""
Field Mapping Inferrer - Classifies raw property names into semantic categories
"""

import re
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple
import structlog

from callpulse.core.config import settings
from callpulse.models import FieldMapping

logger = structlog.get_logger(__name__)

# Marks a field whose value is not known (spec declarations carry no values)
UNKNOWN = object()

IDENTIFIER = "identifier"
AGENT = "agent"
TRANSCRIPT = "transcript"
SENTIMENT = "sentiment"
DATE = "date"

CATEGORY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    IDENTIFIER: ("id", "uuid", "key", "reference"),
    AGENT: ("agent", "user", "rep", "employee", "staff", "operator", "analyst", "specialist"),
    TRANSCRIPT: ("transcript", "conversation", "dialogue", "recording"),
    SENTIMENT: ("sentiment", "emotion", "mood", "score", "rating"),
    DATE: ("date", "time", "created", "updated", "timestamp"),
}

# Only count as transcript when the value is long free text
LONG_TEXT_KEYWORDS = ("text", "content")

ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")

_CATEGORY_ATTRIBUTES = {
    IDENTIFIER: "identifier_fields",
    AGENT: "agent_fields",
    TRANSCRIPT: "transcript_fields",
    SENTIMENT: "sentiment_fields",
    DATE: "date_fields",
}


def _contains_any(name: str, keywords: Iterable[str]) -> bool:
    return any(keyword in name for keyword in keywords)


def is_identifier_field(name: str) -> bool:
    lower = name.lower()
    return _contains_any(lower, CATEGORY_KEYWORDS[IDENTIFIER]) or lower == "id" or lower.endswith("_id")


def is_agent_field(name: str, value: Any = UNKNOWN) -> bool:
    lower = name.lower()
    if _contains_any(lower, CATEGORY_KEYWORDS[AGENT]):
        return True
    # A bare "name" is only an agent name when it holds text
    return lower == "name" and (value is UNKNOWN or isinstance(value, str))


def is_transcript_field(
    name: str,
    value: Any = UNKNOWN,
    min_length: Optional[int] = None
) -> bool:
    lower = name.lower()
    if _contains_any(lower, CATEGORY_KEYWORDS[TRANSCRIPT]):
        return True
    if not _contains_any(lower, LONG_TEXT_KEYWORDS):
        return False
    if value is UNKNOWN:
        return True
    threshold = settings.TRANSCRIPT_MIN_LENGTH if min_length is None else min_length
    return isinstance(value, str) and len(value) > threshold


def is_sentiment_field(name: str) -> bool:
    return _contains_any(name.lower(), CATEGORY_KEYWORDS[SENTIMENT])


def is_date_field(name: str, value: Any = UNKNOWN) -> bool:
    if _contains_any(name.lower(), CATEGORY_KEYWORDS[DATE]):
        return True
    return isinstance(value, str) and bool(ISO_DATE_PREFIX.match(value))


def classify_field(
    name: str,
    value: Any = UNKNOWN,
    min_length: Optional[int] = None
) -> Set[str]:
    """
    Classify one field into every semantic category it matches

    Args:
        name: Raw property name
        value: Sample value, or UNKNOWN when classifying a declared property
        min_length: Override for the long-text transcript threshold

    Returns:
        Set of category tags (possibly empty)
    """
    categories = set()
    if is_identifier_field(name):
        categories.add(IDENTIFIER)
    if is_agent_field(name, value):
        categories.add(AGENT)
    if is_transcript_field(name, value, min_length):
        categories.add(TRANSCRIPT)
    if is_sentiment_field(name):
        categories.add(SENTIMENT)
    if is_date_field(name, value):
        categories.add(DATE)
    return categories


def build_field_mapping(
    fields: Iterable[Tuple[str, Any]],
    min_length: Optional[int] = None
) -> FieldMapping:
    """Build a mapping from (name, value) pairs, preserving first-seen order"""
    buckets: Dict[str, List[str]] = {category: [] for category in _CATEGORY_ATTRIBUTES}

    for name, value in fields:
        for category in classify_field(name, value, min_length):
            if name not in buckets[category]:
                buckets[category].append(name)

    return FieldMapping(**{
        attribute: buckets[category]
        for category, attribute in _CATEGORY_ATTRIBUTES.items()
    })


def infer_from_schema_properties(
    properties: Iterable[str],
    min_length: Optional[int] = None
) -> FieldMapping:
    """
    Infer a mapping from declared schema property names

    Values are unknown, so the result is only a hint until a real sample
    record is inspected.
    """
    mapping = build_field_mapping(((name, UNKNOWN) for name in properties), min_length)
    logger.debug("Field mapping inferred from schema",
                 identifier_fields=mapping.identifier_fields,
                 agent_fields=mapping.agent_fields,
                 transcript_fields=mapping.transcript_fields,
                 sentiment_fields=mapping.sentiment_fields,
                 date_fields=mapping.date_fields)
    return mapping


def infer_from_sample(
    sample: Mapping[str, Any],
    min_length: Optional[int] = None
) -> FieldMapping:
    """
    Rebuild a mapping from one concrete record

    The result replaces any spec-derived mapping entirely.

    Args:
        sample: Raw record as returned by the API
        min_length: Override for the long-text transcript threshold

    Returns:
        FieldMapping over the record's actual keys
    """
    if not isinstance(sample, Mapping):
        logger.debug("Sample is not a record, returning empty mapping", sample_type=type(sample).__name__)
        return FieldMapping()

    mapping = build_field_mapping(sample.items(), min_length)
    logger.info("Field mapping rebuilt from sample record",
                actual_fields=list(sample.keys()),
                identifier_fields=mapping.identifier_fields,
                agent_fields=mapping.agent_fields,
                transcript_fields=mapping.transcript_fields,
                sentiment_fields=mapping.sentiment_fields,
                date_fields=mapping.date_fields)
    return mapping
