"""
Response Normalizer - Turns arbitrarily shaped records into Interactions
"""

import time
import uuid
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
import structlog
from pydantic import BaseModel, Field

from callpulse.core.config import settings
from callpulse.models import FieldMapping, Interaction
from .extractors import (
    Extractor,
    as_bool,
    as_date,
    as_identifier,
    as_label,
    as_number,
    as_text,
    as_text_list,
    first_success,
    from_fields,
)

logger = structlog.get_logger(__name__)

IDENTIFIER_PREFIX = "INT"
UNKNOWN_AGENT = "Unknown Agent"
GENERAL_INQUIRY = "General Inquiry"
NO_COACHING = "No coaching recommendations available"

COMMON_AGENT_FIELDS = (
    "agent_name",
    "agentName",
    "agent",
    "user_name",
    "userName",
    "name",
    "representative",
    "rep_name",
    "employee_name",
    "staff_name",
    "operator",
)

ISSUE_TYPE_FIELDS = ("issue_type", "issueType", "category", "type")
DESCRIPTION_FIELDS = ("description", "summary", "notes", "details")
RESOLUTION_FIELDS = ("resolution", "outcome", "status", "result")
COACHING_FIELDS = ("coaching_recommendations", "recommendations", "coaching", "feedback", "suggestions")
GREETING_TEXT_FIELDS = ("greeting_text", "greetingText", "greeting")
HAS_GREETING_FIELDS = ("has_greeting", "hasGreeting")
BEHAVIOR_FIELDS = ("behavior", "greeting_behavior", "greetingBehavior")
COMPLIANCE_FIELDS = ("compliance_score", "complianceScore", "score")

# Metric keyword -> (Interaction attribute, fixed default).
# sentiment_end has no fixed default: it is sentiment_start + 25.
METRICS: Dict[str, Tuple[str, Optional[float]]] = {
    "sentiment_start": ("sentiment_start", 50.0),
    "sentiment_end": ("sentiment_end", None),
    "positive_sentiment": ("positive_sentiment", 70.0),
    "negative_sentiment": ("negative_sentiment", 30.0),
    "crosstalk": ("crosstalk_score", 2.5),
    "mutual_silence": ("mutual_silence_score", 5.0),
    "nontalk": ("nontalk_score", 3.0),
}
SENTIMENT_END_OFFSET = 25.0


class NormalizationOutcome(BaseModel):
    """A normalized interaction plus the fields that fell back to defaults"""
    interaction: Interaction
    defaulted_fields: List[str] = Field(default_factory=list)


def synthesize_identifier() -> str:
    """Identifier for records that carry none: INT-<epoch millis>-<9 hex chars>"""
    return f"{IDENTIFIER_PREFIX}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"


def metric_field_candidates(metric: str) -> Tuple[str, ...]:
    """Literal field-name guesses for a metric, in lookup order"""
    return (
        f"{metric}_score",
        f"{metric}Score",
        metric,
        f"{metric}_value",
        f"{metric}Value",
    )


def _mapped_metric_fields(mapping: FieldMapping, metric: str) -> List[str]:
    keyword = metric.lower()
    return [field for field in mapping.sentiment_fields if keyword in field.lower()]


def _transcript_text(min_length: int):
    def coerce(value: Any) -> Optional[str]:
        text = as_text(value)
        if text is not None and len(text) > min_length:
            return text
        return None
    return coerce


class InteractionNormalizer:
    """Normalizes raw API records into canonical Interaction records"""

    def __init__(self, transcript_min_length: Optional[int] = None):
        self.transcript_min_length = (
            settings.TRANSCRIPT_MIN_LENGTH if transcript_min_length is None else transcript_min_length
        )

    def metric_cascade(self, mapping: FieldMapping, metric: str) -> List[Extractor]:
        """Mapped sentiment fields naming the metric, then literal guesses"""
        return [
            from_fields(_mapped_metric_fields(mapping, metric), as_number),
            from_fields(metric_field_candidates(metric), as_number),
        ]

    def normalize_record(self, raw: Any, mapping: FieldMapping) -> NormalizationOutcome:
        """
        Normalize one raw record, reporting defaulted fields

        Args:
            raw: Raw record (anything that is not a mapping is treated as empty)
            mapping: Field mapping for the record's source

        Returns:
            NormalizationOutcome; never raises
        """
        record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        defaulted: List[str] = []
        values: Dict[str, Any] = {}

        def resolve(name: str, extractors: Sequence[Extractor], default: Any) -> Any:
            value, was_defaulted = first_success(record, extractors, default)
            if was_defaulted:
                defaulted.append(name)
            values[name] = value
            return value

        resolve("id", [from_fields(mapping.identifier_fields, as_identifier)], synthesize_identifier)
        resolve("agent_name", [
            from_fields(mapping.agent_fields, as_text),
            from_fields(COMMON_AGENT_FIELDS, as_text),
        ], UNKNOWN_AGENT)

        transcript, _ = first_success(
            record,
            [from_fields(mapping.transcript_fields, _transcript_text(self.transcript_min_length))],
            None,
        )
        values["transcript"] = transcript

        resolve("date", [from_fields(mapping.date_fields, as_date)], date.today)

        for metric, (attribute, fixed_default) in METRICS.items():
            if fixed_default is None:
                fixed_default = values["sentiment_start"] + SENTIMENT_END_OFFSET
            resolve(attribute, self.metric_cascade(mapping, metric), fixed_default)

        resolve("issue_type", [from_fields(ISSUE_TYPE_FIELDS, as_label)], GENERAL_INQUIRY)
        resolve("description", [from_fields(DESCRIPTION_FIELDS, as_label)], "No description available")
        resolve("resolution", [from_fields(RESOLUTION_FIELDS, as_label)], "Completed")
        resolve("coaching_recommendations", [from_fields(COACHING_FIELDS, as_text_list)], lambda: [NO_COACHING])
        resolve("greeting_text", [from_fields(GREETING_TEXT_FIELDS, as_label)], "Standard greeting")
        resolve("has_greeting", [from_fields(HAS_GREETING_FIELDS, as_bool)], True)
        resolve("behavior", [from_fields(BEHAVIOR_FIELDS, as_label)], "Professional")
        resolve("compliance_score", [from_fields(COMPLIANCE_FIELDS, as_label)], "Good")

        interaction = Interaction(**values)

        if defaulted:
            logger.debug("Normalization defaulted fields",
                         interaction_id=interaction.id,
                         defaulted_fields=defaulted)

        return NormalizationOutcome(interaction=interaction, defaulted_fields=defaulted)

    def normalize(self, raw: Any, mapping: FieldMapping) -> Interaction:
        """Normalize one raw record into an Interaction"""
        return self.normalize_record(raw, mapping).interaction

    def normalize_many(self, records: Sequence[Any], mapping: FieldMapping) -> List[Interaction]:
        """Normalize every record of one payload with a shared mapping"""
        interactions = [self.normalize(record, mapping) for record in records]
        logger.info("Records normalized", record_count=len(interactions))
        return interactions
