"""
Models produced while discovering the remote API
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class FieldMapping(BaseModel):
    """Source field names per semantic category, in discovery order.

    Categories are not exclusive: a field may appear in several lists and the
    normalizer's first-match order decides which use wins.
    """
    identifier_fields: List[str] = Field(default_factory=list)
    agent_fields: List[str] = Field(default_factory=list)
    transcript_fields: List[str] = Field(default_factory=list)
    sentiment_fields: List[str] = Field(default_factory=list)
    date_fields: List[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not any((
            self.identifier_fields,
            self.agent_fields,
            self.transcript_fields,
            self.sentiment_fields,
            self.date_fields,
        ))


class ProbeShape(str, Enum):
    """Top-level shape of a data endpoint response"""
    ARRAY = "array"
    PAGINATED = "paginated"
    ITEMS = "items"
    RESULTS = "results"
    OBJECT = "object"


class EndpointProbeResult(BaseModel):
    """An endpoint that yielded at least one record when probed"""
    endpoint: str
    shape: ProbeShape
    record_count: int


class ApiEndpointInfo(BaseModel):
    """One (path, method) operation declared by the API description"""
    path: str
    method: str
    summary: str = ""
    description: str = ""
    parameters: List[Any] = Field(default_factory=list)
    responses: Dict[str, Any] = Field(default_factory=dict)
    request_body: Optional[Dict[str, Any]] = None


class ApiSchemaInfo(BaseModel):
    """A named data schema declared under components.schemas"""
    name: str
    type: str = "object"
    properties: Dict[str, Any] = Field(default_factory=dict)
    required: List[str] = Field(default_factory=list)
    example: Optional[Any] = None


class ApiAnalysis(BaseModel):
    """Result of analyzing the remote API description"""
    title: str = "Unknown API"
    version: str = "Unknown Version"
    description: str = "No description available"
    base_url: str = ""
    paths: List[str] = Field(default_factory=list)
    endpoints: List[ApiEndpointInfo] = Field(default_factory=list)
    schemas: List[ApiSchemaInfo] = Field(default_factory=list)
    interaction_endpoints: List[ApiEndpointInfo] = Field(default_factory=list)
    data_models: Dict[str, ApiSchemaInfo] = Field(default_factory=dict)
    field_mapping: FieldMapping = Field(default_factory=FieldMapping)
    analysis_timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class DiagnosticResult(BaseModel):
    """Outcome of a single diagnostic request"""
    endpoint: str
    status: Optional[int] = None
    success: bool = False
    error: Optional[str] = None
    response_time_ms: int = 0
    headers: Dict[str, str] = Field(default_factory=dict)
    data: Optional[Any] = None
