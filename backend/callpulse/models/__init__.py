"""
Data models shared by discovery, normalization and the interaction loader.
"""

from .interaction import Interaction, AnalyticsSummary, LoadResult, LoaderState
from .discovery import (
    FieldMapping,
    ProbeShape,
    EndpointProbeResult,
    ApiEndpointInfo,
    ApiSchemaInfo,
    ApiAnalysis,
    DiagnosticResult,
)

__all__ = [
    "Interaction",
    "AnalyticsSummary",
    "LoadResult",
    "LoaderState",
    "FieldMapping",
    "ProbeShape",
    "EndpointProbeResult",
    "ApiEndpointInfo",
    "ApiSchemaInfo",
    "ApiAnalysis",
    "DiagnosticResult",
]
