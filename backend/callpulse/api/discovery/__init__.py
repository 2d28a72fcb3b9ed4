"""
API Discovery Package

This package contains the components that fetch the remote API description,
probe its endpoints for record collections and report diagnostics.
"""

from .spec_fetcher import SpecFetcher, list_static_paths
from .endpoint_prober import EndpointProber, infer_shape, extract_records
from .api_analyzer import ApiDocumentationAnalyzer, SpecAnalysisCache
from .diagnostics import ApiDiagnostics

__all__ = [
    "SpecFetcher",
    "list_static_paths",
    "EndpointProber",
    "infer_shape",
    "extract_records",
    "ApiDocumentationAnalyzer",
    "SpecAnalysisCache",
    "ApiDiagnostics",
]
