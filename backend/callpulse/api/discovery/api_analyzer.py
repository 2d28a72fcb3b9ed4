"""
API Analyzer - Analyzes the remote API description and caches the analysis
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional
import structlog

from callpulse.core.config import settings
from callpulse.core.exceptions import EndpointProbeFailure, SpecUnavailable
from callpulse.models import ApiAnalysis, ApiEndpointInfo, ApiSchemaInfo, FieldMapping
from callpulse.api.standardization.field_inference import infer_from_sample, infer_from_schema_properties
from .endpoint_prober import EndpointProber
from .spec_fetcher import SpecFetcher, is_parameterized

logger = structlog.get_logger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options")

INTERACTION_PATH_KEYWORDS = ("interaction", "call", "report", "analytics")

# Schema name keywords -> data model slot, first match wins
DATA_MODEL_KEYWORDS = (
    ("interaction", ("interaction", "call")),
    ("agent", ("agent", "user")),
    ("analytics", ("report", "analytics")),
)


def _is_interaction_path(path: str) -> bool:
    lower = path.lower()
    return any(keyword in lower for keyword in INTERACTION_PATH_KEYWORDS)


def _data_model_slot(schema_name: str) -> Optional[str]:
    lower = schema_name.lower()
    for slot, keywords in DATA_MODEL_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return slot
    return None


def _section(document: Dict[str, Any], key: str) -> Dict[str, Any]:
    """An optional object-valued section of the spec; anything else is a broken document"""
    value = document.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise SpecUnavailable(
            f"API spec section '{key}' is not a JSON object",
            error_code="SPEC_INVALID",
            details={"section": key, "type": type(value).__name__}
        )
    return value


def _text(value: Any, default: str) -> str:
    return value if isinstance(value, str) and value else default


def _list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


class ApiDocumentationAnalyzer:
    """Turns an OpenAPI document into an ApiAnalysis"""

    def __init__(
        self,
        fetcher: SpecFetcher,
        prober: EndpointProber,
        base_url: Optional[str] = None,
        sample_limit: Optional[int] = None
    ):
        self.fetcher = fetcher
        self.prober = prober
        self.base_url = base_url or settings.INSIGHTS_API_BASE_URL
        self.sample_limit = settings.SAMPLE_ENDPOINT_LIMIT if sample_limit is None else sample_limit

    def analyze(self, spec: Dict[str, Any]) -> ApiAnalysis:
        """
        Analyze a spec document

        Args:
            spec: Parsed OpenAPI document

        Returns:
            ApiAnalysis with endpoints, schemas and a spec-derived field mapping

        Raises:
            SpecUnavailable: when info, paths, components or schemas are not objects
        """
        info = _section(spec, "info")
        analysis = ApiAnalysis(
            title=_text(info.get("title"), "Unknown API"),
            version=_text(info.get("version"), "Unknown Version"),
            description=_text(info.get("description"), "No description available"),
            base_url=self.base_url,
        )

        for path, methods in _section(spec, "paths").items():
            analysis.paths.append(path)
            if not isinstance(methods, dict):
                continue
            for method, details in methods.items():
                if method.lower() not in HTTP_METHODS or not isinstance(details, dict):
                    continue
                request_body = details.get("requestBody")
                endpoint = ApiEndpointInfo(
                    path=path,
                    method=method.upper(),
                    summary=_text(details.get("summary"), ""),
                    description=_text(details.get("description"), ""),
                    parameters=_list(details.get("parameters")),
                    responses=_dict(details.get("responses")),
                    request_body=request_body if isinstance(request_body, dict) else None,
                )
                analysis.endpoints.append(endpoint)
                if _is_interaction_path(path):
                    analysis.interaction_endpoints.append(endpoint)
                    logger.debug("Found interaction endpoint", method=endpoint.method, path=path)

        property_names: List[str] = []
        schemas = _section(_section(spec, "components"), "schemas")
        for name, schema in schemas.items():
            if not isinstance(schema, dict):
                continue
            schema_info = ApiSchemaInfo(
                name=name,
                type=_text(schema.get("type"), "object"),
                properties=_dict(schema.get("properties")),
                required=[field for field in _list(schema.get("required")) if isinstance(field, str)],
                example=schema.get("example"),
            )
            analysis.schemas.append(schema_info)
            property_names.extend(schema_info.properties.keys())

            slot = _data_model_slot(name)
            if slot:
                analysis.data_models[slot] = schema_info
                logger.debug("Identified data model", slot=slot, schema=name)

        analysis.field_mapping = infer_from_schema_properties(property_names)

        logger.info("API spec analyzed",
                    title=analysis.title,
                    version=analysis.version,
                    endpoints=len(analysis.endpoints),
                    interaction_endpoints=len(analysis.interaction_endpoints),
                    schemas=len(analysis.schemas))
        return analysis

    def sample_candidates(self, analysis: ApiAnalysis) -> List[str]:
        """Interaction-like GET paths without placeholders, up to the sample limit"""
        excluded = set(settings.get_excluded_endpoints())
        candidates = []
        for endpoint in analysis.interaction_endpoints:
            if endpoint.method != "GET" or is_parameterized(endpoint.path) or endpoint.path in excluded:
                continue
            if endpoint.path not in candidates:
                candidates.append(endpoint.path)
        return candidates[:self.sample_limit]

    async def refine_with_samples(self, analysis: ApiAnalysis) -> FieldMapping:
        """
        Rebuild the field mapping from live records of interaction endpoints

        Each successful sample replaces the mapping; failed samples leave it
        untouched.
        """
        for path in self.sample_candidates(analysis):
            try:
                records = await self.prober.fetch_records(path, timeout=self.prober.timeout)
            except EndpointProbeFailure as e:
                logger.debug("Sample endpoint failed", endpoint=path, error=e.message)
                continue

            if records and isinstance(records[0], dict):
                analysis.field_mapping = infer_from_sample(records[0])
                logger.info("Field mapping refined from sample", endpoint=path)

        return analysis.field_mapping

    async def analyze_remote(self) -> ApiAnalysis:
        """
        Fetch the remote spec, analyze it and refine it with live samples

        Raises:
            SpecUnavailable: when the spec cannot be fetched
        """
        spec = await self.fetcher.fetch_spec()
        analysis = self.analyze(spec)
        await self.refine_with_samples(analysis)
        return analysis


class SpecAnalysisCache:
    """Process-lifetime cache of the spec analysis with explicit invalidation"""

    def __init__(self):
        self._analysis: Optional[ApiAnalysis] = None
        self._lock = asyncio.Lock()

    @property
    def cached(self) -> Optional[ApiAnalysis]:
        return self._analysis

    async def get_or_compute(self, compute: Callable[[], Awaitable[ApiAnalysis]]) -> ApiAnalysis:
        """Return the cached analysis, computing it once if absent. Failures are not cached."""
        if self._analysis is not None:
            return self._analysis

        async with self._lock:
            if self._analysis is None:
                self._analysis = await compute()
                logger.info("Spec analysis cached", title=self._analysis.title)
            return self._analysis

    def invalidate(self) -> None:
        """Drop the cached analysis; the next load fetches the spec again"""
        self._analysis = None
        logger.info("Spec analysis cache cleared")
