"""
Interaction Loader - Orchestrates spec analysis, probing and normalization
"""

import re
from typing import Any, Iterable, List, Mapping, Optional
from urllib.parse import quote
import httpx
import structlog

from callpulse.core.config import settings
from callpulse.core.exceptions import (
    EndpointProbeFailure,
    InteractionLookupFailed,
    InteractionNotFound,
    NoUsableEndpoints,
    SpecUnavailable,
)
from callpulse.models import ApiAnalysis, FieldMapping, Interaction, LoadResult, LoaderState
from callpulse.api.discovery import (
    ApiDocumentationAnalyzer,
    EndpointProber,
    SpecAnalysisCache,
    SpecFetcher,
    list_static_paths,
)
from callpulse.api.discovery.spec_fetcher import JSON_HEADERS, is_parameterized
from callpulse.api.standardization import InteractionNormalizer, infer_from_sample
from .fallback_data import FALLBACK_INTERACTIONS

logger = structlog.get_logger(__name__)

PLACEHOLDER = re.compile(r"\{[^}]*\}")


def _mapping_for(sample: Any, fallback: FieldMapping) -> FieldMapping:
    """Sample records are ground truth; the spec mapping is only used without one"""
    if isinstance(sample, Mapping):
        return infer_from_sample(sample)
    return fallback


class InteractionLoader:
    """
    Loads the interaction collection for a dashboard session

    State machine: idle -> analyzing-spec -> probing-endpoints -> normalizing
    -> ready, with any failure short-cutting to fallback-ready, which always
    serves the static demo dataset.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        fallback_data: Optional[Iterable[Interaction]] = None,
        cache: Optional[SpecAnalysisCache] = None
    ):
        self.base_url = base_url or settings.INSIGHTS_API_BASE_URL
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=settings.REQUEST_TIMEOUT,
            limits=httpx.Limits(max_connections=settings.MAX_CONCURRENT_REQUESTS)
        )
        self.fetcher = SpecFetcher(self.client)
        self.prober = EndpointProber(self.client)
        self.analyzer = ApiDocumentationAnalyzer(self.fetcher, self.prober, base_url=self.base_url)
        self.normalizer = InteractionNormalizer()
        self.cache = cache or SpecAnalysisCache()
        self.fallback_data: List[Interaction] = (
            list(fallback_data) if fallback_data is not None else FALLBACK_INTERACTIONS
        )

        self.state = LoaderState.IDLE
        self.last_result: Optional[LoadResult] = None
        self._load_generation = 0

        logger.info("Interaction loader initialized", base_url=self.base_url)

    async def get_analysis(self) -> ApiAnalysis:
        """Cached spec analysis, fetched on first use"""
        return await self.cache.get_or_compute(self.analyzer.analyze_remote)

    def clear_spec_cache(self) -> None:
        """Forget the cached spec analysis"""
        self.cache.invalidate()

    async def load_interactions(self) -> LoadResult:
        """
        Run one full load cycle

        Returns:
            LoadResult; never raises. used_fallback is True when the static
            demo dataset was served.
        """
        self._load_generation += 1
        generation = self._load_generation
        logger.info("Loading interactions", generation=generation)

        try:
            result = await self._load_live()
        except (SpecUnavailable, NoUsableEndpoints) as e:
            logger.warning("Live interaction load failed, using fallback data",
                           error=e.message,
                           error_code=e.error_code)
            result = self._fallback_result()
        except Exception as e:
            logger.error("Unexpected error loading interactions, using fallback data",
                         error=str(e),
                         exc_info=True)
            result = self._fallback_result()

        if generation == self._load_generation:
            self.last_result = result
        else:
            logger.info("Discarding superseded load result",
                        generation=generation,
                        latest_generation=self._load_generation)

        logger.info("Interactions loaded",
                    record_count=len(result.data),
                    used_fallback=result.used_fallback,
                    source_endpoint=result.source_endpoint)
        return result

    async def get_interactions(self, refresh: bool = False) -> LoadResult:
        """The session's collection, loading it on first use or on refresh"""
        if refresh or self.last_result is None:
            return await self.load_interactions()
        return self.last_result

    async def _load_live(self) -> LoadResult:
        self.state = LoaderState.ANALYZING_SPEC
        if not await self.fetcher.check_health():
            raise SpecUnavailable("API health check failed", error_code="HEALTH_CHECK_FAILED")
        analysis = await self.get_analysis()

        self.state = LoaderState.PROBING_ENDPOINTS
        candidates = list_static_paths(analysis.paths, settings.get_excluded_endpoints())
        working = await self.prober.probe(candidates)
        if not working:
            raise NoUsableEndpoints(
                "No working data endpoints found",
                error_code="NO_WORKING_ENDPOINTS",
                details={"candidates": candidates}
            )

        self.state = LoaderState.NORMALIZING
        for probe_result in working:
            try:
                records = await self.prober.fetch_records(probe_result.endpoint)
            except EndpointProbeFailure as e:
                logger.info("Failed to fetch interactions", endpoint=probe_result.endpoint, error=e.message)
                continue

            if not records:
                continue

            mapping = _mapping_for(records[0], analysis.field_mapping)
            interactions = self.normalizer.normalize_many(records, mapping)
            if interactions:
                self.state = LoaderState.READY
                logger.info("Interactions normalized",
                            endpoint=probe_result.endpoint,
                            shape=probe_result.shape.value,
                            record_count=len(interactions))
                return LoadResult(
                    data=interactions,
                    used_fallback=False,
                    source_endpoint=probe_result.endpoint,
                    state=LoaderState.READY
                )

        raise NoUsableEndpoints(
            "No endpoints returned interaction data",
            error_code="NO_INTERACTION_DATA",
            details={"endpoints": [result.endpoint for result in working]}
        )

    def _fallback_result(self) -> LoadResult:
        self.state = LoaderState.FALLBACK_READY
        return LoadResult(
            data=[interaction.model_copy(deep=True) for interaction in self.fallback_data],
            used_fallback=True,
            state=LoaderState.FALLBACK_READY
        )

    async def fetch_interaction_by_id(self, interaction_id: str) -> Interaction:
        """
        Fetch and normalize a single interaction

        While the session is serving demo data, the lookup is answered from
        that dataset.

        Raises:
            InteractionNotFound: no such record, or no by-id endpoint
            InteractionLookupFailed: the upstream request failed
        """
        if self.last_result is not None and self.last_result.used_fallback:
            for interaction in self.last_result.data:
                if interaction.id == interaction_id:
                    return interaction
            raise InteractionNotFound(f"Interaction {interaction_id} not found", error_code="NOT_FOUND")

        try:
            analysis = await self.get_analysis()
        except SpecUnavailable as e:
            raise InteractionLookupFailed(e.message, error_code=e.error_code) from e

        template = next(
            (path for path in analysis.paths if "interaction" in path.lower() and is_parameterized(path)),
            None
        )
        if template is None:
            raise InteractionNotFound(
                "No interaction by ID endpoint found in API documentation",
                error_code="NO_LOOKUP_ENDPOINT"
            )

        path = PLACEHOLDER.sub(quote(interaction_id, safe=""), template)
        try:
            response = await self.client.get(path, headers=JSON_HEADERS, timeout=settings.REQUEST_TIMEOUT)
        except httpx.HTTPError as e:
            raise InteractionLookupFailed(f"Request failed: {e}", details={"endpoint": path}) from e

        if response.status_code == 404:
            raise InteractionNotFound(f"Interaction {interaction_id} not found", error_code="NOT_FOUND")
        if not response.is_success:
            raise InteractionLookupFailed(
                f"HTTP {response.status_code} {response.reason_phrase}",
                details={"endpoint": path, "status_code": response.status_code}
            )

        try:
            body = response.json()
        except ValueError as e:
            raise InteractionLookupFailed("Response is not valid JSON", details={"endpoint": path}) from e

        return self.normalizer.normalize(body, _mapping_for(body, analysis.field_mapping))

    async def aclose(self) -> None:
        """Close the HTTP client if this loader created it"""
        if self._owns_client:
            await self.client.aclose()
