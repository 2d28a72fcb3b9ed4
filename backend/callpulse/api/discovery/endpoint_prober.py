"""
Endpoint Prober - Finds which static endpoints yield record collections
"""

import asyncio
from typing import Any, List, Optional, Sequence, Tuple
import httpx
import structlog

from callpulse.core.config import settings
from callpulse.core.exceptions import EndpointProbeFailure
from callpulse.models import EndpointProbeResult, ProbeShape
from .spec_fetcher import JSON_HEADERS

logger = structlog.get_logger(__name__)

# Wrapper keys checked, in order, after a bare array
_WRAPPER_SHAPES = (
    ("data", ProbeShape.PAGINATED),
    ("items", ProbeShape.ITEMS),
    ("results", ProbeShape.RESULTS),
)


def infer_shape(body: Any) -> Tuple[Optional[ProbeShape], List[Any]]:
    """
    Infer the response shape and pull out its records

    Args:
        body: Parsed JSON response body

    Returns:
        (shape, records); shape is None when the body holds no usable records
    """
    if isinstance(body, list):
        return ProbeShape.ARRAY, body
    if isinstance(body, dict):
        for key, shape in _WRAPPER_SHAPES:
            if isinstance(body.get(key), list):
                return shape, body[key]
        return ProbeShape.OBJECT, [body]
    return None, []


def extract_records(body: Any) -> List[Any]:
    """Records of a response body, whatever its wrapper"""
    return infer_shape(body)[1]


class EndpointProber:
    """Issues bounded-time trial requests against candidate endpoints"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None
    ):
        self.client = client
        self.timeout = settings.PROBE_TIMEOUT if timeout is None else timeout
        self.semaphore = asyncio.Semaphore(max_concurrency or settings.MAX_CONCURRENT_REQUESTS)

    async def _fetch_json(self, endpoint: str, timeout: float) -> Any:
        try:
            response = await self.client.get(endpoint, headers=JSON_HEADERS, timeout=timeout)
        except httpx.HTTPError as e:
            raise EndpointProbeFailure(f"Request failed: {e}", details={"endpoint": endpoint}) from e

        if not response.is_success:
            raise EndpointProbeFailure(
                f"HTTP {response.status_code} {response.reason_phrase}",
                details={"endpoint": endpoint, "status_code": response.status_code}
            )

        try:
            return response.json()
        except ValueError as e:
            raise EndpointProbeFailure("Response is not valid JSON", details={"endpoint": endpoint}) from e

    async def probe_endpoint(self, endpoint: str) -> EndpointProbeResult:
        """
        Probe a single endpoint

        Raises:
            EndpointProbeFailure: on error status, network error, timeout,
                invalid JSON or a body without records
        """
        async with self.semaphore:
            try:
                body = await asyncio.wait_for(self._fetch_json(endpoint, self.timeout), timeout=self.timeout)
            except asyncio.TimeoutError as e:
                raise EndpointProbeFailure(
                    f"Timed out after {self.timeout}s",
                    details={"endpoint": endpoint}
                ) from e

        shape, records = infer_shape(body)
        if shape is None or not records:
            raise EndpointProbeFailure("No records in response", details={"endpoint": endpoint})

        return EndpointProbeResult(endpoint=endpoint, shape=shape, record_count=len(records))

    async def _probe_or_none(self, endpoint: str) -> Optional[EndpointProbeResult]:
        try:
            result = await self.probe_endpoint(endpoint)
        except EndpointProbeFailure as e:
            logger.debug("Endpoint not working", endpoint=endpoint, error=e.message)
            return None

        logger.info("Working endpoint discovered",
                    endpoint=endpoint,
                    shape=result.shape.value,
                    record_count=result.record_count)
        return result

    async def probe(self, endpoints: Sequence[str]) -> List[EndpointProbeResult]:
        """
        Probe every endpoint independently

        Args:
            endpoints: Static paths, in priority order

        Returns:
            Endpoints that yielded at least one record, in probe order
        """
        logger.info("Probing endpoints", endpoint_count=len(endpoints))
        outcomes = await asyncio.gather(*(self._probe_or_none(endpoint) for endpoint in endpoints))
        working = [outcome for outcome in outcomes if outcome is not None]
        logger.info("Endpoint probing completed",
                    total_endpoints=len(endpoints),
                    working_endpoints=len(working))
        return working

    async def fetch_records(self, endpoint: str, timeout: Optional[float] = None) -> List[Any]:
        """
        Fetch an endpoint's full payload and return its records

        Raises:
            EndpointProbeFailure: when the request fails in any way
        """
        limit = settings.REQUEST_TIMEOUT if timeout is None else timeout
        try:
            body = await asyncio.wait_for(self._fetch_json(endpoint, limit), timeout=limit)
        except asyncio.TimeoutError as e:
            raise EndpointProbeFailure(f"Timed out after {limit}s", details={"endpoint": endpoint}) from e
        return extract_records(body)
