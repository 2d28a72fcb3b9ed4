"""
API Diagnostics - Reports the status of every probeable endpoint
"""

import asyncio
import time
from typing import Any, List, Optional
import httpx
import structlog

from callpulse.core.config import settings
from callpulse.core.exceptions import SpecUnavailable
from callpulse.models import DiagnosticResult
from .spec_fetcher import HTML_HEADERS, JSON_HEADERS, SpecFetcher, list_static_paths

logger = structlog.get_logger(__name__)

DEFAULT_DIAGNOSTIC_ENDPOINTS = ["/docs", "/openapi.json", "/api/v1/interactions"]
TEXT_PREVIEW_LENGTH = 200


def _parse_body(response: httpx.Response) -> Optional[Any]:
    text = response.text
    if not text:
        return None
    try:
        return response.json()
    except ValueError:
        return text[:TEXT_PREVIEW_LENGTH]


class ApiDiagnostics:
    """Requests each endpoint in turn and records what came back"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        fetcher: SpecFetcher,
        timeout: Optional[float] = None
    ):
        self.client = client
        self.fetcher = fetcher
        self.timeout = settings.PROBE_TIMEOUT if timeout is None else timeout

    async def discover_endpoints(self) -> List[str]:
        """Static endpoints from the spec, or the default set when none are known"""
        try:
            spec = await self.fetcher.fetch_spec()
        except SpecUnavailable as e:
            logger.warning("Diagnostics could not fetch spec", error=e.message)
            return list(DEFAULT_DIAGNOSTIC_ENDPOINTS)

        endpoints = list_static_paths(spec, settings.get_excluded_endpoints())
        return endpoints or list(DEFAULT_DIAGNOSTIC_ENDPOINTS)

    async def check_endpoint(self, endpoint: str) -> DiagnosticResult:
        """Request one endpoint; failures become unsuccessful results"""
        headers = HTML_HEADERS if endpoint == settings.HEALTH_CHECK_PATH else JSON_HEADERS
        started = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self.client.get(endpoint, headers=headers, timeout=self.timeout),
                timeout=self.timeout
            )
        except (httpx.HTTPError, asyncio.TimeoutError) as e:
            return DiagnosticResult(
                endpoint=endpoint,
                success=False,
                response_time_ms=int((time.monotonic() - started) * 1000),
                error=str(e) or type(e).__name__,
            )

        return DiagnosticResult(
            endpoint=endpoint,
            status=response.status_code,
            success=response.is_success,
            response_time_ms=int((time.monotonic() - started) * 1000),
            headers=dict(response.headers),
            data=_parse_body(response),
            error=None if response.is_success else f"HTTP {response.status_code} {response.reason_phrase}",
        )

    async def run(self) -> List[DiagnosticResult]:
        """Run diagnostics against every discovered endpoint, sequentially"""
        endpoints = await self.discover_endpoints()
        logger.info("Running API diagnostics", endpoints=endpoints)

        results = []
        for endpoint in endpoints:
            results.append(await self.check_endpoint(endpoint))

        logger.info("API diagnostics completed",
                    total=len(results),
                    successful=sum(1 for result in results if result.success))
        return results
