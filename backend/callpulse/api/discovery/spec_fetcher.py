"""
Spec Fetcher - Retrieves the machine-readable description of the remote API
"""

from typing import Any, Dict, Iterable, List, Optional, Union
import httpx
import structlog

from callpulse.core.config import settings
from callpulse.core.exceptions import SpecUnavailable

logger = structlog.get_logger(__name__)

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
HTML_HEADERS = {
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


def is_parameterized(path: str) -> bool:
    """True for paths with {placeholder} segments"""
    return "{" in path or "}" in path


def list_static_paths(
    spec: Union[Dict[str, Any], Iterable[str]],
    excluded: Optional[Iterable[str]] = None
) -> List[str]:
    """
    List the paths that may be probed automatically

    Args:
        spec: Spec document, or an iterable of paths in document order
        excluded: Paths that must never be probed

    Returns:
        Paths without placeholders and not excluded, in document order
    """
    if isinstance(spec, dict):
        declared = spec.get("paths")
        paths = list(declared.keys()) if isinstance(declared, dict) else []
    else:
        paths = list(spec)
    skipped = set(excluded or ())

    static_paths = []
    for path in paths:
        if is_parameterized(path):
            logger.debug("Skipping parameterized endpoint", endpoint=path)
            continue
        if path in skipped:
            logger.debug("Skipping excluded endpoint", endpoint=path)
            continue
        static_paths.append(path)
    return static_paths


class SpecFetcher:
    """Fetches the OpenAPI document and checks that the remote API is up"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        spec_path: Optional[str] = None,
        health_path: Optional[str] = None,
        timeout: Optional[float] = None
    ):
        self.client = client
        self.spec_path = spec_path or settings.SPEC_PATH
        self.health_path = health_path or settings.HEALTH_CHECK_PATH
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout

    async def fetch_spec(self) -> Dict[str, Any]:
        """
        Fetch and parse the API description

        Returns:
            Parsed spec document

        Raises:
            SpecUnavailable: on network error, timeout, non-2xx status,
                invalid JSON or a document that is not an object
        """
        try:
            response = await self.client.get(self.spec_path, headers=JSON_HEADERS, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.warning("Spec fetch failed", spec_path=self.spec_path, error=str(e))
            raise SpecUnavailable(
                f"Failed to fetch API spec: {e}",
                error_code="SPEC_UNREACHABLE",
                details={"spec_path": self.spec_path}
            ) from e

        if not response.is_success:
            logger.warning("Spec fetch returned error status",
                           spec_path=self.spec_path,
                           status_code=response.status_code)
            raise SpecUnavailable(
                f"Failed to fetch API spec: {response.status_code}",
                error_code="SPEC_HTTP_ERROR",
                details={"spec_path": self.spec_path, "status_code": response.status_code}
            )

        try:
            spec = response.json()
        except ValueError as e:
            raise SpecUnavailable(
                "API spec is not valid JSON",
                error_code="SPEC_INVALID",
                details={"spec_path": self.spec_path}
            ) from e

        if not isinstance(spec, dict):
            raise SpecUnavailable(
                "API spec is not a JSON object",
                error_code="SPEC_INVALID",
                details={"spec_path": self.spec_path}
            )

        logger.info("API spec fetched",
                    spec_path=self.spec_path,
                    path_count=len(spec.get("paths") or {}))
        return spec

    async def check_health(self) -> bool:
        """Return True when the documentation page answers with a 2xx status"""
        try:
            response = await self.client.get(self.health_path, headers=HTML_HEADERS, timeout=self.timeout)
        except httpx.HTTPError as e:
            logger.warning("API health check failed", health_path=self.health_path, error=str(e))
            return False

        if not response.is_success:
            logger.warning("API health check returned error status",
                           health_path=self.health_path,
                           status_code=response.status_code)
        return response.is_success
