"""
Shared service instances for the HTTP layer
"""

from typing import Optional

from callpulse.api.discovery import ApiDiagnostics
from callpulse.services import InteractionLoader

_loader: Optional[InteractionLoader] = None


def get_interaction_loader() -> InteractionLoader:
    """Process-wide loader; holds the session collection and the spec cache"""
    global _loader
    if _loader is None:
        _loader = InteractionLoader()
    return _loader


def get_api_diagnostics() -> ApiDiagnostics:
    loader = get_interaction_loader()
    return ApiDiagnostics(loader.client, loader.fetcher)


async def shutdown_interaction_loader() -> None:
    global _loader
    if _loader is not None:
        await _loader.aclose()
        _loader = None
