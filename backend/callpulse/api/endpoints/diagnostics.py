from typing import List
from fastapi import APIRouter, Depends

from callpulse.core.logging import get_logger
from callpulse.api.dependencies import get_api_diagnostics
from callpulse.api.discovery import ApiDiagnostics
from callpulse.models import DiagnosticResult

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=List[DiagnosticResult])
async def run_diagnostics(diagnostics: ApiDiagnostics = Depends(get_api_diagnostics)):
    """Request every probeable remote endpoint and report the outcome"""
    logger.info("API diagnostics requested")
    return await diagnostics.run()
