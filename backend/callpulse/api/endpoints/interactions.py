"""
Interaction endpoints - Normalized interaction data for the dashboard
"""

from typing import List
from fastapi import APIRouter, Depends, Query

from callpulse.core.exceptions import (
    InteractionLookupFailed,
    InteractionNotFound,
    bad_gateway_exception,
    not_found_exception,
)
from callpulse.core.logging import get_logger
from callpulse.api.dependencies import get_interaction_loader
from callpulse.models import AnalyticsSummary, Interaction, LoadResult
from callpulse.services import InteractionLoader, list_agents, list_issue_types, summarize_interactions

logger = get_logger(__name__)
router = APIRouter()


@router.get("", response_model=LoadResult)
async def get_interactions(
    refresh: bool = Query(False, description="Reload from the remote API"),
    loader: InteractionLoader = Depends(get_interaction_loader)
):
    """
    Get the session's interactions, flagged when demo data is served
    """
    return await loader.get_interactions(refresh=refresh)


@router.delete("/spec-cache")
async def clear_spec_cache(loader: InteractionLoader = Depends(get_interaction_loader)):
    """Drop the cached API analysis so the next load re-reads the spec"""
    loader.clear_spec_cache()
    return {"success": True, "message": "Spec analysis cache cleared"}


@router.get("/agents", response_model=List[str])
async def get_agents(loader: InteractionLoader = Depends(get_interaction_loader)):
    result = await loader.get_interactions()
    return list_agents(result.data)


@router.get("/issue-types", response_model=List[str])
async def get_issue_types(loader: InteractionLoader = Depends(get_interaction_loader)):
    result = await loader.get_interactions()
    return list_issue_types(result.data)


@router.get("/summary", response_model=AnalyticsSummary)
async def get_summary(loader: InteractionLoader = Depends(get_interaction_loader)):
    result = await loader.get_interactions()
    return summarize_interactions(result.data)


@router.get("/{interaction_id}", response_model=Interaction)
async def get_interaction(
    interaction_id: str,
    loader: InteractionLoader = Depends(get_interaction_loader)
):
    """
    Get a single interaction by ID
    """
    try:
        return await loader.fetch_interaction_by_id(interaction_id)
    except InteractionNotFound as e:
        raise not_found_exception(e.message)
    except InteractionLookupFailed as e:
        logger.error("Interaction lookup failed", interaction_id=interaction_id, error=e.message)
        raise bad_gateway_exception(e.message)
