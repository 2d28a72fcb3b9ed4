"""
Canonical interaction record and load results
"""

import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class Interaction(BaseModel):
    """One normalized customer-service contact record"""
    model_config = ConfigDict(allow_inf_nan=False)

    id: str = Field(..., min_length=1)
    date: datetime.date
    agent_name: str
    issue_type: str
    description: str
    sentiment_start: float
    sentiment_end: float
    positive_sentiment: float
    negative_sentiment: float
    crosstalk_score: float
    mutual_silence_score: float
    nontalk_score: float
    resolution: str
    coaching_recommendations: List[str] = Field(..., min_length=1)
    greeting_text: str
    has_greeting: bool
    behavior: str
    compliance_score: str
    transcript: Optional[str] = None


class LoaderState(str, Enum):
    """Interaction loader state machine"""
    IDLE = "idle"
    ANALYZING_SPEC = "analyzing-spec"
    PROBING_ENDPOINTS = "probing-endpoints"
    NORMALIZING = "normalizing"
    READY = "ready"
    FALLBACK_READY = "fallback-ready"


class LoadResult(BaseModel):
    """Outcome of one top-level interaction load"""
    data: List[Interaction] = Field(default_factory=list)
    used_fallback: bool = False
    source_endpoint: Optional[str] = None
    state: LoaderState = LoaderState.READY


class AnalyticsSummary(BaseModel):
    """Dashboard-level aggregates over a set of interactions"""
    total_interactions: int = 0
    avg_sentiment_improvement: int = 0
    avg_crosstalk: float = 0.0
    avg_mutual_silence: float = 0.0
    avg_positive_sentiment: int = 0
