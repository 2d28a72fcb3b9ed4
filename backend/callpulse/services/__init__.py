"""
Session services built on top of discovery and normalization.
"""

from .interaction_loader import InteractionLoader
from .fallback_data import FALLBACK_INTERACTIONS
from .analytics import list_agents, list_issue_types, summarize_interactions

__all__ = [
    "InteractionLoader",
    "FALLBACK_INTERACTIONS",
    "list_agents",
    "list_issue_types",
    "summarize_interactions",
]
