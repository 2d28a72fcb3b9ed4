"""
Dashboard aggregates derived from a loaded interaction collection
"""

from typing import List, Sequence

from callpulse.models import AnalyticsSummary, Interaction
from callpulse.api.standardization.normalizer import GENERAL_INQUIRY, UNKNOWN_AGENT


def list_agents(interactions: Sequence[Interaction]) -> List[str]:
    """Sorted distinct agent names, without the unknown-agent placeholder"""
    return sorted({
        interaction.agent_name
        for interaction in interactions
        if interaction.agent_name and interaction.agent_name != UNKNOWN_AGENT
    })


def list_issue_types(interactions: Sequence[Interaction]) -> List[str]:
    """Sorted distinct issue types, without the generic default"""
    return sorted({
        interaction.issue_type
        for interaction in interactions
        if interaction.issue_type and interaction.issue_type != GENERAL_INQUIRY
    })


def summarize_interactions(interactions: Sequence[Interaction]) -> AnalyticsSummary:
    """
    Aggregate headline metrics

    Sentiment improvement and positive sentiment are rounded to whole
    numbers, crosstalk and mutual silence to one decimal.
    """
    if not interactions:
        return AnalyticsSummary()

    total = len(interactions)
    improvement = sum(i.sentiment_end - i.sentiment_start for i in interactions) / total
    crosstalk = sum(i.crosstalk_score for i in interactions) / total
    mutual_silence = sum(i.mutual_silence_score for i in interactions) / total
    positive = sum(i.positive_sentiment for i in interactions) / total

    return AnalyticsSummary(
        total_interactions=total,
        avg_sentiment_improvement=round(improvement),
        avg_crosstalk=round(crosstalk, 1),
        avg_mutual_silence=round(mutual_silence, 1),
        avg_positive_sentiment=round(positive),
    )
