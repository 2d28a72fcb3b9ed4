from callpulse.models import AnalyticsSummary
from callpulse.services import FALLBACK_INTERACTIONS, list_agents, list_issue_types, summarize_interactions


def variant(**changes):
    return FALLBACK_INTERACTIONS[0].model_copy(update=changes)


def test_list_agents_from_fallback_data():
    assert list_agents(FALLBACK_INTERACTIONS) == ["David", "Jessica", "Mike", "Sarah"]


def test_list_agents_skips_unknown_agent():
    interactions = [variant(agent_name="Unknown Agent"), variant(agent_name="Zoe"), variant(agent_name="Zoe")]
    assert list_agents(interactions) == ["Zoe"]


def test_list_issue_types_skips_generic_default():
    interactions = [
        variant(issue_type="General Inquiry"),
        variant(issue_type="Outage"),
        variant(issue_type="Billing"),
    ]
    assert list_issue_types(interactions) == ["Billing", "Outage"]


def test_summary_of_no_interactions():
    assert summarize_interactions([]) == AnalyticsSummary()


def test_summary_rounds_averages():
    interactions = [
        variant(sentiment_start=10, sentiment_end=90, crosstalk_score=1.0,
                mutual_silence_score=3.0, positive_sentiment=70),
        variant(sentiment_start=20, sentiment_end=40, crosstalk_score=2.4,
                mutual_silence_score=4.0, positive_sentiment=80),
    ]

    summary = summarize_interactions(interactions)

    assert summary.total_interactions == 2
    assert summary.avg_sentiment_improvement == 50
    assert summary.avg_crosstalk == 1.7
    assert summary.avg_mutual_silence == 3.5
    assert summary.avg_positive_sentiment == 75
