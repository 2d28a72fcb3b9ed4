"""
Static demo interactions served whenever the live API cannot be used
"""

import datetime
from typing import List

from callpulse.models import Interaction

FALLBACK_INTERACTIONS: List[Interaction] = [
    Interaction(
        id="INT-DEMO-001",
        date=datetime.date(2024, 1, 15),
        agent_name="Sarah",
        issue_type="Technical Support",
        description="Internet troubleshooting",
        sentiment_start=15,
        sentiment_end=78,
        positive_sentiment=72,
        negative_sentiment=28,
        crosstalk_score=2.1,
        mutual_silence_score=8.3,
        nontalk_score=5.2,
        resolution="Excellent recovery",
        coaching_recommendations=[
            "Great technical problem-solving approach",
            "Excellent customer empathy during frustration",
            "Consider mentoring other agents on de-escalation",
        ],
        greeting_text="Thank you for calling Spectrum, this is Sarah, how can I help you today?",
        has_greeting=True,
        behavior="Complete Professional Greeting",
        compliance_score="Excellent",
    ),
    Interaction(
        id="INT-DEMO-002",
        date=datetime.date(2024, 1, 15),
        agent_name="Mike",
        issue_type="Billing Dispute",
        description="Premium channel charges",
        sentiment_start=25,
        sentiment_end=92,
        positive_sentiment=85,
        negative_sentiment=15,
        crosstalk_score=1.8,
        mutual_silence_score=4.2,
        nontalk_score=3.1,
        resolution="Strong resolution",
        coaching_recommendations=[
            "Exceptional billing knowledge demonstration",
            "Strong conflict resolution skills",
            "Maintain this level of customer advocacy",
        ],
        greeting_text="Good morning, Spectrum, this is Mike, what can I help you with?",
        has_greeting=True,
        behavior="Professional Greeting",
        compliance_score="Excellent",
    ),
    Interaction(
        id="INT-DEMO-003",
        date=datetime.date(2024, 1, 14),
        agent_name="Sarah",
        issue_type="Sales Success",
        description="Internet upgrade",
        sentiment_start=45,
        sentiment_end=88,
        positive_sentiment=82,
        negative_sentiment=18,
        crosstalk_score=0.9,
        mutual_silence_score=3.1,
        nontalk_score=2.3,
        resolution="Consultative approach",
        coaching_recommendations=[
            "Perfect consultative selling technique",
            "Great needs assessment questions",
            "Model for other sales interactions",
        ],
        greeting_text="Hi there, Spectrum, Sarah speaking, how may I assist you?",
        has_greeting=True,
        behavior="Consultative Greeting",
        compliance_score="Good",
    ),
    Interaction(
        id="INT-DEMO-004",
        date=datetime.date(2024, 1, 14),
        agent_name="Jessica",
        issue_type="Frustrated Customer",
        description="Cable outages",
        sentiment_start=8,
        sentiment_end=85,
        positive_sentiment=68,
        negative_sentiment=32,
        crosstalk_score=7.2,
        mutual_silence_score=12.4,
        nontalk_score=8.7,
        resolution="Great de-escalation",
        coaching_recommendations=[
            "Outstanding de-escalation skills",
            "Work on reducing interruptions during venting",
            "Excellent empathy and solution focus",
        ],
        greeting_text="Spectrum, this is Jessica, I'm here to help you today",
        has_greeting=True,
        behavior="Empathetic Greeting",
        compliance_score="Good",
    ),
    Interaction(
        id="INT-DEMO-005",
        date=datetime.date(2024, 1, 13),
        agent_name="Mike",
        issue_type="Service Transfer",
        description="Moving address",
        sentiment_start=55,
        sentiment_end=78,
        positive_sentiment=75,
        negative_sentiment=25,
        crosstalk_score=1.2,
        mutual_silence_score=6.8,
        nontalk_score=4.8,
        resolution="Proactive service",
        coaching_recommendations=[
            "Good proactive service approach",
            "Consider upselling opportunities during transfers",
            "Solid process knowledge",
        ],
        greeting_text="Thank you for calling Spectrum, Mike here, how can I make your day better?",
        has_greeting=True,
        behavior="Personalized Greeting",
        compliance_score="Good",
    ),
    Interaction(
        id="INT-DEMO-006",
        date=datetime.date(2024, 1, 13),
        agent_name="Jessica",
        issue_type="Chat Support",
        description="Bill explanation",
        sentiment_start=35,
        sentiment_end=82,
        positive_sentiment=78,
        negative_sentiment=22,
        crosstalk_score=0.0,
        mutual_silence_score=2.1,
        nontalk_score=6.2,
        resolution="Efficient resolution",
        coaching_recommendations=[
            "Excellent chat efficiency",
            "Clear bill explanation skills",
            "Good use of screen sharing tools",
        ],
        greeting_text="Hello! Welcome to Spectrum support chat. I'm Jessica and I'm ready to help!",
        has_greeting=True,
        behavior="Chat Greeting",
        compliance_score="Excellent",
    ),
    Interaction(
        id="INT-DEMO-007",
        date=datetime.date(2024, 1, 12),
        agent_name="David",
        issue_type="Service Changes",
        description="Cancel cable TV",
        sentiment_start=42,
        sentiment_end=89,
        positive_sentiment=81,
        negative_sentiment=19,
        crosstalk_score=3.4,
        mutual_silence_score=9.2,
        nontalk_score=7.1,
        resolution="Value-focused retention",
        coaching_recommendations=[
            "Strong retention conversation",
            "Good value proposition presentation",
            "Reduce research time with better preparation",
        ],
        greeting_text="Spectrum Communications, David speaking, what brings you in today?",
        has_greeting=True,
        behavior="Casual Professional",
        compliance_score="Good",
    ),
    Interaction(
        id="INT-DEMO-008",
        date=datetime.date(2024, 1, 12),
        agent_name="Sarah",
        issue_type="Chat Upsell",
        description="Add phone service",
        sentiment_start=60,
        sentiment_end=91,
        positive_sentiment=88,
        negative_sentiment=12,
        crosstalk_score=0.0,
        mutual_silence_score=1.5,
        nontalk_score=1.8,
        resolution="Consultative sales",
        coaching_recommendations=[
            "Perfect chat-based selling approach",
            "Excellent needs discovery",
            "Great bundle value explanation",
        ],
        greeting_text="Hi! Thanks for choosing Spectrum chat support. I'm Sarah - what can I help you explore today?",
        has_greeting=True,
        behavior="Engaging Chat Greeting",
        compliance_score="Excellent",
    ),
    Interaction(
        id="INT-DEMO-009",
        date=datetime.date(2024, 1, 11),
        agent_name="David",
        issue_type="WiFi Issues",
        description="Coverage problems",
        sentiment_start=28,
        sentiment_end=86,
        positive_sentiment=74,
        negative_sentiment=26,
        crosstalk_score=4.1,
        mutual_silence_score=18.3,
        nontalk_score=15.8,
        resolution="Technical solution",
        coaching_recommendations=[
            "Strong technical troubleshooting",
            "Improve preparation to reduce research time",
            "Consider technical certification advancement",
        ],
        greeting_text="Spectrum tech support, this is David, let's solve your connectivity issue",
        has_greeting=True,
        behavior="Solution-Focused Greeting",
        compliance_score="Good",
    ),
    Interaction(
        id="INT-DEMO-010",
        date=datetime.date(2024, 1, 11),
        agent_name="Mike",
        issue_type="Critical Issue",
        description="Frequent outages",
        sentiment_start=5,
        sentiment_end=75,
        positive_sentiment=58,
        negative_sentiment=42,
        crosstalk_score=5.8,
        mutual_silence_score=15.7,
        nontalk_score=12.3,
        resolution="Escalated support",
        coaching_recommendations=[
            "Excellent crisis management",
            "Good escalation decision making",
            "Work on active listening during high emotion",
        ],
        greeting_text=(
            "Spectrum Communications, Mike here, I understand you're having some serious issues"
            " - let's get this fixed"
        ),
        has_greeting=True,
        behavior="Crisis-Aware Greeting",
        compliance_score="Good",
    ),
]
