import inspect
from typing import Any, Callable, Dict

import httpx
import pytest

BASE_URL = "http://insights.test"

Route = Any  # JSON body, (status, body) tuple, or callable(request) -> Response


def build_client(routes: Dict[str, Route]) -> httpx.AsyncClient:
    """AsyncClient whose transport serves canned responses keyed by path."""
    calls = []

    async def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        route = routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        if callable(route):
            response = route(request)
            if inspect.isawaitable(response):
                response = await response
            return response
        if isinstance(route, tuple):
            status_code, body = route
            return httpx.Response(status_code, json=body)
        return httpx.Response(200, json=route)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url=BASE_URL)
    client.calls = calls
    return client


@pytest.fixture
def fake_api() -> Callable[[Dict[str, Route]], httpx.AsyncClient]:
    """Factory for clients talking to an in-memory fake of the remote API."""
    return build_client


def make_spec(paths, schemas=None) -> Dict[str, Any]:
    """Minimal OpenAPI document declaring a GET for every path."""
    spec = {
        "openapi": "3.1.0",
        "info": {"title": "Contact Insights API", "version": "2.3.0"},
        "paths": {path: {"get": {"summary": f"List {path}"}} for path in paths},
    }
    if schemas is not None:
        spec["components"] = {"schemas": schemas}
    return spec


@pytest.fixture
def canonical_record() -> Dict[str, Any]:
    """A record already in canonical interaction shape."""
    return {
        "id": "INT-2024-0042",
        "date": "2024-03-18",
        "agent_name": "Priya",
        "issue_type": "Billing Dispute",
        "description": "Duplicate charge on statement",
        "sentiment_start": 22,
        "sentiment_end": 81.5,
        "positive_sentiment": 64,
        "negative_sentiment": 36,
        "crosstalk_score": 3.2,
        "mutual_silence_score": 7.4,
        "nontalk_score": 4.1,
        "resolution": "Refund issued",
        "coaching_recommendations": [
            "Confirm the refund timeline before closing",
            "Summarize next steps",
        ],
        "greeting_text": "Hi, Priya here, how can I help?",
        "has_greeting": False,
        "behavior": "Professional Greeting",
        "compliance_score": "Excellent",
        "transcript": (
            "Agent: Hi, Priya here, how can I help? Customer: I was charged twice for March."
        ),
    }
