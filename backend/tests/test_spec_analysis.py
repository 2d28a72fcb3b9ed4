import httpx
import pytest

from callpulse.api.discovery import (
    ApiDocumentationAnalyzer,
    EndpointProber,
    SpecAnalysisCache,
    SpecFetcher,
    list_static_paths,
)
from callpulse.core.exceptions import SpecUnavailable
from tests.conftest import BASE_URL, make_spec

INTERACTION_SCHEMA = {
    "type": "object",
    "properties": {
        "interaction_id": {"type": "string"},
        "agent_name": {"type": "string"},
        "created_at": {"type": "string", "format": "date-time"},
        "sentiment_score": {"type": "number"},
    },
    "required": ["interaction_id"],
}


def make_analyzer(client, sample_limit=3):
    fetcher = SpecFetcher(client, spec_path="/openapi.json", health_path="/docs", timeout=1)
    prober = EndpointProber(client, timeout=1)
    return ApiDocumentationAnalyzer(fetcher, prober, base_url=BASE_URL, sample_limit=sample_limit)


def test_list_static_paths_skips_parameterized_and_excluded():
    spec = make_spec([
        "/api/v1/interactions",
        "/api/v1/interactions/{interaction_id}",
        "/api/v1/agents",
        "/api/v1/interactions/search",
    ])

    paths = list_static_paths(spec, ["/api/v1/interactions/search"])

    assert paths == ["/api/v1/interactions", "/api/v1/agents"]


def test_list_static_paths_accepts_plain_paths():
    assert list_static_paths(["/b", "/a/{id}", "/a"]) == ["/b", "/a"]
    assert list_static_paths({}) == []


@pytest.mark.asyncio
async def test_fetch_spec_returns_document(fake_api):
    spec = make_spec(["/api/v1/interactions"])
    fetcher = SpecFetcher(fake_api({"/openapi.json": spec}), spec_path="/openapi.json")

    assert await fetcher.fetch_spec() == spec


@pytest.mark.asyncio
@pytest.mark.parametrize("route,error_code", [
    ((500, {"detail": "boom"}), "SPEC_HTTP_ERROR"),
    ([1, 2, 3], "SPEC_INVALID"),
    (lambda request: httpx.Response(200, text="not json"), "SPEC_INVALID"),
])
async def test_fetch_spec_failures(fake_api, route, error_code):
    fetcher = SpecFetcher(fake_api({"/openapi.json": route}), spec_path="/openapi.json")

    with pytest.raises(SpecUnavailable) as exc_info:
        await fetcher.fetch_spec()

    assert exc_info.value.error_code == error_code


@pytest.mark.asyncio
async def test_fetch_spec_network_error(fake_api):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = SpecFetcher(fake_api({"/openapi.json": refuse}), spec_path="/openapi.json")

    with pytest.raises(SpecUnavailable) as exc_info:
        await fetcher.fetch_spec()

    assert exc_info.value.error_code == "SPEC_UNREACHABLE"


@pytest.mark.asyncio
async def test_check_health(fake_api):
    seen = {}

    def docs(request):
        seen["accept"] = request.headers["accept"]
        return httpx.Response(200, text="<html>docs</html>")

    assert await SpecFetcher(fake_api({"/docs": docs}), health_path="/docs").check_health() is True
    assert seen["accept"].startswith("text/html")
    assert await SpecFetcher(fake_api({}), health_path="/docs").check_health() is False


def test_analyze_collects_endpoints_and_models(fake_api):
    spec = make_spec(
        ["/api/v1/interactions", "/api/v1/interactions/{interaction_id}", "/api/v1/agents"],
        schemas={
            "CallInteraction": INTERACTION_SCHEMA,
            "AgentProfile": {"type": "object", "properties": {"user_name": {"type": "string"}}},
            "Broken": "not a schema",
        },
    )
    spec["paths"]["/api/v1/interactions"]["post"] = {"summary": "Create"}
    spec["paths"]["/api/v1/interactions"]["parameters"] = []

    analysis = make_analyzer(fake_api({})).analyze(spec)

    assert analysis.title == "Contact Insights API"
    assert analysis.version == "2.3.0"
    assert analysis.base_url == BASE_URL
    assert analysis.paths == ["/api/v1/interactions", "/api/v1/interactions/{interaction_id}", "/api/v1/agents"]
    assert [(e.method, e.path) for e in analysis.endpoints] == [
        ("GET", "/api/v1/interactions"),
        ("POST", "/api/v1/interactions"),
        ("GET", "/api/v1/interactions/{interaction_id}"),
        ("GET", "/api/v1/agents"),
    ]
    assert len(analysis.interaction_endpoints) == 3
    assert [s.name for s in analysis.schemas] == ["CallInteraction", "AgentProfile"]
    assert analysis.data_models["interaction"].required == ["interaction_id"]
    assert analysis.data_models["agent"].name == "AgentProfile"
    assert analysis.field_mapping.identifier_fields == ["interaction_id"]
    assert analysis.field_mapping.agent_fields == ["agent_name", "user_name"]
    assert "created_at" in analysis.field_mapping.date_fields


def test_analyze_tolerates_sparse_documents(fake_api):
    analysis = make_analyzer(fake_api({})).analyze({})

    assert analysis.title == "Unknown API"
    assert analysis.paths == []
    assert analysis.field_mapping.is_empty()


def test_sample_candidates_respect_limit(fake_api):
    spec = make_spec([
        "/api/v1/interactions",
        "/api/v1/interactions/{interaction_id}",
        "/api/v1/calls",
        "/api/v1/reports",
        "/api/v1/analytics",
    ])
    analyzer = make_analyzer(fake_api({}), sample_limit=2)

    assert analyzer.sample_candidates(analyzer.analyze(spec)) == ["/api/v1/interactions", "/api/v1/calls"]


@pytest.mark.asyncio
async def test_refine_with_samples_uses_live_records(fake_api):
    spec = make_spec(["/api/v1/interactions", "/api/v1/calls"], schemas={"CallInteraction": INTERACTION_SCHEMA})
    client = fake_api({
        "/api/v1/interactions": (500, {"detail": "boom"}),
        "/api/v1/calls": {"data": [{"call_reference": "C-1", "rep_name": "Sam", "logged": "2024-01-15"}]},
    })
    analyzer = make_analyzer(client)
    analysis = analyzer.analyze(spec)

    mapping = await analyzer.refine_with_samples(analysis)

    assert mapping.identifier_fields == ["call_reference"]
    assert mapping.agent_fields == ["rep_name"]
    assert analysis.field_mapping == mapping


@pytest.mark.asyncio
async def test_refine_keeps_spec_mapping_when_samples_fail(fake_api):
    spec = make_spec(["/api/v1/interactions"], schemas={"CallInteraction": INTERACTION_SCHEMA})
    analyzer = make_analyzer(fake_api({"/api/v1/interactions": [1, 2]}))
    analysis = analyzer.analyze(spec)
    spec_mapping = analysis.field_mapping.model_copy()

    assert await analyzer.refine_with_samples(analysis) == spec_mapping


@pytest.mark.asyncio
async def test_analyze_remote(fake_api):
    spec = make_spec(["/api/v1/interactions"])
    client = fake_api({"/openapi.json": spec, "/api/v1/interactions": [{"id": "X1", "agent": "Pat"}]})

    analysis = await make_analyzer(client).analyze_remote()

    assert analysis.field_mapping.identifier_fields == ["id"]
    assert analysis.field_mapping.agent_fields == ["agent"]


@pytest.mark.asyncio
async def test_cache_computes_once_until_invalidated(fake_api):
    client = fake_api({"/openapi.json": make_spec([])})
    analyzer = make_analyzer(client)
    cache = SpecAnalysisCache()

    first = await cache.get_or_compute(analyzer.analyze_remote)
    second = await cache.get_or_compute(analyzer.analyze_remote)

    assert first is second
    assert cache.cached is first
    assert client.calls.count("/openapi.json") == 1

    cache.invalidate()
    assert cache.cached is None
    await cache.get_or_compute(analyzer.analyze_remote)
    assert client.calls.count("/openapi.json") == 2


@pytest.mark.asyncio
async def test_cache_does_not_store_failures(fake_api):
    client = fake_api({})
    cache = SpecAnalysisCache()

    with pytest.raises(SpecUnavailable):
        await cache.get_or_compute(make_analyzer(client).analyze_remote)

    assert cache.cached is None


@pytest.mark.parametrize("spec,section", [
    ({"info": "x"}, "info"),
    ({"paths": []}, "paths"),
    ({"paths": "nope"}, "paths"),
    ({"components": ["schemas"]}, "components"),
    ({"components": {"schemas": [1, 2]}}, "schemas"),
])
def test_analyze_rejects_malformed_sections(fake_api, spec, section):
    with pytest.raises(SpecUnavailable) as exc_info:
        make_analyzer(fake_api({})).analyze(spec)

    assert exc_info.value.error_code == "SPEC_INVALID"
    assert exc_info.value.details["section"] == section


def test_analyze_ignores_malformed_entries(fake_api):
    spec = {
        "info": {"title": 42, "version": ["2"], "description": None},
        "paths": {
            "/api/v1/interactions": {
                "get": {
                    "summary": {"text": "List"},
                    "parameters": "limit",
                    "responses": ["200"],
                    "requestBody": "none",
                },
            },
        },
        "components": {
            "schemas": {
                "CallInteraction": {"type": 7, "properties": ["id"], "required": "id"},
                "AgentProfile": {"properties": {"agent_name": {}}, "required": ["agent_name", 3]},
            },
        },
    }

    analysis = make_analyzer(fake_api({})).analyze(spec)

    assert analysis.title == "Unknown API"
    assert analysis.version == "Unknown Version"
    [endpoint] = analysis.endpoints
    assert endpoint.summary == ""
    assert endpoint.parameters == []
    assert endpoint.responses == {}
    assert endpoint.request_body is None
    assert analysis.data_models["interaction"].properties == {}
    assert analysis.data_models["interaction"].type == "object"
    assert analysis.data_models["agent"].required == ["agent_name"]
    assert analysis.field_mapping.agent_fields == ["agent_name"]


def test_list_static_paths_of_malformed_paths_section():
    assert list_static_paths({"paths": ["/api/v1/calls"]}) == []


def test_analysis_timestamp_is_timezone_aware(fake_api):
    analysis = make_analyzer(fake_api({})).analyze({})

    assert analysis.analysis_timestamp.tzinfo is not None
    assert analysis.analysis_timestamp.utcoffset().total_seconds() == 0
