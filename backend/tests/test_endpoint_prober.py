import asyncio
import time

import httpx
import pytest

from callpulse.api.discovery import EndpointProber, extract_records, infer_shape
from callpulse.core.exceptions import EndpointProbeFailure
from callpulse.models import ProbeShape


@pytest.mark.parametrize("body,shape,count", [
    ([1, 2, 3], ProbeShape.ARRAY, 3),
    ({"data": [1]}, ProbeShape.PAGINATED, 1),
    ({"items": [1, 2]}, ProbeShape.ITEMS, 2),
    ({"results": [{"id": "X1"}]}, ProbeShape.RESULTS, 1),
    ({"data": [1], "items": [1, 2]}, ProbeShape.PAGINATED, 1),
    ({"data": "not a list", "items": [1, 2]}, ProbeShape.ITEMS, 2),
    ({"id": "X1"}, ProbeShape.OBJECT, 1),
])
def test_infer_shape(body, shape, count):
    inferred, records = infer_shape(body)

    assert inferred == shape
    assert len(records) == count


def test_infer_shape_of_scalars():
    assert infer_shape("hello") == (None, [])
    assert infer_shape(None) == (None, [])
    assert extract_records(7) == []


def test_object_records_are_the_body_itself():
    body = {"id": "X1", "agent": "Pat"}
    assert extract_records(body) == [body]


@pytest.mark.asyncio
async def test_probe_reports_working_endpoints_in_order(fake_api):
    client = fake_api({
        "/a": [1, 2, 3],
        "/b": {"data": [1]},
        "/c": (500, {"detail": "boom"}),
    })
    prober = EndpointProber(client, timeout=1)

    results = await prober.probe(["/a", "/b", "/c"])

    assert [(r.endpoint, r.shape, r.record_count) for r in results] == [
        ("/a", ProbeShape.ARRAY, 3),
        ("/b", ProbeShape.PAGINATED, 1),
    ]


@pytest.mark.asyncio
async def test_probe_keeps_list_order_regardless_of_completion_order(fake_api):
    async def slow(request):
        await asyncio.sleep(0.05)
        return httpx.Response(200, json=[{"id": "slow"}])

    client = fake_api({"/slow": slow, "/fast": [{"id": "fast"}]})
    prober = EndpointProber(client, timeout=1)

    results = await prober.probe(["/slow", "/fast"])

    assert [r.endpoint for r in results] == ["/slow", "/fast"]


@pytest.mark.asyncio
async def test_empty_collections_are_not_working(fake_api):
    client = fake_api({"/empty": [], "/empty-data": {"data": []}, "/scalar": 5})
    prober = EndpointProber(client, timeout=1)

    assert await prober.probe(["/empty", "/empty-data", "/scalar"]) == []


@pytest.mark.asyncio
async def test_slow_endpoint_times_out_without_blocking_others(fake_api):
    async def hang(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=[1])

    client = fake_api({"/hang": hang, "/ok": [1]})
    prober = EndpointProber(client, timeout=0.1)

    started = time.monotonic()
    results = await prober.probe(["/hang", "/ok"])

    assert time.monotonic() - started < 2
    assert [r.endpoint for r in results] == ["/ok"]


@pytest.mark.asyncio
async def test_probe_endpoint_raises_on_timeout(fake_api):
    async def hang(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=[1])

    prober = EndpointProber(fake_api({"/hang": hang}), timeout=0.05)

    with pytest.raises(EndpointProbeFailure) as exc_info:
        await prober.probe_endpoint("/hang")

    assert exc_info.value.details["endpoint"] == "/hang"


@pytest.mark.asyncio
async def test_network_errors_and_invalid_json_are_failures(fake_api):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    def garbage(request):
        return httpx.Response(200, text="<html>not json</html>")

    prober = EndpointProber(fake_api({"/down": refuse, "/html": garbage}), timeout=1)

    with pytest.raises(EndpointProbeFailure):
        await prober.probe_endpoint("/down")
    with pytest.raises(EndpointProbeFailure):
        await prober.probe_endpoint("/html")
    assert await prober.probe(["/down", "/html", "/missing"]) == []


@pytest.mark.asyncio
async def test_probe_sends_json_accept_header(fake_api):
    seen = {}

    def capture(request):
        seen["accept"] = request.headers["accept"]
        return httpx.Response(200, json=[1])

    prober = EndpointProber(fake_api({"/a": capture}), timeout=1)
    await prober.probe_endpoint("/a")

    assert seen["accept"] == "application/json"


@pytest.mark.asyncio
async def test_fetch_records_unwraps_payload(fake_api):
    prober = EndpointProber(fake_api({"/wrapped": {"results": [{"id": "X1"}, {"id": "X2"}]}}))

    records = await prober.fetch_records("/wrapped")

    assert records == [{"id": "X1"}, {"id": "X2"}]


@pytest.mark.asyncio
async def test_fetch_records_raises_on_error_status(fake_api):
    prober = EndpointProber(fake_api({"/gone": (503, {"detail": "down"})}))

    with pytest.raises(EndpointProbeFailure) as exc_info:
        await prober.fetch_records("/gone")

    assert exc_info.value.details["status_code"] == 503
