import asyncio

import httpx
import pytest

from steamtotp import TimeOffset
from steamtotp.api import MalformedResponse, SteamTimeSync, TimeSyncFailed
from steamtotp.api.constants import QUERY_TIME_URL


def make_transport(status_code=200, json=None, content=None, requests=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if json is not None:
            return httpx.Response(status_code, json=json)
        return httpx.Response(status_code, content=content or b"")

    return httpx.MockTransport(handler)


def sync_query(transport):
    with httpx.Client(transport=transport) as client:
        return SteamTimeSync(client=client).query_offset()


def async_query(transport):
    async def query():
        async with httpx.AsyncClient(transport=transport) as client:
            return await SteamTimeSync(async_client=client).query_offset_async()

    return asyncio.run(query())


@pytest.fixture(params=[sync_query, async_query], ids=["sync", "async"])
def query(request):
    return request.param


def test_reports_offset_and_latency(freeze_time, query):
    freeze_time(999_999_000.4)
    transport = make_transport(json={"response": {"server_time": 1_000_000_000}})
    result = query(transport)
    assert isinstance(result, TimeOffset)
    assert result.offset == 1000
    assert result.latency >= 0


def test_negative_offset(freeze_time, query):
    freeze_time(1_000_000_042)
    transport = make_transport(json={"response": {"server_time": 1_000_000_000}})
    assert query(transport).offset == -42


def test_server_time_as_string(freeze_time, query):
    freeze_time(1_000_000_000)
    transport = make_transport(json={"response": {"server_time": "1000000005"}})
    assert query(transport).offset == 5


def test_sends_empty_post(freeze_time, query):
    freeze_time(1_000_000_000)
    requests = []
    transport = make_transport(
        json={"response": {"server_time": 1_000_000_000}}, requests=requests
    )
    query(transport)
    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == QUERY_TIME_URL
    assert request.headers["content-length"] == "0"
    assert request.content == b""


def test_error_status_raises(query):
    transport = make_transport(status_code=500, content=b"Internal Server Error")
    with pytest.raises(TimeSyncFailed) as exc_info:
        query(transport)
    assert exc_info.value.response_status_code == 500
    assert exc_info.value.response_text == "Internal Server Error"


@pytest.mark.parametrize(
    "json,content",
    [
        ({}, None),
        ({"response": {}}, None),
        ({"response": None}, None),
        ({"response": {"server_time": None}}, None),
        ({"response": {"server_time": "soon"}}, None),
        ({"response": {"server_time": True}}, None),
        ([1, 2, 3], None),
        (None, b"<html>not json</html>"),
    ],
)
def test_malformed_body_raises(query, json, content):
    transport = make_transport(json=json, content=content)
    with pytest.raises(MalformedResponse):
        query(transport)


def test_transport_error_raises(query):
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TimeSyncFailed) as exc_info:
        query(httpx.MockTransport(handler))
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.response_status_code is None


def test_custom_url(freeze_time):
    freeze_time(1_000_000_000)
    requests = []
    transport = make_transport(
        json={"response": {"server_time": 1_000_000_000}}, requests=requests
    )
    with httpx.Client(transport=transport) as client:
        SteamTimeSync(client=client, url="https://example.com/time").query_offset()
    assert str(requests[0].url) == "https://example.com/time"
