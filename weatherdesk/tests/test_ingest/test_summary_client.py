"""Tests for the backend summary proxy client."""

import httpx
import pytest
import respx

from weatherdesk.errors import UpstreamUnavailable
from weatherdesk.ingest.summary_client import SummaryProxyClient

BACKEND = "http://backend.test"


@pytest.mark.asyncio
@respx.mock
async def test_get_summary():
    route = respx.get(f"{BACKEND}/api/weather-summary").mock(
        return_value=httpx.Response(
            200, json={"temp": 14, "condition": "Clouds", "highTemp": 16, "lowTemp": 11}
        )
    )
    summary = await SummaryProxyClient(BACKEND).get_summary("'London'", "GB")

    assert summary.condition == "Clouds"
    assert summary.temp == 14
    params = route.calls.last.request.url.params
    assert params["city"] == "London"
    assert params["country"] == "GB"


@pytest.mark.asyncio
@respx.mock
async def test_error_status():
    respx.get(f"{BACKEND}/api/weather-summary").mock(return_value=httpx.Response(404))
    with pytest.raises(UpstreamUnavailable):
        await SummaryProxyClient(BACKEND).get_summary("Atlantis")


@pytest.mark.asyncio
@respx.mock
async def test_malformed_body():
    respx.get(f"{BACKEND}/api/weather-summary").mock(
        return_value=httpx.Response(200, json={"temp": 14})
    )
    with pytest.raises(UpstreamUnavailable, match="Malformed"):
        await SummaryProxyClient(BACKEND).get_summary("London")
