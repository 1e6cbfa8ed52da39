"""Client for the backend's /api/weather-summary proxy endpoint."""

import logging

import httpx

from weatherdesk.errors import UpstreamUnavailable
from weatherdesk.ingest.location import clean_city_name
from weatherdesk.models.city import WeatherSummary

logger = logging.getLogger(__name__)


class SummaryProxyClient:
    """Fetches weather summaries through the weatherdesk backend.

    The feed runs client-side, so it never sees the OpenWeatherMap key.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = http

    async def get_summary(self, city: str, country: str | None = None) -> WeatherSummary:
        url = f"{self.base_url}/api/weather-summary"
        params = {"city": clean_city_name(city)}
        if country:
            params["country"] = country
        try:
            if self._http is not None:
                resp = await self._http.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            raise UpstreamUnavailable(f"Failed to fetch weather summary: {e}") from e

        if resp.status_code >= 400:
            raise UpstreamUnavailable(
                f"Failed to fetch weather summary: {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
            return WeatherSummary(
                temp=data["temp"],
                condition=data["condition"],
                high_temp=data["highTemp"],
                low_temp=data["lowTemp"],
            )
        except (ValueError, KeyError, TypeError) as e:
            raise UpstreamUnavailable("Malformed weather summary") from e
