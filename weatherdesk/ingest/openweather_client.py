"""OpenWeatherMap API client for current conditions and 5-day forecast."""

import logging

import httpx

from weatherdesk.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        units: str = "metric",
        timeout: float = 10.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.timeout = timeout
        self._http = http

    async def get_current(self, location: str) -> dict:
        """Fetch current weather (`/weather`) for a "City,CC" query."""
        return await self._get("weather", location)

    async def get_forecast(self, location: str) -> dict:
        """Fetch the 5-day / 3-hour forecast (`/forecast`)."""
        return await self._get("forecast", location)

    async def _get(self, endpoint: str, location: str) -> dict:
        url = f"{self.base_url}/{endpoint}"
        params = {"q": location, "units": self.units, "appid": self.api_key}
        logger.debug("OpenWeatherMap /%s q=%s", endpoint, location)
        try:
            if self._http is not None:
                resp = await self._http.get(url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    resp = await client.get(url, params=params)
        except httpx.RequestError as e:
            logger.error("OpenWeatherMap /%s request failed for %s: %s", endpoint, location, e)
            raise UpstreamUnavailable("Failed to fetch weather data") from e

        if resp.status_code >= 400:
            logger.warning(
                "OpenWeatherMap /%s returned %d for %s",
                endpoint, resp.status_code, location,
            )
            raise UpstreamUnavailable(
                f"Failed to fetch weather data: {resp.reason_phrase}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamUnavailable("Malformed weather data") from e
