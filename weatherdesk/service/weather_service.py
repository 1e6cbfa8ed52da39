"""Weather service: the logic behind the summary and detail proxy endpoints."""

import asyncio
import logging

from weatherdesk.config.loader import require_api_key
from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import UpstreamUnavailable, ValidationError
from weatherdesk.forecast.detail import build_weather_detail
from weatherdesk.ingest.location import build_location_query
from weatherdesk.ingest.openweather_client import OpenWeatherClient
from weatherdesk.models.city import WeatherSummary
from weatherdesk.models.forecast import WeatherDetail

logger = logging.getLogger(__name__)


class WeatherService:
    def __init__(self, config: AppConfig, client: OpenWeatherClient | None = None):
        self.config = config
        self._client = client

    def _weather_client(self) -> OpenWeatherClient:
        if self._client is None:
            self._client = OpenWeatherClient(
                api_key=require_api_key(self.config),
                base_url=self.config.weather.base_url,
                units=self.config.weather.units.value,
                timeout=self.config.weather.timeout_seconds,
            )
        return self._client

    def _location(self, city: str | None, country: str | None) -> str:
        if not city or not city.strip():
            raise ValidationError("City parameter is required")
        location = build_location_query(city, country)
        if not location:
            raise ValidationError("City parameter is required")
        return location

    async def get_summary(self, city: str | None, country: str | None = None) -> WeatherSummary:
        location = self._location(city, country)
        client = self._weather_client()
        data = await client.get_current(location)
        try:
            return WeatherSummary(
                temp=data["main"]["temp"],
                condition=data["weather"][0]["main"],
                high_temp=data["main"]["temp_max"],
                low_temp=data["main"]["temp_min"],
            )
        except (KeyError, IndexError, TypeError) as e:
            logger.error("Malformed current weather payload for %s", location)
            raise UpstreamUnavailable("Failed to fetch weather data") from e

    async def get_detail(self, city: str | None, country: str | None = None) -> dict:
        """Fetch current weather and forecast concurrently.

        If both fail, the current-weather error is the one reported.
        """
        location = self._location(city, country)
        client = self._weather_client()
        current, forecast = await asyncio.gather(
            client.get_current(location),
            client.get_forecast(location),
            return_exceptions=True,
        )
        for result in (current, forecast):
            if isinstance(result, BaseException):
                raise result
        logger.info(
            "Fetched detail for %s (%d forecast samples)",
            location, len(forecast.get("list", [])),
        )
        return {"current": current, "forecast": forecast}

    async def get_weather_detail(
        self, city: str | None, country: str | None = None
    ) -> WeatherDetail:
        return build_weather_detail(await self.get_detail(city, country))
