"""Tests for the weather service with mocked OpenWeatherMap."""

import httpx
import pytest
import respx

from weatherdesk.config.schema import AppConfig
from weatherdesk.errors import ConfigurationError, UpstreamUnavailable, ValidationError
from weatherdesk.service.weather_service import WeatherService
from weatherdesk.tests.payloads import OWM_BASE, current_payload, forecast_item, forecast_payload


@pytest.fixture
def service(app_config: AppConfig) -> WeatherService:
    return WeatherService(app_config)


class TestGetSummary:
    @pytest.mark.asyncio
    @respx.mock
    async def test_summary(self, service: WeatherService):
        route = respx.get(f"{OWM_BASE}/weather").mock(
            return_value=httpx.Response(200, json=current_payload(temp=14, main="Clouds"))
        )
        summary = await service.get_summary(" 'London' ", "GB")

        assert summary.temp == 14
        assert summary.condition == "Clouds"
        assert summary.high_temp == 16.0
        assert summary.low_temp == 11.0
        assert route.calls.last.request.url.params["q"] == "London,GB"

    @pytest.mark.asyncio
    async def test_missing_city(self, service: WeatherService):
        with pytest.raises(ValidationError):
            await service.get_summary(None)
        with pytest.raises(ValidationError):
            await service.get_summary("  ")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        service = WeatherService(AppConfig(weather={"base_url": OWM_BASE}))
        with pytest.raises(ConfigurationError):
            await service.get_summary("London")

    @pytest.mark.asyncio
    async def test_missing_city_checked_before_api_key(self):
        service = WeatherService(AppConfig())
        with pytest.raises(ValidationError):
            await service.get_summary("")

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_payload(self, service: WeatherService):
        respx.get(f"{OWM_BASE}/weather").mock(return_value=httpx.Response(200, json={"cod": 200}))
        with pytest.raises(UpstreamUnavailable):
            await service.get_summary("London")


class TestGetDetail:
    @pytest.mark.asyncio
    @respx.mock
    async def test_combined_payload(self, service: WeatherService):
        forecast = forecast_payload([forecast_item("2026-10-19 12:00:00", 14)])
        respx.get(f"{OWM_BASE}/weather").mock(
            return_value=httpx.Response(200, json=current_payload())
        )
        respx.get(f"{OWM_BASE}/forecast").mock(return_value=httpx.Response(200, json=forecast))

        result = await service.get_detail("London", "GB")
        assert result["current"]["name"] == "London"
        assert result["forecast"] == forecast

    @pytest.mark.asyncio
    @respx.mock
    async def test_forecast_failure_reported(self, service: WeatherService):
        respx.get(f"{OWM_BASE}/weather").mock(
            return_value=httpx.Response(200, json=current_payload())
        )
        respx.get(f"{OWM_BASE}/forecast").mock(return_value=httpx.Response(502))
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await service.get_detail("London")
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    @respx.mock
    async def test_current_failure_wins(self, service: WeatherService):
        respx.get(f"{OWM_BASE}/weather").mock(return_value=httpx.Response(404))
        respx.get(f"{OWM_BASE}/forecast").mock(return_value=httpx.Response(502))
        with pytest.raises(UpstreamUnavailable) as exc_info:
            await service.get_detail("London")
        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_weather_detail_aggregates_forecast(self, service: WeatherService):
        forecast = forecast_payload([
            forecast_item("2026-10-19 09:00:00", 10, main="Clear"),
            forecast_item("2026-10-19 15:00:00", 16, main="Rain"),
            forecast_item("2026-10-20 12:00:00", 12),
        ])
        respx.get(f"{OWM_BASE}/weather").mock(
            return_value=httpx.Response(200, json=current_payload())
        )
        respx.get(f"{OWM_BASE}/forecast").mock(return_value=httpx.Response(200, json=forecast))

        detail = await service.get_weather_detail("London", "GB")
        assert len(detail.forecast) == 2
        assert detail.forecast[0].temp_min == 10
        assert detail.forecast[0].temp_max == 16
        assert detail.forecast[0].weather_main == "Clear"
