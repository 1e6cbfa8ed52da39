"""Detail view builder: combined current+forecast payload -> WeatherDetail."""

import logging

from weatherdesk.forecast.aggregator import aggregate, parse_forecast_samples
from weatherdesk.models.city import Coordinates
from weatherdesk.models.forecast import CurrentConditions, WeatherDetail

logger = logging.getLogger(__name__)


def build_weather_detail(combined: dict) -> WeatherDetail:
    """Shape the `{current, forecast}` payload from /api/weather-detail."""
    current = combined.get("current", {})
    forecast = combined.get("forecast", {})

    daily = aggregate(parse_forecast_samples(forecast))
    logger.debug(
        "Built detail for %s: %d forecast samples -> %d days",
        current.get("name", "?"), len(forecast.get("list", [])), len(daily),
    )

    coord = current.get("coord", {})
    sys = current.get("sys", {})
    return WeatherDetail(
        city=current.get("name", ""),
        country=sys.get("country", ""),
        coordinates=Coordinates(
            lat=float(coord.get("lat", 0.0)), lon=float(coord.get("lon", 0.0))
        ),
        current=_parse_current(current),
        forecast=daily,
        timezone=int(current.get("timezone", 0)),
        sunrise=int(sys.get("sunrise", 0)),
        sunset=int(sys.get("sunset", 0)),
    )


def _parse_current(current: dict) -> CurrentConditions:
    main = current.get("main", {})
    wind = current.get("wind", {})
    weather = (current.get("weather") or [{}])[0]
    return CurrentConditions(
        temp=float(main.get("temp", 0.0)),
        feels_like=float(main.get("feels_like", 0.0)),
        humidity=float(main.get("humidity", 0.0)),
        pressure=float(main.get("pressure", 0.0)),
        wind_speed=float(wind.get("speed", 0.0)),
        wind_deg=float(wind.get("deg", 0.0)),
        weather_main=weather.get("main", ""),
        weather_description=weather.get("description", ""),
        icon=weather.get("icon", ""),
        visibility=int(current.get("visibility", 0)),
        clouds=int(current.get("clouds", {}).get("all", 0)),
        dt=int(current.get("dt", 0)),
    )
