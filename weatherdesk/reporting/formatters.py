"""Display formatters for feed pages and forecasts."""

import json

from weatherdesk.models.city import CityRow
from weatherdesk.models.common import TemperatureUnit, WindUnit, round_half_up
from weatherdesk.models.forecast import DailyForecast, WeatherDetail

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
MPS_TO_MPH = 2.237


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def format_temperature(temp: float, unit: TemperatureUnit = TemperatureUnit.CELSIUS) -> str:
    if unit == TemperatureUnit.FAHRENHEIT:
        return f"{round_half_up(celsius_to_fahrenheit(temp))}°F"
    return f"{round_half_up(temp)}°C"


def format_probability(probability: float) -> str:
    return f"{round_half_up(probability * 100)}%"


def format_population(population: int) -> str:
    if population >= 1_000_000_000:
        return f"{population / 1_000_000_000:.1f}B"
    if population >= 1_000_000:
        return f"{population / 1_000_000:.1f}M"
    if population >= 1_000:
        return f"{population / 1_000:.1f}K"
    return str(population)


def format_wind_speed(speed: float, unit: WindUnit = WindUnit.METRIC) -> str:
    if unit == WindUnit.IMPERIAL:
        return f"{round_half_up(speed * MPS_TO_MPH)} mph"
    return f"{round_half_up(speed)} m/s"


def wind_direction(degrees: float) -> str:
    return COMPASS_POINTS[round_half_up(degrees / 22.5) % 16]


def capitalize_words(text: str) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in text.split(" "))


def format_city_rows(
    rows: list[CityRow], unit: TemperatureUnit = TemperatureUnit.CELSIUS
) -> str:
    """Plain text table of feed rows; unenriched weather shows as '-'."""
    lines = [f"{'City':<24} {'Country':<20} {'Pop.':>7} {'Now':>6} {'Hi/Lo':>11}  Condition"]
    for r in rows:
        now = format_temperature(r.current_temp, unit) if r.current_temp is not None else "-"
        if r.high_temp is not None and r.low_temp is not None:
            hilo = f"{format_temperature(r.high_temp, unit)}/{format_temperature(r.low_temp, unit)}"
        else:
            hilo = "-"
        lines.append(
            f"{r.name[:24]:<24} {r.country[:20]:<20} "
            f"{format_population(r.population):>7} {now:>6} {hilo:>11}  "
            f"{r.current_condition or '-'}"
        )
    return "\n".join(lines)


def format_daily_forecast(
    days: list[DailyForecast], unit: TemperatureUnit = TemperatureUnit.CELSIUS
) -> str:
    lines = []
    for d in days:
        lines.append(
            f"{d.day_label} {d.date}  "
            f"{format_temperature(d.temp_min, unit)} / {format_temperature(d.temp_max, unit)}  "
            f"{capitalize_words(d.weather_description)}  "
            f"humidity {d.humidity}%  precip {format_probability(d.precipitation_probability)}"
        )
    return "\n".join(lines)


def format_detail_text(
    detail: WeatherDetail,
    unit: TemperatureUnit = TemperatureUnit.CELSIUS,
    wind_unit: WindUnit = WindUnit.METRIC,
) -> str:
    c = detail.current
    lines = [
        f"=== {detail.city}, {detail.country} "
        f"({detail.coordinates.lat:.2f}, {detail.coordinates.lon:.2f}) ===",
        f"Now: {format_temperature(c.temp, unit)} "
        f"(feels like {format_temperature(c.feels_like, unit)}), "
        f"{capitalize_words(c.weather_description)}",
        f"Humidity {round_half_up(c.humidity)}% | Pressure {round_half_up(c.pressure)} hPa | "
        f"Wind {format_wind_speed(c.wind_speed, wind_unit)} {wind_direction(c.wind_deg)}",
        "",
        format_daily_forecast(detail.forecast, unit),
    ]
    return "\n".join(lines)


def format_detail_json(detail: WeatherDetail) -> str:
    """JSON rendering in the shape the detail view consumes."""
    data = {
        "city": detail.city,
        "country": detail.country,
        "coordinates": {"lat": detail.coordinates.lat, "lon": detail.coordinates.lon},
        "current": {
            "temp": detail.current.temp,
            "feels_like": detail.current.feels_like,
            "humidity": detail.current.humidity,
            "pressure": detail.current.pressure,
            "wind": {"speed": detail.current.wind_speed, "deg": detail.current.wind_deg},
            "weather": {
                "main": detail.current.weather_main,
                "description": detail.current.weather_description,
                "icon": detail.current.icon,
            },
            "visibility": detail.current.visibility,
            "clouds": detail.current.clouds,
            "dt": detail.current.dt,
        },
        "forecast": [
            {
                "date": d.date,
                "day": d.day_label,
                "temp": {"min": d.temp_min, "max": d.temp_max},
                "weather": {
                    "main": d.weather_main,
                    "description": d.weather_description,
                    "icon": d.icon,
                },
                "pop": d.precipitation_probability,
                "humidity": d.humidity,
            }
            for d in detail.forecast
        ],
        "timezone": detail.timezone,
        "sunrise": detail.sunrise,
        "sunset": detail.sunset,
    }
    return json.dumps(data, indent=2)
