"""OpenWeatherMap forecast and detail-view models."""

from dataclasses import dataclass

from weatherdesk.models.city import Coordinates


@dataclass(frozen=True)
class RawForecastSample:
    timestamp_text: str  # "YYYY-MM-DD HH:MM:SS", local to the forecast
    temp: float
    humidity: float
    precipitation_probability: float  # 0..1
    weather_main: str
    weather_description: str
    icon: str = ""


@dataclass(frozen=True)
class DailyForecast:
    date: str  # YYYY-MM-DD
    day_label: str  # Mon, Tue, ...
    temp_min: float
    temp_max: float
    weather_main: str
    weather_description: str
    precipitation_probability: float
    humidity: int
    icon: str = ""


@dataclass(frozen=True)
class CurrentConditions:
    temp: float
    feels_like: float
    humidity: float
    pressure: float
    wind_speed: float
    wind_deg: float
    weather_main: str
    weather_description: str
    icon: str
    visibility: int
    clouds: int
    dt: int


@dataclass(frozen=True)
class WeatherDetail:
    city: str
    country: str
    coordinates: Coordinates
    current: CurrentConditions
    forecast: list[DailyForecast]
    timezone: int  # offset from UTC in seconds
    sunrise: int
    sunset: int
