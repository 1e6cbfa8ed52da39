"""Tests for display formatters."""

from weatherdesk.models.common import TemperatureUnit, WindUnit
from weatherdesk.models.forecast import DailyForecast
from weatherdesk.reporting.formatters import (
    capitalize_words,
    celsius_to_fahrenheit,
    format_city_rows,
    format_daily_forecast,
    format_population,
    format_probability,
    format_temperature,
    format_wind_speed,
    wind_direction,
)
from weatherdesk.tests.payloads import make_row


def test_temperature():
    assert format_temperature(14.4) == "14°C"
    assert format_temperature(14.5) == "15°C"
    assert format_temperature(20, TemperatureUnit.FAHRENHEIT) == "68°F"
    assert celsius_to_fahrenheit(100) == 212


def test_probability():
    assert format_probability(0.35) == "35%"
    assert format_probability(0) == "0%"


def test_population():
    assert format_population(999) == "999"
    assert format_population(8_961_989) == "9.0M"
    assert format_population(1_500) == "1.5K"
    assert format_population(1_400_000_000) == "1.4B"


def test_wind():
    assert format_wind_speed(4.1) == "4 m/s"
    assert format_wind_speed(4.1, WindUnit.IMPERIAL) == "9 mph"
    assert wind_direction(0) == "N"
    assert wind_direction(240) == "WSW"
    assert wind_direction(355) == "N"


def test_capitalize_words():
    assert capitalize_words("broken CLOUDS") == "Broken Clouds"


def test_city_rows_show_dash_when_not_enriched():
    london = make_row("London")
    london.current_temp = 14
    london.current_condition = "Clouds"
    london.high_temp = 16
    london.low_temp = 11
    text = format_city_rows([london, make_row("Paris", "FR")])
    lines = text.splitlines()
    assert "14°C" in lines[1]
    assert "Clouds" in lines[1]
    assert "16°C/11°C" in lines[1]
    assert lines[2].rstrip().endswith("-")


def test_daily_forecast_text():
    day = DailyForecast(
        date="2026-10-19",
        day_label="Mon",
        temp_min=9,
        temp_max=15,
        weather_main="Rain",
        weather_description="light rain",
        precipitation_probability=0.4,
        humidity=80,
    )
    text = format_daily_forecast([day])
    assert text.startswith("Mon 2026-10-19")
    assert "Light Rain" in text
    assert "precip 40%" in text
