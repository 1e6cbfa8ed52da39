"""Forecast aggregator: 3-hourly forecast samples -> one summary per day."""

import logging
from datetime import date

from weatherdesk.models.common import round_half_up
from weatherdesk.models.forecast import DailyForecast, RawForecastSample

logger = logging.getLogger(__name__)

NOON_HOUR = 12.0
DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def aggregate(samples: list[RawForecastSample]) -> list[DailyForecast]:
    """Group samples by calendar day and summarize each day.

    Days come out in the order they first appear in `samples`. The headline
    condition is taken from the sample nearest to noon; on a tie the earlier
    sample wins.
    """
    groups: dict[str, list[RawForecastSample]] = {}
    for sample in samples:
        groups.setdefault(day_key(sample.timestamp_text), []).append(sample)

    return [_summarize_day(key, items) for key, items in groups.items()]


def _summarize_day(key: str, items: list[RawForecastSample]) -> DailyForecast:
    temps = [s.temp for s in items]

    representative = items[0]
    best_distance = abs(hour_of_day(representative.timestamp_text) - NOON_HOUR)
    for sample in items[1:]:
        distance = abs(hour_of_day(sample.timestamp_text) - NOON_HOUR)
        if distance < best_distance:
            representative = sample
            best_distance = distance

    avg_pop = sum(s.precipitation_probability for s in items) / len(items)
    avg_humidity = sum(s.humidity for s in items) / len(items)

    return DailyForecast(
        date=key,
        day_label=day_label(key),
        temp_min=min(temps),
        temp_max=max(temps),
        weather_main=representative.weather_main,
        weather_description=representative.weather_description,
        precipitation_probability=avg_pop,
        humidity=round_half_up(avg_humidity),
        icon=representative.icon,
    )


def day_key(timestamp_text: str) -> str:
    """Date portion of "YYYY-MM-DD HH:MM:SS" (or ISO "T"-separated) text."""
    return timestamp_text.strip().replace("T", " ").split(" ")[0]


def hour_of_day(timestamp_text: str) -> float:
    """Time of day as fractional hours; a bare date counts as midnight."""
    parts = timestamp_text.strip().replace("T", " ").split(" ")
    if len(parts) < 2 or not parts[1]:
        return 0.0
    fields = parts[1].split(":")
    hours = int(fields[0])
    minutes = int(fields[1][:2]) if len(fields) > 1 else 0
    return hours + minutes / 60.0


def day_label(key: str) -> str:
    return DAY_LABELS[date.fromisoformat(key).weekday()]


def parse_forecast_samples(payload: dict) -> list[RawForecastSample]:
    """Convert an OpenWeatherMap /forecast payload into samples.

    Items without a parseable `dt_txt` are skipped.
    """
    samples: list[RawForecastSample] = []
    for item in payload.get("list", []):
        timestamp_text = item.get("dt_txt")
        if not _is_usable_timestamp(timestamp_text):
            logger.warning("Skipping forecast item with bad dt_txt: %r", timestamp_text)
            continue
        main = item.get("main", {})
        weather = (item.get("weather") or [{}])[0]
        samples.append(
            RawForecastSample(
                timestamp_text=timestamp_text,
                temp=float(main.get("temp", 0.0)),
                humidity=float(main.get("humidity", 0.0)),
                precipitation_probability=float(item.get("pop", 0.0) or 0.0),
                weather_main=weather.get("main", ""),
                weather_description=weather.get("description", ""),
                icon=weather.get("icon", ""),
            )
        )
    return samples


def _is_usable_timestamp(timestamp_text) -> bool:
    if not isinstance(timestamp_text, str) or not timestamp_text.strip():
        return False
    try:
        date.fromisoformat(day_key(timestamp_text))
        hour_of_day(timestamp_text)
    except ValueError:
        return False
    return True
