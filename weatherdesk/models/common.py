"""Common types and helpers shared across models."""

import math
from datetime import UTC, datetime
from enum import StrEnum


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class TemperatureUnit(StrEnum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


class WindUnit(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def round_half_up(value: float) -> int:
    """Nearest integer with halves rounded up, like JavaScript Math.round."""
    return math.floor(value + 0.5)
