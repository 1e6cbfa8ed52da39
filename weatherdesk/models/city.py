"""City directory rows and the weather summary attached to them."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class WeatherSummary:
    temp: float
    condition: str
    high_temp: float
    low_temp: float

    def to_dict(self) -> dict:
        return {
            "temp": self.temp,
            "condition": self.condition,
            "highTemp": self.high_temp,
            "lowTemp": self.low_temp,
        }


@dataclass
class CityRow:
    """One city in the feed.

    The weather fields start out as None and are filled in by enrichment.
    None means "not enriched (yet)", never "no weather".
    """

    id: str
    name: str
    country: str
    country_code: str
    population: int
    timezone: str
    coordinates: Coordinates
    current_temp: float | None = None
    current_condition: str | None = None
    high_temp: float | None = None
    low_temp: float | None = None

    @property
    def is_enriched(self) -> bool:
        return self.current_condition is not None

    def apply_summary(self, summary: WeatherSummary) -> None:
        self.current_temp = summary.temp
        self.current_condition = summary.condition
        self.high_temp = summary.high_temp
        self.low_temp = summary.low_temp
