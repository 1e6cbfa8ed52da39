"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"
    STANDARD = "standard"


class WeatherApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: Units = Units.METRIC
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class DirectoryConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://public.opendatasoft.com/api/records/1.0"
    dataset: str = "geonames-all-cities-with-a-population-1000"
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class FeedConfig(BaseModel):
    model_config = {"extra": "forbid"}

    page_size: int = Field(default=20, ge=1, le=100)
    enrichment_batch_size: int = Field(default=5, ge=1)
    search_debounce_ms: int = Field(default=300, ge=0)
    default_sort_column: str = "name"
    summary_base_url: str = "http://127.0.0.1:8000"


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)
    cors_origins: list[str] = ["*"]


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/weatherdesk.db"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    weather: WeatherApiConfig = WeatherApiConfig()
    directory: DirectoryConfig = DirectoryConfig()
    feed: FeedConfig = FeedConfig()
    server: ServerConfig = ServerConfig()
    storage: StorageConfig = StorageConfig()
