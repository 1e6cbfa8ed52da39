"""Reporting data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    db_connected: bool
    weather_api_reachable: bool
    directory_api_reachable: bool
    api_key_configured: bool
