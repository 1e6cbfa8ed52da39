"""Health checker: DB connectivity, upstream reachability, API key presence."""

import sqlite3

import httpx

from weatherdesk.config.schema import AppConfig
from weatherdesk.models.reporting import HealthStatus


class HealthChecker:
    def __init__(self, conn: sqlite3.Connection, config: AppConfig):
        self.conn = conn
        self.config = config

    def check(self) -> HealthStatus:
        return HealthStatus(
            db_connected=self._check_db(),
            weather_api_reachable=self._check_url(self.config.weather.base_url),
            directory_api_reachable=self._check_url(
                f"{self.config.directory.base_url}/search/",
                params={"dataset": self.config.directory.dataset, "rows": 0},
            ),
            api_key_configured=bool(self.config.weather.api_key.strip()),
        )

    def _check_db(self) -> bool:
        try:
            self.conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    def _check_url(self, url: str, params: dict | None = None) -> bool:
        # OpenWeatherMap answers 401 without a key, which still proves reachability.
        try:
            resp = httpx.get(url, params=params, timeout=10.0)
            return resp.status_code < 500
        except httpx.HTTPError:
            return False
