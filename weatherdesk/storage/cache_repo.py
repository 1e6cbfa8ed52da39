"""Repository for cached weather blobs, keyed by city name."""

import json
import sqlite3
from datetime import datetime

from weatherdesk.models.common import utc_now


def cache_weather_data(
    conn: sqlite3.Connection,
    city_name: str,
    data: object,
    timestamp: datetime | None = None,
) -> int:
    """Store a weather blob for a city. Returns the row id.

    Older entries are kept; reads return the newest one.
    """
    ts = (timestamp or utc_now()).isoformat()
    cursor = conn.execute(
        "INSERT INTO weather_cache (city_name, data, timestamp) VALUES (?, ?, ?)",
        (city_name, json.dumps(data), ts),
    )
    conn.commit()
    assert cursor.lastrowid is not None
    return cursor.lastrowid


def get_cached_weather(conn: sqlite3.Connection, city_name: str) -> object | None:
    """Newest cached blob for a city, parsed from JSON, or None."""
    row = conn.execute(
        "SELECT data FROM weather_cache WHERE city_name = ? "
        "ORDER BY timestamp DESC, id DESC LIMIT 1",
        (city_name,),
    ).fetchone()
    if row is None:
        return None
    return json.loads(row["data"])


def get_cache_entry(conn: sqlite3.Connection, city_name: str) -> dict | None:
    """Newest cache row for a city with its metadata."""
    row = conn.execute(
        "SELECT * FROM weather_cache WHERE city_name = ? "
        "ORDER BY timestamp DESC, id DESC LIMIT 1",
        (city_name,),
    ).fetchone()
    if row is None:
        return None
    return dict(row)
