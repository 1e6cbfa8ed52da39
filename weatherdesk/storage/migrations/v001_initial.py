"""Initial schema: weather blob cache."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS weather_cache (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        city_name TEXT NOT NULL,
        data TEXT NOT NULL,
        timestamp TEXT NOT NULL
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_weather_cache_city "
        "ON weather_cache(city_name, timestamp)"
    ),
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
