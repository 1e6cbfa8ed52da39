"""Shared test fixtures."""

import sqlite3
from pathlib import Path

import pytest

from weatherdesk.config.schema import AppConfig
from weatherdesk.storage.database import connect, run_migrations
from weatherdesk.tests.payloads import DIRECTORY_BASE, OWM_BASE


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    return AppConfig(
        weather={"api_key": "test-key", "base_url": OWM_BASE},
        directory={"base_url": DIRECTORY_BASE},
        storage={"db_path": str(tmp_path / "test.db")},
    )


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    return conn
