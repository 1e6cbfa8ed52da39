"""Tests for config loading, env override, and get/set."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError as PydanticValidationError

from weatherdesk.config.loader import (
    get_config_value,
    load_config,
    redacted_dump,
    require_api_key,
    set_config_value,
)
from weatherdesk.config.schema import AppConfig, Units
from weatherdesk.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _no_env_key(monkeypatch):
    monkeypatch.delenv("OPENWEATHERMAP_API_KEY", raising=False)


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path: Path):
        config = load_config(tmp_path / "missing.yaml")
        assert config.feed.page_size == 20
        assert config.feed.enrichment_batch_size == 5
        assert config.weather.units == Units.METRIC
        assert config.weather.api_key == ""

    def test_load_from_yaml(self, tmp_path: Path):
        path = tmp_path / "c.yaml"
        with open(path, "w") as f:
            yaml.dump({"feed": {"page_size": 50}, "weather": {"units": "imperial"}}, f)
        config = load_config(path)
        assert config.feed.page_size == 50
        assert config.weather.units == Units.IMPERIAL

    def test_empty_yaml(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == AppConfig()

    def test_env_overrides_key(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("OPENWEATHERMAP_API_KEY", "from-env")
        path = tmp_path / "c.yaml"
        with open(path, "w") as f:
            yaml.dump({"weather": {"api_key": "from-file"}}, f)
        assert load_config(path).weather.api_key == "from-env"

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"feed": {"pagesize": 10}}, f)
        with pytest.raises(PydanticValidationError):
            load_config(path)

    def test_page_size_bounds(self):
        with pytest.raises(PydanticValidationError):
            AppConfig(feed={"page_size": 0})


class TestRequireApiKey:
    def test_missing(self):
        with pytest.raises(ConfigurationError, match="not configured"):
            require_api_key(AppConfig())

    def test_present(self):
        assert require_api_key(AppConfig(weather={"api_key": " abc "})) == "abc"


class TestGetSet:
    def test_get(self):
        assert get_config_value(AppConfig(), "feed.page_size") == 20

    def test_get_missing(self):
        with pytest.raises(KeyError):
            get_config_value(AppConfig(), "feed.nope")

    def test_set_coerces_int(self):
        config = set_config_value(AppConfig(), "feed.page_size", "50")
        assert config.feed.page_size == 50

    def test_set_coerces_float(self):
        config = set_config_value(AppConfig(), "weather.timeout_seconds", "2.5")
        assert config.weather.timeout_seconds == 2.5

    def test_set_revalidates(self):
        with pytest.raises(PydanticValidationError):
            set_config_value(AppConfig(), "feed.page_size", "0")

    def test_set_unknown(self):
        with pytest.raises(KeyError):
            set_config_value(AppConfig(), "feed.nope", "1")


def test_redacted_dump_masks_key():
    out = redacted_dump(AppConfig(weather={"api_key": "secret"}))
    assert "secret" not in out
    assert '"***"' in out
