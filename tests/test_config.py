"""Tests for configuration dataclasses."""

from pathlib import Path

import pytest

from habitclock.config import AnalyticsConfig, AppConfig, ClockConfig, StoreConfig
from habitclock.domain.slider import SliderBoundaryPolicy
from habitclock.errors import InvalidArgumentError


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "HABITCLOCK_TIMEZONE",
        "HABITCLOCK_LATITUDE",
        "HABITCLOCK_LONGITUDE",
        "HABITCLOCK_DB",
        "HABITCLOCK_SLIDER_POLICY",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestDefaults:
    def test_app_defaults(self, clean_env):
        config = AppConfig.from_env()
        assert config.clock == ClockConfig()
        assert config.store.db_path == Path.home() / ".habitclock" / "analytics.db"
        assert config.analytics.slider_boundary_policy is None
        assert config.validate() == []


class TestEnvironment:
    def test_overrides(self, clean_env, tmp_path):
        clean_env.setenv("HABITCLOCK_TIMEZONE", "Asia/Tokyo")
        clean_env.setenv("HABITCLOCK_LONGITUDE", "139.69")
        clean_env.setenv("HABITCLOCK_DB", str(tmp_path / "a.db"))
        clean_env.setenv("HABITCLOCK_SLIDER_POLICY", "roundUp")
        config = AppConfig.from_env()
        assert config.clock.timezone == "Asia/Tokyo"
        assert config.clock.longitude == 139.69
        assert config.store.db_path == tmp_path / "a.db"
        assert config.analytics.slider_boundary_policy is SliderBoundaryPolicy.ROUND_UP

    def test_bad_policy(self, clean_env):
        clean_env.setenv("HABITCLOCK_SLIDER_POLICY", "sometimes")
        with pytest.raises(InvalidArgumentError):
            AnalyticsConfig.from_env()


class TestValidate:
    def test_collects_errors(self):
        config = AppConfig(clock=ClockConfig(timezone="Mars/Olympus", latitude=100.0), store=StoreConfig(chunk_size=0))
        errors = config.validate()
        assert len(errors) == 3
