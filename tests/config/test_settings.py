"""Tests for configuration and logging setup."""

import pytest
from loguru import logger
from pydantic import ValidationError

from worldsync.config import LoggingSettings, SyncSettings
from worldsync.logs import configure_logging


def test_defaults():
    settings = SyncSettings(_env_file=None)
    assert settings.tick_interval_ms == 200
    assert settings.transition_cooldown_s == 10.0
    assert settings.goal_warmup_s == 20.0
    assert settings.goal_item_threshold == 90
    assert settings.echo_suppression_timeout_s == 30.0
    assert settings.death_link_cause == "Died in The Talos Principle"
    assert not settings.offline_mode
    assert settings.randomize_sigils and settings.randomize_stars
    assert not settings.reusable_objects


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("WORLDSYNC_OFFLINE_MODE", "true")
    monkeypatch.setenv("WORLDSYNC_TICK_INTERVAL_MS", "50")
    monkeypatch.setenv("WORLDSYNC_SLOT_NAME", "Tester")
    settings = SyncSettings(_env_file=None)
    assert settings.offline_mode
    assert settings.tick_interval_ms == 50
    assert settings.slot_name == "Tester"


def test_explicit_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("WORLDSYNC_DEATH_LINK", "false")
    assert SyncSettings(_env_file=None, death_link=True).death_link


@pytest.mark.parametrize(
    "overrides",
    [
        {"tick_interval_ms": 0},
        {"transition_cooldown_s": -1.0},
        {"echo_suppression_timeout_s": 0.0},
        {"history_size": 0},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValidationError):
        SyncSettings(_env_file=None, **overrides)


def test_echo_timeout_can_be_disabled():
    assert SyncSettings(_env_file=None, echo_suppression_timeout_s=None).echo_suppression_timeout_s is None


def test_logging_settings_env(monkeypatch):
    monkeypatch.setenv("WORLDSYNC_LOG_LEVEL", "DEBUG")
    settings = LoggingSettings(_env_file=None)
    assert settings.level == "DEBUG"
    assert settings.file is None


def test_configure_logging_writes_file(tmp_path):
    log_file = tmp_path / "worldsync.log"
    configure_logging(LoggingSettings(_env_file=None, level="INFO", file=str(log_file)), force=True)
    try:
        logger.info("hello from test")
        logger.complete()
    finally:
        configure_logging(LoggingSettings(_env_file=None, level="DEBUG"), force=True)
    assert "hello from test" in log_file.read_text()
