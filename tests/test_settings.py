"""Tests for environment-driven settings and logging setup."""

from __future__ import annotations

import logging

import pytest

from nimbus.core.enums import Side
from nimbus.settings import AppSettings
from nimbus.ui.bootstrap import configure_logging


def test_defaults_without_environment() -> None:
    settings = AppSettings.from_env({})
    assert settings == AppSettings()
    assert settings.api_base_url == "http://localhost:5000/api"
    assert settings.player_side is Side.WHITE


def test_reads_prefixed_variables() -> None:
    settings = AppSettings.from_env(
        {
            "NIMBUS_START_FEN": "1k6/4P3/8/8/8/8/8/K7 w - - 0 1",
            "NIMBUS_PLAYER_COLOR": "black",
            "NIMBUS_API_URL": "https://coach.example/api",
            "NIMBUS_API_TIMEOUT": "30",
            "NIMBUS_RANDOM_GAME_PLIES": "12",
            "NIMBUS_API_TOKEN": "t0k",
            "NIMBUS_USER_ID": "u-1",
            "NIMBUS_GAME_ID": "42",
            "NIMBUS_LOG_LEVEL": "debug",
            "NIMBUS_ALLOW_MOVES": "off",
        }
    )
    assert settings.start_position == "1k6/4P3/8/8/8/8/8/K7 w - - 0 1"
    assert settings.player_side is Side.BLACK
    assert settings.api_base_url == "https://coach.example/api"
    assert settings.api_timeout == 30.0
    assert settings.random_game_plies == 12
    assert settings.api_token == "t0k"
    assert settings.user_id == "u-1"
    assert settings.game_id == "42"
    assert settings.log_level == "DEBUG"
    assert settings.allow_moves is False


def test_malformed_values_keep_defaults(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="nimbus.settings"):
        settings = AppSettings.from_env(
            {
                "NIMBUS_PLAYER_COLOR": "purple",
                "NIMBUS_API_TIMEOUT": "soon",
                "NIMBUS_RANDOM_GAME_PLIES": "many",
                "NIMBUS_ALLOW_MOVES": "maybe",
            }
        )
    assert settings.player_side is Side.WHITE
    assert settings.api_timeout == 120.0
    assert settings.random_game_plies == 30
    assert settings.allow_moves is True
    assert "NIMBUS_PLAYER_COLOR" in caplog.text
    assert "NIMBUS_API_TIMEOUT" in caplog.text


def test_empty_values_are_ignored() -> None:
    settings = AppSettings.from_env({"NIMBUS_API_URL": "", "NIMBUS_GAME_ID": ""})
    assert settings.api_base_url == "http://localhost:5000/api"
    assert settings.game_id == "1"


def test_configure_logging_accepts_names(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))

    configure_logging("debug")
    configure_logging("nonsense")

    assert calls[0]["level"] == logging.DEBUG
    assert calls[1]["level"] == logging.INFO
