"""Tests for environment-driven settings."""

import pytest

from tictactoe.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000
    assert settings.log_level == "INFO"
    assert settings.max_sessions == 1000


def test_reads_environment():
    settings = Settings.from_env(
        {
            "TICTACTOE_HOST": "127.0.0.1",
            "TICTACTOE_PORT": "9000",
            "TICTACTOE_LOG_LEVEL": "debug",
            "TICTACTOE_MAX_SESSIONS": "5",
        }
    )
    assert settings == Settings("127.0.0.1", 9000, "DEBUG", 5)


def test_bad_port_names_variable():
    with pytest.raises(ValueError, match="TICTACTOE_PORT"):
        Settings.from_env({"TICTACTOE_PORT": "eighty"})


def test_max_sessions_must_be_positive():
    with pytest.raises(ValueError):
        Settings.from_env({"TICTACTOE_MAX_SESSIONS": "0"})
