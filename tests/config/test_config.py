"""Tests for `roadroute.config`."""

import pytest

from roadroute.config import SERVER_CONFIG, TRAFFIC_CONFIG, ServerConfig, TrafficConfig
from roadroute.errors import InvalidMultiplier


def test_default_levels() -> None:
    config = TrafficConfig()
    assert config.levels == {"clear": 1.0, "moderate": 2.0, "heavy": 3.0}


@pytest.mark.parametrize(
    "level,expected",
    [("clear", 1.0), ("Moderate", 2.0), (" HEAVY ", 3.0)],
)
def test_multiplier_for_is_case_insensitive(level, expected) -> None:
    assert TRAFFIC_CONFIG.multiplier_for(level) == expected


def test_unknown_level_raises() -> None:
    with pytest.raises(InvalidMultiplier, match="Valid levels are: clear, moderate, heavy"):
        TrafficConfig().multiplier_for("gridlock")


def test_custom_levels() -> None:
    config = TrafficConfig(moderate=1.5, heavy=4.0)
    assert config.multiplier_for("moderate") == 1.5
    assert config.multiplier_for("heavy") == 4.0


def test_server_defaults() -> None:
    assert SERVER_CONFIG.host == "0.0.0.0"
    assert SERVER_CONFIG.port == 8080
    assert SERVER_CONFIG.cors_origins == ("*",)
    assert ServerConfig(port=9000).port == 9000
