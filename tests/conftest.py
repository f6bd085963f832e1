"""Shared pytest fixtures and markers for all tests."""

from datetime import timedelta

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def players():
    """Two registered players."""
    from duelcore.models.settings import Player
    return (Player(id=1, name="Player 1"), Player(id=2, name="Player 2"))


@pytest.fixture
def sample_settings(players):
    """Two-player settings with a small mixed template."""
    from duelcore.models.actions import Action
    from duelcore.models.settings import GameSettings
    return GameSettings(
        players=players,
        total_games=2,
        initial_thinking_time=timedelta(seconds=10),
        thinking_time_increment=timedelta(seconds=1),
        actions=(Action.attack(1), Action.attack(3), Action.defence(1), Action.defence(3)),
        just_guard_point=5,
    )


@pytest.fixture
def sample_game(sample_settings):
    """Fresh game built from sample_settings."""
    from duelcore.engine.game_engine import create_game
    return create_game(sample_settings)
