"""Configuration for duelcore.

Session defaults live in `duelcore.parameters`; each can be overridden through
a DUELCORE_* environment variable. `load_settings` combines explicit
arguments, environment overrides and defaults into a validated GameSettings.
"""

import logging
import os
from datetime import timedelta
from typing import Iterable, Optional, Sequence

from duelcore.models.actions import Action, parse_action_template
from duelcore.models.settings import GameSettings, Player
from duelcore.parameters import (
    DEFAULT_ACTION_TEMPLATE,
    DEFAULT_INITIAL_THINKING_TIME,
    DEFAULT_JUST_GUARD_POINT,
    DEFAULT_THINKING_TIME_INCREMENT,
    DEFAULT_TOTAL_GAMES,
)

DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _get_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _get_seconds(name: str, default: timedelta) -> timedelta:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    try:
        return timedelta(seconds=float(value))
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from None


def get_total_games() -> int:
    """Get configured number of sub-games from environment."""
    return _get_int("DUELCORE_TOTAL_GAMES", DEFAULT_TOTAL_GAMES)


def get_initial_thinking_time() -> timedelta:
    """Get configured initial thinking time (DUELCORE_INITIAL_THINKING_TIME, seconds)."""
    return _get_seconds("DUELCORE_INITIAL_THINKING_TIME", DEFAULT_INITIAL_THINKING_TIME)


def get_thinking_time_increment() -> timedelta:
    """Get configured per-round increment (DUELCORE_THINKING_TIME_INCREMENT, seconds)."""
    return _get_seconds("DUELCORE_THINKING_TIME_INCREMENT", DEFAULT_THINKING_TIME_INCREMENT)


def get_just_guard_point() -> int:
    """Get configured just-guard bonus from environment."""
    return _get_int("DUELCORE_JUST_GUARD_POINT", DEFAULT_JUST_GUARD_POINT)


def get_action_template() -> tuple[Action, ...]:
    """Get configured action template from environment.

    DUELCORE_ACTIONS uses the compact notation, e.g. "A1,A2,A3,D1,D2,D3".

    Raises:
        ValueError: If the value holds a malformed action code
    """
    value = os.environ.get("DUELCORE_ACTIONS")
    if value is None or value.strip() == "":
        return DEFAULT_ACTION_TEMPLATE
    return tuple(parse_action_template(value))


def get_log_level() -> str:
    """Get configured log level name from environment."""
    return os.environ.get("DUELCORE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and host applications.

    The library itself never configures logging; call this once at startup.

    Args:
        level: Log level name. If None, uses environment config.
    """
    logging.basicConfig(
        level=level.upper() if level else get_log_level(),
        format=LOG_FORMAT,
    )


def load_settings(
    players: Sequence[Player],
    total_games: Optional[int] = None,
    initial_thinking_time: Optional[timedelta] = None,
    thinking_time_increment: Optional[timedelta] = None,
    actions: Optional[Iterable[Action]] = None,
    just_guard_point: Optional[int] = None,
) -> GameSettings:
    """Factory function to create session settings.

    Explicit arguments win over environment overrides, which win over the
    defaults in `duelcore.parameters`.

    Args:
        players: Registered players
        total_games: Sub-games in the session
        initial_thinking_time: Starting thinking-time budget
        thinking_time_increment: Time credited every round
        actions: Action template
        just_guard_point: Exact-tie bonus for the defender

    Returns:
        Validated, immutable GameSettings

    Raises:
        pydantic.ValidationError: If the combined values are invalid
        ValueError: If an environment override is malformed
    """
    return GameSettings(
        players=tuple(players),
        total_games=total_games if total_games is not None else get_total_games(),
        initial_thinking_time=(
            initial_thinking_time
            if initial_thinking_time is not None
            else get_initial_thinking_time()
        ),
        thinking_time_increment=(
            thinking_time_increment
            if thinking_time_increment is not None
            else get_thinking_time_increment()
        ),
        actions=tuple(actions) if actions is not None else get_action_template(),
        just_guard_point=(
            just_guard_point if just_guard_point is not None else get_just_guard_point()
        ),
    )
