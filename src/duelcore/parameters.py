"""Default session parameters for duelcore.

These are the defaults `duelcore.config` falls back to when no environment
override is set. Each one can be overridden per session by passing explicit
values to `config.load_settings`.

Usage:
    from duelcore.parameters import DEFAULT_TOTAL_GAMES, DEFAULT_ACTION_TEMPLATE
"""

from datetime import timedelta

from duelcore.models.actions import Action

# =============================================================================
# SESSION LENGTH
# =============================================================================

DEFAULT_TOTAL_GAMES = 3
"""Number of sub-games in a session.

A sub-game ends each time a player plays the last action of their pool, so
with the default template every player goes through at least one full pool
per sub-game before the session can end.
"""


# =============================================================================
# THINKING TIME
# =============================================================================

DEFAULT_INITIAL_THINKING_TIME = timedelta(minutes=5)
"""Thinking-time budget each player starts the session with."""

DEFAULT_THINKING_TIME_INCREMENT = timedelta(seconds=5)
"""Time credited to every player after every round.

Credited regardless of how much was consumed, so a fast player ends a round
with more time than they started it with.
"""


# =============================================================================
# ACTIONS AND SCORING
# =============================================================================

DEFAULT_ACTION_LEVELS = (1, 2, 3)
"""Levels issued for both Attack and Defence in the default template."""

DEFAULT_ACTION_TEMPLATE: tuple[Action, ...] = tuple(
    [Action.attack(level) for level in DEFAULT_ACTION_LEVELS]
    + [Action.defence(level) for level in DEFAULT_ACTION_LEVELS]
)
"""Canonical action pool re-issued at the start of every sub-game."""

DEFAULT_JUST_GUARD_POINT = 2
"""Points credited to a defender whose Defence level exactly matches the Attack.

Should stay below the largest possible hit (max level - min level) so that
guarding exactly is rewarding without making Defence dominate Attack.
"""
