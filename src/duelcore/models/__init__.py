"""duelcore game models.

This module exports the core data structures for the game.
"""

from .actions import (
    Action,
    ActionPool,
    ActionType,
    PlayerAction,
    find_player_action,
    parse_action_template,
)
from .settings import GameSettings, Player
from .state import GameState, PlayerState, SessionPhase

__all__ = [
    # Enums
    "ActionType",
    "SessionPhase",
    # Action Models
    "Action",
    "ActionPool",
    "PlayerAction",
    # Settings Models
    "Player",
    "GameSettings",
    # State Models
    "GameState",
    "PlayerState",
    # Action Functions
    "find_player_action",
    "parse_action_template",
]
