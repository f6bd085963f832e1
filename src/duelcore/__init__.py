"""Duelcore - rules engine for a simultaneous-action duel game.

Every round each player submits one Attack or Defence action. The engine
resolves the round atomically, scores paired Attack/Defence actions, consumes
actions from each player's pool, and tracks thinking-time budgets and the
sub-game / session counters.

Usage:
    from duelcore import Player, PlayerAction, create_game
    from duelcore.config import load_settings

    settings = load_settings([Player(id=1, name="Ann"), Player(id=2, name="Bo")])
    game = create_game(settings)
    game.apply_round([
        PlayerAction.attack(1, target_player_id=2, level=3),
        PlayerAction.defence(2, level=1),
    ])
    if game.is_session_over():
        ...
"""

__version__ = "0.1.0"

from duelcore.engine.errors import (
    InvalidRoundSizeError,
    OverThinkingTimeError,
    PlayerStateNotFoundError,
    RoundError,
    SessionOverError,
    TargetActionNotFoundError,
    UnavailableActionError,
)
from duelcore.engine.game_engine import Game, RoundResult, RoundSummary, create_game
from duelcore.engine.resolution import AttackOutcome, OutcomeKind, resolve_attack
from duelcore.models.actions import Action, ActionPool, ActionType, PlayerAction
from duelcore.models.settings import GameSettings, Player
from duelcore.models.state import GameState, PlayerState, SessionPhase

__all__ = [
    "__version__",
    # Models
    "Action",
    "ActionPool",
    "ActionType",
    "PlayerAction",
    "Player",
    "GameSettings",
    "GameState",
    "PlayerState",
    "SessionPhase",
    # Engine
    "Game",
    "RoundResult",
    "RoundSummary",
    "create_game",
    "AttackOutcome",
    "OutcomeKind",
    "resolve_attack",
    # Errors
    "RoundError",
    "InvalidRoundSizeError",
    "SessionOverError",
    "PlayerStateNotFoundError",
    "TargetActionNotFoundError",
    "UnavailableActionError",
    "OverThinkingTimeError",
]
