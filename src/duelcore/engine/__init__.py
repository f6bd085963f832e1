"""Game engine module for duelcore.

This module contains the round resolver and the Game aggregate:
- errors: RoundError taxonomy
- resolution: Attack/Defence compare-and-score rule
- game_engine: Game, apply_round, submit_round
"""

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

__all__ = [
    "Game",
    "RoundResult",
    "RoundSummary",
    "create_game",
    "AttackOutcome",
    "OutcomeKind",
    "resolve_attack",
    "RoundError",
    "InvalidRoundSizeError",
    "SessionOverError",
    "PlayerStateNotFoundError",
    "TargetActionNotFoundError",
    "UnavailableActionError",
    "OverThinkingTimeError",
]
