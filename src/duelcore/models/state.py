"""Game state models for duelcore.

GameState is the mutable snapshot the round resolver operates on: the current
sub-game number, whether the session is still running, and every player's
points, remaining thinking time and remaining actions.

The engine never mutates a committed state. It clones the current state,
applies a round to the clone, and swaps the clone in only when the whole
round succeeded.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from duelcore.models.actions import ActionPool
from duelcore.models.settings import GameSettings


class SessionPhase(str, Enum):
    """Whether the session still accepts rounds."""

    ACTIVE = "active"
    OVER = "over"


class PlayerState(BaseModel):
    """Per-player state in the game.

    Attributes:
        player_id: Owner of this state
        points: Current score
        thinking_time: Remaining thinking-time budget, never negative
        actions: Actions still available in the current sub-game
    """

    player_id: int
    points: int = Field(default=0)
    thinking_time: timedelta = Field(default=timedelta(0))
    actions: ActionPool = Field(default_factory=ActionPool)

    @field_validator("thinking_time")
    @classmethod
    def validate_thinking_time(cls, v: timedelta) -> timedelta:
        if v < timedelta(0):
            raise ValueError("Thinking time cannot be negative")
        return v

    def clone(self) -> PlayerState:
        """Independent copy, including a separate action pool."""
        return PlayerState(
            player_id=self.player_id,
            points=self.points,
            thinking_time=self.thinking_time,
            actions=self.actions.clone(),
        )


class GameState(BaseModel):
    """Complete game state.

    Attributes:
        game_num: Current sub-game, starting at 1. Once the session is over
            it keeps the number of the last sub-game played.
        phase: ACTIVE while rounds are accepted, OVER once the last sub-game
            has finished
        player_states: One entry per registered player
    """

    game_num: int = Field(default=1, ge=1)
    phase: SessionPhase = Field(default=SessionPhase.ACTIVE)
    player_states: list[PlayerState] = Field(default_factory=list)

    @classmethod
    def from_settings(cls, settings: GameSettings) -> GameState:
        """Create the initial state of a session."""
        return cls(
            game_num=1,
            phase=SessionPhase.ACTIVE,
            player_states=[
                PlayerState(
                    player_id=p.id,
                    points=0,
                    thinking_time=settings.initial_thinking_time,
                    actions=settings.new_action_pool(),
                )
                for p in settings.players
            ],
        )

    @property
    def is_over(self) -> bool:
        return self.phase == SessionPhase.OVER

    def get_player_state(self, player_id: int) -> Optional[PlayerState]:
        """Get a player's state by id."""
        for ps in self.player_states:
            if ps.player_id == player_id:
                return ps
        return None

    def advance_game(self, settings: GameSettings) -> bool:
        """Move to the next sub-game.

        Once the session is over it stays over; the counter is not touched
        again.

        Args:
            settings: Session settings (for total_games)

        Returns:
            True if a new sub-game started, False if the session is over
        """
        if self.is_over:
            return False
        if self.game_num + 1 > settings.total_games:
            self.phase = SessionPhase.OVER
            return False
        self.game_num += 1
        return True

    def clone(self) -> GameState:
        """Deep copy the state."""
        return GameState(
            game_num=self.game_num,
            phase=self.phase,
            player_states=[ps.clone() for ps in self.player_states],
        )
