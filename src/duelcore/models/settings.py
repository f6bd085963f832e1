"""Player and settings models for duelcore.

GameSettings is the static configuration of a session. It is validated once
on construction and frozen afterwards; the engine only ever reads it.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from duelcore import __version__
from duelcore.models.actions import Action, ActionPool


class Player(BaseModel):
    """A registered player. Identity only."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=0)
    name: str = Field(default="")


class GameSettings(BaseModel):
    """Immutable configuration for a session.

    Attributes:
        version: Engine version the settings were created for
        players: Registered players, in a stable order
        total_games: Number of sub-games in the session
        initial_thinking_time: Thinking-time budget each player starts with
        thinking_time_increment: Time credited to every player every round
        actions: Canonical action template, re-issued to a player whenever
            their pool runs out and the session continues
        just_guard_point: Points credited to a defender whose Defence level
            exactly matches the incoming Attack level
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(default=__version__)
    players: tuple[Player, ...] = Field(..., min_length=1)
    total_games: int = Field(..., ge=1)
    initial_thinking_time: timedelta
    thinking_time_increment: timedelta = Field(default=timedelta(0))
    actions: tuple[Action, ...] = Field(..., min_length=1)
    just_guard_point: int = Field(default=0)

    @field_validator("initial_thinking_time", "thinking_time_increment")
    @classmethod
    def validate_non_negative_time(cls, v: timedelta) -> timedelta:
        """Thinking-time budgets and increments cannot be negative."""
        if v < timedelta(0):
            raise ValueError("Thinking time values cannot be negative")
        return v

    @model_validator(mode="after")
    def validate_unique_player_ids(self) -> GameSettings:
        """Player ids key the per-player state, so they must be unique."""
        ids = [p.id for p in self.players]
        duplicates = sorted({pid for pid in ids if ids.count(pid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate player ids: {duplicates}")
        return self

    @property
    def num_players(self) -> int:
        return len(self.players)

    def get_player(self, player_id: int) -> Optional[Player]:
        """Get a registered player by id."""
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def player_ids(self) -> list[int]:
        """Ids of all registered players, in registration order."""
        return [p.id for p in self.players]

    def new_action_pool(self) -> ActionPool:
        """Fresh copy of the action template for a new sub-game."""
        return ActionPool.from_actions(self.actions)
