"""Action definitions for duelcore.

This module defines the two action kinds (Attack and Defence), the Action value
type carrying an intensity Level, the ordered ActionPool each player draws
from during a sub-game, and the PlayerAction a player submits for a round.
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActionType(str, Enum):
    """Kind of an action.

    Only Attack actions score. A Defence matters only as the target of
    someone else's Attack in the same round.

    Inherits from str for proper JSON serialization.
    """

    ATTACK = "attack"
    DEFENCE = "defence"


# Single-letter codes used by the compact template notation ("A3", "D1").
_TYPE_CODES: dict[str, ActionType] = {
    "A": ActionType.ATTACK,
    "D": ActionType.DEFENCE,
}


class Action(BaseModel):
    """An action a player can play in a round.

    Actions are value types: two actions are equal when both their type and
    level match, so a pool may hold several equal entries.

    Attributes:
        action_type: ATTACK or DEFENCE
        level: Relative intensity shared by both kinds. Unbounded here;
            bounds, if any, belong to the configured template.
    """

    model_config = ConfigDict(frozen=True)

    action_type: ActionType
    level: int

    @property
    def is_attack(self) -> bool:
        return self.action_type == ActionType.ATTACK

    @property
    def is_defence(self) -> bool:
        return self.action_type == ActionType.DEFENCE

    @property
    def code(self) -> str:
        """Compact notation, e.g. "A3" for an Attack of level 3."""
        return f"{self.action_type.value[0].upper()}{self.level}"

    @classmethod
    def attack(cls, level: int) -> Action:
        """Factory for an Attack action."""
        return cls(action_type=ActionType.ATTACK, level=level)

    @classmethod
    def defence(cls, level: int) -> Action:
        """Factory for a Defence action."""
        return cls(action_type=ActionType.DEFENCE, level=level)

    @classmethod
    def from_code(cls, code: str) -> Action:
        """Parse the compact notation produced by `code`.

        Args:
            code: Type letter followed by an integer level ("A3", "d-1")

        Returns:
            The parsed Action

        Raises:
            ValueError: If the type letter or the level is malformed
        """
        token = code.strip()
        if len(token) < 2:
            raise ValueError(f"Invalid action code: {code!r}")
        action_type = _TYPE_CODES.get(token[0].upper())
        if action_type is None:
            raise ValueError(
                f"Unknown action type {token[0]!r} in {code!r}. "
                f"Valid types: {sorted(_TYPE_CODES)}"
            )
        try:
            level = int(token[1:])
        except ValueError:
            raise ValueError(f"Invalid action level in {code!r}") from None
        return cls(action_type=action_type, level=level)


class ActionPool(BaseModel):
    """Ordered actions still available to a player in the current sub-game.

    The pool has multiset semantics: removal takes out only the first equal
    entry and order is preserved. Every operation returns a new pool and
    leaves the receiver untouched, so a pool never shares its backing list
    with the settings template or another player's pool.

    Attributes:
        actions: Remaining actions, in template order
    """

    actions: list[Action] = Field(default_factory=list)

    @classmethod
    def from_actions(cls, actions: Iterable[Action]) -> ActionPool:
        """Build a pool holding a copy of the given actions."""
        return cls(actions=list(actions))

    @property
    def count(self) -> int:
        return len(self.actions)

    @property
    def is_empty(self) -> bool:
        return len(self.actions) == 0

    def contains(self, action: Action) -> bool:
        """Check if at least one entry equals the given action."""
        return action in self.actions

    def remove(self, action: Action) -> tuple[ActionPool, bool]:
        """Remove the first entry equal to `action`.

        Args:
            action: Action to take out of the pool

        Returns:
            Tuple of (new_pool, found). If no entry matches, the pool itself
            is returned together with False.
        """
        for i, candidate in enumerate(self.actions):
            if candidate == action:
                return ActionPool(actions=self.actions[:i] + self.actions[i + 1 :]), True
        return self, False

    def clone(self) -> ActionPool:
        """Return an independent copy of this pool."""
        return ActionPool(actions=list(self.actions))


class PlayerAction(BaseModel):
    """One player's submission for a round.

    Attributes:
        player_id: Submitting player
        target_player_id: Whose simultaneous action an Attack is compared
            against. Ignored for Defence.
        action: The action played; must be in the player's remaining pool
        thinking_time_consumption: Time spent deciding, charged against the
            player's thinking-time budget
    """

    model_config = ConfigDict(frozen=True)

    player_id: int
    target_player_id: Optional[int] = None
    action: Action
    thinking_time_consumption: timedelta = Field(default=timedelta(0))

    @field_validator("thinking_time_consumption")
    @classmethod
    def validate_consumption(cls, v: timedelta) -> timedelta:
        """Thinking time can only be spent, never gained through a submission."""
        if v < timedelta(0):
            raise ValueError("Thinking time consumption cannot be negative")
        return v

    @classmethod
    def attack(
        cls,
        player_id: int,
        target_player_id: int,
        level: int,
        consumption: timedelta = timedelta(0),
    ) -> PlayerAction:
        """Factory for an Attack submission."""
        return cls(
            player_id=player_id,
            target_player_id=target_player_id,
            action=Action.attack(level),
            thinking_time_consumption=consumption,
        )

    @classmethod
    def defence(
        cls,
        player_id: int,
        level: int,
        consumption: timedelta = timedelta(0),
        target_player_id: Optional[int] = None,
    ) -> PlayerAction:
        """Factory for a Defence submission."""
        return cls(
            player_id=player_id,
            target_player_id=target_player_id,
            action=Action.defence(level),
            thinking_time_consumption=consumption,
        )


def find_player_action(
    round_actions: Iterable[PlayerAction],
    player_id: int,
) -> Optional[PlayerAction]:
    """Look up a player's submission among one round's actions.

    Args:
        round_actions: Submissions for a single round
        player_id: Player to look up

    Returns:
        The first submission by that player, None if there is none
    """
    for pa in round_actions:
        if pa.player_id == player_id:
            return pa
    return None


def parse_action_template(text: str) -> list[Action]:
    """Parse a comma separated list of action codes ("A1,A2,D1").

    Blank entries are skipped.

    Raises:
        ValueError: If any entry is malformed
    """
    return [Action.from_code(token) for token in text.split(",") if token.strip()]
