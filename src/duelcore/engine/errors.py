"""Round resolution errors.

Every error is a local validation failure detected while resolving a round.
None is retried by the engine, and none leaves any trace in the game: the
state and action log are exactly as they were before the rejected call.
"""

from typing import Optional


class RoundError(ValueError):
    """Base class for a rejected round.

    Attributes:
        code: Stable machine-readable error code
        player_id: Offending player, when the error concerns one
    """

    code = "round_error"

    def __init__(self, message: str, player_id: Optional[int] = None) -> None:
        super().__init__(message)
        self.player_id = player_id


class InvalidRoundSizeError(RoundError):
    """Submitted action count differs from the registered player count."""

    code = "invalid_round_size"


class SessionOverError(RoundError):
    """A round was submitted after the last sub-game finished."""

    code = "session_over"


class PlayerStateNotFoundError(RoundError):
    """A submission names a player with no state in the game."""

    code = "player_state_not_found"


class TargetActionNotFoundError(RoundError):
    """An Attack targets a player who submitted nothing this round."""

    code = "target_action_not_found"


class UnavailableActionError(RoundError):
    """A player played an action that is not in their remaining pool."""

    code = "unavailable_action"


class OverThinkingTimeError(RoundError):
    """A player declared more thinking time than they have left."""

    code = "over_thinking_time"
