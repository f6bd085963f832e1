"""Core game engine for duelcore.

This module implements the Game aggregate and the round resolver, the state
transition that takes the current GameState plus one simultaneous round of
per-player actions and produces the next GameState.

Round sequence:
1. VALIDATE - One submission per registered player, session still running
2. CLONE - Work on a deep copy of the current state
3. For each submission, in the order given:
   a. Look up the submitting player's state
   b. Score (Attack only, compared against the target's submission)
   c. Consume the action from the player's pool, advancing the sub-game
      when the pool runs out
   d. Charge thinking time and credit the per-round increment
4. COMMIT - Swap in the clone and append the round to the action log

Any failure raises a RoundError before step 4, so a rejected round leaves
the game exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from duelcore.engine.errors import (
    InvalidRoundSizeError,
    OverThinkingTimeError,
    PlayerStateNotFoundError,
    RoundError,
    SessionOverError,
    TargetActionNotFoundError,
    UnavailableActionError,
)
from duelcore.engine.resolution import AttackOutcome, OutcomeKind, resolve_attack
from duelcore.models.actions import PlayerAction, find_player_action
from duelcore.models.settings import GameSettings
from duelcore.models.state import GameState, PlayerState

logger = logging.getLogger(__name__)


@dataclass
class RoundSummary:
    """What happened in a successfully resolved round.

    Attributes:
        round_number: 1-indexed position of the round in the action log
        game_num_before: Sub-game the round was played in
        game_num_after: Sub-game after the round
        outcomes: One AttackOutcome per Attack submitted, in submission order
        games_advanced: Sub-game transitions caused by this round
        session_over: True if the session ended during this round
    """

    round_number: int
    game_num_before: int
    game_num_after: int
    outcomes: list[AttackOutcome] = field(default_factory=list)
    games_advanced: int = 0
    session_over: bool = False


@dataclass
class RoundResult:
    """Result of submitting a round through `Game.submit_round`.

    Attributes:
        success: Whether the round was resolved and committed
        summary: RoundSummary (None if failed)
        error: Error message if success=False
        error_code: Stable RoundError code if success=False
    """

    success: bool
    summary: Optional[RoundSummary] = None
    error: Optional[str] = None
    error_code: Optional[str] = None


class Game:
    """Aggregate root of a session.

    Attributes:
        settings: Immutable session settings
        action_logs: Every resolved round, exactly as submitted, oldest first
        state: Current game state (replaced wholesale on every round)

    A Game is not thread-safe; callers must not resolve rounds on the same
    instance concurrently. Committed states are never mutated afterwards.
    """

    def __init__(self, settings: GameSettings) -> None:
        self.settings = settings
        self.action_logs: list[tuple[PlayerAction, ...]] = []
        self.state = GameState.from_settings(settings)

    def is_session_over(self) -> bool:
        """Check if the session has finished."""
        return self.state.is_over

    def get_current_state(self) -> GameState:
        """Get the current committed state."""
        return self.state

    def get_player_state(self, player_id: int) -> Optional[PlayerState]:
        """Get a player's current state by id."""
        return self.state.get_player_state(player_id)

    def get_history(self) -> list[tuple[PlayerAction, ...]]:
        """Get the resolved rounds, oldest first."""
        return list(self.action_logs)

    def apply_round(self, round_actions: Sequence[PlayerAction]) -> RoundSummary:
        """Resolve one simultaneous round of actions.

        On success the new state is committed and the round is appended to
        the action log. On failure neither is touched.

        Args:
            round_actions: Exactly one submission per registered player

        Returns:
            RoundSummary describing the resolved round

        Raises:
            InvalidRoundSizeError: Wrong number of submissions, or a player
                submitted twice
            SessionOverError: The session is already over
            PlayerStateNotFoundError: A submission names an unknown player
            TargetActionNotFoundError: An Attack targets a player with no
                submission this round
            UnavailableActionError: An action is not in the player's pool
            OverThinkingTimeError: A player spends more time than they have
        """
        round_actions = tuple(round_actions)
        self._validate_round(round_actions)

        state = self.state.clone()
        summary = RoundSummary(
            round_number=len(self.action_logs) + 1,
            game_num_before=state.game_num,
            game_num_after=state.game_num,
        )

        for pa in round_actions:
            ps = state.get_player_state(pa.player_id)
            if ps is None:
                raise PlayerStateNotFoundError(
                    f"Player (id: {pa.player_id}) state not found",
                    player_id=pa.player_id,
                )

            if pa.action.is_attack:
                summary.outcomes.append(self._score_attack(state, ps, pa, round_actions))

            self._consume_action(state, ps, pa, summary)
            self._charge_thinking_time(ps, pa)

        summary.game_num_after = state.game_num
        summary.session_over = state.is_over

        self.state = state
        self.action_logs.append(round_actions)

        logger.debug(
            f"Round {summary.round_number} resolved: game {summary.game_num_before} -> "
            f"{summary.game_num_after}, {len(summary.outcomes)} attacks"
        )
        if summary.session_over:
            logger.info(f"Session over after round {summary.round_number}")
        return summary

    def submit_round(self, round_actions: Sequence[PlayerAction]) -> RoundResult:
        """Resolve a round, reporting rejection as a result instead of raising.

        Args:
            round_actions: Exactly one submission per registered player

        Returns:
            RoundResult with the summary, or the error message and code
        """
        try:
            summary = self.apply_round(round_actions)
        except RoundError as e:
            logger.info(f"Round rejected ({e.code}): {e}")
            return RoundResult(success=False, error=str(e), error_code=e.code)
        return RoundResult(success=True, summary=summary)

    def _validate_round(self, round_actions: tuple[PlayerAction, ...]) -> None:
        """Structural checks that need no state changes."""
        if len(round_actions) != self.settings.num_players:
            raise InvalidRoundSizeError(
                f"Invalid size of player action set: expected "
                f"{self.settings.num_players}, got {len(round_actions)}"
            )

        seen: set[int] = set()
        for pa in round_actions:
            if pa.player_id in seen:
                raise InvalidRoundSizeError(
                    f"Player (id: {pa.player_id}) submitted more than one action",
                    player_id=pa.player_id,
                )
            seen.add(pa.player_id)

        if self.state.is_over:
            raise SessionOverError("Session is already over")

    def _score_attack(
        self,
        state: GameState,
        ps: PlayerState,
        pa: PlayerAction,
        round_actions: tuple[PlayerAction, ...],
    ) -> AttackOutcome:
        """Compare an Attack with its target's submission and credit points."""
        tpa = None
        if pa.target_player_id is not None:
            tpa = find_player_action(round_actions, pa.target_player_id)
        if tpa is None:
            raise TargetActionNotFoundError(
                f"Player (id: {pa.target_player_id}) action not found",
                player_id=pa.player_id,
            )

        outcome = resolve_attack(
            attacker_id=pa.player_id,
            attack=pa.action,
            defender_id=tpa.player_id,
            target_action=tpa.action,
            just_guard_point=self.settings.just_guard_point,
        )

        ps.points += outcome.attacker_points
        if outcome.kind == OutcomeKind.JUST_GUARD:
            tps = state.get_player_state(tpa.player_id)
            if tps is None:
                raise PlayerStateNotFoundError(
                    f"Player (id: {tpa.player_id}) state not found",
                    player_id=tpa.player_id,
                )
            tps.points += outcome.defender_points
        return outcome

    def _consume_action(
        self,
        state: GameState,
        ps: PlayerState,
        pa: PlayerAction,
        summary: RoundSummary,
    ) -> None:
        """Take the played action out of the pool, rolling over on exhaustion."""
        remaining, found = ps.actions.remove(pa.action)
        if not found:
            raise UnavailableActionError(
                f"Player (id: {pa.player_id}) does not hold action {pa.action.code}",
                player_id=pa.player_id,
            )
        ps.actions = remaining
        if not remaining.is_empty:
            return

        if state.advance_game(self.settings):
            ps.actions = self.settings.new_action_pool()
            summary.games_advanced += 1
            logger.info(
                f"Player (id: {pa.player_id}) exhausted their actions; "
                f"starting game {state.game_num} of {self.settings.total_games}"
            )

    def _charge_thinking_time(self, ps: PlayerState, pa: PlayerAction) -> None:
        """Deduct consumed thinking time and credit the per-round increment."""
        if pa.thinking_time_consumption > ps.thinking_time:
            raise OverThinkingTimeError(
                f"Player (id: {pa.player_id}) over thinking time: consumed "
                f"{pa.thinking_time_consumption}, remaining {ps.thinking_time}",
                player_id=pa.player_id,
            )
        ps.thinking_time = (
            ps.thinking_time - pa.thinking_time_consumption + self.settings.thinking_time_increment
        )


def create_game(settings: GameSettings) -> Game:
    """Create a new game at the start of a session.

    Args:
        settings: Fully formed session settings

    Returns:
        Game in its initial state
    """
    return Game(settings)
