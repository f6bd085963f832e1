"""Integration tests for duelcore.engine.game_engine.

Tests cover:
- Full round resolution: scoring, pool consumption, thinking time
- Atomicity: every rejected round leaves state and action log untouched
- Sub-game rollover and session end
- submit_round result reporting and history tracking
"""

import logging
from datetime import timedelta

import pytest

from duelcore.engine.errors import (
    InvalidRoundSizeError,
    OverThinkingTimeError,
    PlayerStateNotFoundError,
    RoundError,
    SessionOverError,
    TargetActionNotFoundError,
    UnavailableActionError,
)
from duelcore.engine.game_engine import Game, create_game
from duelcore.engine.resolution import OutcomeKind
from duelcore.models.actions import Action, ActionPool, PlayerAction
from duelcore.models.settings import GameSettings, Player

# =============================================================================
# Helpers
# =============================================================================


def attack(player_id, target_id, level, seconds=0):
    return PlayerAction.attack(player_id, target_id, level, timedelta(seconds=seconds))


def defend(player_id, level, seconds=0):
    return PlayerAction.defence(player_id, level, timedelta(seconds=seconds))


def single_action_settings(total_games: int, increment: int = 0) -> GameSettings:
    """Two players whose template is a single Attack of level 1."""
    return GameSettings(
        players=(Player(id=1, name="P1"), Player(id=2, name="P2")),
        total_games=total_games,
        initial_thinking_time=timedelta(seconds=10),
        thinking_time_increment=timedelta(seconds=increment),
        actions=(Action.attack(1),),
        just_guard_point=5,
    )


def snapshot(game: Game):
    return game.state.clone(), list(game.action_logs)


def assert_unchanged(game: Game, before) -> None:
    state, logs = before
    assert game.state == state
    assert game.action_logs == logs


# =============================================================================
# Concrete Scenario
# =============================================================================


class TestExactTieScenario:
    """Two players, one sub-game, single-action pools, exact tie."""

    @pytest.fixture
    def game(self) -> Game:
        settings = GameSettings(
            players=(Player(id=1, name="P1"), Player(id=2, name="P2")),
            total_games=1,
            initial_thinking_time=timedelta(seconds=10),
            thinking_time_increment=timedelta(0),
            actions=(Action.attack(3), Action.defence(3)),
            just_guard_point=5,
        )
        game = create_game(settings)
        # Each player holds a single-element pool
        game.state.get_player_state(1).actions.actions.remove(Action.defence(3))
        game.state.get_player_state(2).actions.actions.remove(Action.attack(3))
        return game

    def test_round_resolution(self, game):
        summary = game.apply_round([attack(1, 2, 3, seconds=2), defend(2, 3, seconds=1)])

        p1 = game.get_player_state(1)
        p2 = game.get_player_state(2)
        assert p1.points == 0
        assert p2.points == 5
        assert p1.thinking_time == timedelta(seconds=8)
        assert p2.thinking_time == timedelta(seconds=9)
        assert p1.actions.is_empty
        assert p2.actions.is_empty
        assert game.is_session_over()
        assert summary.session_over is True
        assert [o.kind for o in summary.outcomes] == [OutcomeKind.JUST_GUARD]

    def test_further_rounds_rejected(self, game):
        game.apply_round([attack(1, 2, 3), defend(2, 3)])
        before = snapshot(game)

        with pytest.raises(SessionOverError):
            game.apply_round([attack(1, 2, 3), defend(2, 3)])
        assert_unchanged(game, before)


# =============================================================================
# Scoring Through the Engine
# =============================================================================


class TestScoring:
    """Compare-and-score rule applied to committed state."""

    def test_strict_win(self, sample_game):
        sample_game.apply_round([attack(1, 2, 3), defend(2, 1)])
        assert sample_game.get_player_state(1).points == 2
        assert sample_game.get_player_state(2).points == 0

    def test_strict_loss(self, sample_game):
        sample_game.apply_round([attack(1, 2, 1), defend(2, 3)])
        assert sample_game.get_player_state(1).points == 0
        assert sample_game.get_player_state(2).points == 0

    def test_mutual_attack_is_unopposed_both_ways(self, sample_game):
        summary = sample_game.apply_round([attack(1, 2, 3), attack(2, 1, 1)])

        assert sample_game.get_player_state(1).points == 3
        assert sample_game.get_player_state(2).points == 1
        assert [o.kind for o in summary.outcomes] == [OutcomeKind.UNOPPOSED] * 2

    def test_defence_alone_scores_nothing(self, sample_game):
        summary = sample_game.apply_round([defend(1, 1), defend(2, 3)])
        assert summary.outcomes == []
        assert all(ps.points == 0 for ps in sample_game.state.player_states)

    def test_three_players(self):
        """Attacks are matched by target id, not by position."""
        settings = GameSettings(
            players=(Player(id=1), Player(id=2), Player(id=3)),
            total_games=1,
            initial_thinking_time=timedelta(seconds=10),
            actions=(Action.attack(2), Action.defence(2), Action.defence(1)),
            just_guard_point=4,
        )
        game = create_game(settings)

        game.apply_round([attack(1, 3, 2), defend(2, 2), attack(3, 2, 2)])

        assert game.get_player_state(1).points == 2  # player 3 attacked, so unopposed
        assert game.get_player_state(2).points == 4
        assert game.get_player_state(3).points == 0


# =============================================================================
# Atomicity
# =============================================================================


class TestAtomicity:
    """Rejected rounds leave no trace."""

    @pytest.mark.parametrize(
        "round_actions,error",
        [
            ([defend(1, 1)], InvalidRoundSizeError),
            ([defend(1, 1), defend(2, 1), defend(2, 3)], InvalidRoundSizeError),
            ([defend(1, 1), defend(1, 3)], InvalidRoundSizeError),
            ([defend(1, 1), defend(99, 1)], PlayerStateNotFoundError),
            ([attack(1, 99, 1), defend(2, 1)], TargetActionNotFoundError),
            ([defend(1, 1), PlayerAction(player_id=2, action=Action.attack(1))],
             TargetActionNotFoundError),
            ([defend(1, 1), defend(2, 7)], UnavailableActionError),
            ([attack(1, 2, 3, seconds=1), defend(2, 1, seconds=12)], OverThinkingTimeError),
        ],
    )
    def test_failed_round_does_not_mutate(self, sample_game, round_actions, error):
        sample_game.apply_round([defend(1, 3), defend(2, 3)])
        before = snapshot(sample_game)
        committed = sample_game.state

        with pytest.raises(error) as exc_info:
            sample_game.apply_round(round_actions)

        assert isinstance(exc_info.value, RoundError)
        assert sample_game.state is committed
        assert_unchanged(sample_game, before)

    def test_error_after_earlier_players_resolved(self, sample_game):
        """Points and pool changes of earlier submissions are discarded too."""
        with pytest.raises(OverThinkingTimeError) as exc_info:
            sample_game.apply_round([attack(1, 2, 3, seconds=1), defend(2, 1, seconds=11)])

        assert exc_info.value.player_id == 2
        p1 = sample_game.get_player_state(1)
        assert p1.points == 0
        assert p1.thinking_time == timedelta(seconds=10)
        assert p1.actions.count == 4

    def test_unavailable_after_consumption(self, sample_game):
        """An action played earlier in the sub-game is no longer held."""
        sample_game.apply_round([attack(1, 2, 3), defend(2, 1)])
        with pytest.raises(UnavailableActionError) as exc_info:
            sample_game.apply_round([attack(1, 2, 3), defend(2, 3)])
        assert exc_info.value.player_id == 1
        assert exc_info.value.code == "unavailable_action"


# =============================================================================
# Thinking Time
# =============================================================================


class TestThinkingTime:
    """Thinking-time bookkeeping."""

    def test_conservation(self, sample_game):
        """new = old - consumption + increment."""
        sample_game.apply_round([attack(1, 2, 3, seconds=4), defend(2, 1, seconds=0)])

        assert sample_game.get_player_state(1).thinking_time == timedelta(seconds=7)
        assert sample_game.get_player_state(2).thinking_time == timedelta(seconds=11)

    def test_spending_whole_budget_allowed(self, sample_game):
        sample_game.apply_round([defend(1, 1, seconds=10), defend(2, 1)])
        assert sample_game.get_player_state(1).thinking_time == timedelta(seconds=1)

    def test_over_budget_rejected(self, sample_game):
        with pytest.raises(OverThinkingTimeError):
            sample_game.apply_round([defend(1, 1, seconds=10.5), defend(2, 1)])


# =============================================================================
# Sub-game Rollover and Session End
# =============================================================================


class TestRollover:
    """Pool exhaustion drives the sub-game counter."""

    def test_full_session(self, sample_game):
        """Four rounds exhaust both pools; total_games=2 ends the session."""
        rounds = [
            [attack(1, 2, 3), defend(2, 1)],  # hit, P1 +2
            [attack(1, 2, 1), defend(2, 3)],  # blocked
            [defend(1, 1), attack(2, 1, 1)],  # just guard, P1 +5
            [defend(1, 3), attack(2, 1, 3)],  # just guard, P1 +5
        ]
        for round_actions in rounds[:3]:
            summary = sample_game.apply_round(round_actions)
            assert summary.games_advanced == 0

        summary = sample_game.apply_round(rounds[3])

        p1 = sample_game.get_player_state(1)
        p2 = sample_game.get_player_state(2)
        assert p1.points == 12
        assert p2.points == 0
        # P1 emptied first and started game 2; P2 emptying ended the session
        assert summary.games_advanced == 1
        assert summary.game_num_before == 1
        assert summary.game_num_after == 2
        assert summary.session_over is True
        assert p1.actions.actions == list(sample_game.settings.actions)
        assert p2.actions.is_empty
        assert p1.thinking_time == timedelta(seconds=14)

        with pytest.raises(SessionOverError):
            sample_game.apply_round([defend(1, 1), defend(2, 1)])

    def test_refill_is_independent_copy(self):
        game = create_game(single_action_settings(total_games=3))
        game.apply_round([attack(1, 2, 1), attack(2, 1, 1)])

        p1 = game.get_player_state(1)
        assert p1.actions.actions == [Action.attack(1)]
        p1.actions.actions.clear()
        assert game.settings.actions == (Action.attack(1),)
        assert game.get_player_state(2).actions.actions == [Action.attack(1)]

    def test_multiple_exhaustions_in_one_round(self):
        """The counter moves once per exhausting player, not once per round."""
        game = create_game(single_action_settings(total_games=3))

        summary = game.apply_round([attack(1, 2, 1), attack(2, 1, 1)])

        assert summary.games_advanced == 2
        assert game.state.game_num == 3
        assert not game.is_session_over()
        assert game.get_player_state(1).actions.count == 1
        assert game.get_player_state(2).actions.count == 1

    def test_session_stays_over_within_round(self):
        """Exhaustions after the session ended do not restart it."""
        game = create_game(single_action_settings(total_games=3))
        game.apply_round([attack(1, 2, 1), attack(2, 1, 1)])

        summary = game.apply_round([attack(1, 2, 1), attack(2, 1, 1)])

        assert summary.session_over is True
        assert summary.games_advanced == 0
        assert game.state.game_num == 3
        assert game.get_player_state(1).actions.is_empty
        assert game.get_player_state(2).actions.is_empty
        assert game.get_player_state(1).points == 2
        assert game.get_player_state(2).points == 2

    def test_sub_game_does_not_refill_other_players(self):
        """Only the exhausting player receives a fresh pool."""
        settings = GameSettings(
            players=(Player(id=1), Player(id=2)),
            total_games=5,
            initial_thinking_time=timedelta(seconds=10),
            actions=(Action.attack(1), Action.defence(1)),
        )
        game = create_game(settings)
        game.state.get_player_state(2).actions = ActionPool.from_actions(
            [Action.attack(1), Action.defence(1), Action.defence(1)]
        )
        game.apply_round([attack(1, 2, 1), defend(2, 1)])
        summary = game.apply_round([defend(1, 1), defend(2, 1)])

        assert summary.games_advanced == 1
        assert game.state.game_num == 2
        assert game.get_player_state(1).actions.actions == list(settings.actions)
        assert game.get_player_state(2).actions.actions == [Action.attack(1)]


# =============================================================================
# Results, History and Snapshots
# =============================================================================


class TestSubmitRoundAndHistory:
    """Non-raising submission and the action log."""

    def test_submit_round_success(self, sample_game):
        result = sample_game.submit_round([attack(1, 2, 3), defend(2, 1)])

        assert result.success is True
        assert result.error is None
        assert result.summary.round_number == 1
        assert result.summary.outcomes[0].attacker_points == 2

    def test_submit_round_failure(self, sample_game, caplog):
        caplog.set_level(logging.INFO, logger="duelcore.engine.game_engine")

        result = sample_game.submit_round([defend(1, 1)])

        assert result.success is False
        assert result.summary is None
        assert result.error_code == "invalid_round_size"
        assert "expected 2, got 1" in result.error
        assert "invalid_round_size" in caplog.text

    def test_action_log_records_exact_submissions(self, sample_game):
        first = [attack(1, 2, 3), defend(2, 1)]
        second = [defend(1, 1), attack(2, 1, 3)]
        sample_game.apply_round(first)
        sample_game.apply_round(second)

        history = sample_game.get_history()
        assert history == [tuple(first), tuple(second)]
        history.clear()
        assert len(sample_game.action_logs) == 2

    def test_committed_snapshots_are_not_mutated(self, sample_game):
        """A state handed out earlier keeps its values after later rounds."""
        initial = sample_game.get_current_state()
        sample_game.apply_round([attack(1, 2, 3, seconds=2), defend(2, 1)])

        assert sample_game.get_current_state() is not initial
        assert initial.get_player_state(1).points == 0
        assert initial.get_player_state(1).thinking_time == timedelta(seconds=10)
        assert initial.get_player_state(1).actions.count == 4

    def test_session_end_logged(self, caplog):
        caplog.set_level(logging.INFO, logger="duelcore.engine.game_engine")
        game = create_game(single_action_settings(total_games=1))

        game.apply_round([attack(1, 2, 1), attack(2, 1, 1)])

        assert "Session over after round 1" in caplog.text
