"""
Tests for computer move selection.

Tests:
- Priority order: win, block, center, corner, side
- Determinism
- Opponent lookup independent of join order
- Failure on a full board
"""

import pytest

from .conftest import CPU, P1, build_session
from ..bots import HeuristicPolicy, RandomPolicy, create_policy
from ..bots.heuristic import completing_position
from ..engine_core.errors import RejectKind, SelectionError
from ..engine_core.state import Human, Status
from ..engine_core.validator import validate_move


@pytest.fixture
def policy():
    return HeuristicPolicy()


class TestHeuristicPriority:
    """Tests for the fixed priority order."""

    def test_center_on_empty_board(self, policy, empty_session):
        decision = policy.select_move(empty_session)
        assert decision.move.position == 5
        assert decision.move.turn == 1

    def test_first_corner_when_center_taken(self, policy):
        """No win or block available, center taken: first corner."""
        session = build_session((P1, 5))
        decision = policy.select_move(session)
        assert decision.move.position == 1
        assert decision.move.turn == 2
        assert decision.move.player == CPU

    def test_corner_order(self, policy):
        session = build_session((P1, 5), (CPU, 1), (P1, 9))
        assert policy.select_move(session).move.position == 3

    def test_side_when_center_and_corners_taken(self, policy):
        # X . O / O X X / X O O
        session = build_session(
            (P1, 1), (CPU, 3), (P1, 5), (CPU, 9), (P1, 7), (CPU, 4),
            (P1, 6), (CPU, 8),
        )
        decision = policy.select_move(session)
        assert decision.move.position == 2
        assert decision.explanation.startswith("side")

    def test_blocks_opponent_line(self, policy):
        """Human holds 1 and 2; computer must take 3."""
        session = build_session((P1, 1), (CPU, 5), (P1, 2))
        decision = policy.select_move(session)
        assert decision.move.position == 3
        assert decision.explanation.startswith("block")

    def test_win_beats_block(self, policy):
        """With both available, the computer takes the win."""
        # Human: 1, 2 (threatens 3). Computer: 4, 5 (threatens 6).
        session = build_session((P1, 1), (CPU, 4), (P1, 2), (CPU, 5), (P1, 9))
        decision = policy.select_move(session)
        assert decision.move.position == 6
        assert decision.explanation.startswith("win")

    def test_block_beats_center(self, policy):
        session = build_session((P1, 1), (CPU, 9), (P1, 7))
        assert policy.select_move(session).move.position == 4

    def test_first_winning_line_in_board_order(self):
        """Several winning cells: the first line in board order decides."""
        board = {1: CPU, 2: CPU, 7: CPU, 4: P1, 5: P1}
        # Row 1,2,3 comes before column 1,4,7 (which is blocked anyway)
        assert completing_position(board, CPU) == 3


class TestHeuristicProperties:
    """Tests for determinism and robustness."""

    def test_deterministic(self, policy):
        session = build_session((P1, 5), (CPU, 1), (P1, 3))
        moves = {policy.select_move(session).move for _ in range(10)}
        assert len(moves) == 1

    def test_selected_move_is_legal(self, policy):
        session = build_session((P1, 5), (CPU, 1), (P1, 3))
        decision = policy.select_move(session)
        assert validate_move(session, decision.move) is None

    def test_opponent_found_when_computer_joined_first(self, policy):
        """Blocking works regardless of which slot the human occupies."""
        session = build_session((CPU, 5), (P1, 1), (CPU, 9), (P1, 3), players=[CPU, P1])
        assert policy.select_move(session).move.position == 2

    def test_blocks_named_human(self, policy):
        other = Human("someone")
        session = build_session((other, 4), (CPU, 1), (other, 5), players=[other, CPU])
        assert policy.select_move(session).move.position == 6

    def test_full_board_raises(self, policy):
        session = build_session(
            (P1, 1), (CPU, 2), (P1, 3), (CPU, 5), (P1, 4),
            (CPU, 6), (P1, 8), (CPU, 7), (P1, 9),
            status=Status.COMPLETE,
        )
        with pytest.raises(SelectionError) as exc_info:
            policy.select_move(session)
        assert exc_info.value.kind == RejectKind.NO_MOVES_AVAILABLE


class TestRandomPolicy:
    """Tests for the seeded random opponent."""

    def test_picks_empty_position(self):
        session = build_session((P1, 5), (CPU, 1))
        bot = RandomPolicy(seed=42)
        for _ in range(10):
            assert bot.select_move(session).move.position in {2, 3, 4, 6, 7, 8, 9}

    def test_same_seed_same_moves(self):
        session = build_session((P1, 5))
        first_bot, second_bot = RandomPolicy(seed=7), RandomPolicy(seed=7)
        first = [first_bot.select_move(session).move.position for _ in range(5)]
        second = [second_bot.select_move(session).move.position for _ in range(5)]
        assert first == second

    def test_create_policy(self):
        assert isinstance(create_policy("heuristic"), HeuristicPolicy)
        assert isinstance(create_policy("random", seed=1), RandomPolicy)
        with pytest.raises(ValueError):
            create_policy("minimax")
