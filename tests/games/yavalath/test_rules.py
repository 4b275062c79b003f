"""Tests for the Yavalath turn/result state machine."""

from __future__ import annotations

import pytest

from hexlines.engine.errors import IllegalMoveError
from hexlines.games.yavalath.board import HexBoard
from hexlines.games.yavalath.rules import ResultKind, RuleEngine, RuleState
from hexlines.games.yavalath.types import Color
from tests.builders import board_with

# Far-apart cells on the top row, used for filler moves that never touch
# the stones under test
FILLER = [(4, -4), (6, -4), (8, -4), (0, 4), (2, 4), (4, 4)]


def _play(engine: RuleEngine, *coords: tuple[int, int]) -> None:
    for q, r in coords:
        engine.apply_move(engine.board.cell_at(q, r))


class TestReset:
    def test_initial_state(self) -> None:
        engine = RuleEngine()
        assert engine.state == RuleState.IN_PROGRESS
        assert engine.active_color == Color.B
        assert engine.players == (Color.B, Color.W)
        assert engine.outcome is None
        assert engine.move_count == 0

    def test_three_players(self) -> None:
        engine = RuleEngine(player_count=3)
        assert engine.players == (Color.B, Color.W, Color.G)

    def test_invalid_player_count(self) -> None:
        with pytest.raises(ValueError, match="2 or 3 players"):
            RuleEngine(player_count=4)

    def test_reset_clears_game(self) -> None:
        engine = RuleEngine()
        _play(engine, (0, 0), FILLER[0], (1, 0), FILLER[1], (2, 0))
        assert engine.is_over

        engine.reset(3)
        assert engine.state == RuleState.IN_PROGRESS
        assert engine.active_color == Color.B
        assert engine.player_count == 3
        assert len(engine.board.empty_cells()) == 61


class TestRotation:
    def test_two_players_alternate(self) -> None:
        engine = RuleEngine(player_count=2)
        seen = []
        for q, r in FILLER[:4]:
            seen.append(engine.active_color)
            _play(engine, (q, r))
        assert seen == [Color.B, Color.W, Color.B, Color.W]

    def test_three_players_cycle(self) -> None:
        engine = RuleEngine(player_count=3)
        seen = []
        for q, r in FILLER:
            seen.append(engine.active_color)
            _play(engine, (q, r))
        assert seen == [Color.B, Color.W, Color.G, Color.B, Color.W, Color.G]
        assert engine.active_color == Color.B

    def test_active_color_tracks_move_count(self) -> None:
        engine = RuleEngine(player_count=3)
        for q, r in FILLER[:5]:
            _play(engine, (q, r))
            assert engine.active_color == engine.players[engine.move_count % 3]


class TestOutcome:
    def test_exact_three_loses(self) -> None:
        engine = RuleEngine()
        _play(engine, (0, 0), FILLER[0], (1, 0), FILLER[1])
        outcome = engine.apply_move(engine.board.cell_at(2, 0))

        assert outcome is not None
        assert outcome.result == ResultKind.LOSS
        assert outcome.loser == Color.B
        assert outcome.winner is None
        assert outcome.cell == (2, 0)
        assert engine.state == RuleState.ENDED
        # The loser stays the active color once the game is over
        assert engine.active_color == Color.B

    def test_four_wins(self) -> None:
        engine = RuleEngine()
        _play(engine, (0, 0), FILLER[0], (1, 0), FILLER[1], (3, 0), FILLER[2])
        assert not engine.is_over
        outcome = engine.apply_move(engine.board.cell_at(2, 0))

        assert outcome.result == ResultKind.WIN
        assert outcome.winner == Color.B
        assert outcome.loser is None
        assert engine.outcome == outcome

    def test_loss_takes_precedence_over_win(self) -> None:
        board = board_with({
            # Row axis: (5,0),(6,0) + (4,0) = exactly three
            (5, 0): Color.B, (6, 0): Color.B,
            # Column axis: (4,-1),(4,1),(4,2) + (4,0) = four
            (4, -1): Color.B, (4, 1): Color.B, (4, 2): Color.B,
        })
        engine = RuleEngine.restore(board, 2, Color.B)
        outcome = engine.apply_move(board.cell_at(4, 0))
        assert outcome.result == ResultKind.LOSS
        assert outcome.loser == Color.B

    def test_two_in_a_row_continues(self) -> None:
        engine = RuleEngine()
        _play(engine, (0, 0), FILLER[0])
        assert engine.apply_move(engine.board.cell_at(1, 0)) is None
        assert engine.active_color == Color.W

    def test_other_colors_do_not_extend_run(self) -> None:
        engine = RuleEngine()
        # B (0,0), W (1,0), B (2,0): no same-color run of three
        _play(engine, (0, 0), (1, 0))
        assert engine.apply_move(engine.board.cell_at(2, 0)) is None


class TestIllegalMoves:
    def test_occupied_cell_rejected(self) -> None:
        engine = RuleEngine()
        _play(engine, (4, 0))
        before = engine.board.snapshot()
        with pytest.raises(IllegalMoveError):
            engine.apply_move(engine.board.cell_at(4, 0))
        assert engine.board.snapshot() == before
        assert engine.active_color == Color.W
        assert engine.move_count == 1

    def test_move_after_end_rejected(self) -> None:
        engine = RuleEngine()
        _play(engine, (0, 0), FILLER[0], (1, 0), FILLER[1], (2, 0))
        with pytest.raises(IllegalMoveError, match="already ended"):
            engine.apply_move(engine.board.cell_at(4, 0))
        assert engine.board.cell_at(4, 0).state is None

    def test_foreign_cell_rejected(self) -> None:
        engine = RuleEngine()
        other = HexBoard()
        with pytest.raises(IllegalMoveError, match="not on this board"):
            engine.apply_move(other.cell_at(4, 0))
        assert other.cell_at(4, 0).state is None


class TestRestore:
    def test_restore_keeps_stones(self) -> None:
        board = board_with({(4, 0): Color.B, (5, 0): Color.W})
        engine = RuleEngine.restore(board, 2, Color.B)
        assert engine.board is board
        assert engine.move_count == 2
        assert board.cell_at(4, 0).state == Color.B

    def test_restore_rejects_unseated_color(self) -> None:
        with pytest.raises(ValueError, match="not seated"):
            RuleEngine.restore(HexBoard(), 2, Color.G)
