"""Tests for the Yavalath hex board."""

from __future__ import annotations

import pytest

from hexlines.engine.errors import IllegalMoveError
from hexlines.games.yavalath.board import HexBoard
from hexlines.games.yavalath.types import HEX_DIRECTIONS, ROW_SIZES, Color
from tests.builders import board_with, striped_colors


class TestLayout:
    def test_has_61_cells(self, board: HexBoard) -> None:
        assert len(board) == 61
        assert len(board.cells) == 61

    def test_row_sizes(self, board: HexBoard) -> None:
        sizes = [0] * len(ROW_SIZES)
        for cell in board:
            sizes[cell.row] += 1
        assert tuple(sizes) == ROW_SIZES

    def test_enumeration_is_row_major(self, board: HexBoard) -> None:
        order = [(c.row, c.index) for c in board.cells]
        assert order == sorted(order)
        assert board.cells[0].coords == (4, -4)
        assert board.cells[-1].coords == (4, 4)

    def test_all_cells_inside_hexagon(self, board: HexBoard) -> None:
        for cell in board:
            assert 0 <= cell.q <= 8
            assert -4 <= cell.r <= 4
            assert 0 <= cell.q + cell.r <= 8

    def test_cell_at(self, board: HexBoard) -> None:
        cell = board.cell_at(4, 0)
        assert cell is not None
        assert cell.coords == (4, 0)
        assert cell.row == 4
        assert cell.index == 4

    def test_cell_at_off_board(self, board: HexBoard) -> None:
        assert board.cell_at(0, -4) is None
        assert board.cell_at(5, 4) is None
        assert board.cell_at(9, 0) is None
        assert not board.contains(0, -4)
        assert board.contains(8, -4)


class TestNeighbors:
    def test_center_has_six_neighbors(self, board: HexBoard) -> None:
        center = board.cell_at(4, 0)
        neighbors = [board.neighbor(center, d) for d in HEX_DIRECTIONS]
        assert all(n is not None for n in neighbors)
        assert len({n.coords for n in neighbors}) == 6

    def test_corner_has_three_neighbors(self, board: HexBoard) -> None:
        corner = board.cell_at(4, -4)
        neighbors = [board.neighbor(corner, d) for d in HEX_DIRECTIONS]
        on_board = {n.coords for n in neighbors if n is not None}
        assert on_board == {(5, -4), (4, -3), (3, -3)}

    def test_neighbor_returns_same_cell_object(self, board: HexBoard) -> None:
        cell = board.cell_at(2, 0)
        assert board.neighbor(cell, (1, 0)) is board.cell_at(3, 0)


class TestOccupancy:
    def test_new_board_is_empty(self, board: HexBoard) -> None:
        assert len(board.empty_cells()) == 61
        assert not board.is_full()

    def test_place(self, board: HexBoard) -> None:
        cell = board.cell_at(4, 0)
        board.place(cell, Color.W)
        assert cell.state == Color.W
        assert cell not in board.empty_cells()

    def test_place_occupied_raises(self, board: HexBoard) -> None:
        cell = board.cell_at(4, 0)
        board.place(cell, Color.B)
        with pytest.raises(IllegalMoveError, match="already occupied"):
            board.place(cell, Color.W)
        assert cell.state == Color.B

    def test_reset_clears_everything(self) -> None:
        board = board_with({(4, 0): Color.B, (5, 0): Color.W, (0, 4): Color.G})
        board.reset()
        assert len(board.empty_cells()) == 61

    def test_is_full(self) -> None:
        board = board_with(striped_colors())
        assert board.is_full()
        assert board.empty_cells() == []


class TestSnapshot:
    def test_snapshot_only_lists_stones(self) -> None:
        board = board_with({(4, 0): Color.B, (0, 4): Color.G})
        assert board.snapshot() == {"4,0": "B", "0,4": "G"}

    def test_from_snapshot_restores_stones(self) -> None:
        board = HexBoard.from_snapshot({"4,0": "B", "5,-1": "W"})
        assert board.cell_at(4, 0).state == Color.B
        assert board.cell_at(5, -1).state == Color.W
        assert len(board.empty_cells()) == 59

    def test_from_snapshot_rejects_off_board_stone(self) -> None:
        with pytest.raises(ValueError, match="off the board"):
            HexBoard.from_snapshot({"0,-4": "B"})
