"""Shared builders for Yavalath tests."""

from __future__ import annotations

from hexlines.engine.models import Player, PlayerId
from hexlines.games.yavalath.board import HexBoard
from hexlines.games.yavalath.types import Color


def board_with(stones: dict[tuple[int, int], Color]) -> HexBoard:
    """Build a board with the given stones, ignoring turn order."""
    board = HexBoard()
    for (q, r), color in stones.items():
        board.place(board.cell_at(q, r), color)
    return board


def striped_colors() -> dict[tuple[int, int], Color]:
    """Color every cell so that no two neighbours share a color."""
    colors = (Color.B, Color.W, Color.G)
    return {c.coords: colors[(c.q - c.r) % 3] for c in HexBoard()}


def make_players(num_players: int = 2) -> list[Player]:
    return [
        Player(player_id=PlayerId(f"p{i}"), display_name=f"P{i}", seat_index=i)
        for i in range(num_players)
    ]
