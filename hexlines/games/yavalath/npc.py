"""Heuristic move selection for computer-controlled seats.

Every tier looks one ply ahead at most and never touches the board; the
chosen cell must be submitted through ``RuleEngine.apply_move``.
"""

from __future__ import annotations

import random
from enum import IntEnum

from hexlines.games.yavalath.board import Cell, HexBoard
from hexlines.games.yavalath.lines import (
    would_create_run_of_at_least,
    would_create_run_of_exactly,
)
from hexlines.games.yavalath.types import (
    CENTER,
    LOSING_RUN,
    WINNING_RUN,
    Color,
    opponents,
)

CENTER_TOP_K = 3


class NpcTier(IntEnum):
    SAFE_RANDOM = 1
    WIN_BLOCK_CENTER = 2
    DELEGATED = 3


def safe_cells(board: HexBoard, cells: list[Cell], color: Color) -> list[Cell]:
    """Cells where *color* would not complete an exact three."""
    return [c for c in cells if not would_create_run_of_exactly(board, c, color, LOSING_RUN)]


def center_score(cell: Cell) -> int:
    return 10 - (abs(cell.q - CENTER[0]) + abs(cell.r - CENTER[1]))


def _first_winning_cell(board: HexBoard, cells: list[Cell], color: Color) -> Cell | None:
    for cell in cells:
        if would_create_run_of_at_least(board, cell, color, WINNING_RUN):
            return cell
    return None


def choose_safe_random(
    board: HexBoard, mover: Color, player_count: int, rng: random.Random
) -> Cell | None:
    empty = board.empty_cells()
    if not empty:
        return None
    safe = safe_cells(board, empty, mover)
    return rng.choice(safe or empty)


def choose_win_block_center(
    board: HexBoard, mover: Color, player_count: int, rng: random.Random
) -> Cell | None:
    """Own win, else block the first opponent win found, else a safe central cell."""
    empty = board.empty_cells()
    if not empty:
        return None

    winning = _first_winning_cell(board, empty, mover)
    if winning is not None:
        return winning

    # Opponents are checked in seat order; only the first threat is blocked
    for opponent in opponents(mover, player_count):
        block = _first_winning_cell(board, empty, opponent)
        if block is not None:
            return block

    safe = safe_cells(board, empty, mover)
    if not safe:
        return rng.choice(empty)
    # sorted() is stable, so equal scores keep enumeration order
    ranked = sorted(safe, key=center_score, reverse=True)
    return rng.choice(ranked[:CENTER_TOP_K])


def choose_delegated(
    board: HexBoard, mover: Color, player_count: int, rng: random.Random
) -> Cell | None:
    # Placeholder tier: plays exactly like WIN_BLOCK_CENTER
    return choose_win_block_center(board, mover, player_count, rng)


_TIER_CHOOSERS = {
    NpcTier.SAFE_RANDOM: choose_safe_random,
    NpcTier.WIN_BLOCK_CENTER: choose_win_block_center,
    NpcTier.DELEGATED: choose_delegated,
}


def choose_cell(
    board: HexBoard,
    mover: Color,
    player_count: int,
    tier: int,
    rng: random.Random | None = None,
) -> Cell | None:
    """Pick a cell for *mover* at difficulty *tier*; ``None`` only when the board is full."""
    try:
        chooser = _TIER_CHOOSERS[NpcTier(tier)]
    except ValueError:
        raise ValueError(f"Unknown NPC tier: {tier!r}") from None
    return chooser(board, mover, player_count, rng or random.Random())
