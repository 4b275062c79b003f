"""Per-game session handle and the operations offered to a presentation layer.

Each ``GameHandle`` exclusively owns one board and one rule engine, so any
number of games can run side by side without shared state.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel

from hexlines.engine.errors import IllegalMoveError
from hexlines.games.yavalath.board import Cell, HexBoard
from hexlines.games.yavalath.npc import choose_cell
from hexlines.games.yavalath.rules import GameOutcome, ResultKind, RuleEngine
from hexlines.games.yavalath.types import Color

logger = logging.getLogger(__name__)


class MoveOutcomeKind(str, Enum):
    CONTINUE = "accepted_continue"
    LOSS = "accepted_loss"
    WIN = "accepted_win"
    REJECTED = "rejected_illegal"


class MoveOutcome(BaseModel):
    kind: MoveOutcomeKind
    color: Color | None = None  # next active color, or the loser/winner
    cell: tuple[int, int] | None = None
    reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.kind != MoveOutcomeKind.REJECTED


class GameHandle:
    """One in-memory game: board, turn state and a seeded random source."""

    def __init__(self, player_count: int = 2, seed: int | None = None) -> None:
        self.game_id = uuid4().hex
        self.engine = RuleEngine(HexBoard(), player_count)
        self.rng = random.Random(seed)

    @property
    def board(self) -> HexBoard:
        return self.engine.board

    @property
    def player_count(self) -> int:
        return self.engine.player_count


def new_game(player_count: int = 2, seed: int | None = None) -> GameHandle:
    handle = GameHandle(player_count, seed)
    logger.info("New game %s: %d players", handle.game_id, player_count)
    return handle


def legal_moves(handle: GameHandle) -> list[Cell]:
    if handle.engine.is_over:
        return []
    return handle.board.empty_cells()


def _resolve_cell(handle: GameHandle, cell: Cell | tuple[int, int]) -> Cell:
    if isinstance(cell, Cell):
        return cell
    q, r = cell
    found = handle.board.cell_at(q, r)
    if found is None:
        raise IllegalMoveError(f"({q}, {r}) is off the board")
    return found


def submit_move(handle: GameHandle, cell: Cell | tuple[int, int]) -> MoveOutcome:
    """Apply a move for the active color; illegal moves are reported, not raised."""
    try:
        target = _resolve_cell(handle, cell)
        outcome = handle.engine.apply_move(target)
    except IllegalMoveError as e:
        logger.debug("Rejected move in game %s: %s", handle.game_id, e.message)
        return MoveOutcome(kind=MoveOutcomeKind.REJECTED, reason=e.message)

    if outcome is None:
        return MoveOutcome(kind=MoveOutcomeKind.CONTINUE, color=handle.engine.active_color)
    kind = MoveOutcomeKind.LOSS if outcome.result == ResultKind.LOSS else MoveOutcomeKind.WIN
    return MoveOutcome(kind=kind, color=outcome.color, cell=outcome.cell)


def request_npc_move(handle: GameHandle, tier: int) -> Cell | None:
    """Suggest a cell for the active color without applying it."""
    if handle.engine.is_over:
        return None
    return choose_cell(
        handle.board,
        handle.engine.active_color,
        handle.player_count,
        tier,
        handle.rng,
    )


def active_color(handle: GameHandle) -> Color:
    return handle.engine.active_color


def outcome(handle: GameHandle) -> GameOutcome | None:
    return handle.engine.outcome
