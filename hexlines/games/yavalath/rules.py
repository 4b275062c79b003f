"""Turn/result state machine for Yavalath.

A placement that makes a run of exactly three of the mover's stones loses
immediately. Otherwise a run of four or more wins. The three-in-a-row check
runs first, so a stone completing both a three and a four (on different
axes) is still a loss.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict

from hexlines.engine.errors import IllegalMoveError
from hexlines.games.yavalath.board import Cell, HexBoard
from hexlines.games.yavalath.lines import axis_runs
from hexlines.games.yavalath.types import (
    LOSING_RUN,
    WINNING_RUN,
    Color,
    hex_to_key,
    next_color,
    player_colors,
)

logger = logging.getLogger(__name__)


class RuleState(str, Enum):
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


class ResultKind(str, Enum):
    LOSS = "loss"
    WIN = "win"


class GameOutcome(BaseModel):
    """Terminal result of a game; fixed once set."""

    model_config = ConfigDict(frozen=True)

    result: ResultKind
    color: Color
    cell: tuple[int, int]

    @property
    def winner(self) -> Color | None:
        return self.color if self.result == ResultKind.WIN else None

    @property
    def loser(self) -> Color | None:
        return self.color if self.result == ResultKind.LOSS else None


class RuleEngine:
    """Applies placements to a board and decides when the game ends."""

    def __init__(self, board: HexBoard | None = None, player_count: int = 2) -> None:
        self.board = board if board is not None else HexBoard()
        self.players: tuple[Color, ...] = ()
        self.active_color = Color.B
        self.outcome: GameOutcome | None = None
        self.move_count = 0
        self.reset(player_count)

    @classmethod
    def restore(
        cls,
        board: HexBoard,
        player_count: int,
        active_color: Color,
    ) -> RuleEngine:
        """Wrap an in-progress *board* without clearing it."""
        engine = cls(player_count=player_count)
        if active_color not in engine.players:
            raise ValueError(f"{active_color.value} is not seated in a {player_count}-player game")
        engine.board = board
        engine.active_color = active_color
        engine.move_count = len(board) - len(board.empty_cells())
        return engine

    # ── State ──

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def state(self) -> RuleState:
        return RuleState.ENDED if self.outcome is not None else RuleState.IN_PROGRESS

    @property
    def is_over(self) -> bool:
        return self.outcome is not None

    # ── Transitions ──

    def reset(self, player_count: int = 2) -> None:
        self.players = player_colors(player_count)
        self.board.reset()
        self.active_color = Color.B
        self.outcome = None
        self.move_count = 0

    def apply_move(self, cell: Cell) -> GameOutcome | None:
        """Place the active color on *cell*.

        Returns the outcome if the move ended the game, else ``None``.
        Raises ``IllegalMoveError`` with no state change if the game is over,
        the cell is occupied or the cell is not on this engine's board.
        """
        if self.outcome is not None:
            raise IllegalMoveError("Game has already ended")
        if self.board.cell_at(cell.q, cell.r) is not cell:
            raise IllegalMoveError(f"Cell {hex_to_key(cell.q, cell.r)} is not on this board")

        mover = self.active_color
        self.board.place(cell, mover)
        self.move_count += 1
        logger.debug("Move %d: %s at %s", self.move_count, mover.value, cell.coords)

        runs = axis_runs(self.board, cell, mover)
        if any(run == LOSING_RUN for run in runs):
            self.outcome = GameOutcome(result=ResultKind.LOSS, color=mover, cell=cell.coords)
        elif any(run >= WINNING_RUN for run in runs):
            self.outcome = GameOutcome(result=ResultKind.WIN, color=mover, cell=cell.coords)

        if self.outcome is not None:
            logger.info(
                "Game ended after %d moves: %s %s at %s",
                self.move_count, mover.value, self.outcome.result.value, cell.coords,
            )
            return self.outcome

        self.active_color = next_color(mover, self.player_count)
        return None
