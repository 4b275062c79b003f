"""Line-run evaluation along the three board axes.

All functions are read-only. A hypothetical stone on an empty cell never
has to be written to the board: walking outward from a cell never revisits
it, so the stone only ever contributes the ``1 +`` to its own run.
"""

from __future__ import annotations

from hexlines.engine.errors import PreconditionViolatedError
from hexlines.games.yavalath.board import Cell, HexBoard
from hexlines.games.yavalath.types import AXES, Axis, Color


def _count_direction(board: HexBoard, cell: Cell, color: Color, step: tuple[int, int]) -> int:
    count = 0
    current = board.neighbor(cell, step)
    while current is not None and current.state == color:
        count += 1
        current = board.neighbor(current, step)
    return count


def run_length(board: HexBoard, cell: Cell, color: Color, axis: Axis) -> int:
    """Consecutive *color* stones on both sides of *cell* along *axis*.

    *cell* itself is never counted.
    """
    forward, backward = axis
    return (
        _count_direction(board, cell, color, forward)
        + _count_direction(board, cell, color, backward)
    )


def axis_runs(board: HexBoard, cell: Cell, color: Color) -> list[int]:
    """Length of the run through *cell* on each axis, counting *cell* as *color*."""
    return [1 + run_length(board, cell, color, axis) for axis in AXES]


def _require_empty(cell: Cell) -> None:
    if cell.state is not None:
        raise PreconditionViolatedError(
            f"Cannot evaluate a hypothetical stone on occupied cell ({cell.q}, {cell.r})"
        )


def would_create_run_of_exactly(board: HexBoard, cell: Cell, color: Color, length: int) -> bool:
    _require_empty(cell)
    return any(run == length for run in axis_runs(board, cell, color))


def would_create_run_of_at_least(board: HexBoard, cell: Cell, color: Color, length: int) -> bool:
    _require_empty(cell)
    return any(run >= length for run in axis_runs(board, cell, color))
