"""The fixed 61-cell Yavalath board.

Cells are laid out in rows of 5-6-7-8-9-8-7-6-5. Row ``i`` has axial
``r = i - 4`` and its first cell at ``q = max(0, 4 - i)``, so the board
covers exactly the cells with ``0 <= q <= 8``, ``-4 <= r <= 4`` and
``0 <= q + r <= 8``. The board knows nothing about turns or results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from hexlines.engine.errors import IllegalMoveError
from hexlines.games.yavalath.types import (
    CENTER_ROW,
    ROW_SIZES,
    Color,
    hex_to_key,
    key_to_hex,
)


@dataclass(eq=False)
class Cell:
    """One board cell. Coordinates are fixed; only ``state`` changes."""

    q: int
    r: int
    row: int
    index: int
    state: Color | None = field(default=None)

    @property
    def coords(self) -> tuple[int, int]:
        return (self.q, self.r)

    @property
    def is_empty(self) -> bool:
        return self.state is None

    def __repr__(self) -> str:
        state = self.state.value if self.state else "."
        return f"Cell({self.q}, {self.r}, {state})"


class HexBoard:
    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], Cell] = {}
        for row, size in enumerate(ROW_SIZES):
            q_start = max(0, CENTER_ROW - row)
            r = row - CENTER_ROW
            for i in range(size):
                self._cells[(q_start + i, r)] = Cell(q=q_start + i, r=r, row=row, index=i)

    # ── Lookup ──

    @property
    def cells(self) -> list[Cell]:
        """All cells in enumeration (row-major) order."""
        return list(self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells.values())

    def contains(self, q: int, r: int) -> bool:
        return (q, r) in self._cells

    def cell_at(self, q: int, r: int) -> Cell | None:
        return self._cells.get((q, r))

    def neighbor(self, cell: Cell, step: tuple[int, int]) -> Cell | None:
        dq, dr = step
        return self._cells.get((cell.q + dq, cell.r + dr))

    def empty_cells(self) -> list[Cell]:
        return [c for c in self._cells.values() if c.state is None]

    def is_full(self) -> bool:
        return all(c.state is not None for c in self._cells.values())

    # ── Mutation ──

    def place(self, cell: Cell, color: Color) -> None:
        if cell.state is not None:
            raise IllegalMoveError(
                f"Cell {hex_to_key(cell.q, cell.r)} is already occupied by {cell.state.value}"
            )
        cell.state = color

    def reset(self) -> None:
        for cell in self._cells.values():
            cell.state = None

    # ── Serialization ──

    def snapshot(self) -> dict[str, str]:
        """Occupied cells as ``{"q,r": color}``; empty cells are omitted."""
        return {
            hex_to_key(c.q, c.r): c.state.value
            for c in self._cells.values()
            if c.state is not None
        }

    @classmethod
    def from_snapshot(cls, stones: dict[str, str]) -> HexBoard:
        board = cls()
        for key, color in stones.items():
            q, r = key_to_hex(key)
            cell = board.cell_at(q, r)
            if cell is None:
                raise ValueError(f"Stone at {key} is off the board")
            board.place(cell, Color(color))
        return board
