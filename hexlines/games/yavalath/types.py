"""Domain constants for Yavalath."""

from __future__ import annotations

from enum import Enum


class Color(str, Enum):
    B = "B"  # black, always moves first
    W = "W"  # white
    G = "G"  # grey, 3-player games only


# Cells per row, top to bottom; row 4 is the widest (centre) row
ROW_SIZES: tuple[int, ...] = (5, 6, 7, 8, 9, 8, 7, 6, 5)
CENTER_ROW = 4
CENTER: tuple[int, int] = (4, 0)

# Axial hex directions: the 6 neighbors of (q, r)
HEX_DIRECTIONS: list[tuple[int, int]] = [
    (1, 0), (-1, 0), (0, 1), (0, -1), (1, -1), (-1, 1),
]

Axis = tuple[tuple[int, int], tuple[int, int]]

# Opposite pairs of HEX_DIRECTIONS; together they cover all 6 neighbors
AXES: tuple[Axis, ...] = (
    (HEX_DIRECTIONS[0], HEX_DIRECTIONS[1]),
    (HEX_DIRECTIONS[2], HEX_DIRECTIONS[3]),
    (HEX_DIRECTIONS[4], HEX_DIRECTIONS[5]),
)

LOSING_RUN = 3
WINNING_RUN = 4

_PLAYER_COLORS: dict[int, tuple[Color, ...]] = {
    2: (Color.B, Color.W),
    3: (Color.B, Color.W, Color.G),
}


def player_colors(player_count: int) -> tuple[Color, ...]:
    """Seat colors in turn order for a 2- or 3-player game."""
    try:
        return _PLAYER_COLORS[player_count]
    except KeyError:
        raise ValueError(f"Yavalath supports 2 or 3 players, got {player_count}") from None


def next_color(current: Color, player_count: int) -> Color:
    colors = player_colors(player_count)
    return colors[(colors.index(current) + 1) % len(colors)]


def opponents(color: Color, player_count: int) -> list[Color]:
    """Every other seat color, in fixed turn order."""
    return [c for c in player_colors(player_count) if c != color]


def hex_to_key(q: int, r: int) -> str:
    return f"{q},{r}"


def key_to_hex(key: str) -> tuple[int, int]:
    q, r = key.split(",")
    return int(q), int(r)
