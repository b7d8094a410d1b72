"""Building the map grid and checking the player and the walls around it."""

from __future__ import annotations

import math
from collections.abc import Sequence

from .lines import Line, LineType, is_direction_char
from .scene import MapError

_CLOSED_MESSAGE = "Map should be closed by char 1"

_RADIANS = {
    "N": math.pi / 2,
    "S": 3 * (math.pi / 2),
    "W": math.pi,
    "E": 0.0,
}


def map_lines(lines: Sequence[Line]) -> list[str]:
    """The texts of every line from the first map line to the end."""
    start = next(
        (i for i, line in enumerate(lines) if line.kind is LineType.MAP), len(lines)
    )
    return [line.text for line in lines[start:]]


def map_size(rows: Sequence[str]) -> tuple[int, int]:
    """Height and width of the map: row count and longest row."""
    return len(rows), max((len(row) for row in rows), default=0)


def build_grid(lines: Sequence[Line]) -> list[str]:
    """The map rows, each padded with spaces to the width of the longest."""
    rows = map_lines(lines)
    _, width = map_size(rows)
    return [row.ljust(width) for row in rows]


def direction_radian(c: str) -> float:
    """The facing angle, in radians, of a player mark."""
    try:
        return _RADIANS[c]
    except KeyError:
        raise ValueError(f"not a player direction: {c!r}") from None


def find_player(grid: Sequence[str]) -> tuple[int, int, str] | None:
    """Column, row and mark of the last player mark in the grid, if any."""
    found = None
    for y, row in enumerate(grid):
        for x, c in enumerate(row):
            if is_direction_char(c):
                found = (x, y, c)
    return found


def count_players(grid: Sequence[str]) -> int:
    """Raise unless the grid holds exactly one player mark; return that count."""
    players = sum(1 for row in grid for c in row if is_direction_char(c))
    if players == 0:
        raise MapError("No player position found in the map")
    if players > 1:
        raise MapError("Multiple player positions found in the map")
    return players


def find_start_point(grid: Sequence[str]) -> tuple[int, int]:
    """Column and row of the first player mark, scanning row by row."""
    for y, row in enumerate(grid):
        for x, c in enumerate(row):
            if c in ("N", "S", "E", "W"):
                return x, y
    raise MapError("No player position found in the map")


def check_closed(grid: Sequence[str]) -> set[tuple[int, int]]:
    """Flood the map from the player; raise if the flood escapes the walls.

    Returns the cells the player can reach.
    """
    height, width = map_size(grid)
    start = find_start_point(grid)
    filled: set[tuple[int, int]] = set()
    stack = [start]
    while stack:
        x, y = stack.pop()
        if x < 0 or y < 0 or x >= width or y >= height:
            raise MapError(_CLOSED_MESSAGE, list(grid), y)
        row = grid[y]
        c = row[x] if x < len(row) else " "
        if c == " ":
            raise MapError(_CLOSED_MESSAGE, list(grid), y)
        if c == "1" or (x, y) in filled:
            continue
        filled.add((x, y))
        # Pushed in reverse so that the right neighbour is explored first.
        stack.extend([(x, y - 1), (x, y + 1), (x - 1, y), (x + 1, y)])
    return filled