"""Player spawning, walking and turning on the map grid."""

from __future__ import annotations

import enum
import math
from collections.abc import Sequence

from .raycast import CELL_SIZE, Player
from .scene import MapError, Scene

MOV_SPEED = 8
ROT_SPEED = 0.05

_TWO_PI = 2 * math.pi

_SPAWN_ANGLES = {
    "N": 3 * math.pi / 2,
    "S": math.pi / 2,
    "W": math.pi,
    "E": 0.0,
}


class Move(enum.Enum):
    """What the player can do in one step."""

    FORWARD = "W"
    BACKWARD = "S"
    STRAFE_LEFT = "A"
    STRAFE_RIGHT = "D"
    TURN_LEFT = "L"
    TURN_RIGHT = "R"

    @property
    def is_turn(self) -> bool:
        return self in (Move.TURN_LEFT, Move.TURN_RIGHT)


def spawn_angle(c: str) -> float | None:
    """The screen angle a player mark faces, or None if ``c`` is not a mark."""
    return _SPAWN_ANGLES.get(c)


def player_from_grid(grid: Sequence[str]) -> tuple[Player, list[str]]:
    """Place the player on the first mark of the grid.

    Returns the player, standing in the middle of its cell, and a copy of the
    grid in which the mark has become floor.
    """
    for y, row in enumerate(grid):
        for x, c in enumerate(row):
            angle = spawn_angle(c)
            if angle is None:
                continue
            rows = list(grid)
            rows[y] = row[:x] + "0" + row[x + 1:]
            player = Player(
                x_pixel=(x + 0.5) * CELL_SIZE,
                y_pixel=(y + 0.5) * CELL_SIZE,
                angle=angle,
            )
            return player, rows
    raise MapError("No player position found in the map")


def movement_vector(angle: float) -> tuple[float, float]:
    """One step of length MOV_SPEED in the direction ``angle``."""
    return math.cos(angle) * MOV_SPEED, math.sin(angle) * MOV_SPEED


def target_position(player: Player, move: Move) -> tuple[float, float]:
    """Where a walking move would take the player."""
    dx, dy = movement_vector(player.angle)
    x, y = player.x_pixel, player.y_pixel
    if move is Move.FORWARD:
        return x + dx, y + dy
    if move is Move.BACKWARD:
        return x - dx, y - dy
    if move is Move.STRAFE_LEFT:
        return x + dy, y - dx
    if move is Move.STRAFE_RIGHT:
        return x - dy, y + dx
    raise ValueError(f"{move.name} does not change the position")


def is_within_map(scene: Scene, position: tuple[float, float]) -> bool:
    """True if the pixel position lies on the map."""
    x, y = position
    return not (
        y < 0
        or x < 0
        or y / CELL_SIZE > scene.height
        or x / CELL_SIZE > scene.width
    )


def _cell_index(pixel: float) -> int:
    return int(int(pixel) / CELL_SIZE)


def _is_wall(grid: Sequence[str], row: int, col: int) -> bool:
    if row < 0 or row >= len(grid):
        return True
    line = grid[row]
    if col < 0 or col >= len(line):
        return True
    return line[col] == "1"


def can_move_to(grid: Sequence[str], player: Player, position: tuple[float, float]) -> bool:
    """True if no wall blocks the step from the player to ``position``."""
    new_x, new_y = position
    row = _cell_index(new_y)
    col = _cell_index(new_x)
    if _is_wall(grid, row, col):
        return False
    if _is_wall(grid, _cell_index(player.y_pixel), col):
        return False
    if _is_wall(grid, row, _cell_index(player.x_pixel)):
        return False
    if player.y_pixel - new_y > 0 and _is_wall(grid, int((int(new_y) - 1) / CELL_SIZE), col):
        return False
    if player.x_pixel - new_x > 0 and _is_wall(grid, row, int((int(new_x) - 1) / CELL_SIZE)):
        return False
    return True


def _turn(player: Player, move: Move) -> None:
    if move is Move.TURN_RIGHT:
        player.angle += ROT_SPEED
    else:
        player.angle -= ROT_SPEED
    if player.angle < 0:
        player.angle += _TWO_PI
    elif player.angle > _TWO_PI:
        player.angle -= _TWO_PI


def apply_move(scene: Scene, player: Player, move: Move) -> bool:
    """Turn or walk the player; return whether anything changed."""
    if move.is_turn:
        _turn(player, move)
        return True
    position = target_position(player, move)
    if not is_within_map(scene, position):
        return False
    if not can_move_to(scene.grid, player, position):
        return False
    player.x_pixel, player.y_pixel = position
    return True