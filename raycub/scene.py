"""Scene description and the errors raised while building it."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

RED = "\033[1;31m"
YELLOW = "\033[1;33m"
RESET = "\033[0m"


class Element(enum.Enum):
    """Scene elements, each identified by the prefix of its line."""

    NORTH = "NO "
    SOUTH = "SO "
    WEST = "WE "
    EAST = "EA "
    FLOOR = "F "
    CEILING = "C "


@dataclass
class Scene:
    """Everything a scene file describes: textures, colours and the map."""

    grid: list[str] = field(default_factory=list)
    height: int = 0
    width: int = 0
    floor: tuple[int, int, int] = (0, 0, 0)
    ceiling: tuple[int, int, int] = (0, 0, 0)
    textures: dict[Element, str] = field(default_factory=dict)
    player_x: int = 0
    player_y: int = 0
    player_direction: str = ""
    player_direction_radian: float = 0.0


class CubError(Exception):
    """A scene file or its resources cannot be used."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class LineError(CubError):
    """An error tied to one line of the scene file."""

    def __init__(self, message: str, index: int, line: str) -> None:
        super().__init__(message)
        self.index = index
        self.line = line

    def __str__(self) -> str:
        return f"{self.message}\n[{self.index}] [{self.line}]"


class MapError(CubError):
    """An error tied to a row of the map grid."""

    def __init__(self, message: str, grid: list[str] | None = None, row: int = 0) -> None:
        super().__init__(message)
        self.grid = list(grid or [])
        self.row = row

    def _listing(self, colored: bool) -> list[str]:
        if self.row == 0:
            return []
        red, yellow, reset = (RED, YELLOW, RESET) if colored else ("", "", "")
        row = self.row
        height = len(self.grid)
        out = []
        for j, text in enumerate(self.grid):
            if j == row - 1 and row - 1 > 0:
                out.append(f"[{j}] {yellow}[{text}]{reset}")
            elif j == row:
                out.append(f"[{j}] {red}[{text}]{reset}")
            elif j == row + 1 and row + 1 < height:
                out.append(f"[{j}] {yellow}[{text}]{reset}")
            else:
                out.append(f"[{j}] [{text}]")
        return out

    def render(self) -> str:
        """The map listing with the faulty row and its neighbours highlighted."""
        return "\n".join(self._listing(colored=True))

    def __str__(self) -> str:
        listing = self._listing(colored=False)
        if not listing:
            return self.message
        return "\n".join([self.message, *listing])