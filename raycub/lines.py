"""Reading a scene file into classified lines."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from typing import TextIO

from .scene import CubError


class LineType(enum.Enum):
    """What a line of a scene file describes."""

    EMPTY = enum.auto()
    TEXTURE = enum.auto()
    COLOR = enum.auto()
    MAP = enum.auto()
    ERROR = enum.auto()


def is_direction_char(c: str) -> bool:
    """True for the characters that start a texture line or mark the player."""
    return c in ("N", "S", "W", "E")


def is_color_char(c: str) -> bool:
    """True for the characters that start a colour line."""
    return c in ("F", "C")


def classify_line(text: str) -> LineType:
    """Decide the kind of a line from its first non-blank character."""
    stripped = text.lstrip(" \t")
    if not stripped:
        return LineType.EMPTY
    first = stripped[0]
    if is_direction_char(first):
        return LineType.TEXTURE
    if is_color_char(first):
        return LineType.COLOR
    if first in ("0", "1", " "):
        return LineType.MAP
    return LineType.ERROR


@dataclass
class Line:
    """One line of a scene file and its kind."""

    text: str
    kind: LineType = field(init=False)

    def __post_init__(self) -> None:
        self.kind = classify_line(self.text)


def read_lines(stream: TextIO) -> list[Line]:
    """Split a stream on newlines; a trailing empty fragment is dropped."""
    try:
        data = stream.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise CubError("GNL failed") from exc
    parts = data.split("\n")
    last = parts.pop()
    if last:
        parts.append(last)
    return [Line(part) for part in parts]


def load_lines(path: str | os.PathLike[str]) -> list[Line]:
    """Read and classify every line of the scene file at ``path``."""
    try:
        stream = open(path, encoding="utf-8", newline="")
    except OSError as exc:
        raise CubError("Can not open map file") from exc
    with stream:
        return read_lines(stream)