"""Checks on the command line and on the lines of a scene file."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from .lines import Line, LineType, is_direction_char
from .scene import CubError, Element, LineError

_TEXTURES = (Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST)
_COLORS = (Element.FLOOR, Element.CEILING)

_DUPLICATE_MESSAGES = {
    Element.NORTH: "Duplicates of North textures",
    Element.SOUTH: "Duplicates of South textures",
    Element.WEST: "Duplicates of West textures",
    Element.EAST: "Duplicates of East textures",
    Element.FLOOR: "Duplicates of floor colors",
    Element.CEILING: "Duplicates of ceiling colors",
}

_MISSING_MESSAGES = {
    Element.NORTH: "North texture line is missing",
    Element.SOUTH: "South texture line is missing",
    Element.WEST: "West texture line is missing",
    Element.EAST: "East texture line is missing",
    Element.FLOOR: "Floor color line is missing",
    Element.CEILING: "Ceiling color line is missing",
}


def check_extension(filename: str, extension: str) -> bool:
    """True if ``filename`` ends with ``extension`` and has a name before it."""
    return len(filename) > len(extension) and filename.endswith(extension)


def check_arguments(args: Sequence[str]) -> str:
    """Validate the command-line arguments and return the scene path."""
    if not args:
        raise CubError("Missing map file")
    if len(args) > 1:
        raise CubError("Too many arguments")
    path = args[0]
    if not check_extension(path, ".cub"):
        raise CubError("Wrong map extension")
    return path


def has_valid_direction_syntax(text: str) -> bool:
    """True if the line starts with one of the four texture identifiers."""
    stripped = text.lstrip(" \t")
    return any(stripped.startswith(element.value) for element in _TEXTURES)


def has_valid_color_syntax(text: str) -> bool:
    """True if the line is a colour identifier followed by three values."""
    if text.count(",") != 2:
        return False
    stripped = text.lstrip(" \t")
    if not any(stripped.startswith(element.value) for element in _COLORS):
        return False
    return all(c.isascii() and c.isdigit() or c in " \t," for c in stripped[1:])


def has_valid_map_chars(text: str) -> bool:
    """True if the line holds only walls, floor, blanks and player marks."""
    return all(c in "10 " or is_direction_char(c) for c in text)


def check_syntax(lines: Sequence[Line]) -> None:
    """Raise on the first line whose content does not fit its kind."""
    if not lines:
        raise CubError("Map is empty")
    for index, line in enumerate(lines):
        if line.kind is LineType.ERROR:
            raise LineError("Syntax error in map file", index, line.text)
        if line.kind is LineType.TEXTURE and not has_valid_direction_syntax(line.text):
            raise LineError("Syntax error in texture line", index, line.text)
        if line.kind is LineType.COLOR and not has_valid_color_syntax(line.text):
            raise LineError("Syntax error in color line", index, line.text)
        if line.kind is LineType.MAP and not has_valid_map_chars(line.text):
            raise LineError(
                "Map should have only '01NSWE' chars inside the map", index, line.text
            )
    check_last_line(lines)


def check_last_line(lines: Sequence[Line]) -> None:
    """Raise unless the scene file ends with a map line."""
    if not lines:
        raise CubError("Map is empty")
    last = lines[-1]
    if not has_valid_map_chars(last.text):
        raise LineError("Last line should be a map line", len(lines) - 1, last.text)


def _element_of(text: str, candidates: Sequence[Element]) -> Element | None:
    return next((e for e in candidates if text.startswith(e.value)), None)


def check_duplicates(lines: Sequence[Line]) -> None:
    """Raise if an element is given twice or not at all."""
    counts: Counter[Element] = Counter()
    for index, line in enumerate(lines):
        if line.kind is LineType.TEXTURE:
            candidates = _TEXTURES
        elif line.kind is LineType.COLOR:
            candidates = _COLORS
        else:
            continue
        stripped = line.text.lstrip(" \t")
        element = _element_of(stripped, candidates)
        if element is None:
            continue
        counts[element] += 1
        if counts[element] > 1:
            raise LineError(_DUPLICATE_MESSAGES[element], index, stripped)
    for element in Element:
        if counts[element] == 0:
            raise CubError(_MISSING_MESSAGES[element])


def check_empty_map_lines(lines: Sequence[Line]) -> None:
    """Raise if an empty line appears once the map has started.

    The reported index counts from the first map line.
    """
    start = next(
        (i for i, line in enumerate(lines) if line.kind is LineType.MAP), len(lines)
    )
    for index, line in enumerate(lines[start:]):
        if line.kind is LineType.EMPTY:
            raise LineError("Map has an empty line", index, line.text)