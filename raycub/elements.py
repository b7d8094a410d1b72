"""Reading texture paths and colours out of the lines of a scene file."""

from __future__ import annotations

from collections.abc import Sequence

from .lines import Line
from .scene import CubError, Element, Scene


def atoi(text: str) -> int:
    """Leading spaces, any run of signs, then decimal digits; the rest is ignored."""
    rest = text.lstrip(" ")
    sign = 1
    pos = 0
    while pos < len(rest) and rest[pos] in "+-":
        if rest[pos] == "-":
            sign = -sign
        pos += 1
    result = 0
    while pos < len(rest) and "0" <= rest[pos] <= "9":
        result = result * 10 + int(rest[pos])
        pos += 1
    return sign * result


def strip_prefix(text: str, prefix: str) -> str:
    """Drop the identifier, the blanks after it and trailing spaces."""
    return text[len(prefix):].lstrip(" \t").rstrip(" ")


def count_digits(text: str) -> int:
    """Number of digits in the first number of ``text``; -1 if a second follows."""
    rest = text.lstrip(" ")
    count = 0
    while count < len(rest) and "0" <= rest[count] <= "9":
        count += 1
    rest = rest[count:].lstrip(" ")
    if rest and "0" <= rest[0] <= "9":
        return -1
    return count


def parse_rgb(text: str) -> tuple[int, int, int]:
    """Parse three comma-separated colour components in 0..255."""
    compact = text.replace(" ", "").replace("\t", "")
    words = [word for word in compact.split(",") if word]
    if len(words) < 3:
        raise CubError("Missing RGB value: need 3 parameters")
    if len(words) > 3:
        raise CubError("Need only 3 parameters")
    for word in words:
        length = count_digits(word)
        value = atoi(word)
        if length == -1:
            raise CubError("RGB value syntax error")
        if length > 3:
            raise CubError("RGB len should be max 3 chars")
        if value > 255:
            raise CubError("RGB value is too big")
    red, green, blue = (atoi(word) for word in words)
    return red, green, blue


def _prefix_text(prefix: Element | str) -> str:
    return prefix.value if isinstance(prefix, Element) else prefix


def find_texture(lines: Sequence[Line], prefix: Element | str) -> str:
    """The texture path given on the first line that starts with ``prefix``."""
    key = _prefix_text(prefix)
    for line in lines:
        trimmed = line.text.strip(" \t")
        if trimmed.startswith(key):
            return strip_prefix(trimmed, key)
    raise CubError("Error: One or more textures missing")


def find_color(
    lines: Sequence[Line], prefix: Element | str
) -> tuple[int, int, int] | None:
    """The colour given on the first line that starts with ``prefix``, if any."""
    key = _prefix_text(prefix)
    for line in lines:
        trimmed = line.text.strip(" \t")
        if trimmed.startswith(key):
            return parse_rgb(strip_prefix(trimmed, key))
    return None


def collect_elements(lines: Sequence[Line]) -> Scene:
    """A scene holding the four textures and the floor and ceiling colours."""
    textures = {
        element: find_texture(lines, element)
        for element in (Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST)
    }
    floor = find_color(lines, Element.FLOOR) or (0, 0, 0)
    ceiling = find_color(lines, Element.CEILING) or (0, 0, 0)
    return Scene(textures=textures, floor=floor, ceiling=ceiling)