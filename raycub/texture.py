"""Wall textures loaded from XPM images."""

from __future__ import annotations

import os
import re
import string
from dataclasses import dataclass

import numpy as np

from .scene import CubError, Element, Scene

TRANSPARENT = 0xFF000000
"""Pixel value given to the ``None`` colour of an XPM image."""

_WALLS = (Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST)
_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_COMMENT = re.compile(r"/\*.*?\*/", re.S)
_KEYS = ("c", "g", "g4", "m", "s")
_COLOR_KEYS = ("c", "g", "g4", "m")

_NAMED = {
    "black": 0x000000,
    "white": 0xFFFFFF,
    "red": 0xFF0000,
    "green": 0x00FF00,
    "blue": 0x0000FF,
    "yellow": 0xFFFF00,
    "cyan": 0x00FFFF,
    "magenta": 0xFF00FF,
    "gray": 0xBEBEBE,
    "grey": 0xBEBEBE,
}


@dataclass(eq=False)
class Texture:
    """An image as rows of 32-bit pixel values."""

    pixels: np.ndarray

    def __post_init__(self) -> None:
        self.pixels = np.asarray(self.pixels, dtype=np.uint32)
        if self.pixels.ndim != 2 or 0 in self.pixels.shape:
            raise ValueError("texture pixels must be a non-empty 2-D array")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def color_at(self, x: int, y: int) -> int:
        """The pixel at column ``x`` and row ``y``, clamped into the image."""
        col = min(max(int(x), 0), self.width - 1)
        row = min(max(int(y), 0), self.height - 1)
        return int(self.pixels[row, col])


def _color_value(name: str) -> int:
    if name.startswith("#"):
        digits = name[1:]
        if (
            not digits
            or len(digits) % 3
            or len(digits) > 12
            or any(c not in string.hexdigits for c in digits)
        ):
            raise CubError(f"Unknown XPM color {name!r}")
        per = len(digits) // 3
        components = []
        for i in range(3):
            part = digits[i * per:(i + 1) * per]
            components.append(int(part, 16) * 17 if per == 1 else int(part[:2], 16))
        red, green, blue = components
        return red << 16 | green << 8 | blue
    key = name.lower().replace(" ", "")
    if key == "none":
        return TRANSPARENT
    try:
        return _NAMED[key]
    except KeyError:
        raise CubError(f"Unknown XPM color {name!r}") from None


def _parse_color_spec(spec: str) -> int:
    values: dict[str, list[str]] = {}
    current: str | None = None
    for token in spec.split():
        if token in _KEYS and (current is None or values[current]):
            current = token
            values[current] = []
        elif current is None:
            raise CubError(f"Malformed XPM color entry {spec!r}")
        else:
            values[current].append(token)
    for key in _COLOR_KEYS:
        if values.get(key):
            return _color_value(" ".join(values[key]))
    raise CubError(f"Malformed XPM color entry {spec!r}")


def parse_xpm(text: str) -> Texture:
    """Decode the text of an XPM image."""
    strings = _STRING.findall(_COMMENT.sub("", text))
    if not strings:
        raise CubError("XPM data has no header")
    try:
        values = [int(v) for v in strings[0].split()]
    except ValueError:
        raise CubError("Malformed XPM header") from None
    if len(values) < 4:
        raise CubError("Malformed XPM header")
    width, height, ncolors, cpp = values[:4]
    if min(width, height, ncolors, cpp) <= 0:
        raise CubError("Malformed XPM header")
    color_lines = strings[1:1 + ncolors]
    rows = strings[1 + ncolors:1 + ncolors + height]
    if len(color_lines) < ncolors or len(rows) < height:
        raise CubError("Truncated XPM data")
    palette = {}
    for entry in color_lines:
        if len(entry) < cpp:
            raise CubError(f"Malformed XPM color entry {entry!r}")
        palette[entry[:cpp]] = _parse_color_spec(entry[cpp:])
    pixels = np.empty((height, width), dtype=np.uint32)
    for y, row in enumerate(rows):
        if len(row) < width * cpp:
            raise CubError(f"XPM row {y} is too short")
        try:
            pixels[y] = [palette[row[i:i + cpp]] for i in range(0, width * cpp, cpp)]
        except KeyError as exc:
            raise CubError(f"XPM pixel uses undefined color {exc.args[0]!r}") from None
    return Texture(pixels)


def load_xpm(path: str | os.PathLike[str]) -> Texture:
    """Read and decode the XPM image at ``path``."""
    try:
        with open(path, encoding="latin-1") as stream:
            text = stream.read()
    except OSError as exc:
        raise CubError(f"Can not load texture {os.fspath(path)}") from exc
    return parse_xpm(text)


def load_textures(scene: Scene) -> dict[Element, Texture]:
    """Load the four wall textures named by ``scene``."""
    textures = {}
    for element in _WALLS:
        path = scene.textures.get(element)
        if path is None:
            raise CubError("Error: One or more textures missing")
        textures[element] = load_xpm(path)
    return textures