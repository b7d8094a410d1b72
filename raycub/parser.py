"""Turning a scene file into a checked scene."""

from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from pathlib import Path

from .elements import collect_elements
from .grid import build_grid, check_closed, count_players, direction_radian, find_player, map_size
from .lines import Line, load_lines
from .scene import CubError, Element, Scene
from .validate import check_duplicates, check_empty_map_lines, check_extension, check_syntax

_WALLS = (Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST)

_NAMES = {
    Element.NORTH: "North",
    Element.SOUTH: "South",
    Element.WEST: "West",
    Element.EAST: "East",
}


def check_map_file(path: str | os.PathLike[str]) -> Path:
    """Raise unless ``path`` is a readable file; return it as a Path."""
    map_path = Path(path)
    if map_path.is_dir():
        raise CubError("Map is  directory and not a file")
    try:
        with open(map_path, "rb"):
            pass
    except OSError as exc:
        raise CubError("Can not open map file") from exc
    return map_path


def check_texture_extensions(textures: Mapping[Element, str]) -> None:
    """Raise if a wall texture path does not end in ``.xpm``."""
    for element in (Element.SOUTH, Element.NORTH, Element.WEST, Element.EAST):
        if not check_extension(textures.get(element, ""), ".xpm"):
            raise CubError(f"{_NAMES[element]} texture must have .xpm extension")


def check_texture_files(textures: Mapping[Element, str]) -> None:
    """Raise if a wall texture is a directory or cannot be opened."""
    for element in _WALLS:
        if os.path.isdir(textures.get(element, "")):
            raise CubError(f"{_NAMES[element]} texture is directory")
    for element in _WALLS:
        try:
            with open(textures.get(element, ""), "rb"):
                pass
        except OSError as exc:
            raise CubError(f"Can't open {_NAMES[element]} texture") from exc


def _read_scene(lines: Sequence[Line]) -> Scene:
    check_syntax(lines)
    check_duplicates(lines)
    check_empty_map_lines(lines)
    scene = collect_elements(lines)
    scene.grid = build_grid(lines)
    scene.height, scene.width = map_size(scene.grid)
    player = find_player(scene.grid)
    if player is not None:
        scene.player_x, scene.player_y, scene.player_direction = player
        scene.player_direction_radian = direction_radian(scene.player_direction)
    return scene


def _check_map(scene: Scene) -> None:
    count_players(scene.grid)
    check_closed(scene.grid)


def parse_lines(lines: Sequence[Line]) -> Scene:
    """Check the lines of a scene file and build the scene, without touching files."""
    scene = _read_scene(lines)
    check_texture_extensions(scene.textures)
    _check_map(scene)
    return scene


def parse_scene(path: str | os.PathLike[str]) -> Scene:
    """Read, check and build the scene stored at ``path``."""
    map_path = check_map_file(path)
    lines = load_lines(map_path)
    scene = _read_scene(lines)
    check_texture_extensions(scene.textures)
    check_texture_files(scene.textures)
    _check_map(scene)
    return scene