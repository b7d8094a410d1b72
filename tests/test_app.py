import numpy as np
import pygame
import pytest

from raycub.app import Game, main
from raycub.lines import Line
from raycub.movement import ROT_SPEED
from raycub.parser import parse_lines
from raycub.raycast import trgb
from raycub.scene import Element
from raycub.texture import Texture

WALL = 0x123456
SCENE_TEXT = [
    "NO ./n.xpm",
    "SO ./s.xpm",
    "WE ./w.xpm",
    "EA ./e.xpm",
    "F 10,20,30",
    "C 40,50,60",
    "11111",
    "10001",
    "10N01",
    "10001",
    "11111",
]


def make_game():
    scene = parse_lines([Line(t) for t in SCENE_TEXT])
    textures = {
        e: Texture(np.full((64, 64), WALL))
        for e in (Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST)
    }
    return Game(scene, textures, width=32, height=24)


def test_game_replaces_player_mark():
    game = make_game()
    assert game.scene.grid[2] == "10001"


def test_frame_holds_only_scene_colors():
    game = make_game()
    frame = game.frame()
    assert frame.pixels.shape == (24, 32)
    floor = trgb(0, 10, 20, 30)
    ceiling = trgb(0, 40, 50, 60)
    values = set(np.unique(frame.pixels).tolist())
    assert values <= {floor, ceiling, WALL}
    assert WALL in values
    assert ceiling not in set(np.unique(frame.pixels[12:]).tolist())


def test_escape_stops_the_game():
    game = make_game()
    assert game.handle_key(pygame.K_ESCAPE) is False
    assert game.running is False


def test_forward_key_moves_player_north():
    game = make_game()
    start = game.player.y_pixel
    assert game.handle_key(pygame.K_w) is True
    assert game.player.y_pixel < start


def test_left_arrow_turns_player():
    game = make_game()
    start = game.player.angle
    game.handle_key(pygame.K_LEFT)
    assert game.player.angle == pytest.approx(start - ROT_SPEED)


def test_unknown_key_changes_nothing():
    game = make_game()
    before = (game.player.x_pixel, game.player.y_pixel, game.player.angle)
    assert game.handle_key(pygame.K_q) is True
    assert (game.player.x_pixel, game.player.y_pixel, game.player.angle) == before


def test_frame_is_redrawn_after_move():
    game = make_game()
    first = game.frame()
    assert game.frame() is first
    game.handle_key(pygame.K_RIGHT)
    assert game.frame() is not first


@pytest.mark.parametrize(
    "args, message",
    [
        ([], "Missing map file"),
        (["a.cub", "b.cub"], "Too many arguments"),
        (["map.txt"], "Wrong map extension"),
    ],
)
def test_main_rejects_bad_arguments(args, message, capsys):
    assert main(args) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error\n")
    assert message in err


def test_main_reports_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "none.cub")]) == 1
    assert "Can not open map file" in capsys.readouterr().err


def test_main_reports_open_map(tmp_path, capsys):
    lines = []
    for prefix in ("NO", "SO", "WE", "EA"):
        texture = tmp_path / f"{prefix.lower()}.xpm"
        texture.write_text("data")
        lines.append(f"{prefix} {texture}")
    lines += ["F 1,2,3", "C 4,5,6", "1111", "1N0 ", "1111"]
    scene_file = tmp_path / "open.cub"
    scene_file.write_text("\n".join(lines) + "\n")
    assert main([str(scene_file)]) == 1
    assert "Map should be closed by char 1" in capsys.readouterr().err