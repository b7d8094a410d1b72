import numpy as np
import pytest

from raycub.scene import CubError, Element, Scene
from raycub.texture import Texture, load_textures, load_xpm, parse_xpm


def _xpm(header, colors, rows):
    body = ",\n".join(f'"{s}"' for s in [header, *colors, *rows])
    return "/* XPM */\nstatic char *img[] = {\n" + body + "\n};\n"


SAMPLE = _xpm("2 2 2 1", ["a c #FF0000", "b c #0000FF"], ["ab", "ba"])


def test_parse_sample_colors():
    tex = parse_xpm(SAMPLE)
    assert tex.width == 2
    assert tex.height == 2
    assert tex.color_at(0, 0) == 0xFF0000
    assert tex.color_at(1, 0) == 0x0000FF
    assert tex.color_at(0, 1) == tex.color_at(1, 0)
    assert tex.color_at(1, 1) == tex.color_at(0, 0)


def test_color_at_clamps_outside():
    tex = parse_xpm(SAMPLE)
    assert tex.color_at(5, 5) == tex.color_at(1, 1)
    assert tex.color_at(-3, 0) == tex.color_at(0, 0)


def test_short_and_long_hex_forms_agree():
    short = parse_xpm(_xpm("1 1 1 1", ["x c #F00"], ["x"]))
    full = parse_xpm(_xpm("1 1 1 1", ["x c #FF0000"], ["x"]))
    wide = parse_xpm(_xpm("1 1 1 1", ["x c #FFFF00000000"], ["x"]))
    assert short.color_at(0, 0) == full.color_at(0, 0)
    assert wide.color_at(0, 0) == full.color_at(0, 0)


def test_named_color_matches_hex():
    named = parse_xpm(_xpm("1 1 1 1", ["x c white"], ["x"]))
    hexed = parse_xpm(_xpm("1 1 1 1", ["x c #FFFFFF"], ["x"]))
    assert named.color_at(0, 0) == hexed.color_at(0, 0)


def test_two_chars_per_pixel_with_space_key():
    tex = parse_xpm(_xpm("2 1 2 2", ["   c #000000", "ab c #00FF00"], ["  ab"]))
    assert tex.color_at(0, 0) == 0
    assert tex.color_at(1, 0) == 0x00FF00


def test_comments_are_ignored():
    text = SAMPLE.replace("/* XPM */", '/* XPM "quoted" */')
    assert parse_xpm(text).color_at(0, 0) == parse_xpm(SAMPLE).color_at(0, 0)


@pytest.mark.parametrize(
    "text",
    [
        "nothing here",
        _xpm("2 2", [], []),
        _xpm("2 2 2 1", ["a c #FF0000", "b c #0000FF"], ["ab"]),
        _xpm("2 2 2 1", ["a c #FF0000", "b c #0000FF"], ["ab", "b"]),
        _xpm("2 2 2 1", ["a c #FF0000", "b c #0000FF"], ["ab", "bz"]),
        _xpm("1 1 1 1", ["a c nosuchcolor"], ["a"]),
        _xpm("1 1 1 1", ["a c #12"], ["a"]),
    ],
)
def test_malformed_data_raises(text):
    with pytest.raises(CubError):
        parse_xpm(text)


def test_texture_rejects_empty_pixels():
    with pytest.raises(ValueError):
        Texture(np.zeros((0, 3), dtype=np.uint32))


def test_load_xpm_round_trip(tmp_path):
    path = tmp_path / "wall.xpm"
    path.write_text(SAMPLE)
    loaded = load_xpm(path)
    assert np.array_equal(loaded.pixels, parse_xpm(SAMPLE).pixels)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(CubError):
        load_xpm(tmp_path / "absent.xpm")


def test_load_textures(tmp_path):
    paths = {}
    for i, element in enumerate((Element.NORTH, Element.SOUTH, Element.WEST, Element.EAST)):
        path = tmp_path / f"{element.name.lower()}.xpm"
        path.write_text(_xpm("1 1 1 1", [f"x c #0000{i:02X}"], ["x"]))
        paths[element] = str(path)
    textures = load_textures(Scene(textures=paths))
    assert set(textures) == set(paths)
    assert textures[Element.EAST].color_at(0, 0) == 3
    assert textures[Element.NORTH].color_at(0, 0) == 0


def test_load_textures_missing_entry():
    with pytest.raises(CubError):
        load_textures(Scene(textures={Element.NORTH: "n.xpm"}))