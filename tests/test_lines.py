import io

import pytest

from raycub.lines import (
    Line,
    LineType,
    classify_line,
    is_color_char,
    is_direction_char,
    load_lines,
    read_lines,
)
from raycub.scene import CubError


@pytest.mark.parametrize(
    "text, kind",
    [
        ("", LineType.EMPTY),
        ("   \t ", LineType.EMPTY),
        ("NO ./north.xpm", LineType.TEXTURE),
        ("  SO ./south.xpm", LineType.TEXTURE),
        ("\tWE ./west.xpm", LineType.TEXTURE),
        ("EA ./east.xpm", LineType.TEXTURE),
        ("F 220,100,0", LineType.COLOR),
        ("  C 225,30,0", LineType.COLOR),
        ("111111", LineType.MAP),
        ("   10001", LineType.MAP),
        ("0", LineType.MAP),
        ("X marks", LineType.ERROR),
        ("2222", LineType.ERROR),
    ],
)
def test_classify_line(text, kind):
    assert classify_line(text) is kind


def test_direction_and_color_chars():
    assert all(is_direction_char(c) for c in "NSWE")
    assert not any(is_direction_char(c) for c in "nFC01 ")
    assert all(is_color_char(c) for c in "FC")
    assert not any(is_color_char(c) for c in "fcNS1")


def test_line_sets_kind():
    line = Line("NO ./north.xpm")
    assert line.text == "NO ./north.xpm"
    assert line.kind is LineType.TEXTURE


def test_read_lines_drops_trailing_empty_fragment():
    text = "NO ./a.xpm\n\n111\n"
    lines = read_lines(io.StringIO(text))
    assert [line.text for line in lines] == ["NO ./a.xpm", "", "111"]
    assert [line.kind for line in lines] == [LineType.TEXTURE, LineType.EMPTY, LineType.MAP]


def test_read_lines_keeps_unterminated_last_line():
    lines = read_lines(io.StringIO("F 1,2,3\n111"))
    assert [line.text for line in lines] == ["F 1,2,3", "111"]


def test_read_lines_empty_stream():
    assert read_lines(io.StringIO("")) == []


def test_read_lines_round_trip():
    rows = ["C 0,0,0", "", "  1111", "1N01", "1111"]
    lines = read_lines(io.StringIO("\n".join(rows) + "\n"))
    assert [line.text for line in lines] == rows


def test_load_lines_from_file(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_text("NO ./n.xpm\nF 1,2,3\n\n1111\n", encoding="utf-8")
    lines = load_lines(path)
    assert [line.kind for line in lines] == [
        LineType.TEXTURE,
        LineType.COLOR,
        LineType.EMPTY,
        LineType.MAP,
    ]


def test_load_lines_missing_file(tmp_path):
    with pytest.raises(CubError):
        load_lines(tmp_path / "absent.cub")