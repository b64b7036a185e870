import logging
from pathlib import Path

import pytest

from bmpcanvas.color import BLACK, BLUE, RED, WHITE, from_rgb
from bmpcanvas.image import BmpImage
from bmpcanvas.scene import SceneError, ScenePainter, blend, load_scene, render_scene


@pytest.fixture
def painter():
    return ScenePainter(BmpImage(8, 6))


class TestScenePainter:
    def test_pixel(self, painter):
        assert painter.add_text_command("pixel 2 3 red")
        assert painter.image.get_pixel(2, 3) == RED

    def test_line(self, painter):
        assert painter.add_text_command("line 0 0 4 0 0xFF0000FF")
        assert [painter.image.get_pixel(x, 0) for x in range(6)] == [BLUE] * 5 + [WHITE]

    def test_circle(self, painter):
        assert painter.add_text_command("circle 3 3 0 #000000")
        assert painter.image.get_pixel(3, 3) == BLACK

    def test_clear(self, painter):
        assert painter.add_text_command("clear black")
        assert set(painter.image.canvas.array) == {BLACK}

    def test_hgradient(self, painter):
        assert painter.add_text_command("hgradient #000000 #ff0000")
        image = painter.image
        assert image.get_pixel(0, 5) == from_rgb(0, 0, 0)
        assert image.get_pixel(7, 0) == from_rgb(255, 0, 0)
        reds = [image.get_pixel(x, 2) >> 16 & 0xFF for x in range(8)]
        assert reds == sorted(reds)

    def test_vgradient(self, painter):
        assert painter.add_text_command("vgradient white black")
        image = painter.image
        assert all(image.get_pixel(x, 0) == WHITE for x in range(8))
        assert all(image.get_pixel(x, 5) == BLACK for x in range(8))

    def test_unknown_command(self, painter, caplog):
        with caplog.at_level(logging.WARNING):
            assert not painter.add_text_command("polygon 1 2 3")
        assert "polygon" in caplog.text
        assert not painter.add_text_command("   ")

    @pytest.mark.parametrize(
        "command", ["line 0 0 1", "pixel a b red", "circle 1 1 -2 red", "pixel 1 1 mauve"]
    )
    def test_bad_arguments(self, painter, command):
        with pytest.raises(SceneError):
            painter.add_text_command(command)

    def test_paint_counts_drawn(self, painter):
        assert painter.paint(["pixel 0 0 red", "nope", "line 0 0 1 1 blue"]) == 2


def test_blend():
    assert blend(0x00000000, 0xFFFFFFFF, 0, 3) == 0
    assert blend(0x00000000, 0xFFFFFFFF, 1, 3) == 0x7F7F7F7F
    assert blend(0x00000000, 0xFFFFFFFF, 2, 3) == 0xFFFFFFFF
    assert blend(RED, BLUE, 0, 1) == RED


SCENE = """\
width: 20
height: 10
background: 0xFF000000
horizontal_ppm: 3780
commands:
  - line 0 0 19 9 red
  - circle 10 5 3 0xFF00FF00
  - pixel 19 0 blue
"""


def test_load_and_render(tmp_path: Path):
    path = tmp_path / "scene.yaml"
    path.write_text(SCENE)

    image = render_scene(load_scene(path))

    assert (image.width, image.height) == (20, 10)
    assert image.info.horizontal_ppm == 3780
    assert image.info.vertical_ppm == 2835
    assert image.get_pixel(0, 0) == RED
    assert image.get_pixel(19, 0) == BLUE
    assert image.get_pixel(13, 5) == 0xFF00FF00
    assert image.get_pixel(0, 9) == BLACK


def test_render_overrides(tmp_path: Path):
    path = tmp_path / "scene.yaml"
    path.write_text(SCENE)

    image = render_scene(load_scene(path), width=5, height=None, background="white")

    assert (image.width, image.height) == (5, 10)
    assert image.get_pixel(4, 9) == WHITE


def test_render_missing_size():
    with pytest.raises(SceneError):
        render_scene({"height": 3})


def test_load_scene_not_mapping(tmp_path: Path):
    path = tmp_path / "scene.yaml"
    path.write_text("- line 0 0 1 1 red\n")
    with pytest.raises(SceneError):
        load_scene(path)


@pytest.mark.parametrize(
    "text",
    [
        "width: 4\nheight: 4\nbackground: #336699\n",
        "width: 4\nheight: 4\nbackground:\n",
        "width: null\nheight: 3\n",
        "width: four\nheight: 3\n",
        "width: 4\nheight: 4\nbackground: [1, 2]\n",
    ],
)
def test_render_bad_settings(tmp_path: Path, text):
    path = tmp_path / "scene.yaml"
    path.write_text(text)
    with pytest.raises(SceneError):
        render_scene(load_scene(path))


def test_render_quoted_hex_background(tmp_path: Path):
    path = tmp_path / "scene.yaml"
    path.write_text('width: 2\nheight: 2\nbackground: "#336699"\n')
    assert render_scene(load_scene(path)).get_pixel(1, 1) == 0xFF336699
