import pytest
from PIL import Image

from serval_engine.render_engine.css import Color
from serval_engine.render_engine.layout import LayoutBox, Rect, layout_tree, viewport
from serval_engine.render_engine.rendering import (PixelCanvas, SolidColor, WebCanvas,
                                                   build_display_list, create_canvas,
                                                   format_for_path)
from serval_engine.render_engine.rendering.renderer import get_color
from serval_engine.render_engine.style import style_tree

RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)
BLACK = Color(0, 0, 0)

STYLESHEET = """
div { display: block; background: #ff0000; padding: 10px }
p { display: block; height: 20px; border-width: 2px; border-color: #0000ff }
"""


@pytest.fixture
def laid_out(parse_doc, parse_css):
    return layout_tree(style_tree(parse_doc("(div (p))"), parse_css(STYLESHEET)), viewport(100))


# --- Display list ---

def test_display_list_background_then_borders(laid_out):
    assert build_display_list(laid_out) == [
        SolidColor(RED, Rect(0, 0, 100, 44)),
        SolidColor(BLUE, Rect(10, 10, 2, 24)),
        SolidColor(BLUE, Rect(88, 10, 2, 24)),
        SolidColor(BLUE, Rect(10, 10, 80, 2)),
        SolidColor(BLUE, Rect(10, 32, 80, 2)),
    ]


def test_anonymous_and_uncolored_boxes_paint_nothing(parse_doc, parse_css):
    root = layout_tree(style_tree(parse_doc('(div "text")'),
                                  parse_css("div { display: block; background: auto }")),
                       viewport(100))

    assert build_display_list(root) == []
    assert get_color(LayoutBox.anonymous(), "background") is None


# --- Pixel canvas ---

def test_pixel_canvas_paints_boxes(laid_out):
    canvas = PixelCanvas(100, 50)
    canvas.paint(laid_out)

    assert canvas.get_pixel(5, 5) == RED
    assert canvas.get_pixel(99, 0) == RED
    assert canvas.get_pixel(10, 20) == BLUE
    assert canvas.get_pixel(89, 20) == BLUE
    assert canvas.get_pixel(50, 20) == RED
    assert canvas.get_pixel(50, 44) == BLACK


def test_pixel_canvas_clamps_to_bounds():
    canvas = PixelCanvas(10, 10)
    canvas.paint_item(SolidColor(RED, Rect(-5, -5, 8, 8)))
    canvas.paint_item(SolidColor(BLUE, Rect(8, 8, 50, 50)))
    canvas.paint_item(SolidColor(BLUE, Rect(3, 3, 0, 4)))

    assert canvas.get_pixel(0, 0) == RED
    assert canvas.get_pixel(2, 2) == RED
    assert canvas.get_pixel(3, 3) == BLACK
    assert canvas.get_pixel(9, 9) == BLUE


def test_pixel_canvas_save_as_png(laid_out, tmp_path):
    canvas = PixelCanvas(100, 50)
    canvas.paint(laid_out)
    path = tmp_path / "out.png"

    canvas.save_as(str(path))

    with Image.open(path) as image:
        assert image.format == "PNG"
        assert image.size == (100, 50)
        assert image.convert("RGB").getpixel((5, 5)) == (255, 0, 0)


# --- Web canvas ---

def test_web_canvas_commands():
    canvas = WebCanvas(20, 10)
    canvas.paint_item(SolidColor(Color(1, 2, 3), Rect(0, 0, 10, 5.5)))

    assert canvas.commands == [
        "ctx.fillStyle = 'rgb(1, 2, 3)';",
        "ctx.fillRect(0, 0, 10, 5.5);",
    ]
    html = canvas.to_html()
    assert '<canvas id="canvas" width="20" height="10"></canvas>' in html
    assert "ctx.fillRect(0, 0, 10, 5.5);" in html


def test_web_canvas_save_as(laid_out, tmp_path):
    canvas = WebCanvas(100, 50)
    canvas.paint(laid_out)
    path = tmp_path / "out.html"

    canvas.save_as(str(path))

    text = path.read_text(encoding="utf-8")
    assert text.startswith("<!doctype html>")
    assert text.count("ctx.fillRect(") == 5


# --- Canvas selection ---

def test_create_canvas():
    assert isinstance(create_canvas("png", 4, 4), PixelCanvas)
    assert isinstance(create_canvas("canvas", 4, 4), WebCanvas)
    with pytest.raises(ValueError):
        create_canvas("svg", 4, 4)


def test_format_for_path():
    assert format_for_path("page.html") == "canvas"
    assert format_for_path("PAGE.HTM") == "canvas"
    assert format_for_path("out.png") == "png"
    assert format_for_path("out", default="canvas") == "canvas"
