import pytest

from serval_engine.render_engine.css import AUTO, px
from serval_engine.render_engine.dom import Element
from serval_engine.render_engine.layout import (BoxType, LayoutBox, Rect, build_layout_tree,
                                                layout_tree, viewport)
from serval_engine.render_engine.style import StyledNode, style_tree


def block_width(width, margin_left, margin_right, containing_width=10):
    """Resolve the horizontal layout of one block and return (width, left, right)."""
    values = {"margin-left": margin_left, "margin-right": margin_right}
    if width is not None:
        values["width"] = width
    box = LayoutBox(BoxType.BLOCK, StyledNode(Element("div"), values))
    box.calculate_block_width(viewport(containing_width))
    d = box.dimensions
    return (d.content.width, d.margin.left, d.margin.right)


def lay_out(parse_doc, parse_css, document, stylesheet, width=800):
    return layout_tree(style_tree(parse_doc(document), parse_css(stylesheet)), viewport(width))


# --- Width resolution ---

@pytest.mark.parametrize("width, margin_left, margin_right, expected", [
    (px(1), px(0), px(0), (1, 0, 9)),
    (px(1), px(2), px(0), (1, 2, 7)),
    (px(1), px(2), px(10), (1, 2, 7)),
    (px(1), px(10), px(10), (1, 10, -1)),
    (px(20), px(10), px(10), (20, 10, -20)),
])
def test_over_constrained_right_margin_absorbs_difference(width, margin_left, margin_right,
                                                          expected):
    assert block_width(width, margin_left, margin_right) == expected


@pytest.mark.parametrize("margin_left, margin_right, expected", [
    (px(0), px(0), (10, 0, 0)),
    (px(1), px(0), (9, 1, 0)),
    (px(1), px(2), (7, 1, 2)),
    (px(1), px(20), (0, 1, 9)),
    (px(20), px(1), (0, 20, -10)),
])
def test_auto_width_fills_remaining_space(margin_left, margin_right, expected):
    assert block_width(AUTO, margin_left, margin_right) == expected


@pytest.mark.parametrize("width, margin_left, margin_right, expected", [
    (px(1), AUTO, px(2), (1, 7, 2)),
    (px(1), px(2), AUTO, (1, 2, 7)),
    (px(1), AUTO, AUTO, (1, 4.5, 4.5)),
    (px(11), AUTO, AUTO, (11, 0, -1)),
    (px(11), AUTO, px(1), (11, 0, -1)),
    (px(11), px(1), AUTO, (11, 1, -2)),
    (AUTO, AUTO, px(1), (9, 0, 1)),
    (AUTO, px(1), AUTO, (9, 1, 0)),
    (AUTO, px(11), AUTO, (0, 11, -1)),
    (AUTO, AUTO, px(11), (0, 0, 10)),
])
def test_auto_margins(width, margin_left, margin_right, expected):
    assert block_width(width, margin_left, margin_right) == expected


def test_unset_width_behaves_as_auto():
    assert block_width(None, px(1), px(2)) == (7, 1, 2)


def test_horizontal_edges_reduce_auto_width():
    values = {"padding": px(2), "border-width": px(1), "margin-left": px(3)}
    box = LayoutBox(BoxType.BLOCK, StyledNode(Element("div"), values))
    box.calculate_block_width(viewport(100))
    d = box.dimensions

    assert d.content.width == 91
    assert (d.padding.left, d.padding.right) == (2, 2)
    assert (d.border.left, d.border.right) == (1, 1)
    assert (d.margin.left, d.margin.right) == (3, 0)


def test_width_sum_matches_containing_block():
    """Margin box width equals the containing width in every case above."""
    for width in (AUTO, px(1), px(11), px(20)):
        for left in (AUTO, px(0), px(2), px(11)):
            for right in (AUTO, px(0), px(1), px(11)):
                content, margin_left, margin_right = block_width(width, left, right)
                assert content + margin_left + margin_right == pytest.approx(10)
                assert content >= 0


# --- Block layout ---

def test_children_stack_vertically(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(p id=foo class=bar (div) (div))",
                   "* { display: block } div { margin: 10px }")

    assert root.dimensions.content == Rect(0, 0, 800, 40)

    first, second = root.children
    assert first.dimensions.content == Rect(10, 10, 780, 0)
    assert second.dimensions.content == Rect(10, 30, 780, 0)


def test_vertical_edges_offset_content(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (p))",
                   "* { display: block } "
                   "p { margin-top: 5px; border-width: 2px; padding-top: 3px; "
                   "padding-bottom: 4px; height: 10px }")

    child = root.children[0]
    assert child.dimensions.content == Rect(2, 10, 796, 10)
    assert child.dimensions.padding.bottom == 4
    assert child.dimensions.margin_box().height == 5 + 2 + 3 + 10 + 4 + 2
    assert root.dimensions.content.height == 26


def test_padding_longhand_overrides_shorthand(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div)",
                   "div { display: block; padding: 8px; padding-top: 1px }")

    padding = root.dimensions.padding
    assert (padding.top, padding.bottom, padding.left, padding.right) == (1, 8, 8, 8)
    assert root.dimensions.content.y == 1


def test_explicit_height_overrides_children(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (p) (p))",
                   "* { display: block } p { height: 30px } div { height: 25px }")

    assert root.dimensions.content.height == 25
    assert [child.dimensions.content.y for child in root.children] == [0, 30]


def test_non_pixel_height_is_ignored(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (p))",
                   "* { display: block } p { height: 7px } div { height: auto }")

    assert root.dimensions.content.height == 7


def test_nested_padding(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (div (div)))",
                   "* { display: block; padding: 12px }")

    inner = root.children[0].children[0]
    assert inner.dimensions.content == Rect(36, 36, 728, 0)
    assert root.dimensions.content.height == 48


def test_overflowing_child_gets_negative_margin(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (p))",
                   "* { display: block } p { width: 900px; margin: auto }",
                   width=800)

    child = root.children[0].dimensions
    assert child.content.width == 900
    assert (child.margin.left, child.margin.right) == (0, -100)


def test_inline_content_takes_no_space(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   '(div "hello" (span) (p))',
                   "div, p { display: block } p { height: 10px }")

    anonymous, paragraph = root.children
    assert anonymous.box_type is BoxType.ANONYMOUS
    assert anonymous.dimensions.margin_box() == Rect(0, 0, 0, 0)
    assert all(child.dimensions.content == Rect() for child in anonymous.children)
    assert paragraph.dimensions.content == Rect(0, 0, 800, 10)
    assert root.dimensions.content.height == 10


def test_layout_returns_root_dimensions(parse_doc, parse_css):
    root = build_layout_tree(style_tree(parse_doc("(div)"), parse_css("div { display: block }")))

    dimensions = root.layout(viewport(320))

    assert dimensions is root.dimensions
    assert dimensions.content.width == 320


def test_layout_is_repeatable(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (p) (p (p)))",
                   "* { display: block; margin: 3px; padding: 2px }")
    before = [box.dimensions.copy() for box in root.walk()]

    root.layout(viewport(800))

    assert [box.dimensions for box in root.walk()] == before


def test_containing_block_height_offsets_root(parse_doc, parse_css):
    root = build_layout_tree(style_tree(parse_doc("(div)"), parse_css("div { display: block }")))

    root.layout(viewport(100, 50))

    assert root.dimensions.content.y == 50



def test_block_inside_inline_is_not_implemented(parse_doc, parse_css):
    """A block box under an inline box would be left unpositioned."""
    root = build_layout_tree(style_tree(
        parse_doc("(div (span (p)))"),
        parse_css("div, p { display: block } p { height: 10px; background: red }")))

    with pytest.raises(NotImplementedError):
        root.layout(viewport(800))


def test_block_inside_inline_deep_in_tree_is_not_implemented(parse_doc, parse_css):
    root = build_layout_tree(style_tree(
        parse_doc('(div (section (em "x" (b (p)))))'),
        parse_css("div, section, p { display: block }")))

    with pytest.raises(NotImplementedError):
        root.layout(viewport(800))


@pytest.mark.parametrize("document", ["(span)", '"text"'])
def test_layout_of_non_block_root_is_not_implemented(parse_doc, parse_css, document):
    root = build_layout_tree(style_tree(parse_doc(document), parse_css("")))

    with pytest.raises(NotImplementedError):
        root.layout(viewport(800))


def test_layout_of_anonymous_root_is_not_implemented():
    with pytest.raises(NotImplementedError):
        LayoutBox.anonymous().layout(viewport(800))


# --- Dump ---

def test_dump_nested_blocks(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css,
                   "(div (div (div (div (div (div (div)))))))",
                   "* { display: block; padding: 12px }")

    assert root.dump().splitlines() == [
        "div(block) (12, 12) [776x144] (padding: 12, border: 0, margin: 0)",
        "  div(block) (24, 24) [752x120] (padding: 12, border: 0, margin: 0)",
        "    div(block) (36, 36) [728x96] (padding: 12, border: 0, margin: 0)",
        "      div(block) (48, 48) [704x72] (padding: 12, border: 0, margin: 0)",
        "        div(block) (60, 60) [680x48] (padding: 12, border: 0, margin: 0)",
        "          div(block) (72, 72) [656x24] (padding: 12, border: 0, margin: 0)",
        "            div(block) (84, 84) [632x0] (padding: 12, border: 0, margin: 0)",
    ]


def test_dump_labels_anonymous_and_inline_boxes(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css, '(div "hi")', "div { display: block }")

    assert root.dump() == (
        "div(block) (0, 0) [800x0] (padding: 0, border: 0, margin: 0)\n"
        "  (anonymous) (0, 0) [0x0] (padding: 0, border: 0, margin: 0)\n"
        "    hi(inline) (0, 0) [0x0] (padding: 0, border: 0, margin: 0)"
    )


def test_dump_keeps_multiline_text_on_one_line(parse_doc, parse_css):
    root = lay_out(parse_doc, parse_css, '(div "a\nb\t c")', "div { display: block }")

    lines = root.dump().splitlines()
    assert len(lines) == 3
    assert lines[2] == "    a b c(inline) (0, 0) [0x0] (padding: 0, border: 0, margin: 0)"
