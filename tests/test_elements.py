from __future__ import annotations

import itertools

import pytest

import config
from elements import create_block, grow_box, move_box, normalize_box, resize_box
from geometry import BOTTOM_LEFT, BOTTOM_RIGHT, HANDLES, INSIDE, TOP_LEFT, TOP_RIGHT
from model import TEXT, Block, Box, InvalidStyleError, TextStyle, UnknownBlockTypeError

BOX = Box(50, 40, 100, 60)

OPPOSITE = {
    TOP_LEFT: (BOX.right, BOX.bottom),
    TOP_RIGHT: (BOX.left, BOX.bottom),
    BOTTOM_LEFT: (BOX.right, BOX.top),
    BOTTOM_RIGHT: (BOX.left, BOX.top),
}


def test_create_block_defaults() -> None:
    block = create_block((10, 20), (50, 24), "text")

    assert block.kind == TEXT
    assert block.text == ""
    assert block.box == Box(10, 20, 50, 24)
    assert block.style.font_size == config.DEFAULT_FONT_SIZE
    assert block.style.font_family == config.DEFAULT_FONT
    assert block.style.align == config.DEFAULT_ALIGN
    assert block.style.vertical_align == config.DEFAULT_VERTICAL_ALIGN


def test_create_block_ids_are_unique() -> None:
    ids = {create_block((0, 0)).id for _ in range(200)}
    assert len(ids) == 200


def test_create_block_rejects_unknown_tool() -> None:
    with pytest.raises(UnknownBlockTypeError):
        create_block((0, 0), (10, 10), "ellipse")


def test_block_construction_rejects_unknown_type() -> None:
    with pytest.raises(UnknownBlockTypeError) as excinfo:
        Block(id="b1", kind="circle", box=Box(0, 0, 1, 1))
    assert excinfo.value.kind == "circle"


@pytest.mark.parametrize(
    "style",
    [
        {"align": "justify"},
        {"vertical_align": "middle"},
        {"color": "not-a-colour"},
        {"font_size": 0},
        {"font_size": -3},
    ],
)
def test_invalid_style_is_rejected(style: dict[str, str]) -> None:
    with pytest.raises(InvalidStyleError):
        TextStyle(**style)


def test_resize_bottom_right_keeps_origin() -> None:
    assert resize_box(BOX, BOTTOM_RIGHT, (200, 150)) == Box(50, 40, 150, 110)


def test_resize_top_left_keeps_bottom_right() -> None:
    assert resize_box(BOX, TOP_LEFT, (30, 20)) == Box(30, 20, 120, 80)


def test_resize_top_right_keeps_bottom_left() -> None:
    assert resize_box(BOX, TOP_RIGHT, (170, 30)) == Box(50, 30, 120, 70)


def test_resize_bottom_left_keeps_top_right() -> None:
    assert resize_box(BOX, BOTTOM_LEFT, (60, 120)) == Box(60, 40, 90, 80)


def test_resize_with_non_handle_hit_is_noop() -> None:
    assert resize_box(BOX, INSIDE, (0, 0)) is BOX


@pytest.mark.parametrize(
    ("handle", "point"),
    list(itertools.product(HANDLES, [(0, 0), (75, 70), (300, 10), (10, 300), (260, 220), (50, 40), (150, 100)])),
)
def test_resize_then_normalize_keeps_opposite_corner(handle: str, point: tuple[float, float]) -> None:
    result = normalize_box(resize_box(BOX, handle, point))
    fixed = OPPOSITE[handle]

    assert result.width >= 0
    assert result.height >= 0
    assert fixed in result.corners()
    assert result.width * result.height == abs(point[0] - fixed[0]) * abs(point[1] - fixed[1])


def test_normalize_inverted_box() -> None:
    assert normalize_box(Box(100, 80, -40, -30)) == Box(60, 50, 40, 30)


def test_normalize_keeps_normal_box() -> None:
    assert normalize_box(BOX) == BOX


def test_normalize_preserves_corner_positions() -> None:
    inverted = Box(10, 90, 30, -50)
    assert set(normalize_box(inverted).corners()) == set(inverted.corners())


def test_move_box_translates_by_offset() -> None:
    assert move_box(BOX, (80, 90), (5, 10)) == Box(75, 80, 100, 60)


def test_grow_box_moves_far_corner() -> None:
    assert grow_box(Box(10, 10, 50, 24), (110, 60)) == Box(10, 10, 100, 50)
