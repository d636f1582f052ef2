from __future__ import annotations

import pytest

from model import Box
from scaling import scale_blocks, scale_ratios


def test_ratios() -> None:
    assert scale_ratios((500, 500), (1000, 750)) == (2.0, 1.5)


def test_scales_block_to_larger_canvas(make_block) -> None:
    block = make_block(100, 100, 50, 20, text="Name", font_size=24)

    (scaled,) = scale_blocks([block], (500, 500), (1000, 750))

    assert scaled.box == Box(200, 150, 100, 30)
    assert scaled.style.font_size == 48
    assert scaled.id == block.id
    assert scaled.text == "Name"


def test_other_style_fields_are_kept(make_block) -> None:
    block = make_block(0, 0, 10, 10, color="#123456", align="center", vertical_align="bottom")

    (scaled,) = scale_blocks([block], (800, 600), (400, 300))

    assert scaled.style.color == "#123456"
    assert scaled.style.align == "center"
    assert scaled.style.vertical_align == "bottom"


def test_order_and_count_are_preserved(make_block) -> None:
    blocks = [make_block(i * 10, i * 5, 20, 20) for i in range(6)]

    scaled = scale_blocks(blocks, (800, 600), (1000, 750))

    assert [b.id for b in scaled] == [b.id for b in blocks]


def test_scaling_composes(make_block) -> None:
    block = make_block(37, 81, 123, 45, font_size=17)

    twice = scale_blocks(scale_blocks([block], (500, 500), (800, 600)), (800, 600), (1000, 750))
    once = scale_blocks([block], (500, 500), (1000, 750))

    assert twice[0].box.x == pytest.approx(once[0].box.x)
    assert twice[0].box.y == pytest.approx(once[0].box.y)
    assert twice[0].box.width == pytest.approx(once[0].box.width)
    assert twice[0].box.height == pytest.approx(once[0].box.height)
    assert twice[0].style.font_size == pytest.approx(once[0].style.font_size)


def test_round_trip_restores_layout(make_block) -> None:
    block = make_block(37, 81, 123, 45, font_size=17)

    (back,) = scale_blocks(scale_blocks([block], (800, 600), (500, 500)), (500, 500), (800, 600))

    assert back.box.x == pytest.approx(37)
    assert back.box.y == pytest.approx(81)
    assert back.box.width == pytest.approx(123)
    assert back.box.height == pytest.approx(45)
    assert back.style.font_size == pytest.approx(17)


def test_input_blocks_are_not_modified(make_block) -> None:
    block = make_block(100, 100, 50, 20)

    scale_blocks([block], (500, 500), (1000, 750))

    assert block.box == Box(100, 100, 50, 20)


def test_empty_layout() -> None:
    assert scale_blocks([], (500, 500), (1000, 750)) == ()


@pytest.mark.parametrize("from_size", [(0, 500), (500, 0), (-1, 10)])
def test_rejects_degenerate_source_canvas(from_size: tuple[float, float]) -> None:
    with pytest.raises(ValueError):
        scale_ratios(from_size, (1000, 750))
