from __future__ import annotations

import pytest

from geometry import (
    BOTTOM_LEFT,
    BOTTOM_RIGHT,
    INSIDE,
    NONE,
    TOP_LEFT,
    TOP_RIGHT,
    classify,
    cursor_for,
    find_block_at,
)
from model import Box

BOX = Box(100, 100, 200, 80)


@pytest.mark.parametrize(
    ("point", "expected"),
    [
        ((100, 100), TOP_LEFT),
        ((300, 100), TOP_RIGHT),
        ((100, 180), BOTTOM_LEFT),
        ((300, 180), BOTTOM_RIGHT),
        ((104, 96), TOP_LEFT),
        ((305, 185), BOTTOM_RIGHT),
        ((295, 105), TOP_RIGHT),
        ((95, 175), BOTTOM_LEFT),
    ],
)
def test_points_near_corner_classify_as_handle(point: tuple[float, float], expected: str) -> None:
    assert classify(point, BOX) == expected


def test_handle_takes_precedence_over_inside() -> None:
    # (103, 103) is inside the box and within tolerance of the top-left corner.
    assert classify((103, 103), BOX) == TOP_LEFT


@pytest.mark.parametrize("point", [(106, 106), (200, 140), (294, 174), (200, 100), (100, 140), (300, 150)])
def test_interior_and_edge_points_classify_inside(point: tuple[float, float]) -> None:
    assert classify(point, BOX) == INSIDE


@pytest.mark.parametrize("point", [(94, 94), (306, 100), (200, 99), (200, 181), (0, 0)])
def test_points_outside_classify_none(point: tuple[float, float]) -> None:
    assert classify(point, BOX) == NONE


def test_every_interior_grid_point_is_inside() -> None:
    for x in range(106, 295, 7):
        for y in range(106, 175, 5):
            assert classify((x, y), BOX) == INSIDE


def test_forward_scan_picks_first_inserted_block(make_block) -> None:
    bottom = make_block(0, 0, 100, 100)
    top = make_block(50, 50, 100, 100)

    assert find_block_at((75, 75), [bottom, top]) is bottom
    assert find_block_at((140, 140), [bottom, top]) is top
    assert find_block_at((400, 400), [bottom, top]) is None


def test_topmost_first_scan_picks_last_inserted_block(make_block) -> None:
    bottom = make_block(0, 0, 100, 100)
    top = make_block(50, 50, 100, 100)

    assert find_block_at((75, 75), [bottom, top], topmost_first=True) is top


def test_handle_hit_counts_as_found(make_block) -> None:
    block = make_block(10, 10, 20, 20)
    # Just outside the box but inside the corner tolerance.
    assert find_block_at((33, 33), [block]) is block


@pytest.mark.parametrize(
    ("hit", "cursor"),
    [
        (TOP_LEFT, "nwse-resize"),
        (BOTTOM_RIGHT, "nwse-resize"),
        (TOP_RIGHT, "nesw-resize"),
        (BOTTOM_LEFT, "nesw-resize"),
        (INSIDE, "move"),
        (NONE, "default"),
    ],
)
def test_cursor_for_hit(hit: str, cursor: str) -> None:
    assert cursor_for(hit) == cursor
