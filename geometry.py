# Point classification against block boxes and the cursor each hit implies.

from __future__ import annotations

from typing import Iterable, Optional

import config
from model import Block, Box, Point

TOP_LEFT = "top-left"
TOP_RIGHT = "top-right"
BOTTOM_LEFT = "bottom-left"
BOTTOM_RIGHT = "bottom-right"
INSIDE = "inside"
NONE = "none"

# Same order as Box.corners().
HANDLES = (TOP_LEFT, TOP_RIGHT, BOTTOM_LEFT, BOTTOM_RIGHT)

CURSORS = {
    TOP_LEFT: "nwse-resize",
    BOTTOM_RIGHT: "nwse-resize",
    TOP_RIGHT: "nesw-resize",
    BOTTOM_LEFT: "nesw-resize",
    INSIDE: "move",
    NONE: "default",
}


def is_handle(hit: str) -> bool:
    return hit in HANDLES


def classify(point: Point, box: Box, tolerance: float = config.HANDLE_TOLERANCE) -> str:
    """Description: Classify a point as a corner handle, inside or none
    Inputs: point: Point, box: Box, tolerance: float

    Corner handles win over interior containment. The box is expected to be
    normalized; an inverted box only ever reports handles.
    """
    px, py = point
    for handle, (cx, cy) in zip(HANDLES, box.corners()):
        if abs(px - cx) <= tolerance and abs(py - cy) <= tolerance:
            return handle
    if box.left <= px <= box.right and box.top <= py <= box.bottom:
        return INSIDE
    return NONE


def find_block_at(
    point: Point,
    blocks: Iterable[Block],
    topmost_first: bool = config.HIT_TEST_TOPMOST_FIRST,
) -> Optional[Block]:
    """Description: First block whose classification is not none
    Inputs: point: Point, blocks: Iterable[Block], topmost_first: bool
    """
    ordered = list(blocks)
    if topmost_first:
        ordered.reverse()
    for block in ordered:
        if classify(point, block.box) != NONE:
            return block
    return None


def cursor_for(hit: str) -> str:
    return CURSORS.get(hit, CURSORS[NONE])
