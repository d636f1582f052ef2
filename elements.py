# Block creation and box mutation formulas.

from __future__ import annotations

from typing import Tuple

import config
from geometry import BOTTOM_LEFT, BOTTOM_RIGHT, TOP_LEFT, TOP_RIGHT
from model import TEXT, Block, Box, Point, TextStyle, Tool, UnknownBlockTypeError, new_block_id

# Create tools and the block type each one produces.
TOOL_BLOCK_TYPES = {
    Tool.TEXT: TEXT,
}


def create_block(
    origin: Point,
    initial_size: Tuple[float, float] = config.DEFAULT_BLOCK_SIZE,
    tool: str = Tool.TEXT,
) -> Block:
    """Description: Create block
    Inputs: origin: Point, initial_size: Tuple[float, float], tool: str
    """
    kind = TOOL_BLOCK_TYPES.get(tool)
    if kind is None:
        raise UnknownBlockTypeError(tool)
    width, height = initial_size
    return Block(
        id=new_block_id(),
        kind=kind,
        box=Box(origin[0], origin[1], width, height),
        text="",
        style=TextStyle(),
    )


def resize_box(box: Box, handle: str, point: Point) -> Box:
    """Description: Move the two edges next to the dragged corner
    Inputs: box: Box, handle: str, point: Point

    The diagonally opposite corner stays where it is. The result may have a
    negative width or height until it is normalized.
    """
    px, py = point
    if handle == BOTTOM_RIGHT:
        return Box(box.x, box.y, px - box.x, py - box.y)
    if handle == TOP_LEFT:
        return Box(px, py, box.right - px, box.bottom - py)
    if handle == TOP_RIGHT:
        return Box(box.x, py, px - box.x, box.bottom - py)
    if handle == BOTTOM_LEFT:
        return Box(px, box.y, box.right - px, py - box.y)
    return box


def grow_box(box: Box, point: Point) -> Box:
    return resize_box(box, BOTTOM_RIGHT, point)


def normalize_box(box: Box) -> Box:
    """Description: Reorder corners so width and height are non-negative
    Inputs: box: Box
    """
    x = min(box.left, box.right)
    y = min(box.top, box.bottom)
    return Box(x, y, abs(box.width), abs(box.height))


def move_box(box: Box, point: Point, offset: Point) -> Box:
    return Box(point[0] - offset[0], point[1] - offset[1], box.width, box.height)
