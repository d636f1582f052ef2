# Remaps a block layout between canvas resolutions.

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, NamedTuple, Tuple

import numpy as np

from model import Block, Box


class Size(NamedTuple):
    width: float
    height: float


def scale_ratios(from_size: Size, to_size: Size) -> Tuple[float, float]:
    """Description: Width and height ratios between two canvas sizes
    Inputs: from_size: Size, to_size: Size
    """
    from_w, from_h = Size(*from_size)
    to_w, to_h = Size(*to_size)
    if from_w <= 0 or from_h <= 0:
        raise ValueError(f"Cannot scale from a canvas of size {from_w}x{from_h}")
    return to_w / from_w, to_h / from_h


def scale_blocks(
    blocks: Iterable[Block],
    from_size: Size,
    to_size: Size,
) -> Tuple[Block, ...]:
    """Description: Scale blocks
    Inputs: blocks: Iterable[Block], from_size: Size, to_size: Size

    The width ratio applies to x, width and font size, the height ratio to
    y and height.
    """
    blocks = tuple(blocks)
    width_ratio, height_ratio = scale_ratios(from_size, to_size)
    if not blocks:
        return ()

    # Columns: x, y, width, height, font_size
    values = np.array(
        [
            [b.box.x, b.box.y, b.box.width, b.box.height, b.style.font_size]
            for b in blocks
        ],
        dtype=float,
    )
    ratios = np.array([width_ratio, height_ratio, width_ratio, height_ratio, width_ratio])
    scaled = values * ratios

    result = []
    for block, (x, y, width, height, font_size) in zip(blocks, scaled.tolist()):
        result.append(
            replace(
                block,
                box=Box(x, y, width, height),
                style=replace(block.style, font_size=font_size),
            )
        )
    return tuple(result)
