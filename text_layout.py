# Fits a single line of text into a block box and places it.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, NamedTuple

from model import Box


class FontSpec(NamedTuple):
    family: str
    size: float

    def __str__(self) -> str:
        return f"{_fmt_size(self.size)}px {self.family}"


class TextMetrics(NamedTuple):
    width: float
    ascent: float


@dataclass(frozen=True)
class TextFit:
    font_size: float
    x: float
    y: float
    baseline: str
    width: float
    ascent: float


Measure = Callable[[str, FontSpec], TextMetrics]

MIN_FONT_SIZE = 1


def _fmt_size(size: float) -> str:
    if float(size).is_integer():
        return str(int(size))
    return f"{size:g}"


def _fits(box: Box, text: str, font: FontSpec, measure: Measure) -> bool:
    metrics = measure(text, font)
    return metrics.width <= box.width and metrics.ascent <= box.height


def max_font_size_that_fits(
    box: Box,
    text: str,
    font_family: str,
    ideal_font_size: float,
    measure: Measure,
) -> float:
    """Description: Largest size in ideal, ideal - 1, ideal - 2, ... that fits the box
    Inputs: box: Box, text: str, font_family: str, ideal_font_size: float, measure: Measure

    Only sizes above 1 are tried; when none of them fits the result is 1.
    Metrics only grow with the size, so the candidates are searched by
    bisection instead of one by one.
    """
    if ideal_font_size <= MIN_FONT_SIZE:
        return MIN_FONT_SIZE

    def fits_at(step: int) -> bool:
        return _fits(box, text, FontSpec(font_family, ideal_font_size - step), measure)

    if fits_at(0):
        return ideal_font_size

    candidates = math.ceil(ideal_font_size - MIN_FONT_SIZE)
    lo, hi = 1, candidates
    while lo < hi:
        mid = (lo + hi) // 2
        if fits_at(mid):
            hi = mid
        else:
            lo = mid + 1
    if lo >= candidates:
        return MIN_FONT_SIZE
    return ideal_font_size - lo


def horizontal_offset(box: Box, align: str, text_width: float) -> float:
    if align == "center":
        return box.x + box.width / 2 - text_width / 2
    if align == "right":
        return box.x + box.width - text_width
    return box.x


def vertical_offset(box: Box, vertical_align: str, ascent: float) -> tuple[float, str]:
    """Description: Y coordinate and canvas text baseline for a vertical alignment
    Inputs: box: Box, vertical_align: str, ascent: float
    """
    if vertical_align == "hanging":
        return box.y + box.height, "alphabetic"
    if vertical_align == "bottom":
        return box.y + box.height, "bottom"
    if vertical_align == "center":
        return box.y + box.height / 2 + ascent / 2, "alphabetic"
    return box.y, "hanging"


def fit_text(
    box: Box,
    text: str,
    font_family: str,
    ideal_font_size: float,
    align: str,
    vertical_align: str,
    measure: Measure,
) -> TextFit:
    font_size = max_font_size_that_fits(box, text, font_family, ideal_font_size, measure)
    metrics = measure(text, FontSpec(font_family, font_size))
    x = horizontal_offset(box, align, metrics.width)
    y, baseline = vertical_offset(box, vertical_align, metrics.ascent)
    return TextFit(
        font_size=font_size,
        x=x,
        y=y,
        baseline=baseline,
        width=metrics.width,
        ascent=metrics.ascent,
    )
