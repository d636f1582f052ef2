from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from model import TEXT, Block, Box, MeasureError, TextStyle, new_block_id
from text_layout import FontSpec, TextMetrics


def fake_measure(text: str, font: FontSpec) -> TextMetrics:
    # Every glyph is half an em wide and the ascent is three quarters of an em.
    return TextMetrics(len(text) * font.size * 0.5, font.size * 0.75 if text else 0.0)


class RecordingSurface:
    def __init__(self, width: float = 500, height: float = 400, broken: set[str] | None = None) -> None:
        self.width = width
        self.height = height
        self.broken = broken or set()
        self.calls: list[tuple[Any, ...]] = []

    def clear_region(self, box: Box) -> None:
        self.calls.append(("clear", box))

    def draw_image(self, image: Any, box: Box) -> None:
        self.calls.append(("image", image, box))

    def measure_text(self, text: str, font: FontSpec) -> TextMetrics:
        if text in self.broken:
            raise MeasureError("no rendering context")
        return fake_measure(text, font)

    def draw_text(self, text: str, x: float, y: float, baseline: str, color: str, font: FontSpec) -> None:
        self.calls.append(("text", text, x, y, baseline, color, font))

    def stroke_rect(self, box: Box, color: str) -> None:
        self.calls.append(("rect", box, color))

    def drawn_texts(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "text"]


@pytest.fixture
def measure() -> Callable[[str, FontSpec], TextMetrics]:
    return fake_measure


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def make_block() -> Callable[..., Block]:
    def _factory(x: float, y: float, width: float, height: float, text: str = "", **style: Any) -> Block:
        return Block(
            id=new_block_id(),
            kind=TEXT,
            box=Box(x, y, width, height),
            text=text,
            style=TextStyle(**style),
        )

    return _factory
