# Scene rendering onto an injected surface.

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from model import TEXT, Action, Block, Box, MeasureError
from text_layout import FontSpec, TextMetrics, fit_text

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    width: float
    height: float

    def clear_region(self, box: Box) -> None: ...

    def draw_image(self, image: Any, box: Box) -> None: ...

    def measure_text(self, text: str, font: FontSpec) -> TextMetrics: ...

    def draw_text(self, text: str, x: float, y: float, baseline: str, color: str, font: FontSpec) -> None: ...

    def stroke_rect(self, box: Box, color: str) -> None: ...


def render_text_block(surface: RenderSurface, block: Block) -> None:
    style = block.style
    fit = fit_text(
        block.box,
        block.text,
        style.font_family,
        style.font_size,
        style.align,
        style.vertical_align,
        surface.measure_text,
    )
    surface.draw_text(
        block.text,
        fit.x,
        fit.y,
        fit.baseline,
        style.color,
        FontSpec(style.font_family, fit.font_size),
    )


RENDERERS: Dict[str, Callable[[RenderSurface, Block], None]] = {
    TEXT: render_text_block,
}


def render(
    surface: RenderSurface,
    blocks: Iterable[Block],
    background: Optional[Any],
    active_id: Optional[str],
    action: str,
) -> List[str]:
    """Description: Clear the surface and draw background plus blocks in order
    Inputs: surface: RenderSurface, blocks: Iterable[Block], background: Optional[Any], active_id: Optional[str], action: str

    The block being text-edited is left to the host overlay. Blocks whose
    text cannot be measured are skipped. Returns the ids that were drawn.
    """
    full = Box(0, 0, surface.width, surface.height)
    surface.clear_region(full)
    if background is not None:
        surface.draw_image(background, full)

    drawn: List[str] = []
    for block in blocks:
        if action == Action.EDITING_TEXT and block.id == active_id:
            continue
        try:
            RENDERERS[block.kind](surface, block)
        except MeasureError as exc:
            logger.warning("Skipping block %s: %s", block.id, exc)
            continue
        drawn.append(block.id)
    return drawn


def render_selection(surface: RenderSurface, block: Optional[Block], color: str) -> None:
    if block is None:
        return
    surface.stroke_rect(block.box, color)
