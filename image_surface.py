# Offscreen render surface backed by a Pillow image.

from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from matplotlib import colors
from PIL import Image, ImageDraw, ImageFont

from model import Box, MeasureError
from text_layout import FontSpec, TextMetrics

logger = logging.getLogger(__name__)

# Canvas text baselines mapped to Pillow text anchors.
ANCHORS = {
    "hanging": "lt",
    "alphabetic": "ls",
    "bottom": "ld",
}


class ImageSurface:
    def __init__(self, size: Tuple[int, int], clear_color: str = "white") -> None:
        """Description: Init
        Inputs: size: Tuple[int, int], clear_color: str
        """
        self.width, self.height = int(size[0]), int(size[1])
        self._clear_color = colors.to_hex(clear_color)
        self.image = Image.new("RGBA", (self.width, self.height), self._clear_color)
        self._draw = ImageDraw.Draw(self.image)
        self._fonts: Dict[Tuple[str, int], Any] = {}

    def clear_region(self, box: Box) -> None:
        self._draw.rectangle(_rect(box), fill=self._clear_color)

    def draw_image(self, image: Image.Image, box: Box) -> None:
        """Description: Paste image stretched over box
        Inputs: image: Image.Image, box: Box
        """
        width, height = int(round(box.width)), int(round(box.height))
        if width <= 0 or height <= 0:
            return
        resized = image.convert("RGBA").resize((width, height), Image.Resampling.LANCZOS)
        self.image.alpha_composite(resized, dest=(int(round(box.x)), int(round(box.y))))

    def measure_text(self, text: str, font: FontSpec) -> TextMetrics:
        """Description: Advance width and ascent above the baseline
        Inputs: text: str, font: FontSpec
        """
        if not text:
            return TextMetrics(0.0, 0.0)
        pil_font = self._font(font)
        width = self._draw.textlength(text, font=pil_font)
        _left, top, _right, _bottom = pil_font.getbbox(text, anchor="ls")
        return TextMetrics(float(width), float(max(0, -top)))

    def draw_text(self, text: str, x: float, y: float, baseline: str, color: str, font: FontSpec) -> None:
        if not text:
            return
        self._draw.text(
            (x, y),
            text,
            fill=colors.to_hex(color),
            font=self._font(font),
            anchor=ANCHORS.get(baseline, "ls"),
        )

    def stroke_rect(self, box: Box, color: str) -> None:
        self._draw.rectangle(_rect(box), outline=colors.to_hex(color))

    def save(self, path: str) -> None:
        self.image.save(path)

    def _font(self, font: FontSpec) -> Any:
        """Description: Load and cache a font, falling back to Pillow's default
        Inputs: font: FontSpec
        """
        size = max(1, int(round(font.size)))
        key = (font.family, size)
        if key in self._fonts:
            return self._fonts[key]
        try:
            loaded = ImageFont.truetype(font.family, size)
        except OSError:
            logger.debug("Font %r not found, using default font", font.family)
            try:
                loaded = ImageFont.load_default(size)
            except OSError as exc:
                raise MeasureError(f"Cannot load font {font}") from exc
        self._fonts[key] = loaded
        return loaded


def _rect(box: Box) -> Tuple[float, float, float, float]:
    # Pillow rejects rectangles whose corners are not in top-left order.
    x1, x2 = sorted((box.left, box.right))
    y1, y2 = sorted((box.top, box.bottom))
    return (x1, y1, x2, y2)
