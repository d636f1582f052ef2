# Certificate export to a raster image.

from __future__ import annotations

from typing import Iterable, Optional, Tuple
import logging

from PIL import Image

from image_surface import ImageSurface
from model import Action, Block
from render import render

logger = logging.getLogger(__name__)


class CertificateExporter:
    def __init__(self, path: str) -> None:
        """Description: Init
        Inputs: path: str
        """
        self.path = path

    def export(
        self,
        blocks: Iterable[Block],
        resolution: Tuple[int, int],
        background: Optional[Image.Image] = None,
    ) -> ImageSurface:
        """Description: Render every block at the given resolution and save it
        Inputs: blocks: Iterable[Block], resolution: Tuple[int, int], background: Optional[Image.Image]
        """
        surface = ImageSurface(resolution)
        blocks = tuple(blocks)
        drawn = render(surface, blocks, background, None, Action.IDLE)
        if len(drawn) != len(blocks):
            logger.warning("Exported %d of %d blocks to %s", len(drawn), len(blocks), self.path)
        surface.save(self.path)
        logger.info("Exported certificate %sx%s to %s", resolution[0], resolution[1], self.path)
        return surface
