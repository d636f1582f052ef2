from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple
import uuid

from matplotlib import colors

import config

Point = Tuple[float, float]

TEXT = "text"

# Block type tags the render pipeline knows how to draw.
BLOCK_TYPES = (TEXT,)

ALIGNS = ("left", "center", "right")
VERTICAL_ALIGNS = ("top", "bottom", "center", "hanging")


class DesignerError(Exception):
    """Base class for errors raised by the designer core."""


class UnknownBlockTypeError(DesignerError, ValueError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown block type {kind!r}")
        self.kind = kind


class InvalidStyleError(DesignerError, ValueError):
    pass


class MeasureError(DesignerError):
    """Text could not be measured, usually because no surface is available."""


@dataclass(frozen=True)
class Box:
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def corners(self) -> Tuple[Point, Point, Point, Point]:
        """Description: Corners in top-left, top-right, bottom-left, bottom-right order
        Inputs: None
        """
        return (
            (self.left, self.top),
            (self.right, self.top),
            (self.left, self.bottom),
            (self.right, self.bottom),
        )


@dataclass(frozen=True)
class TextStyle:
    font_size: float = config.DEFAULT_FONT_SIZE
    font_family: str = config.DEFAULT_FONT
    color: str = config.DEFAULT_COLOR
    align: str = config.DEFAULT_ALIGN
    vertical_align: str = config.DEFAULT_VERTICAL_ALIGN

    def __post_init__(self) -> None:
        """Description: Validate size, alignment and colour
        Inputs: None
        """
        if self.font_size <= 0:
            raise InvalidStyleError(f"Font size must be positive, got {self.font_size!r}")
        if self.align not in ALIGNS:
            raise InvalidStyleError(f"Unknown horizontal alignment {self.align!r}")
        if self.vertical_align not in VERTICAL_ALIGNS:
            raise InvalidStyleError(f"Unknown vertical alignment {self.vertical_align!r}")
        if not colors.is_color_like(self.color):
            raise InvalidStyleError(f"Unknown color {self.color!r}")


@dataclass(frozen=True)
class Block:
    id: str
    kind: str
    box: Box
    text: str = ""
    style: TextStyle = field(default_factory=TextStyle)

    def __post_init__(self) -> None:
        """Description: Reject block types the renderer cannot draw
        Inputs: None
        """
        if self.kind not in BLOCK_TYPES:
            raise UnknownBlockTypeError(self.kind)

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT


@dataclass(frozen=True)
class Gesture:
    # Hit classification from geometry.classify, pointer offset from the
    # box origin, and the point where the gesture started.
    handle: str
    offset: Point
    origin: Point


@dataclass(frozen=True)
class TextEditRequest:
    block_id: str
    screen_x: float
    screen_y: float
    initial_text: str


class Action:
    IDLE = "idle"
    DRAWING = "drawing"
    MOVING = "moving"
    RESIZING = "resizing"
    EDITING_TEXT = "editing_text"

    ALL = (IDLE, DRAWING, MOVING, RESIZING, EDITING_TEXT)


class Tool:
    SELECT = "select"
    TEXT = "text"

    ALL = (SELECT, TEXT)


@dataclass(frozen=True)
class Editor:
    blocks: Tuple[Block, ...] = ()
    action: str = Action.IDLE
    active_id: Optional[str] = None
    tool: str = Tool.SELECT
    gesture: Optional[Gesture] = None
    edit_request: Optional[TextEditRequest] = None

    def find(self, block_id: Optional[str]) -> Optional[Block]:
        """Description: Find block
        Inputs: block_id: Optional[str]
        """
        if block_id is None:
            return None
        for block in self.blocks:
            if block.id == block_id:
                return block
        return None

    @property
    def active_block(self) -> Optional[Block]:
        return self.find(self.active_id)

    def with_block(self, block: Block) -> "Editor":
        """Description: Replace the block sharing this id, or append it
        Inputs: block: Block
        """
        blocks = list(self.blocks)
        for index, existing in enumerate(blocks):
            if existing.id == block.id:
                blocks[index] = block
                break
        else:
            blocks.append(block)
        return replace(self, blocks=tuple(blocks))


def new_block_id() -> str:
    return uuid.uuid4().hex
