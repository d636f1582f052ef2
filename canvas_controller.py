# Pointer-driven interaction state machine for the block editor.
#
# Every transition takes an Editor and returns a new one; the input is never
# modified, so the renderer and hit tester can read any editor value safely.

from __future__ import annotations

from dataclasses import fields, replace
import logging
from typing import Any, Optional

import config
from elements import create_block, grow_box, move_box, normalize_box, resize_box
from geometry import BOTTOM_RIGHT, INSIDE, NONE, classify, cursor_for, find_block_at, is_handle
from model import (
    Action,
    Block,
    Box,
    Editor,
    Gesture,
    InvalidStyleError,
    MeasureError,
    Point,
    TextEditRequest,
    TextStyle,
    Tool,
)
from scaling import Size, scale_blocks
from text_layout import Measure, fit_text

logger = logging.getLogger(__name__)

STYLE_FIELDS = frozenset(f.name for f in fields(TextStyle))


def new_editor(tool: str = Tool.SELECT) -> Editor:
    return Editor(tool=_checked_tool(tool))


def set_tool(editor: Editor, tool: str) -> Editor:
    return replace(editor, tool=_checked_tool(tool))


def add_block(editor: Editor, block: Block) -> Editor:
    """Description: Add block
    Inputs: editor: Editor, block: Block
    """
    if editor.find(block.id) is not None:
        raise ValueError(f"Block id {block.id!r} is already in use")
    return editor.with_block(block)


def reset(editor: Editor) -> Editor:
    """Description: Drop every block and return to idle
    Inputs: editor: Editor
    """
    logger.debug("Reset document with %d blocks", len(editor.blocks))
    return Editor(tool=editor.tool)


def pointer_down(editor: Editor, point: Point) -> Editor:
    """Description: Pointer down
    Inputs: editor: Editor, point: Point
    """
    if editor.action == Action.EDITING_TEXT:
        return editor
    if editor.action != Action.IDLE:
        # The release of the previous gesture never arrived; its block keeps
        # the last geometry it was given, normalized.
        logger.warning("Pointer down while %s; dropping unfinished gesture", editor.action)
        editor = _abandon_gesture(editor)

    if editor.tool != Tool.SELECT:
        block = create_block(point, config.DEFAULT_BLOCK_SIZE, editor.tool)
        logger.debug("Create %s block %s at %s", block.kind, block.id, point)
        return replace(
            editor.with_block(block),
            action=Action.DRAWING,
            active_id=block.id,
            gesture=Gesture(handle=BOTTOM_RIGHT, offset=(0, 0), origin=point),
            edit_request=None,
        )

    block = find_block_at(point, editor.blocks)
    if block is None:
        return _deselect(editor)
    hit = classify(point, block.box)
    offset = (point[0] - block.box.x, point[1] - block.box.y)
    gesture = Gesture(handle=hit, offset=offset, origin=point)
    if is_handle(hit):
        logger.debug("Resize block %s from %s", block.id, hit)
        return replace(editor, action=Action.RESIZING, active_id=block.id, gesture=gesture, edit_request=None)
    if hit == INSIDE:
        logger.debug("Move block %s", block.id)
        return replace(editor, action=Action.MOVING, active_id=block.id, gesture=gesture, edit_request=None)
    return _deselect(editor)


def pointer_move(editor: Editor, point: Point) -> Editor:
    """Description: Pointer move
    Inputs: editor: Editor, point: Point
    """
    if editor.action not in (Action.DRAWING, Action.MOVING, Action.RESIZING):
        return editor
    block = editor.active_block
    if block is None or editor.gesture is None:
        return _deselect(editor)

    if editor.action == Action.DRAWING:
        box = grow_box(block.box, point)
    elif editor.action == Action.MOVING:
        box = move_box(block.box, point, editor.gesture.offset)
    else:
        box = resize_box(block.box, editor.gesture.handle, point)
    return editor.with_block(replace(block, box=box))


def pointer_up(editor: Editor, point: Point) -> Editor:
    """Description: Pointer up
    Inputs: editor: Editor, point: Point
    """
    if editor.action not in (Action.DRAWING, Action.MOVING, Action.RESIZING):
        return editor
    block = editor.active_block
    if block is None or editor.gesture is None:
        return _deselect(editor)

    if editor.action == Action.MOVING:
        return _deselect(editor)

    block = replace(block, box=normalize_box(block.box))
    editor = editor.with_block(block)
    if editor.action == Action.DRAWING:
        if block.is_text:
            return _begin_text_edit(editor, block)
        return _deselect(editor)

    clicked = point == editor.gesture.origin
    if clicked and block.is_text:
        return _begin_text_edit(editor, block)
    return _deselect(editor)


def commit_text(
    editor: Editor,
    block_id: str,
    text: str,
    measure: Optional[Measure] = None,
) -> Editor:
    """Description: Store edited text and size the box to the fitted text
    Inputs: editor: Editor, block_id: str, text: str, measure: Optional[Measure]

    Without a measure capability, or when measuring fails, the box is kept.
    """
    if editor.action != Action.EDITING_TEXT or editor.active_id != block_id:
        logger.debug("Ignoring text commit for inactive block %s", block_id)
        return editor
    block = editor.active_block
    if block is None:
        return _deselect(editor)

    box = block.box
    if text and measure is not None:
        try:
            box = _fitted_box(block, text, measure)
        except MeasureError as exc:
            logger.warning("Could not measure text for block %s: %s", block.id, exc)
    return _deselect(editor.with_block(replace(block, text=text, box=box)))


def update_style(editor: Editor, block_id: Optional[str], **changes: Any) -> Editor:
    """Description: Replace style fields of one block
    Inputs: editor: Editor, block_id: Optional[str], changes: TextStyle fields

    Raises InvalidStyleError for unknown fields or values TextStyle rejects.
    A missing block leaves the editor unchanged.
    """
    unknown = set(changes) - STYLE_FIELDS
    if unknown:
        raise InvalidStyleError(f"Unknown style fields {sorted(unknown)}")
    block = editor.find(block_id)
    if block is None:
        logger.debug("Ignoring style change for missing block %s", block_id)
        return editor
    style = replace(block.style, **changes)
    if style == block.style:
        return editor
    logger.debug("Restyle block %s: %s", block.id, changes)
    return editor.with_block(replace(block, style=style))


def rescale(editor: Editor, from_size: Size, to_size: Size) -> Editor:
    """Description: Remap every block to a new canvas resolution
    Inputs: editor: Editor, from_size: Size, to_size: Size

    An open text edit stays open and its request follows the scaled block.
    Any other gesture is dropped.
    """
    if editor.action not in (Action.IDLE, Action.EDITING_TEXT):
        editor = _abandon_gesture(editor)
    editor = replace(editor, blocks=scale_blocks(editor.blocks, from_size, to_size))
    if editor.action != Action.EDITING_TEXT:
        return editor
    block = editor.active_block
    if block is None or editor.edit_request is None:
        return _deselect(editor)
    request = replace(editor.edit_request, screen_x=block.box.x, screen_y=block.box.y)
    return replace(editor, edit_request=request)


def hover_cursor(editor: Editor, point: Point) -> str:
    """Description: Cursor to show for the pointer position in the current state
    Inputs: editor: Editor, point: Point
    """
    if editor.action == Action.RESIZING and editor.gesture is not None:
        return cursor_for(editor.gesture.handle)
    if editor.action == Action.MOVING:
        return cursor_for(INSIDE)
    if editor.action == Action.DRAWING:
        return cursor_for(BOTTOM_RIGHT)
    if editor.action == Action.EDITING_TEXT:
        return cursor_for(NONE)
    if editor.tool != Tool.SELECT:
        return "crosshair"
    block = find_block_at(point, editor.blocks)
    if block is None:
        return cursor_for(NONE)
    return cursor_for(classify(point, block.box))


def _fitted_box(block: Block, text: str, measure: Measure) -> Box:
    style = block.style
    fit = fit_text(
        block.box,
        text,
        style.font_family,
        style.font_size,
        style.align,
        style.vertical_align,
        measure,
    )
    return Box(block.box.x, block.box.y, fit.width, fit.ascent)


def _begin_text_edit(editor: Editor, block: Block) -> Editor:
    logger.debug("Edit text of block %s", block.id)
    request = TextEditRequest(
        block_id=block.id,
        screen_x=block.box.x,
        screen_y=block.box.y,
        initial_text=block.text,
    )
    return replace(
        editor,
        action=Action.EDITING_TEXT,
        active_id=block.id,
        gesture=None,
        edit_request=request,
    )


def _abandon_gesture(editor: Editor) -> Editor:
    block = editor.active_block
    if block is not None and editor.action in (Action.DRAWING, Action.RESIZING):
        editor = editor.with_block(replace(block, box=normalize_box(block.box)))
    return _deselect(editor)


def _deselect(editor: Editor) -> Editor:
    return replace(editor, action=Action.IDLE, active_id=None, gesture=None, edit_request=None)


def _checked_tool(tool: str) -> str:
    if tool not in Tool.ALL:
        raise ValueError(f"Unknown tool {tool!r}")
    return tool
