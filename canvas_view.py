from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Tuple
import logging

import tkinter as tk
import tkinter.font as tkfont
from matplotlib import colors
from PIL import Image, ImageTk

import canvas_controller as controller
import config
from model import Action, Block, Box, Editor, MeasureError, Point, TextEditRequest
from render import render, render_selection
from text_layout import FontSpec, TextMetrics

logger = logging.getLogger(__name__)


class TkSurface:
    """Render surface drawing onto a tk.Canvas at a fixed logical resolution."""

    def __init__(self, canvas: tk.Canvas, resolution: Tuple[int, int]) -> None:
        """Description: Init
        Inputs: canvas: tk.Canvas, resolution: Tuple[int, int]
        """
        self.canvas = canvas
        self.resolution = resolution
        self._photo: Optional[ImageTk.PhotoImage] = None
        self._fonts: Dict[Tuple[str, int], tkfont.Font] = {}

    @property
    def width(self) -> int:
        return self.resolution[0]

    @property
    def height(self) -> int:
        return self.resolution[1]

    def clear_region(self, box: Box) -> None:
        self.canvas.delete("scene")
        self.canvas.create_rectangle(
            box.left, box.top, box.right, box.bottom,
            fill=config.THEME["canvas"],
            outline="",
            tags="scene",
        )

    def draw_image(self, image: Image.Image, box: Box) -> None:
        """Description: Draw a Pillow image stretched over box
        Inputs: image: Image.Image, box: Box
        """
        width, height = int(round(box.width)), int(round(box.height))
        if width <= 0 or height <= 0:
            return
        resized = image.resize((width, height), Image.Resampling.LANCZOS)
        # Tk drops the image unless a reference is kept.
        self._photo = ImageTk.PhotoImage(resized)
        self.canvas.create_image(box.x, box.y, image=self._photo, anchor="nw", tags="scene")

    def measure_text(self, text: str, font: FontSpec) -> TextMetrics:
        """Description: Measure text
        Inputs: text: str, font: FontSpec
        """
        tk_font = self._font(font)
        try:
            return TextMetrics(float(tk_font.measure(text)), float(tk_font.metrics("ascent")))
        except tk.TclError as exc:
            raise MeasureError(str(exc)) from exc

    def draw_text(self, text: str, x: float, y: float, baseline: str, color: str, font: FontSpec) -> None:
        """Description: Draw text
        Inputs: text: str, x: float, y: float, baseline: str, color: str, font: FontSpec
        """
        tk_font = self._font(font)
        # Tk anchors on the line box, so the alphabetic baseline is reached
        # by pushing the bottom edge down by the font descent.
        if baseline == "hanging":
            anchor = "nw"
        elif baseline == "alphabetic":
            anchor = "sw"
            y += tk_font.metrics("descent")
        else:
            anchor = "sw"
        self.canvas.create_text(
            x, y,
            text=text,
            fill=colors.to_hex(color),
            anchor=anchor,
            font=tk_font,
            tags="scene",
        )

    def stroke_rect(self, box: Box, color: str) -> None:
        self.canvas.create_rectangle(
            box.left, box.top, box.right, box.bottom,
            outline=colors.to_hex(color),
            dash=(4, 2),
            tags="scene",
        )

    def _font(self, font: FontSpec) -> tkfont.Font:
        size = max(1, int(round(font.size)))
        key = (font.family, size)
        if key not in self._fonts:
            try:
                # Negative sizes are pixels in Tk.
                self._fonts[key] = tkfont.Font(family=font.family, size=-size)
            except tk.TclError as exc:
                raise MeasureError(f"Cannot load font {font}") from exc
        return self._fonts[key]


class CanvasView:
    def __init__(
        self,
        master: tk.Widget,
        resolution: Tuple[int, int] = config.DEFAULT_RESOLUTION,
        on_editor_changed: Optional[Callable[[Editor], None]] = None,
    ) -> None:
        """Description: Init
        Inputs: master: tk.Widget, resolution: Tuple[int, int], on_editor_changed
        """
        self.resolution = resolution
        self.editor = controller.new_editor()
        self.background: Optional[Image.Image] = None
        self.style_target: Optional[str] = None
        self._on_editor_changed = on_editor_changed

        self.canvas = tk.Canvas(
            master,
            width=resolution[0],
            height=resolution[1],
            bg=config.THEME["canvas"],
            highlightthickness=0,
        )
        self.surface = TkSurface(self.canvas, resolution)

        self._overlay = tk.Entry(self.canvas, relief="flat", bg=config.THEME["panel_alt"], fg=config.THEME["text"])
        self._overlay_item: Optional[int] = None
        self._overlay.bind("<Return>", self._on_overlay_commit)
        self._overlay.bind("<FocusOut>", self._on_overlay_commit)

        self.canvas.bind("<ButtonPress-1>", self._on_left_press)
        self.canvas.bind("<B1-Motion>", self._on_left_drag)
        self.canvas.bind("<ButtonRelease-1>", self._on_left_release)
        self.canvas.bind("<Motion>", self._on_motion)

    def set_tool(self, tool: str) -> None:
        """Description: Set tool
        Inputs: tool: str
        """
        self._apply(controller.set_tool(self.editor, tool))

    def set_background(self, image: Optional[Image.Image]) -> None:
        """Description: Set background
        Inputs: image: Optional[Image.Image]
        """
        self.background = image
        self.draw()

    def set_resolution(self, resolution: Tuple[int, int]) -> None:
        """Description: Rescale the layout to a new canvas resolution
        Inputs: resolution: Tuple[int, int]
        """
        if resolution == self.resolution:
            return
        editor = controller.rescale(self.editor, self.resolution, resolution)
        logger.info("Rescaled %d blocks from %s to %s", len(editor.blocks), self.resolution, resolution)
        self.resolution = resolution
        self.surface.resolution = resolution
        self.canvas.configure(width=resolution[0], height=resolution[1])
        self._apply(editor)

    @property
    def style_block(self) -> Optional[Block]:
        """Block the properties panel edits: the last one pressed, until empty canvas is clicked."""
        return self.editor.find(self.style_target)

    def set_style(self, **changes: Any) -> None:
        """Description: Apply style changes to the properties target
        Inputs: changes: TextStyle fields
        """
        self._apply(controller.update_style(self.editor, self.style_target, **changes))

    def reset(self) -> None:
        self._apply(controller.reset(self.editor))

    def draw(self) -> None:
        """Description: Draw
        Inputs: None
        """
        editor = self.editor
        render(self.surface, editor.blocks, self.background, editor.active_id, editor.action)
        if editor.action != Action.EDITING_TEXT:
            block = editor.active_block or self.style_block
            render_selection(self.surface, block, config.THEME["accent"])
            self._draw_handles(block)
        if self._overlay_item is not None:
            self.canvas.tag_raise(self._overlay_item)

    def _apply(self, editor: Editor) -> None:
        """Description: Adopt the editor returned by a transition and refresh
        Inputs: editor: Editor
        """
        previous = self.editor.edit_request
        request = editor.edit_request
        self.editor = editor
        if editor.active_id is not None:
            self.style_target = editor.active_id
        elif editor.find(self.style_target) is None:
            self.style_target = None
        if request is not None and request != previous:
            if previous is not None and previous.block_id == request.block_id and self._overlay_item is not None:
                # Same edit, block moved: keep the typed text.
                self.canvas.coords(self._overlay_item, request.screen_x, request.screen_y)
            else:
                self._show_overlay(request)
        elif editor.action != Action.EDITING_TEXT:
            self._hide_overlay()
        self.draw()
        if self._on_editor_changed:
            self._on_editor_changed(editor)

    def _draw_handles(self, block: Optional[Block]) -> None:
        if block is None:
            return
        size = config.HANDLE_SIZE
        for x, y in block.box.corners():
            self.canvas.create_rectangle(
                x - size, y - size, x + size, y + size,
                outline=config.THEME["accent"],
                fill=config.THEME["accent_alt"],
                tags="scene",
            )

    def _show_overlay(self, request: TextEditRequest) -> None:
        """Description: Show the text entry over the block being edited
        Inputs: request: TextEditRequest
        """
        self._hide_overlay()
        self._overlay.delete(0, tk.END)
        self._overlay.insert(0, request.initial_text)
        self._overlay_item = self.canvas.create_window(
            request.screen_x, request.screen_y,
            window=self._overlay,
            anchor="nw",
            tags="overlay",
        )
        # Focus only once the redraw has been committed.
        self.canvas.after_idle(self._focus_overlay)

    def _focus_overlay(self) -> None:
        if self._overlay_item is None:
            return
        self._overlay.focus_set()
        self._overlay.icursor(tk.END)

    def _hide_overlay(self) -> None:
        if self._overlay_item is None:
            return
        self.canvas.delete(self._overlay_item)
        self._overlay_item = None

    def _on_overlay_commit(self, _event: tk.Event) -> None:
        """Description: On overlay commit
        Inputs: _event: tk.Event
        """
        request = self.editor.edit_request
        if request is None:
            return
        text = self._overlay.get()
        self._apply(controller.commit_text(self.editor, request.block_id, text, self.surface.measure_text))
        self.canvas.focus_set()

    def _point(self, event: tk.Event) -> Point:
        return (float(self.canvas.canvasx(event.x)), float(self.canvas.canvasy(event.y)))

    def _on_left_press(self, event: tk.Event) -> None:
        """Description: On left press
        Inputs: event: tk.Event
        """
        self.canvas.focus_set()
        editor = controller.pointer_down(self.editor, self._point(event))
        if editor.action == Action.IDLE:
            # Pressed on empty canvas.
            self.style_target = None
        self._apply(editor)

    def _on_left_drag(self, event: tk.Event) -> None:
        """Description: On left drag
        Inputs: event: tk.Event
        """
        point = self._point(event)
        self._apply(controller.pointer_move(self.editor, point))
        self._update_cursor(point)

    def _on_left_release(self, event: tk.Event) -> None:
        """Description: On left release
        Inputs: event: tk.Event
        """
        point = self._point(event)
        self._apply(controller.pointer_up(self.editor, point))
        self._update_cursor(point)

    def _on_motion(self, event: tk.Event) -> None:
        self._update_cursor(self._point(event))

    def _update_cursor(self, point: Point) -> None:
        name = controller.hover_cursor(self.editor, point)
        self.canvas.configure(cursor=config.TK_CURSORS.get(name, ""))
