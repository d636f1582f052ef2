from __future__ import annotations

import logging
import tkinter as tk
from tkinter import filedialog, messagebox
from typing import Callable, Dict, List, Tuple

from PIL import Image, UnidentifiedImageError

import config
from canvas_view import CanvasView
from exporter import CertificateExporter
from model import ALIGNS, VERTICAL_ALIGNS, Action, Editor, InvalidStyleError, Tool

logger = logging.getLogger(__name__)

IMAGE_TYPES = [("Images", "*.png *.jpg *.jpeg *.gif *.bmp"), ("All files", "*.*")]

# Toolbar label and keyboard shortcut per tool
TOOL_BUTTONS = [
    ("Select", Tool.SELECT, "<Control-1>"),
    ("Text", Tool.TEXT, "<Control-2>"),
]


def resolution_label(resolution: Tuple[int, int]) -> str:
    return f"{resolution[0]} x {resolution[1]}"


class DesignerApp:
    """Main window: tool palette, certificate canvas and status line."""

    def __init__(self) -> None:
        self.root = tk.Tk()
        self.root.title(config.WINDOW_TITLE)
        self.root.configure(bg=config.THEME["bg"])

        self.resolutions: Dict[str, Tuple[int, int]] = {
            resolution_label(res): res for res in config.RESOLUTION_PRESETS
        }
        self.resolution_var = tk.StringVar(value=resolution_label(config.DEFAULT_RESOLUTION))
        self.status_var = tk.StringVar()
        self.tool_buttons: Dict[str, tk.Button] = {}
        self._suppress_property_update = False

        self._create_menus()
        self._create_widgets()
        self._create_shortcuts()

        self.select_tool(Tool.SELECT)

    def run(self) -> None:
        self.root.mainloop()

    def _create_menus(self) -> None:
        menubar = tk.Menu(self.root)
        entries = {
            "File": [
                ("New", self.new_document),
                ("Open Background...", self.open_background),
                ("Clear Background", self.clear_background),
                None,
                ("Export PNG...", self.export_png),
                None,
                ("Exit", self.root.quit),
            ],
            "Help": [
                ("About", self.show_about),
            ],
        }
        for title, items in entries.items():
            submenu = tk.Menu(menubar, tearoff=0)
            for item in items:
                if item is None:
                    submenu.add_separator()
                else:
                    submenu.add_command(label=item[0], command=item[1])
            menubar.add_cascade(label=title, menu=submenu)
        self.root.config(menu=menubar)

    def _create_widgets(self) -> None:
        body = tk.Frame(self.root, bg=config.THEME["bg"])
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True)

        palette = tk.Frame(body, bg=config.THEME["panel"], padx=10, pady=10)
        palette.pack(side=tk.LEFT, fill=tk.Y)

        stage = tk.Frame(body, bg=config.THEME["bg"], padx=8, pady=8)
        stage.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.canvas_view = CanvasView(stage, config.DEFAULT_RESOLUTION, on_editor_changed=self._on_editor_changed)
        self.canvas_view.canvas.pack(anchor="nw")

        self._fill_palette(palette)

        tk.Label(
            self.root,
            textvariable=self.status_var,
            anchor="w",
            padx=6,
            bg=config.THEME["panel_alt"],
            fg=config.THEME["muted"],
        ).pack(side=tk.BOTTOM, fill=tk.X)

    def _fill_palette(self, palette: tk.Frame) -> None:
        self._section_label(palette, "Tools")
        for label, tool, _shortcut in TOOL_BUTTONS:
            self.tool_buttons[tool] = self._palette_button(palette, label, lambda t=tool: self.select_tool(t))

        self._section_label(palette, "Canvas")
        chooser = tk.OptionMenu(
            palette,
            self.resolution_var,
            *self.resolutions.keys(),
            command=self._on_resolution_selected,
        )
        chooser.configure(
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            highlightthickness=0,
            relief=tk.FLAT,
        )
        chooser.pack(fill=tk.X, pady=4)

        self._palette_button(palette, "Reset", self.new_document)

        self._build_properties_panel(palette)

    def _build_properties_panel(self, palette: tk.Frame) -> None:
        self._section_label(palette, "Text Style")
        self.properties_frame = tk.Frame(palette, bg=config.THEME["panel"])
        self.properties_frame.pack(fill=tk.X)
        self.properties_frame.columnconfigure(1, weight=1)

        self.editing_label = tk.Label(self.properties_frame, bg=config.THEME["panel"], fg=config.THEME["muted"])
        self.editing_label.grid(row=0, column=0, columnspan=2, sticky="w", pady=(0, 4))

        self.font_var = tk.StringVar(value=config.DEFAULT_FONT)
        self.font_size_var = tk.IntVar(value=config.DEFAULT_FONT_SIZE)
        self.color_var = tk.StringVar(value=config.DEFAULT_COLOR)
        self.align_var = tk.StringVar(value=config.DEFAULT_ALIGN)
        self.vertical_align_var = tk.StringVar(value=config.DEFAULT_VERTICAL_ALIGN)
        self.style_vars: Dict[str, tk.Variable] = {
            "font_family": self.font_var,
            "font_size": self.font_size_var,
            "color": self.color_var,
            "align": self.align_var,
            "vertical_align": self.vertical_align_var,
        }

        row = 1
        row = self._add_labeled_option("Font", self.font_var, config.FONTS, row)
        row = self._add_labeled_spin("Size", self.font_size_var, row, 6, 200)
        row = self._add_labeled_entry("Color", self.color_var, row)
        row = self._add_labeled_option("Align", self.align_var, list(ALIGNS), row)
        self._add_labeled_option("Vertical", self.vertical_align_var, list(VERTICAL_ALIGNS), row)

        for key, variable in self.style_vars.items():
            variable.trace_add("write", lambda *_args, k=key: self._apply_style(k))
        self._sync_properties()

    def _property_label(self, text: str, row: int) -> None:
        tk.Label(self.properties_frame, text=text, bg=config.THEME["panel"], fg=config.THEME["muted"]).grid(
            row=row, column=0, sticky="w", padx=(0, 6)
        )

    def _add_labeled_entry(self, label: str, variable: tk.StringVar, row: int) -> int:
        self._property_label(label, row)
        tk.Entry(
            self.properties_frame,
            textvariable=variable,
            width=10,
            relief=tk.FLAT,
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            insertbackground=config.THEME["text"],
        ).grid(row=row, column=1, sticky="ew", pady=2)
        return row + 1

    def _add_labeled_spin(self, label: str, variable: tk.IntVar, row: int, low: int, high: int) -> int:
        self._property_label(label, row)
        tk.Spinbox(
            self.properties_frame,
            from_=low,
            to=high,
            textvariable=variable,
            width=6,
            relief=tk.FLAT,
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            buttonbackground=config.THEME["panel_alt"],
        ).grid(row=row, column=1, sticky="ew", pady=2)
        return row + 1

    def _add_labeled_option(self, label: str, variable: tk.StringVar, options: List[str], row: int) -> int:
        self._property_label(label, row)
        chooser = tk.OptionMenu(self.properties_frame, variable, *options)
        chooser.configure(
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            activebackground=config.THEME["accent"],
            highlightthickness=0,
            relief=tk.FLAT,
        )
        chooser.grid(row=row, column=1, sticky="ew", pady=2)
        return row + 1

    def _apply_style(self, key: str) -> None:
        """Description: Push one edited style control to the target block
        Inputs: key: str
        """
        if self._suppress_property_update or self.canvas_view.style_block is None:
            return
        try:
            value = self.style_vars[key].get()
        except tk.TclError:
            # Spinbox holds a partial number while typing.
            return
        try:
            self.canvas_view.set_style(**{key: value})
        except InvalidStyleError as exc:
            logger.debug("Ignoring style value %r: %s", value, exc)

    def _sync_properties(self) -> None:
        """Description: Load the target block's style into the controls
        Inputs: None
        """
        block = self.canvas_view.style_block
        if block is None:
            self.editing_label.config(text="No block selected")
            return
        self.editing_label.config(text=f"Editing: {block.text or '(empty text)'}")
        self._suppress_property_update = True
        try:
            for key, variable in self.style_vars.items():
                value = getattr(block.style, key)
                if key == "font_size":
                    value = int(round(value))
                # Rewriting an unchanged entry would move its insert cursor.
                if self._control_text(variable) != str(value):
                    variable.set(value)
        finally:
            self._suppress_property_update = False

    def _control_text(self, variable: tk.Variable) -> str:
        # The raw Tcl value, so a half-typed number does not raise.
        return str(self.root.globalgetvar(str(variable)))

    def _section_label(self, parent: tk.Frame, text: str) -> None:
        tk.Label(
            parent,
            text=text,
            bg=config.THEME["panel"],
            fg=config.THEME["muted"],
            font=("Helvetica", 11, "bold"),
        ).pack(anchor="w", pady=(8, 2))

    def _palette_button(self, parent: tk.Frame, text: str, command: Callable[[], None]) -> tk.Button:
        button = tk.Button(
            parent,
            text=text,
            command=command,
            width=12,
            relief=tk.FLAT,
            bg=config.THEME["panel_alt"],
            fg=config.THEME["text"],
            activebackground=config.THEME["accent"],
            activeforeground=config.THEME["text"],
        )
        button.pack(fill=tk.X, pady=3)
        return button

    def _create_shortcuts(self) -> None:
        for _label, tool, shortcut in TOOL_BUTTONS:
            self.root.bind(shortcut, lambda _event, t=tool: self.select_tool(t))
        self.root.bind("<Control-n>", lambda _event: self._unless_typing(self.new_document))
        self.root.bind("<Control-e>", lambda _event: self._unless_typing(self.export_png))

    def _unless_typing(self, action: Callable[[], None]) -> None:
        # Shortcuts must not fire while the text overlay has focus.
        if self.canvas_view.editor.action == Action.EDITING_TEXT:
            return
        action()

    def select_tool(self, tool: str) -> None:
        """Description: Activate a tool and highlight its palette button
        Inputs: tool: str
        """
        self.canvas_view.set_tool(tool)
        for key, button in self.tool_buttons.items():
            active = key == tool
            button.configure(bg=config.THEME["accent" if active else "panel_alt"])

    def _on_resolution_selected(self, label: str) -> None:
        resolution = self.resolutions.get(label)
        if resolution is None:
            logger.warning("Unknown resolution preset %r", label)
            return
        self.canvas_view.set_resolution(resolution)
        self._refresh_status()

    def _on_editor_changed(self, _editor: Editor) -> None:
        self._refresh_status()
        self._sync_properties()

    def _refresh_status(self) -> None:
        editor = self.canvas_view.editor
        active = editor.active_block
        parts = [
            resolution_label(self.canvas_view.resolution),
            f"{len(editor.blocks)} block(s)",
            f"tool: {editor.tool}",
            editor.action.replace("_", " "),
        ]
        if active is not None:
            box = active.box
            parts.append(f"{box.width:.0f} x {box.height:.0f} at ({box.x:.0f}, {box.y:.0f})")
        self.status_var.set("   ".join(parts))

    def new_document(self) -> None:
        if self.canvas_view.editor.blocks:
            if not messagebox.askyesno("New", "Discard every block on the canvas?"):
                return
        self.canvas_view.reset()

    def open_background(self) -> None:
        """Description: Ask for an image and use it as the certificate background
        Inputs: None
        """
        path = filedialog.askopenfilename(title="Open Background", filetypes=IMAGE_TYPES)
        if not path:
            return
        try:
            with Image.open(path) as image:
                background = image.convert("RGBA")
        except (OSError, UnidentifiedImageError) as exc:
            logger.warning("Could not open background %s: %s", path, exc)
            messagebox.showerror("Open Background", f"Could not open image:\n{exc}")
            return
        logger.info("Loaded background %s (%dx%d)", path, background.width, background.height)
        self.canvas_view.set_background(background)

    def clear_background(self) -> None:
        self.canvas_view.set_background(None)

    def export_png(self) -> None:
        """Description: Render the certificate at the canvas resolution to a PNG file
        Inputs: None
        """
        target = filedialog.asksaveasfilename(
            title="Export PNG",
            defaultextension=".png",
            filetypes=[("PNG image", "*.png")],
        )
        if not target:
            return
        view = self.canvas_view
        try:
            CertificateExporter(target).export(view.editor.blocks, view.resolution, view.background)
        except OSError as exc:
            logger.error("Export to %s failed: %s", target, exc)
            messagebox.showerror("Export PNG", f"Could not write {target}:\n{exc}")
            return
        messagebox.showinfo("Export PNG", f"Saved {target}")

    def show_about(self) -> None:
        messagebox.showinfo(
            "About",
            f"{config.WINDOW_TITLE}\nDraw text blocks on a certificate and export it as an image.",
        )


def run_app() -> None:
    DesignerApp().run()
