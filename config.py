# Configuration values for the certificate designer.

WINDOW_TITLE = "Certificate Designer"

# Common certificate canvas resolutions (width, height)
RESOLUTION_PRESETS = [
    (500, 500),
    (800, 600),
    (1000, 750),
    (1123, 794),
    (1754, 1240),
    (3508, 2480),
]

DEFAULT_RESOLUTION = (800, 600)

FONTS = [
    "Helvetica",
    "Arial",
    "Times New Roman",
    "Courier New",
]

DEFAULT_FONT = "Arial"
DEFAULT_FONT_SIZE = 24
DEFAULT_COLOR = "#000000"
DEFAULT_ALIGN = "left"
DEFAULT_VERTICAL_ALIGN = "top"

# Size of a freshly created block before any drag (width, height)
DEFAULT_BLOCK_SIZE = (50, 24)

# Pixel distance from a corner that still counts as grabbing its handle
HANDLE_TOLERANCE = 5

# Forward scan returns the earliest inserted block under the pointer.
# Set to True to pick the visually topmost block instead.
HIT_TEST_TOPMOST_FIRST = False

# Cursor names used by the core, mapped to Tk cursor names by the host
TK_CURSORS = {
    "default": "",
    "move": "fleur",
    "crosshair": "crosshair",
    "nwse-resize": "bottom_right_corner",
    "nesw-resize": "bottom_left_corner",
}

THEME = {
    "bg": "#1F2125",
    "panel": "#262A30",
    "panel_alt": "#2F343C",
    "text": "#E6E6E6",
    "muted": "#9AA0A6",
    "accent": "#0A84FF",
    "accent_alt": "#64D2FF",
    "canvas": "#FFFFFF",
}

HANDLE_SIZE = 4

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
