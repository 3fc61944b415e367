"""UI constants for Portfolio Monitor.

Contains theme colors, fonts, spacing and timing values.
"""


class Colors:
    """Dark palette with neon data lines."""

    # Backgrounds
    BG_BASE = "#1E1E1E"  # Window background
    BG_PLOT = "#000000"  # Plot area
    BG_ELEVATED = "#3C3C3C"  # Buttons, inputs
    BG_LEGEND = "#323232"
    BG_GRID = "#323232"
    BG_BORDER = "#808080"  # Axis lines

    # Series
    SERIES_COMPOSITE = "#00FF00"  # lime
    SERIES_MOVING_AVERAGE = "#FF4500"  # orange-red

    # Guides
    THRESHOLD = "#9370DB"  # medium purple
    CROSSHAIR = "#00FFFF"  # cyan
    ZOOM_RECT = "#00FFFF"

    # Text
    TEXT_PRIMARY = "#F5F5F5"  # white smoke
    TEXT_SECONDARY = "#A0A0A0"
    TEXT_TITLE = "#00FF00"
    TEXT_FOOTER = "#00BFFF"  # deep sky blue

    # Notifications
    SIGNAL_ERROR = "#FF4757"
    SIGNAL_INFO = "#4A9EFF"


class Fonts:
    """Font family definitions."""

    TITLE = "Comic Sans MS"
    UI = "Arial"


class FontSizes:
    """Font size constants in points."""

    TITLE = 18
    FOOTER = 18
    LEGEND = 18
    BODY = 11


class Spacing:
    """Spacing constants in pixels."""

    XS = 4
    SM = 8
    MD = 12
    LG = 16
    XL = 24


class LineWidths:
    """Pen widths in pixels."""

    SERIES = 2
    THRESHOLD = 3
    CROSSHAIR = 1


class Timing:
    """Timing constants in milliseconds."""

    BANNER_DURATION = 5000
    BANNER_FADE = 150


class Limits:
    """Window limits."""

    MIN_WINDOW_WIDTH = 1024
    MIN_WINDOW_HEIGHT = 640
    DIALOG_WIDTH = 400
