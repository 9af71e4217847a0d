"""Настройки приложения и параметры формата 9-patch."""
import os

# 9-patch format
BORDER_WIDTH = 1
BYTES_PER_PIXEL = 4
# Opaque black marks a stretchable row/column on the top and left borders
MARKER_RGBA = (0, 0, 0, 255)
MIN_SOURCE_SIZE = 2 * BORDER_WIDTH + 1

# Target size controls
DEFAULT_TARGET_SIZE = (256, 128)
MAX_TARGET_EXTENT = 2048

# Viewer
MIN_ZOOM_PERCENT = 10
MAX_ZOOM_PERCENT = 800
ZOOM_PRESETS = (25, 50, 100, 200, 400, 800)
SIDE_BY_SIDE_GAP = 16

# Window
APPEARANCE_MODE = "system"
COLOR_THEME = "blue"
WINDOW_TITLE = "9-patch Preview"
WINDOW_MIN_SIZE = (960, 640)

FILE_DIALOG_TYPES = (
    ("9-patch PNG", "*.9.png"),
    ("Images", "*.png *.bmp *.gif *.webp"),
    ("All files", "*.*"),
)

# Logging
LOG_LEVEL = os.environ.get("NINEPATCH_PREVIEW_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(message)s"
LOG_DATE_FORMAT = "[%X]"
