"""
Application Constants.
Stores default values for UI configuration and magic numbers.
"""

# Window Configuration
WINDOW_TITLE = "Lanechart - Timeline"
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
WINDOW_SETTINGS_KEY = "Lanechart"
WINDOW_SETTINGS_APP = "Lanechart"
SETTINGS_GEOMETRY_KEY = "window_geometry"
SETTINGS_PIXELS_PER_DAY_KEY = "pixels_per_day"
SETTINGS_LAST_FILE_KEY = "last_items_file"

# Environment override for the initial items file (read after .env is loaded)
ENV_ITEMS_FILE = "LANECHART_ITEMS"

# Zoom (pixels per day)
DEFAULT_PIXELS_PER_DAY = 6
MIN_PIXELS_PER_DAY = 2
MAX_PIXELS_PER_DAY = 20

# Lane packing
LABEL_GAP_PX = 40  # Room wanted between neighbouring bars for labels
PADDING_DAYS = 7  # Margin added before the first and after the last item

# Interaction
CLICK_DELAY_MS = 250  # Single vs double click window
ACTIVATION_THRESHOLD_PX = 4  # Travel before a press becomes a drag

# Layout
LANE_HEIGHT = 40
BAR_HEIGHT = 30
RULER_HEIGHT = 40
RULER_TICK_SPACING_PX = 100
RESIZE_HANDLE_WIDTH = 6
SHOW_META_MIN_WIDTH = 140  # Bars narrower than this hide their date line

# File Dialog Filters
ITEMS_FILE_FILTER = "Timeline items (*.json)"

# Status Messages
STATUS_ERROR_PREFIX = "Error: "
