"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MONTH_GRID_CELLS = 42
WEEK_GRID_CELLS = 7
DEFAULT_REQUEST_LIMIT = 200
DEFAULT_NOTIFY_TIMEOUT_SECONDS = 5
ISO_DATE_FORMAT = "%Y-%m-%d"
