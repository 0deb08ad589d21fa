"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DAILY_GOAL_SECONDS = 7 * 3600
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
MISSING_TIME = "--:--"
