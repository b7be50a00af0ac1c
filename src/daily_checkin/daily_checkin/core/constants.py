"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"
TIME_MARK_FORMAT = "%H:%M"

DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_EVIDENCE_EXTENSION = ".jpg"

DEFAULT_TICK_SECONDS = 30
MAX_TICK_SECONDS = 60

REMINDER_SUBJECT = "Check-in reminder"
SUMMARY_SUBJECT = "Daily check-in: people who have not checked in"
