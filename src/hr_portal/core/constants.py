"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import datetime, timezone

# Latest timestamp present in the bundled mock data; seed dates are shifted relative to it.
MOCK_LATEST_DATE = datetime(2024, 7, 30, 12, 0, tzinfo=timezone.utc)

DEFAULT_SESSION_DAYS = 7
MIN_PASSWORD_LENGTH = 6
PROVISIONAL_SITE_DAYS = 90
PROVISIONAL_REMINDER_DAYS = 15
TREND_SHORT_LABEL_MAX_DAYS = 14
SIGNED_URL_EXPIRES_SECONDS = 3600
PASSWORD_RESET_MAX_AGE = 3600
