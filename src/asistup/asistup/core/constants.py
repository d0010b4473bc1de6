"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

PIN_LENGTH = 6
DEFAULT_LATE_THRESHOLD_MINUTES = 15
DEFAULT_SUCCESS_DISPLAY_SECONDS = 5.0
DEFAULT_ERROR_DISPLAY_SECONDS = 1.5
DEFAULT_KIOSK_IDLE_SECONDS = 900.0
DEFAULT_MAX_KIOSK_SESSIONS = 64

DEFAULT_SBU = Decimal("482.00")
DEFAULT_IESS_RATE = Decimal("0.0945")
DEFAULT_RESERVE_RATE = Decimal("0.0833")

MONTHS_PER_YEAR = 12
MONEY_QUANTUM = Decimal("0.01")

NOTIFICATION_INBOX_LIMIT = 200

COLLECTION_EMPLOYEES = "employees"
COLLECTION_ATTENDANCE = "attendance"
COLLECTION_PAYMENTS = "payments"
COLLECTION_CONFIG = "config"
GLOBAL_SETTINGS_DOC_ID = "global"
