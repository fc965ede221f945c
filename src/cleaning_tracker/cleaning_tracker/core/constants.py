"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAYMENT_RATE = 100
DEFAULT_MACHINE_LABEL = "Fluffy Candy Machine #1"
MIN_PASSWORD_LENGTH = 6

MACHINES_COLLECTION = "machines"
CLEANINGS_COLLECTION = "cleanings"
USERS_COLLECTION = "users"
ACCOUNTS_COLLECTION = "accounts"
SETTINGS_COLLECTION = "settings"
ARCHIVE_COLLECTION = "paymentHistory"

PAYMENT_SETTINGS_ID = "payment"
