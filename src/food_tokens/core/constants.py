"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

COLLECTIONS_TABLE = "food_collections"
STAFF_TABLE = "staff"
CONTROL_TABLE = "control"

DEFAULT_INSERT_POLL_SECONDS = 2.0
DEFAULT_REDIRECT_SECONDS = 2
DEFAULT_TIMEZONE = "UTC"

MYSQL_DUPLICATE_KEY_ERRNO = 1062
