import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "food_tokens"),
}

DEBUG = True

# Display timezone for day/month boundaries (pytz name). Storage is always UTC.
TIMEZONE = os.getenv("TIMEZONE", "UTC")

# If enabled, app will apply database/schema.sql on startup (CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

INSERT_POLL_SECONDS = float(os.getenv("INSERT_POLL_SECONDS", "2"))
REGISTRATION_REDIRECT_SECONDS = int(os.getenv("REGISTRATION_REDIRECT_SECONDS", "2"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE") or None
