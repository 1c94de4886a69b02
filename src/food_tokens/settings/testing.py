import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "food_tokens_test"),
}

DEBUG = False
TESTING = True

TIMEZONE = "UTC"

AUTO_INIT_DB = False

# 0 disables the background watcher thread
INSERT_POLL_SECONDS = 0
REGISTRATION_REDIRECT_SECONDS = 2

LOG_LEVEL = "WARNING"
LOG_FILE = None
