import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "food_tokens"),
}

DEBUG = False

TIMEZONE = os.getenv("TIMEZONE", "UTC")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

INSERT_POLL_SECONDS = float(os.getenv("INSERT_POLL_SECONDS", "5"))
REGISTRATION_REDIRECT_SECONDS = int(os.getenv("REGISTRATION_REDIRECT_SECONDS", "2"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "food_tokens.log")
