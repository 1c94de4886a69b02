import os


def get_settings_module() -> str:
    # APP_ENV selects the settings module; default is development.
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "food_tokens.settings.production"

    if env in {"test", "testing"}:
        return "food_tokens.settings.testing"

    return "food_tokens.settings.development"
