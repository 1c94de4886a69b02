from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .auth.controller import register as register_auth
from .checkins.controller import register as register_checkins
from .common.logging_setup import register_request_logging, setup_logging
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, list_tables
from .database.connection import DBConfig
from .profile.controller import register as register_profile
from .settings import get_settings_module
from .staff.controller import register as register_staff

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[2] / "database" / "schema.sql"


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE", "UTC")

    app_logger = setup_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FILE", None))
    register_request_logging(app, app_logger)

    if container is None:
        db_config = DBConfig.from_mapping(getattr(settings, "DB_CONFIG"))
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.user,
            db_config.host,
            db_config.port,
            db_config.database,
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            timezone=app.config["TIMEZONE"],
            poll_seconds=float(getattr(settings, "INSERT_POLL_SECONDS", 2)),
            redirect_seconds=int(getattr(settings, "REGISTRATION_REDIRECT_SECONDS", 2)),
        )
        container.watcher.start()

    app.extensions["food_tokens"] = container

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"ok": True, "timezone": app.config["TIMEZONE"]})

    register_auth(app, container)
    register_staff(app, container)
    register_checkins(app, container)
    register_dashboard(app, container)
    register_profile(app, container)

    return app


def main() -> None:
    app = create_app()
    app.run(threaded=True)


if __name__ == "__main__":
    main()
