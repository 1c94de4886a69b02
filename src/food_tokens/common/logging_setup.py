from __future__ import annotations

import logging
import time
from logging.handlers import RotatingFileHandler
from typing import Optional

from flask import Flask, g, request

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
LOG_MAX_SIZE = 20 * 1024 * 1024  # 20 MB
LOG_BACKUP_COUNT = 5

_configured = False


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger once.

    Console output always; a size-rotating file handler when ``log_file`` is set.
    """
    global _configured
    logger = logging.getLogger("food_tokens")
    logger.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if _configured:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=LOG_MAX_SIZE,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _configured = True
    return logger


def register_request_logging(app: Flask, logger: logging.Logger) -> None:
    """Log method, path, status and duration for every request."""

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.pop("request_started", None)
        elapsed = time.perf_counter() - started if started is not None else 0.0
        logger.info(
            "IP=%s | %s %s | Status=%s | Time=%.4fs",
            request.remote_addr,
            request.method,
            request.path,
            response.status_code,
            elapsed,
        )
        response.headers["X-Process-Time"] = str(round(elapsed, 4))
        return response
