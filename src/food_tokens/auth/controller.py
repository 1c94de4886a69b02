from __future__ import annotations

import logging

from flask import Flask, g, jsonify, session

from ..common.http import error_response, request_payload
from ..container import Container
from ..core.exceptions import ValidationError
from .session import SessionState

logger = logging.getLogger(__name__)


def current_session() -> SessionState:
    """Per-request SessionState over the Flask session, loaded once."""
    state = g.get("session_state")
    if state is None:
        state = SessionState(session)
        state.load()
        g.session_state = state
    return state


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        try:
            data = request_payload()
            result = container.auth_service.login(data.get("email"), data.get("password"))
        except ValidationError as e:
            return error_response(e)

        current_session().login(result.email, result.staff)
        logger.info("Signed in %s (staff=%s)", result.email, result.staff.staff_id if result.staff else "-")
        return jsonify(
            {
                "success": True,
                "email": result.email,
                "staff": result.staff.to_dict() if result.staff else None,
                "redirect_to": "/admin",
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        current_session().logout()
        return jsonify({"success": True, "redirect_to": "/"})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    def me():
        state = current_session()
        user = state.current_user
        return jsonify(
            {
                "logged_in": state.is_logged_in,
                "email": state.email,
                "staff": user.to_dict() if user else None,
            }
        )
