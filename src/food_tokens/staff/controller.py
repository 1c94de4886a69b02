from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, request_payload, status_for
from ..container import Container
from ..core.exceptions import RepositoryError, ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/staff", methods=["GET"], endpoint="staff_list")
    def staff_list():
        try:
            roster = container.staff_repo.list_staff()
        except RepositoryError as e:
            return error_response(e)
        return jsonify([m.to_dict() for m in roster])

    @app.route("/api/staff", methods=["POST"], endpoint="staff_register")
    def staff_register():
        try:
            data = request_payload()
        except ValidationError as e:
            return error_response(e)
        result = container.registration_form.submit(data)
        if result.ok:
            return jsonify(result.to_dict()), 201
        return jsonify(result.to_dict()), status_for(result.error)
