from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response, request_payload
from ..common.validators import require_int
from ..container import Container
from ..core.exceptions import DomainError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/collections", methods=["POST"], endpoint="collections_record")
    def collections_record():
        """Kiosk endpoint: record today's token collection for a staff member."""
        try:
            data = request_payload()
            staff_id = require_int(data.get("staff_id"), "Staff ID")
            event = container.collection_service.record_collection(staff_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"success": True, "collection": event.to_dict()}), 201
