from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.controller import current_session
from ..common.datetime_utils import parse_iso_date, parse_iso_month
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/profile", methods=["GET"], endpoint="profile")
    def profile():
        user = current_session().current_user
        if user is None:
            return jsonify({"success": False, "message": "Please sign in as a staff member"}), 401

        month_s = request.args.get("month")
        day_s = request.args.get("day")
        try:
            month = parse_iso_month(month_s) if month_s else None
            day = parse_iso_date(day_s) if day_s else None
        except ValueError:
            return jsonify({"success": False, "message": "Expected month=YYYY-MM and day=YYYY-MM-DD"}), 400

        if month is None and day is not None:
            month = day.replace(day=1)

        vm = container.profile(user, month=month)
        vm.load()
        if day is not None:
            vm.handle_date_click(day)
        return jsonify(vm.snapshot().to_dict(container.tz))
