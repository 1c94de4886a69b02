from __future__ import annotations

import json
import queue
from datetime import date

from flask import Flask, Response, jsonify, request

from ..aggregation.model import StaffFilter
from ..common.datetime_utils import local_date, now_utc
from ..common.http import error_response, parse_day_arg
from ..container import Container
from ..core.enums import CollectionStatus
from ..core.exceptions import ValidationError

KEEPALIVE_SECONDS = 15


def register(app: Flask, container: Container) -> None:
    def _today() -> date:
        return local_date(now_utc(), container.tz)

    def _filters_from_args() -> StaffFilter:
        status_s = (request.args.get("status") or "").strip().lower()
        if status_s in {"", "all"}:
            status = None
        else:
            try:
                status = CollectionStatus(status_s)
            except ValueError:
                raise ValidationError(f"Unknown status filter {status_s!r}") from None
        return StaffFilter(
            search_text=request.args.get("search"),
            lab=request.args.get("lab"),
            tag=request.args.get("tag"),
            status=status,
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        try:
            day = parse_day_arg(request.args.get("date"), _today())
            filters = _filters_from_args()
        except ValidationError as e:
            return error_response(e)

        vm = container.dashboard()
        vm.load_staff()
        vm.select_date(day)
        vm.set_filters(filters)
        return jsonify(vm.snapshot().to_dict(container.tz))

    @app.route("/api/dashboard/stream", methods=["GET"], endpoint="dashboard_stream")
    def dashboard_stream():
        """Server-sent events: a snapshot on connect, then one per detected insert."""
        try:
            day = parse_day_arg(request.args.get("date"), _today())
            filters = _filters_from_args()
        except ValidationError as e:
            return error_response(e)

        vm = container.dashboard()
        vm.load_staff()
        vm.select_date(day)
        vm.set_filters(filters)

        updates: "queue.Queue" = queue.Queue()
        vm.add_listener(updates.put)
        vm.bind(container.watcher)

        def _event(state) -> str:
            return f"event: dashboard\ndata: {json.dumps(state.to_dict(container.tz))}\n\n"

        def generate():
            try:
                yield _event(vm.snapshot())
                while True:
                    try:
                        state = updates.get(timeout=KEEPALIVE_SECONDS)
                    except queue.Empty:
                        yield ": keep-alive\n\n"
                        continue
                    yield _event(state)
            finally:
                vm.close()

        return Response(
            generate(),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
