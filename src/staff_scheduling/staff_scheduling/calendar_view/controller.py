from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_local_date
from ..common.http import date_arg, enum_value
from ..common.identity import current_identity
from ..container import Container
from ..core.enums import Direction, ViewMode


def register(app: Flask, container: Container) -> None:
    engine = container.engine

    @app.route("/api/calendar", methods=["GET"], endpoint="api_calendar")
    def api_calendar():
        identity = current_identity()
        anchor = date_arg("anchor", default=engine.go_to_today())
        view_mode = enum_value(ViewMode, request.args.get("view"), ViewMode.MONTH)

        view = engine.get_calendar_view(
            staff_id=identity.staff_id,
            hotel_id=identity.hotel_id,
            anchor=anchor,
            view_mode=view_mode,
        )
        return jsonify({"success": True, "calendar": view.to_dict()})

    @app.route("/api/calendar/navigate", methods=["GET"], endpoint="api_calendar_navigate")
    def api_calendar_navigate():
        current_identity()
        anchor = date_arg("anchor", default=engine.go_to_today())
        view_mode = enum_value(ViewMode, request.args.get("view"), ViewMode.MONTH)
        direction = enum_value(Direction, request.args.get("direction"))

        new_anchor = engine.navigate(anchor, direction, view_mode)
        return jsonify({"success": True, "anchor": format_local_date(new_anchor), "view": view_mode.value})
