from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify

from ..common.http import date_arg
from ..common.identity import current_identity
from ..container import Container


def register(app: Flask, container: Container) -> None:
    engine = container.engine

    @app.route("/api/schedules", methods=["GET"], endpoint="api_schedules")
    def api_schedules():
        identity = current_identity()
        today = engine.go_to_today()
        start = date_arg("start", default=today)
        end = date_arg("end", default=start + timedelta(days=6))

        schedules = engine.list_schedules(staff_id=identity.staff_id, hotel_id=identity.hotel_id, start=start, end=end)
        return jsonify({"success": True, "schedules": [s.to_dict() for s in schedules]})

    @app.route("/api/schedules/today", methods=["GET"], endpoint="api_schedule_today")
    def api_schedule_today():
        identity = current_identity()
        schedule = engine.today_schedule(staff_id=identity.staff_id, hotel_id=identity.hotel_id)
        return jsonify({"success": True, "schedule": schedule.to_dict() if schedule else None})

    @app.route("/api/schedules/<schedule_id>/clock-in", methods=["POST"], endpoint="api_clock_in")
    def api_clock_in(schedule_id: str):
        identity = current_identity()
        schedule = engine.clock_in(staff_id=identity.staff_id, hotel_id=identity.hotel_id, schedule_id=schedule_id)
        return jsonify({"success": True, "message": "Clocked in", "schedule": schedule.to_dict()})

    @app.route("/api/schedules/<schedule_id>/clock-out", methods=["POST"], endpoint="api_clock_out")
    def api_clock_out(schedule_id: str):
        identity = current_identity()
        schedule = engine.clock_out(staff_id=identity.staff_id, hotel_id=identity.hotel_id, schedule_id=schedule_id)
        return jsonify({"success": True, "message": "Clocked out", "schedule": schedule.to_dict()})

    @app.route("/api/schedules/<schedule_id>/confirm", methods=["POST"], endpoint="api_confirm_shift")
    def api_confirm_shift(schedule_id: str):
        identity = current_identity()
        schedule = engine.confirm_shift(staff_id=identity.staff_id, hotel_id=identity.hotel_id, schedule_id=schedule_id)
        return jsonify({"success": True, "message": "Shift confirmed", "schedule": schedule.to_dict()})
