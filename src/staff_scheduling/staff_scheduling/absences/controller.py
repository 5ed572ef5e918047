from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import date_arg, enum_value
from ..common.identity import current_identity
from ..container import Container
from ..core.enums import AbsenceStatus
from ..core.exceptions import AuthorizationError, ValidationError
from .patch import ChangeStatus, patch_from_payload


def register(app: Flask, container: Container) -> None:
    engine = container.engine

    def _json_body() -> dict:
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")
        return data

    @app.route("/api/absences", methods=["GET"], endpoint="api_absences")
    def api_absences():
        identity = current_identity()
        status_arg = request.args.get("status")
        status = enum_value(AbsenceStatus, status_arg) if status_arg else None

        items = engine.list_absences(staff_id=identity.staff_id, hotel_id=identity.hotel_id, status=status)
        return jsonify({"success": True, "absences": [a.to_dict() for a in items]})

    @app.route("/api/absences", methods=["POST"], endpoint="api_absences_submit")
    def api_absences_submit():
        identity = current_identity()
        data = _json_body()

        submission = engine.submit_absence(
            staff_id=identity.staff_id,
            hotel_id=identity.hotel_id,
            request_type=data.get("request_type") or "",
            start_date=data.get("start_date") or "",
            end_date=data.get("end_date") or "",
            notes=data.get("notes"),
        )
        return (
            jsonify(
                {
                    "success": True,
                    "message": "Absence request submitted",
                    "absence": submission.request.to_dict(),
                    "conflicts": submission.conflicts.to_dict(),
                }
            ),
            201,
        )

    @app.route("/api/absences/conflicts", methods=["GET"], endpoint="api_absences_conflicts")
    def api_absences_conflicts():
        identity = current_identity()
        start = date_arg("start")
        end = date_arg("end", default=start)

        conflicts = engine.find_conflicts(staff_id=identity.staff_id, hotel_id=identity.hotel_id, start=start, end=end)
        return jsonify({"success": True, "conflicts": conflicts.to_dict()})

    @app.route("/api/absences/<request_id>", methods=["PATCH"], endpoint="api_absences_update")
    def api_absences_update(request_id: str):
        identity = current_identity()
        patch = patch_from_payload(_json_body())
        # Review decisions belong to the manager workflow.
        if isinstance(patch, ChangeStatus) and patch.status != AbsenceStatus.CANCELLED:
            raise AuthorizationError("Staff can only cancel their own requests")

        updated = engine.update_absence(
            staff_id=identity.staff_id,
            hotel_id=identity.hotel_id,
            request_id=request_id,
            patch=patch,
        )
        return jsonify({"success": True, "absence": updated.to_dict()})

    @app.route("/api/absences/<request_id>/cancel", methods=["POST"], endpoint="api_absences_cancel")
    def api_absences_cancel(request_id: str):
        identity = current_identity()
        cancelled = engine.cancel_absence(staff_id=identity.staff_id, hotel_id=identity.hotel_id, request_id=request_id)
        return jsonify({"success": True, "message": "Absence request cancelled", "absence": cancelled.to_dict()})

    @app.route("/api/absences/<request_id>", methods=["DELETE"], endpoint="api_absences_delete")
    def api_absences_delete(request_id: str):
        identity = current_identity()
        deleted = engine.delete_absence(staff_id=identity.staff_id, hotel_id=identity.hotel_id, request_id=request_id)
        return jsonify({"success": True, "deleted": deleted})
