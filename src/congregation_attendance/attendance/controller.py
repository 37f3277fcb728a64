from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_caller, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def caller():
        return current_caller(container.token_decoder)

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    def attendance_mark():
        data = json_body()
        attendance_id = service.mark_present(
            caller=caller(),
            person_id=str(data.get("person_id") or ""),
            date=str(data.get("date") or ""),
        )
        return jsonify({"attendance_id": attendance_id})

    @app.route("/api/attendance/unmark", methods=["POST"], endpoint="attendance_unmark")
    def attendance_unmark():
        data = json_body()
        attendance_id = service.unmark_present(
            caller=caller(),
            person_id=str(data.get("person_id") or ""),
            date=str(data.get("date") or ""),
        )
        return jsonify({"attendance_id": attendance_id})

    @app.route("/api/attendance/by-date", methods=["GET"], endpoint="attendance_by_date")
    def attendance_by_date():
        records = service.attendance_by_date(caller=caller(), date=request.args.get("date", ""))
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance/history/<person_id>", methods=["GET"], endpoint="attendance_history")
    def attendance_history(person_id: str):
        records = service.history_for_member(caller=caller(), person_id=person_id)
        return jsonify([r.to_dict() for r in records])
