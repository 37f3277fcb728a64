from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_caller, parse_int
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def caller():
        return current_caller(container.token_decoder)

    @app.route("/api/attendance/roster", methods=["GET"], endpoint="roster_for_date")
    def roster_for_date():
        roster = service.roster_for_date(caller=caller(), date=request.args.get("date", ""))
        return jsonify([e.to_dict() for e in roster])

    @app.route("/api/attendance/roster/search", methods=["GET"], endpoint="roster_search")
    def roster_search():
        page = service.search_roster(
            caller=caller(),
            date=request.args.get("date", ""),
            query=request.args.get("q", ""),
            gender_tab=request.args.get("gender", "all"),
            page=parse_int(request.args.get("page"), "page") or 1,
            page_size=parse_int(request.args.get("page_size"), "page_size") or 20,
        )
        return jsonify(page.to_dict())

    @app.route("/api/attendance/status", methods=["GET"], endpoint="status_for_date")
    def status_for_date():
        return jsonify(service.status_for_date(caller=caller(), date=request.args.get("date", "")))

    @app.route("/api/attendance/recent", methods=["GET"], endpoint="recent_activity")
    def recent_activity():
        items = service.recent_activity(caller=caller(), limit=parse_int(request.args.get("limit"), "limit"))
        return jsonify([i.to_dict() for i in items])

    @app.route("/api/attendance/roll-calls", methods=["GET"], endpoint="recent_roll_calls")
    def recent_roll_calls():
        items = service.recent_roll_calls(caller=caller(), limit=parse_int(request.args.get("limit"), "limit"))
        return jsonify([i.to_dict() for i in items])

    @app.route("/api/attendance/roll-calls/<date>", methods=["GET"], endpoint="roll_call_detail")
    def roll_call_detail(date: str):
        return jsonify(service.roll_call_detail(caller=caller(), date=date).to_dict())

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        data = service.dashboard(caller=caller(), date=request.args.get("date") or None)
        return jsonify(data.to_dict())
