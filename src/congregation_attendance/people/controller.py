from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_caller, json_body, parse_bool, parse_cohort
from ..container import Container

_QUICK_ADD_FIELDS = ("contact", "residence", "gender", "department", "status")


def register(app: Flask, container: Container) -> None:
    service = container.person_service

    def caller():
        return current_caller(container.token_decoder)

    @app.route("/api/<cohort>", methods=["GET"], endpoint="people_list")
    def people_list(cohort: str):
        people = service.list_people(
            caller=caller(),
            cohort=parse_cohort(cohort),
            active=parse_bool(request.args.get("active")),
        )
        return jsonify([p.to_dict() for p in people])

    @app.route("/api/<cohort>/<person_id>", methods=["GET"], endpoint="people_get")
    def people_get(cohort: str, person_id: str):
        person = service.get_person(caller=caller(), cohort=parse_cohort(cohort), person_id=person_id)
        return jsonify(person.to_dict())

    @app.route("/api/<cohort>/quick-add", methods=["POST"], endpoint="people_quick_add")
    def people_quick_add(cohort: str):
        data = json_body()
        person_id = service.quick_add(
            caller=caller(),
            cohort=parse_cohort(cohort),
            name=data.get("name") or "",
            **{k: data.get(k) for k in _QUICK_ADD_FIELDS},
        )
        return jsonify({"person_id": person_id}), 201

    @app.route("/api/<cohort>", methods=["POST"], endpoint="people_add")
    def people_add(cohort: str):
        data = json_body()
        person_id = service.add(
            caller=caller(),
            cohort=parse_cohort(cohort),
            name=data.get("name") or "",
            contact=data.get("contact") or "",
            residence=data.get("residence") or "",
            gender=data.get("gender"),
            active=data.get("active"),
        )
        return jsonify({"person_id": person_id}), 201

    @app.route("/api/<cohort>/<person_id>", methods=["PATCH"], endpoint="people_update")
    def people_update(cohort: str, person_id: str):
        service.update(
            caller=caller(),
            cohort=parse_cohort(cohort),
            person_id=person_id,
            changes=json_body(),
        )
        return "", 204

    @app.route("/api/<cohort>/<person_id>", methods=["DELETE"], endpoint="people_remove")
    def people_remove(cohort: str, person_id: str):
        service.remove(caller=caller(), cohort=parse_cohort(cohort), person_id=person_id)
        return "", 204
