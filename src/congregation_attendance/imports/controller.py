from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_caller, parse_cohort
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/<cohort>/import", methods=["POST"], endpoint="bulk_import")
    def bulk_import(cohort: str):
        """Accepts {"csv": "..."} or the raw CSV text as the request body."""

        if request.is_json:
            data = request.get_json(silent=True) or {}
            csv_text = str(data.get("csv") or "") if isinstance(data, dict) else ""
        else:
            csv_text = request.get_data(as_text=True)

        result = container.import_service.bulk_import(
            caller=current_caller(container.token_decoder),
            cohort=parse_cohort(cohort),
            csv_text=csv_text,
        )
        return jsonify(result.to_dict())
