from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import admin_required, current_role, error_response, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.holiday_service

    @app.route("/api/holidays", methods=["GET"], endpoint="holidays_list")
    @login_required
    def holidays_list():
        try:
            return jsonify([h.to_dict() for h in service.list_active()]), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/holidays", methods=["POST"], endpoint="holidays_create")
    @admin_required
    def holidays_create():
        try:
            data = json_body()
            holiday_date = parse_iso_date(data.get("date"))
            holiday_id = service.create(
                current_role=current_role(),
                name=data.get("name") or "",
                holiday_date=holiday_date,
                holiday_type=data.get("type") or "fixed",
            )
            return jsonify({"holiday_id": holiday_id, "name": data.get("name"), "date": holiday_date.isoformat()}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/api/holidays/<int:holiday_id>", methods=["DELETE"], endpoint="holidays_delete")
    @admin_required
    def holidays_delete(holiday_id: int):
        try:
            service.delete(current_role=current_role(), holiday_id=holiday_id)
            return jsonify({"message": "Holiday deleted"}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/holidays/check/<day>", methods=["GET"], endpoint="holidays_check")
    @login_required
    def holidays_check(day: str):
        try:
            return jsonify(service.check_day(parse_iso_date(day)).to_dict()), 200
        except Exception as e:
            return error_response(e)
