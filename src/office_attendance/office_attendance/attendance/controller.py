from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime, resolve_timezone
from ..common.http import (
    admin_required,
    current_role,
    current_user_id,
    current_user_name,
    error_response,
    json_body,
    login_required,
    query_date,
)
from ..common.validators import optional_float
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    default_tz = container.settings.get("timezone")

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        """Check in, or check out when today's record is open."""
        try:
            data = json_body()
            result = service.mark_attendance(
                current_user_id(),
                latitude=optional_float(data.get("latitude"), "latitude"),
                longitude=optional_float(data.get("longitude"), "longitude"),
                accuracy=optional_float(data.get("accuracy"), "accuracy"),
                source=data.get("source") or "mobile",
                timezone=data.get("timezone") or default_tz,
            )
            return jsonify(result.to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/checkout", methods=["POST"], endpoint="attendance_checkout")
    @login_required
    def attendance_checkout():
        try:
            data = json_body()
            record = service.check_out(current_user_id(), timezone=data.get("timezone") or default_tz)
            return jsonify({"message": "Check-out successful", "attendance": record.to_dict()}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        try:
            record = service.get_today(current_user_id(), timezone=request.args.get("timezone") or default_tz)
            return jsonify(record.to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/history", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            limit = request.args.get("limit", type=int)
            records = service.get_history(
                current_user_id(),
                start=query_date("start"),
                end=query_date("end"),
                limit=limit,
            )
            return jsonify([r.to_dict() for r in records]), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/all", methods=["GET"], endpoint="attendance_all")
    @admin_required
    def attendance_all():
        try:
            user_id_s = request.args.get("userId") or request.args.get("user_id")
            user_id = int(user_id_s) if user_id_s and user_id_s.isdigit() else None
            entries = service.list_all(
                day=query_date("date"),
                start=query_date("start"),
                end=query_date("end"),
                user_id=user_id,
                timezone=request.args.get("timezone") or default_tz,
            )
            return jsonify([e.to_dict() for e in entries]), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/stats", methods=["GET"], endpoint="attendance_stats")
    @admin_required
    def attendance_stats():
        try:
            stats = service.get_stats(day=query_date("date"), timezone=request.args.get("timezone") or default_tz)
            return jsonify(stats.to_dict()), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/attendance/<record_ref>", methods=["PUT"], endpoint="attendance_update")
    @admin_required
    def attendance_update(record_ref: str):
        try:
            data = json_body()
            tz_name = data.get("timezone") or default_tz
            tz = resolve_timezone(tz_name)
            check_in = parse_iso_datetime(data["checkIn"], tz) if data.get("checkIn") else None
            check_out = parse_iso_datetime(data["checkOut"], tz) if data.get("checkOut") else None

            record = service.admin_update(
                record_ref,
                current_role=current_role(),
                check_in=check_in,
                check_out=check_out,
                status=data.get("status"),
                edited_by=current_user_name(),
                timezone=tz_name,
            )
            return jsonify({"message": "Attendance record updated successfully", "attendance": record.to_dict()}), 200
        except Exception as e:
            return error_response(e)
