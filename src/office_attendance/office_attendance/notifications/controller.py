from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user_id, error_response, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.notification_service

    @app.route("/api/notifications", methods=["GET"], endpoint="notifications_list")
    @login_required
    def notifications_list():
        try:
            unread_only = request.args.get("unread", "").lower() in {"1", "true", "yes"}
            limit = request.args.get("limit", default=50, type=int)
            items = service.list_for_user(current_user_id(), unread_only=unread_only, limit=limit)
            return jsonify([n.to_dict() for n in items]), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/notifications/unread-count", methods=["GET"], endpoint="notifications_unread_count")
    @login_required
    def notifications_unread_count():
        try:
            return jsonify({"count": service.unread_count(current_user_id())}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/notifications/<int:notification_id>/read", methods=["PATCH"], endpoint="notifications_mark_read")
    @login_required
    def notifications_mark_read(notification_id: int):
        try:
            service.mark_read(user_id=current_user_id(), notification_id=notification_id)
            return jsonify({"message": "Notification marked as read"}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/notifications/user", methods=["DELETE"], endpoint="notifications_clear")
    @login_required
    def notifications_clear():
        try:
            deleted = service.clear_for_user(current_user_id())
            return jsonify({"message": "All notifications deleted", "deleted": deleted}), 200
        except Exception as e:
            return error_response(e)
