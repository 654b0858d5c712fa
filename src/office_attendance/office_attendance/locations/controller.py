from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, current_role, error_response, json_body, login_required
from ..common.validators import optional_float
from ..core.constants import DEFAULT_OFFICE_RADIUS_M
from ..core.exceptions import NotFoundError, OfficeNotConfiguredError, ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.location_service

    @app.route("/api/location", methods=["GET"], endpoint="location_get")
    @login_required
    def location_get():
        try:
            return jsonify(service.get_active().to_dict()), 200
        except OfficeNotConfiguredError as e:
            return error_response(NotFoundError(e.message))
        except Exception as e:
            return error_response(e)

    @app.route("/api/location", methods=["POST"], endpoint="location_set")
    @admin_required
    def location_set():
        try:
            data = json_body()
            latitude = optional_float(data.get("latitude"), "latitude")
            longitude = optional_float(data.get("longitude"), "longitude")
            radius = optional_float(data.get("radius"), "radius")
            if latitude is None or longitude is None:
                raise ValidationError("latitude and longitude are required")

            location = service.set_location(
                current_role=current_role(),
                latitude=latitude,
                longitude=longitude,
                radius=int(radius) if radius is not None else DEFAULT_OFFICE_RADIUS_M,
                address=data.get("address") or "",
            )
            return jsonify(location.to_dict()), 201
        except Exception as e:
            return error_response(e)
