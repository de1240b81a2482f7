from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_clock_time
from ..common.responses import error_response
from ..core.exceptions import ValidationError


def register(app: Flask, container) -> None:
    arrivals = container.arrival_service

    @app.route("/api/arrivals", methods=["POST"], endpoint="register_arrival")
    def register_arrival():
        """Register a scanned student; on-time/late is decided right here."""
        try:
            data = request.get_json(silent=True) or {}
            try:
                student_id = int(data.get("student_id"))
            except (TypeError, ValueError):
                raise ValidationError("student_id es obligatorio")

            registered_by = data.get("registered_by")
            if registered_by is not None:
                try:
                    registered_by = int(registered_by)
                except (TypeError, ValueError):
                    raise ValidationError("registered_by inválido")

            record = arrivals.register_arrival(student_id, registered_by=registered_by)
        except Exception as e:
            return error_response(e)

        return jsonify(
            {
                "success": True,
                "arrival": {
                    "arrival_id": record.arrival_id,
                    "student_id": record.student_id,
                    "date": record.arrival_date.isoformat(),
                    "time": format_clock_time(record.arrival_time),
                    "status": record.status,
                },
            }
        ), 201

    @app.route("/api/arrivals/<int:arrival_id>/justification", methods=["POST"], endpoint="justify_arrival")
    def justify_arrival(arrival_id: int):
        try:
            data = request.get_json(silent=True) or {}
            justified = data.get("justified")
            # a one-shot transition: only a real JSON boolean is accepted
            if not isinstance(justified, bool):
                raise ValidationError("justified debe ser true o false")
            arrivals.justify_arrival(arrival_id, justified=justified)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True})
