from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.responses import error_response
from ..common.validators import optional_arg
from ..core.enums import IncidentStatus
from ..core.exceptions import ValidationError
from ..periods.resolver import period_from_args
from ..students.model import StudentFilters


def register(app: Flask, container) -> None:
    incidents = container.incident_service

    def _read_resolution() -> tuple[int, str]:
        data = request.get_json(silent=True) or {}
        try:
            user_id = int(data.get("user_id"))
        except (TypeError, ValueError):
            raise ValidationError("user_id es obligatorio")
        return user_id, str(data.get("reason") or "")

    @app.route("/api/incidents", methods=["GET"], endpoint="list_incidents")
    def list_incidents():
        """Incident list; ``status`` and ``period`` are optional."""
        try:
            status_in = None
            status = optional_arg(request.args, "status")
            if status is not None:
                try:
                    status_in = [IncidentStatus(status)]
                except ValueError:
                    raise ValidationError(f"Estado inválido: {status!r}")

            date_range = None
            if optional_arg(request.args, "period") is not None:
                reporting = container.reporting_service
                period = period_from_args(request.args, today=now_local(reporting.timezone).date())
                date_range = reporting.resolve_period(period)

            rows = incidents.list_incidents(
                filters=StudentFilters(
                    level=optional_arg(request.args, "level"),
                    grade=optional_arg(request.args, "grade"),
                    section=optional_arg(request.args, "section"),
                ),
                date_range=date_range,
                status_in=status_in,
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "incidents": [i.to_dict() for i in rows]})

    @app.route("/api/incidents/<int:incident_id>/justify", methods=["POST"], endpoint="justify_incident")
    def justify_incident(incident_id: int):
        try:
            user_id, reason = _read_resolution()
            incidents.justify(incident_id, user_id=user_id, reason=reason)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True})

    @app.route("/api/incidents/<int:incident_id>/annul", methods=["POST"], endpoint="annul_incident")
    def annul_incident(incident_id: int):
        try:
            user_id, reason = _read_resolution()
            incidents.annul(incident_id, user_id=user_id, reason=reason)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True})
