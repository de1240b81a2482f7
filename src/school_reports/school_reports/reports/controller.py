from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.responses import error_response
from ..common.validators import optional_arg
from ..periods.resolver import period_from_args
from ..students.model import StudentFilters
from .model import AttendanceReport


def filters_from_args(args) -> StudentFilters:
    return StudentFilters(
        level=optional_arg(args, "level"),
        grade=optional_arg(args, "grade"),
        section=optional_arg(args, "section"),
    )


def register(app: Flask, container) -> None:
    reporting = container.reporting_service

    def _write_matrix_csv(*, report: AttendanceReport, filename: str):
        """One line per student: classification, one column per day, then totals."""

        out = io.StringIO()
        writer = csv.writer(out)
        day_numbers = [day for day, _ in report.date_range.days()]
        writer.writerow(
            ["student_id", "full_name", "educational_level", "grade", "section"]
            + [str(day) for day in day_numbers]
            + ["on_time", "late", "justified", "unjustified"]
        )
        for row in report.rows:
            s = row.student
            writer.writerow(
                [s.student_id, s.full_name, s.educational_level or "", s.grade or "", s.section or ""]
                + [cell.status.value for cell in row.cells]
                + [row.totals.on_time, row.totals.late, row.totals.justified, row.totals.unjustified]
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _attendance_report() -> AttendanceReport:
        today = now_local(reporting.timezone).date()
        period = period_from_args(request.args, today=today)
        return reporting.build_attendance_report(period, filters_from_args(request.args))

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="attendance_report")
    def attendance_report():
        try:
            report = _attendance_report()
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "report": report.to_dict()})

    @app.route("/api/reports/attendance.csv", methods=["GET"], endpoint="attendance_report_csv")
    def attendance_report_csv():
        try:
            report = _attendance_report()
        except Exception as e:
            return error_response(e)

        start = report.date_range.start.strftime("%Y%m%d")
        end = report.date_range.end.strftime("%Y%m%d")
        return _write_matrix_csv(report=report, filename=f"attendance_{start}_{end}.csv")

    @app.route("/api/reports/arrivals/today", methods=["GET"], endpoint="arrival_day_summary")
    def arrival_day_summary():
        try:
            summary = reporting.build_arrival_day_summary()
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "summary": summary.to_dict()})

    @app.route("/api/reports/incidents", methods=["GET"], endpoint="incident_summary")
    def incident_summary():
        try:
            period = None
            if optional_arg(request.args, "period") is not None:
                period = period_from_args(request.args, today=now_local(reporting.timezone).date())
            summary = reporting.build_incident_summary(filters_from_args(request.args), period=period)
        except Exception as e:
            return error_response(e)
        return jsonify({"success": True, "summary": summary.to_dict()})
