from datetime import date, datetime, time
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest
from flask import Flask

from src.school_reports.school_reports.attendance.controller import register as register_attendance
from src.school_reports.school_reports.attendance.model import ArrivalRecord
from src.school_reports.school_reports.core.enums import IncidentStatus
from src.school_reports.school_reports.core.exceptions import FetchFailed, ValidationError
from src.school_reports.school_reports.incidents.controller import register as register_incidents
from src.school_reports.school_reports.incidents.model import FaultType, Incident
from src.school_reports.school_reports.reports.controller import register as register_reports
from src.school_reports.school_reports.reports.service import ReportingService
from src.school_reports.school_reports.students.model import Student

LIMA = ZoneInfo("America/Lima")


class FakeStudentRepo:
    def __init__(self, students, fail=False):
        self._students = students
        self._fail = fail

    def list_students(self, *, level=None, grade=None, section=None, active_only=True):
        if self._fail:
            raise ConnectionError("down")
        return [s for s in self._students if level is None or s.educational_level == level]


class FakeArrivalRepo:
    def __init__(self, records):
        self._records = records

    def list_for_students(self, student_ids, date_range):
        return [r for r in self._records if r.student_id in student_ids]

    def list_for_date(self, arrival_date):
        return [r for r in self._records if r.arrival_date == arrival_date]


class FakeIncidentRepo:
    def list_incidents(self, **kwargs):
        return []


class FakeArrivalService:
    def __init__(self):
        self.justified = []

    def register_arrival(self, student_id, *, registered_by=None):
        if student_id == 99:
            raise ValidationError("Estudiante no encontrado o inactivo")
        return ArrivalRecord(7, student_id, date(2024, 2, 1), time(7, 58), "A tiempo", registered_by=registered_by)

    def justify_arrival(self, arrival_id, *, justified):
        self.justified.append((arrival_id, justified))


class FakeIncidentService:
    def __init__(self):
        self.calls = []
        self.list_args = None

    def list_incidents(self, *, filters=None, date_range=None, status_in=None):
        self.list_args = {"filters": filters, "date_range": date_range, "status_in": status_in}
        return [
            Incident(
                incident_id=4,
                student_id=1,
                reincidence_level=2,
                status="Activa",
                registered_at=datetime(2024, 4, 10, 15, 0),
                educational_level="Primaria",
                grade="3ro",
                section="A",
                fault=FaultType(fault_id=1, name="Uniforme"),
            )
        ]

    def justify(self, incident_id, *, user_id, reason):
        self.calls.append(("justify", incident_id, user_id, reason))

    def annul(self, incident_id, *, user_id, reason):
        self.calls.append(("annul", incident_id, user_id, reason))


ANA = Student(student_id=1, full_name="Ana", educational_level="Primaria", grade="3ro", section="A")


def _client(*, students_fail=False):
    reporting = ReportingService(
        FakeStudentRepo([ANA], fail=students_fail),
        FakeArrivalRepo([ArrivalRecord(1, 1, date(2024, 2, 1), time(7, 55), "A tiempo")]),
        FakeIncidentRepo(),
        timezone=LIMA,
    )
    container = SimpleNamespace(
        reporting_service=reporting,
        arrival_service=FakeArrivalService(),
        incident_service=FakeIncidentService(),
    )
    app = Flask(__name__)
    register_reports(app, container)
    register_attendance(app, container)
    register_incidents(app, container)
    return app.test_client(), container


def test_attendance_report_json():
    client, _ = _client()

    resp = client.get("/api/reports/attendance?year=2024&month=2&level=all")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["report"]["date_range"]["day_count"] == 29
    assert body["report"]["rows"][0]["days"][0]["status"] == "A_tiempo"
    assert body["report"]["filters"]["level"] is None
    assert body["report"]["totals"]["on_time"] == 1


def test_invalid_month_is_bad_request():
    client, _ = _client()

    resp = client.get("/api/reports/attendance?year=2024&month=13")

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "InvalidPeriod"


def test_store_failure_is_bad_gateway():
    client, _ = _client(students_fail=True)

    resp = client.get("/api/reports/attendance?year=2024&month=2")

    assert resp.status_code == 502
    assert resp.get_json()["kind"] == FetchFailed.__name__


def test_attendance_csv_export():
    client, _ = _client()

    resp = client.get("/api/reports/attendance.csv?period=bimester&school_year=2024&bimester=1")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attendance_20240301_20240515.csv" in resp.headers["Content-Disposition"]
    lines = resp.data.decode("utf-8-sig").splitlines()
    header = lines[0].split(",")
    assert header[:5] == ["student_id", "full_name", "educational_level", "grade", "section"]
    assert header[5] == "1"
    assert header[-4:] == ["on_time", "late", "justified", "unjustified"]
    assert len(header) == 5 + 76 + 4
    assert lines[1].startswith("1,Ana,Primaria,3ro,A,Sin_registro")


def test_incident_summary_endpoint():
    client, _ = _client()

    resp = client.get("/api/reports/incidents?grade=3ro")

    assert resp.status_code == 200
    summary = resp.get_json()["summary"]
    assert summary["filters"]["grade"] == "3ro"
    assert summary["date_range"] is None
    assert summary["overview"]["total"] == 0


def test_register_arrival_endpoint():
    client, _ = _client()

    resp = client.post("/api/arrivals", json={"student_id": 1, "registered_by": 3})

    assert resp.status_code == 201
    assert resp.get_json()["arrival"] == {
        "arrival_id": 7,
        "student_id": 1,
        "date": "2024-02-01",
        "time": "07:58",
        "status": "A tiempo",
    }


@pytest.mark.parametrize("payload", [{}, {"student_id": "x"}, {"student_id": 99}])
def test_register_arrival_rejects_bad_input(payload):
    client, _ = _client()

    resp = client.post("/api/arrivals", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_justify_arrival_endpoint():
    client, container = _client()

    assert client.post("/api/arrivals/7/justification", json={}).status_code == 400
    assert client.post("/api/arrivals/7/justification", json={"justified": True}).status_code == 200
    assert container.arrival_service.justified == [(7, True)]


def test_incident_transition_endpoints():
    client, container = _client()

    assert client.post("/api/incidents/4/justify", json={"reason": "sin usuario"}).status_code == 400
    assert client.post("/api/incidents/4/annul", json={"user_id": 2, "reason": "Registrada por error"}).status_code == 200
    assert container.incident_service.calls == [("annul", 4, 2, "Registrada por error")]


def test_register_arrival_rejects_non_numeric_registered_by():
    client, _ = _client()

    resp = client.post("/api/arrivals", json={"student_id": 1, "registered_by": "abc"})

    assert resp.status_code == 400
    assert resp.get_json()["kind"] == "ValidationError"


@pytest.mark.parametrize("value", ["false", "0", 0, 1, None])
def test_justification_requires_a_json_boolean(value):
    client, container = _client()

    resp = client.post("/api/arrivals/3/justification", json={"justified": value})

    assert resp.status_code == 400
    assert container.arrival_service.justified == []


def test_justification_false_is_kept_false():
    client, container = _client()

    assert client.post("/api/arrivals/3/justification", json={"justified": False}).status_code == 200
    assert container.arrival_service.justified == [(3, False)]


def test_list_incidents_endpoint():
    client, container = _client()

    resp = client.get("/api/incidents?status=Activa&grade=3ro&period=month&year=2024&month=4")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["incidents"][0]["fault_type"] == "Uniforme"
    assert body["incidents"][0]["registered_at"] == "2024-04-10T15:00:00"
    args = container.incident_service.list_args
    assert args["status_in"] == [IncidentStatus.ACTIVE]
    assert args["filters"].grade == "3ro"
    assert args["date_range"].end == date(2024, 4, 30)


def test_list_incidents_rejects_unknown_status():
    client, _ = _client()

    resp = client.get("/api/incidents?status=Cerrada")

    assert resp.status_code == 400


def test_arrival_day_summary_endpoint():
    client, _ = _client()

    resp = client.get("/api/reports/arrivals/today")

    assert resp.status_code == 200
    summary = resp.get_json()["summary"]
    assert set(summary) == {"date", "total", "on_time", "late", "justified", "unjustified"}
