from datetime import date, time

from src.school_reports.school_reports.attendance.matrix import MatrixBuilder, index_records
from src.school_reports.school_reports.attendance.model import ArrivalRecord, Totals
from src.school_reports.school_reports.core.enums import DayStatus
from src.school_reports.school_reports.periods.model import MonthPeriod
from src.school_reports.school_reports.periods.resolver import DateRangeResolver
from src.school_reports.school_reports.students.model import Student, StudentFilters

FEB_2024 = DateRangeResolver().resolve(MonthPeriod(year=2024, month=2))


def _student(student_id, name, level="Primaria", grade="3ro", section="A"):
    return Student(student_id=student_id, full_name=name, educational_level=level, grade=grade, section=section)


def _arrival(arrival_id, student_id, day, status, at=time(7, 50), justification=None):
    return ArrivalRecord(
        arrival_id=arrival_id,
        student_id=student_id,
        arrival_date=date(2024, 2, day),
        arrival_time=at,
        status=status,
        justification=justification,
    )


def test_february_example_row():
    ana = _student(1, "Ana")
    records = [
        _arrival(1, 1, 1, "A tiempo", time(7, 55)),
        _arrival(2, 1, 2, "Tarde", time(8, 10)),
    ]

    rows = MatrixBuilder().build([ana], FEB_2024, index_records(records, FEB_2024))

    assert len(rows) == 1
    row = rows[0]
    assert len(row.cells) == 29
    assert row.cells[0].status == DayStatus.ON_TIME
    assert row.cells[0].time == time(7, 55)
    assert row.cells[1].status == DayStatus.LATE
    assert all(c.status == DayStatus.NO_RECORD for c in row.cells[2:])
    assert row.totals == Totals(on_time=1, late=1, justified=0, unjustified=0)


def test_every_row_has_one_cell_per_day_numbered_from_one():
    rows = MatrixBuilder().build([_student(1, "Ana"), _student(2, "Beto")], FEB_2024, {})

    for row in rows:
        assert [c.day for c in row.cells] == list(range(1, 30))
        assert row.cells[-1].date == date(2024, 2, 29)


def test_student_without_records_gets_empty_row():
    rows = MatrixBuilder().build([_student(7, "Zoe")], FEB_2024, {})

    assert all(c.status == DayStatus.NO_RECORD and c.time is None for c in rows[0].cells)
    assert rows[0].totals == Totals()


def test_no_students_gives_no_rows():
    assert MatrixBuilder().build([], FEB_2024, {}) == []


def test_rows_sorted_by_name_then_id():
    students = [_student(3, "Carla"), _student(2, "Ana"), _student(1, "Ana")]

    rows = MatrixBuilder().build(students, FEB_2024, {})

    assert [(r.student.full_name, r.student.student_id) for r in rows] == [("Ana", 1), ("Ana", 2), ("Carla", 3)]


def test_filters_drop_students_of_other_classrooms():
    students = [_student(1, "Ana", grade="3ro"), _student(2, "Beto", grade="4to")]

    rows = MatrixBuilder().build(students, FEB_2024, {}, StudentFilters(grade="4to"))

    assert [r.student.student_id for r in rows] == [2]


def test_justified_cells_and_totals():
    records = [
        _arrival(1, 1, 5, "Tarde", justification="Justificada"),
        _arrival(2, 1, 6, "Tarde", justification="Injustificada"),
        _arrival(3, 1, 7, "Desconocido"),
    ]

    row = MatrixBuilder().build([_student(1, "Ana")], FEB_2024, index_records(records, FEB_2024))[0]

    assert row.cells[4].status == DayStatus.JUSTIFIED
    assert row.cells[5].status == DayStatus.UNJUSTIFIED
    assert row.cells[6].status == DayStatus.NO_RECORD
    assert row.cells[6].time is None
    assert row.totals == Totals(on_time=0, late=0, justified=1, unjustified=1)


def test_global_totals_equal_sum_of_rows():
    records = [
        _arrival(1, 1, 1, "A tiempo"),
        _arrival(2, 2, 1, "Tarde"),
        _arrival(3, 2, 2, "Tarde", justification="Justificada"),
    ]
    builder = MatrixBuilder()
    rows = builder.build([_student(1, "Ana"), _student(2, "Beto")], FEB_2024, index_records(records, FEB_2024))

    assert builder.global_totals(rows) == Totals(on_time=1, late=1, justified=1, unjustified=0)


def test_build_is_idempotent():
    records = [_arrival(1, 1, 3, "Tarde")]
    index = index_records(records, FEB_2024)
    builder = MatrixBuilder()

    first = builder.build([_student(1, "Ana")], FEB_2024, index)
    second = builder.build([_student(1, "Ana")], FEB_2024, index)

    assert first == second


def test_index_keeps_first_record_and_ignores_out_of_range():
    records = [
        _arrival(1, 1, 3, "A tiempo"),
        _arrival(2, 1, 3, "Tarde"),
        ArrivalRecord(
            arrival_id=3,
            student_id=1,
            arrival_date=date(2024, 3, 1),
            arrival_time=time(7, 0),
            status="A tiempo",
        ),
    ]

    index = index_records(records, FEB_2024)

    assert list(index[1].keys()) == [3]
    assert index[1][3].arrival_id == 1


def test_row_to_dict_shape():
    row = MatrixBuilder().build([_student(1, "Ana")], FEB_2024, index_records([_arrival(1, 1, 1, "A tiempo", time(7, 5))], FEB_2024))[0]

    out = row.to_dict()

    assert out["student"]["full_name"] == "Ana"
    assert out["days"][0] == {"day": 1, "date": "2024-02-01", "status": "A_tiempo", "time": "07:05"}
    assert out["days"][1]["status"] == "Sin_registro"
    assert out["totals"]["on_time"] == 1
