from __future__ import annotations

import asyncio
from datetime import date, datetime, timedelta
from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from app.api import attendance as attendance_api
from app.models.attendance import AttendanceMark, AttendanceSubmission
from app.services.attendance import attendance_upserts, resolve_marks
from factories import StudentStub

STUDENTS = [StudentStub("s1", "Aline", "c1"), StudentStub("s2", "Bosco", "c1"), StudentStub("s3", "Claire", "c1")]


def test_unmarked_students_are_absent():
    presence = resolve_marks(["s1", "s2", "s3"], [AttendanceMark(student_id="s1", present=True)])
    assert presence == {"s1": True, "s2": False, "s3": False}


def test_mark_for_student_outside_class_rejected():
    with pytest.raises(ValueError, match="s9"):
        resolve_marks(["s1"], [AttendanceMark(student_id="s9", present=True)])


def test_upserts_key_on_student_and_day():
    now = datetime(2025, 5, 6, 8, 30)
    ops = attendance_upserts(STUDENTS[:2], {"s1": True, "s2": False}, "c1", date(2025, 5, 6), "teacher-1", now)
    assert [f for f, _ in ops] == [
        {"student_id": "s1", "date": datetime(2025, 5, 6)},
        {"student_id": "s2", "date": datetime(2025, 5, 6)},
    ]
    assert ops[1][1] == {
        "$set": {
            "class_id": "c1",
            "school_id": "school-1",
            "present": False,
            "marked_by": "teacher-1",
            "marked_at": now,
        }
    }


@pytest.fixture
def recorded(monkeypatch):
    """Patches the route's collaborators; collects the writes it issues."""
    saved = []

    async def get_class_in_scope(user, class_id):
        return SimpleNamespace(id=class_id, school_id="school-1")

    async def class_students(class_id):
        return STUDENTS

    async def save_attendance(ops):
        saved.append(ops)

    async def district_of_school(school_id):
        return "district-1"

    async def flag_students(students, district_id):
        return [SimpleNamespace(student_id="s3")]

    monkeypatch.setattr(attendance_api, "get_class_in_scope", get_class_in_scope)
    monkeypatch.setattr(attendance_api, "class_students", class_students)
    monkeypatch.setattr(attendance_api, "save_attendance", save_attendance)
    monkeypatch.setattr(attendance_api, "district_of_school", district_of_school)
    monkeypatch.setattr(attendance_api, "flag_students", flag_students)
    return saved


def _submit(user, day, marks):
    data = AttendanceSubmission(class_id="c1", date=day, marks=marks)
    return asyncio.run(attendance_api.record_attendance(data, user))


def test_record_counts_unmarked_as_absent(recorded, teacher):
    result = _submit(teacher, date.today(), [AttendanceMark(student_id="s1", present=True)])
    assert (result["present"], result["absent"], result["flagged"]) == (1, 2, ["s3"])
    presents = [update["$set"]["present"] for _, update in recorded[0]]
    assert presents == [True, False, False]


def test_record_future_date_rejected(recorded, teacher):
    with pytest.raises(HTTPException) as exc:
        _submit(teacher, date.today() + timedelta(days=1), [])
    assert exc.value.status_code == 400
    assert recorded == []


def test_record_outsider_mark_rejected(recorded, teacher):
    with pytest.raises(HTTPException) as exc:
        _submit(teacher, date.today(), [AttendanceMark(student_id="s9", present=True)])
    assert exc.value.status_code == 400
    assert "s9" in exc.value.detail
    assert recorded == []


def test_resubmitting_a_day_targets_the_same_records(recorded, teacher):
    day = date.today()
    _submit(teacher, day, [AttendanceMark(student_id="s2", present=False)])
    _submit(teacher, day, [AttendanceMark(student_id="s2", present=True)])
    first, second = recorded
    assert [f for f, _ in first] == [f for f, _ in second]
    assert second[1][1]["$set"]["present"] is True
