"""Attendance aggregation: rates, per-student summaries and weekly trends.

Everything here works on plain objects exposing ``student_id``, ``date`` and
``present`` attributes, so callers can pass Beanie documents or lightweight
stand-ins alike.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Protocol


class AttendanceLike(Protocol):
    student_id: str
    date: date
    present: bool


def round_half_up(value: float, digits: int = 0) -> float | int:
    """Round like a spreadsheet does (2.5 -> 3), not banker's rounding."""
    quant = Decimal(1).scaleb(-digits)
    rounded = Decimal(str(value)).quantize(quant, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def attendance_rate(records: Iterable[AttendanceLike], digits: int = 0) -> float | int:
    """Percentage of present records; 0 when nothing was recorded."""
    total = 0
    present = 0
    for record in records:
        total += 1
        if record.present:
            present += 1
    if total == 0:
        return 0.0 if digits else 0
    return round_half_up(present / total * 100, digits)


def status_label(rate: float) -> str:
    if rate >= 90:
        return "Excellent"
    if rate >= 80:
        return "Good"
    if rate >= 70:
        return "Fair"
    return "Poor"


def risk_level(rate: float) -> str:
    """Risk band shown on a student profile."""
    if rate < 70:
        return "high"
    if rate < 85:
        return "medium"
    return "low"


def filter_by_date(
    records: Iterable[AttendanceLike],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[AttendanceLike]:
    """Keep records within [start, end]; either bound may be omitted."""
    out = []
    for record in records:
        if start and record.date < start:
            continue
        if end and record.date > end:
            continue
        out.append(record)
    return out


def group_by_student(records: Iterable[AttendanceLike]) -> dict[str, list[AttendanceLike]]:
    grouped: dict[str, list[AttendanceLike]] = defaultdict(list)
    for record in records:
        grouped[record.student_id].append(record)
    return grouped


def student_summary(students: Iterable[Any], records: Iterable[AttendanceLike]) -> list[dict[str, Any]]:
    """One row per student with days present/absent and an integer percent.

    ``students`` need ``id``, ``name`` and ``class_id`` attributes.
    """
    grouped = group_by_student(records)
    rows = []
    for student in students:
        student_id = str(student.id)
        history = grouped.get(student_id, [])
        days_present = sum(1 for r in history if r.present)
        days_absent = len(history) - days_present
        percent = attendance_rate(history)
        rows.append(
            {
                "student_id": student_id,
                "name": student.name,
                "class_id": student.class_id,
                "days_present": days_present,
                "days_absent": days_absent,
                "total_days": len(history),
                "percent": percent,
                "status": status_label(percent),
            }
        )
    return rows


def week_label(day: date) -> str:
    """ISO week label, e.g. ``2025-W07``."""
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def weekly_trend(records: Iterable[AttendanceLike]) -> list[dict[str, Any]]:
    """Present/total per ISO week, sorted by week label."""
    weeks: dict[str, dict[str, int]] = {}
    for record in records:
        bucket = weeks.setdefault(week_label(record.date), {"present": 0, "total": 0})
        bucket["total"] += 1
        if record.present:
            bucket["present"] += 1
    return [
        {
            "week": week,
            "present": counts["present"],
            "total": counts["total"],
            "percent": round_half_up(counts["present"] / counts["total"] * 100) if counts["total"] else 0,
        }
        for week, counts in sorted(weeks.items())
    ]


def group_rates(
    groups: Iterable[tuple[str, list[str]]],
    records: Iterable[AttendanceLike],
) -> list[dict[str, Any]]:
    """Attendance rate per group of students, keyed by the group id.

    Groups without students are omitted, matching how the class and school
    rate tables are displayed.
    """
    grouped = group_by_student(records)
    rates = []
    for group, student_ids in groups:
        if not student_ids:
            continue
        history = [r for sid in student_ids for r in grouped.get(sid, [])]
        rates.append({"group": group, "percent": attendance_rate(history)})
    return rates
