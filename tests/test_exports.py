from __future__ import annotations

import io
from datetime import date

import pandas as pd
import pytest

from app.services.analytics import student_summary
from app.services.exports import (
    CLASS_COLUMNS,
    SUMMARY_COLUMNS,
    class_frame,
    content_disposition,
    export_response,
    summary_frame,
    to_csv,
    to_excel,
)
from factories import StudentStub, marks


def _rows():
    students = [StudentStub("s1", "Aline", "c1"), StudentStub("s2", 'Jean "JB" Bosco', "c1")]
    records = marks("s1", date(2025, 3, 3), "PPA") + marks("s2", date(2025, 3, 3), "PPPP")
    return student_summary(students, records)


def test_summary_csv_has_expected_header_and_values():
    csv_text = to_csv(summary_frame(_rows(), {"c1": "P4 Blue"}))
    lines = csv_text.splitlines()
    assert lines[0] == ",".join(SUMMARY_COLUMNS)
    assert lines[1] == '"Aline","P4 Blue","2","1","67"'
    # Embedded quotes are escaped by doubling them
    assert lines[2] == '"Jean ""JB"" Bosco","P4 Blue","4","0","100"'
    assert csv_text.endswith("\n") and "\r" not in csv_text


def test_summary_frame_unknown_class_is_blank():
    df = summary_frame(_rows(), {})
    assert list(df["Class"]) == ["", ""]


def test_class_frame_columns_and_totals():
    df = class_frame(_rows())
    assert list(df.columns) == CLASS_COLUMNS
    assert df.loc[0, "Total Days"] == 3
    assert df.loc[1, "Attendance Rate (%)"] == 100


def test_empty_frame_still_has_header():
    assert to_csv(class_frame([])).strip() == ",".join(CLASS_COLUMNS)


def test_excel_export_round_trips_through_openpyxl():
    data = to_excel(class_frame(_rows()))
    df = pd.read_excel(io.BytesIO(data), sheet_name="Attendance")
    assert list(df["Student Name"]) == ["Aline", 'Jean "JB" Bosco']


def test_content_disposition_keeps_class_name():
    assert content_disposition("P4 Blue_attendance.csv") == (
        "attachment; filename=\"P4 Blue_attendance.csv\"; filename*=UTF-8''P4%20Blue_attendance.csv"
    )


def test_content_disposition_non_ascii_and_header_breaking_chars():
    header = content_disposition('Année "1"\r\n_attendance.csv')
    assert header.startswith('attachment; filename="Ann_e 1_attendance.csv";')
    assert header.endswith("filename*=UTF-8''Ann%C3%A9e%201_attendance.csv")
    assert "\r" not in header and "\n" not in header


def test_export_response_headers():
    response = export_response(class_frame(_rows()), "P4 Blue_attendance", "csv")
    assert response.media_type == "text/csv"
    assert response.headers["content-disposition"].startswith('attachment; filename="P4 Blue_attendance.csv"')

    response = export_response(class_frame(_rows()), "attendance_summary", "excel")
    assert 'filename="attendance_summary.xlsx"' in response.headers["content-disposition"]


def test_export_response_rejects_unknown_format():
    with pytest.raises(ValueError):
        export_response(class_frame(_rows()), "attendance_summary", "pdf")
