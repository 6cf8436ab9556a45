"""CSV / Excel rendering of attendance summaries."""
import csv
import io
import re
from typing import Any, Iterable, Literal
from urllib.parse import quote

import pandas as pd
from fastapi.responses import StreamingResponse

ExportFormat = Literal["csv", "excel"]

SUMMARY_COLUMNS = ["Student Name", "Class", "Days Present", "Days Absent", "Attendance %"]
CLASS_COLUMNS = ["Student Name", "Days Present", "Days Absent", "Total Days", "Attendance Rate (%)"]

CSV_MEDIA_TYPE = "text/csv"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def summary_frame(rows: Iterable[dict[str, Any]], class_names: dict[str, str]) -> pd.DataFrame:
    """Summary rows (from analytics.student_summary) as the export table."""
    data = [
        {
            "Student Name": row["name"],
            "Class": class_names.get(row["class_id"], ""),
            "Days Present": row["days_present"],
            "Days Absent": row["days_absent"],
            "Attendance %": row["percent"],
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=SUMMARY_COLUMNS)


def class_frame(rows: Iterable[dict[str, Any]]) -> pd.DataFrame:
    data = [
        {
            "Student Name": row["name"],
            "Days Present": row["days_present"],
            "Days Absent": row["days_absent"],
            "Total Days": row["total_days"],
            "Attendance Rate (%)": row["percent"],
        }
        for row in rows
    ]
    return pd.DataFrame(data, columns=CLASS_COLUMNS)


def to_csv(df: pd.DataFrame) -> str:
    """Bare header line, then every field quoted."""
    stream = io.StringIO()
    stream.write(",".join(df.columns) + "\n")
    df.to_csv(stream, index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return stream.getvalue()


def to_excel(df: pd.DataFrame, sheet_name: str = "Attendance") -> bytes:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    return output.getvalue()


def content_disposition(filename: str) -> str:
    """Attachment header keeping the real name.

    ``filename`` gets an ASCII fallback; ``filename*`` carries the UTF-8 name.
    """
    name = re.sub(r'["\r\n]', "", filename).strip() or "attendance"
    fallback = name.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(name, safe='')}"


def export_response(df: pd.DataFrame, stem: str, export_format: ExportFormat = "csv") -> StreamingResponse:
    if export_format == "csv":
        return StreamingResponse(
            iter([to_csv(df)]),
            media_type=CSV_MEDIA_TYPE,
            headers={"Content-Disposition": content_disposition(f"{stem}.csv")},
        )
    if export_format == "excel":
        return StreamingResponse(
            io.BytesIO(to_excel(df)),
            media_type=EXCEL_MEDIA_TYPE,
            headers={"Content-Disposition": content_disposition(f"{stem}.xlsx")},
        )
    raise ValueError(f"Unsupported export format: {export_format}")
