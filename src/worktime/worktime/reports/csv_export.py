from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Sequence


@dataclass(frozen=True)
class CsvDownload:
    filename: str
    content: bytes
    mimetype: str = "text/csv"


def format_number(value: float) -> str:
    """Plain decimal text for a number, never in exponent form."""
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    text = f"{value:.10f}".rstrip("0")
    return text.rstrip(".")


def format_cell(value: Any) -> str:
    """String form of a cell; missing and falsy values become empty."""
    if value is None or value is False or value == "" or value == 0:
        return ""
    if value is True:
        return "true"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def render_csv(records: Sequence[Mapping[str, Any]]) -> str:
    """Header from the first record's keys, then every cell wrapped in quotes.

    Embedded quotes are written as-is.
    """
    if not records:
        return ""
    headers = list(records[0].keys())
    lines = [",".join(f'"{h}"' for h in headers)]
    for row in records:
        lines.append(",".join(f'"{format_cell(row.get(h))}"' for h in headers))
    return "\n".join(lines)


def export_csv(records: Sequence[Mapping[str, Any]], filename: str) -> Optional[CsvDownload]:
    if not records:
        return None
    return CsvDownload(filename=filename, content=render_csv(records).encode("utf-8"))


def report_filename(start: Optional[date], end: Optional[date]) -> str:
    s = start.isoformat() if start else "all"
    e = end.isoformat() if end else "all"
    return f"report-{s}-{e}.csv"


def history_filename(month: str, employee_first_name: Optional[str] = None) -> str:
    suffix = f"-{employee_first_name}" if employee_first_name else ""
    return f"historie-{month}{suffix}.csv"


def timesheet_filename(month: str) -> str:
    return f"timesheet-{month}.csv"


def company_report_filename(today: date) -> str:
    return f"company-report-{today.isoformat()}.csv"


