"""Fixtures and helpers for pipeline tests."""
from __future__ import annotations

import csv
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, Iterable, List, Sequence

from monitoria_pipeline.core.models import CanonicalAttendance

EXPORT_COLUMNS: Sequence[str] = ("NOME", "DATA", "ESCALA", "SUB OPERAÇÃO", "PRODUTO")


def day_range(start: date, end: date, *, weekdays_only: bool = False) -> List[date]:
    """Inclusive list of dates from ``start`` to ``end``."""
    days = []
    current = start
    while current <= end:
        if not weekdays_only or current.weekday() < 5:
            days.append(current)
        current += timedelta(days=1)
    return days


def attendance(
    name: str,
    day: date,
    status: str = "escalado",
    team: str | None = None,
    product: str | None = None,
) -> CanonicalAttendance:
    return CanonicalAttendance(
        analyst_name=name,
        work_date=day,
        attendance_status=status,
        team_label=team,
        product_label=product,
    )


def attendance_for(name: str, days: Iterable[date], **kwargs) -> List[CanonicalAttendance]:
    return [attendance(name, d, **kwargs) for d in days]


def export_row(
    name: str,
    day: date | str,
    *,
    status: str = "escalado",
    team: str = "",
    product: str = "",
) -> Dict[str, str]:
    """Build one raw export row; dates are written DD/MM/YYYY like the monthly file."""
    text = day.strftime("%d/%m/%Y") if isinstance(day, date) else day
    return {
        "NOME": name,
        "DATA": text,
        "ESCALA": status,
        "SUB OPERAÇÃO": team,
        "PRODUTO": product,
    }


def export_rows(name: str, days: Iterable[date], **kwargs) -> List[Dict[str, str]]:
    return [export_row(name, d, **kwargs) for d in days]


def write_export(path: Path, rows: Iterable[Dict[str, str]], *, delimiter: str = ",") -> Path:
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=list(EXPORT_COLUMNS), delimiter=delimiter)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path
