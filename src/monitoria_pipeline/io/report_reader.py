"""Readers for the monthly attendance export (CSV or Excel)."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from ..utils import get_logger

_log = get_logger(__name__)

_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def read_attendance_report(
    path: str | Path,
    input_config: dict[str, Any] | None = None,
) -> list[dict[str, str]]:
    """Read the export into a list of header -> string rows.

    Headers are trimmed and fully blank rows dropped. Every cell comes back
    as a string; Excel date cells are rendered as YYYY-MM-DD.

    Args:
        path: CSV or XLSX file.
        input_config: Optional dict with 'delimiter', 'encoding',
            'fallback_encoding' (used when 'encoding' fails to decode), 'sheet'.
    """
    cfg = input_config or {}
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Attendance report not found: {path}")

    suffix = path.suffix.lower()
    if suffix in {".csv", ".txt"}:
        df = _read_csv(path, cfg)
    elif suffix in _EXCEL_SUFFIXES:
        df = _read_excel(path, cfg)
    else:
        raise ValueError(f"Unsupported report format {suffix!r} (expected .csv or .xlsx): {path}")

    df.columns = [str(c).strip() for c in df.columns]
    if not df.empty:
        df = df[(df.apply(lambda col: col.str.strip()) != "").any(axis=1)]
    _log.debug("Read attendance report: %s rows, columns %s", len(df), list(df.columns))
    return df.to_dict(orient="records")


def _read_csv(path: Path, cfg: dict[str, Any]) -> pd.DataFrame:
    if path.stat().st_size == 0:
        _log.warning("Attendance report %s is empty", path)
        return pd.DataFrame()
    encoding = cfg.get("encoding") or "utf-8-sig"
    try:
        return _parse_csv(path, cfg, encoding)
    except UnicodeDecodeError as e:
        fallback = cfg.get("fallback_encoding") or "cp1252"
        _log.warning("Attendance report %s is not valid %s (%s); reading it as %s", path, encoding, e.reason, fallback)
        return _parse_csv(path, cfg, fallback, encoding_errors="replace")


def _parse_csv(path: Path, cfg: dict[str, Any], encoding: str, encoding_errors: str = "strict") -> pd.DataFrame:
    delimiter = cfg.get("delimiter")
    options: dict[str, Any] = {
        "sep": delimiter if delimiter else None,
        "engine": "python",
        "dtype": str,
        "keep_default_na": False,
        "skip_blank_lines": True,
        "encoding": encoding,
        "encoding_errors": encoding_errors,
    }
    try:
        width = len(pd.read_csv(path, nrows=0, **options).columns)
    except pd.errors.EmptyDataError:
        _log.warning("Attendance report %s is empty", path)
        return pd.DataFrame()

    # Rows wider than the header keep their leading fields.
    def _truncate(bad_line: list[str]) -> list[str]:
        _log.warning("%s: row has %d fields, header has %d; extra fields dropped: %s", path.name, len(bad_line), width, bad_line)
        return bad_line[:width]

    df = pd.read_csv(path, on_bad_lines=_truncate, **options)
    # Short rows come back padded with NaN.
    return df.fillna("")


def _read_excel(path: Path, cfg: dict[str, Any]) -> pd.DataFrame:
    df = pd.read_excel(path, sheet_name=cfg.get("sheet", 0), dtype=object, engine="openpyxl")
    return df.apply(lambda col: col.map(_cell_to_text))


def _cell_to_text(value: Any) -> str:
    if value is None or pd.isna(value):
        return ""
    if isinstance(value, (datetime, pd.Timestamp)):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    return str(value)
