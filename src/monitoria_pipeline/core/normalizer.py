"""Row normalization: raw export rows to canonical attendance records."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

import pandas as pd

from ..utils import normalize_label
from .models import Accepted, CanonicalAttendance, NormalizedRow, Rejected


_ISO_RE = re.compile(r"^([0-9]{4})[-/]([0-9]{2})[-/]([0-9]{2})$")
_DMY_RE = re.compile(r"^([0-9]{2})[-/]([0-9]{2})[-/]([0-9]{4})$")


@dataclass(frozen=True)
class ColumnAliases:
    """Accepted header names per logical field, tried in order."""

    name: tuple[str, ...] = ("NOME", "ANALISTA", "NALISTA")
    date: tuple[str, ...] = ("DATA",)
    status: tuple[str, ...] = ("ESCALA",)
    team: tuple[str, ...] = ("SUB OPERAÇÃO", "SUB OPERACÃO", "SubOperacao")
    product: tuple[str, ...] = ("PRODUTO", "ProdutoPrincipal")

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None) -> "ColumnAliases":
        cfg = cfg or {}
        defaults = cls()
        values = {}
        for key in ("name", "date", "status", "team", "product"):
            raw = cfg.get(key)
            if raw is None:
                values[key] = getattr(defaults, key)
            elif isinstance(raw, str):
                values[key] = (raw,)
            else:
                values[key] = tuple(str(v) for v in raw)
        return cls(**values)


def parse_work_date(value: Any) -> date | None:
    """Parse 'YYYY-MM-DD', 'YYYY/MM/DD', 'DD-MM-YYYY' or 'DD/MM/YYYY'.

    Returns None for any other shape and for impossible dates like 31/02/2024.
    Month-first dates are never recognised.
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    m = _ISO_RE.match(s)
    if m:
        year, month, day = m.groups()
    else:
        m = _DMY_RE.match(s)
        if not m:
            return None
        day, month, year = m.groups()
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def lookup_field(row: Mapping[str, Any], aliases: tuple[str, ...]) -> str | None:
    """Return the first non-blank value among ``aliases`` (case/accent/space insensitive)."""
    by_label: dict[str, list[Any]] = {}
    for key, value in row.items():
        by_label.setdefault(normalize_label(key), []).append(value)
    for alias in aliases:
        for value in by_label.get(normalize_label(alias), []):
            if value is None or (isinstance(value, float) and pd.isna(value)):
                continue
            text = str(value).strip()
            if text:
                return text
    return None


def normalize_row(row: Mapping[str, Any], aliases: ColumnAliases | None = None) -> NormalizedRow:
    """Map one raw row onto :class:`CanonicalAttendance`, or reject it."""
    aliases = aliases or ColumnAliases()
    name = lookup_field(row, aliases.name)
    if not name:
        return Rejected("missing_name")
    raw_date = lookup_field(row, aliases.date)
    work_date = parse_work_date(raw_date)
    if work_date is None:
        return Rejected("invalid_date", detail=f"{name}: {raw_date!r}")
    return Accepted(
        CanonicalAttendance(
            analyst_name=name,
            work_date=work_date,
            attendance_status=lookup_field(row, aliases.status) or "",
            team_label=lookup_field(row, aliases.team),
            product_label=lookup_field(row, aliases.product),
        )
    )
