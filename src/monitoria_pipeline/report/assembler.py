"""Assemble allocation results into the summary/detail tables of the report."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pandas as pd

from ..utils import normalize_label

if TYPE_CHECKING:
    from ..core.models import PipelineResult

ELIGIBLE_COLUMNS = ["Analista Elegível", "Dias Consecutivos (Máx)"]
SUMMARY_COLUMNS = ["Responsável", "Produto", "Qtd. Monitorias"]
DETAIL_COLUMNS = ["Analista", "Monitor", "Produto", "Qtd. Monitorias"]
UNALLOCATED_COLUMNS = ["Produto", "Monitorias Não Distribuídas"]

GRAND_TOTAL_LABEL = "TOTAL GERAL DISTRIBUÍDO"


@dataclass(frozen=True)
class ReportViews:
    eligible: pd.DataFrame
    summary: pd.DataFrame
    detail: pd.DataFrame
    unallocated: pd.DataFrame
    nothing_to_allocate: bool = False


def _sort_key(value: str | None) -> str:
    return normalize_label(value)


def build_eligible_view(result: PipelineResult) -> pd.DataFrame:
    rows = [
        {"Analista Elegível": s.analyst_name, "Dias Consecutivos (Máx)": s.max_consecutive_days}
        for s in sorted(result.streaks, key=lambda s: _sort_key(s.analyst_name))
    ]
    return pd.DataFrame(rows, columns=ELIGIBLE_COLUMNS)


def build_summary_view(result: PipelineResult) -> pd.DataFrame:
    """Monitorias per responsável and product, a total per responsável, and a grand total.

    Allocations without a team label are left out of this view.
    """
    per_team: dict[str, dict[str, int]] = {}
    for rec in result.allocations:
        if not rec.team_label:
            continue
        products = per_team.setdefault(rec.team_label, {})
        products[rec.product] = products.get(rec.product, 0) + rec.assigned_count

    rows: list[dict[str, object]] = []
    grand_total = 0
    for team, products in per_team.items():
        for product, count in products.items():
            rows.append({"Responsável": team, "Produto": product, "Qtd. Monitorias": count})
        team_total = sum(products.values())
        grand_total += team_total
        rows.append({"Responsável": f"Total {team}", "Produto": "", "Qtd. Monitorias": team_total})
    rows.append({"Responsável": GRAND_TOTAL_LABEL, "Produto": "", "Qtd. Monitorias": grand_total})
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def build_detail_view(result: PipelineResult) -> pd.DataFrame:
    ordered = sorted(
        result.allocations,
        key=lambda r: (_sort_key(r.team_label), _sort_key(r.analyst_name)),
    )
    rows = [
        {
            "Analista": r.analyst_name,
            "Monitor": r.team_label or "N/A",
            "Produto": r.product or "N/A",
            "Qtd. Monitorias": r.assigned_count,
        }
        for r in ordered
    ]
    return pd.DataFrame(rows, columns=DETAIL_COLUMNS)


def build_unallocated_view(result: PipelineResult) -> pd.DataFrame:
    rows = [{"Produto": p, "Monitorias Não Distribuídas": q} for p, q in result.unallocated.items()]
    return pd.DataFrame(rows, columns=UNALLOCATED_COLUMNS)


def assemble_report(result: PipelineResult) -> ReportViews:
    return ReportViews(
        eligible=build_eligible_view(result),
        summary=build_summary_view(result),
        detail=build_detail_view(result),
        unallocated=build_unallocated_view(result),
        nothing_to_allocate=result.nothing_to_allocate,
    )
