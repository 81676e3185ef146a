from __future__ import annotations

from pathlib import Path

import pandas as pd

from monitoria_pipeline.core.models import AllocationRecord, AnalystStreak, EligibleAnalyst, PipelineResult
from monitoria_pipeline.report import assemble_report, write_report
from monitoria_pipeline.report.assembler import GRAND_TOTAL_LABEL


def _result() -> PipelineResult:
    return PipelineResult(
        streaks=[AnalystStreak("Edu", 12), AnalystStreak("Ana", 11), AnalystStreak("Caio", 14)],
        eligible=[
            EligibleAnalyst("Edu", "Auto", "Auto - N1"),
            EligibleAnalyst("Ana", "Auto", "Auto - N1"),
            EligibleAnalyst("Caio", "Check", "ID - N1"),
        ],
        allocations=[
            AllocationRecord("Edu", "Auto", 10, "Auto - N1"),
            AllocationRecord("Ana", "Auto", 10, "Auto - N1"),
            AllocationRecord("Caio", "Check", 640, "ID - N1"),
            AllocationRecord("Zé", "B2C", 30, None),
        ],
        unallocated={"Doc": 20},
    )


def test_eligible_view_sorted_by_name() -> None:
    views = assemble_report(_result())
    assert views.eligible["Analista Elegível"].tolist() == ["Ana", "Caio", "Edu"]
    assert views.eligible["Dias Consecutivos (Máx)"].tolist() == [11, 14, 12]


def test_summary_groups_by_team_with_totals() -> None:
    summary = assemble_report(_result()).summary
    rows = list(summary.itertuples(index=False, name=None))
    assert rows == [
        ("Auto - N1", "Auto", 20),
        ("Total Auto - N1", "", 20),
        ("ID - N1", "Check", 640),
        ("Total ID - N1", "", 640),
        (GRAND_TOTAL_LABEL, "", 660),
    ]


def test_detail_sorted_by_team_then_name() -> None:
    detail = assemble_report(_result()).detail
    assert detail["Analista"].tolist() == ["Zé", "Ana", "Edu", "Caio"]
    assert detail["Monitor"].tolist() == ["N/A", "Auto - N1", "Auto - N1", "ID - N1"]


def test_unallocated_view() -> None:
    views = assemble_report(_result())
    assert views.unallocated.to_dict(orient="records") == [{"Produto": "Doc", "Monitorias Não Distribuídas": 20}]
    assert not views.nothing_to_allocate


def test_empty_result_views_keep_columns() -> None:
    views = assemble_report(PipelineResult(streaks=[], eligible=[], allocations=[]))
    assert views.nothing_to_allocate
    assert list(views.detail.columns) == ["Analista", "Monitor", "Produto", "Qtd. Monitorias"]
    assert views.detail.empty
    assert views.summary.iloc[-1]["Qtd. Monitorias"] == 0


def test_write_excel_report(tmp_path: Path) -> None:
    out = write_report(assemble_report(_result()), tmp_path / "out" / "monitorias.xlsx")
    assert out.exists()
    sheets = pd.read_excel(out, sheet_name=None)
    assert list(sheets) == ["Elegiveis", "Resumo", "Detalhe", "Nao Distribuido"]
    assert sheets["Detalhe"]["Qtd. Monitorias"].sum() == 690


def test_write_excel_report_flags_nothing_to_allocate(tmp_path: Path) -> None:
    views = assemble_report(PipelineResult(streaks=[], eligible=[], allocations=[]))
    out = write_report(views, tmp_path / "vazio.xlsx")
    sheets = pd.read_excel(out, sheet_name=None)
    assert "Aviso" in sheets


def test_write_csv_report(tmp_path: Path) -> None:
    out = write_report(assemble_report(_result()), tmp_path / "monitorias.csv")
    assert out == tmp_path / "monitorias.csv"
    detail = pd.read_csv(out, encoding="utf-8-sig")
    assert len(detail) == 4
    for name in ("elegiveis", "resumo", "nao_distribuido"):
        assert (tmp_path / f"monitorias_{name}.csv").exists()
