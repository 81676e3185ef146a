from __future__ import annotations

from datetime import date

import pytest

from monitoria_pipeline.core.models import Accepted, Rejected
from monitoria_pipeline.core.normalizer import (
    ColumnAliases,
    lookup_field,
    normalize_row,
    parse_work_date,
)


@pytest.mark.parametrize(
    "text",
    ["2024-03-05", "2024/03/05", "05/03/2024", "05-03-2024", "  05/03/2024 "],
)
def test_parse_work_date_accepts_both_shapes(text: str) -> None:
    assert parse_work_date(text) == date(2024, 3, 5)


def test_iso_and_day_first_dates_are_the_same_day() -> None:
    assert parse_work_date("2024-03-05") == parse_work_date("05/03/2024")


@pytest.mark.parametrize(
    "text",
    [
        "",
        None,
        "5/3/2024",  # single-digit day/month is not one of the shapes
        "2024-3-5",
        "03/05/24",
        "2024-03-05T08:00:00",
        "31/02/2024",  # impossible date
        "13/13/2024",
        "March 5, 2024",
        "\uff12\uff10\uff12\uff14-03-05",  # full-width digits
        "\u0660\u0665/\u0660\u0663/\u0662\u0660\u0662\u0664",  # Arabic-Indic digits
    ],
)
def test_parse_work_date_rejects_other_shapes(text: str | None) -> None:
    assert parse_work_date(text) is None


def test_day_first_is_never_read_month_first() -> None:
    # 12/01/2024 is 12 January, not 1 December.
    assert parse_work_date("12/01/2024") == date(2024, 1, 12)


def test_lookup_field_ignores_case_accents_and_spaces() -> None:
    row = {"  sub operacao ": "Auto - N1", "nome": "Ana"}
    assert lookup_field(row, ("SUB OPERAÇÃO",)) == "Auto - N1"
    assert lookup_field(row, ("NOME",)) == "Ana"


def test_lookup_field_tries_aliases_in_order_and_skips_blanks() -> None:
    row = {"NOME": "  ", "ANALISTA": "Bea"}
    assert lookup_field(row, ("NOME", "ANALISTA")) == "Bea"
    assert lookup_field(row, ("MISSING",)) is None


def test_normalize_row_builds_canonical_record() -> None:
    row = {
        "Nome": " Ana ",
        "DATA": "01/03/2024",
        "ESCALA": "Escalado",
        "SubOperacao": "Auto",
        "ProdutoPrincipal": "Auto",
    }
    outcome = normalize_row(row)
    assert isinstance(outcome, Accepted)
    rec = outcome.record
    assert rec.analyst_name == "Ana"
    assert rec.work_date == date(2024, 3, 1)
    assert rec.attendance_status == "Escalado"
    assert rec.team_label == "Auto"
    assert rec.product_label == "Auto"


def test_normalize_row_accepts_typo_name_column() -> None:
    outcome = normalize_row({"NALISTA": "Caio", "DATA": "2024-03-04"})
    assert isinstance(outcome, Accepted)
    assert outcome.record.analyst_name == "Caio"
    assert outcome.record.attendance_status == ""
    assert outcome.record.team_label is None


def test_normalize_row_rejects_missing_name() -> None:
    outcome = normalize_row({"NOME": "", "DATA": "01/03/2024"})
    assert outcome == Rejected("missing_name")


def test_normalize_row_rejects_bad_date_without_raising() -> None:
    outcome = normalize_row({"NOME": "Ana", "DATA": "03/2024"})
    assert isinstance(outcome, Rejected)
    assert outcome.reason == "invalid_date"


def test_normalize_row_treats_nan_cells_as_missing() -> None:
    outcome = normalize_row({"NOME": float("nan"), "DATA": "01/03/2024"})
    assert isinstance(outcome, Rejected)
    assert outcome.reason == "missing_name"


def test_custom_aliases_from_config() -> None:
    aliases = ColumnAliases.from_config({"name": "COLABORADOR", "date": ["DIA", "DATA"]})
    assert aliases.name == ("COLABORADOR",)
    assert aliases.date == ("DIA", "DATA")
    assert aliases.status == ColumnAliases().status

    outcome = normalize_row({"Colaborador": "Ana", "Dia": "2024-03-01"}, aliases)
    assert isinstance(outcome, Accepted)
    assert outcome.record.work_date == date(2024, 3, 1)
