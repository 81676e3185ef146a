"""Report writer: write the assembled views to Excel or CSV."""

from pathlib import Path

import pandas as pd

from ..utils import get_logger
from .assembler import ReportViews

_log = get_logger(__name__)

NOTHING_TO_ALLOCATE_MESSAGE = "Nenhum analista elegível encontrado para distribuir as monitorias."


def _sheets(views: ReportViews) -> dict[str, pd.DataFrame]:
    return {
        "Elegiveis": views.eligible,
        "Resumo": views.summary,
        "Detalhe": views.detail,
        "Nao Distribuido": views.unallocated,
    }


def write_report(views: ReportViews, path: str | Path) -> Path:
    """Write the report and return the path of the main file.

    An ``.xlsx`` path gets one sheet per view. A ``.csv`` path receives the
    detail view, with the other views written next to it as
    ``<stem>_<view>.csv``.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() == ".csv":
        _write_csv(views, path)
    else:
        _write_excel(views, path)

    if views.nothing_to_allocate:
        _log.warning(NOTHING_TO_ALLOCATE_MESSAGE)
    _log.info("Wrote monitoria report to %s", path)
    return path


def _write_excel(views: ReportViews, path: Path) -> None:
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, df in _sheets(views).items():
            df.to_excel(writer, sheet_name=name, index=False)
        if views.nothing_to_allocate:
            pd.DataFrame({"Aviso": [NOTHING_TO_ALLOCATE_MESSAGE]}).to_excel(writer, sheet_name="Aviso", index=False)


def _write_csv(views: ReportViews, path: Path) -> None:
    views.detail.to_csv(path, index=False, encoding="utf-8-sig")
    for name, df in _sheets(views).items():
        if name == "Detalhe":
            continue
        suffix = name.lower().replace(" ", "_")
        df.to_csv(path.with_name(f"{path.stem}_{suffix}.csv"), index=False, encoding="utf-8-sig")

