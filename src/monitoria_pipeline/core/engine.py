"""Pipeline engine: orchestrates normalize → streaks → eligibility → allocation."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Iterable, Mapping

from ..io import read_attendance_report
from ..report import assemble_report, write_report
from ..utils import setup_logging, get_logger
from .allocation import allocate_quotas, unallocated_quota
from .eligibility import project_eligible
from .models import Accepted, CanonicalAttendance, PipelineResult
from .normalizer import normalize_row
from .settings import PipelineSettings, build_settings
from .streaks import detect_streaks

_log = get_logger(__name__)


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    settings: PipelineSettings,
) -> tuple[list[CanonicalAttendance], Counter]:
    """Normalize every row; returns accepted records and a count per reject reason."""
    records: list[CanonicalAttendance] = []
    rejects: Counter = Counter()
    for i, row in enumerate(rows):
        outcome = normalize_row(row, settings.aliases)
        if isinstance(outcome, Accepted):
            records.append(outcome.record)
        else:
            rejects[outcome.reason] += 1
            _log.debug("Row %d skipped (%s) %s", i, outcome.reason, outcome.detail)
    return records, rejects


def allocate_from_rows(
    rows: Iterable[Mapping[str, Any]],
    settings: PipelineSettings | None = None,
) -> PipelineResult:
    """Run the whole pipeline over already-parsed rows."""
    settings = settings or PipelineSettings()
    rows = list(rows)
    records, rejects = normalize_rows(rows, settings)
    if rejects:
        _log.info("Skipped %d of %d rows: %s", sum(rejects.values()), len(rows), dict(rejects))

    streaks = detect_streaks(records, settings.streak)
    if not streaks:
        _log.warning("Nothing to allocate: no analyst worked more than %d consecutive days", settings.streak.threshold)
        return PipelineResult(
            streaks=[],
            eligible=[],
            allocations=[],
            unallocated=unallocated_quota([], settings.quotas),
            rows_read=len(rows),
            rows_rejected=sum(rejects.values()),
        )

    eligible = project_eligible(
        records,
        [s.analyst_name for s in streaks],
        known_products=settings.quotas.products,
    )
    allocations = allocate_quotas(eligible, settings.quotas, keep_zero=settings.keep_zero_allocations)
    result = PipelineResult(
        streaks=streaks,
        eligible=eligible,
        allocations=allocations,
        unallocated=unallocated_quota(allocations, settings.quotas),
        rows_read=len(rows),
        rows_rejected=sum(rejects.values()),
    )
    if result.nothing_to_allocate:
        _log.warning("Nothing to allocate: no eligible analyst maps to a product with quota")
    else:
        _log.info(
            "Allocated %d of %d monitorias to %d analyst(s)",
            result.total_assigned,
            settings.quotas.total,
            len({a.analyst_name for a in allocations}),
        )
    return result


def run_pipeline(
    config: dict[str, Any],
    *,
    report_path: str | Path,
    output_path: str | Path | None = None,
) -> tuple[PipelineResult, Path]:
    """Read the attendance export, allocate, and write the report."""
    setup_logging(config.get("logging", {}))

    paths = config.get("paths", {}) or {}
    out = Path(output_path or Path(paths.get("output_dir", "out")) / paths.get("report_name", "monitorias.xlsx"))

    settings = build_settings(config)
    _log.info("Reading attendance report from %s", report_path)
    rows = read_attendance_report(report_path, config.get("input", {}))
    result = allocate_from_rows(rows, settings)

    views = assemble_report(result)
    written = write_report(views, out)
    return result, written
