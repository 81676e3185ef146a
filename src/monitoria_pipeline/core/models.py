"""Value types passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Mapping


RejectReason = Literal["missing_name", "invalid_date"]


@dataclass(frozen=True)
class CanonicalAttendance:
    analyst_name: str
    work_date: date
    attendance_status: str
    team_label: str | None = None
    product_label: str | None = None


@dataclass(frozen=True)
class Accepted:
    record: CanonicalAttendance


@dataclass(frozen=True)
class Rejected:
    reason: RejectReason
    detail: str = ""


NormalizedRow = Accepted | Rejected


@dataclass(frozen=True)
class AnalystStreak:
    analyst_name: str
    max_consecutive_days: int


@dataclass(frozen=True)
class EligibleAnalyst:
    analyst_name: str
    product: str | None
    team_label: str | None = None


@dataclass(frozen=True)
class AllocationRecord:
    analyst_name: str
    product: str
    assigned_count: int
    team_label: str | None = None


@dataclass(frozen=True)
class PipelineResult:
    """Everything one run produces; the report layer only reads from this."""

    streaks: list[AnalystStreak]
    eligible: list[EligibleAnalyst]
    allocations: list[AllocationRecord]
    unallocated: Mapping[str, int] = field(default_factory=dict)
    rows_read: int = 0
    rows_rejected: int = 0

    @property
    def nothing_to_allocate(self) -> bool:
        return not self.allocations

    @property
    def total_assigned(self) -> int:
        return sum(a.assigned_count for a in self.allocations)
