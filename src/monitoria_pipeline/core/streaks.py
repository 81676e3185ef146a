"""Consecutive-workday streak detection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable, Literal

from ..utils import fold_text, get_logger
from .models import AnalystStreak, CanonicalAttendance

_log = get_logger(__name__)

STREAK_THRESHOLD = 10

MONDAY = 0
FRIDAY = 4

StatusPolicy = Literal["exclusion", "inclusion"]
GapRule = Literal["calendar", "business_week"]

# (gap_days, prev_weekday, next_weekday) -> extends the streak?
GapPredicate = Callable[[int, int, int], bool]


def calendar_gap(gap_days: int, prev_weekday: int, next_weekday: int) -> bool:
    return gap_days == 1


def business_week_gap(gap_days: int, prev_weekday: int, next_weekday: int) -> bool:
    """Consecutive days, or a Friday followed by the next Monday."""
    if gap_days == 1:
        return True
    return gap_days == 3 and prev_weekday == FRIDAY and next_weekday == MONDAY


GAP_RULES: dict[str, GapPredicate] = {
    "calendar": calendar_gap,
    "business_week": business_week_gap,
}


@dataclass(frozen=True)
class StreakPolicy:
    """How attendance rows qualify as workdays and how gaps are judged.

    ``exclusion`` accepts any status that contains none of ``off_tokens``.
    ``inclusion`` accepts only statuses equal to ``worked_token``.
    """

    status_policy: StatusPolicy = "exclusion"
    gap_rule: GapRule = "calendar"
    threshold: int = STREAK_THRESHOLD
    off_tokens: tuple[str, ...] = ("folga", "férias", "ferias", "off", "leave", "vacation")
    worked_token: str = "escalado"

    def __post_init__(self) -> None:
        if self.status_policy not in ("exclusion", "inclusion"):
            raise ValueError(f"Unknown status policy: {self.status_policy!r}")
        if self.gap_rule not in GAP_RULES:
            raise ValueError(f"Unknown gap rule: {self.gap_rule!r}")
        if self.threshold < 0:
            raise ValueError("threshold must be >= 0")

    @property
    def gap_predicate(self) -> GapPredicate:
        return GAP_RULES[self.gap_rule]

    def is_workday(self, status: str) -> bool:
        s = fold_text(status)
        if self.status_policy == "inclusion":
            return s == fold_text(self.worked_token)
        return not any(fold_text(tok) in s for tok in self.off_tokens)


def max_consecutive_days(dates: Iterable[date], gap_predicate: GapPredicate = calendar_gap) -> int:
    """Longest run of dates linked by ``gap_predicate``; 0 for no dates."""
    ordered = sorted(set(dates))
    if not ordered:
        return 0
    current = 1
    best = 1
    for prev, nxt in zip(ordered, ordered[1:]):
        gap = (nxt - prev).days
        if gap_predicate(gap, prev.weekday(), nxt.weekday()):
            current += 1
        else:
            best = max(best, current)
            current = 1
    return max(best, current)


def collect_workdays(
    records: Iterable[CanonicalAttendance],
    policy: StreakPolicy,
) -> dict[str, set[date]]:
    """Group qualifying dates per analyst, in first-seen analyst order."""
    workdays: dict[str, set[date]] = {}
    for rec in records:
        if not policy.is_workday(rec.attendance_status):
            continue
        workdays.setdefault(rec.analyst_name, set()).add(rec.work_date)
    return workdays


def detect_streaks(
    records: Iterable[CanonicalAttendance],
    policy: StreakPolicy | None = None,
) -> list[AnalystStreak]:
    """Return analysts whose longest qualifying run exceeds ``policy.threshold``."""
    policy = policy or StreakPolicy()
    workdays = collect_workdays(records, policy)

    streaks: list[AnalystStreak] = []
    for name, dates in workdays.items():
        # Fewer distinct days than threshold + 1 cannot produce a long enough run.
        if len(dates) <= policy.threshold:
            continue
        best = max_consecutive_days(dates, policy.gap_predicate)
        _log.debug("%s: %d workdays, longest run %d", name, len(dates), best)
        if best > policy.threshold:
            streaks.append(AnalystStreak(analyst_name=name, max_consecutive_days=best))

    _log.info(
        "Streak check (%s/%s): %d of %d analysts above %d consecutive days",
        policy.status_policy,
        policy.gap_rule,
        len(streaks),
        len(workdays),
        policy.threshold,
    )
    return streaks
