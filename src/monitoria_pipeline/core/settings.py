"""Immutable run settings built from the YAML config dict."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..utils import get_logger
from .allocation import QuotaTable
from .normalizer import ColumnAliases
from .streaks import STREAK_THRESHOLD, StreakPolicy

_log = get_logger(__name__)

DEFAULT_TOTAL_MONITORIAS = 800


@dataclass(frozen=True)
class PipelineSettings:
    aliases: ColumnAliases = field(default_factory=ColumnAliases)
    streak: StreakPolicy = field(default_factory=StreakPolicy)
    quotas: QuotaTable = field(default_factory=QuotaTable)
    keep_zero_allocations: bool = True


def build_settings(config: dict[str, Any] | None) -> PipelineSettings:
    """Translate the ``columns``/``streak``/``allocation`` config blocks.

    Unknown policy names and invalid quotas raise ValueError.
    """
    config = config or {}
    streak_cfg = config.get("streak", {}) or {}
    alloc_cfg = config.get("allocation", {}) or {}

    defaults = StreakPolicy()
    off_tokens = streak_cfg.get("off_tokens")
    policy = StreakPolicy(
        status_policy=streak_cfg.get("status_policy", defaults.status_policy),
        gap_rule=streak_cfg.get("gap_rule", defaults.gap_rule),
        threshold=int(streak_cfg.get("threshold", STREAK_THRESHOLD)),
        off_tokens=tuple(off_tokens) if off_tokens else defaults.off_tokens,
        worked_token=streak_cfg.get("worked_token", defaults.worked_token),
    )

    quotas = QuotaTable.from_config(alloc_cfg.get("quotas"))
    expected_total = int(alloc_cfg.get("total_monitorias", DEFAULT_TOTAL_MONITORIAS))
    if quotas.total != expected_total:
        _log.warning("Product quotas sum to %d, expected %d", quotas.total, expected_total)

    return PipelineSettings(
        aliases=ColumnAliases.from_config(config.get("columns")),
        streak=policy,
        quotas=quotas,
        keep_zero_allocations=bool(alloc_cfg.get("keep_zero", True)),
    )
