"""Pipeline core: normalization, streaks, eligibility, allocation."""

from .engine import run_pipeline, allocate_from_rows
from .streaks import detect_streaks, StreakPolicy
from .eligibility import project_eligible, classify_product
from .allocation import allocate_quotas, QuotaTable
from .settings import build_settings, PipelineSettings

__all__ = [
    "run_pipeline",
    "allocate_from_rows",
    "detect_streaks",
    "StreakPolicy",
    "project_eligible",
    "classify_product",
    "allocate_quotas",
    "QuotaTable",
    "build_settings",
    "PipelineSettings",
]
