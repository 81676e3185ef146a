"""Eligibility projection: one (analyst -> product) entry per eligible analyst."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from ..utils import get_logger, normalize_label
from .models import CanonicalAttendance, EligibleAnalyst

_log = get_logger(__name__)


# Checked in order; first matching substring wins.
PRODUCT_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("auto",), "Auto"),
    (("safedoc",), "Doc"),
    (("id - n1", "id - n2"), "Check"),
    (("special channels", "institucional"), "Institucional"),
    (("b2c",), "B2C"),
)


def classify_product(label: Any) -> str | None:
    """Map a free-text sub-operation label onto a product tag, or None."""
    s = normalize_label(label)
    if not s:
        return None
    for needles, product in PRODUCT_RULES:
        if any(n in s for n in needles):
            return product
    return None


def resolve_product(
    record: CanonicalAttendance,
    known_products: Iterable[str] = (),
) -> str | None:
    """Product for one record.

    A sub-operation label, when present, decides on its own. Without one the
    product column is matched against ``known_products`` and then classified.
    """
    if record.team_label:
        return classify_product(record.team_label)
    if not record.product_label:
        return None
    wanted = normalize_label(record.product_label)
    for product in known_products:
        if normalize_label(product) == wanted:
            return product
    return classify_product(record.product_label)


def project_eligible(
    records: Iterable[CanonicalAttendance],
    eligible_names: Iterable[str],
    known_products: Iterable[str] = (),
) -> list[EligibleAnalyst]:
    """Reduce records to one entry per eligible analyst; the last row seen wins.

    Output keeps the order in which each analyst first appeared.
    """
    names = set(eligible_names)
    products = tuple(known_products)
    latest: dict[str, EligibleAnalyst] = {}
    for rec in records:
        if rec.analyst_name not in names:
            continue
        latest[rec.analyst_name] = EligibleAnalyst(
            analyst_name=rec.analyst_name,
            product=resolve_product(rec, products),
            team_label=rec.team_label,
        )

    unmapped = [a.analyst_name for a in latest.values() if a.product is None]
    if unmapped:
        _log.warning("No product resolved for %d eligible analyst(s): %s", len(unmapped), ", ".join(unmapped))
    return list(latest.values())


def group_by_product(analysts: Iterable[EligibleAnalyst]) -> Mapping[str, list[EligibleAnalyst]]:
    """Bucket analysts by product, preserving input order; unmapped analysts are skipped."""
    grouped: dict[str, list[EligibleAnalyst]] = {}
    for analyst in analysts:
        if not analyst.product:
            continue
        grouped.setdefault(analyst.product, []).append(analyst)
    return grouped
