"""Quota allocation: split fixed per-product totals across eligible analysts."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..utils import get_logger
from .eligibility import group_by_product
from .models import AllocationRecord, EligibleAnalyst

_log = get_logger(__name__)


DEFAULT_QUOTAS: Mapping[str, int] = MappingProxyType(
    {
        "Auto": 20,
        "Check": 640,
        "Doc": 20,
        "ID Pay": 50,
        "ID Unico": 20,
        "IDCloud": 20,
        "B2C": 30,
        "Privacidade": 0,
        "Institucional": 0,
    }
)


@dataclass(frozen=True)
class QuotaTable:
    """Immutable product -> monitoria total mapping. Iteration keeps config order."""

    quotas: Mapping[str, int] = field(default_factory=lambda: DEFAULT_QUOTAS)

    def __post_init__(self) -> None:
        checked: dict[str, int] = {}
        for product, total in dict(self.quotas).items():
            if isinstance(total, bool) or not isinstance(total, int):
                raise ValueError(f"Quota for {product!r} must be an integer, got {total!r}")
            if total < 0:
                raise ValueError(f"Quota for {product!r} must be >= 0, got {total}")
            checked[str(product)] = total
        object.__setattr__(self, "quotas", MappingProxyType(checked))

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None) -> "QuotaTable":
        if not cfg:
            return cls()
        return cls(dict(cfg))

    @property
    def products(self) -> tuple[str, ...]:
        return tuple(self.quotas)

    @property
    def total(self) -> int:
        return sum(self.quotas.values())

    def __getitem__(self, product: str) -> int:
        return self.quotas[product]


def split_quota(total: int, parties: int) -> list[int]:
    """Largest-remainder split of ``total`` over ``parties`` in order.

    >>> split_quota(20, 3)
    [7, 7, 6]
    """
    if parties <= 0:
        return []
    base, remainder = divmod(total, parties)
    return [base + 1 if i < remainder else base for i in range(parties)]


def allocate_quotas(
    analysts: Iterable[EligibleAnalyst],
    quotas: QuotaTable | None = None,
    *,
    keep_zero: bool = True,
) -> list[AllocationRecord]:
    """Distribute each product's quota across the analysts mapped to it.

    Products are visited in quota-table order. Within a product, analysts keep
    the order they arrive in, and the first ``quota % n`` of them receive one
    extra unit. Products with a zero quota or no analysts produce no records.
    """
    quotas = quotas or QuotaTable()
    by_product = group_by_product(analysts)

    unknown = [p for p in by_product if p not in quotas.quotas]
    if unknown:
        _log.warning("Analysts mapped to products without a quota: %s", ", ".join(unknown))

    records: list[AllocationRecord] = []
    for product, total in quotas.quotas.items():
        members = by_product.get(product, [])
        if total == 0 or not members:
            continue
        shares = split_quota(total, len(members))
        for analyst, count in zip(members, shares):
            if count == 0 and not keep_zero:
                continue
            records.append(
                AllocationRecord(
                    analyst_name=analyst.analyst_name,
                    product=product,
                    assigned_count=count,
                    team_label=analyst.team_label,
                )
            )
        _log.debug("%s: %d monitorias over %d analyst(s) -> %s", product, total, len(members), shares)
    return records


def unallocated_quota(
    allocations: Iterable[AllocationRecord],
    quotas: QuotaTable | None = None,
) -> dict[str, int]:
    """Products whose quota is (partly) left over, with the amount left."""
    quotas = quotas or QuotaTable()
    assigned: dict[str, int] = {}
    for rec in allocations:
        assigned[rec.product] = assigned.get(rec.product, 0) + rec.assigned_count
    leftover = {}
    for product, total in quotas.quotas.items():
        remaining = total - assigned.get(product, 0)
        if remaining > 0:
            leftover[product] = remaining
    return leftover
