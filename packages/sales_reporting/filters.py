"""Composable report filters.

A :class:`FilterSpec` is an explicit tuple of typed clauses combined by
logical AND. Clauses hold already-normalized operands (lowercased tenant and
search term, uppercased metal prefix...) and know how to test a
:class:`~sales_reporting.models.SaleRecord` in process via ``matches``. The
SQL record source compiles the very same clauses into SQLAlchemy
expressions, so both sources agree on what a filter means.

Clause ``field`` names are ``SaleRecord`` attribute names, which are also the
``sr_invoices`` column names.

The salesperson pre-check lives here as well: the invoice model has no
salesperson dimension, so only values drawn from a fixed roster are accepted
and anything else empties the report (see :func:`salesperson_filter_passes`).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum

from .date_ranges import DateRange
from .models import SaleRecord

_DISABLED = "ALL"

# Only labels the report can attribute rows to; every row is "Admin / Staff".
SALESPERSON_ROSTER: tuple[str, ...] = ("admin", "staff", "admin / staff")
DEFAULT_SALESPERSON = "Admin / Staff"


class MetalSynonym(StrEnum):
    GOLD = "GOLD"
    SILVER = "SILVER"
    PLATINUM = "PLATINUM"
    DIAMOND = "DIAMOND"

    @classmethod
    def prefix_for(cls, token: str) -> str:
        """Return the ``type`` prefix for a metal token (unknown tokens verbatim)."""

        normalized = token.strip().upper()
        try:
            return cls(normalized).value
        except ValueError:
            return normalized


# ---------------------------------------------------------------------------
# Clauses
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TenantClause:
    tenant_id: str

    def matches(self, record: SaleRecord) -> bool:
        return (record.tenant_id or "").lower() == self.tenant_id


@dataclass(frozen=True, slots=True)
class DateRangeClause:
    start: date
    end: date

    def matches(self, record: SaleRecord) -> bool:
        return self.start <= record.issue_date <= self.end


@dataclass(frozen=True, slots=True)
class SearchClause:
    term: str
    fields: tuple[str, ...] = ("invoice_id", "customer_name")

    def matches(self, record: SaleRecord) -> bool:
        for name in self.fields:
            value = getattr(record, name)
            if value is not None and self.term in value.lower():
                return True
        return False


@dataclass(frozen=True, slots=True)
class EqualsClause:
    field: str
    value: str

    def matches(self, record: SaleRecord) -> bool:
        current = getattr(record, self.field)
        return current is not None and current.lower() == self.value


@dataclass(frozen=True, slots=True)
class PrefixClause:
    field: str
    prefix: str

    def matches(self, record: SaleRecord) -> bool:
        current = getattr(record, self.field)
        return current is not None and current.upper().startswith(self.prefix)


@dataclass(frozen=True, slots=True)
class RangeClause:
    field: str
    minimum: Decimal | None = None
    maximum: Decimal | None = None

    def matches(self, record: SaleRecord) -> bool:
        current = getattr(record, self.field)
        if current is None:
            return False
        if self.minimum is not None and current < self.minimum:
            return False
        if self.maximum is not None and current > self.maximum:
            return False
        return True


type FilterClause = (
    TenantClause | DateRangeClause | SearchClause | EqualsClause | PrefixClause | RangeClause
)


@dataclass(frozen=True, slots=True)
class FilterSpec:
    clauses: tuple[FilterClause, ...]

    def matches(self, record: SaleRecord) -> bool:
        return all(clause.matches(record) for clause in self.clauses)

    @property
    def tenant_id(self) -> str:
        for clause in self.clauses:
            if isinstance(clause, TenantClause):
                return clause.tenant_id
        raise ValueError("FilterSpec has no tenant clause")


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def _enabled(value: str | None) -> bool:
    return value is not None and bool(value.strip()) and value.strip().upper() != _DISABLED


def resolve_tenant(tenant_id: str | None, *, fallback: str) -> str:
    """Normalized tenant scope key (trimmed, lowercased), or the fallback."""

    if tenant_id is None or not tenant_id.strip():
        return fallback.strip().lower()
    return tenant_id.strip().lower()


def build_filter_spec(
    tenant_id: str,
    date_range: DateRange,
    *,
    search: str | None = None,
    payment_method: str | None = None,
    metal_type: str | None = None,
    min_amount: Decimal | None = None,
    max_amount: Decimal | None = None,
) -> FilterSpec:
    """Compose the tenant scope, date window, and optional dimensions.

    ``tenant_id`` must already be resolved (see :func:`resolve_tenant`).
    Blank or ``"ALL"`` payment/metal values disable those dimensions.
    """

    clauses: list[FilterClause] = [
        TenantClause(tenant_id.strip().lower()),
        DateRangeClause(date_range.start, date_range.end),
    ]

    if search is not None and search.strip():
        clauses.append(SearchClause(search.strip().lower()))

    if _enabled(payment_method):
        assert payment_method is not None
        clauses.append(EqualsClause("payment_method", payment_method.strip().lower()))

    if _enabled(metal_type):
        assert metal_type is not None
        clauses.append(PrefixClause("type", MetalSynonym.prefix_for(metal_type)))

    if min_amount is not None or max_amount is not None:
        clauses.append(RangeClause("net_amount", min_amount, max_amount))

    return FilterSpec(tuple(clauses))


def salesperson_filter_passes(salesperson: str | None) -> bool:
    """True when the report may proceed for this salesperson filter.

    Blank passes. Otherwise the trimmed, lowercased value must be contained in
    a roster entry (``"adm"``, ``"staff"``, ``"admin / staff"`` all pass).
    """

    if salesperson is None or not salesperson.strip():
        return True
    needle = salesperson.strip().lower()
    return any(needle in entry for entry in SALESPERSON_ROSTER)


__all__ = [
    "SALESPERSON_ROSTER",
    "DEFAULT_SALESPERSON",
    "MetalSynonym",
    "TenantClause",
    "DateRangeClause",
    "SearchClause",
    "EqualsClause",
    "PrefixClause",
    "RangeClause",
    "FilterClause",
    "FilterSpec",
    "resolve_tenant",
    "build_filter_spec",
    "salesperson_filter_passes",
]
