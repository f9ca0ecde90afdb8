"""Sorting and pagination for the row view.

Sort keys come from a closed whitelist (:class:`SortField`); anything else
falls back to the issue date. Page numbers are zero-based and page sizes are
clamped to ``[1, MAX_PAGE_SIZE]``. Ties on the sort column are broken by
ascending ``invoice_id`` so page boundaries are deterministic.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .models import SaleRecord

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 10


class SortField(Enum):
    """Public sort names mapped to ``SaleRecord`` attribute names."""

    INVOICE_NUMBER = ("invoiceNumber", "invoice_id")
    DATE = ("date", "issue_date")
    CUSTOMER_NAME = ("customerName", "customer_name")
    PAYMENT_METHOD = ("paymentMethod", "payment_method")
    METAL_TYPE = ("metalType", "type")
    NET_AMOUNT = ("netAmount", "net_amount")

    def __init__(self, api_name: str, attribute: str) -> None:
        self.api_name = api_name
        self.attribute = attribute

    @classmethod
    def parse(cls, value: str | None) -> SortField:
        if value is not None:
            wanted = value.strip()
            for member in cls:
                if member.api_name == wanted:
                    return member
        return cls.DATE


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> SortDirection:
        if value is not None and value.strip().lower() == "asc":
            return cls.ASC
        return cls.DESC


@dataclass(frozen=True, slots=True)
class Sort:
    field: SortField = SortField.DATE
    direction: SortDirection = SortDirection.DESC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


# Full reads feed the aggregator in date order.
ISSUE_DATE_ASC = Sort(SortField.DATE, SortDirection.ASC)


@dataclass(frozen=True, slots=True)
class PageRequest:
    page: int
    size: int
    sort: Sort

    @property
    def offset(self) -> int:
        return self.page * self.size

    @classmethod
    def of(
        cls,
        page: int | None = 0,
        size: int | None = DEFAULT_PAGE_SIZE,
        sort_by: str | None = None,
        sort_dir: str | None = None,
    ) -> PageRequest:
        """Clamp raw paging input into a valid request (never raises)."""

        safe_page = max(0, page or 0)
        safe_size = min(max(1, DEFAULT_PAGE_SIZE if size is None else size), MAX_PAGE_SIZE)
        return cls(
            page=safe_page,
            size=safe_size,
            sort=Sort(SortField.parse(sort_by), SortDirection.parse(sort_dir)),
        )


@dataclass(frozen=True)
class Page[T]:
    items: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        pages = math.ceil(self.total_elements / self.size) if self.size > 0 else 0
        object.__setattr__(self, "total_pages", pages)


# ---------------------------------------------------------------------------
# In-process sorting
# ---------------------------------------------------------------------------


def sort_records(records: Iterable[SaleRecord], sort: Sort) -> list[SaleRecord]:
    """Sort records by ``sort`` with nulls last, then by ``invoice_id``.

    Text columns compare case-sensitively, the way a plain ``ORDER BY`` does
    on the default collation.
    """

    attribute = sort.field.attribute
    # Stable sorts: apply the tie-breaker first, then the primary key.
    ordered = sorted(records, key=lambda r: r.invoice_id)
    present = [r for r in ordered if getattr(r, attribute) is not None]
    missing = [r for r in ordered if getattr(r, attribute) is None]
    # reverse=True keeps equal keys in their input order, so ties stay ascending.
    present.sort(key=lambda r: getattr(r, attribute), reverse=sort.descending)
    return present + missing


def paginate(records: Sequence[Any], request: PageRequest) -> Page[Any]:
    window = list(records[request.offset : request.offset + request.size])
    return Page(items=window, page=request.page, size=request.size, total_elements=len(records))


__all__ = [
    "MAX_PAGE_SIZE",
    "DEFAULT_PAGE_SIZE",
    "SortField",
    "SortDirection",
    "Sort",
    "ISSUE_DATE_ASC",
    "PageRequest",
    "Page",
    "sort_records",
    "paginate",
]
