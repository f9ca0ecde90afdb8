from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from sales_reporting.models import SaleRecord
from sales_reporting.paging import (
    MAX_PAGE_SIZE,
    Page,
    PageRequest,
    Sort,
    SortDirection,
    SortField,
    paginate,
    sort_records,
)


def _rec(invoice_id: str, day: int, net: str = "0", payment: str | None = "UPI") -> SaleRecord:
    return SaleRecord(
        invoice_id=invoice_id,
        tenant_id="t",
        customer_name="x",
        issue_date=date(2024, 3, day),
        payment_method=payment,
        net_amount=Decimal(net),
    )


@pytest.mark.parametrize(
    ("page", "size", "expected"),
    [
        (-1, 10, (0, 10)),
        (2, 500, (2, MAX_PAGE_SIZE)),
        (0, 0, (0, 1)),
        (0, -5, (0, 1)),
        (None, None, (0, 10)),
    ],
)
def test_page_request_clamps(page, size, expected) -> None:
    req = PageRequest.of(page, size)
    assert (req.page, req.size) == expected


def test_sort_field_whitelist_with_default() -> None:
    assert SortField.parse("netAmount") is SortField.NET_AMOUNT
    assert SortField.parse("metalType").attribute == "type"
    assert SortField.parse("gst") is SortField.DATE
    assert SortField.parse(None) is SortField.DATE


@pytest.mark.parametrize(("raw", "expected"), [("asc", "ASC"), ("ASC", "ASC"), ("desc", "DESC"), ("up", "DESC"), (None, "DESC")])
def test_sort_direction(raw, expected) -> None:
    assert SortDirection.parse(raw).name == expected


def test_total_pages_is_ceiling() -> None:
    assert Page(items=[], page=0, size=10, total_elements=21).total_pages == 3
    assert Page(items=[], page=0, size=10, total_elements=20).total_pages == 2
    assert Page(items=[], page=0, size=10, total_elements=0).total_pages == 0


def test_sort_descending_breaks_ties_by_invoice_ascending() -> None:
    records = [_rec("C", 5), _rec("A", 5), _rec("B", 7)]
    ordered = sort_records(records, Sort(SortField.DATE, SortDirection.DESC))
    assert [r.invoice_id for r in ordered] == ["B", "A", "C"]


def test_sort_puts_nulls_last_both_ways() -> None:
    records = [_rec("A", 1, payment=None), _rec("B", 1, payment="UPI"), _rec("C", 1, payment="Cash")]
    asc = sort_records(records, Sort(SortField.PAYMENT_METHOD, SortDirection.ASC))
    desc = sort_records(records, Sort(SortField.PAYMENT_METHOD, SortDirection.DESC))
    assert [r.invoice_id for r in asc] == ["C", "B", "A"]
    assert [r.invoice_id for r in desc] == ["B", "C", "A"]


def test_paginate_beyond_last_page_is_empty() -> None:
    records = [_rec(f"INV-{i}", 1) for i in range(5)]
    page = paginate(records, PageRequest.of(3, 2))
    assert page.items == []
    assert page.total_elements == 5
    assert page.total_pages == 3
