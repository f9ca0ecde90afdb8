"""Shared invoice fixtures.

All figures are chosen so report totals are easy to verify by hand. The
reference "today" is 2024-03-15; the March invoices of ``shop-1`` fall in
``THIS_MONTH``, INV-0999 only in ``THIS_YEAR``, and ``shop-2`` must never
leak into a ``shop-1`` report.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from sales_reporting.ingest import parse_invoices
from sales_reporting.models import InvoicePayload, SaleRecord
from sales_reporting.sources import InMemoryRecordSource

TODAY = date(2024, 3, 15)


SAMPLE_INVOICES_JSON: list[dict[str, Any]] = [
    {
        "tenantId": "shop-1",
        "invoiceId": "INV-1001",
        "customerName": "Asha Rao",
        "issueDate": "2024-03-01",
        "paymentMethod": "UPI",
        "type": "GOLD_22K",
        "grossAmount": "60000.00",
        "netAmount": "61800.00",
        "items": [{"description": "Chain", "type": "GOLD_22K", "weight": "10.000"}],
    },
    {
        "tenantId": "shop-1",
        "invoiceId": "INV-1002",
        "customerName": "Vikram Shah",
        "issueDate": "2024-03-05",
        "paymentMethod": "Cash",
        "type": "SILVER",
        "grossAmount": "5000.00",
        "netAmount": "5150.00",
        "items": [{"description": "Anklet", "type": "SILVER", "weight": "50.000"}],
    },
    {
        "tenantId": "shop-1",
        "invoiceId": "INV-1003",
        "customerName": "Meera Iyer",
        "issueDate": "2024-03-05",
        "paymentMethod": "Credit Card",
        "type": "GOLD_24K",
        "grossAmount": "40000.00",
        "netAmount": "41200.00",
        "items": [
            {"description": "Coin", "type": "GOLD_24K", "weight": "5.000"},
            {"description": "Bracelet", "type": "SILVER", "weight": "15.000"},
        ],
    },
    {
        # Stored with a different case; tenant matching ignores case.
        "tenantId": "Shop-1",
        "invoiceId": "INV-1004",
        "customerName": "Rahul Nair",
        "issueDate": "2024-03-10",
        "paymentMethod": "card",
        "type": "PLATINUM",
        "grossAmount": "20000.00",
        "netAmount": "19000.00",
        "discount": "500.00",
        "items": [],
    },
    {
        "tenantId": "shop-1",
        "invoiceId": "INV-1005",
        "customerName": "Asha Rao",
        "issueDate": "2024-03-14",
        "paymentMethod": None,
        "type": "DIAMOND_RING",
        "grossAmount": "90000.00",
        "netAmount": "92700.00",
        "items": [{"description": "Solitaire", "type": "DIAMOND", "weight": None}],
    },
    {
        "tenantId": "shop-1",
        "invoiceId": "INV-0999",
        "customerName": "Kiran Das",
        "issueDate": "2024-01-20",
        "paymentMethod": "UPI",
        "type": "GOLD_18K",
        "grossAmount": "29000.00",
        "netAmount": "30000.00",
        "items": [{"description": "Ring", "type": "GOLD_18K", "weight": "4.000"}],
    },
    {
        "tenantId": "shop-2",
        "invoiceId": "INV-1001",
        "customerName": "Other Shop Customer",
        "issueDate": "2024-03-02",
        "paymentMethod": "Cash",
        "type": "GOLD_22K",
        "grossAmount": "48000.00",
        "netAmount": "50000.00",
        "items": [{"description": "Bangle", "type": "GOLD_22K", "weight": "8.000"}],
    },
]


def sample_invoices() -> list[InvoicePayload]:
    return parse_invoices(SAMPLE_INVOICES_JSON)


def sample_records() -> list[SaleRecord]:
    return [inv.to_record() for inv in sample_invoices()]


def sample_source() -> InMemoryRecordSource:
    return InMemoryRecordSource(sample_records())
