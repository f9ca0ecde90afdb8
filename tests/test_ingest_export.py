from __future__ import annotations

import io
import json
from decimal import Decimal
from pathlib import Path

import pytest

from sales_reporting.export import CSV_HEADERS, export_sales_csv
from sales_reporting.ingest import load_invoices_json, parse_invoices
from sales_reporting.models import ReportQuery

from tests.helpers.invoices import SAMPLE_INVOICES_JSON, TODAY, sample_source


def test_parse_accepts_camel_and_snake_keys() -> None:
    invoices = parse_invoices(
        [
            {
                "tenant_id": "shop-1",
                "invoice_id": "INV-1",
                "customer_name": "A",
                "issue_date": "2024-03-01",
                "net_amount": "10.50",
                "items": [{"type": "GOLD_22K", "weight": "1.5", "makingChargePercent": "12"}],
            }
        ]
    )
    inv = invoices[0]
    assert inv.net_amount == Decimal("10.50")
    record = inv.to_record()
    assert record.items[0].weight == Decimal("1.5")
    assert record.items[0].making_charge_percent == Decimal("12")
    assert record.status == "Paid"


def test_parse_rejects_non_list() -> None:
    with pytest.raises(ValueError, match="must be a list"):
        parse_invoices({"invoices": []})


@pytest.mark.parametrize(
    "bad",
    [
        {"invoiceId": "INV-1", "customerName": "A", "issueDate": "2024-03-01"},
        {"tenantId": " ", "invoiceId": "INV-1", "customerName": "A", "issueDate": "2024-03-01"},
        {
            "tenantId": "t",
            "invoiceId": "INV-1",
            "customerName": "A",
            "issueDate": "2024-03-01",
            "netAmount": "-1",
        },
    ],
)
def test_parse_reports_position_of_invalid_invoice(bad: dict) -> None:
    with pytest.raises(ValueError, match="position 1"):
        parse_invoices([SAMPLE_INVOICES_JSON[0], bad])


def test_load_invoices_json(tmp_path: Path) -> None:
    path = tmp_path / "invoices.json"
    path.write_text(json.dumps(SAMPLE_INVOICES_JSON), encoding="utf-8")
    invoices = load_invoices_json(path)
    assert len(invoices) == len(SAMPLE_INVOICES_JSON)
    assert invoices[3].tenant_id == "Shop-1"


def test_export_is_not_paginated_and_formats_numbers() -> None:
    buf = io.StringIO()
    query = ReportQuery(size=1, page=3)
    written = export_sales_csv(sample_source(), "shop-1", buf, query, today=TODAY)
    assert written == 5

    lines = buf.getvalue().splitlines()
    assert lines[0] == ",".join(CSV_HEADERS)
    assert len(lines) == 6
    # Default sort is newest first.
    assert lines[1] == "INV-1005,2024-03-14,Asha Rao,Cash,Diamond,0.000,2700.00,92700.00,Admin / Staff"


def test_export_with_unsupported_salesperson_writes_header_only() -> None:
    buf = io.StringIO()
    written = export_sales_csv(
        sample_source(), "shop-1", buf, ReportQuery(salesperson="finance"), today=TODAY
    )
    assert written == 0
    assert buf.getvalue().splitlines() == [",".join(CSV_HEADERS)]
