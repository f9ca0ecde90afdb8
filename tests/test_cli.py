# ruff: noqa: I001
from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from sales_reporting.cli import app

from tests.helpers.db import bootstrap_sqlite_db
from tests.helpers.invoices import SAMPLE_INVOICES_JSON

runner = CliRunner()


@pytest.fixture()
def ingested_db(tmp_path: Path) -> str:
    url = bootstrap_sqlite_db(tmp_path / "cli.db")
    json_path = tmp_path / "invoices.json"
    json_path.write_text(json.dumps(SAMPLE_INVOICES_JSON), encoding="utf-8")
    result = runner.invoke(app, ["ingest", "--json-path", str(json_path), "--database-url", url])
    assert result.exit_code == 0, result.output
    assert "Upserted 7 invoices" in result.stdout
    return url


def test_report_prints_camel_case_json(ingested_db: str) -> None:
    result = runner.invoke(
        app,
        [
            "report",
            "--tenant",
            "shop-1",
            "--date-filter",
            "CUSTOM",
            "--from",
            "2024-03-01",
            "--to",
            "2024-03-31",
            "--size",
            "2",
            "--database-url",
            ingested_db,
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["totalElements"] == 5
    assert payload["totalPages"] == 3
    assert [row["id"] for row in payload["rows"]] == ["INV-1005", "INV-1004"]
    assert payload["summary"]["totalSalesAmount"] == 219850.0


def test_report_reads_database_url_from_env(
    ingested_db: str, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("DATABASE_URL", ingested_db)
    result = runner.invoke(
        app,
        [
            "report",
            "--tenant",
            "shop-2",
            "--date-filter",
            "custom",
            "--from",
            "2024-01-01",
            "--to",
            "2024-12-31",
        ],
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert [row["id"] for row in payload["rows"]] == ["INV-1001"]
    assert payload["rows"][0]["customerName"] == "Other Shop Customer"


def test_report_rejects_non_numeric_amount(ingested_db: str) -> None:
    result = runner.invoke(
        app, ["report", "--min-amount", "lots", "--database-url", ingested_db]
    )
    assert result.exit_code == 1
    assert "Error: invalid report parameters" in result.output


def test_report_without_database_url_fails_cleanly() -> None:
    result = runner.invoke(app, ["report", "--tenant", "shop-1"])
    assert result.exit_code == 1
    assert "Error: report failed" in result.output


def test_export_csv_writes_every_filtered_row(ingested_db: str, tmp_path: Path) -> None:
    out = tmp_path / "sales.csv"
    result = runner.invoke(
        app,
        [
            "export-csv",
            "--tenant",
            "shop-1",
            "--output",
            str(out),
            "--date-filter",
            "CUSTOM",
            "--from",
            "2024-01-01",
            "--to",
            "2024-03-31",
            "--sort-by",
            "invoiceNumber",
            "--sort-dir",
            "asc",
            "--database-url",
            ingested_db,
        ],
    )
    assert result.exit_code == 0, result.output
    assert "Wrote 6 rows" in result.stdout

    with out.open(encoding="utf-8", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == "Invoice Number"
    assert [r[0] for r in rows[1:]] == [
        "INV-0999",
        "INV-1001",
        "INV-1002",
        "INV-1003",
        "INV-1004",
        "INV-1005",
    ]
    assert rows[2] == [
        "INV-1001",
        "2024-03-01",
        "Asha Rao",
        "UPI",
        "Gold 22K",
        "10.000",
        "1800.00",
        "61800.00",
        "Admin / Staff",
    ]


def test_ingest_reports_invalid_json(tmp_path: Path) -> None:
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    result = runner.invoke(app, ["ingest", "--json-path", str(bad)])
    assert result.exit_code == 1
    assert "Error: failed to parse JSON" in result.output


def test_ingest_reports_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["ingest", "--json-path", str(tmp_path / "nope.json")])
    assert result.exit_code == 1
    assert "Error: File not found" in result.output
