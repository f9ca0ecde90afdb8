"""Public API for the ``sales_reporting`` package.

This module is the stable import surface for host services and scripts. The
implementations live in ``sales_reporting.report`` (report assembly),
``sales_reporting.export`` (CSV export), ``sales_reporting.sources`` and
``sales_reporting.sql_source`` (record sources). They are re-exported here.
"""

from __future__ import annotations

from .config import ReportSettings
from .export import export_sales_csv
from .models import ReportQuery, SaleRecord, SalesReport
from .report import generate_sales_report
from .sources import InMemoryRecordSource, RecordSource, RecordSourceError
from .sql_source import SqlRecordSource

__all__ = [
    "generate_sales_report",
    "export_sales_csv",
    "ReportQuery",
    "ReportSettings",
    "SaleRecord",
    "SalesReport",
    "RecordSource",
    "RecordSourceError",
    "InMemoryRecordSource",
    "SqlRecordSource",
]
