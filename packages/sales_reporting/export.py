"""CSV export of the report's row view.

Unlike the report, the export is not paginated: every row matching the filter
is written, in the requested sort order, from a single read scope.

CSV header (exact, in order):
Invoice Number, Date, Customer Name, Payment Method, Metal Type,
Total Weight, GST, Net Amount, Salesperson

Weights are written with three decimals and money with two.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import date
from typing import IO

from .config import ReportSettings
from .filters import salesperson_filter_passes
from .logging_setup import get_logger
from .models import ReportQuery, ReportRow
from .paging import PageRequest
from .report import build_report_filter, to_row
from .sources import RecordSource

_logger = get_logger("sales_reporting.export")

CSV_HEADERS: tuple[str, ...] = (
    "Invoice Number",
    "Date",
    "Customer Name",
    "Payment Method",
    "Metal Type",
    "Total Weight",
    "GST",
    "Net Amount",
    "Salesperson",
)


def write_rows_csv(rows: Iterable[ReportRow], fh: IO[str]) -> int:
    """Write the header and one line per row; return the number of rows."""

    writer = csv.writer(fh)
    writer.writerow(CSV_HEADERS)
    count = 0
    for row in rows:
        writer.writerow(
            [
                row.id,
                row.date,
                row.customer_name,
                row.payment_method,
                row.metal_type,
                f"{row.total_weight:.3f}",
                f"{row.gst:.2f}",
                f"{row.net_amount:.2f}",
                row.salesperson,
            ]
        )
        count += 1
    return count


def export_sales_csv(
    source: RecordSource,
    tenant_id: str | None,
    fh: IO[str],
    query: ReportQuery | None = None,
    *,
    today: date | None = None,
    settings: ReportSettings | None = None,
) -> int:
    """Export all filtered rows as CSV; paging fields of ``query`` are ignored."""

    q = query or ReportQuery()
    if not salesperson_filter_passes(q.salesperson):
        return write_rows_csv([], fh)

    spec = build_report_filter(tenant_id, q, today=today, settings=settings)
    sort = PageRequest.of(sort_by=q.sort_by, sort_dir=q.sort_dir).sort
    with source.read_scope() as scope:
        records = scope.fetch_all(spec, sort)

    written = write_rows_csv((to_row(r) for r in records), fh)
    _logger.info("export:done tenant=%s rows=%d", spec.tenant_id, written)
    return written


__all__ = ["CSV_HEADERS", "write_rows_csv", "export_sales_csv"]
