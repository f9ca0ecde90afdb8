"""Sales report assembly.

:func:`generate_sales_report` is the engine's entry point. For one tenant and
one :class:`~sales_reporting.models.ReportQuery` it

1. gates on the salesperson filter (unsupported values give an empty report),
2. resolves the date window and composes the filter spec,
3. opens one read scope on the record source and issues both reads there:
   the full filtered set (ascending by date) for the aggregates, and one
   sorted page for the rows,
4. merges everything into a :class:`~sales_reporting.models.SalesReport`.

Malformed optional inputs never raise; they fall back to defaults or are
clamped. Only a failing read surfaces, as ``RecordSourceError``.
"""

from __future__ import annotations

import time
from datetime import date

from .aggregation import (
    build_metal_comparison,
    build_payment_distribution,
    build_sales_trend,
    build_summary,
)
from .config import ReportSettings
from .date_ranges import resolve_date_range
from .filters import (
    DEFAULT_SALESPERSON,
    FilterSpec,
    build_filter_spec,
    resolve_tenant,
    salesperson_filter_passes,
)
from .logging_setup import get_logger
from .models import ReportQuery, ReportRow, SaleRecord, SalesReport, SalesSummary
from .normalizers import (
    amount,
    calculate_gst,
    normalize_metal,
    normalize_payment_method,
    total_weight,
)
from .paging import ISSUE_DATE_ASC, MAX_PAGE_SIZE, PageRequest
from .sources import RecordSource

_logger = get_logger("sales_reporting.report")


def to_row(record: SaleRecord) -> ReportRow:
    return ReportRow(
        id=record.invoice_id,
        date=record.issue_date.isoformat(),
        customer_name=record.customer_name,
        payment_method=normalize_payment_method(record.payment_method),
        metal_type=normalize_metal(record.type),
        total_weight=float(total_weight(record.items)),
        gst=float(calculate_gst(record)),
        net_amount=float(amount(record.net_amount)),
        salesperson=DEFAULT_SALESPERSON,
    )


def empty_report(page: int = 0, size: int = 10) -> SalesReport:
    """A well-formed report with zero totals and no rows."""

    return SalesReport(
        summary=SalesSummary(),
        sales_trend=[],
        payment_distribution=[],
        metal_comparison=[],
        rows=[],
        page=max(0, page),
        size=min(max(1, size), MAX_PAGE_SIZE),
        total_elements=0,
        total_pages=0,
    )


def build_report_filter(
    tenant_id: str | None,
    query: ReportQuery,
    *,
    today: date | None = None,
    settings: ReportSettings | None = None,
) -> FilterSpec:
    """Resolve tenant scope and date window, then compose the filter spec."""

    cfg = settings or ReportSettings()
    tenant = resolve_tenant(tenant_id, fallback=cfg.fallback_tenant)
    window = resolve_date_range(query.date_filter, query.from_, query.to, today=today)
    return build_filter_spec(
        tenant,
        window,
        search=query.search,
        payment_method=query.payment_method,
        metal_type=query.metal_type,
        min_amount=query.min_amount,
        max_amount=query.max_amount,
    )


def generate_sales_report(
    source: RecordSource,
    tenant_id: str | None,
    query: ReportQuery | None = None,
    *,
    today: date | None = None,
    settings: ReportSettings | None = None,
) -> SalesReport:
    """Build the sales report for ``tenant_id``.

    Parameters
    ----------
    source:
        Where records are read from (SQL or in-memory).
    tenant_id:
        Opaque tenant identity; blank/``None`` uses the configured fallback.
    query:
        Report parameters; ``None`` means all defaults.
    today:
        Anchor date for relative windows; defaults to the local date.
    settings:
        Runtime settings; ``None`` uses the defaults.

    Returns
    -------
    SalesReport
        Aggregates over the full filtered set plus one page of rows.
    """

    q = query or ReportQuery()
    request = PageRequest.of(q.page, q.size, q.sort_by, q.sort_dir)

    if not salesperson_filter_passes(q.salesperson):
        _logger.info(
            "sales_report:unsupported_salesperson salesperson=%r", q.salesperson
        )
        return empty_report(request.page, request.size)

    spec = build_report_filter(tenant_id, q, today=today, settings=settings)

    t0 = time.perf_counter()
    with source.read_scope() as scope:
        records = scope.fetch_all(spec, ISSUE_DATE_ASC)
        page = scope.fetch_page(spec, request)

    report = SalesReport(
        summary=build_summary(records),
        sales_trend=build_sales_trend(records),
        payment_distribution=build_payment_distribution(records),
        metal_comparison=build_metal_comparison(records),
        rows=[to_row(r) for r in page.items],
        page=page.page,
        size=page.size,
        total_elements=page.total_elements,
        total_pages=page.total_pages,
    )
    _logger.info(
        "sales_report:done tenant=%s total_elements=%d page=%d size=%d latency_ms=%.1f",
        spec.tenant_id,
        page.total_elements,
        page.page,
        page.size,
        (time.perf_counter() - t0) * 1000.0,
    )
    return report


__all__ = ["generate_sales_report", "build_report_filter", "empty_report", "to_row"]
