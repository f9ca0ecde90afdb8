# ruff: noqa: I001
"""SQLAlchemy-backed record source over ``sr_invoices``.

Filter clauses are compiled into SQLAlchemy expressions (never string
concatenation) and both reads of a report run inside one read-only session
from :func:`db.client.read_only_scope`, so the aggregate read and the page
read observe the same snapshot.

Any ``SQLAlchemyError`` raised while the scope is open is logged and re-raised
as :class:`~sales_reporting.sources.RecordSourceError` with the cause
chained. There is no retry.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.client import read_only_scope
from db.models.sales import SrInvoice
from .filters import (
    DateRangeClause,
    EqualsClause,
    FilterClause,
    FilterSpec,
    PrefixClause,
    RangeClause,
    SearchClause,
    TenantClause,
)
from .logging_setup import get_logger
from .models import LineItemPayload, SaleRecord
from .paging import Page, PageRequest, Sort
from .sources import RecordSourceError, ScopedRead

_logger = get_logger("sales_reporting.sql_source")


def _column(name: str) -> Any:
    return getattr(SrInvoice, name)


def compile_clause(clause: FilterClause) -> ColumnElement[bool]:
    """Translate one filter clause into a SQL boolean expression."""

    if isinstance(clause, TenantClause):
        return func.lower(SrInvoice.tenant_id) == clause.tenant_id
    if isinstance(clause, DateRangeClause):
        return SrInvoice.issue_date.between(clause.start, clause.end)
    if isinstance(clause, SearchClause):
        # autoescape keeps % and _ in the term literal.
        return or_(
            *(
                func.lower(_column(name)).contains(clause.term, autoescape=True)
                for name in clause.fields
            )
        )
    if isinstance(clause, EqualsClause):
        return func.lower(_column(clause.field)) == clause.value
    if isinstance(clause, PrefixClause):
        return func.upper(_column(clause.field)).startswith(clause.prefix, autoescape=True)
    if isinstance(clause, RangeClause):
        column = _column(clause.field)
        bounds = []
        if clause.minimum is not None:
            bounds.append(column >= clause.minimum)
        if clause.maximum is not None:
            bounds.append(column <= clause.maximum)
        return and_(*bounds)
    raise TypeError(f"unsupported filter clause: {type(clause).__name__}")


def _filtered(stmt: Select[Any], spec: FilterSpec) -> Select[Any]:
    return stmt.where(*(compile_clause(c) for c in spec.clauses))


def _ordered(stmt: Select[Any], sort: Sort) -> Select[Any]:
    column = _column(sort.field.attribute)
    primary = column.desc() if sort.descending else column.asc()
    return stmt.order_by(primary.nulls_last(), SrInvoice.invoice_id.asc())


def to_record(row: SrInvoice) -> SaleRecord:
    """Map an ``sr_invoices`` row onto the read-only domain record."""

    return SaleRecord(
        invoice_id=row.invoice_id,
        tenant_id=row.tenant_id,
        customer_name=row.customer_name,
        issue_date=row.issue_date,
        status=row.status,
        payment_method=row.payment_method,
        type=row.type,
        gross_amount=row.gross_amount,
        net_amount=row.net_amount,
        discount=row.discount,
        making_charge=row.making_charge,
        gst_rate=row.gst_rate,
        items=tuple(LineItemPayload.model_validate(it).to_item() for it in row.items or ()),
    )


class _SqlScopedRead:
    __slots__ = ("_session",)

    def __init__(self, session: Session) -> None:
        self._session = session

    def fetch_all(self, spec: FilterSpec, sort: Sort) -> list[SaleRecord]:
        stmt = _ordered(_filtered(select(SrInvoice), spec), sort)
        return [to_record(row) for row in self._session.scalars(stmt)]

    def fetch_page(self, spec: FilterSpec, request: PageRequest) -> Page[SaleRecord]:
        count_stmt = _filtered(select(func.count()).select_from(SrInvoice), spec)
        total = int(self._session.scalar(count_stmt) or 0)
        stmt = (
            _ordered(_filtered(select(SrInvoice), spec), request.sort)
            .offset(request.offset)
            .limit(request.size)
        )
        items = [to_record(row) for row in self._session.scalars(stmt)]
        return Page(items=items, page=request.page, size=request.size, total_elements=total)


class SqlRecordSource:
    """Record source reading ``sr_invoices`` through the shared ``db`` client.

    Parameters
    ----------
    database_url:
        Optional override; ``None`` falls back to ``DATABASE_URL``.
    """

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url

    @contextmanager
    def read_scope(self) -> Iterator[ScopedRead]:
        try:
            with read_only_scope(database_url=self._database_url) as session:
                yield _SqlScopedRead(session)
        except SQLAlchemyError as exc:
            _logger.error("sql_source:read_failed error=%s", exc)
            raise RecordSourceError(f"failed to read sales records: {exc}") from exc


__all__ = ["SqlRecordSource", "compile_clause", "to_record"]
