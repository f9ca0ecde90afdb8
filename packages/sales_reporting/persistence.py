# ruff: noqa: I001
"""Persistence integration for ``sales_reporting``.

Writes validated invoices into ``sr_invoices`` (owned by ``libs/db``) using a
session provided by ``db.client``. The reporting engine itself only reads;
this module backs the ``ingest`` command and test fixtures.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from db.models.sales import SrInvoice
from .logging_setup import get_logger
from .models import InvoicePayload

_logger = get_logger("sales_reporting.persistence")

_UPDATABLE: tuple[str, ...] = (
    "customer_name",
    "issue_date",
    "status",
    "payment_method",
    "type",
    "gross_amount",
    "net_amount",
    "discount",
    "making_charge",
    "gst_rate",
    "items",
)


def _insert_for(session: Session) -> Any:
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        return pg_insert
    if dialect == "sqlite":
        return sqlite_insert
    raise RuntimeError(f"upsert is not supported for dialect {dialect!r}")


def _to_values(invoice: InvoicePayload) -> dict[str, Any]:
    return {
        "tenant_id": invoice.tenant_id,
        "invoice_id": invoice.invoice_id,
        "customer_name": invoice.customer_name,
        "issue_date": invoice.issue_date,
        "status": invoice.status,
        "payment_method": invoice.payment_method,
        "type": invoice.type,
        "gross_amount": invoice.gross_amount,
        "net_amount": invoice.net_amount,
        "discount": invoice.discount,
        "making_charge": invoice.making_charge,
        "gst_rate": invoice.gst_rate,
        "items": [it.to_json_dict() for it in invoice.items],
    }


def upsert_invoices(session: Session, invoices: Iterable[InvoicePayload]) -> int:
    """Insert or update invoices keyed by ``(tenant_id, invoice_id)``.

    Re-ingesting the same invoice overwrites its stored fields and bumps
    ``updated_at``. When a batch repeats a key, the last occurrence wins.

    Returns
    -------
    int
        Number of distinct invoices written.
    """

    by_key: dict[tuple[str, str], dict[str, Any]] = {}
    for invoice in invoices:
        by_key[(invoice.tenant_id, invoice.invoice_id)] = _to_values(invoice)
    if not by_key:
        return 0

    insert = _insert_for(session)
    stmt = insert(SrInvoice).values(list(by_key.values()))
    stmt = stmt.on_conflict_do_update(
        index_elements=[SrInvoice.tenant_id, SrInvoice.invoice_id],
        set_={
            **{name: stmt.excluded[name] for name in _UPDATABLE},
            "updated_at": func.now(),
        },
    )
    session.execute(stmt)
    _logger.info("persistence:upsert_invoices count=%d", len(by_key))
    return len(by_key)


__all__ = ["upsert_invoices"]
