from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# ---------------------------
# Core: sr_invoices
# ---------------------------


class SrInvoice(Base):
    __tablename__ = "sr_invoices"

    # SQLite only autoincrements an INTEGER PRIMARY KEY (rowid alias).
    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    # Shop/account the invoice belongs to. Matching is case-insensitive, so
    # readers compare on lower(tenant_id); writers store the value as given.
    tenant_id: Mapped[str] = mapped_column(String, nullable=False)
    # Human-facing invoice number (e.g. "#INV-2045"), unique within a tenant.
    invoice_id: Mapped[str] = mapped_column(String, nullable=False)
    customer_name: Mapped[str] = mapped_column(Text, nullable=False)
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'Paid'"))
    payment_method: Mapped[str | None] = mapped_column(String, nullable=True)
    # Category/metal code such as GOLD_22K; line items may carry their own.
    type: Mapped[str | None] = mapped_column(String, nullable=True)
    gross_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, server_default=text("0")
    )
    net_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, server_default=text("0")
    )
    discount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, server_default=text("0")
    )
    making_charge: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, server_default=text("0")
    )
    gst_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), nullable=False, server_default=text("0")
    )
    # Ordered list of line-item objects:
    # {description, type, weight, rate, making_charge_percent, gst_rate_percent}
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "invoice_id", name="uq_sr_invoices_tenant_invoice"),
        CheckConstraint("net_amount >= 0", name="ck_sr_invoices_net_amount"),
        Index("ix_sr_invoices_tenant_issue_date", "tenant_id", "issue_date"),
    )


__all__ = [
    "Base",
    "SrInvoice",
]
