# ruff: noqa: I001
"""Sales invoices table read by the reporting engine.

Revision ID: 0001_sr_invoices
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "0001_sr_invoices"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    money = sa.Numeric(12, 2)
    op.create_table(
        "sr_invoices",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("tenant_id", sa.Text(), nullable=False),
        sa.Column("invoice_id", sa.Text(), nullable=False),
        sa.Column("customer_name", sa.Text(), nullable=False),
        sa.Column("issue_date", sa.Date(), nullable=False),
        sa.Column("status", sa.Text(), nullable=False, server_default=sa.text("'Paid'")),
        sa.Column("payment_method", sa.Text(), nullable=True),
        sa.Column("type", sa.Text(), nullable=True),
        sa.Column("gross_amount", money, nullable=False, server_default=sa.text("0")),
        sa.Column("net_amount", money, nullable=False, server_default=sa.text("0")),
        sa.Column("discount", money, nullable=False, server_default=sa.text("0")),
        sa.Column("making_charge", money, nullable=False, server_default=sa.text("0")),
        sa.Column("gst_rate", sa.Numeric(5, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("items", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.UniqueConstraint("tenant_id", "invoice_id", name="uq_sr_invoices_tenant_invoice"),
        sa.CheckConstraint("net_amount >= 0", name="ck_sr_invoices_net_amount"),
    )

    op.create_index(
        "ix_sr_invoices_tenant_issue_date",
        "sr_invoices",
        ["tenant_id", "issue_date"],
        unique=False,
    )
    # Reports always compare the tenant case-insensitively.
    op.create_index(
        "ix_sr_invoices_lower_tenant",
        "sr_invoices",
        [sa.text("lower(tenant_id)")],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_sr_invoices_lower_tenant", table_name="sr_invoices")
    op.drop_index("ix_sr_invoices_tenant_issue_date", table_name="sr_invoices")
    op.drop_table("sr_invoices")
