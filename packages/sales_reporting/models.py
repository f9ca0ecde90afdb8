"""Data models for ``sales_reporting``.

Three families live here:

- Read-only domain records (:class:`SaleRecord`, :class:`LineItem`) as frozen
  dataclasses. Record sources produce them; the engine never mutates them.
- The request model (:class:`ReportQuery`) and the report value objects
  (:class:`SalesReport` and its parts) as pydantic models. Report models dump
  with camelCase aliases (``model_dump(by_alias=True)``), which is the wire
  shape consumers expect.
- Ingest DTOs (:class:`InvoicePayload`, :class:`LineItemPayload`) used to
  validate invoice JSON before it is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Domain records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineItem:
    """A single priced component of an invoice.

    ``weight`` is in grams; ``None`` means the item's weight is not tracked
    and it counts as zero in every weight total.
    """

    description: str | None = None
    type: str | None = None
    weight: Decimal | None = None
    rate: Decimal | None = None
    making_charge_percent: Decimal | None = None
    gst_rate_percent: Decimal | None = None


@dataclass(frozen=True, slots=True)
class SaleRecord:
    """A completed sale (invoice) as read from a record source."""

    invoice_id: str
    tenant_id: str
    customer_name: str
    issue_date: date
    status: str = "Paid"
    payment_method: str | None = None
    type: str | None = None
    gross_amount: Decimal = Decimal("0")
    net_amount: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    making_charge: Decimal = Decimal("0")
    gst_rate: Decimal = Decimal("0")
    items: tuple[LineItem, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class ReportQuery(BaseModel):
    """Optional report parameters; absence always means the documented default.

    Accepts both snake_case field names and the camelCase wire names
    (``dateFilter``, ``minAmount``, ``from``...). Values are kept raw: keyword
    resolution and clamping happen in the engine so that malformed inputs fall
    back silently instead of failing validation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    date_filter: str | None = "THIS_MONTH"
    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    search: str | None = None
    payment_method: str | None = None
    metal_type: str | None = None
    salesperson: str | None = None
    min_amount: Decimal | None = None
    max_amount: Decimal | None = None
    page: int = 0
    size: int = 10
    sort_by: str | None = "date"
    sort_dir: str | None = "desc"


# ---------------------------------------------------------------------------
# Report value objects
# ---------------------------------------------------------------------------


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SalesSummary(_ReportModel):
    total_sales_amount: float = 0.0
    total_invoices: int = 0
    total_gst_collected: float = 0.0
    total_gold_sold_grams: float = 0.0
    total_silver_sold_grams: float = 0.0


class TrendPoint(_ReportModel):
    date: str
    amount: float
    count: int


class PaymentShare(_ReportModel):
    payment_method: str
    amount: float
    invoice_count: int


class MetalShare(_ReportModel):
    category: str
    amount: float
    weight: float


class ReportRow(_ReportModel):
    id: str
    date: str
    customer_name: str
    payment_method: str
    metal_type: str
    total_weight: float
    gst: float
    net_amount: float
    salesperson: str


class SalesReport(_ReportModel):
    summary: SalesSummary
    sales_trend: list[TrendPoint]
    payment_distribution: list[PaymentShare]
    metal_comparison: list[MetalShare]
    rows: list[ReportRow]
    page: int
    size: int
    total_elements: int
    total_pages: int


# ---------------------------------------------------------------------------
# Ingest DTOs
# ---------------------------------------------------------------------------


class LineItemPayload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", str_strip_whitespace=True
    )

    description: str | None = None
    type: str | None = None
    weight: Decimal | None = None
    rate: Decimal | None = None
    making_charge_percent: Decimal | None = None
    gst_rate_percent: Decimal | None = None

    def to_item(self) -> LineItem:
        return LineItem(
            description=self.description,
            type=self.type,
            weight=self.weight,
            rate=self.rate,
            making_charge_percent=self.making_charge_percent,
            gst_rate_percent=self.gst_rate_percent,
        )

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-column shape (snake_case keys, decimals as strings)."""

        return self.model_dump(mode="json")


class InvoicePayload(BaseModel):
    """One invoice as accepted by the ingest path."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore", str_strip_whitespace=True
    )

    tenant_id: str
    invoice_id: str
    customer_name: str
    issue_date: date
    status: str = "Paid"
    payment_method: str | None = None
    type: str | None = None
    gross_amount: Decimal = Decimal("0")
    net_amount: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    making_charge: Decimal = Decimal("0")
    gst_rate: Decimal = Decimal("0")
    items: list[LineItemPayload] = Field(default_factory=list)

    @field_validator("tenant_id", "invoice_id", "customer_name")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must be non-empty")
        return v

    @field_validator("gross_amount", "net_amount", "discount", "making_charge", "gst_rate")
    @classmethod
    def _non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("must be non-negative")
        return v

    def to_record(self) -> SaleRecord:
        return SaleRecord(
            invoice_id=self.invoice_id,
            tenant_id=self.tenant_id,
            customer_name=self.customer_name,
            issue_date=self.issue_date,
            status=self.status,
            payment_method=self.payment_method,
            type=self.type,
            gross_amount=self.gross_amount,
            net_amount=self.net_amount,
            discount=self.discount,
            making_charge=self.making_charge,
            gst_rate=self.gst_rate,
            items=tuple(it.to_item() for it in self.items),
        )


__all__ = [
    "LineItem",
    "SaleRecord",
    "ReportQuery",
    "SalesSummary",
    "TrendPoint",
    "PaymentShare",
    "MetalShare",
    "ReportRow",
    "SalesReport",
    "LineItemPayload",
    "InvoicePayload",
]
