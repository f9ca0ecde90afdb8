"""Canonical labels and derived amounts shared by aggregation and row views.

- Payment methods collapse free-form input onto a small label set
  (``Cash``/``UPI``/``Card``, otherwise the capitalized input).
- Category codes such as ``GOLD_22K`` collapse onto display buckets
  (``Gold 22K``, ``Silver``...).
- GST is reconstructed per invoice as ``max(net - gross + discount, 0)``; it
  is never stored.

All helpers are null-safe: ``None`` amounts and weights count as zero.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from .logging_setup import get_logger
from .models import LineItem, SaleRecord

_logger = get_logger("sales_reporting.normalizers")

ZERO = Decimal("0")

# Recognized payment tokens (lowercased) → canonical label.
_PAYMENT_LABELS: dict[str, str] = {
    "upi": "UPI",
    "credit card": "Card",
    "debit card": "Card",
    "card": "Card",
}

# Checked in order; the first karat substring found wins.
_GOLD_KARATS: tuple[str, ...] = ("18K", "22K", "24K")

# Category prefix → display bucket (gold is refined by karat separately).
_METAL_LABELS: tuple[tuple[str, str], ...] = (
    ("SILVER", "Silver"),
    ("PLATINUM", "Platinum"),
    ("DIAMOND", "Diamond"),
)


def amount(value: Decimal | None) -> Decimal:
    return ZERO if value is None else value


def normalized_type(value: str | None) -> str:
    """Trimmed, uppercased category code; ``""`` for blank input."""

    if value is None or not value.strip():
        return ""
    return value.strip().upper()


def normalize_payment_method(value: str | None) -> str:
    if value is None or not value.strip():
        return "Cash"
    key = value.strip().lower()
    return _PAYMENT_LABELS.get(key) or key.capitalize()


def normalize_metal(value: str | None) -> str:
    code = normalized_type(value)
    if not code:
        return "Other"
    if code.startswith("GOLD"):
        for karat in _GOLD_KARATS:
            if karat in code:
                return f"Gold {karat}"
        return "Gold"
    for prefix, label in _METAL_LABELS:
        if code.startswith(prefix):
            return label
    return code.capitalize()


def item_weight(item: LineItem) -> Decimal:
    return amount(item.weight)


def total_weight(items: Iterable[LineItem]) -> Decimal:
    return sum((item_weight(it) for it in items), ZERO)


def calculate_gst(record: SaleRecord) -> Decimal:
    """Tax component implied by the stored totals, floored at zero."""

    raw = amount(record.net_amount) - amount(record.gross_amount) + amount(record.discount)
    if raw < 0:
        _logger.debug(
            "normalizers:gst_clamped invoice_id=%s raw=%s", record.invoice_id, raw
        )
        return ZERO
    return raw


__all__ = [
    "ZERO",
    "amount",
    "normalized_type",
    "normalize_payment_method",
    "normalize_metal",
    "item_weight",
    "total_weight",
    "calculate_gst",
]
