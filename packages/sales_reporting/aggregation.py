"""Aggregate analytics over the full filtered record set.

Every builder takes the same sequence of records (the whole filtered set, not
the current page) and is a pure function of it. Amounts are accumulated as
``Decimal`` and only converted to ``float`` when the report value objects are
built.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from .models import MetalShare, PaymentShare, SaleRecord, SalesSummary, TrendPoint
from .normalizers import (
    ZERO,
    amount,
    calculate_gst,
    item_weight,
    normalize_metal,
    normalize_payment_method,
    normalized_type,
)


def _metal_grams(records: Sequence[SaleRecord], prefix: str) -> Decimal:
    grams = ZERO
    for record in records:
        for item in record.items:
            if normalized_type(item.type).startswith(prefix):
                grams += item_weight(item)
    return grams


def build_summary(records: Sequence[SaleRecord]) -> SalesSummary:
    total_sales = sum((amount(r.net_amount) for r in records), ZERO)
    total_gst = sum((calculate_gst(r) for r in records), ZERO)
    return SalesSummary(
        total_sales_amount=float(total_sales),
        total_invoices=len(records),
        total_gst_collected=float(total_gst),
        total_gold_sold_grams=float(_metal_grams(records, "GOLD")),
        total_silver_sold_grams=float(_metal_grams(records, "SILVER")),
    )


def build_sales_trend(records: Sequence[SaleRecord]) -> list[TrendPoint]:
    """One point per distinct issue date, ascending."""

    buckets: dict[date, tuple[Decimal, int]] = {}
    for record in records:
        total, count = buckets.get(record.issue_date, (ZERO, 0))
        buckets[record.issue_date] = (total + amount(record.net_amount), count + 1)
    return [
        TrendPoint(date=day.isoformat(), amount=float(total), count=count)
        for day, (total, count) in sorted(buckets.items())
    ]


def build_payment_distribution(records: Sequence[SaleRecord]) -> list[PaymentShare]:
    """Net amount and invoice count per normalized payment method.

    Sorted descending by amount; equal amounts keep first-seen order.
    """

    buckets: dict[str, tuple[Decimal, int]] = {}
    for record in records:
        label = normalize_payment_method(record.payment_method)
        total, count = buckets.get(label, (ZERO, 0))
        buckets[label] = (total + amount(record.net_amount), count + 1)
    ordered = sorted(buckets.items(), key=lambda kv: kv[1][0], reverse=True)
    return [
        PaymentShare(payment_method=label, amount=float(total), invoice_count=count)
        for label, (total, count) in ordered
    ]


def build_metal_comparison(records: Sequence[SaleRecord]) -> list[MetalShare]:
    """Net amount and sold weight per normalized metal category.

    Parameters
    ----------
    records:
        The filtered record set.

    Returns
    -------
    list[MetalShare]
        Sorted descending by amount; equal amounts keep first-seen order.

    Notes
    -----
    A record with items apportions its net amount across them in proportion
    to item weight. When none of its items carries a positive weight the net
    amount is split evenly, so per-category amounts always add up to the
    records' net total. A record without items attributes its full net amount
    (and no weight) to its own ``type``.
    """

    amounts: dict[str, Decimal] = {}
    weights: dict[str, Decimal] = {}

    def _add(category: str, share: Decimal, grams: Decimal) -> None:
        amounts[category] = amounts.get(category, ZERO) + share
        weights[category] = weights.get(category, ZERO) + grams

    for record in records:
        net = amount(record.net_amount)
        if not record.items:
            _add(normalize_metal(record.type), net, ZERO)
            continue

        total_grams = sum((item_weight(it) for it in record.items), ZERO)
        even_share = net / len(record.items)
        for item in record.items:
            grams = item_weight(item)
            share = net * grams / total_grams if total_grams > 0 else even_share
            _add(normalize_metal(item.type), share, grams)

    ordered = sorted(amounts.items(), key=lambda kv: kv[1], reverse=True)
    return [
        MetalShare(category=category, amount=float(total), weight=float(weights[category]))
        for category, total in ordered
    ]


__all__ = [
    "build_summary",
    "build_sales_trend",
    "build_payment_distribution",
    "build_metal_comparison",
]
