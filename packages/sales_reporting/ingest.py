"""Load invoices from a JSON file for seeding the reporting store.

The file holds a JSON array of invoice objects. Keys may be camelCase (as the
invoice service emits them) or snake_case::

    [
      {
        "tenantId": "shop-1",
        "invoiceId": "#INV-2045",
        "customerName": "Asha Rao",
        "issueDate": "2024-03-14",
        "paymentMethod": "UPI",
        "type": "GOLD_22K",
        "grossAmount": "61000.00",
        "netAmount": "62830.00",
        "items": [{"description": "Chain", "type": "GOLD_22K", "weight": "10.5"}]
      }
    ]
"""

from __future__ import annotations

import json
from os import PathLike
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .logging_setup import get_logger
from .models import InvoicePayload

_logger = get_logger("sales_reporting.ingest")


def parse_invoices(data: Any) -> list[InvoicePayload]:
    """Validate decoded JSON into invoice payloads.

    Raises ``ValueError`` naming the offending position when the top level is
    not a list or an entry does not validate.
    """

    if not isinstance(data, list):
        raise ValueError("Invoice JSON must be a list of invoice objects")

    invoices: list[InvoicePayload] = []
    for pos, entry in enumerate(data):
        try:
            invoices.append(InvoicePayload.model_validate(entry))
        except ValidationError as exc:
            raise ValueError(f"invalid invoice at position {pos}: {exc}") from exc
    return invoices


def load_invoices_json(path: str | PathLike[str]) -> list[InvoicePayload]:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to parse JSON in {p}: {exc}") from exc
    invoices = parse_invoices(data)
    _logger.info("ingest:loaded path=%s invoices=%d", p, len(invoices))
    return invoices


__all__ = ["parse_invoices", "load_invoices_json"]
