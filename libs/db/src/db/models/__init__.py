"""Shared SQLAlchemy models registry for the workspace database.

Currently includes the sales invoice model read by ``sales_reporting``.
"""

from .sales import Base, SrInvoice

__all__ = [
    "Base",
    "SrInvoice",
]
