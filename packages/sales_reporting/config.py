"""Runtime settings for the reporting engine.

Values are read from the process environment. Entry points load a local
``.env`` via ``python-dotenv`` (without overriding existing variables) before
calling :meth:`ReportSettings.from_env`.

Environment
-----------
``DATABASE_URL``
    Consumed by ``db.client``; ``database_url`` here only records an explicit
    override (e.g. from ``--database-url``).
``SALES_REPORTING_FALLBACK_TENANT``
    Tenant scope used when a request carries no identity. Default ``admin``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_FALLBACK_TENANT = "admin"


@dataclass(frozen=True, slots=True)
class ReportSettings:
    fallback_tenant: str = DEFAULT_FALLBACK_TENANT
    database_url: str | None = None

    @classmethod
    def from_env(cls, *, database_url: str | None = None) -> ReportSettings:
        fallback = (os.getenv("SALES_REPORTING_FALLBACK_TENANT") or "").strip()
        return cls(
            fallback_tenant=fallback or DEFAULT_FALLBACK_TENANT,
            database_url=database_url or os.getenv("DATABASE_URL") or None,
        )


__all__ = ["DEFAULT_FALLBACK_TENANT", "ReportSettings"]
