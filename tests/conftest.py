"""Pytest configuration for test isolation.

Makes the workspace packages importable without an install (``packages/`` for
``sales_reporting``, ``libs/db/src`` for ``db`` and the repo root for
``tests.helpers``).

``db.client`` keeps one process-wide engine bound to the first URL it sees.
Tests bootstrap a fresh SQLite file each, so the engine is disposed after
every test via an autouse fixture, package logging is reset with it, and
``DATABASE_URL`` is cleared so a developer's ``.env`` or shell never leaks
into a test.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parents[1]
sys.path[:0] = [
    p
    for p in [str(_ROOT / "packages"), str(_ROOT / "libs" / "db" / "src"), str(_ROOT)]
    if p not in sys.path
]


@pytest.fixture(autouse=True)
def _isolate_database(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    from db.client import reset_engine
    from sales_reporting.logging_setup import reset_logging

    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("SALES_REPORTING_FALLBACK_TENANT", raising=False)
    monkeypatch.delenv("SALES_REPORTING_LOG_LEVEL", raising=False)
    reset_engine()
    yield
    reset_engine()
    reset_logging()
