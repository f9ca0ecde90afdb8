"""Record source boundary and the in-memory implementation.

A report issues two reads (the full filtered set for the aggregates and one
sorted page for the rows). Both go through a single :class:`ScopedRead`
obtained from :meth:`RecordSource.read_scope`, so they observe the same
snapshot of the data.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Protocol

from .filters import FilterSpec
from .logging_setup import get_logger
from .models import SaleRecord
from .paging import Page, PageRequest, Sort, paginate, sort_records

_logger = get_logger("sales_reporting.sources")


class RecordSourceError(RuntimeError):
    """Reading from the underlying store failed."""


class ScopedRead(Protocol):
    def fetch_all(self, spec: FilterSpec, sort: Sort) -> list[SaleRecord]: ...

    def fetch_page(self, spec: FilterSpec, request: PageRequest) -> Page[SaleRecord]: ...


class RecordSource(Protocol):
    def read_scope(self) -> AbstractContextManager[ScopedRead]: ...


# ---------------------------------------------------------------------------
# In-memory source
# ---------------------------------------------------------------------------


class _SnapshotRead:
    __slots__ = ("_records",)

    def __init__(self, records: tuple[SaleRecord, ...]) -> None:
        self._records = records

    def _matching(self, spec: FilterSpec) -> list[SaleRecord]:
        return [r for r in self._records if spec.matches(r)]

    def fetch_all(self, spec: FilterSpec, sort: Sort) -> list[SaleRecord]:
        return sort_records(self._matching(spec), sort)

    def fetch_page(self, spec: FilterSpec, request: PageRequest) -> Page[SaleRecord]:
        return paginate(sort_records(self._matching(spec), request.sort), request)


class InMemoryRecordSource:
    """Holds records in process; used by tests and for small fixtures.

    ``replace_all``/``add`` swap in a new tuple under a lock. An open read
    scope keeps the tuple that was current when it was acquired.
    """

    def __init__(self, records: Iterable[SaleRecord] = ()) -> None:
        self._lock = threading.Lock()
        self._records: tuple[SaleRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def replace_all(self, records: Iterable[SaleRecord]) -> None:
        snapshot = tuple(records)
        with self._lock:
            self._records = snapshot
        _logger.debug("sources:replace_all count=%d", len(snapshot))

    def add(self, *records: SaleRecord) -> None:
        with self._lock:
            self._records = self._records + records

    @contextmanager
    def read_scope(self) -> Iterator[ScopedRead]:
        with self._lock:
            pinned = self._records
        yield _SnapshotRead(pinned)


__all__ = ["RecordSourceError", "ScopedRead", "RecordSource", "InMemoryRecordSource"]
