"""Named date windows → concrete inclusive ``[start, end]`` intervals.

Every window ends at "today" (the resolution date). ``CUSTOM`` takes ISO
``YYYY-MM-DD`` bounds; bounds that are missing or unparsable fall back to the
first of the current month (start) and today (end) rather than raising, and
reversed bounds are swapped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from enum import StrEnum

from .logging_setup import get_logger

_logger = get_logger("sales_reporting.date_ranges")

# Calendar dates only; no basic (20240210) or week (2024-W06-6) forms.
_ISO_DATE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


class DateFilter(StrEnum):
    TODAY = "TODAY"
    THIS_WEEK = "THIS_WEEK"
    THIS_MONTH = "THIS_MONTH"
    LAST_6_MONTHS = "LAST_6_MONTHS"
    THIS_YEAR = "THIS_YEAR"
    CUSTOM = "CUSTOM"

    @classmethod
    def parse(cls, value: str | None) -> DateFilter:
        """Case-insensitive lookup; ``None`` and unknown keywords mean ``THIS_YEAR``."""

        if value is None:
            return cls.THIS_YEAR
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.THIS_YEAR


@dataclass(frozen=True, slots=True)
class DateRange:
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def _months_back(day: date, months: int) -> date:
    """First day of the month ``months`` calendar months before ``day``'s month."""

    index = day.year * 12 + (day.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def _parse_iso(raw: str | None, fallback: date) -> date:
    if raw is None or not raw.strip():
        return fallback
    text = raw.strip()
    try:
        if not _ISO_DATE.fullmatch(text):
            raise ValueError(text)
        return date.fromisoformat(text)
    except ValueError:
        _logger.debug("date_ranges:unparsable_bound value=%r fallback=%s", raw, fallback)
        return fallback


def resolve_date_range(
    date_filter: DateFilter | str | None,
    from_: str | None = None,
    to: str | None = None,
    *,
    today: date | None = None,
) -> DateRange:
    """Resolve a keyword (or custom bounds) into an inclusive date interval.

    ``from_``/``to`` are only consulted for ``CUSTOM``. ``today`` defaults to
    the local calendar date and exists so callers can pin the anchor.
    """

    anchor = today or date.today()
    keyword = date_filter if isinstance(date_filter, DateFilter) else DateFilter.parse(date_filter)

    if keyword is DateFilter.TODAY:
        return DateRange(anchor, anchor)
    if keyword is DateFilter.THIS_WEEK:
        return DateRange(anchor - timedelta(days=anchor.weekday()), anchor)
    if keyword is DateFilter.THIS_MONTH:
        return DateRange(anchor.replace(day=1), anchor)
    if keyword is DateFilter.LAST_6_MONTHS:
        return DateRange(_months_back(anchor, 5), anchor)
    if keyword is DateFilter.CUSTOM:
        start = _parse_iso(from_, anchor.replace(day=1))
        end = _parse_iso(to, anchor)
        if end < start:
            return DateRange(end, start)
        return DateRange(start, end)
    return DateRange(anchor.replace(month=1, day=1), anchor)


__all__ = ["DateFilter", "DateRange", "resolve_date_range"]
