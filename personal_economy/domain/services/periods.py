"""Helpers for ``YYYY-MM`` period identifiers."""

from datetime import date
import re

from personal_economy.domain.exceptions import RecordValidationError
from personal_economy.domain.models import Period


_PERIOD_ID_PATTERN = re.compile(r"^\d{4}-\d{2}$")


def parse_period_id(period_id: str) -> tuple[int, int]:
    """Split a period identifier into year and month.

    Args:
        period_id: Identifier in ``YYYY-MM`` format.

    Returns:
        tuple[int, int]: Year and month.

    Raises:
        RecordValidationError: If the identifier is malformed.
    """
    if not isinstance(period_id, str) or not _PERIOD_ID_PATTERN.match(period_id):
        raise RecordValidationError(
            "Period", "id", f"expected YYYY-MM, got {period_id!r}"
        )
    year, month = (int(part) for part in period_id.split("-"))
    if not 1 <= month <= 12:
        raise RecordValidationError(
            "Period", "id", f"month out of range in {period_id!r}"
        )
    return year, month


def format_period_id(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def shift_period_id(period_id: str, months: int) -> str:
    """Return the identifier ``months`` months away from ``period_id``."""
    year, month = parse_period_id(period_id)
    index = year * 12 + (month - 1) + months
    return format_period_id(index // 12, index % 12 + 1)


def previous_period_id(period_id: str) -> str:
    return shift_period_id(period_id, -1)


def rolling_period_ids(period_id: str, months: int) -> list[str]:
    """Return ``months`` consecutive identifiers ending at ``period_id``.

    Args:
        period_id: Last period of the window.
        months: Window length, at least 1.

    Returns:
        list[str]: Identifiers ordered from oldest to newest.
    """
    if months < 1:
        raise ValueError(f"Window must cover at least one month: {months}")
    return [
        shift_period_id(period_id, offset)
        for offset in range(-(months - 1), 1)
    ]


def current_period_id(today: date | None = None) -> str:
    resolved = today or date.today()
    return format_period_id(resolved.year, resolved.month)


def default_period(period_id: str) -> Period:
    """Return a period without exchange rate for ids with no stored period."""
    year, month = parse_period_id(period_id)
    return Period(id=period_id, year=year, month=month, usd_cop_rate=None)


def period_label(period_id: str) -> str:
    """Return a short chart label such as ``Jan 24``."""
    year, month = parse_period_id(period_id)
    return date(year, month, 1).strftime("%b %y")


__all__ = [
    "parse_period_id",
    "format_period_id",
    "shift_period_id",
    "previous_period_id",
    "rolling_period_ids",
    "current_period_id",
    "default_period",
    "period_label",
]
