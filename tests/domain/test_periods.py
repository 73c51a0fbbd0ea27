"""Tests for period identifier helpers."""

from datetime import date

import pytest

from personal_economy.domain.exceptions import RecordValidationError
from personal_economy.domain.services.periods import (
    current_period_id,
    default_period,
    parse_period_id,
    period_label,
    previous_period_id,
    rolling_period_ids,
    shift_period_id,
)


def test_parse_period_id_splits_year_and_month() -> None:
    assert parse_period_id("2024-07") == (2024, 7)


@pytest.mark.parametrize("value", ["2024-7", "2024-13", "24-01", "", None])
def test_parse_period_id_rejects_malformed_values(value) -> None:
    with pytest.raises(RecordValidationError):
        parse_period_id(value)


def test_previous_period_crosses_year_boundary() -> None:
    assert previous_period_id("2024-01") == "2023-12"
    assert shift_period_id("2023-11", 3) == "2024-02"


def test_rolling_period_ids_are_oldest_first() -> None:
    assert rolling_period_ids("2024-02", 4) == [
        "2023-11",
        "2023-12",
        "2024-01",
        "2024-02",
    ]


def test_rolling_period_ids_requires_positive_window() -> None:
    with pytest.raises(ValueError):
        rolling_period_ids("2024-02", 0)


def test_current_period_id_uses_given_date() -> None:
    assert current_period_id(date(2025, 9, 30)) == "2025-09"


def test_default_period_has_no_rate() -> None:
    period = default_period("2024-05")

    assert (period.year, period.month) == (2024, 5)
    assert period.usd_cop_rate is None


def test_period_label_is_short() -> None:
    assert period_label("2024-12") == "Dec 24"
