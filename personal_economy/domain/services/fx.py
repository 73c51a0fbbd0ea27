"""Currency conversion into the reporting currency.

Each period carries a single manual USD to COP rate. Amounts in a foreign
currency convert with the rate of the period they belong to. When the rate is
unset the amount counts as zero and a warning is logged.
"""

from decimal import Decimal
from logging import Logger

from personal_economy.domain.constants import REPORTING_CURRENCY
from personal_economy.domain.models import Period
from personal_economy.domain.services.normalization import normalize_currency
from personal_economy.utils.decimal_utils import coerce_decimal

ZERO = Decimal("0")


def requires_rate(currency: str | None, period: Period) -> bool:
    """Return True when converting ``currency`` in ``period`` lacks a rate."""
    code = normalize_currency(currency) or REPORTING_CURRENCY
    return code != REPORTING_CURRENCY and period.usd_cop_rate is None


def convert_amount(
    amount,
    currency: str | None,
    period: Period,
) -> Decimal | None:
    """Convert an amount using the period rate.

    Args:
        amount: Amount in ``currency``.
        currency: Currency code of the amount.
        period: Period whose manual rate applies.

    Returns:
        Decimal | None: Converted amount or None when the rate is missing.
    """
    value = coerce_decimal(amount)
    code = normalize_currency(currency) or REPORTING_CURRENCY
    if code == REPORTING_CURRENCY:
        return value
    if period.usd_cop_rate is None:
        return None
    return value * coerce_decimal(period.usd_cop_rate)


def to_reporting_currency(
    amount,
    currency: str | None,
    period: Period,
    logger: Logger,
) -> Decimal:
    """Convert an amount to the reporting currency, falling back to zero.

    Args:
        amount: Amount in ``currency``.
        currency: Currency code of the amount.
        period: Period whose manual rate applies.
        logger: Logger used for missing-rate warnings.

    Returns:
        Decimal: Converted amount, or zero when the period has no rate.
    """
    converted = convert_amount(amount, currency, period)
    if converted is None:
        logger.warning(
            f"Missing USD/COP rate for period {period.id}; "
            f"{currency} amount counted as 0"
        )
        return ZERO
    return converted


class ReportingConverter:
    """Period-scoped converter that remembers incomplete conversions.

    A new instance is created for every aggregation so no state is shared
    between calls. Missing rates are logged once per currency.
    """

    def __init__(self, period: Period, logger: Logger) -> None:
        self._period = period
        self._logger = logger
        self._missing: set[str] = set()

    @property
    def period(self) -> Period:
        return self._period

    @property
    def complete(self) -> bool:
        """Return False once an amount could not be converted."""
        return not self._missing

    @property
    def missing_currencies(self) -> frozenset[str]:
        return frozenset(self._missing)

    def convert(self, amount, currency: str | None) -> Decimal:
        converted = convert_amount(amount, currency, self._period)
        if converted is not None:
            return converted
        code = normalize_currency(currency) or REPORTING_CURRENCY
        if code not in self._missing:
            self._missing.add(code)
            self._logger.warning(
                f"Missing USD/COP rate for period {self._period.id}; "
                f"{code} amounts counted as 0 and totals are incomplete"
            )
        return ZERO


__all__ = [
    "ZERO",
    "requires_rate",
    "convert_amount",
    "to_reporting_currency",
    "ReportingConverter",
]
