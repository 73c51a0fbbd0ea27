"""CLI adapter to print the financial summary of a period.

The period is read from ``SUMMARY_PERIOD`` (``YYYY-MM``) and defaults to the
current month.
"""

import os

from personal_economy.domain.exceptions import RecordValidationError
from personal_economy.domain.services.periods import (
    current_period_id,
    parse_period_id,
)
from personal_economy.infrastructure.container import build_summary_use_case
from personal_economy.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def _resolve_period(value: str | None, logger) -> str | None:
    """Return the requested period, or None when it is malformed.

    Args:
        value: Raw ``SUMMARY_PERIOD`` value.
        logger: Logger used for warnings.

    Returns:
        str | None: Period identifier to summarize.
    """
    if not value:
        return current_period_id()
    try:
        parse_period_id(value)
    except RecordValidationError as exc:
        logger.warning(f"Invalid SUMMARY_PERIOD '{value}': {exc}")
        return None
    return value.strip()


def main() -> None:
    """Run the period summary use case and print its totals."""
    logger = get_app_logger()
    period_id = _resolve_period(os.getenv("SUMMARY_PERIOD"), logger)
    if period_id is None:
        return

    get_usage_logger().info(f"summary_cli period={period_id}")
    summary = build_summary_use_case().execute(period_id)

    print(f"Summary for {summary.period_id} ({summary.currency_code})")
    print(
        f"Income: total={summary.income_total}, "
        f"salary={summary.income_salary}, "
        f"non_salary_real={summary.income_non_salary_real}, "
        f"non_salary_projected={summary.income_non_salary_projected}"
    )
    print(
        f"Expenses: total={summary.expenses_total}, "
        f"unspecified={summary.unspecified_expense}"
    )
    print(
        f"Balance: {summary.balance} "
        f"(without salary {summary.balance_without_salary})"
    )
    print(
        f"Capital: total={summary.capital_total}, "
        f"liquid={summary.liquid_total}, debt={summary.debt_total}"
    )
    if not summary.conversion_complete:
        print("Warning: some foreign amounts had no exchange rate.")


if __name__ == "__main__":  # pragma: no cover
    main()
