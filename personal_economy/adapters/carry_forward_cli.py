"""CLI adapter to seed a period with the previous month's records.

Copies incomes, rolls unpaid debts and copies recurring projected incomes
into ``CARRY_FORWARD_PERIOD`` (``YYYY-MM``, defaults to the current month).
"""

import os

from personal_economy.domain.exceptions import RecordValidationError
from personal_economy.domain.services.periods import (
    current_period_id,
    parse_period_id,
)
from personal_economy.infrastructure.container import (
    build_carry_forward_use_cases,
)
from personal_economy.infrastructure.logging.logger import (
    get_app_logger,
    get_usage_logger,
)


def main() -> None:
    """Run the income, debt and projected income carry-forward use cases."""
    logger = get_app_logger()
    period_id = (os.getenv("CARRY_FORWARD_PERIOD") or "").strip()
    period_id = period_id or current_period_id()
    try:
        parse_period_id(period_id)
    except RecordValidationError as exc:
        logger.warning(f"Invalid CARRY_FORWARD_PERIOD '{period_id}': {exc}")
        return

    get_usage_logger().info(f"carry_forward_cli period={period_id}")
    copy_incomes, carry_debts, carry_projected = build_carry_forward_use_cases()
    incomes = copy_incomes.execute(period_id)
    debts = carry_debts.execute(period_id)
    projected = carry_projected.execute(period_id)

    print(
        f"Copied {incomes.inserted_count} incomes, carried "
        f"{debts.inserted_count} debts and "
        f"{projected.inserted_count} recurring projected incomes "
        f"from {incomes.source_period_id} into {period_id}."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
