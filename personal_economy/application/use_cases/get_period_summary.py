"""Use case to compute the financial summary of a period."""

from personal_economy.application.ports.records_repository import (
    FinanceRecordsRepositoryPort,
)
from personal_economy.domain.models import PeriodSummary
from personal_economy.domain.services.periods import (
    default_period,
    parse_period_id,
    previous_period_id,
)
from personal_economy.domain.services.summary import summarize
from personal_economy.infrastructure.logging.logger import get_app_logger


class GetPeriodSummaryUseCase:
    """Load the records of a period and its predecessor, then summarize."""

    def __init__(
        self,
        records_repository: FinanceRecordsRepositoryPort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the monthly records.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()

    def execute(self, period_id: str) -> PeriodSummary:
        """Return the summary of ``period_id``.

        Periods that were never stored are summarized without exchange rate,
        so foreign amounts count as zero.

        Args:
            period_id: Period identifier in ``YYYY-MM`` format.

        Returns:
            PeriodSummary: Aggregated totals in the reporting currency.
        """
        parse_period_id(period_id)
        previous_id = previous_period_id(period_id)
        repository = self._records_repository

        period = repository.fetch_period(period_id)
        if period is None:
            self._logger.info(
                f"Period {period_id} is not stored; summarizing without rate"
            )
            period = default_period(period_id)

        summary = summarize(
            period,
            incomes=repository.fetch_incomes([period_id]),
            expenses=repository.fetch_expenses([period_id]),
            debts=repository.fetch_debts([period_id]),
            previous_period_debts=repository.fetch_debts([previous_id]),
            accounts=repository.fetch_accounts(active_only=True),
            snapshots=repository.fetch_snapshots([period_id]),
            previous_snapshots=repository.fetch_snapshots([previous_id]),
            logger=self._logger,
        )
        self._logger.info(
            f"Period summary computed for {period_id}: "
            f"income={summary.income_total}, "
            f"expenses={summary.expenses_total}, "
            f"capital={summary.capital_total}, "
            f"complete={summary.conversion_complete}"
        )
        return summary


__all__ = ["GetPeriodSummaryUseCase", "PeriodSummary"]
