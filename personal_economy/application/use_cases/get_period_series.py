"""Use case to build the rolling series behind the dashboard charts."""

from collections import defaultdict

from personal_economy.application.ports.records_repository import (
    FinanceRecordsRepositoryPort,
)
from personal_economy.domain.constants import DEFAULT_SERIES_MONTHS
from personal_economy.domain.models import PeriodRecords, PeriodSeries
from personal_economy.domain.services.periods import rolling_period_ids
from personal_economy.domain.services.series import build_series
from personal_economy.infrastructure.logging.logger import get_app_logger


class GetPeriodSeriesUseCase:
    """Compute per-period aggregates over a window ending at a period."""

    def __init__(
        self,
        records_repository: FinanceRecordsRepositoryPort,
        logger=None,
        months: int = DEFAULT_SERIES_MONTHS,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the monthly records.
            logger: Optional logger compatible with logging.Logger-like API.
            months: Default window length.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._months = months

    def execute(
        self,
        period_id: str,
        months: int | None = None,
    ) -> PeriodSeries:
        """Return the series for the window ending at ``period_id``.

        Args:
            period_id: Last period of the window.
            months: Optional override of the window length.

        Returns:
            PeriodSeries: One point per period, oldest first.
        """
        period_ids = rolling_period_ids(period_id, months or self._months)
        records = load_period_records(self._records_repository, period_ids)
        accounts = self._records_repository.fetch_accounts(active_only=True)
        series = build_series(
            period_ids,
            records,
            accounts,
            logger=self._logger,
        )
        self._logger.info(
            f"Series built for {period_ids[0]}..{period_ids[-1]} "
            f"({len(series.points)} periods)"
        )
        return series


def load_period_records(
    repository: FinanceRecordsRepositoryPort,
    period_ids: list[str],
) -> dict[str, PeriodRecords]:
    """Fetch every record type for ``period_ids`` and group it by period.

    Args:
        repository: Port providing the monthly records.
        period_ids: Period identifiers to load.

    Returns:
        dict[str, PeriodRecords]: Records keyed by period identifier.
    """
    periods = {period.id: period for period in repository.fetch_periods(period_ids)}
    grouped: dict[str, dict[str, list]] = defaultdict(lambda: defaultdict(list))
    fetchers = {
        "snapshots": repository.fetch_snapshots,
        "debts": repository.fetch_debts,
        "expenses": repository.fetch_expenses,
        "incomes": repository.fetch_incomes,
        "projected_incomes": repository.fetch_projected_incomes,
    }
    for field_name, fetch in fetchers.items():
        for record in fetch(period_ids):
            grouped[record.period_id][field_name].append(record)

    return {
        period_id: PeriodRecords(
            period=periods.get(period_id),
            **{
                field_name: tuple(grouped[period_id][field_name])
                for field_name in fetchers
            },
        )
        for period_id in period_ids
    }


__all__ = ["GetPeriodSeriesUseCase", "load_period_records"]
