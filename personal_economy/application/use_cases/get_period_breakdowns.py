"""Use case to compute dashboard breakdowns for a period."""

from personal_economy.application.ports.records_repository import (
    FinanceRecordsRepositoryPort,
)
from personal_economy.application.use_cases.get_period_series import (
    load_period_records,
)
from personal_economy.domain.models import PeriodBreakdowns, PeriodRecords
from personal_economy.domain.services.breakdowns import (
    compute_assets_by_account_type,
    compute_capital_waterfall,
    compute_expenses_by_entity,
    compute_investment_terms,
    compute_liquidity_split,
    compute_returns_by_entity,
)
from personal_economy.domain.services.fx import ReportingConverter
from personal_economy.domain.services.periods import (
    default_period,
    previous_period_id,
)
from personal_economy.domain.services.series import build_series
from personal_economy.infrastructure.logging.logger import get_app_logger


class GetPeriodBreakdownsUseCase:
    """Compute per-entity, per-type and capital breakdowns of a period."""

    def __init__(
        self,
        records_repository: FinanceRecordsRepositoryPort,
        logger=None,
        top_n: int = 8,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the monthly records.
            logger: Optional logger compatible with logging.Logger-like API.
            top_n: Maximum number of entities in the expenses breakdown.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._top_n = top_n

    def execute(self, period_id: str) -> PeriodBreakdowns:
        """Return the breakdowns of ``period_id``.

        Args:
            period_id: Period identifier in ``YYYY-MM`` format.

        Returns:
            PeriodBreakdowns: Breakdowns in the reporting currency.
        """
        previous_id = previous_period_id(period_id)
        repository = self._records_repository
        records = load_period_records(repository, [previous_id, period_id])
        accounts = repository.fetch_accounts(active_only=True)
        accounts_by_id = {account.id: account for account in accounts}
        entity_names = {
            entity.id: entity.name for entity in repository.fetch_entities()
        }

        current: PeriodRecords = records[period_id]
        previous: PeriodRecords = records[previous_id]
        converter = ReportingConverter(
            current.period or default_period(period_id),
            self._logger,
        )
        # Both periods convert with their own rate, as the series does.
        previous_point, current_point = build_series(
            [previous_id, period_id],
            records,
            accounts,
            logger=self._logger,
        ).points

        breakdowns = PeriodBreakdowns(
            period_id=period_id,
            expenses_by_entity=compute_expenses_by_entity(
                current.expenses,
                entity_names,
                converter,
                top_n=self._top_n,
            ),
            returns_by_entity=compute_returns_by_entity(
                current.snapshots,
                previous.snapshots,
                accounts_by_id,
                entity_names,
                converter,
                logger=self._logger,
            ),
            assets_by_account_type=compute_assets_by_account_type(
                current.snapshots,
                accounts_by_id,
                converter,
            ),
            investment_terms=compute_investment_terms(
                current.snapshots,
                accounts_by_id,
                converter,
            ),
            liquidity_split=compute_liquidity_split(
                current_point.liquid_total,
                current_point.capital_total,
            ),
            capital_waterfall=compute_capital_waterfall(
                previous_point.capital_total,
                current_point.capital_total,
                current_point.expenses_total,
            ),
        )
        self._logger.info(
            f"Breakdowns computed for {period_id}: "
            f"{len(breakdowns.expenses_by_entity)} expense entities, "
            f"{len(breakdowns.returns_by_entity)} return entities"
        )
        return breakdowns


__all__ = ["GetPeriodBreakdownsUseCase", "PeriodBreakdowns"]
