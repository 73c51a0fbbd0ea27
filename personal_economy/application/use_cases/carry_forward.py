"""Use cases that seed a period with records of the previous one.

Incomes are copied as-is into the new month. Debts roll forward with their
outstanding balance, and only into a period that has no debts yet, so that
running the job twice does not duplicate them. Recurring projected incomes
follow the same rule against the recurring items of the target period.
"""

from collections.abc import Callable
from dataclasses import dataclass

from personal_economy.application.ports.records_repository import (
    FinanceRecordsRepositoryPort,
)
from personal_economy.domain.services.carry_forward import (
    carry_forward_debts,
    carry_forward_projected_incomes,
    copy_incomes,
    new_record_id,
)
from personal_economy.domain.services.periods import previous_period_id
from personal_economy.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class CarryForwardResult:
    """Result of a carry-forward run.

    Attributes:
        source_period_id: Period the records were read from.
        target_period_id: Period the records were written to.
        source_count: Number of records read from the source period.
        inserted_count: Number of records written to the target period.
    """

    source_period_id: str
    target_period_id: str
    source_count: int
    inserted_count: int


class CopyIncomesUseCase:
    """Copy the incomes of the previous period into a period."""

    def __init__(
        self,
        records_repository: FinanceRecordsRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, period_id: str) -> CarryForwardResult:
        """Copy incomes into ``period_id``.

        Args:
            period_id: Target period identifier.

        Returns:
            CarryForwardResult: Counts of read and inserted incomes.
        """
        source_id = previous_period_id(period_id)
        previous = self._records_repository.fetch_incomes([source_id])
        if not previous:
            self._logger.warning(
                f"No incomes found in {source_id}; nothing copied"
            )
            return CarryForwardResult(source_id, period_id, 0, 0)

        copies = copy_incomes(previous, period_id, self._id_factory)
        inserted = self._records_repository.add_incomes(copies)
        self._logger.info(
            f"Copied {inserted} incomes from {source_id} into {period_id}"
        )
        return CarryForwardResult(source_id, period_id, len(previous), inserted)


class CarryForwardDebtsUseCase:
    """Roll unpaid debts of the previous period into a period."""

    def __init__(
        self,
        records_repository: FinanceRecordsRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, period_id: str) -> CarryForwardResult:
        """Carry debts into ``period_id`` unless it already has debts.

        Args:
            period_id: Target period identifier.

        Returns:
            CarryForwardResult: Counts of read and inserted debts.
        """
        source_id = previous_period_id(period_id)
        if self._records_repository.count_debts(period_id) > 0:
            self._logger.info(
                f"Period {period_id} already has debts; carry-forward skipped"
            )
            return CarryForwardResult(source_id, period_id, 0, 0)

        previous = self._records_repository.fetch_debts([source_id])
        carried = carry_forward_debts(previous, period_id, self._id_factory)
        inserted = (
            self._records_repository.add_debts(carried) if carried else 0
        )
        self._logger.info(
            f"Carried {inserted} of {len(previous)} debts "
            f"from {source_id} into {period_id}"
        )
        return CarryForwardResult(source_id, period_id, len(previous), inserted)


class CarryForwardProjectedIncomesUseCase:
    """Copy recurring projected incomes of the previous period."""

    def __init__(
        self,
        records_repository: FinanceRecordsRepositoryPort,
        logger=None,
        id_factory: Callable[[], str] = new_record_id,
    ) -> None:
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._id_factory = id_factory

    def execute(self, period_id: str) -> CarryForwardResult:
        """Copy recurring items into ``period_id`` unless it has some.

        Args:
            period_id: Target period identifier.

        Returns:
            CarryForwardResult: Counts of read and inserted items.
        """
        source_id = previous_period_id(period_id)
        repository = self._records_repository
        if repository.count_recurring_projected_incomes(period_id) > 0:
            self._logger.info(
                f"Period {period_id} already has recurring projected incomes; "
                "carry-forward skipped"
            )
            return CarryForwardResult(source_id, period_id, 0, 0)

        previous = repository.fetch_projected_incomes([source_id])
        copies = carry_forward_projected_incomes(
            previous, period_id, self._id_factory
        )
        inserted = repository.add_projected_incomes(copies) if copies else 0
        self._logger.info(
            f"Copied {inserted} recurring projected incomes "
            f"from {source_id} into {period_id}"
        )
        return CarryForwardResult(source_id, period_id, len(copies), inserted)


__all__ = [
    "CarryForwardResult",
    "CopyIncomesUseCase",
    "CarryForwardDebtsUseCase",
    "CarryForwardProjectedIncomesUseCase",
]
