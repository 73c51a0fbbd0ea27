"""Port for reading and writing monthly finance records."""

from collections.abc import Sequence
from typing import Protocol

from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    Debt,
    Entity,
    Expense,
    Income,
    Period,
    ProjectedIncome,
)


class FinanceRecordsRepositoryPort(Protocol):
    """Port exposing the record store used by the summary use cases."""

    def fetch_period(self, period_id: str) -> Period | None:
        """Return the stored period, or None when it was never created."""

    def fetch_periods(self, period_ids: Sequence[str]) -> list[Period]:
        """Return the stored periods among ``period_ids``."""

    def fetch_accounts(self, active_only: bool = True) -> list[Account]:
        """Return accounts, by default only active ones."""

    def fetch_entities(self) -> list[Entity]:
        """Return all entities."""

    def fetch_snapshots(
        self,
        period_ids: Sequence[str],
    ) -> list[AccountSnapshot]:
        """Return account snapshots of the given periods."""

    def fetch_incomes(self, period_ids: Sequence[str]) -> list[Income]:
        """Return incomes of the given periods."""

    def fetch_expenses(self, period_ids: Sequence[str]) -> list[Expense]:
        """Return expenses of the given periods."""

    def fetch_debts(self, period_ids: Sequence[str]) -> list[Debt]:
        """Return debts of the given periods."""

    def fetch_projected_incomes(
        self,
        period_ids: Sequence[str],
    ) -> list[ProjectedIncome]:
        """Return projected incomes of the given periods."""

    def count_debts(self, period_id: str) -> int:
        """Return the number of debts stored for a period."""

    def count_recurring_projected_incomes(self, period_id: str) -> int:
        """Return the number of recurring projected incomes of a period."""

    def add_incomes(self, incomes: Sequence[Income]) -> int:
        """Insert incomes in a single transaction and return the count."""

    def add_debts(self, debts: Sequence[Debt]) -> int:
        """Insert debts in a single transaction and return the count."""

    def add_projected_incomes(self, items: Sequence[ProjectedIncome]) -> int:
        """Insert projected incomes in a single transaction."""


__all__ = ["FinanceRecordsRepositoryPort"]
