"""Tests for the GetPeriodBreakdownsUseCase."""

from decimal import Decimal
from unittest.mock import MagicMock

from personal_economy.application.use_cases.get_period_breakdowns import (
    GetPeriodBreakdownsUseCase,
)
from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    CategoryAmount,
    Entity,
    Expense,
    Period,
)


def _snapshot(account_id: str, period_id: str, balance: str) -> AccountSnapshot:
    return AccountSnapshot(
        id=f"{account_id}-{period_id}",
        period_id=period_id,
        account_id=account_id,
        balance=Decimal(balance),
    )


def test_execute_builds_all_breakdowns() -> None:
    repository = MagicMock()
    repository.fetch_periods.return_value = [
        Period(id="2024-02", year=2024, month=2, usd_cop_rate=Decimal("4000")),
        Period(id="2024-03", year=2024, month=3, usd_cop_rate=Decimal("4000")),
    ]
    repository.fetch_accounts.return_value = [
        Account(
            id="cash",
            entity_id="bank",
            currency="COP",
            categories=("CASH",),
            account_type="Checking",
        ),
        Account(
            id="cdt",
            entity_id="bank",
            currency="COP",
            categories=("INVEST_SHORT",),
            account_type="CDT",
        ),
    ]
    repository.fetch_entities.return_value = [
        Entity(id="bank", name="Bank"),
        Entity(id="shop", name="Shop"),
    ]
    repository.fetch_snapshots.return_value = [
        _snapshot("cash", "2024-02", "100"),
        _snapshot("cdt", "2024-02", "1000"),
        _snapshot("cash", "2024-03", "150"),
        _snapshot("cdt", "2024-03", "1010"),
    ]
    repository.fetch_expenses.return_value = [
        Expense(
            id="e1",
            period_id="2024-03",
            amount=Decimal("40"),
            currency="COP",
            entity_id="shop",
        )
    ]
    repository.fetch_debts.return_value = []
    repository.fetch_incomes.return_value = []
    repository.fetch_projected_incomes.return_value = []

    breakdowns = GetPeriodBreakdownsUseCase(
        repository,
        logger=MagicMock(),
    ).execute("2024-03")

    assert breakdowns.period_id == "2024-03"
    assert breakdowns.expenses_by_entity == [
        CategoryAmount(category="Shop", amount=Decimal("40"))
    ]
    assert breakdowns.returns_by_entity[0].entity == "Bank"
    assert breakdowns.returns_by_entity[0].real == Decimal("60")
    assert breakdowns.assets_by_account_type == [
        CategoryAmount(category="Checking", amount=Decimal("150")),
        CategoryAmount(category="CDT", amount=Decimal("1010")),
    ]
    assert breakdowns.investment_terms == [
        CategoryAmount(category="Low risk", amount=Decimal("1010"))
    ]
    assert breakdowns.liquidity_split == [
        CategoryAmount(category="Liquid", amount=Decimal("150")),
        CategoryAmount(category="Non-liquid", amount=Decimal("1010")),
    ]
    assert [step.amount for step in breakdowns.capital_waterfall] == [
        Decimal("1100"),
        Decimal("60"),
        Decimal("-40"),
        Decimal("1160"),
    ]
    repository.fetch_snapshots.assert_called_once_with(["2024-02", "2024-03"])
