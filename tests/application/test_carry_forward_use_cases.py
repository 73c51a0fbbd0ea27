"""Tests for the carry-forward use cases."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from personal_economy.application.use_cases.carry_forward import (
    CarryForwardDebtsUseCase,
    CarryForwardProjectedIncomesUseCase,
    CarryForwardResult,
    CopyIncomesUseCase,
)
from personal_economy.domain.models import Debt, Income, ProjectedIncome


def _debt(debt_id: str, amount: str, amortization: str = "0") -> Debt:
    return Debt(
        id=debt_id,
        period_id="2024-01",
        amount=Decimal(amount),
        currency="COP",
        amortization_amount=Decimal(amortization),
    )


def test_copy_incomes_inserts_copies_into_target_period() -> None:
    repository = MagicMock()
    repository.fetch_incomes.return_value = [
        Income(
            id="i1",
            period_id="2024-01",
            amount=Decimal("100"),
            currency="COP",
            is_salary=True,
            entry_date=date(2024, 1, 31),
        )
    ]
    repository.add_incomes.side_effect = lambda incomes: len(incomes)

    result = CopyIncomesUseCase(
        repository,
        logger=MagicMock(),
        id_factory=lambda: "copy",
    ).execute("2024-02")

    assert result == CarryForwardResult("2024-01", "2024-02", 1, 1)
    repository.fetch_incomes.assert_called_once_with(["2024-01"])
    (copies,), _ = repository.add_incomes.call_args
    assert copies[0].id == "copy"
    assert copies[0].entry_date == date(2024, 2, 1)


def test_copy_incomes_warns_when_source_is_empty() -> None:
    repository = MagicMock()
    repository.fetch_incomes.return_value = []
    logger = MagicMock()

    result = CopyIncomesUseCase(repository, logger=logger).execute("2024-01")

    assert result == CarryForwardResult("2023-12", "2024-01", 0, 0)
    repository.add_incomes.assert_not_called()
    logger.warning.assert_called_once()


def test_carry_forward_debts_skips_paid_off_debts() -> None:
    repository = MagicMock()
    repository.count_debts.return_value = 0
    repository.fetch_debts.return_value = [
        _debt("d1", "1000", "400"),
        _debt("d2", "300", "300"),
    ]
    repository.add_debts.side_effect = lambda debts: len(debts)

    result = CarryForwardDebtsUseCase(
        repository,
        logger=MagicMock(),
    ).execute("2024-02")

    assert result.source_count == 2
    assert result.inserted_count == 1
    (carried,), _ = repository.add_debts.call_args
    assert carried[0].amount == Decimal("600")
    assert carried[0].series_id == "d1"


def test_carry_forward_debts_is_skipped_when_target_has_debts() -> None:
    repository = MagicMock()
    repository.count_debts.return_value = 2
    logger = MagicMock()

    result = CarryForwardDebtsUseCase(repository, logger=logger).execute(
        "2024-02"
    )

    assert result.inserted_count == 0
    repository.fetch_debts.assert_not_called()
    repository.add_debts.assert_not_called()
    logger.info.assert_called_once()


def test_carry_forward_debts_does_not_insert_empty_batches() -> None:
    repository = MagicMock()
    repository.count_debts.return_value = 0
    repository.fetch_debts.return_value = [_debt("d1", "10", "10")]

    result = CarryForwardDebtsUseCase(
        repository,
        logger=MagicMock(),
    ).execute("2024-02")

    assert result.inserted_count == 0
    repository.add_debts.assert_not_called()


def _projected(item_id: str, is_recurring: bool) -> ProjectedIncome:
    return ProjectedIncome(
        id=item_id,
        period_id="2024-01",
        account_id="sav",
        income_type="FIXED_EA",
        rate_ea=Decimal("10"),
        entry_date=date(2024, 1, 15),
        is_recurring=is_recurring,
    )


def test_carry_forward_projected_copies_recurring_items() -> None:
    repository = MagicMock()
    repository.count_recurring_projected_incomes.return_value = 0
    repository.fetch_projected_incomes.return_value = [
        _projected("p1", True),
        _projected("p2", False),
    ]
    repository.add_projected_incomes.side_effect = lambda items: len(items)

    result = CarryForwardProjectedIncomesUseCase(
        repository,
        logger=MagicMock(),
        id_factory=lambda: "copy",
    ).execute("2024-02")

    assert result == CarryForwardResult("2024-01", "2024-02", 1, 1)
    repository.fetch_projected_incomes.assert_called_once_with(["2024-01"])
    (copies,), _ = repository.add_projected_incomes.call_args
    assert [item.id for item in copies] == ["copy"]
    assert copies[0].period_id == "2024-02"
    assert copies[0].entry_date == date(2024, 2, 15)


def test_carry_forward_projected_is_skipped_when_target_has_recurring() -> None:
    repository = MagicMock()
    repository.count_recurring_projected_incomes.return_value = 2
    logger = MagicMock()

    result = CarryForwardProjectedIncomesUseCase(
        repository, logger=logger
    ).execute("2024-02")

    assert result == CarryForwardResult("2024-01", "2024-02", 0, 0)
    repository.count_recurring_projected_incomes.assert_called_once_with(
        "2024-02"
    )
    repository.fetch_projected_incomes.assert_not_called()
    repository.add_projected_incomes.assert_not_called()
    logger.info.assert_called_once()


def test_carry_forward_projected_without_recurring_items_inserts_nothing() -> None:
    repository = MagicMock()
    repository.count_recurring_projected_incomes.return_value = 0
    repository.fetch_projected_incomes.return_value = [_projected("p2", False)]

    result = CarryForwardProjectedIncomesUseCase(
        repository, logger=MagicMock()
    ).execute("2024-02")

    assert result.inserted_count == 0
    repository.add_projected_incomes.assert_not_called()
