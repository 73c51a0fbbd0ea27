"""Domain services for dashboard breakdowns of a single period."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from logging import Logger

from personal_economy.domain.constants import (
    INVESTMENT_TERM_CATEGORIES,
    NO_ENTITY_LABEL,
)
from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    CategoryAmount,
    EntityReturns,
    Expense,
)
from personal_economy.domain.services.categories import categories_of
from personal_economy.domain.services.fx import ZERO, ReportingConverter
from personal_economy.domain.services.returns import projected_return, real_return


def compute_expenses_by_entity(
    expenses: Iterable[Expense],
    entity_names: Mapping[str, str],
    converter: ReportingConverter,
    *,
    top_n: int = 8,
) -> list[CategoryAmount]:
    """Aggregate expenses per paid entity, largest first.

    Args:
        expenses: Expenses of the period.
        entity_names: Entity names keyed by entity id.
        converter: Converter for the period.
        top_n: Maximum number of entities returned.

    Returns:
        list[CategoryAmount]: Amount per entity name.
    """
    totals: dict[str, Decimal] = {}
    for expense in expenses:
        name = _entity_name(expense.entity_id, entity_names)
        totals[name] = totals.get(name, ZERO) + converter.convert(
            expense.amount, expense.currency
        )
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        CategoryAmount(category=name, amount=amount)
        for name, amount in ordered[:top_n]
    ]


def compute_returns_by_entity(
    snapshots: Iterable[AccountSnapshot],
    previous_snapshots: Iterable[AccountSnapshot],
    accounts_by_id: Mapping[str, Account],
    entity_names: Mapping[str, str],
    converter: ReportingConverter,
    *,
    logger: Logger,
) -> list[EntityReturns]:
    """Aggregate real and projected returns per account entity.

    Entities keep the order in which their first snapshot appears.
    """
    previous_by_account = {
        snapshot.account_id: snapshot for snapshot in previous_snapshots
    }
    totals: dict[str, tuple[Decimal, Decimal]] = {}
    for snapshot in snapshots:
        account = accounts_by_id.get(snapshot.account_id)
        if account is None:
            continue
        previous = previous_by_account.get(snapshot.account_id)
        real = real_return(
            snapshot.balance,
            previous.balance if previous is not None else None,
        ).monthly_return
        projected = ZERO
        if snapshot.effective_annual_rate_projected is not None:
            projected = projected_return(
                snapshot.balance, snapshot.effective_annual_rate_projected, logger
            ).monthly_return
        name = _entity_name(account.entity_id, entity_names)
        real_total, projected_total = totals.get(name, (ZERO, ZERO))
        totals[name] = (
            real_total + converter.convert(real, account.currency),
            projected_total + converter.convert(projected, account.currency),
        )
    return [
        EntityReturns(entity=name, real=real_total, projected=projected_total)
        for name, (real_total, projected_total) in totals.items()
    ]


def compute_assets_by_account_type(
    snapshots: Iterable[AccountSnapshot],
    accounts_by_id: Mapping[str, Account],
    converter: ReportingConverter,
) -> list[CategoryAmount]:
    """Aggregate balances per account type (savings, CDT, brokerage...)."""
    totals: dict[str, Decimal] = {}
    for snapshot in snapshots:
        account = accounts_by_id.get(snapshot.account_id)
        if account is None:
            continue
        label = account.account_type or "Other"
        totals[label] = totals.get(label, ZERO) + converter.convert(
            snapshot.balance, account.currency
        )
    return [
        CategoryAmount(category=label, amount=amount)
        for label, amount in totals.items()
    ]


def compute_investment_terms(
    snapshots: Iterable[AccountSnapshot],
    accounts_by_id: Mapping[str, Account],
    converter: ReportingConverter,
) -> list[CategoryAmount]:
    """Split invested balances by horizon.

    An account tagged with several horizons counts once, under the shortest.
    Horizons without a positive total are omitted.
    """
    totals = {category: ZERO for category, _ in INVESTMENT_TERM_CATEGORIES}
    for snapshot in snapshots:
        account = accounts_by_id.get(snapshot.account_id)
        if account is None:
            continue
        categories = categories_of(account)
        for category, _ in INVESTMENT_TERM_CATEGORIES:
            if category in categories:
                totals[category] += converter.convert(
                    snapshot.balance, account.currency
                )
                break
    return [
        CategoryAmount(category=label, amount=totals[category])
        for category, label in INVESTMENT_TERM_CATEGORIES
        if totals[category] > 0
    ]


def compute_liquidity_split(
    liquid_total: Decimal,
    capital_total: Decimal,
) -> list[CategoryAmount]:
    """Return liquid versus non-liquid shares of net capital."""
    return [
        CategoryAmount(category="Liquid", amount=liquid_total),
        CategoryAmount(
            category="Non-liquid",
            amount=max(ZERO, capital_total - liquid_total),
        ),
    ]


def compute_capital_waterfall(
    previous_capital: Decimal,
    current_capital: Decimal,
    expenses_total: Decimal,
) -> list[CategoryAmount]:
    """Return the steps from previous to current net capital."""
    return [
        CategoryAmount(category="Previous capital", amount=previous_capital),
        CategoryAmount(
            category="Real income",
            amount=current_capital - previous_capital,
        ),
        CategoryAmount(category="Expenses", amount=-expenses_total),
        CategoryAmount(category="Current capital", amount=current_capital),
    ]


def _entity_name(entity_id: str | None, entity_names: Mapping[str, str]) -> str:
    if not entity_id:
        return NO_ENTITY_LABEL
    return entity_names.get(entity_id) or NO_ENTITY_LABEL


__all__ = [
    "compute_expenses_by_entity",
    "compute_returns_by_entity",
    "compute_assets_by_account_type",
    "compute_investment_terms",
    "compute_liquidity_split",
    "compute_capital_waterfall",
]
