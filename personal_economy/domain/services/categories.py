"""Classification of accounts into liquid and capital buckets."""

from personal_economy.domain.constants import (
    CAPITAL_CATEGORIES,
    LIQUID_CATEGORIES,
)
from personal_economy.domain.models import Account
from personal_economy.domain.services.normalization import normalize_category


_LIQUID = frozenset(LIQUID_CATEGORIES)
_CAPITAL = frozenset(CAPITAL_CATEGORIES)


def categories_of(account: Account) -> frozenset[str]:
    """Return the normalized category set of an account.

    Accounts stored before multi-category support only carry ``category``;
    it is read as a one-element set.

    Args:
        account: Account to classify.

    Returns:
        frozenset[str]: Normalized categories, possibly empty.
    """
    raw = account.categories or ((account.category,) if account.category else ())
    normalized = (normalize_category(category) for category in raw)
    return frozenset(category for category in normalized if category)


def is_liquid(account: Account) -> bool:
    """Return True when the account holds cash-like balances."""
    return not categories_of(account).isdisjoint(_LIQUID)


def is_capital_eligible(account: Account) -> bool:
    """Return True when the account counts toward capital."""
    return not categories_of(account).isdisjoint(_CAPITAL)


__all__ = ["categories_of", "is_liquid", "is_capital_eligible"]
