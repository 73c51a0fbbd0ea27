"""Domain package for business rules and core models."""

from .constants import (
    CAPITAL_CATEGORIES,
    LIQUID_CATEGORIES,
    REPORTING_CURRENCY,
)
from .exceptions import RecordValidationError
from .models import (
    Account,
    AccountSnapshot,
    Debt,
    Entity,
    Expense,
    Income,
    Period,
    PeriodSummary,
    ProjectedIncome,
)
from .services import build_series, summarize, to_reporting_currency

__all__ = [
    "Account",
    "AccountSnapshot",
    "Debt",
    "Entity",
    "Expense",
    "Income",
    "Period",
    "PeriodSummary",
    "ProjectedIncome",
    "RecordValidationError",
    "CAPITAL_CATEGORIES",
    "LIQUID_CATEGORIES",
    "REPORTING_CURRENCY",
    "build_series",
    "summarize",
    "to_reporting_currency",
]
