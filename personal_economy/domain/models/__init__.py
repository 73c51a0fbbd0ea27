"""Domain models package."""

from .finance import (
    CategoryAmount,
    EntityReturns,
    PeriodBreakdowns,
    PeriodRecords,
    PeriodSeries,
    PeriodSummary,
    ProjectedReturn,
    RealReturn,
    SeriesPoint,
)
from .records import (
    Account,
    AccountSnapshot,
    Debt,
    Entity,
    Expense,
    Income,
    Period,
    ProjectedIncome,
)

__all__ = [
    "Account",
    "AccountSnapshot",
    "Debt",
    "Entity",
    "Expense",
    "Income",
    "Period",
    "ProjectedIncome",
    "CategoryAmount",
    "EntityReturns",
    "PeriodBreakdowns",
    "PeriodRecords",
    "PeriodSeries",
    "PeriodSummary",
    "ProjectedReturn",
    "RealReturn",
    "SeriesPoint",
]
