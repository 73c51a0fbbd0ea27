"""Application use cases package."""

from .carry_forward import (
    CarryForwardDebtsUseCase,
    CarryForwardProjectedIncomesUseCase,
    CarryForwardResult,
    CopyIncomesUseCase,
)
from .get_period_breakdowns import GetPeriodBreakdownsUseCase
from .get_period_series import GetPeriodSeriesUseCase
from .get_period_summary import GetPeriodSummaryUseCase

__all__ = [
    "CarryForwardDebtsUseCase",
    "CarryForwardProjectedIncomesUseCase",
    "CarryForwardResult",
    "CopyIncomesUseCase",
    "GetPeriodBreakdownsUseCase",
    "GetPeriodSeriesUseCase",
    "GetPeriodSummaryUseCase",
]
