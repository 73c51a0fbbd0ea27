"""Domain services package."""

from .breakdowns import (
    compute_assets_by_account_type,
    compute_capital_waterfall,
    compute_expenses_by_entity,
    compute_investment_terms,
    compute_liquidity_split,
    compute_returns_by_entity,
)
from .carry_forward import (
    carry_forward_debts,
    carry_forward_projected_incomes,
    copy_incomes,
)
from .categories import categories_of, is_capital_eligible, is_liquid
from .debts import net_debt, net_debt_total, outstanding_amount
from .fx import ReportingConverter, requires_rate, to_reporting_currency
from .normalization import normalize_category, normalize_currency
from .periods import (
    default_period,
    previous_period_id,
    rolling_period_ids,
)
from .returns import projected_return, real_return
from .series import build_series
from .summary import summarize

__all__ = [
    "ReportingConverter",
    "build_series",
    "carry_forward_debts",
    "carry_forward_projected_incomes",
    "categories_of",
    "compute_assets_by_account_type",
    "compute_capital_waterfall",
    "compute_expenses_by_entity",
    "compute_investment_terms",
    "compute_liquidity_split",
    "compute_returns_by_entity",
    "copy_incomes",
    "default_period",
    "is_capital_eligible",
    "is_liquid",
    "net_debt",
    "net_debt_total",
    "normalize_category",
    "normalize_currency",
    "outstanding_amount",
    "previous_period_id",
    "projected_return",
    "real_return",
    "requires_rate",
    "rolling_period_ids",
    "summarize",
    "to_reporting_currency",
]
