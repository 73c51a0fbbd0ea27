"""Domain constants for personal finance summaries."""

REPORTING_CURRENCY = "COP"

SUPPORTED_CURRENCIES = ("COP", "USD")

LIQUID_CATEGORIES = (
    "CASH",
    "LOW_AMOUNT_ACCOUNT",
)

CAPITAL_CATEGORIES = LIQUID_CATEGORIES + (
    "SAVINGS",
    "EMERGENCY_FUND",
    "INVEST_SHORT",
    "INVEST_MEDIUM",
    "INVEST_LONG",
    "RETIREMENT",
    "OTHER",
)

ACCOUNT_CATEGORIES = CAPITAL_CATEGORIES

INVESTMENT_TERM_CATEGORIES = (
    ("INVEST_SHORT", "Low risk"),
    ("INVEST_MEDIUM", "Moderate risk"),
    ("INVEST_LONG", "High risk"),
)

PROJECTED_INCOME_TYPES = (
    "FIXED_EA",
    "VARIABLE_MONTHLY",
    "SALARY",
)

DEFAULT_SERIES_MONTHS = 6

NO_ENTITY_LABEL = "No entity"


__all__ = [
    "REPORTING_CURRENCY",
    "SUPPORTED_CURRENCIES",
    "LIQUID_CATEGORIES",
    "CAPITAL_CATEGORIES",
    "ACCOUNT_CATEGORIES",
    "INVESTMENT_TERM_CATEGORIES",
    "PROJECTED_INCOME_TYPES",
    "DEFAULT_SERIES_MONTHS",
    "NO_ENTITY_LABEL",
]
