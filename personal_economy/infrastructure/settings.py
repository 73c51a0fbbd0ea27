"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from personal_economy.domain.constants import (
    DEFAULT_SERIES_MONTHS,
    REPORTING_CURRENCY,
)
from personal_economy.infrastructure.logging.logger import get_app_logger
from personal_economy.utils.utils import get_project_root


DEFAULT_DB_FILENAME = "personal_economy.db"
DEFAULT_BREAKDOWN_TOP_N = 8


@dataclass(frozen=True)
class FinanceSettings:
    """Settings for the records store and dashboard aggregation.

    Attributes:
        db_url: SQLAlchemy URL of the records database.
        series_months: Length of the rolling window used by charts.
        breakdown_top_n: Maximum entities listed in expense breakdowns.
        reporting_currency: Currency every total is reported in.
    """

    db_url: str
    series_months: int = DEFAULT_SERIES_MONTHS
    breakdown_top_n: int = DEFAULT_BREAKDOWN_TOP_N
    reporting_currency: str = REPORTING_CURRENCY

    @classmethod
    def from_env(cls) -> "FinanceSettings":
        """Build settings from environment variables and the ``.env`` file.

        Returns:
            FinanceSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        db_url = os.getenv("FINANCE_DB_URL", "").strip() or cls._default_db_url()
        currency = os.getenv("REPORTING_CURRENCY", "").strip().upper()
        if currency and currency != REPORTING_CURRENCY:
            logger.warning(
                f"REPORTING_CURRENCY={currency} is not supported; "
                f"totals are reported in {REPORTING_CURRENCY}"
            )
        return cls(
            db_url=db_url,
            series_months=cls._positive_int(
                "SERIES_WINDOW_MONTHS", DEFAULT_SERIES_MONTHS, logger
            ),
            breakdown_top_n=cls._positive_int(
                "BREAKDOWN_TOP_N", DEFAULT_BREAKDOWN_TOP_N, logger
            ),
        )

    @staticmethod
    def _default_db_url() -> str:
        """Return the SQLite URL of the default database under data/."""
        data_dir = get_project_root() / "data"
        data_dir.mkdir(parents=True, exist_ok=True)
        return f"sqlite:///{data_dir / DEFAULT_DB_FILENAME}"

    @staticmethod
    def _positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer variable, falling back to ``default``.

        Args:
            name: Environment variable name.
            default: Value used when unset or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if not raw:
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid {name}={raw!r}; using {default}")
            return default
        if value < 1:
            logger.warning(f"{name} must be at least 1; using {default}")
            return default
        return value


__all__ = ["FinanceSettings"]
