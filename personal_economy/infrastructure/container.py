"""Composition root for wiring infrastructure adapters."""

from personal_economy.application.ports.database import DatabaseEnginePort
from personal_economy.application.use_cases import (
    CarryForwardDebtsUseCase,
    CarryForwardProjectedIncomesUseCase,
    CopyIncomesUseCase,
    GetPeriodBreakdownsUseCase,
    GetPeriodSeriesUseCase,
    GetPeriodSummaryUseCase,
)
from personal_economy.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from personal_economy.infrastructure.logging.logger import get_app_logger
from personal_economy.infrastructure.records_repository import (
    SqlAlchemyFinanceRecordsRepository,
)
from personal_economy.infrastructure.settings import FinanceSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_records_repository(
    db_port: DatabaseEnginePort | None = None,
) -> SqlAlchemyFinanceRecordsRepository:
    """Return the records repository with its schema in place."""
    resolved_db = db_port or build_database_adapter()
    repository = SqlAlchemyFinanceRecordsRepository(
        resolved_db,
        logger=get_app_logger(),
    )
    repository.prepare_schema()
    return repository


def build_summary_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetPeriodSummaryUseCase:
    """Return the period summary use case."""
    return GetPeriodSummaryUseCase(
        build_records_repository(db_port),
        logger=get_app_logger(),
    )


def build_series_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetPeriodSeriesUseCase:
    """Return the rolling series use case sized from settings."""
    settings = FinanceSettings.from_env()
    return GetPeriodSeriesUseCase(
        build_records_repository(db_port),
        logger=get_app_logger(),
        months=settings.series_months,
    )


def build_breakdowns_use_case(
    db_port: DatabaseEnginePort | None = None,
) -> GetPeriodBreakdownsUseCase:
    """Return the breakdowns use case sized from settings."""
    settings = FinanceSettings.from_env()
    return GetPeriodBreakdownsUseCase(
        build_records_repository(db_port),
        logger=get_app_logger(),
        top_n=settings.breakdown_top_n,
    )


def build_carry_forward_use_cases(
    db_port: DatabaseEnginePort | None = None,
) -> tuple[
    CopyIncomesUseCase,
    CarryForwardDebtsUseCase,
    CarryForwardProjectedIncomesUseCase,
]:
    """Return the income, debt and projected income carry-forward use cases."""
    repository = build_records_repository(db_port)
    logger = get_app_logger()
    return (
        CopyIncomesUseCase(repository, logger=logger),
        CarryForwardDebtsUseCase(repository, logger=logger),
        CarryForwardProjectedIncomesUseCase(repository, logger=logger),
    )


__all__ = [
    "build_database_adapter",
    "build_records_repository",
    "build_summary_use_case",
    "build_series_use_case",
    "build_breakdowns_use_case",
    "build_carry_forward_use_cases",
]
