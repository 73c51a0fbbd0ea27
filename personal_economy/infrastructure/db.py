"""Database infrastructure for the personal economy tracker.

This module exposes helpers to create and reuse the SQLAlchemy engine
connected to the records database. It belongs to the infrastructure layer
because it deals with an external system.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from personal_economy.application.ports.database import DatabaseEnginePort
from personal_economy.infrastructure.settings import FinanceSettings


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine.

    Args:
        db_url: Fully qualified database URL.

    Returns:
        Engine: Engine with health checks enabled. SQLite connections may be
        shared across the dashboard's threads.
    """
    connect_args = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(
        db_url,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args,
    )


_finance_engine: Optional[Engine] = None


def get_finance_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the records database.

    Returns:
        Engine: Lazily initialized engine connected to the records store.
    """
    global _finance_engine
    if _finance_engine is None:
        settings = FinanceSettings.from_env()
        _finance_engine = _create_engine(settings.db_url)
    return _finance_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application code depends only on the protocol.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine

    def get_finance_engine(self) -> Engine:
        """Get the engine for the records database.

        Returns:
            Engine: Injected engine, or the shared singleton.
        """
        return self._engine or get_finance_engine()


__all__ = [
    "get_finance_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
