"""Application ports package."""

from .database import DatabaseEnginePort
from .records_repository import FinanceRecordsRepositoryPort

__all__ = [
    "DatabaseEnginePort",
    "FinanceRecordsRepositoryPort",
]
