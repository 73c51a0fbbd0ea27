"""SQLAlchemy-backed store for monthly finance records."""

from collections.abc import Callable, Iterable, Sequence
from dataclasses import asdict
from datetime import date
from decimal import Decimal

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause

from personal_economy.application.ports.database import DatabaseEnginePort
from personal_economy.application.ports.records_repository import (
    FinanceRecordsRepositoryPort,
)
from personal_economy.domain.exceptions import RecordValidationError
from personal_economy.domain.models import (
    Account,
    AccountSnapshot,
    Debt,
    Entity,
    Expense,
    Income,
    Period,
    ProjectedIncome,
)
from personal_economy.domain.services.validation import (
    validate_account,
    validate_debt,
    validate_expense,
    validate_income,
    validate_period,
    validate_projected_income,
    validate_snapshot,
)
from personal_economy.infrastructure.logging.logger import get_app_logger
from personal_economy.utils.decimal_utils import (
    coerce_decimal,
    coerce_optional_decimal,
)


CREATE_TABLES_SQL = (
    """
    CREATE TABLE IF NOT EXISTS periods (
        id TEXT PRIMARY KEY,
        year INTEGER NOT NULL,
        month INTEGER NOT NULL,
        usd_cop_rate NUMERIC
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS entities (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        entity_type TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS accounts (
        id TEXT PRIMARY KEY,
        name TEXT,
        entity_id TEXT,
        account_type TEXT,
        categories TEXT,
        category TEXT,
        currency TEXT NOT NULL,
        is_active BOOLEAN NOT NULL,
        is_salary_account BOOLEAN NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS account_snapshots (
        id TEXT PRIMARY KEY,
        period_id TEXT NOT NULL,
        account_id TEXT NOT NULL,
        balance NUMERIC NOT NULL,
        effective_annual_rate_projected NUMERIC,
        UNIQUE (period_id, account_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS incomes (
        id TEXT PRIMARY KEY,
        period_id TEXT NOT NULL,
        entry_date TEXT,
        entity_id TEXT,
        concept TEXT,
        amount NUMERIC NOT NULL,
        currency TEXT NOT NULL,
        is_salary BOOLEAN NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS expenses (
        id TEXT PRIMARY KEY,
        period_id TEXT NOT NULL,
        entry_date TEXT,
        entity_id TEXT,
        reason TEXT,
        amount NUMERIC NOT NULL,
        currency TEXT NOT NULL,
        method TEXT,
        installments INTEGER NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS debts (
        id TEXT PRIMARY KEY,
        period_id TEXT NOT NULL,
        series_id TEXT,
        entity_id TEXT,
        debt_type TEXT,
        amount NUMERIC NOT NULL,
        amortization_amount NUMERIC,
        currency TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS projected_incomes (
        id TEXT PRIMARY KEY,
        period_id TEXT NOT NULL,
        account_id TEXT NOT NULL,
        income_type TEXT NOT NULL,
        rate_ea NUMERIC,
        rate_monthly NUMERIC,
        amount NUMERIC,
        entry_date TEXT,
        is_recurring INTEGER NOT NULL DEFAULT 0
    )
    """,
)

SELECT_PERIOD_SQL = text(
    """
    SELECT id, year, month, usd_cop_rate
    FROM periods
    WHERE id = :period_id
    """
)

SELECT_PERIODS_SQL = text(
    """
    SELECT id, year, month, usd_cop_rate
    FROM periods
    WHERE id IN :period_ids
    ORDER BY id
    """
).bindparams(bindparam("period_ids", expanding=True))

SELECT_ACCOUNTS_SQL = text(
    """
    SELECT id, name, entity_id, account_type, categories, category,
           currency, is_active, is_salary_account
    FROM accounts
    ORDER BY id
    """
)

SELECT_ENTITIES_SQL = text(
    """
    SELECT id, name, entity_type
    FROM entities
    ORDER BY name
    """
)

COUNT_DEBTS_SQL = text(
    """
    SELECT COUNT(*) AS debt_count
    FROM debts
    WHERE period_id = :period_id
    """
)

COUNT_RECURRING_PROJECTED_INCOMES_SQL = text(
    """
    SELECT COUNT(*) AS recurring_count
    FROM projected_incomes
    WHERE period_id = :period_id AND is_recurring = 1
    """
)

UPSERT_PERIOD_SQL = text(
    """
    INSERT INTO periods (id, year, month, usd_cop_rate)
    VALUES (:id, :year, :month, :usd_cop_rate)
    ON CONFLICT (id) DO UPDATE SET usd_cop_rate = excluded.usd_cop_rate
    """
)

INSERT_ENTITY_SQL = text(
    """
    INSERT INTO entities (id, name, entity_type)
    VALUES (:id, :name, :entity_type)
    """
)

INSERT_ACCOUNT_SQL = text(
    """
    INSERT INTO accounts (
        id, name, entity_id, account_type, categories, category,
        currency, is_active, is_salary_account
    )
    VALUES (
        :id, :name, :entity_id, :account_type, :categories, :category,
        :currency, :is_active, :is_salary_account
    )
    """
)

INSERT_SNAPSHOT_SQL = text(
    """
    INSERT INTO account_snapshots (
        id, period_id, account_id, balance, effective_annual_rate_projected
    )
    VALUES (
        :id, :period_id, :account_id, :balance,
        :effective_annual_rate_projected
    )
    """
)

INSERT_INCOME_SQL = text(
    """
    INSERT INTO incomes (
        id, period_id, entry_date, entity_id, concept, amount, currency,
        is_salary
    )
    VALUES (
        :id, :period_id, :entry_date, :entity_id, :concept, :amount,
        :currency, :is_salary
    )
    """
)

INSERT_EXPENSE_SQL = text(
    """
    INSERT INTO expenses (
        id, period_id, entry_date, entity_id, reason, amount, currency,
        method, installments
    )
    VALUES (
        :id, :period_id, :entry_date, :entity_id, :reason, :amount,
        :currency, :method, :installments
    )
    """
)

INSERT_DEBT_SQL = text(
    """
    INSERT INTO debts (
        id, period_id, series_id, entity_id, debt_type, amount,
        amortization_amount, currency
    )
    VALUES (
        :id, :period_id, :series_id, :entity_id, :debt_type, :amount,
        :amortization_amount, :currency
    )
    """
)

INSERT_PROJECTED_INCOME_SQL = text(
    """
    INSERT INTO projected_incomes (
        id, period_id, account_id, income_type, rate_ea, rate_monthly, amount,
        entry_date, is_recurring
    )
    VALUES (
        :id, :period_id, :account_id, :income_type, :rate_ea,
        :rate_monthly, :amount, :entry_date, :is_recurring
    )
    """
)


def _select_by_periods(table: str, columns: str) -> TextClause:
    return text(
        f"SELECT {columns} FROM {table} "
        "WHERE period_id IN :period_ids ORDER BY period_id, id"
    ).bindparams(bindparam("period_ids", expanding=True))


SELECT_SNAPSHOTS_SQL = _select_by_periods(
    "account_snapshots",
    "id, period_id, account_id, balance, effective_annual_rate_projected",
)
SELECT_INCOMES_SQL = _select_by_periods(
    "incomes",
    "id, period_id, entry_date, entity_id, concept, amount, currency, is_salary",
)
SELECT_EXPENSES_SQL = _select_by_periods(
    "expenses",
    "id, period_id, entry_date, entity_id, reason, amount, currency, "
    "method, installments",
)
SELECT_DEBTS_SQL = _select_by_periods(
    "debts",
    "id, period_id, series_id, entity_id, debt_type, amount, "
    "amortization_amount, currency",
)
SELECT_PROJECTED_INCOMES_SQL = _select_by_periods(
    "projected_incomes",
    "id, period_id, account_id, income_type, rate_ea, rate_monthly, amount, "
    "entry_date, is_recurring",
)


class SqlAlchemyFinanceRecordsRepository(FinanceRecordsRepositoryPort):
    """Record store backed by the finance database.

    Rows that fail validation are logged and skipped so one bad record does
    not hide the rest of a period.
    """

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the finance engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()

    def prepare_schema(self) -> None:
        """Create the record tables when they do not exist."""
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            for statement in CREATE_TABLES_SQL:
                conn.exec_driver_sql(statement)

    def fetch_period(self, period_id: str) -> Period | None:
        rows = self._fetch(SELECT_PERIOD_SQL, {"period_id": period_id})
        periods = self._build(rows, self._period_from_row, validate_period)
        return periods[0] if periods else None

    def fetch_periods(self, period_ids: Sequence[str]) -> list[Period]:
        rows = self._fetch_for_periods(SELECT_PERIODS_SQL, period_ids)
        return self._build(rows, self._period_from_row, validate_period)

    def fetch_accounts(self, active_only: bool = True) -> list[Account]:
        rows = self._fetch(SELECT_ACCOUNTS_SQL, {})
        accounts = self._build(rows, self._account_from_row, validate_account)
        if active_only:
            return [account for account in accounts if account.is_active]
        return accounts

    def fetch_entities(self) -> list[Entity]:
        rows = self._fetch(SELECT_ENTITIES_SQL, {})
        return [
            Entity(id=row.id, name=row.name, entity_type=row.entity_type)
            for row in rows
        ]

    def fetch_snapshots(
        self,
        period_ids: Sequence[str],
    ) -> list[AccountSnapshot]:
        rows = self._fetch_for_periods(SELECT_SNAPSHOTS_SQL, period_ids)
        return self._build(rows, self._snapshot_from_row, validate_snapshot)

    def fetch_incomes(self, period_ids: Sequence[str]) -> list[Income]:
        rows = self._fetch_for_periods(SELECT_INCOMES_SQL, period_ids)
        return self._build(rows, self._income_from_row, validate_income)

    def fetch_expenses(self, period_ids: Sequence[str]) -> list[Expense]:
        rows = self._fetch_for_periods(SELECT_EXPENSES_SQL, period_ids)
        return self._build(rows, self._expense_from_row, validate_expense)

    def fetch_debts(self, period_ids: Sequence[str]) -> list[Debt]:
        rows = self._fetch_for_periods(SELECT_DEBTS_SQL, period_ids)
        return self._build(rows, self._debt_from_row, validate_debt)

    def fetch_projected_incomes(
        self,
        period_ids: Sequence[str],
    ) -> list[ProjectedIncome]:
        rows = self._fetch_for_periods(SELECT_PROJECTED_INCOMES_SQL, period_ids)
        return self._build(
            rows,
            self._projected_income_from_row,
            validate_projected_income,
        )

    def count_debts(self, period_id: str) -> int:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            result = conn.execute(COUNT_DEBTS_SQL, {"period_id": period_id}).first()
        return int(result.debt_count) if result else 0

    def count_recurring_projected_incomes(self, period_id: str) -> int:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            result = conn.execute(
                COUNT_RECURRING_PROJECTED_INCOMES_SQL,
                {"period_id": period_id},
            ).first()
        return int(result.recurring_count) if result else 0

    def save_period(self, period: Period) -> None:
        """Insert a period or update its exchange rate."""
        validate_period(period)
        self._insert(UPSERT_PERIOD_SQL, [_to_params(period)])

    def add_entities(self, entities: Sequence[Entity]) -> int:
        return self._insert(INSERT_ENTITY_SQL, [asdict(e) for e in entities])

    def add_accounts(self, accounts: Sequence[Account]) -> int:
        payload = []
        for account in accounts:
            validate_account(account)
            params = _to_params(account)
            params["categories"] = ",".join(account.categories)
            payload.append(params)
        return self._insert(INSERT_ACCOUNT_SQL, payload)

    def add_snapshots(self, snapshots: Sequence[AccountSnapshot]) -> int:
        return self._insert(
            INSERT_SNAPSHOT_SQL,
            self._validated_params(snapshots, validate_snapshot),
        )

    def add_incomes(self, incomes: Sequence[Income]) -> int:
        return self._insert(
            INSERT_INCOME_SQL,
            self._validated_params(incomes, validate_income),
        )

    def add_expenses(self, expenses: Sequence[Expense]) -> int:
        return self._insert(
            INSERT_EXPENSE_SQL,
            self._validated_params(expenses, validate_expense),
        )

    def add_debts(self, debts: Sequence[Debt]) -> int:
        return self._insert(
            INSERT_DEBT_SQL,
            self._validated_params(debts, validate_debt),
        )

    def add_projected_incomes(self, items: Sequence[ProjectedIncome]) -> int:
        return self._insert(
            INSERT_PROJECTED_INCOME_SQL,
            self._validated_params(items, validate_projected_income),
        )

    def _fetch(self, query, params: dict) -> list:
        engine = self._db_port.get_finance_engine()
        with engine.connect() as conn:
            return conn.execute(query, params).all()

    def _fetch_for_periods(self, query, period_ids: Sequence[str]) -> list:
        if not period_ids:
            return []
        return self._fetch(query, {"period_ids": list(period_ids)})

    def _insert(self, query, payload: list[dict]) -> int:
        """Insert all rows in one transaction; nothing is written on error."""
        if not payload:
            return 0
        engine = self._db_port.get_finance_engine()
        with engine.begin() as conn:
            conn.execute(query, payload)
        return len(payload)

    @staticmethod
    def _validated_params(records: Iterable, validator: Callable) -> list[dict]:
        return [_to_params(validator(record)) for record in records]

    def _build(self, rows: Iterable, factory: Callable, validator: Callable) -> list:
        records = []
        for row in rows:
            try:
                records.append(validator(factory(row)))
            except RecordValidationError as exc:
                self._logger.warning(f"Skipping invalid row {row.id}: {exc}")
        return records

    @staticmethod
    def _period_from_row(row) -> Period:
        return Period(
            id=row.id,
            year=int(row.year),
            month=int(row.month),
            usd_cop_rate=coerce_optional_decimal(row.usd_cop_rate),
        )

    @staticmethod
    def _account_from_row(row) -> Account:
        categories = tuple(
            category for category in (row.categories or "").split(",") if category
        )
        return Account(
            id=row.id,
            name=row.name or "",
            entity_id=row.entity_id,
            account_type=row.account_type or "",
            categories=categories,
            category=row.category,
            currency=row.currency,
            is_active=bool(row.is_active),
            is_salary_account=bool(row.is_salary_account),
        )

    @staticmethod
    def _snapshot_from_row(row) -> AccountSnapshot:
        return AccountSnapshot(
            id=row.id,
            period_id=row.period_id,
            account_id=row.account_id,
            balance=coerce_decimal(row.balance),
            effective_annual_rate_projected=coerce_optional_decimal(
                row.effective_annual_rate_projected
            ),
        )

    @staticmethod
    def _income_from_row(row) -> Income:
        return Income(
            id=row.id,
            period_id=row.period_id,
            amount=coerce_decimal(row.amount),
            currency=row.currency,
            is_salary=bool(row.is_salary),
            concept=row.concept or "",
            entry_date=_parse_date(row.entry_date),
            entity_id=row.entity_id,
        )

    @staticmethod
    def _expense_from_row(row) -> Expense:
        return Expense(
            id=row.id,
            period_id=row.period_id,
            amount=coerce_decimal(row.amount),
            currency=row.currency,
            reason=row.reason or "",
            entry_date=_parse_date(row.entry_date),
            entity_id=row.entity_id,
            method=row.method or "OTHER",
            installments=int(row.installments),
        )

    @staticmethod
    def _debt_from_row(row) -> Debt:
        return Debt(
            id=row.id,
            period_id=row.period_id,
            amount=coerce_decimal(row.amount),
            currency=row.currency,
            series_id=row.series_id,
            entity_id=row.entity_id,
            debt_type=row.debt_type or "OTHER",
            amortization_amount=coerce_optional_decimal(row.amortization_amount),
        )

    @staticmethod
    def _projected_income_from_row(row) -> ProjectedIncome:
        return ProjectedIncome(
            id=row.id,
            period_id=row.period_id,
            account_id=row.account_id,
            income_type=row.income_type,
            rate_ea=coerce_optional_decimal(row.rate_ea),
            rate_monthly=coerce_optional_decimal(row.rate_monthly),
            amount=coerce_optional_decimal(row.amount),
            entry_date=_parse_date(row.entry_date),
            is_recurring=bool(row.is_recurring),
        )


def _to_params(record) -> dict:
    """Convert a record into bind parameters (Decimals and dates as text)."""
    params = asdict(record)
    for key, value in params.items():
        if isinstance(value, (Decimal, date)):
            params[key] = str(value)
    return params


def _parse_date(value) -> date | None:
    if not value:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


__all__ = [
    "SqlAlchemyFinanceRecordsRepository",
    "CREATE_TABLES_SQL",
]
