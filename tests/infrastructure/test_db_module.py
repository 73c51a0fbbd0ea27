"""Tests for the infrastructure.db module."""

from personal_economy.infrastructure import db as db_module
from personal_economy.infrastructure.settings import FinanceSettings


def test_create_engine_enables_health_checks(monkeypatch):
    """_create_engine should enable pre-ping on server databases."""
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured["db_url"] = db_url
        captured["kwargs"] = kwargs
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    engine = db_module._create_engine("postgresql://finance")

    assert engine == "engine"
    assert captured["db_url"] == "postgresql://finance"
    assert captured["kwargs"]["pool_pre_ping"] is True
    assert captured["kwargs"]["future"] is True
    assert captured["kwargs"]["connect_args"] == {}


def test_create_engine_shares_sqlite_connections(monkeypatch):
    captured = {}

    def fake_create_engine(db_url, **kwargs):
        captured.update(kwargs)
        return "engine"

    monkeypatch.setattr(db_module, "create_engine", fake_create_engine)

    db_module._create_engine("sqlite:///finance.db")

    assert captured["connect_args"] == {"check_same_thread": False}


def test_get_finance_engine_caches_engine(monkeypatch):
    """get_finance_engine should memoize the created engine."""
    monkeypatch.setattr(db_module, "_finance_engine", None)
    created = []

    def fake_create_engine(url):
        created.append(url)
        return f"engine:{url}"

    monkeypatch.setattr(db_module, "_create_engine", fake_create_engine)
    monkeypatch.setattr(
        db_module.FinanceSettings,
        "from_env",
        classmethod(lambda cls: FinanceSettings(db_url="sqlite:///x.db")),
    )

    engine_one = db_module.get_finance_engine()
    engine_two = db_module.get_finance_engine()

    assert engine_one is engine_two
    assert engine_one == "engine:sqlite:///x.db"
    assert created == ["sqlite:///x.db"]


def test_adapter_prefers_injected_engine(monkeypatch):
    """SqlAlchemyDatabaseEngineAdapter should proxy the global helper."""
    monkeypatch.setattr(db_module, "get_finance_engine", lambda: "shared")

    assert db_module.SqlAlchemyDatabaseEngineAdapter().get_finance_engine() == (
        "shared"
    )
    injected = db_module.SqlAlchemyDatabaseEngineAdapter(engine="injected")
    assert injected.get_finance_engine() == "injected"
