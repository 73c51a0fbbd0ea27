"""Tests for the Streamlit app module."""

from decimal import Decimal
from unittest.mock import MagicMock

from personal_economy.adapters.interface.streamlit import app
from personal_economy.domain.models import (
    CategoryAmount,
    EntityReturns,
    PeriodBreakdowns,
    PeriodSeries,
    PeriodSummary,
    SeriesPoint,
)


def _summary(period_id: str, complete: bool = True) -> PeriodSummary:
    amount = Decimal("1000")
    return PeriodSummary(
        period_id=period_id,
        income_total=amount,
        income_salary=amount,
        income_non_salary_real=Decimal("0"),
        income_non_salary_projected=Decimal("10"),
        expenses_total=Decimal("400"),
        balance=Decimal("600"),
        balance_without_salary=Decimal("-400"),
        debt_total=Decimal("0"),
        liquid_total=Decimal("200"),
        capital_total=Decimal("5000"),
        unspecified_expense=Decimal("0"),
        conversion_complete=complete,
    )


def _series() -> PeriodSeries:
    return PeriodSeries(
        points=[
            SeriesPoint(
                period_id="2024-02",
                label="Feb 24",
                capital_total=Decimal("4000"),
                liquid_total=Decimal("100"),
                debt_total=Decimal("50"),
                expenses_total=Decimal("300"),
                real_income=Decimal("0"),
                projected_income=Decimal("12"),
            ),
            SeriesPoint(
                period_id="2024-03",
                label="Mar 24",
                capital_total=Decimal("5000"),
                liquid_total=Decimal("200"),
                debt_total=Decimal("0"),
                expenses_total=Decimal("400"),
                real_income=Decimal("1000"),
                projected_income=Decimal("10"),
            ),
        ]
    )


def _breakdowns() -> PeriodBreakdowns:
    return PeriodBreakdowns(
        period_id="2024-03",
        expenses_by_entity=[CategoryAmount("Shop", Decimal("400"))],
        returns_by_entity=[EntityReturns("Bank", Decimal("5"), Decimal("10"))],
        assets_by_account_type=[CategoryAmount("Savings", Decimal("5000"))],
        investment_terms=[],
        liquidity_split=[
            CategoryAmount("Liquid", Decimal("200")),
            CategoryAmount("Non-liquid", Decimal("4800")),
        ],
        capital_waterfall=[
            CategoryAmount("Previous capital", Decimal("4000")),
            CategoryAmount("Real income", Decimal("1000")),
            CategoryAmount("Expenses", Decimal("-400")),
            CategoryAmount("Current capital", Decimal("5000")),
        ],
    )


def test_fetch_summary_invokes_use_case(monkeypatch):
    """_fetch_summary should build the use case and execute it."""
    use_case = MagicMock()
    use_case.execute.return_value = "summary"
    monkeypatch.setattr(app, "build_summary_use_case", lambda: use_case)

    assert app._fetch_summary("2024-03") == "summary"
    use_case.execute.assert_called_once_with("2024-03")


def test_fetch_series_and_breakdowns_invoke_use_cases(monkeypatch):
    series_use_case = MagicMock()
    breakdowns_use_case = MagicMock()
    monkeypatch.setattr(app, "build_series_use_case", lambda: series_use_case)
    monkeypatch.setattr(
        app,
        "build_breakdowns_use_case",
        lambda: breakdowns_use_case,
    )

    app._fetch_series("2024-03")
    app._fetch_breakdowns("2024-03")

    series_use_case.execute.assert_called_once_with("2024-03")
    breakdowns_use_case.execute.assert_called_once_with("2024-03")


def test_format_helpers():
    assert app._format_currency(Decimal("1234567.4"), "COP") == "$1,234,567 COP"
    assert app._format_delta(Decimal("1500")) == "+1,500"
    assert app._format_delta(Decimal("-20")) == "-20"


def test_period_options_are_newest_first():
    assert app._period_options("2024-02", count=3) == [
        "2024-02",
        "2024-01",
        "2023-12",
    ]


def test_prepare_donut_chart_data_groups_tail_into_other():
    items = [
        CategoryAmount("A", Decimal("50")),
        CategoryAmount("B", Decimal("30")),
        CategoryAmount("C", Decimal("15")),
        CategoryAmount("D", Decimal("5")),
    ]

    data, total = app._prepare_donut_chart_data(items, "COP", max_categories=2)

    assert total == Decimal("100")
    assert [row["category"] for row in data] == ["A", "B", "Other"]
    assert data[2]["amount"] == 20.0
    assert data[0]["share_label"] == "50.0%"


def test_prepare_series_rows():
    series = _series()

    rows = app._prepare_series_chart_data(series)
    income_rows = app._prepare_income_chart_data(series)

    assert len(rows) == 8
    assert rows[0] == {
        "period": "Feb 24",
        "period_id": "2024-02",
        "metric": "Capital",
        "amount": 4000.0,
    }
    assert [row["kind"] for row in income_rows[:2]] == ["Real", "Projected"]


def test_prepare_waterfall_data_keeps_step_order():
    rows = app._prepare_waterfall_data(_breakdowns().capital_waterfall, "COP")

    assert [row["order"] for row in rows] == [0, 1, 2, 3]
    assert rows[2]["amount"] == -400.0


def _fake_streamlit() -> MagicMock:
    fake_st = MagicMock()
    fake_st.columns.side_effect = lambda count: [
        MagicMock() for _ in range(count)
    ]
    fake_st.sidebar.selectbox.return_value = "2024-03"
    fake_st.sidebar.button.return_value = False
    return fake_st


def _patch_loaders(monkeypatch, complete: bool = True) -> None:
    monkeypatch.setattr(
        app,
        "_load_summary",
        lambda period_id: _summary(period_id, complete),
    )
    monkeypatch.setattr(app, "_load_series", lambda period_id: _series())
    monkeypatch.setattr(
        app,
        "_load_breakdowns",
        lambda period_id: _breakdowns(),
    )
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)


def test_main_renders_dashboard(monkeypatch):
    """main should render metrics, charts and tables for the period."""
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    _patch_loaders(monkeypatch)

    app.main()

    fake_st.set_page_config.assert_called_once()
    fake_st.title.assert_called_once_with("Personal Economy")
    fake_st.warning.assert_not_called()
    assert fake_st.altair_chart.call_count >= 4
    table_data, kwargs = fake_st.dataframe.call_args_list[0]
    assert table_data[0][0]["Entity"] == "Shop"
    assert kwargs["hide_index"] is True


def test_main_warns_on_incomplete_conversion(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    _patch_loaders(monkeypatch, complete=False)

    app.main()

    fake_st.warning.assert_called_once()


def test_refresh_button_clears_cached_loaders(monkeypatch):
    fake_st = _fake_streamlit()
    fake_st.sidebar.button.return_value = True
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)
    loaders = {
        "_load_summary": MagicMock(side_effect=_summary),
        "_load_series": MagicMock(return_value=_series()),
        "_load_breakdowns": MagicMock(return_value=_breakdowns()),
    }
    for name, loader in loaders.items():
        monkeypatch.setattr(app, name, loader)

    app.main()

    for loader in loaders.values():
        loader.clear.assert_called_once_with()
    loaders["_load_summary"].assert_any_call("2024-03")


def test_cached_loaders_are_kept_without_refresh(monkeypatch):
    fake_st = _fake_streamlit()
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "get_usage_logger", MagicMock)
    summary_loader = MagicMock(side_effect=_summary)
    monkeypatch.setattr(app, "_load_summary", summary_loader)
    monkeypatch.setattr(app, "_load_series", lambda period_id: _series())
    monkeypatch.setattr(app, "_load_breakdowns", lambda period_id: _breakdowns())

    app.main()

    summary_loader.clear.assert_not_called()
