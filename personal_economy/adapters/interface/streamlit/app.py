"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from decimal import Decimal

import streamlit as st
import altair as alt

from personal_economy.domain.models import (
    CategoryAmount,
    PeriodBreakdowns,
    PeriodSeries,
    PeriodSummary,
)
from personal_economy.domain.services.periods import (
    current_period_id,
    previous_period_id,
    rolling_period_ids,
)
from personal_economy.infrastructure.container import (
    build_breakdowns_use_case,
    build_series_use_case,
    build_summary_use_case,
)
from personal_economy.infrastructure.logging.logger import get_usage_logger


SELECTABLE_PERIODS = 24
PALETTE = [
    "#1b9aaa",
    "#2e7d32",
    "#f4a261",
    "#e76f51",
    "#457b9d",
    "#f6c453",
    "#6c8ead",
    "#a0c4ff",
]


def _fetch_summary(period_id: str) -> PeriodSummary:
    """Fetch the summary of a period from the records database."""
    return build_summary_use_case().execute(period_id)


@st.cache_data(show_spinner=False)
def _load_summary(period_id: str, schema_version: int = 1) -> PeriodSummary:
    """Cached wrapper around _fetch_summary."""
    _ = schema_version
    return _fetch_summary(period_id)


def _fetch_series(period_id: str) -> PeriodSeries:
    """Fetch the rolling series ending at a period."""
    return build_series_use_case().execute(period_id)


@st.cache_data(show_spinner=False)
def _load_series(period_id: str, schema_version: int = 1) -> PeriodSeries:
    """Cached wrapper around _fetch_series."""
    _ = schema_version
    return _fetch_series(period_id)


def _fetch_breakdowns(period_id: str) -> PeriodBreakdowns:
    """Fetch the dashboard breakdowns of a period."""
    return build_breakdowns_use_case().execute(period_id)


@st.cache_data(show_spinner=False)
def _load_breakdowns(
    period_id: str,
    schema_version: int = 1,
) -> PeriodBreakdowns:
    """Cached wrapper around _fetch_breakdowns."""
    _ = schema_version
    return _fetch_breakdowns(period_id)


def _clear_cached_data() -> None:
    """Drop cached loader results so newly written records are read."""
    for loader in (_load_summary, _load_series, _load_breakdowns):
        loader.clear()


def _format_currency(value: Decimal, currency_code: str) -> str:
    """Format currency values for display."""
    symbol = "$" if currency_code in ("COP", "USD") else ""
    return f"{symbol}{value:,.0f} {currency_code}"


def _format_delta(value: Decimal) -> str:
    """Format delta values for display."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.0f}"


def _period_options(today_period: str, count: int = SELECTABLE_PERIODS) -> list[str]:
    """Return selectable periods, newest first."""
    return list(reversed(rolling_period_ids(today_period, count)))


def _prepare_donut_chart_data(
    items: Sequence[CategoryAmount],
    currency_code: str,
    max_categories: int = 6,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        items: Amounts by category.
        currency_code: Currency used for labels.
        max_categories: Maximum categories to keep before grouping into Other.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(items, key=lambda item: item.amount, reverse=True)
    top_items = sorted_items[:max_categories]
    other_items = sorted_items[max_categories:]
    other_amount = sum(
        (item.amount for item in other_items),
        start=Decimal("0"),
    )
    if other_items and other_amount != 0:
        top_items = [
            *top_items,
            CategoryAmount(category="Other", amount=other_amount),
        ]
    total_amount = sum(
        (item.amount for item in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = (
            (item.amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": _format_currency(item.amount, currency_code),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _prepare_series_chart_data(
    series: PeriodSeries,
) -> list[dict[str, str | float]]:
    """Flatten series points into long-format rows for line charts."""
    metrics = {
        "Capital": "capital_total",
        "Liquid": "liquid_total",
        "Debt": "debt_total",
        "Expenses": "expenses_total",
    }
    return [
        {
            "period": point.label,
            "period_id": point.period_id,
            "metric": label,
            "amount": float(getattr(point, attribute)),
        }
        for point in series.points
        for label, attribute in metrics.items()
    ]


def _prepare_income_chart_data(
    series: PeriodSeries,
) -> list[dict[str, str | float]]:
    """Return real versus projected income rows per period."""
    rows: list[dict[str, str | float]] = []
    for point in series.points:
        rows.append(
            {
                "period": point.label,
                "kind": "Real",
                "amount": float(point.real_income),
            }
        )
        rows.append(
            {
                "period": point.label,
                "kind": "Projected",
                "amount": float(point.projected_income),
            }
        )
    return rows


def _prepare_waterfall_data(
    steps: Sequence[CategoryAmount],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Return one bar per capital step, in display order."""
    return [
        {
            "step": step.category,
            "order": index,
            "amount": float(step.amount),
            "amount_label": _format_currency(step.amount, currency_code),
        }
        for index, step in enumerate(steps)
    ]


def _render_metrics(
    summary: PeriodSummary,
    previous: PeriodSummary,
) -> None:
    """Render the headline metrics with deltas against the previous month."""
    currency = summary.currency_code
    income_col, expenses_col, balance_col, capital_col = st.columns(4)
    income_col.metric(
        "Income",
        _format_currency(summary.income_total, currency),
        _format_delta(summary.income_total - previous.income_total),
    )
    expenses_col.metric(
        "Expenses",
        _format_currency(summary.expenses_total, currency),
        _format_delta(summary.expenses_total - previous.expenses_total),
        delta_color="inverse",
    )
    balance_col.metric(
        "Balance",
        _format_currency(summary.balance, currency),
        _format_delta(summary.balance - previous.balance),
    )
    capital_col.metric(
        "Net capital",
        _format_currency(summary.capital_total, currency),
        _format_delta(summary.capital_total - previous.capital_total),
    )

    liquid_col, debt_col, projected_col, unspecified_col = st.columns(4)
    liquid_col.metric(
        "Liquid",
        _format_currency(summary.liquid_total, currency),
    )
    debt_col.metric(
        "Debt",
        _format_currency(summary.debt_total, currency),
        _format_delta(summary.debt_total - previous.debt_total),
        delta_color="inverse",
    )
    projected_col.metric(
        "Projected returns",
        _format_currency(summary.income_non_salary_projected, currency),
    )
    unspecified_col.metric(
        "Unspecified expense",
        _format_currency(summary.unspecified_expense, currency),
    )


def _render_donut_chart(
    items: Sequence[CategoryAmount],
    title: str,
    currency_code: str,
    max_categories: int = 6,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of amounts by category."""
    st.subheader(title)
    if not items:
        st.info("No amounts available for the chart.")
        return
    data, _ = _prepare_donut_chart_data(
        items,
        currency_code,
        max_categories=max_categories,
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
        stroke="#0f1115",
        strokeWidth=2,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=PALETTE),
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.25)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
        color="#f5f7ff",
    ).encode(text="amount_label:N")
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, width="stretch")


def _render_series_charts(series: PeriodSeries) -> None:
    """Render capital evolution and income lines over the window."""
    if not series.points:
        st.info("No periods available for the series.")
        return
    order = [point.label for point in series.points]
    st.subheader("Capital evolution")
    lines = alt.Chart(
        alt.Data(values=_prepare_series_chart_data(series))
    ).mark_line(point=True).encode(
        x=alt.X("period:N", sort=order, title=None),
        y=alt.Y("amount:Q", title=series.currency_code),
        color=alt.Color("metric:N", scale=alt.Scale(range=PALETTE)),
        tooltip=["period:N", "metric:N", alt.Tooltip("amount:Q", format=",.0f")],
    )
    st.altair_chart(lines, width="stretch")

    st.subheader("Real vs projected income")
    bars = alt.Chart(
        alt.Data(values=_prepare_income_chart_data(series))
    ).mark_bar().encode(
        x=alt.X("period:N", sort=order, title=None),
        xOffset="kind:N",
        y=alt.Y("amount:Q", title=series.currency_code),
        color=alt.Color("kind:N", scale=alt.Scale(range=PALETTE)),
        tooltip=["period:N", "kind:N", alt.Tooltip("amount:Q", format=",.0f")],
    )
    st.altair_chart(bars, width="stretch")


def _render_breakdowns(breakdowns: PeriodBreakdowns) -> None:
    """Render entity tables, asset donuts and the capital waterfall."""
    currency = breakdowns.currency_code
    assets_col, terms_col, liquidity_col = st.columns(3)
    with assets_col:
        _render_donut_chart(
            breakdowns.assets_by_account_type,
            "Assets by account type",
            currency,
        )
    with terms_col:
        _render_donut_chart(
            breakdowns.investment_terms,
            "Investments by term",
            currency,
        )
    with liquidity_col:
        _render_donut_chart(
            breakdowns.liquidity_split,
            "Liquidity",
            currency,
        )

    expenses_col, returns_col = st.columns(2)
    with expenses_col:
        st.subheader("Expenses by entity")
        st.dataframe(
            [
                {
                    "Entity": item.category,
                    "Amount": _format_currency(item.amount, currency),
                }
                for item in breakdowns.expenses_by_entity
            ],
            width="stretch",
            hide_index=True,
        )
    with returns_col:
        st.subheader("Returns by entity")
        st.dataframe(
            [
                {
                    "Entity": item.entity,
                    "Real": _format_currency(item.real, currency),
                    "Projected": _format_currency(item.projected, currency),
                }
                for item in breakdowns.returns_by_entity
            ],
            width="stretch",
            hide_index=True,
        )

    st.subheader("Capital waterfall")
    waterfall = alt.Chart(
        alt.Data(
            values=_prepare_waterfall_data(breakdowns.capital_waterfall, currency)
        )
    ).mark_bar().encode(
        x=alt.X("step:N", sort=alt.EncodingSortField("order"), title=None),
        y=alt.Y("amount:Q", title=currency),
        color=alt.condition(
            alt.datum.amount < 0,
            alt.value("#e76f51"),
            alt.value("#1b9aaa"),
        ),
        tooltip=["step:N", "amount_label:N"],
    )
    st.altair_chart(waterfall, width="stretch")


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Personal Economy", layout="wide")
    st.title("Personal Economy")

    options = _period_options(current_period_id())
    period_id = st.sidebar.selectbox("Period", options, index=0)
    if st.sidebar.button("Refresh data", key="btn_refresh_data"):
        _clear_cached_data()
    get_usage_logger().info(f"dashboard period={period_id}")

    summary = _load_summary(period_id)
    previous = _load_summary(previous_period_id(period_id))
    if not summary.conversion_complete:
        st.warning(
            "Some foreign-currency amounts were counted as zero because "
            f"{period_id} has no exchange rate."
        )
    _render_metrics(summary, previous)
    _render_series_charts(_load_series(period_id))
    _render_breakdowns(_load_breakdowns(period_id))


if __name__ == "__main__":  # pragma: no cover
    main()
