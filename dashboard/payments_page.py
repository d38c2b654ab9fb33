import asyncio
import logging
from datetime import date

import pandas as pd
import streamlit as st

from backend.client import ApiClient, ApiError
from dashboard.charts import series_bar
from dashboard.filters import PAYMENT_SEARCH_FIELDS
from dashboard.formatting import (
    format_datetime,
    format_growth,
    format_money,
    status_label,
    type_label,
)
from dashboard.models import Payment
from dashboard.stats import comparison_growth, payment_summary
from dashboard.widgets import (
    csv_download,
    ensure_loaded,
    get_list_state,
    load_status,
    page_header,
    run,
    search_box,
    select_filter,
    stat_cards,
    table,
)

logger = logging.getLogger(__name__)


async def fetch_payment_reports(client: ApiClient, year: int, month: int):
    """Statistics and the month-over-month block, fetched together."""
    return await asyncio.gather(
        client.get_payment_statistics(),
        client.get_payment_monthly_comparison(year, month),
    )


def render_payments_page(client: ApiClient):
    state = get_list_state("payments", Payment.from_api)

    refresh = page_header("💳 Payments", "Payment history and revenue.", "payments-refresh")
    ensure_loaded(state, client.get_payments, force=refresh)

    # --- Filters ---
    c1, c2, c3 = st.columns([2, 1, 1])
    with c1:
        search_box(state, "Search by booking code, order code, payment ID...", "payments-search")
    with c2:
        select_filter(state, "Status", "status", "payments-status", format_func=lambda s: status_label("payment", s))
    with c3:
        select_filter(state, "Type", "payment_type", "payments-type", format_func=type_label)

    visible = state.visible(PAYMENT_SEARCH_FIELDS)

    # --- KPI Metrics (over the filtered rows) ---
    summary = payment_summary(visible)
    stat_cards([
        {"label": "Revenue (PAID)", "value": format_money(summary.paid_amount)},
        {"label": "Payments", "value": summary.total_count},
        {"label": "Paid", "value": summary.paid_count},
        {"label": "Success rate", "value": f"{summary.success_rate}%"},
    ])
    st.divider()

    if load_status(state, visible):
        df = table([
            {
                "Payment ID": p.payment_id,
                "Booking": p.booking_code,
                "Order code": p.order_code,
                "Amount": format_money(p.amount),
                "Type": type_label(p.payment_type),
                "Status": status_label("payment", p.status),
                "Paid at": format_datetime(p.paid_at, seconds=True),
            }
            for p in visible
        ])
        csv_download(df, "snaplink_payments.csv", "payments-csv")

    st.divider()
    _render_reports(client)


def _render_reports(client: ApiClient):
    st.subheader("Monthly report")

    today = date.today()
    c1, c2 = st.columns(2)
    year = c1.selectbox("Year", list(range(today.year, today.year - 5, -1)), key="payments-year")
    month = c2.selectbox("Month", list(range(1, 13)), index=today.month - 1, key="payments-month")

    # selectors changed -> new server query
    period = (year, month)
    if st.session_state.get("payments-period") != period:
        try:
            with st.spinner("Loading..."):
                st.session_state["payments-reports"] = run(fetch_payment_reports(client, year, month))
        except ApiError as e:
            logger.error(f"Error fetching payment reports: {e}")
            st.error("Could not load the payment report.")
            return
        st.session_state["payments-period"] = period

    statistics, monthly = st.session_state["payments-reports"]

    growth = comparison_growth(monthly, metrics=("count", "amount"))
    m1, m2 = st.columns(2)
    m1.metric(
        "Payments this month",
        int(growth["count"]["current"]),
        format_growth(growth["count"]["growth"]),
    )
    m2.metric(
        "Amount this month",
        format_money(growth["amount"]["current"]),
        format_growth(growth["amount"]["growth"]),
    )

    types = statistics.get("payment_types") or []
    if types:
        st.write("#### By payment type")
        st.dataframe(
            pd.DataFrame([
                {"Type": type_label(t.get("type")), "Count": t.get("count", 0), "Amount": format_money(t.get("amount"))}
                for t in types
            ]),
            use_container_width=True,
            hide_index=True,
        )

    monthly_data = statistics.get("monthly_data") or []
    if monthly_data:
        points = [{"name": m.get("month"), "amount": m.get("amount", 0)} for m in monthly_data]
        st.plotly_chart(series_bar(points, "amount", "Amount by month"), use_container_width=True)
