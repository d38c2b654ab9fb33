import asyncio
import logging

import streamlit as st

from backend.client import TIMEFRAMES, ApiClient, ApiError
from dashboard.charts import (
    BOOKING_STATUS_COLORS,
    REQUEST_STATUS_COLORS,
    distribution_frame,
    distribution_pie,
    series_bar,
    series_counts,
    series_line,
)
from dashboard.formatting import format_growth, format_money, status_label
from dashboard.stats import comparison_growth
from dashboard.widgets import run

logger = logging.getLogger(__name__)


async def fetch_overview(client: ApiClient, timeframe: str) -> dict:
    comparison, booking_dist, request_dist, revenue, bookings, users, booking_status = await asyncio.gather(
        client.get_monthly_comparison(),
        client.get_booking_distribution(),
        client.get_request_distribution(),
        client.get_revenue_data(timeframe),
        client.get_booking_data(timeframe),
        client.get_user_distribution(timeframe),
        client.get_booking_status_data(timeframe),
    )
    return {
        "comparison": comparison,
        "booking_dist": booking_dist,
        "request_dist": request_dist,
        "revenue": revenue,
        "bookings": bookings,
        "users": users,
        "booking_status": booking_status,
    }


def render_overview_page(client: ApiClient):
    col1, col2 = st.columns([4, 1])
    with col1:
        st.title("📊 SnapLink Admin Dashboard")
    with col2:
        timeframe = st.selectbox("Timeframe", TIMEFRAMES, index=1, key="overview-timeframe")
        refresh = st.button("🔄 Refresh", key="overview-refresh", use_container_width=True)

    # --- Fetch Data ---
    if refresh or st.session_state.get("overview-loaded-for") != timeframe:
        try:
            with st.spinner("Loading..."):
                st.session_state["overview"] = run(fetch_overview(client, timeframe))
            st.session_state["overview-loaded-for"] = timeframe
        except ApiError as e:
            logger.error(f"Error fetching dashboard stats: {e}")
            st.error("Could not load the dashboard.")
            return

    data = st.session_state["overview"]

    # --- KPI Metrics ---
    growth = comparison_growth(data["comparison"])
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Users", int(growth["total_users"]["current"]), format_growth(growth["total_users"]["growth"]))
    c2.metric(
        "Photographers",
        int(growth["total_photographers"]["current"]),
        format_growth(growth["total_photographers"]["growth"]),
    )
    c3.metric("Bookings", int(growth["total_bookings"]["current"]), format_growth(growth["total_bookings"]["growth"]))
    c4.metric(
        "Revenue",
        format_money(growth["total_revenue"]["current"]),
        format_growth(growth["total_revenue"]["growth"]),
    )
    st.caption("Compared with the previous month.")

    # --- Distributions ---
    st.divider()
    p1, p2 = st.columns(2)
    with p1:
        df = distribution_frame(data["booking_dist"], lambda s: status_label("booking", s))
        st.plotly_chart(distribution_pie(df, "Booking status", BOOKING_STATUS_COLORS), use_container_width=True)
    with p2:
        df = distribution_frame(data["request_dist"], lambda s: status_label("request", s))
        st.plotly_chart(distribution_pie(df, "Request status", REQUEST_STATUS_COLORS), use_container_width=True)

    # --- Time series ---
    st.divider()
    s1, s2 = st.columns(2)
    with s1:
        st.plotly_chart(series_line(data["revenue"], "Doanh_thu", "Revenue"), use_container_width=True)
    with s2:
        st.plotly_chart(series_bar(data["bookings"], "Dat_lich", "Bookings"), use_container_width=True)

    u1, u2 = st.columns(2)
    with u1:
        users = data["users"] or []
        if users:
            df = distribution_frame(series_counts(users), str)
            st.plotly_chart(distribution_pie(df, "Users by role", BOOKING_STATUS_COLORS), use_container_width=True)
    with u2:
        booking_status = data["booking_status"] or []
        if booking_status:
            df = distribution_frame(series_counts(booking_status), lambda s: status_label("booking", s))
            st.plotly_chart(
                distribution_pie(df, f"Bookings by status ({timeframe})", BOOKING_STATUS_COLORS),
                use_container_width=True,
            )
