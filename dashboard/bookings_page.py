import logging

import streamlit as st

from backend.client import ApiClient, ApiError
from dashboard.filters import BOOKING_SEARCH_FIELDS
from dashboard.formatting import (
    badge,
    format_datetime,
    format_money,
    payment_status_text,
    shooting_type_label,
    status_color,
    status_label,
)
from dashboard.models import Booking
from dashboard.widgets import (
    csv_download,
    ensure_loaded,
    get_list_state,
    load_status,
    page_header,
    run,
    search_box,
    select_filter,
    table,
)

logger = logging.getLogger(__name__)


def render_bookings_page(client: ApiClient):
    state = get_list_state("bookings", Booking.from_api)

    refresh = page_header("📅 Bookings", "All photography bookings on the platform.", "bookings-refresh")
    ensure_loaded(state, client.get_bookings, force=refresh)

    # --- Filters ---
    c1, c2 = st.columns([3, 1])
    with c1:
        search_box(state, "Search by booking code, concept, province...", "bookings-search")
    with c2:
        select_filter(state, "Status", "status", "bookings-status", format_func=lambda s: status_label("booking", s))

    visible = state.visible(BOOKING_SEARCH_FIELDS)
    st.caption(f"{len(visible)} of {len(state.items)} bookings")

    if not load_status(state, visible):
        return

    # --- Main Data Table ---
    df = table([
        {
            "Code": b.booking_code,
            "Concept": b.concept,
            "Date": format_datetime(b.booking_date),
            "Location": ", ".join(p for p in (b.custom_location, b.province) if p),
            "Type": shooting_type_label(b.shooting_type),
            "Status": status_label("booking", b.status),
            "Total": format_money(b.total_price),
        }
        for b in visible
    ])

    # --- Detail ---
    codes = [b.booking_code for b in visible]
    selected = st.selectbox("Booking detail", codes, key="bookings-detail")
    booking = next((b for b in visible if b.booking_code == selected), None)
    if booking:
        with st.expander(f"Booking #{booking.booking_code}", expanded=True):
            render_booking_detail(booking)

    csv_download(df, "snaplink_bookings.csv", "bookings-csv")


def render_booking_detail(booking: Booking):
    if booking.illustration_url:
        st.image(booking.illustration_url, width=320)

    st.markdown(
        badge(status_label("booking", booking.status), status_color("booking", booking.status)),
        unsafe_allow_html=True,
    )

    c1, c2 = st.columns(2)
    c1.write(f"**Concept:** {booking.concept or 'N/A'}")
    c1.write(f"**Shooting date:** {format_datetime(booking.booking_date)}")
    c1.write(f"**Shooting type:** {shooting_type_label(booking.shooting_type)}")
    c1.write(f"**Quantity:** {booking.quantity}")
    c2.write(f"**Location:** {booking.custom_location or 'N/A'}")
    c2.write(f"**Province:** {booking.province or 'N/A'}")
    c2.write(f"**Total:** {format_money(booking.total_price)}")
    c2.write(f"**Payment:** {payment_status_text(booking.status, booking.payment_status)}")

    st.caption(
        f"Customer #{booking.customer_id} · Photographer #{booking.photographer_id} · "
        f"Service #{booking.service_id} · Created {format_datetime(booking.created_at)}"
    )
    if booking.discount_code:
        st.caption(f"Discount code: {booking.discount_code}")


def render_booking_lookup(client: ApiClient):
    st.title("🔎 Booking lookup")

    code = st.text_input("Booking code", key="lookup-code").strip()
    if not st.button("Find booking", key="lookup-go") or not code:
        return

    try:
        with st.spinner("Loading..."):
            data = run(client.get_booking_by_code(code))
    except ApiError as e:
        if e.status_code == 404:
            st.warning(f"No booking found with code **{code}**.")
        else:
            logger.error(f"Booking lookup failed for {code}: {e}")
            st.error("Could not load the booking.")
        return

    if not data:
        st.warning(f"No booking found with code **{code}**.")
        return

    render_booking_detail(Booking.from_api(data))
