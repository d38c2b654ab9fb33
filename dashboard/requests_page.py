import html

import streamlit as st

from backend.client import ApiClient
from dashboard.filters import REQUEST_SEARCH_FIELDS
from dashboard.formatting import (
    badge,
    format_date,
    format_datetime,
    format_money,
    shooting_type_label,
    status_color,
    status_label,
)
from dashboard.models import Offer, Request
from dashboard.widgets import (
    csv_download,
    ensure_loaded,
    get_list_state,
    load_status,
    page_header,
    search_box,
    select_filter,
    table,
)


def render_requests_page(client: ApiClient):
    state = get_list_state("requests", Request.from_api)

    refresh = page_header("📝 Requests", "Customer requests waiting for photographer offers.", "requests-refresh")
    ensure_loaded(state, client.get_requests, force=refresh)

    c1, c2 = st.columns([3, 1])
    with c1:
        search_box(state, "Search by request code, concept, province...", "requests-search")
    with c2:
        select_filter(state, "Status", "status", "requests-status", format_func=lambda s: status_label("request", s))

    visible = state.visible(REQUEST_SEARCH_FIELDS)
    st.caption(f"{len(visible)} of {len(state.items)} requests")

    if not load_status(state, visible):
        return

    df = table([
        {
            "Code": r.request_code,
            "Concept": r.concept,
            "Date": format_datetime(r.request_date),
            "Location": ", ".join(p for p in (r.location_text, r.province) if p),
            "Type": shooting_type_label(r.shooting_type),
            "Budget": format_money(r.estimated_budget),
            "Offers": len(r.offers),
            "Status": status_label("request", r.status),
        }
        for r in visible
    ])

    codes = [r.request_code for r in visible]
    selected = st.selectbox("Request detail", codes, key="requests-detail")
    request = next((r for r in visible if r.request_code == selected), None)
    if request:
        with st.expander(f"Request #{request.request_code}", expanded=True):
            _render_request_detail(request)

    csv_download(df, "snaplink_requests.csv", "requests-csv")


def offer_markup(offer: Offer) -> str:
    who = offer.photographer_name or f"Photographer #{offer.photographer_id}"
    return (
        f"**{html.escape(who)}** · {format_money(offer.custom_price)} "
        + badge(status_label("offer", offer.status), status_color("offer", offer.status))
    )


def _render_request_detail(request: Request):
    if request.illustration_url:
        st.image(request.illustration_url, width=320)

    st.markdown(
        badge(status_label("request", request.status), status_color("request", request.status)),
        unsafe_allow_html=True,
    )

    c1, c2 = st.columns(2)
    c1.write(f"**Concept:** {request.concept or 'N/A'}")
    c1.write(f"**Shooting date:** {format_datetime(request.request_date)}")
    c1.write(f"**Shooting type:** {shooting_type_label(request.shooting_type)}")
    c2.write(f"**Location:** {request.location_text or 'N/A'}")
    c2.write(f"**Province:** {request.province or 'N/A'}")
    c2.write(f"**Budget:** {format_money(request.estimated_budget)}")
    st.caption(f"User #{request.user_id} · Created {format_date(request.created_at)}")

    st.write(f"#### Offers ({len(request.offers)})")
    if not request.offers:
        st.info("No photographer has sent an offer yet.")
        return

    for offer in request.offers:
        st.markdown(offer_markup(offer), unsafe_allow_html=True)
        if offer.message:
            st.caption(offer.message)
