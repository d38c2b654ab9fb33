import html
import logging

import streamlit as st

from backend.client import ApiClient, ApiError
from dashboard.filters import REVIEW_SEARCH_FIELDS
from dashboard.formatting import badge, format_datetime, rating_color
from dashboard.models import Review
from dashboard.stats import review_summary
from dashboard.widgets import (
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


def delete_review_and_reload(client: ApiClient, state, review_id: int) -> bool:
    """Deletes one review, then refetches the list. False if the delete failed."""
    try:
        run(client.delete_review(review_id))
    except ApiError as e:
        logger.error(f"Error deleting review {review_id}: {e}")
        return False
    run(state.refresh(client.get_reviews))
    return True


def review_markup(review: Review) -> str:
    return badge(f"{review.rating} ★", rating_color(review.rating)) + f" {html.escape(review.comment)}"


def render_reviews_page(client: ApiClient):
    state = get_list_state("reviews", Review.from_api)

    refresh = page_header("⭐ Reviews", "Customer reviews of completed bookings.", "reviews-refresh")
    ensure_loaded(state, client.get_reviews, force=refresh)

    c1, c2 = st.columns([3, 1])
    with c1:
        search_box(state, "Search by customer name or comment...", "reviews-search")
    with c2:
        select_filter(state, "Rating", "rating", "reviews-rating", options=[5, 4, 3, 2, 1], format_func=lambda r: f"{r} ★")

    visible = state.visible(REVIEW_SEARCH_FIELDS)

    summary = review_summary(visible)
    stat_cards([
        {"label": "Reviews", "value": summary.total_count},
        {"label": "Average rating", "value": f"{summary.average_rating} ★"},
        {"label": "5-star reviews", "value": summary.five_star_count},
    ])
    st.divider()

    if not load_status(state, visible):
        return

    table([
        {
            "ID": r.review_id,
            "Customer": r.customer_name or "Unknown",
            "Rating": "★" * r.rating,
            "Comment": r.comment,
            "Booking": r.booking_id,
            "Photographer": r.photographer_id,
            "Created": format_datetime(r.created_at),
        }
        for r in visible
    ])

    # --- Actions: Delete Review ---
    st.write("### Actions")
    ids = [r.review_id for r in visible]
    review_id = st.selectbox("Review to delete", ids, key="reviews-delete-id")
    if st.button("🗑️ Delete review", key="reviews-delete"):
        st.session_state["reviews-confirm"] = review_id

    pending = st.session_state.get("reviews-confirm")
    if pending is None:
        return

    st.warning(f"Delete review #{pending}? This cannot be undone.")
    target = next((r for r in state.items if r.review_id == pending), None)
    if target is not None:
        st.markdown(review_markup(target), unsafe_allow_html=True)
    b1, b2 = st.columns(2)
    if b1.button("Delete", key="reviews-confirm-yes", type="primary"):
        st.session_state["reviews-confirm"] = None
        if delete_review_and_reload(client, state, pending):
            st.success(f"Review {pending} deleted!")
            st.rerun()
        else:
            st.error("Could not delete the review.")
    if b2.button("Cancel", key="reviews-confirm-no"):
        st.session_state["reviews-confirm"] = None
        st.rerun()
