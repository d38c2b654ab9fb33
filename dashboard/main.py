from __future__ import annotations

import sys
import os
import logging

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

# IMPORTS
from backend.client import get_api_client
from dashboard.config import load_config
from dashboard.bookings_page import render_bookings_page, render_booking_lookup
from dashboard.overview_page import render_overview_page
from dashboard.payments_page import render_payments_page
from dashboard.requests_page import render_requests_page
from dashboard.reviews_page import render_reviews_page
from dashboard.users_page import render_users_page

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

PAGES = [
    "Dashboard",
    "Users",
    "Bookings",
    "Requests",
    "Payments",
    "Reviews",
    "Booking lookup",
]


def _is_unlocked(password: str) -> bool:
    if st.session_state.get("admin_unlocked"):
        return True

    # --- Simple Password Protection ---
    entered = st.sidebar.text_input("Admin Password", type="password")
    if not password or entered != password:
        st.warning("Please enter the correct admin password to view data.")
        return False

    st.session_state.admin_unlocked = True
    return True


def main():
    st.set_page_config(
        page_title="SnapLink Admin",
        page_icon="📸",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    cfg = load_config()

    with st.sidebar:
        st.title("📸 SnapLink Admin")
        menu = st.radio("Go to", PAGES)
        st.divider()

    if not _is_unlocked(cfg.admin.password):
        return

    client = get_api_client(cfg.api)

    if menu == "Dashboard":
        render_overview_page(client)
    elif menu == "Users":
        render_users_page(client, page_size=cfg.display.page_size)
    elif menu == "Bookings":
        render_bookings_page(client)
    elif menu == "Requests":
        render_requests_page(client)
    elif menu == "Payments":
        render_payments_page(client)
    elif menu == "Reviews":
        render_reviews_page(client)
    else:
        render_booking_lookup(client)


if __name__ == "__main__":
    main()
