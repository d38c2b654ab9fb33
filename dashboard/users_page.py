import logging

import streamlit as st

from backend.client import ApiClient, ApiError
from dashboard.filters import USER_SEARCH_FIELDS
from dashboard.formatting import active_label, format_date, role_label
from dashboard.models import User, UserRole
from dashboard.stats import user_summary
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


def set_user_active(client: ApiClient, state, user: User, is_active: bool) -> bool:
    """
    Sends the new is_active flag and, once the backend accepts it, swaps the
    record in the local list. Uses the echoed user when the backend returns one.
    """
    try:
        echoed = run(client.update_user_status(user.user_id, is_active))
    except ApiError as e:
        logger.error(f"Error updating user {user.user_id} status: {e}")
        return False

    updated = User.from_api(echoed) if echoed and "user_id" in echoed else user.with_active(is_active)
    state.replace(lambda u: u.user_id == user.user_id, updated)
    return True


def delete_user(client: ApiClient, state, user: User) -> bool:
    """Deletes the account, then drops it from the local list. False if the backend refused."""
    try:
        run(client.delete_user(user.user_id))
    except ApiError as e:
        logger.error(f"Error deleting user {user.user_id}: {e}")
        return False

    state.remove(lambda u: u.user_id == user.user_id)
    return True


def render_users_page(client: ApiClient, page_size: int = 100):
    state = get_list_state("users", User.from_api)

    refresh = page_header("👥 Users", "Customer and photographer accounts.", "users-refresh")
    ensure_loaded(state, lambda: client.get_users(page=1, limit=page_size), force=refresh)

    c1, c2, c3 = st.columns([2, 1, 1])
    with c1:
        search_box(state, "Search by name, email or phone...", "users-search")
    with c2:
        select_filter(
            state, "Role", "role", "users-role",
            options=[UserRole.CUSTOMER.value, UserRole.PHOTOGRAPHER.value],
            format_func=role_label,
        )
    with c3:
        select_filter(
            state, "Account", "active_state", "users-active",
            options=["active", "inactive"],
            format_func=lambda s: active_label(s == "active"),
        )

    # Stats cover every loaded user, not only the filtered ones
    summary = user_summary(state.items)
    stat_cards([
        {"label": "Total users", "value": summary.total_users},
        {"label": "Active", "value": summary.active_users},
        {"label": "Customers", "value": summary.customers},
        {"label": "Photographers", "value": summary.photographers},
    ])
    if state.total > len(state.items):
        st.caption(f"Showing the first {len(state.items)} of {state.total} users.")
    st.divider()

    visible = state.visible(USER_SEARCH_FIELDS)
    if not load_status(state, visible):
        return

    df = table([
        {
            "ID": u.user_id,
            "Name": u.full_name,
            "Email": u.email,
            "Phone": u.phone_number,
            "Role": role_label(u.role),
            "Province": u.province or "—",
            "Status": active_label(u.is_active),
            "Joined": format_date(u.created_at),
        }
        for u in visible
    ])

    # --- Actions: Activate / Deactivate ---
    st.write("### Actions")
    a1, a2 = st.columns([2, 1])
    with a1:
        labels = {u.user_id: f"#{u.user_id} {u.full_name} ({u.email})" for u in visible}
        user_id = st.selectbox("User", list(labels), format_func=labels.get, key="users-action-id")
        user = next(u for u in visible if u.user_id == user_id)
        action = "Deactivate" if user.is_active else "Activate"
        if st.button(f"{action} account", key="users-toggle"):
            if set_user_active(client, state, user, not user.is_active):
                st.toast(f"{user.full_name} is now {active_label(not user.is_active)}")
                st.rerun()
            else:
                st.error("Could not update the user status.")

        if st.button("🗑️ Delete account", key="users-delete"):
            st.session_state["users-confirm"] = user.user_id

        pending = st.session_state.get("users-confirm")
        target = next((u for u in state.items if u.user_id == pending), None)
        if target is not None:
            st.warning(f"Delete {target.full_name} (#{target.user_id})? This cannot be undone.")
            b1, b2 = st.columns(2)
            if b1.button("Delete", key="users-confirm-yes", type="primary"):
                st.session_state["users-confirm"] = None
                if delete_user(client, state, target):
                    st.success(f"User {target.user_id} deleted!")
                    st.rerun()
                else:
                    st.error("Could not delete the user.")
            if b2.button("Cancel", key="users-confirm-no"):
                st.session_state["users-confirm"] = None
                st.rerun()

    with a2:
        st.write("### Export")
        csv_download(df, "snaplink_users.csv", "users-csv")
        if st.button("Prepare server export", key="users-export"):
            try:
                st.session_state["users-export-file"] = run(client.export_users())
            except ApiError as e:
                logger.error(f"Error exporting users: {e}")
                st.error("Could not export users.")
        exported = st.session_state.get("users-export-file")
        if exported:
            st.download_button("📥 Download export", exported, "snaplink_users_export.xlsx", key="users-export-dl")
