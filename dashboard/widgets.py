# dashboard/widgets.py
"""Streamlit building blocks shared by the list pages."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence

import pandas as pd
import streamlit as st

from dashboard.filters import ALL, distinct_values
from dashboard.list_state import ListState

EMPTY_MESSAGE = "No rows match the current filters."


def run(coro):
    """Runs a backend coroutine to completion inside the Streamlit rerun."""
    return asyncio.run(coro)


def get_list_state(key: str, parse: Callable[[dict], Any]) -> ListState:
    if key not in st.session_state:
        st.session_state[key] = ListState(name=key, parse=parse)
    return st.session_state[key]


def ensure_loaded(state: ListState, fetch, force: bool = False) -> None:
    if force or not state.loaded:
        with st.spinner("Loading..."):
            run(state.load(fetch))


def page_header(title: str, caption: str, refresh_key: str) -> bool:
    col1, col2 = st.columns([5, 1])
    with col1:
        st.title(title)
        st.caption(caption)
    with col2:
        return st.button("🔄 Refresh", key=refresh_key, use_container_width=True)


def stat_cards(cards: List[Dict[str, Any]]) -> None:
    cols = st.columns(len(cards))
    for col, card in zip(cols, cards):
        col.metric(card["label"], card["value"], card.get("delta"))


def search_box(state: ListState, placeholder: str, key: str) -> None:
    # widget values live in st.session_state under `key`
    state.params.search = st.text_input("Search", placeholder=placeholder, key=key)


def select_filter(
    state: ListState,
    label: str,
    field: str,
    key: str,
    options: Optional[Sequence[Any]] = None,
    format_func: Callable[[Any], str] = str,
) -> None:
    """Drop-down with an "all" entry; options default to the values present in the data."""
    if options is None:
        options = distinct_values(state.items, field)
    value = st.selectbox(
        label,
        [ALL] + list(options),
        key=key,
        format_func=lambda v: "All" if v == ALL else format_func(v),
    )
    state.params.set_filter(field, value)


def load_status(state: ListState, visible: list) -> bool:
    """Renders the error or empty state. Returns True when there are rows to draw."""
    if state.error:
        st.error(state.error)
        return False
    if not visible:
        st.info(EMPTY_MESSAGE)
        return False
    return True


def table(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    df = pd.DataFrame(rows)
    st.dataframe(df, use_container_width=True, hide_index=True)
    return df


def csv_download(df: pd.DataFrame, file_name: str, key: str) -> None:
    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "📥 Download as CSV",
        csv,
        file_name,
        "text/csv",
        key=key,
    )
