# dashboard/charts.py

from __future__ import annotations

from typing import Callable, Dict, List, Optional

import pandas as pd
import plotly.express as px

BOOKING_STATUS_COLORS = ["#10b981", "#3b82f6", "#f59e0b", "#ef4444", "#6366f1"]
REQUEST_STATUS_COLORS = ["#6366f1", "#f59e0b"]


def distribution_frame(distribution: Optional[Dict[str, int]], label: Callable[[str], str]) -> pd.DataFrame:
    """Backend {status: count} block -> rows of (name, value) with display labels."""
    rows = [{"name": label(k), "value": v} for k, v in (distribution or {}).items()]
    return pd.DataFrame(rows, columns=["name", "value"])


def series_counts(points: Optional[List[dict]]) -> Dict[str, int]:
    """[{name, value}] points -> {name: value}; points without a name are skipped."""
    return {p["name"]: p.get("value", 0) for p in points or [] if p.get("name")}


def distribution_pie(df: pd.DataFrame, title: str, colors: List[str]):
    fig = px.pie(
        df,
        names="name",
        values="value",
        title=title,
        hole=0.4,
        color_discrete_sequence=colors,
    )
    fig.update_layout(margin=dict(t=40, b=0, l=0, r=0))
    return fig


def series_bar(points: List[dict], y: str, title: str):
    df = pd.DataFrame(points or [], columns=["name", y])
    fig = px.bar(df, x="name", y=y, title=title)
    fig.update_layout(margin=dict(t=40, b=0, l=0, r=0))
    return fig


def series_line(points: List[dict], y: str, title: str):
    df = pd.DataFrame(points or [], columns=["name", y])
    fig = px.line(df, x="name", y=y, title=title, markers=True)
    fig.update_layout(margin=dict(t=40, b=0, l=0, r=0))
    return fig
