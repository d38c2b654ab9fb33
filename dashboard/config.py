from __future__ import annotations

from dataclasses import dataclass
import streamlit as st


# ---------------------- DATA CLASSES ----------------------

@dataclass
class ApiConfig:
    base_url: str
    token: str = ""
    timeout: float = 10.0


@dataclass
class AdminConfig:
    password: str


@dataclass
class DisplayConfig:
    page_size: int = 100


@dataclass
class AppConfig:
    api: ApiConfig
    admin: AdminConfig
    display: DisplayConfig


# ---------------------- LOADING ----------------------

def load_config(secrets=None) -> AppConfig:
    if secrets is None:
        secrets = st.secrets

    # --- Backend API ---
    api = secrets["api"]
    # timeouts may be written as ints or strings in secrets.toml
    api_cfg = ApiConfig(
        base_url=api["base_url"],
        token=api.get("token", ""),
        timeout=float(api.get("timeout", 10.0)),
    )

    # --- Admin gate ---
    # Checks for [admin] section first, then falls back to a flat key
    if "admin" in secrets:
        password = secrets["admin"]["password"]
    else:
        password = secrets.get("admin_password", "")

    admin_cfg = AdminConfig(password=password)

    # --- Display ---
    display = secrets.get("display", {})
    display_cfg = DisplayConfig(page_size=int(display.get("page_size", 100)))

    return AppConfig(
        api=api_cfg,
        admin=admin_cfg,
        display=display_cfg,
    )
