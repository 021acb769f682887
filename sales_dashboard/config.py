"""Streamlit configuration utilities and environment settings."""

from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass, field
from functools import lru_cache

import streamlit as st

from .core.text_cleaning import EXCLUDED_PARTNER_KEY, normalize_partner_name

APP_TITLE = "Conecta_E-commerce"
DEFAULT_REMEMBER_ME_DAYS = 30
DEFAULT_SESSION_HOURS = 12

_TRUE_VALUES = {"1", "true", "yes", "on", "sim"}


@dataclass(frozen=True)
class Settings:
    """Values read from the environment once per process."""

    supabase_url: str | None
    supabase_key: str | None
    sales_table: str = "vendas_parceiro"
    excluded_partner: str = EXCLUDED_PARTNER_KEY
    remember_me_days: int = DEFAULT_REMEMBER_ME_DAYS
    session_hours: int = DEFAULT_SESSION_HOURS
    # Signs the login cookie. Random per process when SESSION_SECRET is unset.
    session_secret: str = field(default_factory=lambda: secrets.token_urlsafe(32), repr=False)
    realtime_enabled: bool = True
    log_level: str = "INFO"


def _positive_int(value: str | None, default: int) -> int:
    try:
        number = int(value) if value else default
    except ValueError:
        return default
    return number if number > 0 else default


def load_settings(environ: dict | None = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``)."""
    env = os.environ if environ is None else environ
    excluded = env.get("EXCLUDED_PARTNER")
    return Settings(
        supabase_url=env.get("SUPABASE_URL") or None,
        supabase_key=env.get("SUPABASE_KEY") or None,
        sales_table=env.get("SALES_TABLE") or "vendas_parceiro",
        excluded_partner=normalize_partner_name(excluded) if excluded else EXCLUDED_PARTNER_KEY,
        remember_me_days=_positive_int(env.get("REMEMBER_ME_DAYS"), DEFAULT_REMEMBER_ME_DAYS),
        session_hours=_positive_int(env.get("SESSION_HOURS"), DEFAULT_SESSION_HOURS),
        session_secret=env.get("SESSION_SECRET") or secrets.token_urlsafe(32),
        realtime_enabled=str(env.get("REALTIME_ENABLED", "1")).strip().lower() in _TRUE_VALUES,
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached process settings."""
    return load_settings()


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def configure() -> None:
    """Configure logging, global Streamlit settings and theme."""
    configure_logging(get_settings().log_level)
    st.set_page_config(page_title=APP_TITLE, page_icon="📊", layout="wide")
    st.write(
        """<style>
            .stApp {background-color: #f7fafc;}
            [data-testid="stMetric"] {
                background: #ffffff;
                border: 1px solid #e2e8f0;
                border-radius: 12px;
                padding: 0.6rem 0.8rem;
            }
        </style>""",
        unsafe_allow_html=True,
    )
