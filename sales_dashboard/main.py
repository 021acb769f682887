"""Streamlit application entry point."""

from __future__ import annotations

import streamlit as st
from streamlit_option_menu import option_menu

from sales_dashboard import config
from sales_dashboard.pages import dashboard, login, report
from sales_dashboard.services.auth import CredentialStore
from sales_dashboard.services.browser_store import CookieStore
from sales_dashboard.services.session import SessionStore
from sales_dashboard.state import get_state

PAGES = {"Dashboard": dashboard, "Relatório": report}


def _sidebar(sessions: SessionStore) -> str | None:
    """Render the menu; ``None`` when the user logged out."""
    state = get_state()
    with st.sidebar:
        st.title(config.APP_TITLE)
        st.caption(f"Olá, {state.user.display_name} tenha um excelente dia :)")
        selection = option_menu(
            menu_title="Menu",
            options=list(PAGES),
            icons=["bar-chart-line-fill", "file-earmark-arrow-down-fill"],
            menu_icon="cast",
            default_index=0,
        )
        if st.button("Sair", use_container_width=True):
            state.logout(sessions)
            return None
    return selection


def main() -> None:
    """Run the main application."""
    config.configure()
    settings = config.get_settings()
    browser = CookieStore()
    sessions = SessionStore(browser, settings.session_secret, settings.session_hours)
    credentials = CredentialStore(browser, settings.remember_me_days)

    state = get_state()
    state.restore(sessions)
    if state.user is None and not login.render(credentials, sessions):
        return
    selection = _sidebar(sessions)
    if selection is None:
        login.render(credentials, sessions)
        return
    PAGES[selection].render()


if __name__ == "__main__":
    main()
