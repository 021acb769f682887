"""Session state handling for the app."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional

import pandas as pd
import streamlit as st

from .core.filters import FilterState
from .models import SaleRecord, User
from .services.realtime import RealtimeFeed
from .services.sales_repo import empty_sales_frame, records_to_frame
from .services.session import SessionStore

STATE_KEY = "app_state"


@dataclass
class AppState:
    """Central application state stored in ``st.session_state``.

    ``sales`` is only ever replaced, never edited in place, so frames handed
    to the pure processing functions stay valid for the whole rerun.
    """

    user: Optional[User] = None
    sales: pd.DataFrame = field(default_factory=empty_sales_frame)
    loaded: bool = False
    load_error: Optional[str] = None
    filters: FilterState = field(default_factory=FilterState)
    latest_sale: Optional[SaleRecord] = None
    feed: Optional[RealtimeFeed] = None
    # Set by logout; the session cookie is ignored until the next login.
    signed_out: bool = False

    def set_sales(self, df: pd.DataFrame) -> None:
        self.sales = df
        self.loaded = True
        self.load_error = None

    def apply_new_sale(self, record: SaleRecord) -> None:
        """Prepend ``record``; the next derivation sees it."""
        self.sales = pd.concat([records_to_frame([record]), self.sales], ignore_index=True)
        self.latest_sale = record

    def apply_new_sales(self, records: Iterable[SaleRecord]) -> int:
        count = 0
        for record in records:
            self.apply_new_sale(record)
            count += 1
        return count

    def login(self, user: User, sessions: Optional[SessionStore] = None) -> None:
        self.user = user
        self.signed_out = False
        if sessions is not None:
            sessions.save(user)

    def restore(self, sessions: SessionStore) -> Optional[User]:
        """Pick up the login kept in the browser after a page reload."""
        if self.user is None and not self.signed_out:
            self.user = sessions.load()
        return self.user

    def logout(self, sessions: Optional[SessionStore] = None) -> None:
        if sessions is not None:
            sessions.clear()
        if self.feed is not None:
            self.feed.stop()
        self.user = None
        self.sales = empty_sales_frame()
        self.loaded = False
        self.load_error = None
        self.filters = FilterState()
        self.latest_sale = None
        self.feed = None
        self.signed_out = True


def get_state() -> AppState:
    """Return the current :class:`AppState` instance."""
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = AppState()
    return st.session_state[STATE_KEY]
