"""Small key/value store kept in the visitor's browser cookies."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

import extra_streamlit_components as stx

COOKIE_MANAGER_KEY = "sales_dashboard_cookies"


class CookieStore:
    """Per-browser storage backed by a ``CookieManager`` component.

    Only one manager may be rendered per script run, so the app builds one
    store in ``main()`` and hands it to whoever needs it.
    """

    def __init__(self, manager: Optional[Any] = None) -> None:
        self.manager = manager if manager is not None else stx.CookieManager(key=COOKIE_MANAGER_KEY)

    def get(self, name: str) -> Optional[str]:
        value = self.manager.get(name)
        return str(value) if value else None

    def set(self, name: str, value: str, expires_at: datetime) -> None:
        self.manager.set(name, value, expires_at=expires_at, key=f"set_{name}")

    def delete(self, name: str) -> None:
        if self.get(name) is None:
            return
        self.manager.delete(name, key=f"delete_{name}")
