"""In-memory stand-ins for browser storage."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional


class FakeBrowser:
    """Cookie jar of one browser, with the ``CookieStore`` interface."""

    def __init__(self, cookies: Optional[Dict[str, str]] = None) -> None:
        self.cookies: Dict[str, str] = dict(cookies or {})
        self.expiry: Dict[str, datetime] = {}

    def get(self, name: str) -> Optional[str]:
        return self.cookies.get(name)

    def set(self, name: str, value: str, expires_at: datetime) -> None:
        self.cookies[name] = value
        self.expiry[name] = expires_at

    def delete(self, name: str) -> None:
        self.cookies.pop(name, None)
        self.expiry.pop(name, None)
