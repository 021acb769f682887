"""Logged-in user kept across page reloads in a signed browser cookie."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt

from ..models import User

logger = logging.getLogger(__name__)

SESSION_COOKIE = "sales_dashboard_session"
ALGORITHM = "HS256"


def encode_session(user: User, secret: str, lifetime: timedelta, now: Optional[datetime] = None) -> str:
    now = now or datetime.now(timezone.utc)
    payload = {**user.to_dict(), "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_session(token: str, secret: str) -> Optional[User]:
    """User carried by ``token``, or ``None`` when it is forged or expired."""
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError as exc:
        logger.info("Discarding session cookie: %s", exc)
        return None
    return User.from_row(payload)


class SessionStore:
    """Save, restore and drop the login of the current browser."""

    def __init__(self, browser: Any, secret: str, hours: int = 12) -> None:
        self.browser = browser
        self.secret = secret
        self.lifetime = timedelta(hours=hours)

    def load(self) -> Optional[User]:
        token = self.browser.get(SESSION_COOKIE)
        if not token:
            return None
        return decode_session(token, self.secret)

    def save(self, user: User) -> None:
        now = datetime.now(timezone.utc)
        token = encode_session(user, self.secret, self.lifetime, now=now)
        self.browser.set(SESSION_COOKIE, token, now + self.lifetime)

    def clear(self) -> None:
        self.browser.delete(SESSION_COOKIE)
