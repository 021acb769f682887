"""Login through the ``login`` RPC and the optional "remember me" store."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, Tuple

from ..errors import AuthServiceError, InvalidCredentialsError
from ..models import User
from .supabase_client import get_supabase

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "E-mail ou senha inválidos. Por favor, tente novamente."
UNEXPECTED_ERROR_MESSAGE = "Ocorreu um erro inesperado. Tente novamente mais tarde."
REMEMBER_COOKIE = "sales_dashboard_remember"


def login(email: str, password: str, client: Optional[Any] = None) -> User:
    """Check credentials against the backend and return the user.

    The RPC returns a list with one ``{id, email}`` row on success and an
    empty list otherwise.
    """
    try:
        client = client or get_supabase()
        response = client.rpc(
            "login", {"email_param": email, "password_param": password}
        ).execute()
    except Exception as exc:
        logger.exception("Login RPC failed")
        raise AuthServiceError(UNEXPECTED_ERROR_MESSAGE) from exc

    data = response.data
    user = User.from_row(data[0]) if isinstance(data, list) and data else None
    if user is None:
        logger.info("Rejected login for %s", email)
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)
    logger.info("User %s logged in", user.email)
    return user




def sign_in(
    email: str,
    password: str,
    credentials: "CredentialStore",
    remember: bool = False,
    client: Optional[Any] = None,
) -> User:
    """Log in, then remember or forget the credentials in this browser.

    Nothing is written when the login fails.
    """
    user = login(email, password, client=client)
    if remember:
        credentials.save(email, password)
    else:
        credentials.clear()
    return user


class CredentialStore:
    """Remembered e-mail and password kept in a cookie of the visitor's browser.

    The password is stored in clear text: do not enable this on shared or
    high-security deployments.
    """

    def __init__(self, browser: Any, days: int = 30) -> None:
        self.browser = browser
        self.days = days

    def load(self) -> Optional[Tuple[str, str]]:
        raw = self.browser.get(REMEMBER_COOKIE)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable remembered-credentials cookie")
            return None
        if not isinstance(data, dict):
            return None
        email, password = data.get("email"), data.get("password")
        if not email or not password:
            return None
        return email, password

    def save(self, email: str, password: str) -> None:
        expires_at = datetime.now(timezone.utc) + timedelta(days=self.days)
        self.browser.set(
            REMEMBER_COOKIE, json.dumps({"email": email, "password": password}), expires_at
        )

    def clear(self) -> None:
        self.browser.delete(REMEMBER_COOKIE)
