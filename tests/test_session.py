from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt

from sales_dashboard.models import User
from sales_dashboard.services.session import (
    SESSION_COOKIE,
    SessionStore,
    decode_session,
    encode_session,
)

from tests.fakes import FakeBrowser

SECRET = "a-test-signing-key-that-is-long-enough-for-hs256"
USER = User(id="u-1", email="ana@example.com")


def test_token_round_trip() -> None:
    token = encode_session(USER, SECRET, timedelta(hours=1))
    assert decode_session(token, SECRET) == USER


def test_expired_token_is_rejected() -> None:
    issued = datetime.now(timezone.utc) - timedelta(hours=2)
    token = encode_session(USER, SECRET, timedelta(hours=1), now=issued)
    assert decode_session(token, SECRET) is None


def test_token_signed_with_another_key_is_rejected() -> None:
    token = encode_session(USER, "another-signing-key-that-is-also-long-enough", timedelta(hours=1))
    assert decode_session(token, SECRET) is None


def test_forged_token_is_rejected() -> None:
    forged = jwt.encode(
        {"id": "admin", "email": "x@example.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
        "guessed-key-guessed-key-guessed-key-guessed",
        algorithm="HS256",
    )
    assert decode_session(forged, SECRET) is None
    assert decode_session("not-a-token", SECRET) is None


def test_store_survives_reload_of_same_browser() -> None:
    browser = FakeBrowser()
    SessionStore(browser, SECRET, hours=12).save(USER)
    # A reload starts a new Streamlit session over the same cookie jar.
    assert SessionStore(browser, SECRET, hours=12).load() == USER
    assert SessionStore(FakeBrowser(), SECRET).load() is None


def test_store_clear() -> None:
    browser = FakeBrowser()
    store = SessionStore(browser, SECRET)
    store.save(USER)
    store.clear()
    assert SESSION_COOKIE not in browser.cookies
    assert store.load() is None
