"""Login page."""

from __future__ import annotations

import streamlit as st

from ..config import APP_TITLE
from ..errors import AuthError
from ..services.auth import CredentialStore, sign_in
from ..services.session import SessionStore
from ..state import get_state


def render(credentials: CredentialStore, sessions: SessionStore) -> bool:
    """Render the login form; ``True`` once the user is logged in."""
    state = get_state()
    remembered = credentials.load()
    email_default, password_default = remembered or ("", "")

    placeholder = st.empty()
    with placeholder.container():
        st.title(f"📊 {APP_TITLE}")
        st.subheader("Acesse seu painel")
        with st.form("login_form"):
            email = st.text_input("Endereço de e-mail", value=email_default)
            password = st.text_input("Senha", value=password_default, type="password")
            remember = st.checkbox(
                "Lembrar-me",
                value=remembered is not None,
                help="Guarda a senha em texto puro neste navegador.",
            )
            submitted = st.form_submit_button("Entrar", type="primary", use_container_width=True)

    if not submitted:
        return False
    with st.spinner("Entrando..."):
        try:
            user = sign_in(email, password, credentials, remember=remember)
        except AuthError as exc:
            st.error(str(exc))
            return False
    placeholder.empty()
    state.login(user, sessions)
    return True
