from __future__ import annotations

import logging
from typing import Any, Optional

from supabase import Client

from src.app.domain.errors import AuthenticationError, reason_of
from src.app.domain.models import Account, AuthSession
from src.app.infra.auth.base import AuthProvider, SessionListener, Unsubscribe

logger = logging.getLogger(__name__)


def _to_account(user: Any) -> Optional[Account]:
    if user is None:
        return None
    return Account(id=str(user.id), email=getattr(user, "email", None))


def _to_session(session: Any) -> Optional[AuthSession]:
    if session is None:
        return None
    account = _to_account(getattr(session, "user", None))
    if account is None:
        return None
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        account=account,
    )


class SupabaseAuthProvider(AuthProvider):
    def __init__(self, client: Client):
        self._auth = client.auth

    def restore(self, access_token: str, refresh_token: str) -> Optional[AuthSession]:
        try:
            res = self._auth.set_session(access_token, refresh_token)
        except Exception as exc:
            raise AuthenticationError("restore_session", reason_of(exc)) from exc
        return _to_session(res.session)

    def sign_up(self, email: str, password: str) -> Optional[Account]:
        try:
            res = self._auth.sign_up({"email": email, "password": password})
        except Exception as exc:
            raise AuthenticationError("sign_up", reason_of(exc)) from exc
        return _to_account(res.user)

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            res = self._auth.sign_in_with_password({"email": email, "password": password})
        except Exception as exc:
            raise AuthenticationError("sign_in", reason_of(exc)) from exc
        session = _to_session(res.session)
        if session is None:
            raise AuthenticationError("sign_in", "No session returned")
        return session

    def sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except Exception as exc:
            raise AuthenticationError("sign_out", reason_of(exc)) from exc

    def get_session(self) -> Optional[AuthSession]:
        try:
            return _to_session(self._auth.get_session())
        except Exception as exc:
            raise AuthenticationError("get_session", reason_of(exc)) from exc

    def get_account(self) -> Optional[Account]:
        try:
            res = self._auth.get_user()
        except Exception as exc:
            raise AuthenticationError("get_user", reason_of(exc)) from exc
        if res is None:
            return None
        return _to_account(res.user)

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        def _forward(event: str, session: Any) -> None:
            listener(str(event), _to_session(session))

        subscription = self._auth.on_auth_state_change(_forward)
        return subscription.unsubscribe
