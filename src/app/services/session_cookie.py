from __future__ import annotations

import logging
from typing import Any, MutableMapping, Optional

from src.app.domain.models import AuthSession
from src.app.infra.auth.base import SIGNED_OUT

logger = logging.getLogger(__name__)

COOKIE_KEY = "auth"


class SessionCookie:
    """
    Mirrors the backend auth session into the signed browser cookie.

    Registered as a session listener for the lifetime of one request, so a
    sign in, a token refresh or a sign out performed by any view lands in the
    cookie before the response is written.
    """

    def __init__(self, store: MutableMapping[str, Any]):
        self._store = store

    def tokens(self) -> Optional[tuple[str, str]]:
        data = self._store.get(COOKIE_KEY)
        if not isinstance(data, dict):
            return None
        access = data.get("access_token")
        refresh = data.get("refresh_token")
        if not access or not refresh:
            return None
        return str(access), str(refresh)

    def remember(self, session: AuthSession) -> None:
        self._store[COOKIE_KEY] = {
            "access_token": session.access_token,
            "refresh_token": session.refresh_token,
            "user_id": session.account.id,
        }

    def forget(self) -> None:
        self._store.pop(COOKIE_KEY, None)

    def on_change(self, event: str, session: Optional[AuthSession]) -> None:
        if event == SIGNED_OUT or session is None:
            self.forget()
            return
        logger.debug("Session %s for user=%s", event, session.account.id)
        self.remember(session)
