from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from starlette.concurrency import run_in_threadpool

from src.app.domain.errors import AuthenticationError
from src.app.domain.models import AuthSession
from src.app.infra.auth.base import AuthProvider, Unsubscribe

logger = logging.getLogger(__name__)


class GateState(str, Enum):
    PENDING = "pending"
    ALLOWED = "allowed"
    DENIED = "denied"


class SessionGate:
    """
    Restricts a page to signed-in users.

    activate() queries the current session and keeps a session-change
    subscription until dispose(); events after dispose() are ignored.
    """

    def __init__(self, auth: AuthProvider):
        self._auth = auth
        self._unsubscribe: Optional[Unsubscribe] = None
        self._disposed = False
        self.state = GateState.PENDING
        self.session: Optional[AuthSession] = None

    @property
    def allowed(self) -> bool:
        return self.state == GateState.ALLOWED

    async def activate(self) -> GateState:
        self._unsubscribe = self._auth.subscribe(self._on_change)
        try:
            session = await run_in_threadpool(self._auth.get_session)
        except AuthenticationError as exc:
            logger.warning("Session lookup failed: %s", exc.reason)
            session = None
        if not self._disposed:
            self._decide(session)
        return self.state

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def __aenter__(self) -> "SessionGate":
        await self.activate()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.dispose()

    def _on_change(self, event: str, session: Optional[AuthSession]) -> None:
        if self._disposed:
            return
        logger.debug("Gate saw %s", event)
        self._decide(session)

    def _decide(self, session: Optional[AuthSession]) -> None:
        self.session = session
        self.state = GateState.ALLOWED if session is not None else GateState.DENIED
