from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from starlette.concurrency import run_in_threadpool

from src.app.infra.backend import Backend
from src.app.services.notifications import Notifier

logger = logging.getLogger(__name__)

LOGIN_PATH = "/"
SIGNUP_PATH = "/signup"
RECIPES_PATH = "/recipe"
ADD_RECIPE_PATH = "/add"
FAVORITES_PATH = "/favorites"

T = TypeVar("T")


class View:
    """
    One activation of a page: owns its in-memory projection, records the
    notices it raised and where the user should be sent next.
    """

    def __init__(self, backend: Backend, notifier: Optional[Notifier] = None):
        self.backend = backend
        self.notifier = notifier or Notifier()
        self.redirect_to: Optional[str] = None
        self.disposed = False

    async def _call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        return await run_in_threadpool(fn, *args, **kwargs)

    def navigate(self, path: str) -> None:
        if self.disposed:
            return
        self.redirect_to = path

    def dispose(self) -> None:
        self.disposed = True
