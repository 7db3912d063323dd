from __future__ import annotations

import logging
from typing import Any, MutableMapping

from src.app.domain.models import Notice, NoticeLevel

logger = logging.getLogger(__name__)

SESSION_KEY = "notices"


class Notifier:
    """Collects user-visible notices raised while a view handles one action."""

    def __init__(self) -> None:
        self.notices: list[Notice] = []

    def success(self, message: str) -> None:
        self._push(NoticeLevel.SUCCESS, message)

    def info(self, message: str) -> None:
        self._push(NoticeLevel.INFO, message)

    def error(self, message: str) -> None:
        self._push(NoticeLevel.ERROR, message)

    def messages(self, level: NoticeLevel | None = None) -> list[str]:
        return [n.message for n in self.notices if level is None or n.level == level]

    def _push(self, level: NoticeLevel, message: str) -> None:
        logger.debug("notice %s: %s", level.value, message)
        self.notices.append(Notice(level=level, message=message))


def flash(store: MutableMapping[str, Any], notices: list[Notice]) -> None:
    if not notices:
        return
    pending = list(store.get(SESSION_KEY) or [])
    pending.extend({"level": n.level.value, "message": n.message} for n in notices)
    store[SESSION_KEY] = pending


def pop_flashed(store: MutableMapping[str, Any]) -> list[Notice]:
    raw = store.pop(SESSION_KEY, None) or []
    notices: list[Notice] = []
    for item in raw:
        try:
            notices.append(Notice(level=NoticeLevel(item["level"]), message=str(item["message"])))
        except (KeyError, TypeError, ValueError):
            continue
    return notices
