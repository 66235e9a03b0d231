"""Registry of open notification websockets, keyed by recipient id."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track the sockets each user has open so new notifications can be pushed.

    A user may have several tabs open; every socket gets every message. Sockets
    that fail on send are dropped from the registry.
    """

    def __init__(self) -> None:
        self._sockets: defaultdict[str, set[WebSocket]] = defaultdict(set)

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets[user_id].add(websocket)
        logger.debug(
            "User %s now has %d notification socket(s)", user_id, len(self._sockets[user_id])
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id)
        if not sockets:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._sockets[user_id]

    def has_connections(self, user_id: str) -> bool:
        return user_id in self._sockets

    async def send_to_user(self, user_id: str, message: dict[str, Any]) -> None:
        for websocket in tuple(self._sockets.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:  # closed sockets surface as assorted errors
                logger.debug("Dropping notification socket of user %s: %s", user_id, exc)
                self.disconnect(user_id, websocket)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
