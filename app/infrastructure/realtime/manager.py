"""Per-user registry of live websocket connections."""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from typing import Any, DefaultDict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class UserConnectionManager:
    """Group active websocket connections by the user they belong to.

    A user may hold several sockets at once (tabs, devices); each one joins the
    user's group on connect and leaves it on disconnect. The registry is also
    read from worker threads for presence hints, hence the lock.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[int, Set[WebSocket]] = defaultdict(set)
        self._lock = threading.Lock()

    async def connect(self, user_id: int, websocket: WebSocket) -> None:
        """Accept the websocket connection and register it for ``user_id``."""

        await websocket.accept()
        self.register(user_id, websocket)

    def register(self, user_id: int, websocket: WebSocket) -> None:
        with self._lock:
            self._connections[user_id].add(websocket)
            total = len(self._connections[user_id])
        logger.debug("User %s connected (%s live connections)", user_id, total)

    def disconnect(self, user_id: int, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the pool for ``user_id``."""

        with self._lock:
            connections = self._connections.get(user_id)
            if connections is None:
                return
            connections.discard(websocket)
            if not connections:
                self._connections.pop(user_id, None)
        logger.debug("User %s disconnected a websocket", user_id)

    def is_connected(self, user_id: int) -> bool:
        with self._lock:
            return bool(self._connections.get(user_id))

    def connection_count(self, user_id: int) -> int:
        with self._lock:
            return len(self._connections.get(user_id, ()))

    async def send_to_user(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every live connection of ``user_id``.

        Returns how many connections received it. Broken sockets are dropped
        from the registry instead of raising.
        """

        with self._lock:
            connections = list(self._connections.get(user_id, ()))

        delivered = 0
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception as exc:  # noqa: BLE001 - any transport failure drops the socket
                logger.debug(
                    "Dropping websocket of user %s after failed %s push: %s",
                    user_id,
                    message.get("type"),
                    exc,
                )
                self.disconnect(user_id, connection)
            else:
                delivered += 1
        return delivered


connection_manager = UserConnectionManager()


__all__ = ["UserConnectionManager", "connection_manager"]
