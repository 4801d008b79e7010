"""Fire-and-forget delivery of realtime events to connected users."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Iterable, Set

from anyio import from_thread

from .manager import UserConnectionManager, connection_manager

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Schedule ``{"type", "data"}`` frames for per-user websocket groups.

    Callers never wait for delivery: the frame is handed to the event loop and
    the durable write that triggered it has already been committed. Users
    without a live connection are skipped; they catch up by polling.
    """

    def __init__(self, manager: UserConnectionManager) -> None:
        self._manager = manager
        self._pending: Set[asyncio.Task] = set()

    def dispatch(self, user_id: int, *, event_type: str, payload: Any) -> None:
        """Schedule a realtime ``event_type`` event for ``user_id``."""

        if not user_id or not self._manager.is_connected(user_id):
            return

        message = {"type": event_type, "data": copy.deepcopy(payload)}
        self._schedule_send(user_id, message)

    def dispatch_many(
        self,
        user_ids: Iterable[int],
        *,
        event_type: str,
        payload: Any,
    ) -> None:
        """Send the same event to each of ``user_ids`` once."""

        seen: Set[int] = set()
        for user_id in user_ids:
            if not user_id or user_id in seen:
                continue
            seen.add(user_id)
            self.dispatch(user_id, event_type=event_type, payload=payload)

    def _schedule_send(self, user_id: int, message: dict[str, Any]) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            # sync handlers run in AnyIO worker threads; hop onto the loop
            try:
                from_thread.run_sync(self._spawn_send, user_id, message)
            except RuntimeError:
                logger.warning(
                    "No event loop reachable; dropped %s event for user %s",
                    message["type"],
                    user_id,
                )
        else:
            self._spawn_send(user_id, message)

    def _spawn_send(self, user_id: int, message: dict[str, Any]) -> None:
        task = asyncio.get_running_loop().create_task(
            self._manager.send_to_user(user_id, message)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


realtime_publisher = RealtimeEventPublisher(connection_manager)


def dispatch_realtime_event(
    user_ids: Iterable[int], *, event_type: str, payload: Any
) -> None:
    """Public helper to push ``event_type`` to ``user_ids``."""

    realtime_publisher.dispatch_many(
        user_ids, event_type=event_type, payload=payload
    )


__all__ = [
    "RealtimeEventPublisher",
    "dispatch_realtime_event",
    "realtime_publisher",
]
