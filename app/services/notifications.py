"""
Real-time notification fan-out.

- NotificationHub keeps the live websocket connections per user room
  (`user-{id}`), supporting several connections for the same user.
- NotificationDispatcher is what business code talks to: `publish()` drops an
  event on a bounded queue and returns immediately; a background task drains
  the queue and pushes each event to the hub.

Delivery is best effort. A full queue, a closed socket or a user with no live
connection only produces a log line.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Set

from fastapi import WebSocket

from app.core.config import settings
from app.utils.clock import utcnow
from app.utils.error_handler import safe_call

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "notification"


def user_room(user_id: str) -> str:
    return f"user-{user_id}"


class Notifier(Protocol):
    def publish(self, user_id: str, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        ...


@dataclass
class ConnectionInfo:
    websocket: WebSocket
    room: str
    connection_id: str
    connected_at: datetime = field(default_factory=utcnow)


class NotificationHub:
    """Registry of live websocket connections keyed by user room."""

    def __init__(self):
        # connection_id -> ConnectionInfo
        self._connections: Dict[str, ConnectionInfo] = {}
        # room -> Set[connection_id]
        self._rooms: Dict[str, Set[str]] = {}
        self._lock = asyncio.Lock()
        self._connection_counter = 0

    def _generate_connection_id(self, room: str) -> str:
        self._connection_counter += 1
        return f"{room}_{self._connection_counter}"

    async def connect(self, websocket: WebSocket, user_id: str) -> str:
        """Accept the socket and join it to the user's room.

        Returns:
            The connection id, needed to disconnect this socket only.
        """
        await websocket.accept()
        room = user_room(user_id)

        async with self._lock:
            connection_id = self._generate_connection_id(room)
            self._connections[connection_id] = ConnectionInfo(
                websocket=websocket,
                room=room,
                connection_id=connection_id,
            )
            self._rooms.setdefault(room, set()).add(connection_id)

        logger.info("Notification socket connected: %s (conn_id: %s)", room, connection_id)
        return connection_id

    async def disconnect(self, connection_id: str) -> None:
        async with self._lock:
            conn = self._connections.pop(connection_id, None)
            if conn is None:
                return
            members = self._rooms.get(conn.room)
            if members is not None:
                members.discard(connection_id)
                if not members:
                    del self._rooms[conn.room]

        logger.info("Notification socket disconnected: %s (conn_id: %s)", conn.room, connection_id)

    def connection_count(self, user_id: Optional[str] = None) -> int:
        if user_id is None:
            return len(self._connections)
        return len(self._rooms.get(user_room(user_id), ()))

    async def _send_to_connection(self, connection_id: str, payload: Dict[str, Any]) -> bool:
        conn = self._connections.get(connection_id)
        if conn is None:
            return False
        try:
            await conn.websocket.send_json(payload)
            return True
        except Exception as e:
            logger.warning("Send to connection %s failed: %s", connection_id, e)
            return False

    async def send_to_user(self, user_id: str, payload: Dict[str, Any]) -> int:
        """Push a payload to every connection in the user's room.

        Returns:
            Number of connections the payload reached.
        """
        async with self._lock:
            connection_ids = list(self._rooms.get(user_room(user_id), ()))

        delivered = 0
        stale = []
        for connection_id in connection_ids:
            if await self._send_to_connection(connection_id, payload):
                delivered += 1
            else:
                stale.append(connection_id)

        for connection_id in stale:
            await self.disconnect(connection_id)

        return delivered


class NotificationDispatcher:
    """Bounded, non-blocking publisher in front of the hub."""

    def __init__(self, hub: NotificationHub, maxsize: Optional[int] = None):
        self.hub = hub
        self.maxsize = maxsize if maxsize is not None else settings.NOTIFICATION_QUEUE_SIZE
        self._queue: Optional[asyncio.Queue] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the consumer task on the running event loop."""
        if self.running:
            return
        self._queue = asyncio.Queue(maxsize=self.maxsize)
        self._task = asyncio.get_running_loop().create_task(self._consume())
        logger.info("Notification dispatcher started (queue size %s)", self.maxsize)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Notification dispatcher stopped")

    def build_event(self, message: str, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {
            "event": NOTIFICATION_EVENT,
            "message": message,
            "data": data or {},
            "timestamp": utcnow().isoformat() + "Z",
        }

    def publish(self, user_id: str, message: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Queue a notification for `user_id` without waiting for delivery."""
        if self._queue is None:
            logger.warning("Notification for %s dropped: dispatcher not started", user_room(user_id))
            return
        try:
            self._queue.put_nowait((str(user_id), self.build_event(message, data)))
        except asyncio.QueueFull:
            logger.warning("Notification queue full, dropped event for %s", user_room(user_id))

    @safe_call(default=0)
    async def _deliver(self, user_id: str, event: Dict[str, Any]) -> int:
        delivered = await self.hub.send_to_user(user_id, event)
        event_type = event["data"].get("type")
        if delivered:
            logger.debug("Delivered %s to %s connection(s) of %s", event_type, delivered, user_room(user_id))
        else:
            logger.debug("No live connection for %s, %s not delivered", user_room(user_id), event_type)
        return delivered

    async def _consume(self) -> None:
        while True:
            user_id, event = await self._queue.get()
            try:
                await self._deliver(user_id, event)
            finally:
                self._queue.task_done()

    async def drain(self) -> None:
        """Wait until every queued event has been handled."""
        if self._queue is not None:
            await self._queue.join()
