"""Room based connection management for notification websockets."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, DefaultDict, Set

import logging

from fastapi import WebSocket

from .events import user_room

logger = logging.getLogger(__name__)


class RoomConnectionManager:
    """Track which websocket connections belong to which room.

    A room exists only while it has members. A connection may sit in several
    rooms, and a room may hold several connections (one per open tab or
    device). All mutations happen on the event loop thread.
    """

    def __init__(self) -> None:
        self._rooms: DefaultDict[str, Set[WebSocket]] = defaultdict(set)
        self._memberships: DefaultDict[WebSocket, Set[str]] = defaultdict(set)

    async def connect(self, websocket: WebSocket) -> None:
        """Accept the websocket connection; it joins no room yet."""

        await websocket.accept()
        logger.info("Realtime client connected")

    def join_room(self, websocket: WebSocket, user_id: int) -> str:
        room = user_room(user_id)
        self._rooms[room].add(websocket)
        self._memberships[websocket].add(room)
        logger.info("Realtime client joined room %s", room)
        return room

    def leave_room(self, websocket: WebSocket, user_id: int) -> str:
        room = user_room(user_id)
        self._discard(websocket, room)
        memberships = self._memberships.get(websocket)
        if memberships is not None:
            memberships.discard(room)
            if not memberships:
                self._memberships.pop(websocket, None)
        logger.info("Realtime client left room %s", room)
        return room

    def disconnect(self, websocket: WebSocket) -> None:
        """Remove ``websocket`` from every room it joined."""

        rooms = self._memberships.pop(websocket, set())
        for room in rooms:
            self._discard(websocket, room)
        logger.info("Realtime client disconnected from %d room(s)", len(rooms))

    def members(self, room: str) -> Set[WebSocket]:
        return set(self._rooms.get(room, set()))

    def rooms(self) -> Set[str]:
        return set(self._rooms)

    def rooms_of(self, websocket: WebSocket) -> Set[str]:
        return set(self._memberships.get(websocket, set()))

    async def emit(self, room: str, event: str, payload: Any) -> int:
        """Send ``event`` to every member of ``room``.

        Returns the number of connections that accepted the frame. An empty
        room drops the event. A connection that fails to receive it is
        removed from all of its rooms.
        """

        connections = list(self._rooms.get(room, set()))
        if not connections:
            logger.debug("Dropping %s for room %s: no listeners", event, room)
            return 0

        message = {"type": event, "data": payload}
        delivered = 0
        for connection in connections:
            try:
                await connection.send_json(message)
            except Exception:
                logger.warning(
                    "Failed to deliver %s to a client in room %s; dropping connection",
                    event,
                    room,
                    exc_info=True,
                )
                self.disconnect(connection)
            else:
                delivered += 1
        logger.debug("Emitted %s to room %s (%d client(s))", event, room, delivered)
        return delivered

    def _discard(self, websocket: WebSocket, room: str) -> None:
        connections = self._rooms.get(room)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._rooms.pop(room, None)


room_manager = RoomConnectionManager()


__all__ = ["RoomConnectionManager", "room_manager"]
