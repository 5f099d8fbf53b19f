"""Websocket endpoint through which clients join their notification room."""

from __future__ import annotations

import json
from typing import Any

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from notification_hub.infrastructure.realtime import RoomConnectionManager, SocketEvents
from notification_hub.interfaces.api.dependencies import get_room_manager

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


def parse_user_id(value: Any) -> int | None:
    """Return ``value`` as a positive user id, or ``None`` when it is not one."""

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str) and value.strip().isdigit():
        parsed = int(value.strip())
        return parsed if parsed > 0 else None
    return None


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    manager: RoomConnectionManager = Depends(get_room_manager),
) -> None:
    """Stream notification events for every room the client joins.

    Frames are ``{"type": ..., "data": ...}`` objects in both directions.
    """

    await manager.connect(websocket)
    try:
        while True:
            message = _decode_frame(await websocket.receive())
            if not isinstance(message, dict):
                await _send_error(websocket, "Frames must be JSON objects")
                continue

            message_type = message.get("type")
            if message_type == SocketEvents.PING:
                await websocket.send_json({"type": SocketEvents.PONG})
                continue

            if message_type in (SocketEvents.JOIN_USER_ROOM, SocketEvents.LEAVE_USER_ROOM):
                user_id = parse_user_id(message.get("data"))
                if user_id is None:
                    await _send_error(websocket, "User ID must be a positive number")
                    continue
                if message_type == SocketEvents.JOIN_USER_ROOM:
                    room = manager.join_room(websocket, user_id)
                    reply = SocketEvents.ROOM_JOINED
                else:
                    room = manager.leave_room(websocket, user_id)
                    reply = SocketEvents.ROOM_LEFT
                await websocket.send_json({"type": reply, "data": {"room": room}})
                continue

            await _send_error(websocket, f"Unsupported event type: {message_type}")
    except WebSocketDisconnect:
        logger.debug("Realtime client closed the connection")
    finally:
        manager.disconnect(websocket)


def _decode_frame(frame: dict[str, Any]) -> Any:
    """Return the JSON value carried by a text frame, ``None`` otherwise."""

    if frame["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(frame.get("code", 1000), frame.get("reason"))
    text = frame.get("text")
    if text is None:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({"type": SocketEvents.ERROR, "data": {"message": message}})
