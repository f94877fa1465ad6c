"""Realtime WebSocket route.

Clients connect to ``/ws``, join the room of the resource they are viewing
and receive ``comment_added`` and ``votes_updated`` events for it. Every
server message has the shape ``{"type": ..., "data": {...}}``.
"""

from typing import Any, Literal
from uuid import UUID

import logfire
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from port42.adapter.realtime import RealtimeNotifier
from port42.domain.value import ConnectionId, ResourceId

router = APIRouter(tags=["realtime"])


class ClientMessage(BaseModel):
    """Message sent by a client over the socket."""

    type: Literal["join_resource_room", "leave_resource_room", "ping"]
    resource_id: UUID | None = None


def server_message(message_type: str, **data: Any) -> dict[str, Any]:
    return {"type": message_type, "data": data}


def handle_client_message(
    notifier: RealtimeNotifier,
    connection_id: ConnectionId,
    raw: str,
) -> dict[str, Any]:
    """Apply one client message and build the reply.

    Args:
        notifier: Realtime notifier
        connection_id: Connection the message arrived on
        raw: Raw message text

    Returns:
        Reply to queue for the connection
    """
    try:
        message = ClientMessage.model_validate_json(raw)
    except ValidationError as e:
        logfire.debug(
            "Invalid realtime message", connection_id=connection_id, error=str(e)
        )
        return server_message("error", message="Invalid message")

    if message.type == "ping":
        return server_message("pong")

    if message.type == "join_resource_room":
        if message.resource_id is None:
            return server_message("error", message="resource_id is required")
        resource_id = ResourceId(message.resource_id)
        notifier.subscribe(connection_id, resource_id)
        return server_message("joined_resource_room", resource_id=str(resource_id))

    left = notifier.unsubscribe(connection_id)
    return server_message(
        "left_resource_room", resource_id=str(left) if left else None
    )


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Resource room subscriptions.

    Messages you can send:
    - {"type": "join_resource_room", "resource_id": "<uuid>"}
    - {"type": "leave_resource_room"}
    - {"type": "ping"}

    Messages received:
    - connected, joined_resource_room, left_resource_room, pong, error
    - comment_added and votes_updated for the joined resource
    """
    notifier = await websocket.app.state.dishka_container.get(RealtimeNotifier)

    await websocket.accept()
    connection_id = notifier.register(websocket)
    notifier.send(connection_id, server_message("connected", connection_id=connection_id))

    try:
        while True:
            raw = await websocket.receive_text()
            reply = handle_client_message(notifier, connection_id, raw)
            if not notifier.send(connection_id, reply):
                # Dropped by the notifier after a failed send
                break
    except WebSocketDisconnect:
        pass
    finally:
        await notifier.unregister(connection_id)
