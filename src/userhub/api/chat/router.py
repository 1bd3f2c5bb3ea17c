"""WebSocket endpoint for the broadcast chat channel."""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from userhub.api.chat.registry import MESSAGE_EVENT, BroadcastRelay

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

INVALID_JSON_FRAME = {"type": "error", "data": {"message": "Invalid JSON"}}


def get_relay(websocket: WebSocket) -> BroadcastRelay:
    """Get the broadcast relay wired at startup."""
    return websocket.app.state.chat_relay


def decode_frame(message: dict[str, Any]) -> Any:
    """Decode the JSON payload of a text or binary frame.

    Raises:
        ValueError: If the payload is not UTF-8 encoded JSON
    """
    payload = message.get("text")
    if payload is None:
        payload = message.get("bytes")
    if payload is None:
        raise ValueError("Empty frame")
    return json.loads(payload)


@router.websocket("/ws")
async def chat_endpoint(
    websocket: WebSocket,
    relay: BroadcastRelay = Depends(get_relay),
) -> None:
    """Relay every ``message`` frame to all connected clients.

    Frames are JSON objects ``{"type": ..., "data": ...}``, sent as text or
    binary. Frames of any other type are ignored.
    """
    await websocket.accept()
    relay.registry.add(websocket)
    logger.info("New client connected (%d connected)", len(relay.registry))

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))

            try:
                frame = decode_frame(message)
            except ValueError:
                # JSONDecodeError and UnicodeDecodeError included
                await websocket.send_json(INVALID_JSON_FRAME)
                continue

            if isinstance(frame, dict) and frame.get("type") == MESSAGE_EVENT:
                await relay.relay({"type": MESSAGE_EVENT, "data": frame.get("data")})

    except WebSocketDisconnect:
        pass
    finally:
        relay.registry.discard(websocket)
        logger.info("Client disconnected (%d connected)", len(relay.registry))
