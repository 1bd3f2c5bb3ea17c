"""Connection registry and broadcast relay for the chat channel."""

import logging
import weakref
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)

MESSAGE_EVENT = "message"


class ConnectionRegistry:
    """Set of live WebSocket connections.

    Holds weak references only; mutated from the event loop.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._connections: "weakref.WeakSet[WebSocket]" = weakref.WeakSet()

    def __len__(self) -> int:
        return len(self._connections)

    def add(self, websocket: WebSocket) -> None:
        """Register a connection."""
        self._connections.add(websocket)

    def discard(self, websocket: WebSocket) -> None:
        """Unregister a connection. Unknown connections are ignored."""
        self._connections.discard(websocket)

    def connections(self) -> list[WebSocket]:
        """Get the connections registered right now."""
        return list(self._connections)


class BroadcastRelay:
    """Fans frames out to every registered connection."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        """Initialize relay.

        Args:
            registry: Connections to deliver to
        """
        self.registry = registry

    async def relay(self, frame: dict[str, Any]) -> int:
        """Send ``frame`` to all registered connections, sender included.

        Connections that fail to receive are dropped from the registry.

        Args:
            frame: JSON frame to send

        Returns:
            Number of connections the frame was sent to
        """
        delivered = 0
        for connection in self.registry.connections():
            try:
                await connection.send_json(frame)
                delivered += 1
            except Exception as e:
                logger.warning("Dropping connection after failed send: %s", e)
                self.registry.discard(connection)
        return delivered
