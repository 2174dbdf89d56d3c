"""Connection registry — open sockets and the display names bound to them.

One ConnectionManager per app instance. All mutations are synchronous,
so a registry update never interleaves with another handler on the
event loop. Sends are awaited one socket at a time; a socket that fails
to receive is logged and skipped, the rest still get the frame.
"""

import uuid
from typing import Any, Optional

import structlog
from fastapi import WebSocket, WebSocketDisconnect
from fastapi.encoders import jsonable_encoder

logger = structlog.get_logger()


class ConnectionManager:
    """Owns live connections and the connection id → display name map."""

    def __init__(self):
        self._connections: dict[str, WebSocket] = {}
        self._names: dict[str, str] = {}

    def connect(self, websocket: WebSocket) -> str:
        """Track a new socket. No display name until it logs in."""
        conn_id = uuid.uuid4().hex
        self._connections[conn_id] = websocket
        return conn_id

    def register(self, conn_id: str, name: str) -> None:
        """Bind a display name. Logging in again replaces the old name."""
        if conn_id not in self._connections:
            raise KeyError(f"Unknown connection {conn_id}")
        self._names[conn_id] = name

    def lookup(self, conn_id: str) -> Optional[str]:
        return self._names.get(conn_id)

    def remove(self, conn_id: str) -> Optional[str]:
        """Forget a connection. Returns its display name, if it had one."""
        self._connections.pop(conn_id, None)
        return self._names.pop(conn_id, None)

    @property
    def connection_ids(self) -> list[str]:
        return list(self._connections)

    @property
    def names(self) -> dict[str, str]:
        return dict(self._names)

    async def send(self, conn_id: str, event: str, data: Any) -> None:
        websocket = self._connections.get(conn_id)
        if websocket is None:
            return
        await self._deliver(conn_id, websocket, _frame(event, data))

    async def broadcast(
        self, event: str, data: Any, exclude: Optional[str] = None
    ) -> None:
        """Send to every open connection, optionally skipping one."""
        frame = _frame(event, data)
        for conn_id, websocket in list(self._connections.items()):
            if conn_id == exclude:
                continue
            await self._deliver(conn_id, websocket, frame)

    async def _deliver(self, conn_id: str, websocket: WebSocket, frame: dict) -> None:
        try:
            await websocket.send_json(frame)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            logger.warning(
                "storefront.ws.send_failed",
                connection_id=conn_id,
                event=frame["event"],
                error=str(e),
            )


def _frame(event: str, data: Any) -> dict:
    return jsonable_encoder({"event": event, "data": data})
