"""Chat channel — one dispatcher for every realtime event.

Handlers:
- login: bind the name, announce it to everyone else, send the history
  to the caller only
- message: stamp server time, broadcast to everyone (sender included),
  then persist
- productList: relay as updatedProducts so open pages refetch the catalog
- disconnect: drop the connection; announce it only if it had logged in

Chat is delivered first and persisted second. A failed save is logged
and never reported to clients; the broadcast is not undone.
"""

from datetime import datetime, timezone
from typing import Any

import structlog
from pydantic import ValidationError

from storefront.realtime.connections import ConnectionManager
from storefront.schemas.chat import (
    GET_MESSAGES,
    NEW_MESSAGE,
    NEW_USER,
    UPDATED_PRODUCTS,
    USER_DISCONNECT,
    ChannelEvent,
    ChatMessageEvent,
    ChatPayload,
    DisconnectEvent,
    LoginEvent,
    MessageRead,
    ProductListEvent,
    client_event_adapter,
)
from storefront.services.chat_service import ChatHistory

logger = structlog.get_logger()


class ChatChannel:
    """Routes channel events to handlers. One instance per app."""

    def __init__(self, connections: ConnectionManager, history: ChatHistory):
        self.connections = connections
        self.history = history

    async def receive(self, conn_id: str, raw: str) -> None:
        """Parse one inbound text frame and dispatch it. Bad frames are dropped."""
        try:
            event = client_event_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(
                "storefront.chat.bad_frame",
                connection_id=conn_id,
                errors=e.error_count(),
            )
            return
        await self.dispatch(conn_id, event)

    async def dispatch(self, conn_id: str, event: ChannelEvent) -> None:
        if isinstance(event, LoginEvent):
            await self.on_login(conn_id, event.data)
        elif isinstance(event, ChatMessageEvent):
            await self.on_message(conn_id, event.data)
        elif isinstance(event, ProductListEvent):
            await self.on_product_list(event.data)
        elif isinstance(event, DisconnectEvent):
            await self.on_disconnect(conn_id)
        else:
            raise TypeError(f"Unhandled channel event: {event!r}")

    async def on_login(self, conn_id: str, name: str) -> None:
        logger.info("storefront.chat.login", connection_id=conn_id, user=name)
        self.connections.register(conn_id, name)
        await self.connections.broadcast(NEW_USER, name, exclude=conn_id)

        messages = await self._load_history()
        if messages is not None:
            await self.connections.send(conn_id, GET_MESSAGES, messages)

    async def on_message(self, conn_id: str, payload: ChatPayload) -> dict:
        """Relay the client's payload as sent, with the server's timestamp."""
        frame = {**payload.model_dump(), "timestamp": datetime.now(timezone.utc)}
        logger.info(
            "storefront.chat.message",
            connection_id=conn_id,
            user=payload.user,
        )
        await self.connections.broadcast(NEW_MESSAGE, frame)
        await self._persist(
            MessageRead(user=payload.user, message=payload.message, timestamp=frame["timestamp"])
        )
        return frame

    async def on_product_list(self, data: Any) -> None:
        await self.connections.broadcast(UPDATED_PRODUCTS, data)

    async def on_disconnect(self, conn_id: str) -> None:
        name = self.connections.remove(conn_id)
        logger.info("storefront.chat.disconnect", connection_id=conn_id, user=name)
        if name:
            await self.connections.broadcast(USER_DISCONNECT, name)

    async def _load_history(self) -> list[dict] | None:
        try:
            rows = await self.history.load()
        except Exception as e:
            logger.error("storefront.chat.history_failed", error=str(e), exc_info=e)
            return None
        return [MessageRead.model_validate(row).model_dump() for row in rows]

    async def _persist(self, stamped: MessageRead) -> None:
        if not stamped.user:
            logger.error("storefront.chat.missing_user", message=stamped.message)
            return
        try:
            await self.history.append(stamped.user, stamped.message, stamped.timestamp)
        except Exception as e:
            logger.error(
                "storefront.chat.save_failed",
                user=stamped.user,
                error=str(e),
                exc_info=e,
            )
