"""WebSocket endpoint — the bidirectional chat/catalog channel.

Each client connects to /ws and exchanges {"event", "data"} text frames.
Binary frames are not part of the protocol; they are logged and skipped.
The handler reads frames until the client goes away, then feeds a
DisconnectEvent through the same dispatcher.
"""

import structlog
from fastapi import APIRouter, WebSocket

from storefront.middleware.request_id import bind_request_id
from storefront.realtime.channel import ChatChannel
from storefront.schemas.chat import DisconnectEvent

logger = structlog.get_logger()
router = APIRouter()


@router.websocket("/ws")
async def chat_websocket(websocket: WebSocket):
    channel: ChatChannel = websocket.app.state.chat_channel

    conn_id = channel.connections.connect(websocket)
    bind_request_id(websocket.headers, connection_id=conn_id)
    await websocket.accept()
    logger.info("storefront.ws.connected")

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
            if message.get("text") is not None:
                await channel.receive(conn_id, message["text"])
            else:
                logger.warning("storefront.chat.bad_frame", reason="binary frame")
    finally:
        await channel.dispatch(conn_id, DisconnectEvent())
        logger.info("storefront.ws.disconnected")
