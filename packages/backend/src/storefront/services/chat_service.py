"""Chat history persistence."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.db.models import ChatMessage


class MessageService:
    """Reads and appends chat messages. Messages are never edited."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_messages(self) -> list[ChatMessage]:
        result = await self.db.execute(select(ChatMessage).order_by(ChatMessage.id))
        return list(result.scalars().all())

    async def save_message(
        self, user: str, message: str, timestamp: datetime
    ) -> ChatMessage:
        if not user:
            raise ValueError("Chat message requires a user")
        msg = ChatMessage(user=user, message=message, timestamp=timestamp)
        self.db.add(msg)
        await self.db.commit()
        return msg


class ChatHistory:
    """Chat persistence for long-lived connections.

    A WebSocket outlives any request-scoped session, so every call opens
    its own short session from the factory.
    """

    def __init__(self, session_factory):
        self._session_factory = session_factory

    async def load(self) -> list[ChatMessage]:
        async with self._session_factory() as db:
            return await MessageService(db).list_messages()

    async def append(self, user: str, message: str, timestamp: datetime) -> ChatMessage:
        async with self._session_factory() as db:
            return await MessageService(db).save_message(user, message, timestamp)
