"""Realtime channel frames.

Every frame on the wire is {"event": <name>, "data": <payload>}.
Inbound frames parse into a closed set of variants discriminated on
"event"; DisconnectEvent never arrives from a client, the endpoint
builds it when the socket closes.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator


# ─── Client → server ────────────────────────────────────

class ChatPayload(BaseModel):
    """A chat line as sent by a client.

    Extra fields ride along and are relayed as sent. Any timestamp is
    replaced by the server's clock.
    """
    user: Optional[str] = None
    message: str = ""

    model_config = {"extra": "allow"}

    @field_validator("message", mode="before")
    @classmethod
    def _scalar_to_text(cls, value):
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float)):
            return str(value)
        return value


class LoginEvent(BaseModel):
    event: Literal["login"]
    data: str


class ChatMessageEvent(BaseModel):
    event: Literal["message"]
    data: ChatPayload


class ProductListEvent(BaseModel):
    event: Literal["productList"]
    data: Any = None


class DisconnectEvent(BaseModel):
    event: Literal["disconnect"] = "disconnect"


ClientEvent = Annotated[
    Union[LoginEvent, ChatMessageEvent, ProductListEvent],
    Field(discriminator="event"),
]
ChannelEvent = Union[LoginEvent, ChatMessageEvent, ProductListEvent, DisconnectEvent]

client_event_adapter: TypeAdapter[ClientEvent] = TypeAdapter(ClientEvent)


# ─── Server → client ────────────────────────────────────

NEW_USER = "newUser"
GET_MESSAGES = "getMessages"
NEW_MESSAGE = "newMessage"
UPDATED_PRODUCTS = "updatedProducts"
USER_DISCONNECT = "userDisconnect"


class MessageRead(BaseModel):
    user: Optional[str]
    message: str
    timestamp: datetime

    model_config = {"from_attributes": True}
