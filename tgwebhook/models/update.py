from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class Chat(_Frozen):
    id: int
    type: str | None = None


class User(_Frozen):
    id: int | None = None
    username: str | None = None
    first_name: str | None = None


class Message(_Frozen):
    message_id: int | None = None
    chat: Chat
    from_user: User | None = Field(None, alias="from")
    text: str | None = None


class Update(_Frozen):
    """One inbound Telegram update.

    Only plain messages are modelled; other event kinds are kept as raw
    payloads so that they decode without being dispatched.
    """

    update_id: int | None = None
    message: Message | None = None
    edited_message: dict[str, Any] | None = None
    channel_post: dict[str, Any] | None = None
    callback_query: dict[str, Any] | None = None

    @property
    def chat_id(self) -> int | None:
        return self.message.chat.id if self.message else None

    @property
    def user_id(self) -> int | None:
        if self.message and self.message.from_user:
            return self.message.from_user.id
        return None

    @property
    def username(self) -> str | None:
        if self.message and self.message.from_user:
            return self.message.from_user.username
        return None

    @property
    def text(self) -> str | None:
        return self.message.text if self.message else None
