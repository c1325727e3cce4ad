from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from zkserver.domain.messages import Message, Reply


class MessageEnvelope(BaseModel):
    what: str = Field(min_length=1)
    data: Any = None

    model_config = ConfigDict(frozen=True)

    def to_message(self) -> Message:
        return Message(what=self.what, data=self.data)


class ServerResponse(BaseModel):
    what: str
    content: Any = None

    @classmethod
    def from_reply(cls, reply: Reply) -> ServerResponse:
        return cls(what=reply.what, content=reply.content)
