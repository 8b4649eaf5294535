"""Chat message entity sent to the formatting backend."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

Role = Literal['system', 'user', 'assistant']


class ChatMessage(BaseModel):
    role: Role
    content: str

    @classmethod
    def user(cls, content: str) -> ChatMessage:
        return cls(role='user', content=content)

    def as_dict(self) -> dict[str, str]:
        return {'role': self.role, 'content': self.content}
