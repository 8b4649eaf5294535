"""Port: chat-completion client used for text formatting."""

from __future__ import annotations

from typing import Protocol

from voice_transcriber.l1_entities.chat_message import ChatMessage


class ChatClient(Protocol):
    """Abstract LLM chat client."""

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Single chat completion. Returns raw text (possibly empty)."""
        ...
