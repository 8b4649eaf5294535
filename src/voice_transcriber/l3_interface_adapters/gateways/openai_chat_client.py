"""Gateway: OpenAI-compatible chat client — implements ChatClient port.

Works with any OpenAI-compatible API: OpenAI, Groq, Together, vLLM, etc.
"""

from __future__ import annotations

import openai

from voice_transcriber.l1_entities.chat_message import ChatMessage


class OpenAICompatChatClient:
    """Wraps openai.AsyncOpenAI chat completions."""

    def __init__(self, api_key: str | None = None, base_url: str = 'https://api.openai.com/v1') -> None:
        self._api_key = api_key
        self._base_url = base_url

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        resp = await client.chat.completions.create(
            model=model,
            messages=[m.as_dict() for m in messages],  # ty: ignore[invalid-argument-type] -- dict satisfies ChatCompletionMessageParam at runtime
            temperature=temperature,
            max_completion_tokens=max_tokens,
        )
        if not resp.choices:
            return ''
        return resp.choices[0].message.content or ''

    def check_connectivity(self) -> tuple[bool, str]:
        try:
            client = openai.OpenAI(api_key=self._api_key, base_url=self._base_url)
            client.models.list()
            return True, ''
        except openai.AuthenticationError as e:
            return False, f'Authentication failed: {e}'
        except Exception as e:
            return False, f'Cannot connect to OpenAI-compatible API: {e}'
