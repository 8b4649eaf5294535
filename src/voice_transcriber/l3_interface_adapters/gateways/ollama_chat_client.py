"""Gateway: Ollama chat client — implements ChatClient port for the local formatter."""

from __future__ import annotations

import ollama as ollama_sync

from voice_transcriber.l1_entities.chat_message import ChatMessage


class OllamaChatClient:
    """Wraps ollama.AsyncClient; the API key, when set, goes out as a bearer header."""

    def __init__(self, host: str = 'http://localhost:11434', api_key: str = '') -> None:
        self._host = host
        self._headers = {'Authorization': f'Bearer {api_key}'} if api_key else None

    async def complete(
        self,
        model: str,
        messages: list[ChatMessage],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str:
        client = ollama_sync.AsyncClient(host=self._host, headers=self._headers)
        resp = await client.chat(
            model=model,
            messages=[m.as_dict() for m in messages],
            options={'temperature': temperature, 'num_predict': max_tokens},
        )
        return resp.message.content or ''

    def check_connectivity(self) -> tuple[bool, str]:
        try:
            client = ollama_sync.Client(host=self._host, headers=self._headers)
            client.list()
            return True, ''
        except Exception as e:
            return False, f'Cannot connect to Ollama: {e}'
