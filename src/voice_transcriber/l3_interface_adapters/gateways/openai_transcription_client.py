"""Gateway: OpenAI-compatible transcription client — implements SpeechToTextClient port.

Serves both backends: the OpenAI cloud API (default base URL) and local
OpenAI-compatible servers such as Speaches (``base_url`` pointing at ``/v1``).
"""

from __future__ import annotations

from pathlib import Path

import httpx
import openai

PRELOAD_TIMEOUT = 300.0


class OpenAICompatTranscriptionClient:
    """Wraps openai.AsyncOpenAI audio transcriptions; model preload goes over plain httpx."""

    def __init__(self, api_key: str, base_url: str | None = None) -> None:
        self._api_key = api_key
        self._base_url = base_url
        self._client: openai.AsyncOpenAI | None = None

    def _openai(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    async def transcribe(
        self,
        file_path: Path,
        *,
        model: str,
        language: str,
        prompt: str | None = None,
    ) -> str:
        params: dict = {'model': model, 'language': language}
        if prompt is not None:
            params['prompt'] = prompt
        with file_path.open('rb') as audio:
            resp = await self._openai().audio.transcriptions.create(file=audio, **params)
        return resp.text or ''

    def model_url(self, model: str) -> str:
        if not self._base_url:
            raise ValueError('Local backend URL not configured')
        return f'{self._base_url.rstrip("/")}/models/{model}'

    async def preload_model(self, model: str) -> None:
        """POST <base_url>/models/<model>; raises httpx.HTTPStatusError on a non-2xx reply."""
        url = self.model_url(model)
        headers = {'Authorization': f'Bearer {self._api_key}'} if self._api_key else {}
        async with httpx.AsyncClient(timeout=PRELOAD_TIMEOUT) as client:
            resp = await client.post(url, headers=headers)
            resp.raise_for_status()
