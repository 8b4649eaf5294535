"""Port: speech-to-text HTTP client (cloud or local backend)."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol


class SpeechToTextClient(Protocol):
    """Abstract transcription client. Zero framework types leak through."""

    async def transcribe(
        self,
        file_path: Path,
        *,
        model: str,
        language: str,
        prompt: str | None = None,
    ) -> str:
        """Transcribe an audio file. ``prompt`` is omitted from the request when None."""
        ...

    async def preload_model(self, model: str) -> None:
        """Ask the backend to load *model* into memory. Raises on failure."""
        ...
