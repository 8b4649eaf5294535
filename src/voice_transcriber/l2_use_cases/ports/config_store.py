"""Port: configuration store."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from voice_transcriber.l1_entities.config import AppSettings, Backend, FormatterConfig, TranscriptionConfig


class ConfigStore(Protocol):
    """Owns persisted settings and derives per-backend configs from them."""

    path: Path
    settings: AppSettings

    def load(self) -> None:
        """Re-read the backing file. Raises ConfigParseError on a corrupt file."""
        ...

    def save(self) -> None: ...

    def get_transcription_config(self, backend: Backend | None = None) -> TranscriptionConfig: ...

    def get_formatter_config(self) -> FormatterConfig: ...

    def snapshot_settings(self) -> AppSettings: ...

    def restore_settings(self, settings: AppSettings) -> None: ...
