"""Port: external audio capture process."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class RecordingResult:
    file_path: Path | None = None
    error: str = ''

    @property
    def ok(self) -> bool:
        return not self.error


class AudioRecorder(Protocol):
    """Starts and stops a recording that lands in an audio file."""

    def start_recording(self) -> RecordingResult: ...

    def stop_recording(self) -> RecordingResult: ...

    def is_recording(self) -> bool: ...
