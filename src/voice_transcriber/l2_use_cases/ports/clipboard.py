"""Port: system clipboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ClipboardResult:
    error: str = ''

    @property
    def ok(self) -> bool:
        return not self.error


class Clipboard(Protocol):
    def write_text(self, text: str) -> ClipboardResult:
        """Copy *text* to the clipboard. Empty text is rejected."""
        ...
