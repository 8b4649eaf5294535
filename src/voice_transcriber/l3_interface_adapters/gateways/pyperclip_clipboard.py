"""Gateway: system clipboard via pyperclip — implements Clipboard port."""

from __future__ import annotations

import pyperclip

from voice_transcriber.l2_use_cases.ports.clipboard import ClipboardResult


class PyperclipClipboard:
    def write_text(self, text: str) -> ClipboardResult:
        if not text or not text.strip():
            return ClipboardResult(error='Text cannot be empty')
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            return ClipboardResult(error=f'Failed to write to clipboard: {e}')
        return ClipboardResult()
