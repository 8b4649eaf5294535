"""Port: tray icon / menu surface."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

from voice_transcriber.l1_entities.tray_state import TrayState


class Tray(Protocol):
    """Reports state to the user and routes menu clicks back to the controller."""

    def set_state(self, state: TrayState) -> None: ...

    def get_state(self) -> TrayState: ...

    def on_recording_start(self, callback: Callable[[], None]) -> None: ...

    def on_recording_stop(self, callback: Callable[[], None]) -> None: ...

    def on_toggle_personality(self, callback: Callable[[str], None]) -> None: ...

    def on_open_config(self, callback: Callable[[], None]) -> None: ...

    def on_reload(self, callback: Callable[[], None]) -> None: ...

    def on_quit(self, callback: Callable[[], None]) -> None: ...

    def set_personalities(self, selected: list[tuple[str, str]], active: list[str]) -> None:
        """Refresh the personality submenu: (id, label) pairs and the active ids."""
        ...
