"""System tray icon and menu built on pystray — implements the Tray port."""

from __future__ import annotations

import logging
from collections.abc import Callable

from PIL import Image, ImageDraw

from voice_transcriber.l1_entities.tray_state import TrayState

log = logging.getLogger('vt.tray')

ICON_SIZE = 64
STATE_COLOURS = {
    TrayState.IDLE: (90, 90, 90, 255),
    TrayState.RECORDING: (220, 40, 40, 255),
    TrayState.PROCESSING: (240, 170, 20, 255),
}
STATE_TITLES = {
    TrayState.IDLE: 'Voice Transcriber: ready',
    TrayState.RECORDING: 'Voice Transcriber: recording',
    TrayState.PROCESSING: 'Voice Transcriber: processing',
}


def make_icon(state: TrayState) -> Image.Image:
    """Microphone-ish dot coloured by state."""
    image = Image.new('RGBA', (ICON_SIZE, ICON_SIZE), (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)
    colour = STATE_COLOURS[state]
    draw.ellipse((8, 8, ICON_SIZE - 8, ICON_SIZE - 8), fill=colour)
    draw.rounded_rectangle((26, 16, 38, 40), radius=6, fill=(255, 255, 255, 255))
    draw.line((32, 40, 32, 48), fill=(255, 255, 255, 255), width=3)
    return image


class PystrayTray:
    """Holds tray state and routes menu clicks to registered callbacks.

    pystray is imported only when the icon is actually shown, so the state and
    callback plumbing works without a display.
    """

    def __init__(self) -> None:
        self._state = TrayState.IDLE
        self._icon = None
        self._callbacks: dict[str, Callable[[], None]] = {}
        self._toggle_callback: Callable[[str], None] | None = None
        self._personalities: list[tuple[str, str]] = []
        self._active: set[str] = set()

    # --- Tray port ---

    def set_state(self, state: TrayState) -> None:
        self._state = state
        if self._icon is not None:
            self._icon.icon = make_icon(state)
            self._icon.title = STATE_TITLES[state]
            self._icon.update_menu()

    def get_state(self) -> TrayState:
        return self._state

    def on_recording_start(self, callback: Callable[[], None]) -> None:
        self._callbacks['start'] = callback

    def on_recording_stop(self, callback: Callable[[], None]) -> None:
        self._callbacks['stop'] = callback

    def on_open_config(self, callback: Callable[[], None]) -> None:
        self._callbacks['open_config'] = callback

    def on_reload(self, callback: Callable[[], None]) -> None:
        self._callbacks['reload'] = callback

    def on_quit(self, callback: Callable[[], None]) -> None:
        self._callbacks['quit'] = callback

    def on_toggle_personality(self, callback: Callable[[str], None]) -> None:
        self._toggle_callback = callback

    def set_personalities(self, selected: list[tuple[str, str]], active: list[str]) -> None:
        self._personalities = list(selected)
        self._active = set(active)
        if self._icon is not None:
            self._icon.update_menu()

    # --- click routing ---

    def fire(self, name: str) -> None:
        callback = self._callbacks.get(name)
        if callback is None:
            log.debug('No callback registered for %s', name)
            return
        callback()

    def fire_toggle(self, personality_id: str) -> None:
        if self._toggle_callback is not None:
            self._toggle_callback(personality_id)

    def is_active(self, personality_id: str) -> bool:
        return personality_id in self._active

    # --- pystray ---

    def _action(self, name: str) -> Callable[[], None]:
        return lambda: self.fire(name)

    def _toggle_action(self, personality_id: str) -> Callable[[], None]:
        return lambda: self.fire_toggle(personality_id)

    def _checked(self, personality_id: str) -> Callable[[object], bool]:
        return lambda item: self.is_active(personality_id)

    def _build_menu(self):
        import pystray  # noqa: PLC0415 -- deferred: needs a display backend

        def personality_items():
            for pid, label in self._personalities:
                yield pystray.MenuItem(label, self._toggle_action(pid), checked=self._checked(pid))

        return pystray.Menu(
            pystray.MenuItem(
                'Start Recording',
                self._action('start'),
                enabled=lambda item: self._state is TrayState.IDLE,
                default=True,
            ),
            pystray.MenuItem(
                'Stop Recording',
                self._action('stop'),
                enabled=lambda item: self._state is TrayState.RECORDING,
            ),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem('Personalities', pystray.Menu(personality_items)),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem('Open Config', self._action('open_config')),
            pystray.MenuItem(
                'Reload Config',
                self._action('reload'),
                enabled=lambda item: self._state is TrayState.IDLE,
            ),
            pystray.MenuItem('Quit', self._action('quit')),
        )

    def run(self, setup: Callable[[object], None] | None = None) -> None:
        """Show the icon and block in the tray's event loop until stop()."""
        import pystray  # noqa: PLC0415 -- deferred: needs a display backend

        self._icon = pystray.Icon(
            'voice-transcriber',
            icon=make_icon(self._state),
            title=STATE_TITLES[self._state],
            menu=self._build_menu(),
        )
        self._icon.run(setup=setup)

    def stop(self) -> None:
        if self._icon is not None:
            self._icon.stop()
