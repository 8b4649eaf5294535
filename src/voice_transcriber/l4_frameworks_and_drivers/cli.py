"""CLI entry point for voice-transcriber."""

from __future__ import annotations

import signal
import sys
from pathlib import Path

import click

from voice_transcriber import __version__


def _preflight_formatter(container) -> None:
    """Warn early when formatting is enabled but its backend is unreachable."""
    from voice_transcriber.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_chat_client,
    )

    snapshot = container.controller.snapshot
    if snapshot is None or not snapshot.formatter.enabled:
        return
    ok, err = build_chat_client(snapshot.formatter).check_connectivity()
    if not ok:
        click.echo(f'Warning: formatter backend unreachable: {err}', err=True)


def _wire_tray(tray, controller, runner) -> None:
    tray.on_recording_start(lambda: runner.submit(controller.start_recording()))
    tray.on_recording_stop(lambda: runner.submit(controller.stop_recording()))
    tray.on_toggle_personality(lambda pid: runner.submit(controller.toggle_personality(pid)))
    tray.on_open_config(controller.open_config)
    tray.on_reload(lambda: runner.submit(controller.reload()))
    tray.on_quit(tray.stop)


@click.command()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to the JSON config file (default: per-user config directory).',
)
@click.option('-d', '--debug', is_flag=True, default=False, help='Verbose logging.')
@click.version_option(version=__version__)
def cli(config_path, debug):
    """voice-transcriber -- record from the tray, transcribe, format, paste."""
    from voice_transcriber.l1_entities.errors import ConfigError  # noqa: PLC0415 -- deferred: not needed for --help
    from voice_transcriber.l3_interface_adapters.gateways.paths import (  # noqa: PLC0415 -- deferred: not needed for --help
        LOG_DIR,
    )
    from voice_transcriber.l4_frameworks_and_drivers.async_runner import (  # noqa: PLC0415 -- deferred: not needed for --help
        AsyncRunner,
    )
    from voice_transcriber.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: openai/ollama stack not loaded on --help
        DependencyContainer,
    )
    from voice_transcriber.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_logging,
    )
    from voice_transcriber.l4_frameworks_and_drivers.tray import (  # noqa: PLC0415 -- deferred: Pillow not loaded on --help
        PystrayTray,
    )

    setup_logging(debug=debug, log_dir=LOG_DIR)

    tray = PystrayTray()
    container = DependencyContainer(
        tray,
        config_path=Path(config_path) if config_path else None,
        open_file=lambda path: click.launch(str(path)),
    )
    store = container.config_store
    if not store.exists():
        store.save()
        click.echo(f'Created default config at {store.path}', err=True)

    runner = AsyncRunner()
    runner.start()
    try:
        runner.run(container.controller.initialize())
    except ConfigError as e:
        click.echo(f'Failed to start: {e}', err=True)
        runner.stop()
        sys.exit(1)

    _preflight_formatter(container)
    _wire_tray(tray, container.controller, runner)
    signal.signal(signal.SIGINT, lambda signum, frame: tray.stop())
    signal.signal(signal.SIGTERM, lambda signum, frame: tray.stop())

    def _show(icon) -> None:
        icon.visible = True

    click.echo('Voice Transcriber running in the system tray. Press Ctrl+C to exit.', err=True)
    try:
        tray.run(setup=_show)
    finally:
        runner.run(container.controller.shutdown(), timeout=10.0)
        runner.stop()
