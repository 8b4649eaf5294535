"""Use case: derive a validated runtime snapshot and reload it with rollback.

A reload is modelled as ``(previous snapshot, store) -> ReloadOutcome``: either
a freshly validated snapshot, or the error plus the previous snapshot with the
store's in-memory settings put back. The file on disk is never rewritten.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from voice_transcriber.l1_entities.config import AppSettings, Backend, FormatterConfig, TranscriptionConfig
from voice_transcriber.l1_entities.errors import MissingCredentialError
from voice_transcriber.l2_use_cases.ports.config_store import ConfigStore

log = logging.getLogger('vt.config')


@dataclass(frozen=True)
class RuntimeSnapshot:
    """Everything the processing pipeline is built from."""

    settings: AppSettings
    transcription: TranscriptionConfig
    formatter: FormatterConfig

    @property
    def language(self) -> str:
        return self.settings.language

    @property
    def benchmark_mode(self) -> bool:
        return self.settings.benchmark_mode

    @property
    def active_personalities(self) -> list[str]:
        return list(self.settings.personalities.active)

    @property
    def selected_personalities(self) -> list[str]:
        return list(self.settings.personalities.selected)

    @property
    def needs_local_warmup(self) -> bool:
        return self.transcription.backend is Backend.LOCAL or self.benchmark_mode


@dataclass(frozen=True)
class ReloadOutcome:
    snapshot: RuntimeSnapshot
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def capture_snapshot(store: ConfigStore) -> RuntimeSnapshot:
    """Derive configs from the store and validate them.

    Raises InvalidBackendUrlError or MissingCredentialError.
    """
    config_path = str(store.path)
    transcription = store.get_transcription_config()
    if not transcription.api_key:
        raise MissingCredentialError(f'{transcription.backend.value} transcription', config_path)

    if store.settings.benchmark_mode:
        for backend in Backend:
            if backend is transcription.backend:
                continue
            # Validates the URL of the secondary backend as well.
            other = store.get_transcription_config(backend)
            if not other.api_key:
                raise MissingCredentialError(f'{backend.value} transcription (benchmark mode)', config_path)

    formatter = store.get_formatter_config()
    if formatter.enabled and not formatter.api_key:
        raise MissingCredentialError(f'{formatter.backend.value} formatter', config_path)

    return RuntimeSnapshot(
        settings=store.snapshot_settings(),
        transcription=transcription,
        formatter=formatter,
    )


def reload_configuration(previous: RuntimeSnapshot, store: ConfigStore) -> ReloadOutcome:
    """Re-read the store and validate; on any failure restore *previous* in memory."""
    try:
        store.load()
        snapshot = capture_snapshot(store)
    except Exception as e:
        log.error('Reload failed, rolling back: %s', e)
        store.restore_settings(previous.settings)
        return ReloadOutcome(snapshot=previous, error=e)
    log.info(
        'Configuration reloaded: transcription=%s formatter=%s',
        snapshot.transcription.backend.value,
        snapshot.formatter.backend.value,
    )
    return ReloadOutcome(snapshot=snapshot)
