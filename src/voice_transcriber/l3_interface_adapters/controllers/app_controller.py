"""AppController — recording state machine, processing dispatch and config hot reload."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path

from voice_transcriber.l1_entities.errors import ConfigError
from voice_transcriber.l1_entities.personality import resolve_personality
from voice_transcriber.l1_entities.tray_state import TrayState
from voice_transcriber.l2_use_cases.ports.audio_recorder import AudioRecorder, RecordingResult
from voice_transcriber.l2_use_cases.ports.config_store import ConfigStore
from voice_transcriber.l2_use_cases.ports.tray import Tray
from voice_transcriber.l2_use_cases.process_audio_use_case import AudioProcessor
from voice_transcriber.l2_use_cases.reload_use_case import RuntimeSnapshot, capture_snapshot, reload_configuration

log = logging.getLogger('vt.controller')

PipelineFactory = Callable[[RuntimeSnapshot], AudioProcessor]


class AppController:
    """Central orchestrator between the tray, the recorder and the processing pipeline.

    One recording/processing cycle at a time: IDLE → RECORDING → PROCESSING → IDLE
    (or RECORDING → IDLE when capture fails). Requests that arrive while a cycle
    is in flight are dropped, not queued. The pipeline is rebuilt from an
    immutable RuntimeSnapshot on startup, reload and personality toggles; it
    never observes live changes to the config store.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        recorder: AudioRecorder,
        tray: Tray,
        pipeline_factory: PipelineFactory,
        open_file: Callable[[Path], object] | None = None,
    ) -> None:
        self._store = config_store
        self._recorder = recorder
        self._tray = tray
        self._pipeline_factory = pipeline_factory
        self._open_file = open_file

        self.state = TrayState.IDLE
        self.snapshot: RuntimeSnapshot | None = None
        self.processor: AudioProcessor | None = None
        self._reloading = False

    # --- lifecycle ---

    async def initialize(self) -> None:
        """Load config, validate, build the pipeline. Raises ConfigError on bad config."""
        self._store.load()
        snapshot = capture_snapshot(self._store)
        await self._build_pipeline(snapshot)
        tc, fc = snapshot.transcription, snapshot.formatter
        log.info('Transcription backend: %s (model %s)', tc.backend.value, tc.model)
        if fc.enabled:
            log.info('Formatter backend: %s (model %s)', fc.backend.value, fc.model)
        if snapshot.benchmark_mode:
            log.info('Benchmark mode enabled')

    async def shutdown(self) -> None:
        if self._recorder.is_recording():
            result = await asyncio.to_thread(self._recorder.stop_recording)
            if result.ok and result.file_path is not None:
                log.info('Discarded in-progress recording %s', result.file_path)
        self._set_state(TrayState.IDLE)
        log.info('Shutdown complete')

    async def _build_pipeline(self, snapshot: RuntimeSnapshot, *, warmup: bool = True) -> None:
        processor = self._pipeline_factory(snapshot)
        self.snapshot = snapshot
        self.processor = processor
        self._refresh_tray_personalities()
        if warmup and snapshot.needs_local_warmup:
            result = await processor.transcription.warmup(force_local=snapshot.benchmark_mode)
            if not result.ok:
                log.warning('Failed to preload model: %s', result.error)
                log.warning('First transcription may be slower')

    def _set_state(self, state: TrayState) -> None:
        self.state = state
        self._tray.set_state(state)

    # --- recording cycle ---

    async def start_recording(self) -> None:
        if self.state is not TrayState.IDLE or self._reloading:
            log.debug('Start ignored in state %s', self.state.value)
            return

        log.info('Starting recording...')
        self._set_state(TrayState.RECORDING)
        try:
            result = self._recorder.start_recording()
        except Exception as e:
            result = RecordingResult(error=f'{type(e).__name__}: {e}')
        if not result.ok:
            log.error('Recording failed: %s', result.error)
            self._set_state(TrayState.IDLE)

    async def stop_recording(self) -> None:
        if self.state is not TrayState.RECORDING:
            log.debug('Stop ignored in state %s', self.state.value)
            return

        log.info('Stopping recording...')
        self._set_state(TrayState.PROCESSING)
        try:
            stop = await asyncio.to_thread(self._recorder.stop_recording)
            if not stop.ok or stop.file_path is None:
                log.error('Stop recording failed: %s', stop.error or 'no audio file')
                return
            await self.process(stop.file_path)
        except Exception:
            log.exception('Processing error')
        finally:
            self._set_state(TrayState.IDLE)

    async def process(self, file_path: Path) -> None:
        if self.processor is None or self.snapshot is None:
            raise RuntimeError('Controller not initialized')
        if self.snapshot.benchmark_mode:
            await self.processor.process_benchmark(file_path)
        else:
            await self.processor.process_audio_file(file_path)

    # --- configuration ---

    def can_reload(self) -> bool:
        return (
            not self._reloading
            and not self._recorder.is_recording()
            and self.state is TrayState.IDLE
            and self._tray.get_state() is TrayState.IDLE
        )

    async def reload(self) -> bool:
        """Re-read the config file. Returns False when rejected because a cycle is in flight.

        On any failure the previous snapshot is rebuilt in memory and the error re-raised.
        """
        if not self.can_reload():
            log.warning('Cannot reload configuration while recording or processing')
            return False
        if self.snapshot is None:
            raise RuntimeError('Controller not initialized')

        previous = self.snapshot
        self._reloading = True
        try:
            outcome = reload_configuration(previous, self._store)
            if outcome.ok:
                try:
                    await self._build_pipeline(outcome.snapshot)
                except Exception as e:
                    log.error('Rebuilding pipeline failed, rolling back: %s', e)
                    self._store.restore_settings(previous.settings)
                    await self._build_pipeline(previous)
                    raise
                log.info('Configuration reloaded successfully')
                return True

            await self._build_pipeline(outcome.snapshot)
            raise outcome.error or RuntimeError('Reload failed')
        finally:
            self._reloading = False

    async def toggle_personality(self, personality_id: str) -> None:
        """Switch a personality on or off for formatting and persist the choice."""
        if not self.can_reload():
            log.warning('Cannot change personalities while recording or processing')
            return
        previous = self._store.snapshot_settings()
        active = self._store.settings.personalities.active
        if personality_id in active:
            active.remove(personality_id)
            log.info('Personality %s disabled', personality_id)
        else:
            active.append(personality_id)
            log.info('Personality %s enabled', personality_id)

        try:
            snapshot = capture_snapshot(self._store)
        except ConfigError as e:
            log.error('Personality change rejected: %s', e)
            self._store.restore_settings(previous)
            self._refresh_tray_personalities()
            return
        previous_snapshot = self.snapshot
        try:
            await self._build_pipeline(snapshot, warmup=False)
            self._store.save()
        except Exception as e:
            log.error('Personality change not applied: %s: %s', type(e).__name__, e)
            self._store.restore_settings(previous)
            if previous_snapshot is not None:
                await self._build_pipeline(previous_snapshot, warmup=False)
            else:
                self._refresh_tray_personalities()

    def open_config(self) -> None:
        if self._open_file is None:
            log.info('Config file: %s', self._store.path)
            return
        if not self._store.path.exists():
            self._store.save()
        self._open_file(self._store.path)

    def _refresh_tray_personalities(self) -> None:
        if self.snapshot is None:
            return
        fc = self.snapshot.formatter
        items: list[tuple[str, str]] = []
        for pid in self.snapshot.selected_personalities:
            personality = resolve_personality(pid, fc.builtin_personalities, fc.custom_personalities)
            if personality is not None:
                items.append((pid, personality.name))
        self._tray.set_personalities(items, self.snapshot.active_personalities)
