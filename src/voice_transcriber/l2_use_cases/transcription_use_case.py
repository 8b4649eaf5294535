"""Use case: transcribe an audio file through the cloud or local backend."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from voice_transcriber.l1_entities.config import Backend, BackendEndpoint, TranscriptionConfig
from voice_transcriber.l1_entities.errors import EmptyResultError
from voice_transcriber.l2_use_cases.ports.speech_to_text import SpeechToTextClient
from voice_transcriber.l2_use_cases.utils.log_format import DEFAULT_TRUNCATE_THRESHOLD, truncate_for_log

log = logging.getLogger('vt.transcription')

SpeechClientFactory = Callable[[Backend, BackendEndpoint], SpeechToTextClient]


@dataclass(frozen=True)
class TranscriptionResult:
    """Either success with text or failure with reason."""

    text: str | None = None
    error: str = ''
    backend: Backend | None = None

    @property
    def ok(self) -> bool:
        return self.text is not None


@dataclass(frozen=True)
class WarmupResult:
    error: str = ''
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.error


class TranscriptionService:
    """Holds one lazily-built client per backend and the local preload flag.

    Never raises: every failure comes back as a TranscriptionResult or
    WarmupResult so the caller decides whether to retry or abort.
    """

    def __init__(
        self,
        config: TranscriptionConfig,
        client_factory: SpeechClientFactory,
        *,
        log_truncate_threshold: int = DEFAULT_TRUNCATE_THRESHOLD,
    ) -> None:
        self._config = config
        self._client_factory = client_factory
        self._clients: dict[Backend, SpeechToTextClient] = {}
        self._log_truncate_threshold = log_truncate_threshold
        self.local_model_loaded = False

    @property
    def config(self) -> TranscriptionConfig:
        return self._config

    def _client(self, backend: Backend) -> SpeechToTextClient:
        client = self._clients.get(backend)
        if client is None:
            client = self._client_factory(backend, self._config.endpoint(backend))
            self._clients[backend] = client
        return client

    async def transcribe(self, file_path: str | Path, backend: Backend | None = None) -> TranscriptionResult:
        backend = backend or self._config.backend
        path = Path(file_path)
        if not path.exists():
            err = f'Audio file does not exist: {path}'
            log.error(err)
            return TranscriptionResult(error=err, backend=backend)

        endpoint = self._config.endpoint(backend)
        # Local backend takes no prompt parameter.
        prompt = (self._config.prompt or None) if backend is Backend.CLOUD else None
        log.info('Transcribing %s with %s backend (model=%s)', path.name, backend.value, endpoint.model)

        try:
            client = self._client(backend)
            if prompt is None:
                raw = await client.transcribe(path, model=endpoint.model, language=self._config.language)
            else:
                raw = await client.transcribe(
                    path,
                    model=endpoint.model,
                    language=self._config.language,
                    prompt=prompt,
                )
            text = (raw or '').strip()
            if not text:
                raise EmptyResultError('No transcription text received')
        except EmptyResultError as e:
            err = f'{backend.value} transcription failed: {e}'
            log.warning(err)
            return TranscriptionResult(error=err, backend=backend)
        except Exception as e:
            err = f'{backend.value} transcription failed: {type(e).__name__}: {e}'
            log.error(err, exc_info=True)
            return TranscriptionResult(error=err, backend=backend)

        log.info('Transcription (%s): %s', backend.value, truncate_for_log(text, self._log_truncate_threshold))
        log.debug('Full transcription (%s, %d chars): %s', backend.value, len(text), text)
        return TranscriptionResult(text=text, backend=backend)

    async def warmup(self, force_local: bool = False) -> WarmupResult:
        """Preload the local model. No-op for a cloud primary backend unless *force_local*."""
        if self._config.backend is Backend.CLOUD and not force_local:
            return WarmupResult(skipped=True)
        if self.local_model_loaded:
            return WarmupResult(skipped=True)

        try:
            endpoint = self._config.endpoint(Backend.LOCAL)
        except KeyError:
            return WarmupResult(error='Local backend not configured')
        if not endpoint.url:
            return WarmupResult(error='Local backend URL not configured')

        log.info('Preloading local model %s from %s', endpoint.model, endpoint.url)
        try:
            await self._client(Backend.LOCAL).preload_model(endpoint.model)
        except Exception as e:
            err = f'Failed to preload local model {endpoint.model}: {e}'
            log.debug(err, exc_info=True)
            return WarmupResult(error=err)

        self.local_model_loaded = True
        log.info('Local model %s loaded', endpoint.model)
        return WarmupResult()
