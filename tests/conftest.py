"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from voice_transcriber.l1_entities.chat_message import ChatMessage
from voice_transcriber.l1_entities.config import Backend, BackendEndpoint, FormatterConfig, TranscriptionConfig
from voice_transcriber.l1_entities.tray_state import TrayState
from voice_transcriber.l2_use_cases.ports.audio_recorder import RecordingResult
from voice_transcriber.l2_use_cases.ports.clipboard import ClipboardResult
from voice_transcriber.l3_interface_adapters.gateways.json_config_store import JsonConfigStore

# --- Protocol-conforming Fakes ---


class FakeSpeechClient:
    """Fake speech-to-text client for L2 use case tests."""

    def __init__(self, response: str = 'Hello world') -> None:
        self._response = response
        self._error: Exception | None = None
        self._preload_error: Exception | None = None
        self.transcribe_calls: list[dict] = []
        self.preload_calls: list[str] = []

    async def transcribe(self, file_path: Path, *, model: str, language: str, prompt: str | None = None) -> str:
        self.transcribe_calls.append({'file_path': file_path, 'model': model, 'language': language, 'prompt': prompt})
        if self._error is not None:
            raise self._error
        return self._response

    async def preload_model(self, model: str) -> None:
        self.preload_calls.append(model)
        if self._preload_error is not None:
            raise self._preload_error

    def set_response(self, response: str) -> None:
        self._response = response

    def set_error(self, error: Exception | None) -> None:
        self._error = error

    def set_preload_error(self, error: Exception | None) -> None:
        self._preload_error = error


class FakeSpeechClientFactory:
    """Hands out one FakeSpeechClient per backend and counts constructions."""

    def __init__(self) -> None:
        self.clients = {backend: FakeSpeechClient(f'{backend.value} text') for backend in Backend}
        self.build_calls: list[tuple[Backend, BackendEndpoint]] = []

    def __call__(self, backend: Backend, endpoint: BackendEndpoint) -> FakeSpeechClient:
        self.build_calls.append((backend, endpoint))
        return self.clients[backend]


class FakeChatClient:
    """Fake chat client for formatter tests."""

    def __init__(self, response: str = 'Formatted text.') -> None:
        self._response = response
        self._error: Exception | None = None
        self.complete_calls: list[tuple[str, list[ChatMessage], float, int]] = []
        self._connectivity = (True, '')

    async def complete(self, model: str, messages: list[ChatMessage], *, temperature: float, max_tokens: int) -> str:
        self.complete_calls.append((model, list(messages), temperature, max_tokens))
        if self._error is not None:
            raise self._error
        return self._response

    def check_connectivity(self) -> tuple[bool, str]:
        return self._connectivity

    def set_response(self, response: str) -> None:
        self._response = response

    def set_error(self, error: Exception | None) -> None:
        self._error = error


class FakeClipboard:
    def __init__(self) -> None:
        self.writes: list[str] = []
        self._error = ''

    def write_text(self, text: str) -> ClipboardResult:
        if self._error:
            return ClipboardResult(error=self._error)
        self.writes.append(text)
        return ClipboardResult()

    def set_error(self, error: str) -> None:
        self._error = error

    @property
    def last(self) -> str | None:
        return self.writes[-1] if self.writes else None


class FakeRecorder:
    """Writes a placeholder WAV file on stop so downstream steps see a real path."""

    def __init__(self, directory: Path) -> None:
        self._directory = directory
        self._recording = False
        self.start_error = ''
        self.stop_error = ''
        self.start_calls = 0
        self.stop_calls = 0
        self.stop_threads: list[int] = []

    def is_recording(self) -> bool:
        return self._recording

    def start_recording(self) -> RecordingResult:
        self.start_calls += 1
        if self.start_error:
            return RecordingResult(error=self.start_error)
        self._recording = True
        return RecordingResult(file_path=self._directory / 'pending.wav')

    def stop_recording(self) -> RecordingResult:
        self.stop_calls += 1
        self.stop_threads.append(threading.get_ident())
        self._recording = False
        if self.stop_error:
            return RecordingResult(error=self.stop_error)
        path = self._directory / f'recording-{self.stop_calls}.wav'
        path.write_bytes(b'RIFF')
        return RecordingResult(file_path=path)


class FakeTray:
    def __init__(self) -> None:
        self.state = TrayState.IDLE
        self.states: list[TrayState] = []
        self.callbacks: dict[str, object] = {}
        self.personalities: list[tuple[str, str]] = []
        self.active: list[str] = []

    def set_state(self, state: TrayState) -> None:
        self.state = state
        self.states.append(state)

    def get_state(self) -> TrayState:
        return self.state

    def on_recording_start(self, callback) -> None:
        self.callbacks['start'] = callback

    def on_recording_stop(self, callback) -> None:
        self.callbacks['stop'] = callback

    def on_toggle_personality(self, callback) -> None:
        self.callbacks['toggle'] = callback

    def on_open_config(self, callback) -> None:
        self.callbacks['open_config'] = callback

    def on_reload(self, callback) -> None:
        self.callbacks['reload'] = callback

    def on_quit(self, callback) -> None:
        self.callbacks['quit'] = callback

    def set_personalities(self, selected: list[tuple[str, str]], active: list[str]) -> None:
        self.personalities = list(selected)
        self.active = list(active)


# --- Helpers ---


def write_config(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data), encoding='utf-8')
    return path


def make_transcription_config(
    backend: Backend = Backend.CLOUD,
    language: str = 'en',
    prompt: str = 'Transcribe exactly.',
    local_url: str = 'http://localhost:8000/v1',
) -> TranscriptionConfig:
    cloud = BackendEndpoint(api_key='sk-cloud', model='whisper-1')
    local = BackendEndpoint(api_key='local-key', model='Systran/faster-whisper-base', url=local_url)
    active = cloud if backend is Backend.CLOUD else local
    return TranscriptionConfig(
        backend=backend,
        api_key=active.api_key,
        model=active.model,
        url=active.url,
        language=language,
        prompt=prompt,
        endpoints={Backend.CLOUD: cloud, Backend.LOCAL: local},
    )


def make_formatter_config(backend: Backend = Backend.CLOUD, **overrides) -> FormatterConfig:
    fields = {
        'backend': backend,
        'api_key': 'sk-format',
        'model': 'gpt-4o-mini' if backend is Backend.CLOUD else 'llama3.2',
        'url': None if backend is Backend.CLOUD else 'http://localhost:11434',
        'language': 'en',
        'prompt': 'Fix grammar:',
    }
    fields.update(overrides)
    return FormatterConfig(**fields)


# --- Standard Fixtures ---


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    return tmp_path / 'config' / 'config.json'


@pytest.fixture
def valid_config(config_path: Path) -> Path:
    return write_config(
        config_path,
        {
            'transcription': {'backend': 'cloud', 'cloud': {'api_key': 'sk-cloud'}},
            'formatter': {'backend': 'cloud', 'cloud': {'api_key': 'sk-format'}},
        },
    )


@pytest.fixture
def config_store(valid_config: Path) -> JsonConfigStore:
    store = JsonConfigStore(valid_config)
    store.load()
    return store


@pytest.fixture
def audio_file(tmp_path: Path) -> Path:
    p = tmp_path / 'recording.wav'
    p.write_bytes(b'RIFF0000WAVEfmt ')
    return p


@pytest.fixture
def fake_speech_factory() -> FakeSpeechClientFactory:
    return FakeSpeechClientFactory()


@pytest.fixture
def fake_chat() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture
def fake_clipboard() -> FakeClipboard:
    return FakeClipboard()


@pytest.fixture
def fake_recorder(tmp_path: Path) -> FakeRecorder:
    d = tmp_path / 'recordings'
    d.mkdir()
    return FakeRecorder(d)


@pytest.fixture
def fake_tray() -> FakeTray:
    return FakeTray()
