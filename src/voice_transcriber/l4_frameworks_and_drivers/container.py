"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from voice_transcriber.l1_entities.config import Backend, BackendEndpoint, FormatterConfig
from voice_transcriber.l2_use_cases.benchmark_use_case import BenchmarkComparator
from voice_transcriber.l2_use_cases.format_text_use_case import FormattingService
from voice_transcriber.l2_use_cases.ports.audio_recorder import AudioRecorder
from voice_transcriber.l2_use_cases.ports.chat_client import ChatClient
from voice_transcriber.l2_use_cases.ports.clipboard import Clipboard
from voice_transcriber.l2_use_cases.ports.speech_to_text import SpeechToTextClient
from voice_transcriber.l2_use_cases.ports.tray import Tray
from voice_transcriber.l2_use_cases.process_audio_use_case import AudioProcessor
from voice_transcriber.l2_use_cases.reload_use_case import RuntimeSnapshot
from voice_transcriber.l2_use_cases.transcription_use_case import TranscriptionService
from voice_transcriber.l2_use_cases.utils.personality_composer import PersonalityComposer
from voice_transcriber.l3_interface_adapters.controllers.app_controller import AppController
from voice_transcriber.l3_interface_adapters.gateways.arecord_recorder import ArecordRecorder
from voice_transcriber.l3_interface_adapters.gateways.json_config_store import JsonConfigStore
from voice_transcriber.l3_interface_adapters.gateways.ollama_chat_client import OllamaChatClient
from voice_transcriber.l3_interface_adapters.gateways.openai_chat_client import OpenAICompatChatClient
from voice_transcriber.l3_interface_adapters.gateways.openai_transcription_client import (
    OpenAICompatTranscriptionClient,
)
from voice_transcriber.l3_interface_adapters.gateways.pyperclip_clipboard import PyperclipClipboard


def build_speech_client(backend: Backend, endpoint: BackendEndpoint) -> SpeechToTextClient:
    if backend is Backend.CLOUD:
        return OpenAICompatTranscriptionClient(api_key=endpoint.api_key)
    return OpenAICompatTranscriptionClient(api_key=endpoint.api_key, base_url=endpoint.url)


def build_chat_client(config: FormatterConfig) -> ChatClient:
    if config.backend is Backend.CLOUD:
        return OpenAICompatChatClient(api_key=config.api_key)
    return OllamaChatClient(host=config.url or 'http://localhost:11434', api_key=config.api_key)


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(
        self,
        tray: Tray,
        config_path: Path | None = None,
        recorder: AudioRecorder | None = None,
        clipboard: Clipboard | None = None,
        open_file=None,
    ) -> None:
        self.config_store = JsonConfigStore(config_path)
        self.recorder: AudioRecorder = recorder or ArecordRecorder()
        self.clipboard: Clipboard = clipboard or PyperclipClipboard()
        self.tray = tray

        self.controller = AppController(
            config_store=self.config_store,
            recorder=self.recorder,
            tray=self.tray,
            pipeline_factory=self.build_pipeline,
            open_file=open_file,
        )

    def build_pipeline(self, snapshot: RuntimeSnapshot) -> AudioProcessor:
        """Fresh orchestrators from an immutable snapshot; called on startup and every reload."""
        transcription = TranscriptionService(
            snapshot.transcription,
            build_speech_client,
            log_truncate_threshold=snapshot.settings.log_truncate_threshold,
        )
        formatting = FormattingService(snapshot.formatter, build_chat_client(snapshot.formatter))
        return AudioProcessor(
            transcription=transcription,
            formatting=formatting,
            composer=PersonalityComposer.from_config(snapshot.formatter),
            clipboard=self.clipboard,
            active_personalities=snapshot.active_personalities,
            benchmark=BenchmarkComparator(transcription, self.clipboard),
        )
