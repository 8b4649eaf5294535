"""Tests for TranscriptionService — uses FakeSpeechClientFactory, NOT @patch("openai...")."""

from __future__ import annotations

import pytest

from tests.conftest import FakeSpeechClientFactory, make_transcription_config
from voice_transcriber.l1_entities.config import Backend
from voice_transcriber.l2_use_cases.transcription_use_case import TranscriptionService


class TestTranscribe:
    @pytest.mark.asyncio
    async def test_cloud_success_sends_prompt(self, audio_file, fake_speech_factory: FakeSpeechClientFactory):
        svc = TranscriptionService(make_transcription_config(Backend.CLOUD, language='fr'), fake_speech_factory)

        result = await svc.transcribe(audio_file)

        assert result.ok
        assert result.text == 'cloud text'
        assert result.backend is Backend.CLOUD
        call = fake_speech_factory.clients[Backend.CLOUD].transcribe_calls[0]
        assert call['model'] == 'whisper-1'
        assert call['language'] == 'fr'
        assert call['prompt'] == 'Transcribe exactly.'

    @pytest.mark.asyncio
    async def test_local_never_sends_prompt(self, audio_file, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(Backend.LOCAL), fake_speech_factory)

        result = await svc.transcribe(audio_file)

        assert result.text == 'local text'
        call = fake_speech_factory.clients[Backend.LOCAL].transcribe_calls[0]
        assert call['prompt'] is None
        assert call['model'] == 'Systran/faster-whisper-base'

    @pytest.mark.asyncio
    async def test_explicit_backend_overrides_selected(self, audio_file, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(Backend.CLOUD), fake_speech_factory)

        result = await svc.transcribe(audio_file, backend=Backend.LOCAL)

        assert result.backend is Backend.LOCAL
        assert fake_speech_factory.clients[Backend.CLOUD].transcribe_calls == []

    @pytest.mark.asyncio
    async def test_text_is_trimmed(self, audio_file, fake_speech_factory):
        fake_speech_factory.clients[Backend.CLOUD].set_response('  padded \n')
        svc = TranscriptionService(make_transcription_config(), fake_speech_factory)

        assert (await svc.transcribe(audio_file)).text == 'padded'

    @pytest.mark.asyncio
    async def test_empty_result_is_failure(self, audio_file, fake_speech_factory):
        fake_speech_factory.clients[Backend.CLOUD].set_response('   ')
        svc = TranscriptionService(make_transcription_config(), fake_speech_factory)

        result = await svc.transcribe(audio_file)

        assert not result.ok
        assert 'cloud' in result.error
        assert 'No transcription text' in result.error

    @pytest.mark.asyncio
    async def test_client_error_is_captured(self, audio_file, fake_speech_factory):
        fake_speech_factory.clients[Backend.CLOUD].set_error(ConnectionError('refused'))
        svc = TranscriptionService(make_transcription_config(), fake_speech_factory)

        result = await svc.transcribe(audio_file)

        assert not result.ok
        assert 'ConnectionError' in result.error
        assert 'refused' in result.error

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(), fake_speech_factory)

        result = await svc.transcribe(tmp_path / 'nope.wav')

        assert not result.ok
        assert 'does not exist' in result.error
        assert fake_speech_factory.build_calls == []

    @pytest.mark.asyncio
    async def test_client_built_once_per_backend(self, audio_file, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(), fake_speech_factory)

        await svc.transcribe(audio_file)
        await svc.transcribe(audio_file)
        await svc.transcribe(audio_file, backend=Backend.LOCAL)

        assert [b for b, _ in fake_speech_factory.build_calls] == [Backend.CLOUD, Backend.LOCAL]


class TestWarmup:
    @pytest.mark.asyncio
    async def test_cloud_primary_skips(self, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(Backend.CLOUD), fake_speech_factory)

        result = await svc.warmup()

        assert result.ok
        assert result.skipped
        assert fake_speech_factory.clients[Backend.LOCAL].preload_calls == []

    @pytest.mark.asyncio
    async def test_force_local_preloads_for_cloud_primary(self, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(Backend.CLOUD), fake_speech_factory)

        result = await svc.warmup(force_local=True)

        assert result.ok
        assert fake_speech_factory.clients[Backend.LOCAL].preload_calls == ['Systran/faster-whisper-base']
        assert svc.local_model_loaded

    @pytest.mark.asyncio
    async def test_idempotent(self, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(Backend.LOCAL), fake_speech_factory)

        await svc.warmup()
        second = await svc.warmup()

        assert second.skipped
        assert len(fake_speech_factory.clients[Backend.LOCAL].preload_calls) == 1

    @pytest.mark.asyncio
    async def test_failure_reports_model(self, fake_speech_factory):
        fake_speech_factory.clients[Backend.LOCAL].set_preload_error(RuntimeError('404 Not Found'))
        svc = TranscriptionService(make_transcription_config(Backend.LOCAL), fake_speech_factory)

        result = await svc.warmup()

        assert not result.ok
        assert 'Failed to preload' in result.error
        assert 'Systran/faster-whisper-base' in result.error
        assert '404' in result.error
        assert not svc.local_model_loaded

    @pytest.mark.asyncio
    async def test_failure_is_retried_on_next_call(self, fake_speech_factory):
        local = fake_speech_factory.clients[Backend.LOCAL]
        local.set_preload_error(RuntimeError('down'))
        svc = TranscriptionService(make_transcription_config(Backend.LOCAL), fake_speech_factory)

        await svc.warmup()
        local.set_preload_error(None)
        result = await svc.warmup()

        assert result.ok
        assert not result.skipped
        assert len(local.preload_calls) == 2

    @pytest.mark.asyncio
    async def test_missing_url(self, fake_speech_factory):
        svc = TranscriptionService(make_transcription_config(Backend.LOCAL, local_url=''), fake_speech_factory)

        result = await svc.warmup()

        assert not result.ok
        assert 'URL' in result.error
