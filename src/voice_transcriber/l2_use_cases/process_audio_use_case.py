"""Use case: turn a finished recording into clipboard text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from voice_transcriber.l2_use_cases.benchmark_use_case import BenchmarkComparator, BenchmarkReport
from voice_transcriber.l2_use_cases.format_text_use_case import FormattingService
from voice_transcriber.l2_use_cases.ports.clipboard import Clipboard
from voice_transcriber.l2_use_cases.transcription_use_case import TranscriptionService
from voice_transcriber.l2_use_cases.utils.personality_composer import PersonalityComposer

log = logging.getLogger('vt.processor')


@dataclass(frozen=True)
class ProcessResult:
    text: str | None = None
    error: str = ''
    formatted: bool = False

    @property
    def ok(self) -> bool:
        return self.text is not None


class AudioProcessor:
    """Transcribe → optional personality formatting → clipboard → delete the audio file.

    Any failing step stops the cycle without touching the clipboard and keeps
    the recording on disk.
    """

    def __init__(
        self,
        transcription: TranscriptionService,
        formatting: FormattingService,
        composer: PersonalityComposer,
        clipboard: Clipboard,
        active_personalities: list[str] | tuple[str, ...] = (),
        benchmark: BenchmarkComparator | None = None,
    ) -> None:
        self.transcription = transcription
        self.formatting = formatting
        self.composer = composer
        self._clipboard = clipboard
        self._active = tuple(active_personalities)
        self._benchmark = benchmark or BenchmarkComparator(transcription, clipboard)

    async def process_audio_file(self, file_path: str | Path) -> ProcessResult:
        result = await self.transcription.transcribe(file_path)
        if not result.ok:
            log.error('Transcription failed: %s', result.error)
            return ProcessResult(error=result.error)

        text = result.text or ''
        formatted = False
        if self._active:
            prompt = self.composer.build_composite_prompt(self._active)
            log.info('Formatting with %s', ', '.join(self._active))
            fmt = await self.formatting.format_text(text, prompt_override=prompt or None)
            if not fmt.ok:
                log.error('Formatting failed: %s', fmt.error)
                return ProcessResult(error=fmt.error)
            text = fmt.text or ''
            formatted = True

        clip = self._clipboard.write_text(text)
        if not clip.ok:
            log.error('Clipboard failed: %s', clip.error)
            return ProcessResult(error=f'Clipboard failed: {clip.error}')
        log.info('Text copied to clipboard (%d chars)', len(text))

        _delete_audio_file(Path(file_path))
        return ProcessResult(text=text, formatted=formatted)

    async def process_benchmark(self, file_path: str | Path) -> BenchmarkReport:
        report = await self._benchmark.run(file_path)
        if report.ok:
            _delete_audio_file(Path(file_path))
        else:
            log.error(report.error)
        return report


def _delete_audio_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        log.warning('Could not delete audio file %s: %s', path, e)
        return
    log.debug('Deleted audio file %s', path)
