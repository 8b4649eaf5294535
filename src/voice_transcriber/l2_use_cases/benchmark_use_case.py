"""Use case: run both transcription backends on one recording and compare them."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from voice_transcriber.l1_entities.config import Backend
from voice_transcriber.l2_use_cases.ports.clipboard import Clipboard
from voice_transcriber.l2_use_cases.transcription_use_case import TranscriptionService
from voice_transcriber.l2_use_cases.utils.text_similarity import (
    TextDifference,
    calculate_similarity,
    find_text_differences,
    word_count,
)

log = logging.getLogger('vt.benchmark')

MAX_REPORTED_DIFFERENCES = 10

SelectionPolicy = Callable[[str, str], Backend]


def prefer_longer(cloud_text: str, local_text: str) -> Backend:
    """Longer text is assumed more complete; an exact tie goes to the local backend."""
    return Backend.LOCAL if len(local_text) >= len(cloud_text) else Backend.CLOUD


@dataclass(frozen=True)
class BenchmarkStats:
    cloud_seconds: float
    local_seconds: float
    cloud_chars: int
    local_chars: int
    length_delta: int
    length_delta_percent: float
    cloud_words: int
    local_words: int
    word_delta: int
    similarity: float
    differences: list[TextDifference] = field(default_factory=list)

    @property
    def speedup(self) -> float:
        """How many times faster the local backend was (cloud time / local time)."""
        if self.local_seconds <= 0:
            return 0.0
        return self.cloud_seconds / self.local_seconds


def compare_transcriptions(
    cloud_text: str,
    local_text: str,
    cloud_seconds: float,
    local_seconds: float,
) -> BenchmarkStats:
    cloud_chars = len(cloud_text)
    local_chars = len(local_text)
    length_delta = abs(cloud_chars - local_chars)
    longest = max(cloud_chars, local_chars)
    cloud_words = word_count(cloud_text)
    local_words = word_count(local_text)
    return BenchmarkStats(
        cloud_seconds=cloud_seconds,
        local_seconds=local_seconds,
        cloud_chars=cloud_chars,
        local_chars=local_chars,
        length_delta=length_delta,
        length_delta_percent=(length_delta / longest * 100) if longest else 0.0,
        cloud_words=cloud_words,
        local_words=local_words,
        word_delta=abs(cloud_words - local_words),
        similarity=calculate_similarity(cloud_text, local_text),
        differences=find_text_differences(cloud_text, local_text, MAX_REPORTED_DIFFERENCES),
    )


@dataclass(frozen=True)
class BenchmarkReport:
    cloud_text: str | None = None
    local_text: str | None = None
    stats: BenchmarkStats | None = None
    winner: Backend | None = None
    copied: bool = False
    error: str = ''

    @property
    def ok(self) -> bool:
        return not self.error

    @property
    def winner_text(self) -> str | None:
        if self.winner is Backend.CLOUD:
            return self.cloud_text
        if self.winner is Backend.LOCAL:
            return self.local_text
        return None


class BenchmarkComparator:
    """Transcribes with cloud then local, one after the other, so timings are uncontended."""

    def __init__(
        self,
        transcription: TranscriptionService,
        clipboard: Clipboard,
        selection_policy: SelectionPolicy = prefer_longer,
    ) -> None:
        self._transcription = transcription
        self._clipboard = clipboard
        self._select = selection_policy

    async def run(self, file_path: str | Path) -> BenchmarkReport:
        log.info('Benchmark: comparing cloud and local transcription')

        start = time.perf_counter()
        cloud = await self._transcription.transcribe(file_path, backend=Backend.CLOUD)
        cloud_seconds = time.perf_counter() - start
        if not cloud.ok:
            return BenchmarkReport(error=f'Benchmark aborted: {cloud.error}')

        start = time.perf_counter()
        local = await self._transcription.transcribe(file_path, backend=Backend.LOCAL)
        local_seconds = time.perf_counter() - start
        if not local.ok:
            return BenchmarkReport(cloud_text=cloud.text, error=f'Benchmark aborted: {local.error}')

        cloud_text = cloud.text or ''
        local_text = local.text or ''
        stats = compare_transcriptions(cloud_text, local_text, cloud_seconds, local_seconds)
        _log_stats(cloud_text, local_text, stats)

        winner = self._select(cloud_text, local_text)
        report = BenchmarkReport(cloud_text=cloud_text, local_text=local_text, stats=stats, winner=winner)
        final_text = report.winner_text or ''

        log.info('Copying %s result to clipboard (%d chars)', winner.value, len(final_text))
        clip = self._clipboard.write_text(final_text)
        if not clip.ok:
            log.error('Clipboard failed: %s', clip.error)
            return BenchmarkReport(
                cloud_text=cloud_text,
                local_text=local_text,
                stats=stats,
                winner=winner,
                error=f'Clipboard failed: {clip.error}',
            )
        return BenchmarkReport(
            cloud_text=cloud_text,
            local_text=local_text,
            stats=stats,
            winner=winner,
            copied=True,
        )


def _log_stats(cloud_text: str, local_text: str, stats: BenchmarkStats) -> None:
    log.debug('==================== BENCHMARK ====================')
    log.debug(
        'Time:       cloud %.2fs | local %.2fs | speedup %.2fx',
        stats.cloud_seconds,
        stats.local_seconds,
        stats.speedup,
    )
    log.debug(
        'Length:     cloud %d | local %d | diff %d chars (%.1f%%)',
        stats.cloud_chars,
        stats.local_chars,
        stats.length_delta,
        stats.length_delta_percent,
    )
    log.debug('Words:      cloud %d | local %d | diff %d', stats.cloud_words, stats.local_words, stats.word_delta)
    log.debug('Similarity: %.1f%%', stats.similarity * 100)
    log.debug('Cloud: "%s"', cloud_text)
    log.debug('Local: "%s"', local_text)
    if cloud_text == local_text:
        log.debug('Identical transcriptions')
    elif not stats.differences:
        log.debug('Same words, differences in whitespace only')
    for diff in stats.differences:
        log.debug('  position %d: "%s" vs "%s"', diff.position, diff.word1, diff.word2)
    log.debug('===================================================')
