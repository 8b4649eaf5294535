"""Gateway: microphone capture through an external ``arecord`` process — implements AudioRecorder port."""

from __future__ import annotations

import logging
import shutil
import subprocess
from datetime import datetime
from pathlib import Path

from voice_transcriber.l2_use_cases.ports.audio_recorder import RecordingResult
from voice_transcriber.l3_interface_adapters.gateways.paths import RECORDINGS_DIR

log = logging.getLogger('vt.recorder')

SAMPLE_RATE = 16000
STOP_TIMEOUT = 5.0


class ArecordRecorder:
    """Records mono 16 kHz WAV files into a temp directory until stopped."""

    def __init__(self, temp_dir: Path | None = None, device: str = 'default', command: str = 'arecord') -> None:
        self._temp_dir = temp_dir or RECORDINGS_DIR
        self._device = device
        self._command = command
        self._process: subprocess.Popen | None = None
        self._current_file: Path | None = None

    def is_recording(self) -> bool:
        return self._process is not None

    def start_recording(self) -> RecordingResult:
        if self._process is not None:
            return RecordingResult(error='Already recording')
        executable = shutil.which(self._command)
        if executable is None:
            return RecordingResult(error=f'{self._command} not found on PATH')

        self._temp_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now().strftime('%Y-%m-%d_%H%M%S_%f')
        target = self._temp_dir / f'recording-{stamp}.wav'
        args = [
            executable,
            '-q',
            '-f', 'S16_LE',
            '-c', '1',
            '-r', str(SAMPLE_RATE),
            '-t', 'wav',
            '-D', self._device,
            str(target),
        ]  # fmt: skip
        try:
            self._process = subprocess.Popen(args, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE)
        except OSError as e:
            return RecordingResult(error=f'Failed to start recording: {e}')

        self._current_file = target
        log.debug('Recording to %s', target)
        return RecordingResult(file_path=target)

    def stop_recording(self) -> RecordingResult:
        if self._process is None:
            return RecordingResult(error='Not recording')
        process, target = self._process, self._current_file
        self._process = None
        self._current_file = None

        process.terminate()
        try:
            _, stderr = process.communicate(timeout=STOP_TIMEOUT)
        except subprocess.TimeoutExpired:
            process.kill()
            _, stderr = process.communicate()

        if target is None or not target.exists():
            detail = (stderr or b'').decode(errors='replace').strip()
            return RecordingResult(error=f'Recording produced no audio file{": " + detail if detail else ""}')
        return RecordingResult(file_path=target)
