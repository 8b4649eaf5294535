"""Console + file logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
LOG_FILENAME = 'voice_transcriber.log'


def setup_logging(*, debug: bool = False, log_dir: Path | None = None) -> Path | None:
    """Configure the ``vt`` logger tree: stderr always, a file when *log_dir* is given.

    Returns the log file path, if any.
    """
    root = logging.getLogger('vt')
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(console)

    if log_dir is None:
        return None
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILENAME
    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(file_handler)
    root.debug('Debug logging started → %s', log_path)
    return log_path
