"""Shared path constants for configuration, logs and temporary recordings."""

from __future__ import annotations

import tempfile
from pathlib import Path

from platformdirs import user_config_path, user_log_path

APP_NAME = 'voice-transcriber'

CONFIG_DIR = user_config_path(APP_NAME)
DEFAULT_CONFIG_PATH = CONFIG_DIR / 'config.json'

LOG_DIR = user_log_path(APP_NAME)

RECORDINGS_DIR = Path(tempfile.gettempdir()) / 'voice-transcriber'
