"""L1 entity: recording / processing state shown in the tray."""

from __future__ import annotations

import enum


class TrayState(enum.Enum):
    IDLE = 'idle'
    RECORDING = 'recording'
    PROCESSING = 'processing'
