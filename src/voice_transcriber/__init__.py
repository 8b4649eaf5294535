"""voice-transcriber: tray dictation with pluggable transcription and formatting backends."""

__version__ = '0.4.0'
