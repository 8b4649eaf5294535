"""Domain error types."""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for configuration problems that must stop startup or reload."""


class ConfigParseError(ConfigError):
    """Raised when the configuration file cannot be parsed or validated."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f'Failed to parse config file {path}: {message}')


class InvalidBackendUrlError(ConfigError):
    """Raised when a local backend URL is not a valid http(s) URL."""

    def __init__(self, url: str, backend: str = 'local') -> None:
        self.url = url
        self.backend = backend
        super().__init__(f'Invalid {backend} backend URL: {url!r} (expected http:// or https://)')


class MissingCredentialError(ConfigError):
    """Raised when the active backend has no API key configured."""

    def __init__(self, backend: str, config_path: str | None = None) -> None:
        self.backend = backend
        self.config_path = config_path
        where = f' Add it to {config_path}' if config_path else ''
        super().__init__(f'No API key configured for the {backend} backend.{where}')


class EmptyResultError(Exception):
    """Raised when a transcription backend returns no text."""


class EmptyTextError(ValueError):
    """Raised when empty text is passed to the formatter."""


class NoOutputError(Exception):
    """Raised when a formatting backend returns no text."""
