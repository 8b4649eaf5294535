"""Configuration Pydantic models — persisted settings and derived per-backend configs.

Pure schema, no infrastructure defaults (see the JSON config store for those).
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

from voice_transcriber.l1_entities.personality import Personality


class Backend(enum.Enum):
    CLOUD = 'cloud'
    LOCAL = 'local'


# --- Persisted settings ---


class CloudBackendSettings(BaseModel):
    api_key: str = ''
    model: str


class LocalBackendSettings(BaseModel):
    url: str
    api_key: str = ''
    model: str


class TranscriptionSettings(BaseModel):
    backend: Backend
    prompt: str | None = None  # None → generated from language
    cloud: CloudBackendSettings
    local: LocalBackendSettings


class FormatterSettings(BaseModel):
    backend: Backend
    prompt: str | None = None
    max_prompt_length: int = Field(gt=0)
    cloud: CloudBackendSettings
    local: LocalBackendSettings


class PersonalitySettings(BaseModel):
    custom: dict[str, Personality] = Field(default_factory=dict)
    active: list[str] = Field(default_factory=list)
    selected: list[str] = Field(default_factory=list)


class AppSettings(BaseModel):
    language: str
    benchmark_mode: bool
    log_truncate_threshold: int = Field(gt=0)
    transcription: TranscriptionSettings
    formatter: FormatterSettings
    personalities: PersonalitySettings


# --- Derived configs (recomputed on every access) ---


class BackendEndpoint(BaseModel):
    """Resolved credentials for one backend."""

    api_key: str
    model: str
    url: str | None = None

    model_config = {'frozen': True}


class TranscriptionConfig(BaseModel):
    """Everything the transcription orchestrator needs, for the selected backend."""

    backend: Backend
    api_key: str
    model: str
    url: str | None = None
    language: str
    prompt: str
    endpoints: dict[Backend, BackendEndpoint] = Field(default_factory=dict)

    model_config = {'frozen': True}

    def endpoint(self, backend: Backend | None = None) -> BackendEndpoint:
        backend = backend or self.backend
        if backend == self.backend:
            return BackendEndpoint(api_key=self.api_key, model=self.model, url=self.url)
        return self.endpoints[backend]


class FormatterConfig(BaseModel):
    """Formatter backend credentials plus the personality tables for composition."""

    backend: Backend
    api_key: str
    model: str
    url: str | None = None
    language: str
    prompt: str
    max_prompt_length: int = 4000
    builtin_personalities: dict[str, Personality] = Field(default_factory=dict)
    custom_personalities: dict[str, Personality] = Field(default_factory=dict)
    active_personalities: tuple[str, ...] = ()

    model_config = {'frozen': True}

    @property
    def enabled(self) -> bool:
        return bool(self.active_personalities)
