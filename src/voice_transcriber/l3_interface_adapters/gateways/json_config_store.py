"""Gateway: JSON configuration store — implements ConfigStore port."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from urllib.parse import urlparse

from pydantic import ValidationError

from voice_transcriber.l1_entities.config import (
    AppSettings,
    Backend,
    BackendEndpoint,
    FormatterConfig,
    TranscriptionConfig,
)
from voice_transcriber.l1_entities.errors import ConfigParseError, InvalidBackendUrlError
from voice_transcriber.l1_entities.personality import Personality, PersonalityRef
from voice_transcriber.l2_use_cases.utils.prompt_builder import build_formatting_prompt, build_transcription_prompt
from voice_transcriber.l3_interface_adapters.gateways.paths import DEFAULT_CONFIG_PATH
from voice_transcriber.l3_interface_adapters.gateways.yaml_personality_loader import load_builtin_personalities

log = logging.getLogger('vt.config')

DEFAULT_SELECTED_BUILTINS = ('default', 'professional', 'technical', 'creative', 'emojify')

SETTINGS_DEFAULTS: dict = {
    'language': 'en',
    'benchmark_mode': False,
    'log_truncate_threshold': 1000,
    'transcription': {
        'backend': 'cloud',
        'prompt': None,
        'cloud': {'api_key': '', 'model': 'whisper-1'},
        'local': {
            'url': 'http://localhost:8000/v1',
            'api_key': '',
            'model': 'Systran/faster-whisper-base',
        },
    },
    'formatter': {
        'backend': 'cloud',
        'prompt': None,
        'max_prompt_length': 4000,
        'cloud': {'api_key': '', 'model': 'gpt-4o-mini'},
        'local': {'url': 'http://localhost:11434', 'api_key': '', 'model': 'llama3.2'},
    },
    'personalities': {
        'custom': {},
        'active': [],
        'selected': [str(PersonalityRef.builtin(key)) for key in DEFAULT_SELECTED_BUILTINS],
    },
}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def build_settings(raw: dict) -> AppSettings:
    """Merge *raw* file contents on top of defaults field by field, then validate."""
    merged = copy.deepcopy(SETTINGS_DEFAULTS)
    deep_merge(merged, raw)
    return AppSettings.model_validate(merged)


def validate_backend_url(url: str, backend: str = 'local') -> str:
    """Return *url* unchanged if it is an http(s) URL with a host."""
    parsed = urlparse(url or '')
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise InvalidBackendUrlError(url, backend)
    return url


class JsonConfigStore:
    """Mutable, reloadable settings backed by one JSON file.

    Builtin personalities are held separately from the file contents and are
    never written back.
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        self.settings: AppSettings = build_settings({})
        self.builtin_personalities: dict[str, Personality] = load_builtin_personalities()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> None:
        if not self.path.exists():
            log.info('No config file at %s, using defaults', self.path)
            self.settings = build_settings({})
            return
        try:
            raw = json.loads(self.path.read_text(encoding='utf-8'))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ConfigParseError(str(self.path), str(e)) from e
        if not isinstance(raw, dict):
            raise ConfigParseError(str(self.path), f'expected a JSON object, got {type(raw).__name__}')
        try:
            self.settings = build_settings(raw)
        except ValidationError as e:
            raise ConfigParseError(str(self.path), str(e)) from e
        log.info('Loaded config from %s', self.path)

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = self.settings.model_dump(mode='json')
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + '\n', encoding='utf-8')
        log.info('Saved config to %s', self.path)

    def snapshot_settings(self) -> AppSettings:
        return self.settings.model_copy(deep=True)

    def restore_settings(self, settings: AppSettings) -> None:
        self.settings = settings.model_copy(deep=True)

    def _endpoint(self, section, backend: Backend, label: str) -> BackendEndpoint:
        if backend is Backend.CLOUD:
            return BackendEndpoint(api_key=section.cloud.api_key, model=section.cloud.model)
        url = validate_backend_url(section.local.url, f'local {label}')
        return BackendEndpoint(api_key=section.local.api_key, model=section.local.model, url=url)

    def get_transcription_config(self, backend: Backend | None = None) -> TranscriptionConfig:
        section = self.settings.transcription
        backend = backend or section.backend
        active = self._endpoint(section, backend, 'transcription')
        endpoints = {backend: active}
        for other in Backend:
            if other is backend:
                continue
            if other is Backend.CLOUD:
                endpoints[other] = BackendEndpoint(api_key=section.cloud.api_key, model=section.cloud.model)
            else:
                # Unvalidated here; validated when selected.
                endpoints[other] = BackendEndpoint(
                    api_key=section.local.api_key,
                    model=section.local.model,
                    url=section.local.url,
                )
        return TranscriptionConfig(
            backend=backend,
            api_key=active.api_key,
            model=active.model,
            url=active.url,
            language=self.settings.language,
            prompt=section.prompt or build_transcription_prompt(self.settings.language),
            endpoints=endpoints,
        )

    def get_formatter_config(self) -> FormatterConfig:
        section = self.settings.formatter
        active = self._endpoint(section, section.backend, 'formatter')
        return FormatterConfig(
            backend=section.backend,
            api_key=active.api_key,
            model=active.model,
            url=active.url,
            language=self.settings.language,
            prompt=section.prompt or build_formatting_prompt(self.settings.language),
            max_prompt_length=section.max_prompt_length,
            builtin_personalities={k: v.model_copy(deep=True) for k, v in self.builtin_personalities.items()},
            custom_personalities={k: v.model_copy(deep=True) for k, v in self.settings.personalities.custom.items()},
            active_personalities=tuple(self.settings.personalities.active),
        )
