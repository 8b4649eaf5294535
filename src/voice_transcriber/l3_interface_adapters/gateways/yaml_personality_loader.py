"""Gateway: builtin personalities shipped as YAML resources."""

from __future__ import annotations

from functools import cache
from importlib import resources

import yaml

from voice_transcriber.l1_entities.personality import Personality

_PERSONALITIES_DIR = resources.files('voice_transcriber') / 'personalities'


def builtin_names() -> set[str]:
    """Discover builtin personality keys from the personalities directory."""
    return {p.name.removesuffix('.yaml') for p in _PERSONALITIES_DIR.iterdir() if p.name.endswith('.yaml')}


@cache
def _load_all() -> tuple[tuple[str, Personality], ...]:
    loaded = []
    for name in sorted(builtin_names()):
        data = yaml.safe_load((_PERSONALITIES_DIR / f'{name}.yaml').read_text(encoding='utf-8')) or {}
        loaded.append((name, Personality.model_validate(data)))
    return tuple(loaded)


def load_builtin_personalities() -> dict[str, Personality]:
    """Return a fresh copy of the builtin table; callers cannot mutate the shipped set."""
    return {name: p.model_copy(deep=True) for name, p in _load_all()}
