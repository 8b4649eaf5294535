"""Personality entities — named formatting instructions and their references."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pydantic import BaseModel


class Personality(BaseModel):
    """A reusable formatting instruction."""

    name: str
    description: str = ''
    prompt: str | None = None


class PersonalityKind(enum.Enum):
    BUILTIN = 'builtin'
    CUSTOM = 'custom'


@dataclass(frozen=True)
class PersonalityRef:
    """Reference into one of the two personality namespaces.

    ``kind`` is None for unqualified ids (legacy bare keys); those resolve
    against builtins first, then custom personalities.
    """

    kind: PersonalityKind | None
    key: str

    @classmethod
    def parse(cls, ref: str) -> PersonalityRef:
        prefix, sep, rest = ref.partition(':')
        if sep:
            for kind in PersonalityKind:
                if prefix == kind.value:
                    return cls(kind=kind, key=rest)
        return cls(kind=None, key=ref)

    @classmethod
    def builtin(cls, key: str) -> PersonalityRef:
        return cls(kind=PersonalityKind.BUILTIN, key=key)

    def __str__(self) -> str:
        if self.kind is None:
            return self.key
        return f'{self.kind.value}:{self.key}'


def resolve_personality(
    ref: PersonalityRef | str,
    builtin: dict[str, Personality],
    custom: dict[str, Personality],
) -> Personality | None:
    """Single lookup over {builtin ∪ custom}. Returns None for unknown ids."""
    if isinstance(ref, str):
        ref = PersonalityRef.parse(ref)
    if ref.kind is PersonalityKind.BUILTIN:
        return builtin.get(ref.key)
    if ref.kind is PersonalityKind.CUSTOM:
        return custom.get(ref.key)
    return builtin.get(ref.key) or custom.get(ref.key)
