"""Resolve personality ids to prompts and compose them under a length budget."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from voice_transcriber.l1_entities.config import FormatterConfig
from voice_transcriber.l1_entities.personality import Personality, PersonalityRef, resolve_personality

log = logging.getLogger('vt.formatter')

PROMPT_SEPARATOR = '\n\n---\n\n'
DEFAULT_MAX_PROMPT_LENGTH = 4000


class PersonalityComposer:
    """Looks up prompts across the builtin and custom namespaces.

    Unknown ids degrade to the default prompt instead of raising, so a stale
    reference in the active list never breaks formatting.
    """

    def __init__(
        self,
        builtin: dict[str, Personality],
        custom: dict[str, Personality],
        default_prompt: str,
        max_prompt_length: int = DEFAULT_MAX_PROMPT_LENGTH,
    ) -> None:
        self._builtin = builtin
        self._custom = custom
        self._default_prompt = default_prompt
        self.max_prompt_length = max_prompt_length

    @classmethod
    def from_config(cls, config: FormatterConfig) -> PersonalityComposer:
        return cls(
            builtin=config.builtin_personalities,
            custom=config.custom_personalities,
            default_prompt=config.prompt,
            max_prompt_length=config.max_prompt_length,
        )

    def get_personality_prompt(self, personality_id: PersonalityRef | str) -> str:
        personality = resolve_personality(personality_id, self._builtin, self._custom)
        if personality is not None and personality.prompt:
            return personality.prompt
        return self._default_prompt

    def _prompt_for_composition(self, personality_id: PersonalityRef | str) -> str | None:
        personality = resolve_personality(personality_id, self._builtin, self._custom)
        if personality is None:
            log.warning('Unknown personality %s, using default prompt', personality_id)
            return self._default_prompt or None
        return personality.prompt or None

    def build_composite_prompt(self, personality_ids: Iterable[PersonalityRef | str]) -> str:
        """Join prompts with a separator, stopping before the first one that would overflow."""
        parts: list[str] = []
        length = 0
        for pid in personality_ids:
            prompt = self._prompt_for_composition(pid)
            if not prompt:
                continue
            added = len(prompt) + (len(PROMPT_SEPARATOR) if parts else 0)
            if length + added > self.max_prompt_length:
                log.info(
                    'Composite prompt limit reached (%d chars), dropping %s and later personalities',
                    self.max_prompt_length,
                    pid,
                )
                break
            parts.append(prompt)
            length += added
        return PROMPT_SEPARATOR.join(parts)
