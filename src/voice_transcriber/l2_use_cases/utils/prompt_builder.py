"""Pure functions for building language-specific default prompts."""

from __future__ import annotations

LANGUAGE_NAMES: dict[str, str] = {
    'fr': 'French',
    'en': 'English',
    'es': 'Spanish',
    'de': 'German',
    'it': 'Italian',
}

GENERIC_LANGUAGE = 'the spoken language'


def language_name(code: str) -> str | None:
    return LANGUAGE_NAMES.get(code.lower().split('-')[0])


def build_transcription_prompt(language: str) -> str:
    """Anti-code-switching instruction for the transcription backend."""
    name = language_name(language)
    if name is None:
        return (
            f'Transcribe this audio recording exactly as spoken, in {GENERIC_LANGUAGE}. '
            'Keep technical terms in their original form. '
            'Do NOT translate or switch to another language.'
        )
    return (
        f'This is a {name} audio recording. Transcribe it exactly as spoken in {name}. '
        f'Keep technical terms in their original form but preserve {name} sentence structure and grammar. '
        f'Do NOT switch to another language and do NOT translate.'
    )


def build_formatting_prompt(language: str) -> str:
    """Plain grammar/punctuation cleanup instruction for the formatter."""
    name = language_name(language) or GENERIC_LANGUAGE
    return (
        'Please format this transcribed text with proper grammar and punctuation. '
        f'The text is in {name}. Keep the original meaning and wording. '
        'Do not translate to another language. Return only the formatted text:'
    )
