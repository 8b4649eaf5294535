"""Use case: rewrite transcribed text through the formatting backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from voice_transcriber.l1_entities.chat_message import ChatMessage
from voice_transcriber.l1_entities.config import FormatterConfig
from voice_transcriber.l1_entities.errors import EmptyTextError, NoOutputError
from voice_transcriber.l2_use_cases.ports.chat_client import ChatClient

log = logging.getLogger('vt.formatter')

FORMAT_TEMPERATURE = 0.3
FORMAT_MAX_TOKENS = 1000


@dataclass(frozen=True)
class FormatResult:
    text: str | None = None
    error: str = ''

    @property
    def ok(self) -> bool:
        return self.text is not None


class FormattingService:
    """Issues one low-temperature chat call per text.

    Enablement is the caller's decision: when invoked, this always attempts
    the call and never hands the input back unchanged.
    """

    def __init__(self, config: FormatterConfig, client: ChatClient) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> FormatterConfig:
        return self._config

    async def format_text(self, text: str, prompt_override: str | None = None) -> FormatResult:
        backend = self._config.backend.value
        try:
            if not text or not text.strip():
                raise EmptyTextError('Text cannot be empty')
            prompt = prompt_override or self._config.prompt
            messages = [ChatMessage.user(f'{prompt}\n\n{text}')]
            log.debug(
                'Format request (%s, model=%s): prompt=%d chars, text=%d chars',
                backend,
                self._config.model,
                len(prompt),
                len(text),
            )
            raw = await self._client.complete(
                self._config.model,
                messages,
                temperature=FORMAT_TEMPERATURE,
                max_tokens=FORMAT_MAX_TOKENS,
            )
            formatted = (raw or '').strip()
            if not formatted:
                raise NoOutputError('No formatted text received')
        except (EmptyTextError, NoOutputError) as e:
            err = f'{backend} formatting failed: {e}'
            log.warning(err)
            return FormatResult(error=err)
        except Exception as e:
            err = f'{backend} formatting failed: {type(e).__name__}: {e}'
            log.error(err, exc_info=True)
            return FormatResult(error=err)

        log.debug('Formatted text (%d chars): %s', len(formatted), formatted)
        return FormatResult(text=formatted)
