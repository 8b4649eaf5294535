"""Tests for the pyperclip clipboard gateway."""

from __future__ import annotations

from unittest.mock import patch

import pyperclip

from voice_transcriber.l3_interface_adapters.gateways.pyperclip_clipboard import PyperclipClipboard

_COPY = 'voice_transcriber.l3_interface_adapters.gateways.pyperclip_clipboard.pyperclip.copy'


class TestPyperclipClipboard:
    @patch(_COPY)
    def test_write(self, mock_copy):
        result = PyperclipClipboard().write_text('Hello world')
        assert result.ok
        mock_copy.assert_called_once_with('Hello world')

    @patch(_COPY)
    def test_empty_rejected(self, mock_copy):
        result = PyperclipClipboard().write_text('  ')
        assert not result.ok
        mock_copy.assert_not_called()

    @patch(_COPY, side_effect=pyperclip.PyperclipException('no mechanism'))
    def test_backend_failure(self, mock_copy):
        result = PyperclipClipboard().write_text('text')
        assert not result.ok
        assert 'no mechanism' in result.error
