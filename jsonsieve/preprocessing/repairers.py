"""
Repair steps for malformed payloads.

Each step fixes one class of generator mistake. Steps are cumulative: the
pipeline feeds each one the previous step's output.
"""

from typing import Any, Optional

import regex

from ..core.constants import CONTROL_ESCAPES
from ..core.regex_engine import RegexEngine
from ..core.types import RepairStage
from ..utils.config import ExtractionConfig
from .base import RepairStepBase
from .string_utils import (
    STRING_LITERAL_PATTERN,
    StringStateTracker,
    iterate_with_string_tracking,
    skip_whitespace,
)


def _is_control(char: str) -> bool:
    return ord(char) < 0x20


def escape_control_characters(literal: str) -> str:
    """
    Escape raw control characters inside one string literal.

    Valid escape sequences are copied through untouched. A backslash directly
    before a raw control character is dropped and the character escaped.
    """
    result = []
    i = 0
    while i < len(literal):
        char = literal[i]
        if char == "\\" and i + 1 < len(literal):
            following = literal[i + 1]
            if _is_control(following):
                i += 1
                continue
            result.append(literal[i : i + 2])
            i += 2
            continue
        if _is_control(char):
            result.append(CONTROL_ESCAPES.get(char, f"\\u{ord(char):04x}"))
        else:
            result.append(char)
        i += 1
    return "".join(result)


class ControlCharacterEscaper(RepairStepBase):
    """Escapes raw newlines, tabs and other control bytes inside strings."""

    stage = RepairStage.ESCAPE_CONTROL_CHARACTERS

    def __init__(self, engine: Optional[RegexEngine] = None):
        self.engine = engine or RegexEngine()

    def should_apply(self, config: ExtractionConfig) -> bool:
        """Apply if control-character escaping is enabled."""
        return config.escape_control_characters

    def process(self, text: str, config: ExtractionConfig) -> str:
        """Escape control characters in every string literal of ``text``."""

        def escape(match: Any) -> str:
            return escape_control_characters(match.group(0))

        return self.engine.sub(STRING_LITERAL_PATTERN, escape, text, flags=regex.DOTALL)


class PunctuationFixer(RepairStepBase):
    """Fixes missing and trailing commas."""

    stage = RepairStage.FIX_PUNCTUATION

    def should_apply(self, config: ExtractionConfig) -> bool:
        """Apply if punctuation repair is enabled."""
        return config.fix_punctuation

    def process(self, text: str, config: ExtractionConfig) -> str:
        """Insert missing separators, then drop trailing commas."""
        result = self._fix_missing_commas(text)
        return self._fix_trailing_commas(result)

    @staticmethod
    def _fix_missing_commas(text: str) -> str:
        """
        Add a comma where a value ends and the next begins with only
        whitespace between them.

        A value end is a closing quote, ``}`` or ``]``; the next value starts
        with ``"``, ``{`` or ``[``. This covers array elements the generator
        emitted on separate lines without separators.
        """
        result = []

        for i, char, in_string, closes in iterate_with_string_tracking(text):
            result.append(char)

            ends_value = closes or (not in_string and char in "}]")
            if not ends_value:
                continue

            j = skip_whitespace(text, i + 1)
            if j < len(text) and text[j] in '"{[':
                result.append(",")

        return "".join(result)

    @staticmethod
    def _fix_trailing_commas(text: str) -> str:
        """Remove trailing commas before closing braces/brackets."""
        result = []
        tracker = StringStateTracker()
        i = 0

        while i < len(text):
            char = text[i]
            if tracker.update_state(char):
                result.append(char)
                i += 1
                continue

            if char == ",":
                j = skip_whitespace(text, i + 1)
                if j < len(text) and text[j] in "}]":
                    # Keep the whitespace, drop only the comma.
                    i += 1
                    continue

            result.append(char)
            i += 1

        return "".join(result)
