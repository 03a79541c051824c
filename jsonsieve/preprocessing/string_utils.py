"""
Utility functions for string-literal aware text processing.

JSON payloads only use double-quoted strings, so a literal begins at an
unescaped ``"`` and ends at the next unescaped ``"``.
"""

from collections.abc import Generator

# A complete double-quoted literal; backslash escapes may span any character.
STRING_LITERAL_PATTERN = r'"(?:[^"\\]++|\\.)*+"'


class StringStateTracker:
    """Helper class to track string state during text processing."""

    def __init__(self) -> None:
        self.in_string = False
        self.closed = False
        self._escape_next = False

    def update_state(self, char: str) -> bool:
        """
        Feed the next character.

        Returns:
            True if the character belongs to a string literal, quotes included.
            After a closing quote, ``closed`` is True until the next call.
        """
        self.closed = False

        if self._escape_next:
            self._escape_next = False
            return True

        if self.in_string:
            if char == "\\":
                self._escape_next = True
            elif char == '"':
                self.in_string = False
                self.closed = True
            return True

        if char == '"':
            self.in_string = True
            return True

        return False


def iterate_with_string_tracking(
    text: str, start: int = 0
) -> Generator[tuple[int, str, bool, bool], None, None]:
    """
    Iterate through text with string state tracking, beginning outside a
    string at ``start``.

    Yields:
        Tuple of (index, character, in_string, closes_string)
    """
    tracker = StringStateTracker()
    for i in range(start, len(text)):
        char = text[i]
        in_string = tracker.update_state(char)
        yield i, char, in_string, tracker.closed


def skip_whitespace(text: str, pos: int) -> int:
    """Index of the first non-whitespace character at or after ``pos``."""
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def unescape_fallback(literal: str) -> str:
    """
    Best-effort decode of a string literal that ``json`` rejected.

    Strips the surrounding quotes and resolves only ``\\n`` and ``\\"``.
    """
    body = literal[1:-1] if len(literal) >= 2 and literal[0] == literal[-1] == '"' else literal
    return body.replace("\\n", "\n").replace('\\"', '"')
