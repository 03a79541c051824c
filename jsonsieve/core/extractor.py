"""
Brace-balance extraction.

Given the offset of an opening brace, finds the matching closing brace by
counting depth outside string literals. This is not a JSON grammar parse,
which is what lets it delimit objects whose contents are still malformed.
"""

from typing import Optional, Union

from ..preprocessing.string_utils import iterate_with_string_tracking, skip_whitespace
from .constants import FENCE
from .error_handling import UnbalancedBraces
from .types import Span


class BraceIndex:
    """
    Matching braces of one text, filled in lazily.

    Every scan records the closing offset of each ``{`` it passes outside a
    string literal, not just the one it started from. A later lookup for an
    opener inside an already scanned region is answered from the record, so
    a run of unterminated candidates costs one pass over the tail instead of
    one pass per candidate.
    """

    def __init__(self, text: str):
        self.text = text
        self._closes: dict[int, int] = {}
        self._unclosed: dict[int, int] = {}

    def span(self, start: int) -> Union[Span, UnbalancedBraces]:
        """
        Find the balanced ``{...}`` span starting at ``start``.

        Returns:
            The span covering the object, or ``UnbalancedBraces`` if the text
            ends before depth returns to zero
        """
        text = self.text
        if start < 0 or start >= len(text) or text[start] != "{":
            return UnbalancedBraces(start=start, depth=0, reason="no opening brace")

        if start not in self._closes and start not in self._unclosed:
            self._scan(start)

        if start in self._closes:
            return Span(start, self._closes[start])
        return UnbalancedBraces(start=start, depth=self._unclosed[start])

    def _scan(self, start: int) -> None:
        openers: list[int] = []

        for i, char, in_string, _ in iterate_with_string_tracking(self.text, start):
            if in_string:
                continue

            if char == "{":
                openers.append(i)
            elif char == "}" and openers:
                self._closes[openers.pop()] = i + 1
                if not openers:
                    return

        for depth, opener in enumerate(reversed(openers), start=1):
            self._unclosed[opener] = depth


def extract_span(text: str, start: int) -> Union[Span, UnbalancedBraces]:
    """
    Find the balanced ``{...}`` span starting at ``start``.

    Args:
        text: Source text
        start: Offset of the opening ``{``

    Returns:
        The span covering the object, or ``UnbalancedBraces`` if the text
        ends before depth returns to zero
    """
    return BraceIndex(text).span(start)


def consumed_range(text: str, span: Span, fence_start: Optional[int] = None) -> Span:
    """
    The range to delete for a payload.

    A payload that opened a fenced code block takes the fence with it when the
    closing fence follows the object; otherwise only the object is removed.
    """
    if fence_start is None:
        return span
    end = skip_whitespace(text, span.end)
    if not text.startswith(FENCE, end):
        return span
    return Span(fence_start, end + len(FENCE))
