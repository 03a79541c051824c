"""
Text sanitization after payload removal.

Removing a payload can leave fragments behind: a stray ``{`` from a truncated
object, a key whose value was cut off, an empty fence. The cleanup pass
removes these and normalizes whitespace, repeating until the text stops
changing or the iteration cap is reached.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from ..utils.config import ExtractionConfig
from .regex_engine import RegexEngine
from .types import Span

logger = logging.getLogger(__name__)

TRAILING_OPEN_BRACE = r"\{\s*\Z"
# A key only counts as dangling inside an object, right after "{" or ",".
DANGLING_KEY = r'(?<=[{,]\s*)"(?:[^"\\\n]|\\.)*"\s*:\s*(?=[}\]]|\Z)'
EMPTY_OBJECT = r"\{\s*\}"
EMPTY_FENCE = r"```[A-Za-z]*\s*```"
WHITESPACE_RUN = r"\s{2,}"

ORPHAN_PATTERNS = (TRAILING_OPEN_BRACE, DANGLING_KEY, EMPTY_OBJECT, EMPTY_FENCE)


def remove_spans(text: str, spans: Iterable[Span]) -> str:
    """Remove each span's exact character range from ``text``."""
    result = text
    for span in sorted(spans, key=lambda s: s.start, reverse=True):
        result = result[: span.start] + result[span.end :]
    return result


class TextSanitizer:
    """Cleans the prose left after payload spans have been cut out."""

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        engine: Optional[RegexEngine] = None,
    ):
        self.config = config or ExtractionConfig()
        self.engine = engine or RegexEngine(self.config.regex)

    def _collapse(self, match: Any) -> str:
        run = match.group(0)
        newlines = run.count("\n")
        if newlines >= 2 and self.config.preserve_paragraphs:
            return "\n\n"
        if newlines:
            return "\n"
        return " "

    def cleanup_once(self, text: str) -> str:
        """Apply every enabled cleanup rule once."""
        result = text
        if self.config.remove_orphan_artifacts:
            for pattern in ORPHAN_PATTERNS:
                result = self.engine.sub(pattern, "", result)
        if self.config.collapse_whitespace:
            result = self.engine.sub(WHITESPACE_RUN, self._collapse, result)
            result = result.strip()
        return result

    def clean(self, text: str) -> str:
        """Run the cleanup rules until nothing changes."""
        current = text
        for _ in range(self.config.max_cleanup_iterations):
            cleaned = self.cleanup_once(current)
            if cleaned == current:
                return cleaned
            current = cleaned

        logger.warning(
            "Cleanup did not settle after %d iterations; returning best effort",
            self.config.max_cleanup_iterations,
        )
        return current


def sanitize(
    text: str,
    spans: Iterable[Span],
    config: Optional[ExtractionConfig] = None,
    engine: Optional[RegexEngine] = None,
) -> str:
    """
    Remove consumed spans from ``text`` and clean up what is left.

    Args:
        text: The original source text
        spans: Ranges to remove; must not overlap
        config: Extraction configuration (cleanup rules, iteration cap)
        engine: Regex engine to reuse

    Returns:
        The cleaned text
    """
    return TextSanitizer(config, engine).clean(remove_spans(text, spans))
