"""
Candidate scanning.

Finds the offsets where a payload probably starts, either because a known
discriminator substring (``{"type":"logic_circuit"``) appears there or
because a fenced ```json block opens on an object.
"""

import logging
from collections.abc import Sequence
from typing import Optional

import regex

from .regex_engine import RegexEngine
from .types import Candidate, KnownKind

logger = logging.getLogger(__name__)

# Every fence marker. Markers pair up in order, so only the first, third,
# fifth... open a block; ``opens`` is set when that block starts on a brace.
FENCE_PATTERN = r"```(?P<opens>(?:json|javascript|js)?\s*(?=\{))?"


def discriminator_pattern(discriminator: str) -> str:
    """Regex for a literal discriminator allowing one space after each colon."""
    return ": ?".join(regex.escape(part) for part in discriminator.split(":"))


def build_scan_pattern(known_kinds: Sequence[KnownKind]) -> str:
    """
    Alternation over every discriminator, in list order.

    Each alternative is a named group ``k<index>`` so the winning entry can be
    recovered from ``match.lastgroup``. Alternation tries branches left to
    right at the leftmost position, which gives "earliest start wins, ties go
    to the earlier entry".
    """
    return "|".join(
        f"(?P<k{index}>{discriminator_pattern(known.discriminator)})"
        for index, known in enumerate(known_kinds)
    )


def scan_candidates(
    text: str,
    known_kinds: Sequence[KnownKind],
    engine: Optional[RegexEngine] = None,
    extract_from_markdown: bool = True,
) -> list[Candidate]:
    """
    Return payload candidates in left-to-right order.

    Args:
        text: Source text to scan
        known_kinds: Discriminators to look for, in priority order
        engine: Regex engine to run patterns through
        extract_from_markdown: Also report objects opening a fenced code block

    Returns:
        Non-overlapping candidates sorted by start offset; empty if none
    """
    engine = engine or RegexEngine()
    candidates: dict[int, Candidate] = {}

    if known_kinds:
        for match in engine.finditer(build_scan_pattern(known_kinds), text):
            index = int(match.lastgroup[1:])
            known = known_kinds[index]
            candidates[match.start()] = Candidate(
                start=match.start(), discriminator=known.discriminator, kind=known
            )

    if extract_from_markdown:
        markers = engine.finditer(FENCE_PATTERN, text)
        for match in markers[::2]:
            if match.group("opens") is None:
                continue
            brace = match.end()
            existing = candidates.get(brace)
            candidates[brace] = Candidate(
                start=brace,
                discriminator=existing.discriminator if existing else None,
                kind=existing.kind if existing else None,
                fence_start=match.start(),
            )

    ordered = [candidates[start] for start in sorted(candidates)]
    logger.debug("Scanned %d chars, found %d candidates", len(text), len(ordered))
    return ordered
