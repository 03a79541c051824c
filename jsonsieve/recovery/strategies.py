"""
Partial field recovery - salvage individual fields from a payload that does
not parse even after repair.

Each expected field is located by name and its value is parsed in isolation,
so a truncated or corrupted neighbour does not take the whole payload down.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Optional

import regex

from ..core.regex_engine import RegexEngine
from ..core.strict import parse_strict
from ..preprocessing.pipeline import RepairPipeline
from ..preprocessing.string_utils import (
    STRING_LITERAL_PATTERN,
    iterate_with_string_tracking,
    unescape_fallback,
)
from ..utils.config import ExtractionConfig

logger = logging.getLogger(__name__)

# Balanced arrays and objects via recursion; strings inside them may contain
# brackets. An unterminated array or object never matches.
VALUE_PATTERN = (
    r"(?P<value>"
    + STRING_LITERAL_PATTERN
    + r"|(?P<array>\[(?:[^\[\]\"]++|"
    + STRING_LITERAL_PATTERN
    + r"|(?&array))*+\])"
    + r"|(?P<object>\{(?:[^{}\"]++|"
    + STRING_LITERAL_PATTERN
    + r"|(?&object))*+\})"
    + r"|-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?(?![\w.])"
    + r"|(?:true|false|null)\b)"
)


def field_pattern(name: str) -> str:
    """Pattern matching ``"name": <value>`` with the value in group ``value``."""
    return '"' + regex.escape(name) + r'"\s*:\s*' + VALUE_PATTERN


def literal_starts_at_depth(text: str, depth: int = 1) -> set[int]:
    """
    Offsets of the string literals that open ``depth`` brackets deep.

    Both ``{`` and ``[`` count, so with the default a literal is a key or
    value of the outermost object and not of anything nested in it.
    """
    offsets = set()
    level = 0
    inside = False

    for i, char, in_string, closes in iterate_with_string_tracking(text):
        if in_string:
            if not inside and level == depth:
                offsets.add(i)
            inside = not closes
            continue

        if char in "{[":
            level += 1
        elif char in "}]":
            level -= 1

    return offsets


@dataclass
class FieldRecovery:
    """Fields salvaged from one payload."""

    data: dict[str, Any] = field(default_factory=dict)
    recovered: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """True if at least one field was recovered."""
        return bool(self.data)

    @property
    def success_rate(self) -> float:
        total = len(self.recovered) + len(self.missing)
        if total == 0:
            return 0.0
        return len(self.recovered) / total * 100


class FieldRecoverer:
    """Recovers expected fields one by one from unparseable text."""

    def __init__(
        self,
        engine: Optional[RegexEngine] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.config = config or ExtractionConfig()
        self.engine = engine or RegexEngine(self.config.regex)
        self.pipeline = RepairPipeline.create_default_pipeline(self.engine)

    def recover(self, text: str, expected_fields: Sequence[str]) -> FieldRecovery:
        """
        Try every field in ``expected_fields``.

        A key of the outermost object wins over a nested key of the same
        name; among equals the first occurrence wins.
        """
        result = FieldRecovery()
        top_level = literal_starts_at_depth(text)

        for name in expected_fields:
            if name in result.data:
                continue

            pattern = field_pattern(name)
            matches = self.engine.finditer(pattern, text, flags=regex.DOTALL)
            match = next(
                (m for m in matches if m.start() in top_level),
                matches[0] if matches else None,
            )
            if match is None:
                result.missing.append(name)
                continue

            found, value = self._parse_value(match.group("value"))
            if not found:
                result.missing.append(name)
                continue

            result.data[name] = value
            result.recovered.append(name)

        logger.debug(
            "Recovered %d of %d fields", len(result.recovered), len(expected_fields)
        )
        return result

    def _parse_value(self, raw: str) -> tuple[bool, Any]:
        outcome = parse_strict(raw)
        if outcome.ok:
            return True, outcome.value

        outcome = parse_strict(self.pipeline.repair_text(raw, self.config))
        if outcome.ok:
            return True, outcome.value

        if raw.startswith('"'):
            return True, unescape_fallback(raw)

        return False, None


def recover_fields(
    text: str,
    expected_fields: Sequence[str],
    engine: Optional[RegexEngine] = None,
    config: Optional[ExtractionConfig] = None,
) -> FieldRecovery:
    """
    Salvage the named fields from ``text``.

    Args:
        text: Payload text, usually already through the repair cascade
        expected_fields: Field names to look for, in priority order
        engine: Regex engine to reuse; a fresh one is created if omitted
        config: Extraction configuration (repair toggles, regex timeout)

    Returns:
        FieldRecovery with the parsed values of every field found
    """
    return FieldRecoverer(engine, config).recover(text, expected_fields)
