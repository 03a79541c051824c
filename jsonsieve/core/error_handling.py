"""
Failure values for the extraction stages.

Each stage returns either its result or one of these records; the engine
turns them into ``Diagnostic`` entries. None of them is ever raised.
"""

from dataclasses import dataclass, field

from .types import Diagnostic, FailureKind, RepairAttempt, Span


@dataclass(frozen=True)
class ErrorContext:
    """Line and column of an offset, plus a short excerpt around it."""

    position: int
    line: int
    column: int
    context_text: str


class ErrorContextBuilder:
    """Builds error context information from an offset into some text."""

    @staticmethod
    def build_context(position: int, text: str, context_length: int = 40) -> ErrorContext:
        """Build error context from position and text."""
        if not text:
            return ErrorContext(position=position, line=1, column=position + 1, context_text="")

        position = max(0, min(position, len(text)))
        line = text[:position].count("\n") + 1
        line_start = text.rfind("\n", 0, position) + 1
        column = position - line_start + 1

        start = max(0, position - context_length // 2)
        end = min(len(text), position + context_length // 2)
        return ErrorContext(
            position=position, line=line, column=column, context_text=text[start:end]
        )


@dataclass(frozen=True)
class UnbalancedBraces:
    """The extractor reached end of text (or a bad start) without closing."""

    start: int
    depth: int
    reason: str = "unterminated"

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            FailureKind.UNBALANCED_BRACES,
            self.start,
            f"{self.reason} object (depth {self.depth} at end of scan)",
        )


@dataclass(frozen=True)
class StrictParseFailure:
    """The canonical JSON parser rejected the text."""

    message: str
    position: int
    line: int = 1
    column: int = 1

    def to_diagnostic(self, offset: int) -> Diagnostic:
        return Diagnostic(
            FailureKind.STRICT_PARSE_FAILURE,
            offset + self.position,
            f"{self.message} (line {self.line}, column {self.column})",
        )


@dataclass(frozen=True)
class RepairExhausted:
    """Every repair stage ran and the text still does not parse."""

    last_failure: StrictParseFailure
    attempts: tuple[RepairAttempt, ...] = field(default_factory=tuple)

    def to_diagnostic(self, offset: int) -> Diagnostic:
        stages = ", ".join(attempt.stage.value for attempt in self.attempts)
        return Diagnostic(
            FailureKind.REPAIR_EXHAUSTED,
            offset,
            f"repair stages exhausted ({stages}): {self.last_failure.message}",
        )


@dataclass(frozen=True)
class NoCandidateFound:
    """Partial recovery found no field to salvage; the span stays in the text."""

    span: Span
    expected_fields: tuple[str, ...] = ()

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            FailureKind.NO_CANDIDATE_FOUND,
            self.span.start,
            f"none of {len(self.expected_fields)} expected fields recoverable",
        )


@dataclass(frozen=True)
class AmbiguousKind:
    """The classifier could not name a kind; the payload is kept as UNKNOWN."""

    span: Span
    keys: tuple[str, ...] = ()

    def to_diagnostic(self) -> Diagnostic:
        return Diagnostic(
            FailureKind.AMBIGUOUS_KIND,
            self.span.start,
            f"unrecognised payload keys: {', '.join(self.keys[:8])}",
        )
