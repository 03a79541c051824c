"""
Data model shared by every extraction stage.

All values are created and consumed within a single call to the engine; none
of them holds references to state outside that call.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class PayloadKind(Enum):
    """Kinds of structured payload a renderer can be routed to."""

    TABLE = "table"
    KMAP = "kmap"
    PLA = "pla"
    LOGIC_CIRCUIT = "logic_circuit"
    THREE_D = "3d"
    CHEMISTRY = "chemistry"
    PLOTLY = "plotly"
    CHART = "chart"
    MAP = "leaflet"
    EXPLANATION = "explanation"
    UNKNOWN = "unknown"


class RepairStage(Enum):
    """Stages of the repair cascade, in the order they run."""

    STRICT = "strict"
    ESCAPE_CONTROL_CHARACTERS = "escape_control_characters"
    FIX_PUNCTUATION = "fix_punctuation"


class FailureKind(Enum):
    """Degraded outcomes recorded while extracting."""

    UNBALANCED_BRACES = "unbalanced_braces"
    STRICT_PARSE_FAILURE = "strict_parse_failure"
    REPAIR_EXHAUSTED = "repair_exhausted"
    NO_CANDIDATE_FOUND = "no_candidate_found"
    AMBIGUOUS_KIND = "ambiguous_kind"
    INPUT_TOO_LARGE = "input_too_large"


@dataclass(frozen=True)
class Span:
    """Half-open character range ``[start, end)`` of the source text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        """Return the substring of ``text`` covered by this span."""
        return text[self.start : self.end]

    def overlaps(self, other: "Span") -> bool:
        """True if the two ranges share at least one character."""
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class KnownKind:
    """A discriminator pattern and the payload kind it announces."""

    discriminator: str
    kind: PayloadKind
    expected_fields: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.discriminator:
            raise ValueError("discriminator must be a non-empty string")


@dataclass(frozen=True)
class Candidate:
    """A suspected payload start found by the scanner."""

    start: int
    discriminator: Optional[str] = None
    kind: Optional[KnownKind] = None
    fence_start: Optional[int] = None


@dataclass(frozen=True)
class RepairAttempt:
    """One stage of the repair cascade and whether its output parsed."""

    stage: RepairStage
    succeeded: bool


@dataclass
class Payload:
    """A structured object lifted out of the source text."""

    kind: PayloadKind
    data: dict[str, Any]
    span: Span
    partial: bool = False
    consumed: Optional[Span] = None

    def __post_init__(self) -> None:
        if self.consumed is None:
            self.consumed = self.span

    def missing_fields(self, expected: Optional[tuple[str, ...]] = None) -> list[str]:
        """Expected fields for this kind that the payload does not carry."""
        if expected is None:
            # Imported lazily: kinds imports this module.
            from .kinds import KIND_FIELDS  # pylint: disable=import-outside-toplevel

            expected = KIND_FIELDS.get(self.kind, ())
        return [name for name in expected if name not in self.data]


@dataclass(frozen=True)
class Diagnostic:
    """A degraded outcome, kept for callers that want to inspect it."""

    failure: FailureKind
    offset: int
    message: str = ""


@dataclass
class ExtractionResult:
    """Cleaned prose plus the payloads removed from it, left to right."""

    cleaned_text: str
    payloads: list[Payload] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def by_kind(self, kind: PayloadKind) -> list[Payload]:
        """Payloads of a single kind, in source order."""
        return [payload for payload in self.payloads if payload.kind == kind]

    @property
    def has_partial(self) -> bool:
        """Whether any payload was only partially recovered."""
        return any(payload.partial for payload in self.payloads)
