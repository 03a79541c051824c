"""
Extraction engine - the single entry point that ties the stages together.

Candidates are visited left to right with a cursor, so a payload found inside
an already consumed span is never reported twice and payloads never overlap.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from ..preprocessing.pipeline import RepairPipeline
from ..recovery.strategies import FieldRecoverer
from ..security.exceptions import SecurityError
from ..security.limits import LimitValidator
from ..utils.config import ExtractionConfig
from .classifier import classify
from .error_handling import AmbiguousKind, NoCandidateFound, UnbalancedBraces
from .extractor import BraceIndex, consumed_range
from .kinds import DEFAULT_KINDS, fields_for
from .regex_engine import RegexEngine
from .sanitizer import sanitize
from .scanner import scan_candidates
from .types import (
    Candidate,
    Diagnostic,
    ExtractionResult,
    FailureKind,
    KnownKind,
    Payload,
    Span,
)

logger = logging.getLogger(__name__)


class PayloadExtractor:
    """
    Runs scanner, extractor, repair cascade, partial recovery, classifier and
    sanitizer over one text at a time.

    An instance holds only configuration and compiled patterns; ``extract``
    keeps all per-call state in locals.
    """

    def __init__(
        self,
        known_kinds: Optional[Sequence[KnownKind]] = None,
        config: Optional[ExtractionConfig] = None,
    ):
        self.known_kinds = tuple(DEFAULT_KINDS if known_kinds is None else known_kinds)
        self.config = config or ExtractionConfig()
        self.engine = RegexEngine(self.config.regex)
        self.pipeline = RepairPipeline.create_default_pipeline(self.engine)
        self.recoverer = FieldRecoverer(self.engine, self.config)
        self.all_fields = fields_for(self.known_kinds)

    def extract(self, text: str) -> ExtractionResult:
        """Extract every payload from ``text`` and return the cleaned prose."""
        LimitValidator.validate_source(text)
        try:
            LimitValidator(self.config.limits).validate_input_size(text)
        except SecurityError as e:
            logger.warning("Skipping extraction: %s", e)
            return ExtractionResult(
                cleaned_text=text,
                diagnostics=[Diagnostic(FailureKind.INPUT_TOO_LARGE, 0, str(e))],
            )

        candidates = scan_candidates(
            text,
            self.known_kinds,
            engine=self.engine,
            extract_from_markdown=self.config.extract_from_markdown,
        )

        braces = BraceIndex(text)
        payloads: list[Payload] = []
        diagnostics: list[Diagnostic] = []
        cursor = 0
        limit = self.config.max_payloads

        for candidate in candidates:
            if limit is not None and len(payloads) >= limit:
                break
            if candidate.start < cursor:
                continue

            payload = self._extract_candidate(braces, candidate, cursor, diagnostics)
            if payload is None:
                continue

            assert payload.consumed is not None
            payloads.append(payload)
            cursor = payload.consumed.end

        if not payloads:
            return ExtractionResult(cleaned_text=text, diagnostics=diagnostics)

        cleaned = sanitize(
            text,
            [payload.consumed for payload in payloads if payload.consumed is not None],
            self.config,
            self.engine,
        )
        logger.debug(
            "Extracted %d payloads, %d diagnostics", len(payloads), len(diagnostics)
        )
        return ExtractionResult(
            cleaned_text=cleaned, payloads=payloads, diagnostics=diagnostics
        )

    def _fields_for(self, candidate: Candidate) -> tuple[str, ...]:
        if candidate.kind is not None and candidate.kind.expected_fields:
            return candidate.kind.expected_fields
        return self.all_fields

    def _extract_candidate(
        self,
        braces: BraceIndex,
        candidate: Candidate,
        cursor: int,
        diagnostics: list[Diagnostic],
    ) -> Optional[Payload]:
        fence_start = candidate.fence_start
        if fence_start is not None and fence_start < cursor:
            fence_start = None

        text = braces.text
        located = braces.span(candidate.start)
        if isinstance(located, UnbalancedBraces):
            diagnostics.append(located.to_diagnostic())
            if not self.config.salvage_truncated_tail:
                return None
            span = Span(candidate.start, len(text))
            consumed = Span(fence_start if fence_start is not None else span.start, span.end)
            return self._build_payload(text, span, consumed, candidate, diagnostics)

        consumed = consumed_range(text, located, fence_start)
        return self._build_payload(text, located, consumed, candidate, diagnostics)

    def _build_payload(
        self,
        text: str,
        span: Span,
        consumed: Span,
        candidate: Candidate,
        diagnostics: list[Diagnostic],
    ) -> Optional[Payload]:
        raw = span.slice(text)
        outcome = self.pipeline.run(raw, self.config)
        if outcome.strict_failure is not None:
            diagnostics.append(outcome.strict_failure.to_diagnostic(span.start))

        value: Any
        partial = False
        if outcome.ok:
            value = outcome.value
        else:
            assert outcome.exhausted is not None
            diagnostics.append(outcome.exhausted.to_diagnostic(span.start))
            if not self.config.recover_partial_fields:
                return None

            expected = self._fields_for(candidate)
            recovery = self.recoverer.recover(outcome.text, expected)
            if not recovery.ok:
                diagnostics.append(NoCandidateFound(span, expected).to_diagnostic())
                return None
            value = recovery.data
            partial = True

        hint = candidate.kind.kind if candidate.kind is not None else None
        classification = classify(value, hint)
        if classification.ambiguous:
            keys = tuple(value) if isinstance(value, dict) else ()
            diagnostics.append(AmbiguousKind(span, keys).to_diagnostic())

        logger.debug(
            "Payload %s at [%d, %d)%s",
            classification.kind.value,
            span.start,
            span.end,
            " (partial)" if partial else "",
        )
        return Payload(
            kind=classification.kind,
            data=classification.data,
            span=span,
            partial=partial,
            consumed=consumed,
        )


def extract_payloads(
    text: str,
    known_kinds: Optional[Sequence[KnownKind]] = None,
    config: Optional[ExtractionConfig] = None,
) -> ExtractionResult:
    """
    Extract structured payloads from generated prose.

    Args:
        text: Generated text, prose interleaved with JSON objects
        known_kinds: Discriminators to scan for; defaults to ``DEFAULT_KINDS``
        config: Optional extraction configuration

    Returns:
        ExtractionResult with the cleaned text, payloads in source order and
        any degraded outcomes as diagnostics

    Raises:
        PreconditionError: If ``text`` is None or not a string
    """
    return PayloadExtractor(known_kinds, config).extract(text)


def extract_first_payload(
    text: str,
    known_kinds: Optional[Sequence[KnownKind]] = None,
    config: Optional[ExtractionConfig] = None,
) -> tuple[str, Optional[Payload]]:
    """Extract at most one payload; returns ``(cleaned_text, payload_or_None)``."""
    config = config or ExtractionConfig()
    assert config.scanning is not None
    single = replace(config, scanning=replace(config.scanning, max_payloads=1))
    result = extract_payloads(text, known_kinds, single)
    return result.cleaned_text, (result.payloads[0] if result.payloads else None)


@dataclass(frozen=True)
class SectionPayload:
    """A payload found in one section of a structured response."""

    section: str
    payload: Payload
    index: Optional[int] = None


@dataclass
class StructuredExtraction:
    """A structured response with payloads cut out of its text sections."""

    response: Any
    payloads: list[SectionPayload] = field(default_factory=list)


def extract_from_structured_response(
    response: Any,
    known_kinds: Optional[Sequence[KnownKind]] = None,
    config: Optional[ExtractionConfig] = None,
) -> StructuredExtraction:
    """
    Run extraction over every text section of a parsed response object.

    String values are cleaned in place; string items of list values are
    cleaned individually, with their list index recorded. Other values are
    copied unchanged. A response that is not a dict is returned as is.
    """
    if not isinstance(response, dict):
        return StructuredExtraction(response=response)

    extractor = PayloadExtractor(known_kinds, config)
    cleaned: dict[str, Any] = {}
    found: list[SectionPayload] = []

    for key, value in response.items():
        if isinstance(value, str):
            result = extractor.extract(value)
            cleaned[key] = result.cleaned_text
            found.extend(SectionPayload(key, payload) for payload in result.payloads)
        elif isinstance(value, list):
            items = []
            for index, item in enumerate(value):
                if isinstance(item, str):
                    result = extractor.extract(item)
                    items.append(result.cleaned_text)
                    found.extend(
                        SectionPayload(key, payload, index) for payload in result.payloads
                    )
                else:
                    items.append(item)
            cleaned[key] = items
        else:
            cleaned[key] = value

    return StructuredExtraction(response=cleaned, payloads=found)
