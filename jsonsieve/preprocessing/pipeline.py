"""
Repair pipeline for malformed payload text.

This module implements the repair cascade: a strict parse, then each repair
step in order, re-parsing after every step and stopping at the first one that
produces valid JSON.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..core.error_handling import RepairExhausted, StrictParseFailure
from ..core.regex_engine import RegexEngine
from ..core.strict import parse_strict
from ..core.types import RepairAttempt, RepairStage
from ..utils.config import ExtractionConfig
from .base import RepairStepBase
from .repairers import ControlCharacterEscaper, PunctuationFixer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepairOutcome:
    """Result of running the cascade over one payload."""

    value: Any = None
    text: str = ""
    attempts: tuple[RepairAttempt, ...] = ()
    strict_failure: Optional[StrictParseFailure] = None
    exhausted: Optional[RepairExhausted] = None

    @property
    def ok(self) -> bool:
        return self.exhausted is None

    @property
    def repaired(self) -> bool:
        """True when the value only parsed after at least one repair step."""
        return self.ok and self.strict_failure is not None


class RepairPipeline:
    """Manages the sequence of repair steps applied to payload text."""

    def __init__(self, steps: Optional[list[RepairStepBase]] = None):
        self.steps = steps or []

    def add_step(self, step: RepairStepBase) -> None:
        """Add a repair step to the pipeline."""
        self.steps.append(step)

    def run(self, text: str, config: Optional[ExtractionConfig] = None) -> RepairOutcome:
        """Parse ``text``, repairing it step by step until it parses."""
        if config is None:
            config = ExtractionConfig()

        outcome = parse_strict(text)
        attempts = [RepairAttempt(RepairStage.STRICT, outcome.ok)]
        if outcome.ok:
            return RepairOutcome(value=outcome.value, text=text, attempts=tuple(attempts))

        strict_failure = outcome.failure
        last_failure = strict_failure
        current = text

        for step in self.steps:
            if not step.should_apply(config):
                continue

            repaired = step.process(current, config)
            if repaired == current:
                attempts.append(RepairAttempt(step.stage, False))
                continue

            current = repaired
            outcome = parse_strict(current)
            attempts.append(RepairAttempt(step.stage, outcome.ok))
            if outcome.ok:
                logger.debug("Payload parsed after %s", step.stage.value)
                return RepairOutcome(
                    value=outcome.value,
                    text=current,
                    attempts=tuple(attempts),
                    strict_failure=strict_failure,
                )
            last_failure = outcome.failure

        assert last_failure is not None
        return RepairOutcome(
            text=current,
            attempts=tuple(attempts),
            strict_failure=strict_failure,
            exhausted=RepairExhausted(last_failure=last_failure, attempts=tuple(attempts)),
        )

    def repair_text(self, text: str, config: Optional[ExtractionConfig] = None) -> str:
        """Apply every applicable step without parsing in between."""
        if config is None:
            config = ExtractionConfig()

        result = text
        for step in self.steps:
            if step.should_apply(config):
                result = step.process(result, config)
        return result

    @classmethod
    def create_default_pipeline(
        cls, engine: Optional[RegexEngine] = None
    ) -> "RepairPipeline":
        """Create the standard cascade: control characters, then punctuation."""
        pipeline = cls()
        pipeline.add_step(ControlCharacterEscaper(engine))
        pipeline.add_step(PunctuationFixer())
        return pipeline
