"""
Base classes for repair steps.

This module contains the base class used by repair steps so they can be
composed in a ``RepairPipeline``.
"""

from ..core.types import RepairStage
from ..utils.config import ExtractionConfig


class RepairStepBase:
    """Base class for repair steps with common functionality."""

    stage: RepairStage = RepairStage.STRICT

    def should_apply(self, _config: ExtractionConfig) -> bool:
        """Default implementation - always apply. Override in subclasses."""
        return True

    def process(self, text: str, _config: ExtractionConfig) -> str:
        """Process the text. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement process()")
