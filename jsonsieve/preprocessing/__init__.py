"""
Payload repair module.

This module provides the repair cascade applied to payload text that the
strict parser rejects. Each repair is a focused, single-responsibility step;
steps are composed into a pipeline that re-parses after each one.
"""

from .base import RepairStepBase
from .pipeline import RepairOutcome, RepairPipeline
from .repairers import ControlCharacterEscaper, PunctuationFixer

__all__ = [
    "RepairPipeline",
    "RepairOutcome",
    "RepairStepBase",
    "ControlCharacterEscaper",
    "PunctuationFixer",
]
