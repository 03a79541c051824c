"""
Configuration and limits for jsonsieve extraction.

This module defines the size limits and the per-stage switches that control
scanning, repair and sanitization of generated text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimeoutBehavior(Enum):
    """Defines behavior when a regex operation times out."""

    RAISE_EXCEPTION = "raise"  # Raise RegexTimeoutError
    RETURN_ORIGINAL = "original"  # Return input unchanged / no match
    LOG_AND_CONTINUE = "log"  # Log and return input unchanged / no match


@dataclass
class RegexConfig:
    """Configuration for regex engine behavior."""

    default_timeout: float = 1.0
    timeout_behavior: TimeoutBehavior = TimeoutBehavior.LOG_AND_CONTINUE
    cache_size: int = 64


@dataclass
class SizeLimits:
    """Input size and loop limits."""

    max_input_size: int = 10 * 1024 * 1024
    max_cleanup_iterations: int = 10

    def __post_init__(self) -> None:
        if self.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.max_cleanup_iterations <= 0:
            raise ValueError("max_cleanup_iterations must be positive")


@dataclass
class ScanSettings:
    """Settings for candidate scanning."""

    extract_from_markdown: bool = True
    salvage_truncated_tail: bool = False
    max_payloads: Optional[int] = None


@dataclass
class RepairSettings:
    """Settings for malformed payload repair."""

    escape_control_characters: bool = True
    fix_punctuation: bool = True
    recover_partial_fields: bool = True


@dataclass
class SanitizerSettings:
    """Settings for cleanup of the prose left behind."""

    remove_orphan_artifacts: bool = True
    collapse_whitespace: bool = True
    preserve_paragraphs: bool = False


@dataclass
class ExtractionConfig:
    """Granular control over every extraction stage."""

    limits: Optional[SizeLimits] = None
    scanning: Optional[ScanSettings] = None
    repair: Optional[RepairSettings] = None
    sanitizing: Optional[SanitizerSettings] = None
    regex: Optional[RegexConfig] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = SizeLimits()
        if self.scanning is None:
            self.scanning = ScanSettings()
        if self.repair is None:
            self.repair = RepairSettings()
        if self.sanitizing is None:
            self.sanitizing = SanitizerSettings()
        if self.regex is None:
            self.regex = RegexConfig()

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        assert self.limits is not None
        return self.limits.max_input_size

    @property
    def max_cleanup_iterations(self) -> int:
        """Hard cap on sanitizer cleanup passes."""
        assert self.limits is not None
        return self.limits.max_cleanup_iterations

    @property
    def extract_from_markdown(self) -> bool:
        """Whether fenced ```json blocks produce candidates."""
        assert self.scanning is not None
        return self.scanning.extract_from_markdown

    @property
    def salvage_truncated_tail(self) -> bool:
        """Whether an unterminated object at the end of text is salvaged."""
        assert self.scanning is not None
        return self.scanning.salvage_truncated_tail

    @property
    def max_payloads(self) -> Optional[int]:
        """Stop after this many payloads (None = no limit)."""
        assert self.scanning is not None
        return self.scanning.max_payloads

    @property
    def escape_control_characters(self) -> bool:
        """Whether the control-character repair stage runs."""
        assert self.repair is not None
        return self.repair.escape_control_characters

    @property
    def fix_punctuation(self) -> bool:
        """Whether the comma repair stage runs."""
        assert self.repair is not None
        return self.repair.fix_punctuation

    @property
    def recover_partial_fields(self) -> bool:
        """Whether field-by-field salvage runs after repair fails."""
        assert self.repair is not None
        return self.repair.recover_partial_fields

    @property
    def remove_orphan_artifacts(self) -> bool:
        """Whether stray braces and dangling keys are cleaned up."""
        assert self.sanitizing is not None
        return self.sanitizing.remove_orphan_artifacts

    @property
    def collapse_whitespace(self) -> bool:
        """Whether whitespace runs are collapsed."""
        assert self.sanitizing is not None
        return self.sanitizing.collapse_whitespace

    @property
    def preserve_paragraphs(self) -> bool:
        """Whether blank lines survive whitespace collapsing."""
        assert self.sanitizing is not None
        return self.sanitizing.preserve_paragraphs

    @classmethod
    def conservative(cls) -> "ExtractionConfig":
        """Strict parsing only: payloads that are not valid JSON stay in the text."""
        return cls(
            repair=RepairSettings(
                escape_control_characters=False,
                fix_punctuation=False,
                recover_partial_fields=False,
            )
        )

    @classmethod
    def aggressive(cls) -> "ExtractionConfig":
        """Every repair, including salvage of a truncated trailing object."""
        return cls(scanning=ScanSettings(salvage_truncated_tail=True))

    @classmethod
    def from_features(cls, enabled_features: set[str]) -> "ExtractionConfig":
        """Create configuration from a set of enabled feature names."""
        config = cls(
            scanning=ScanSettings(
                extract_from_markdown=False, salvage_truncated_tail=False
            ),
            repair=RepairSettings(
                escape_control_characters=False,
                fix_punctuation=False,
                recover_partial_fields=False,
            ),
            sanitizing=SanitizerSettings(
                remove_orphan_artifacts=False,
                collapse_whitespace=False,
                preserve_paragraphs=False,
            ),
        )

        field_mapping = {
            "extract_from_markdown": ("scanning", "extract_from_markdown"),
            "salvage_truncated_tail": ("scanning", "salvage_truncated_tail"),
            "escape_control_characters": ("repair", "escape_control_characters"),
            "fix_punctuation": ("repair", "fix_punctuation"),
            "recover_partial_fields": ("repair", "recover_partial_fields"),
            "remove_orphan_artifacts": ("sanitizing", "remove_orphan_artifacts"),
            "collapse_whitespace": ("sanitizing", "collapse_whitespace"),
            "preserve_paragraphs": ("sanitizing", "preserve_paragraphs"),
        }

        for feature_name in enabled_features:
            if feature_name in field_mapping:
                group_name, attr_name = field_mapping[feature_name]
                setattr(getattr(config, group_name), attr_name, True)

        return config
