"""
Resource limits for jsonsieve.
This module validates inputs against the configured size limits.
"""

from ..utils.config import SizeLimits
from .exceptions import PreconditionError, SecurityError


class LimitValidator:
    """Validates extraction inputs before any stage runs."""

    def __init__(self, limits: SizeLimits):
        self.limits = limits

    @staticmethod
    def validate_source(text: object) -> None:
        """Fail fast on a missing or non-string source text."""
        if text is None:
            raise PreconditionError(
                "Source text must not be None",
                suggestions=["Pass an empty string when there is no response"],
            )
        if not isinstance(text, str):
            raise PreconditionError(
                f"Source text must be a str, got {type(text).__name__}"
            )

    def validate_input_size(self, text: str) -> None:
        """Validate that input text size is within limits."""
        if len(text) > self.limits.max_input_size:
            raise SecurityError(
                f"Input size {len(text)} exceeds limit {self.limits.max_input_size}"
            )
