"""
Exception classes for jsonsieve.

Malformed payloads never raise: those outcomes are reported as values (see
``jsonsieve.core.error_handling``). The exceptions here cover caller mistakes
and resource limits only.
"""

from typing import Optional


class SieveError(Exception):
    """Base exception for jsonsieve errors."""

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]
        if self.position is not None:
            parts[0] += f" at offset {self.position}"
        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)
        return "\n".join(parts)


class PreconditionError(SieveError, ValueError):
    """Raised when the entry point is called without usable source text."""


class SecurityError(SieveError):
    """Raised when an input exceeds a configured resource limit."""
