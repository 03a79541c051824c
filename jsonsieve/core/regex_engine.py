"""
Regex execution with timeout protection.

Every pattern jsonsieve runs over generated text goes through ``RegexEngine``,
which compiles with the ``regex`` module (recursive patterns, native
timeouts) and caches compiled patterns per engine instance. An engine is
created per extraction call, so nothing here is shared between callers.
"""

import logging
from collections import OrderedDict
from typing import Any, Callable, Optional, Union

import regex

from ..utils.config import RegexConfig, TimeoutBehavior

logger = logging.getLogger(__name__)

Replacement = Union[str, Callable[[Any], str]]


class RegexTimeoutError(Exception):
    """Raised when a regex operation exceeds its timeout."""

    def __init__(self, pattern: str, input_length: int, timeout: float, operation: str):
        self.pattern = pattern
        self.input_length = input_length
        self.timeout = timeout
        self.operation = operation

        pattern_display = pattern[:100] + "..." if len(pattern) > 100 else pattern
        super().__init__(
            f"Regex {operation} timed out after {timeout}s\n"
            f"Pattern: {pattern_display}\n"
            f"Input length: {input_length} chars"
        )


class PatternCache:
    """LRU cache for compiled regex patterns."""

    def __init__(self, maxsize: int = 64):
        self.maxsize = maxsize
        self._cache: "OrderedDict[tuple[str, int], Any]" = OrderedDict()

    def get(self, pattern: str, flags: int) -> Optional[Any]:
        """Get cached compiled pattern."""
        key = (pattern, flags)
        compiled = self._cache.get(key)
        if compiled is not None:
            self._cache.move_to_end(key)
        return compiled

    def put(self, pattern: str, flags: int, compiled: Any) -> None:
        """Add compiled pattern to cache."""
        self._cache[(pattern, flags)] = compiled
        self._cache.move_to_end((pattern, flags))
        if len(self._cache) > self.maxsize > 0:
            self._cache.popitem(last=False)

    def size(self) -> int:
        """Get current cache size."""
        return len(self._cache)


class RegexEngine:
    """
    Timeout-protected regex operations.

    On timeout the configured ``TimeoutBehavior`` decides: raise
    ``RegexTimeoutError``, or degrade to "no match" / "input unchanged".
    """

    def __init__(self, config: Optional[RegexConfig] = None):
        self.config = config or RegexConfig()
        self.cache = PatternCache(self.config.cache_size)

    def compile(self, pattern: str, flags: int = 0) -> Any:
        """Get compiled pattern from cache or compile new one."""
        compiled = self.cache.get(pattern, flags)
        if compiled is None:
            compiled = regex.compile(pattern, flags)
            self.cache.put(pattern, flags, compiled)
        return compiled

    def search(
        self, pattern: str, string: str, pos: int = 0, flags: int = 0
    ) -> Optional[Any]:
        """Search for pattern in string starting at ``pos``."""
        compiled = self.compile(pattern, flags)
        try:
            return compiled.search(string, pos, timeout=self.config.default_timeout)
        except TimeoutError:
            return self._handle_timeout(pattern, string, "search", None)

    def finditer(self, pattern: str, string: str, flags: int = 0) -> list[Any]:
        """All non-overlapping matches, materialised under one timeout."""
        compiled = self.compile(pattern, flags)
        try:
            return list(compiled.finditer(string, timeout=self.config.default_timeout))
        except TimeoutError:
            return self._handle_timeout(pattern, string, "finditer", [])  # type: ignore[no-any-return]

    def sub(
        self, pattern: str, repl: Replacement, string: str, flags: int = 0
    ) -> str:
        """Replace pattern matches; on timeout the input is returned unchanged."""
        compiled = self.compile(pattern, flags)
        try:
            return compiled.sub(repl, string, timeout=self.config.default_timeout)  # type: ignore[no-any-return]
        except TimeoutError:
            return self._handle_timeout(pattern, string, "sub", string)  # type: ignore[no-any-return]

    def _handle_timeout(
        self, pattern: str, string: str, operation: str, fallback: Any
    ) -> Any:
        """Handle timeout according to configured behavior."""
        behavior = self.config.timeout_behavior
        if behavior == TimeoutBehavior.RAISE_EXCEPTION:
            raise RegexTimeoutError(
                pattern, len(string), self.config.default_timeout, operation
            )
        if behavior == TimeoutBehavior.LOG_AND_CONTINUE:
            logger.warning(
                "Regex %s timed out on pattern %r (%d chars of input)",
                operation,
                pattern[:50],
                len(string),
            )
        return fallback
