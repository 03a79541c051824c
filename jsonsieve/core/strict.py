"""
Strict JSON parsing.

A thin wrapper over the standard library parser that reports failure as a
value instead of raising.
"""

import json
from dataclasses import dataclass
from typing import Any, Optional

from .error_handling import ErrorContextBuilder, StrictParseFailure


@dataclass(frozen=True)
class ParseOutcome:
    """Either a parsed value or the reason parsing failed."""

    value: Any = None
    failure: Optional[StrictParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def parse_strict(text: str) -> ParseOutcome:
    """Parse ``text`` with the canonical JSON parser."""
    try:
        return ParseOutcome(value=json.loads(text))
    except json.JSONDecodeError as e:
        return ParseOutcome(
            failure=StrictParseFailure(
                message=e.msg, position=e.pos, line=e.lineno, column=e.colno
            )
        )
    except RecursionError:
        context = ErrorContextBuilder.build_context(len(text), text)
        return ParseOutcome(
            failure=StrictParseFailure(
                message="Nesting too deep",
                position=context.position,
                line=context.line,
                column=context.column,
            )
        )
