"""
Payload classification.

Maps a parsed object to a ``PayloadKind``: explicit type fields first, then
the circuit wrapper, then structural shape, then the scanner's hint.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .kinds import CIRCUIT_WRAPPER_KEY, SHAPE_SIGNATURES, TYPE_ALIASES
from .types import PayloadKind


@dataclass(frozen=True)
class Classification:
    """Kind of a payload and the data to hand to its renderer."""

    kind: PayloadKind
    data: Any
    ambiguous: bool = False


def _explicit_kind(obj: dict[str, Any]) -> Optional[PayloadKind]:
    type_value = obj.get("type")
    if isinstance(type_value, str):
        kind = TYPE_ALIASES.get(type_value.strip().lower())
        if kind is not None:
            return kind
    if "chartType" in obj:
        return PayloadKind.CHART
    return None


def _shape_kind(obj: dict[str, Any]) -> Optional[PayloadKind]:
    for kind, groups in SHAPE_SIGNATURES:
        if any(group.issubset(obj) for group in groups):
            return kind
    return None


def classify(obj: Any, hint: Optional[PayloadKind] = None) -> Classification:
    """
    Classify a parsed or partially recovered object.

    Args:
        obj: The parsed value
        hint: Kind announced by the discriminator that located the object

    Returns:
        Classification; ``ambiguous`` is set when no rule matched and the
        kind fell through to UNKNOWN.
    """
    if not isinstance(obj, dict):
        return Classification(PayloadKind.UNKNOWN, obj, ambiguous=True)

    kind = _explicit_kind(obj)
    if kind is not None:
        return Classification(kind, obj)

    wrapped = obj.get(CIRCUIT_WRAPPER_KEY)
    if isinstance(wrapped, dict):
        return Classification(PayloadKind.LOGIC_CIRCUIT, wrapped)
    if CIRCUIT_WRAPPER_KEY in obj:
        return Classification(PayloadKind.LOGIC_CIRCUIT, obj)

    kind = _shape_kind(obj)
    if kind is not None:
        return Classification(kind, obj)

    if hint is not None and hint != PayloadKind.UNKNOWN:
        return Classification(hint, obj)

    return Classification(PayloadKind.UNKNOWN, obj, ambiguous=True)
