"""
Payload kinds known to the generator prompts.

Adding a kind means adding a ``PayloadKind`` member and one row to each of the
tables below.
"""

from collections.abc import Sequence

from .types import KnownKind, PayloadKind

# Fields each kind may carry. All are optional; partial recovery looks for
# exactly these names.
KIND_FIELDS: dict[PayloadKind, tuple[str, ...]] = {
    PayloadKind.TABLE: ("type", "title", "headers", "columns", "rows", "data"),
    PayloadKind.KMAP: (
        "type", "title", "variables", "minterms", "dontCares", "groups", "expression",
    ),
    PayloadKind.PLA: (
        "type", "title", "inputs", "outputs", "products", "andPlane", "orPlane",
    ),
    PayloadKind.LOGIC_CIRCUIT: (
        "type", "title", "gates", "inputs", "outputs", "connections",
        "truthTable", "romContent",
    ),
    PayloadKind.THREE_D: ("type", "title", "shapeType", "color", "dimensions", "rotate"),
    PayloadKind.CHEMISTRY: ("type", "title", "moleculeData", "format"),
    PayloadKind.PLOTLY: ("type", "title", "data", "layout"),
    PayloadKind.CHART: ("chartType", "title", "data", "options"),
    PayloadKind.MAP: ("type", "title", "center", "zoom", "markers"),
    PayloadKind.EXPLANATION: (
        "contentType", "summary", "keyPoints", "explanation", "examples", "exam",
    ),
    PayloadKind.UNKNOWN: (),
}

# Values of an explicit "type" field, lower-cased.
TYPE_ALIASES: dict[str, PayloadKind] = {
    "table": PayloadKind.TABLE,
    "data_table": PayloadKind.TABLE,
    "truth_table": PayloadKind.TABLE,
    "kmap": PayloadKind.KMAP,
    "k-map": PayloadKind.KMAP,
    "k_map": PayloadKind.KMAP,
    "karnaugh_map": PayloadKind.KMAP,
    "pla": PayloadKind.PLA,
    "logic_circuit": PayloadKind.LOGIC_CIRCUIT,
    "circuit": PayloadKind.LOGIC_CIRCUIT,
    "3d": PayloadKind.THREE_D,
    "three_d": PayloadKind.THREE_D,
    "chemistry": PayloadKind.CHEMISTRY,
    "molecule": PayloadKind.CHEMISTRY,
    "plotly": PayloadKind.PLOTLY,
    "chart": PayloadKind.CHART,
    "leaflet": PayloadKind.MAP,
    "map": PayloadKind.MAP,
}

# Structural signatures, checked in order: a kind matches when any of the
# key groups is fully present.
SHAPE_SIGNATURES: tuple[tuple[PayloadKind, tuple[frozenset[str], ...]], ...] = (
    (
        PayloadKind.LOGIC_CIRCUIT,
        (frozenset({"gates"}), frozenset({"truthTable"}), frozenset({"romContent"})),
    ),
    (
        PayloadKind.TABLE,
        (
            frozenset({"rows", "data"}),
            frozenset({"rows", "headers"}),
            frozenset({"rows", "columns"}),
        ),
    ),
    (PayloadKind.THREE_D, (frozenset({"shapeType"}),)),
    (PayloadKind.CHEMISTRY, (frozenset({"moleculeData"}),)),
    (PayloadKind.MAP, (frozenset({"center", "markers"}),)),
    (PayloadKind.PLA, (frozenset({"andPlane"}), frozenset({"orPlane"}))),
    (PayloadKind.KMAP, (frozenset({"minterms", "variables"}),)),
    (PayloadKind.PLOTLY, (frozenset({"data", "layout"}),)),
    (PayloadKind.EXPLANATION, (frozenset({"keyPoints"}), frozenset({"contentType"}))),
)

CIRCUIT_WRAPPER_KEY = "circuitVisualization"


def _known(discriminator: str, kind: PayloadKind) -> KnownKind:
    return KnownKind(discriminator, kind, KIND_FIELDS[kind])


DEFAULT_KINDS: tuple[KnownKind, ...] = (
    _known('{"circuitVisualization":', PayloadKind.LOGIC_CIRCUIT),
    _known('{"type":"logic_circuit"', PayloadKind.LOGIC_CIRCUIT),
    _known('{"type":"table"', PayloadKind.TABLE),
    _known('{"type":"kmap"', PayloadKind.KMAP),
    _known('{"type":"pla"', PayloadKind.PLA),
    _known('{"type":"3d"', PayloadKind.THREE_D),
    _known('{"type":"chemistry"', PayloadKind.CHEMISTRY),
    _known('{"type":"plotly"', PayloadKind.PLOTLY),
    _known('{"type":"leaflet"', PayloadKind.MAP),
    _known('{"chartType":', PayloadKind.CHART),
    _known('{"contentType":', PayloadKind.EXPLANATION),
)


def fields_for(known_kinds: Sequence[KnownKind]) -> tuple[str, ...]:
    """Union of the expected fields of ``known_kinds``, first occurrence order."""
    seen: dict[str, None] = {}
    for known in known_kinds:
        for name in known.expected_fields:
            seen.setdefault(name, None)
    return tuple(seen)
