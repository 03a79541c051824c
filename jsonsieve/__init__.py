"""
jsonsieve - Lift structured JSON payloads out of generated prose.

A text generator asked to embed tables, circuits, charts and other
structured content in its answers will sometimes truncate an object, leave a
raw newline inside a string or forget a comma. jsonsieve finds those
payloads, repairs what it can, classifies each one by kind and hands back the
prose with the payloads cut out.

Key Features:
- Discriminator and markdown-fence based candidate scanning
- Brace-balance extraction that ignores braces inside strings
- Repair cascade: control-character escaping, then punctuation fixes
- Field-by-field salvage of payloads that still do not parse
- Explicit payload kinds with structural classification
- Idempotent cleanup of the remaining prose

Quick Start:
    from jsonsieve import extract_payloads

    result = extract_payloads(generated_text)
    for payload in result.payloads:
        render(payload.kind, payload.data)
    show(result.cleaned_text)
"""

from .core.classifier import classify
from .core.engine import (
    PayloadExtractor,
    SectionPayload,
    StructuredExtraction,
    extract_first_payload,
    extract_from_structured_response,
    extract_payloads,
)
from .core.kinds import DEFAULT_KINDS, KIND_FIELDS
from .core.types import (
    Diagnostic,
    ExtractionResult,
    FailureKind,
    KnownKind,
    Payload,
    PayloadKind,
    RepairAttempt,
    RepairStage,
    Span,
)
from .recovery.strategies import recover_fields
from .security.exceptions import PreconditionError, SecurityError, SieveError
from .utils.config import (
    ExtractionConfig,
    RegexConfig,
    RepairSettings,
    SanitizerSettings,
    ScanSettings,
    SizeLimits,
    TimeoutBehavior,
)

__version__ = "0.1.0"
__author__ = "jsonsieve contributors"

__all__ = [
    # Entry points
    "extract_payloads", "extract_first_payload", "extract_from_structured_response",
    "PayloadExtractor", "classify", "recover_fields",
    # Data model
    "ExtractionResult", "Payload", "PayloadKind", "KnownKind", "Span",
    "Diagnostic", "FailureKind", "RepairAttempt", "RepairStage",
    "SectionPayload", "StructuredExtraction",
    "DEFAULT_KINDS", "KIND_FIELDS",
    # Configuration classes
    "ExtractionConfig", "SizeLimits", "ScanSettings", "RepairSettings",
    "SanitizerSettings", "RegexConfig", "TimeoutBehavior",
    # Exception classes
    "SieveError", "PreconditionError", "SecurityError",
]
