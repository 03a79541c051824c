"""
jsonsieve Core Extraction Engine.

This module provides the scanning, extraction, parsing, classification and
sanitization stages.
"""

from .classifier import Classification, classify
from .engine import (
    PayloadExtractor,
    SectionPayload,
    StructuredExtraction,
    extract_first_payload,
    extract_from_structured_response,
    extract_payloads,
)
from .extractor import BraceIndex, consumed_range, extract_span
from .sanitizer import sanitize
from .scanner import scan_candidates
from .strict import ParseOutcome, parse_strict

__all__ = [
    "extract_payloads", "extract_first_payload", "extract_from_structured_response",
    "PayloadExtractor", "SectionPayload", "StructuredExtraction",
    "scan_candidates", "extract_span", "BraceIndex", "consumed_range",
    "parse_strict", "ParseOutcome",
    "classify", "Classification",
    "sanitize",
]
