"""
Test cases for payload kind tables and the shared data model.
"""

import unittest

from jsonsieve.core.kinds import (
    DEFAULT_KINDS,
    KIND_FIELDS,
    SHAPE_SIGNATURES,
    TYPE_ALIASES,
    fields_for,
)
from jsonsieve.core.types import (
    ExtractionResult,
    KnownKind,
    Payload,
    PayloadKind,
    Span,
)


class TestKindTables(unittest.TestCase):
    """Every kind has a row in each table."""

    def test_every_kind_has_fields(self):
        for kind in PayloadKind:
            with self.subTest(kind=kind):
                self.assertIn(kind, KIND_FIELDS)

    def test_enum_values_are_type_aliases(self):
        for kind in PayloadKind:
            if kind in (PayloadKind.UNKNOWN, PayloadKind.EXPLANATION):
                continue
            with self.subTest(kind=kind):
                self.assertEqual(TYPE_ALIASES[kind.value], kind)

    def test_aliases_are_lower_case(self):
        for alias in TYPE_ALIASES:
            self.assertEqual(alias, alias.lower())

    def test_signature_keys_are_expected_fields(self):
        for kind, groups in SHAPE_SIGNATURES:
            for group in groups:
                with self.subTest(kind=kind, group=group):
                    self.assertTrue(group <= set(KIND_FIELDS[kind]))

    def test_default_discriminators_open_an_object(self):
        for known in DEFAULT_KINDS:
            self.assertTrue(known.discriminator.startswith("{"))
            self.assertEqual(known.expected_fields, KIND_FIELDS[known.kind])

    def test_fields_for_is_ordered_union(self):
        kinds = [
            KnownKind("{a", PayloadKind.UNKNOWN, ("x", "y")),
            KnownKind("{b", PayloadKind.UNKNOWN, ("y", "z")),
        ]
        self.assertEqual(fields_for(kinds), ("x", "y", "z"))

    def test_fields_for_empty(self):
        self.assertEqual(fields_for([]), ())


class TestDataModel(unittest.TestCase):
    """Test the value types."""

    def test_span_rejects_inverted_range(self):
        with self.assertRaises(ValueError):
            Span(5, 2)

    def test_span_rejects_negative_start(self):
        with self.assertRaises(ValueError):
            Span(-1, 2)

    def test_span_overlaps(self):
        self.assertTrue(Span(0, 5).overlaps(Span(4, 8)))
        self.assertFalse(Span(0, 5).overlaps(Span(5, 8)))
        self.assertEqual(len(Span(3, 7)), 4)

    def test_known_kind_requires_discriminator(self):
        with self.assertRaises(ValueError):
            KnownKind("", PayloadKind.TABLE)

    def test_payload_consumed_defaults_to_span(self):
        payload = Payload(PayloadKind.TABLE, {}, Span(1, 3))
        self.assertEqual(payload.consumed, Span(1, 3))
        self.assertEqual(payload.span.slice("a{}b"), "{}")

    def test_missing_fields(self):
        payload = Payload(
            PayloadKind.EXPLANATION, {"summary": "ok"}, Span(0, 1), partial=True
        )
        missing = payload.missing_fields()
        self.assertIn("keyPoints", missing)
        self.assertNotIn("summary", missing)
        self.assertEqual(payload.missing_fields(("summary", "exam")), ["exam"])

    def test_result_helpers(self):
        table = Payload(PayloadKind.TABLE, {}, Span(0, 2))
        circuit = Payload(PayloadKind.LOGIC_CIRCUIT, {}, Span(2, 4), partial=True)
        result = ExtractionResult("", [table, circuit])
        self.assertEqual(result.by_kind(PayloadKind.TABLE), [table])
        self.assertTrue(result.has_partial)
        self.assertFalse(ExtractionResult("x").has_partial)


if __name__ == "__main__":
    unittest.main()
