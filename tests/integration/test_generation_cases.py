"""
Test cases modelled on real generator output.

These cover the shapes produced when a text model is asked to embed
visualisations in an answer: fenced blocks, wrapped circuits, missing
separators, truncated tails and structured multi-section responses.
"""

import unittest

from jsonsieve import (
    ExtractionConfig,
    FailureKind,
    PayloadKind,
    ScanSettings,
    extract_first_payload,
    extract_from_structured_response,
    extract_payloads,
)


class TestFencedBlocks(unittest.TestCase):
    """Payloads inside markdown code fences."""

    def test_fenced_table_without_type(self):
        text = (
            "Table:\n```json\n"
            '{"rows": [[1, 2]], "headers": ["a", "b"]}'
            "\n```\nThat is all."
        )
        result = extract_payloads(text)
        self.assertEqual(len(result.payloads), 1)
        payload = result.payloads[0]
        self.assertEqual(payload.kind, PayloadKind.TABLE)
        self.assertEqual(payload.consumed.start, text.index("```"))
        self.assertEqual(result.cleaned_text, "Table:\nThat is all.")

    def test_fenced_discriminator_payload(self):
        text = 'Model:\n```json\n{"type": "chemistry", "moleculeData": "CCO"}\n```'
        result = extract_payloads(text)
        self.assertEqual(result.payloads[0].kind, PayloadKind.CHEMISTRY)
        self.assertEqual(result.cleaned_text, "Model:")

    def test_fenced_unknown_shape_is_kept_as_unknown(self):
        text = 'Data:\n```\n{"foo": 1, "bar": [2]}\n```\nEnd'
        result = extract_payloads(text)
        self.assertEqual(result.payloads[0].kind, PayloadKind.UNKNOWN)
        self.assertEqual(result.payloads[0].data, {"foo": 1, "bar": [2]})
        self.assertIn(
            FailureKind.AMBIGUOUS_KIND, [d.failure for d in result.diagnostics]
        )
        self.assertEqual(result.cleaned_text, "Data:\nEnd")

    def test_dict_after_code_block_is_prose(self):
        text = 'Code:\n```python\nprint(1)\n```\n{"name": "x"} is a dict literal.'
        result = extract_payloads(text)
        self.assertEqual(result.payloads, [])
        self.assertEqual(result.cleaned_text, text)

    def test_second_fenced_block_after_code_block(self):
        text = (
            "Run:\n```\nmake\n```\nResult:\n```json\n"
            '{"rows": [[1]], "headers": ["n"]}\n```\n{"name": "x"} stays.'
        )
        result = extract_payloads(text)
        self.assertEqual([p.kind for p in result.payloads], [PayloadKind.TABLE])
        self.assertEqual(
            result.cleaned_text,
            'Run:\n```\nmake\n```\nResult:\n{"name": "x"} stays.',
        )

    def test_markdown_disabled(self):
        text = 'Data:\n```json\n{"rows": [[1]], "data": [1]}\n```'
        config = ExtractionConfig(scanning=ScanSettings(extract_from_markdown=False))
        result = extract_payloads(text, config=config)
        self.assertEqual(result.payloads, [])
        self.assertEqual(result.cleaned_text, text)


class TestCircuitResponses(unittest.TestCase):
    """Circuit payloads as the generator tends to emit them."""

    def test_wrapper_with_missing_separators(self):
        text = (
            "The half adder:\n"
            '{"circuitVisualization": {"title": "Half adder", "gates": ['
            '{"id": "g1", "type": "XOR", "inputs": ["A", "B"]}\n'
            '{"id": "g2", "type": "AND", "inputs": ["A", "B"]}'
            '], "truthTable": {"headers": ["A", "B", "S", "C"], '
            '"rows": [[0, 0, 0, 0], [1, 1, 0, 1]]}}}\n'
            "Sum is XOR, carry is AND."
        )
        result = extract_payloads(text)
        self.assertEqual(len(result.payloads), 1)
        payload = result.payloads[0]
        self.assertEqual(payload.kind, PayloadKind.LOGIC_CIRCUIT)
        self.assertFalse(payload.partial)
        self.assertEqual([gate["id"] for gate in payload.data["gates"]], ["g1", "g2"])
        self.assertEqual(
            result.cleaned_text, "The half adder:\nSum is XOR, carry is AND."
        )

    def test_rom_content_with_multiline_strings(self):
        text = (
            '{"type": "logic_circuit", "title": "ROM", '
            '"romContent": "addr 0: 1010\naddr 1: 0110"}'
        )
        result = extract_payloads(text)
        self.assertEqual(result.payloads[0].data["romContent"], "addr 0: 1010\naddr 1: 0110")


class TestMultiplePayloads(unittest.TestCase):
    """Several payloads in one answer."""

    TEXT = (
        'First {"type":"table","headers":["A"],"rows":[[1]]} then '
        '{"chartType":"bar","data":{"labels":["x"]}} and '
        '{"type":"leaflet","center":[51.5,-0.1],"zoom":10,"markers":[]} done'
    )

    def test_order_and_kinds(self):
        result = extract_payloads(self.TEXT)
        self.assertEqual(
            [payload.kind for payload in result.payloads],
            [PayloadKind.TABLE, PayloadKind.CHART, PayloadKind.MAP],
        )
        self.assertEqual(result.cleaned_text, "First then and done")
        self.assertEqual(len(result.by_kind(PayloadKind.CHART)), 1)

    def test_max_payloads(self):
        config = ExtractionConfig(scanning=ScanSettings(max_payloads=2))
        result = extract_payloads(self.TEXT, config=config)
        self.assertEqual(len(result.payloads), 2)
        self.assertIn('"leaflet"', result.cleaned_text)

    def test_extract_first_payload(self):
        cleaned, payload = extract_first_payload(self.TEXT)
        self.assertEqual(payload.kind, PayloadKind.TABLE)
        self.assertTrue(cleaned.startswith("First then {"))

    def test_extract_first_payload_none(self):
        self.assertEqual(extract_first_payload("nothing here"), ("nothing here", None))

    def test_invalid_candidate_does_not_block_later_ones(self):
        text = 'A {"type":"table","rows":[[1]] B {"type":"3d","shapeType":"cone"} C'
        result = extract_payloads(text)
        self.assertEqual([p.kind for p in result.payloads], [PayloadKind.THREE_D])
        self.assertEqual(result.cleaned_text, 'A {"type":"table","rows":[[1]] B C')


class TestTruncatedTail(unittest.TestCase):
    """Generation cut off inside the last payload."""

    def test_salvage_fenced_tail(self):
        text = 'Intro\n```json\n{"type":"table","title":"T","rows":[[1'
        result = extract_payloads(text, config=ExtractionConfig.aggressive())
        payload = result.payloads[0]
        self.assertTrue(payload.partial)
        self.assertEqual(payload.data, {"type": "table", "title": "T"})
        self.assertEqual(result.cleaned_text, "Intro")

    def test_tail_left_by_default(self):
        text = 'Intro {"type":"table","title":"T","rows":[[1'
        result = extract_payloads(text)
        self.assertEqual(result.payloads, [])
        self.assertEqual(result.cleaned_text, text)


class TestStructuredResponse(unittest.TestCase):
    """Extraction across every section of a parsed response."""

    def test_sections_and_list_items(self):
        response = {
            "summary": 'Intro {"type":"3d","shapeType":"cube"} end',
            "keyPoints": [
                "plain point",
                'See {"type":"chemistry","moleculeData":"CCO"}',
                3,
            ],
            "score": 5,
        }
        result = extract_from_structured_response(response)

        self.assertEqual(result.response["summary"], "Intro end")
        self.assertEqual(result.response["keyPoints"], ["plain point", "See", 3])
        self.assertEqual(result.response["score"], 5)
        self.assertEqual(
            [(item.section, item.payload.kind, item.index) for item in result.payloads],
            [
                ("summary", PayloadKind.THREE_D, None),
                ("keyPoints", PayloadKind.CHEMISTRY, 1),
            ],
        )
        # Input is not modified
        self.assertIn("{", response["summary"])

    def test_non_dict_response_passed_through(self):
        result = extract_from_structured_response("just text")
        self.assertEqual(result.response, "just text")
        self.assertEqual(result.payloads, [])


if __name__ == "__main__":
    unittest.main()
