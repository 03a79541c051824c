"""
Test cases for exception formatting.
"""

import unittest

from jsonsieve.security.exceptions import PreconditionError, SecurityError, SieveError


class TestSieveError(unittest.TestCase):
    """Test message formatting of the base error."""

    def test_message_only(self):
        error = SieveError("Something failed")
        self.assertEqual(str(error), "Something failed")
        self.assertIsNone(error.position)
        self.assertEqual(error.suggestions, [])

    def test_with_position(self):
        self.assertEqual(str(SieveError("Bad input", position=12)), "Bad input at offset 12")

    def test_with_suggestions(self):
        error = SieveError("Bad input", suggestions=["Try this", "Or that"])
        self.assertEqual(
            str(error), "Bad input\nSuggestions:\n  - Try this\n  - Or that"
        )

    def test_hierarchy(self):
        self.assertTrue(issubclass(PreconditionError, SieveError))
        self.assertTrue(issubclass(PreconditionError, ValueError))
        self.assertTrue(issubclass(SecurityError, SieveError))
        self.assertFalse(issubclass(SecurityError, ValueError))


if __name__ == "__main__":
    unittest.main()
