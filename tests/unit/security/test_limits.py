"""
Test cases for input limits and validation.
"""

import unittest

from jsonsieve.security.exceptions import PreconditionError, SecurityError
from jsonsieve.security.limits import LimitValidator
from jsonsieve.utils.config import SizeLimits


class TestLimitValidator(unittest.TestCase):
    """Test LimitValidator functionality."""

    def setUp(self):
        """Set up test validator with custom limits."""
        self.validator = LimitValidator(SizeLimits(max_input_size=1000))

    def test_input_size_validation_pass(self):
        """Test input size validation within limits."""
        self.validator.validate_input_size("x" * 1000)  # Should not raise

    def test_input_size_validation_fail(self):
        """Test input size validation exceeding limits."""
        with self.assertRaises(SecurityError) as cm:
            self.validator.validate_input_size("x" * 1001)
        self.assertIn("Input size 1001 exceeds limit 1000", str(cm.exception))

    def test_source_none(self):
        with self.assertRaises(PreconditionError) as cm:
            LimitValidator.validate_source(None)
        self.assertIn("Suggestions:", str(cm.exception))

    def test_source_wrong_type(self):
        with self.assertRaises(PreconditionError) as cm:
            LimitValidator.validate_source(b"bytes")
        self.assertIn("got bytes", str(cm.exception))

    def test_source_empty_string_is_valid(self):
        LimitValidator.validate_source("")  # Should not raise


if __name__ == "__main__":
    unittest.main()
