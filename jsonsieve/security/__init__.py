"""
jsonsieve Validation System.

This module provides input limits and exception handling.
"""

from .exceptions import PreconditionError, SecurityError, SieveError
from .limits import LimitValidator

__all__ = ["SieveError", "PreconditionError", "SecurityError", "LimitValidator"]
