"""
jsonsieve partial recovery.

Field-by-field salvage for payloads the repair cascade could not fix.
"""

from .strategies import FieldRecoverer, FieldRecovery, field_pattern, recover_fields

__all__ = [
    "recover_fields",
    "FieldRecoverer",
    "FieldRecovery",
    "field_pattern",
]
