"""
Record resolution package.

Finds the training record whose expiry governs a person's current validity
for a module.
"""

from .resolver import (
    RecordIndex,
    is_currently_valid,
    module_code_for,
    resolve_governing_record,
    select_governing,
)

__all__ = [
    "RecordIndex",
    "is_currently_valid",
    "module_code_for",
    "resolve_governing_record",
    "select_governing",
]
