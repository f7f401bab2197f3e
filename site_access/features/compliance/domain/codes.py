"""
Module-code extraction.

Training records point at a free-text session label such as
``"RAC 02 - Vehicles and Mobile Equipment"`` rather than a catalog key.
The code is whatever precedes the first ``" - "`` with every whitespace
character removed, so ``"RAC 02 - Vehicles"`` and ``"RAC02"`` both become
``"RAC02"``. Catalog codes and requirement-profile keys go through the same
function so both sides of every comparison are normalized identically.
"""

import re

SEPARATOR = " - "
_WHITESPACE = re.compile(r"\s+")


def extract_module_code(descriptor: str | None) -> str:
    if not descriptor:
        return ""
    head = descriptor.split(SEPARATOR, 1)[0]
    return _WHITESPACE.sub("", head)


def normalize_required_modules(required: dict[str, bool] | None) -> dict[str, bool]:
    """
    Normalize requirement keys, keeping True if any spelling of a code is required.
    """
    normalized: dict[str, bool] = {}
    for key, flag in (required or {}).items():
        code = extract_module_code(key)
        if not code:
            continue
        normalized[code] = normalized.get(code, False) or flag is True
    return normalized
