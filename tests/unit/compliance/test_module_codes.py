from datetime import date, datetime

import pytest

from site_access.features.compliance.domain.codes import (
    extract_module_code,
    normalize_required_modules,
)
from site_access.features.compliance.domain.dates import coerce_date, is_after


@pytest.mark.parametrize(
    ("descriptor", "expected"),
    [
        ("RAC 01 - Working at Height", "RAC01"),
        ("RAC02 - Vehicles - Light", "RAC02"),
        ("RAC 05", "RAC05"),
        ("  RAC\t10  ", "RAC10"),
        ("RAC01", "RAC01"),
        ("", ""),
        (None, ""),
    ],
)
def test_extract_module_code(descriptor, expected):
    assert extract_module_code(descriptor) == expected


def test_extraction_is_case_sensitive():
    assert extract_module_code("rac 01 - Working at Height") == "rac01"
    assert extract_module_code("rac 01 - Working at Height") != "RAC01"


def test_separator_needs_surrounding_spaces():
    # "RAC01-Height" has no " - " separator, so only whitespace is stripped
    assert extract_module_code("RAC01-Height") == "RAC01-Height"


def test_normalize_required_modules_merges_spellings():
    normalized = normalize_required_modules({"RAC 01": False, "RAC01": True, "RAC05": False})

    assert normalized == {"RAC01": True, "RAC05": False}


def test_normalize_required_modules_ignores_non_boolean_true():
    assert normalize_required_modules({"RAC01": "yes"}) == {"RAC01": False}
    assert normalize_required_modules(None) == {}


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2025-01-15", date(2025, 1, 15)),
        ("2025-01-15T08:30:00Z", date(2025, 1, 15)),
        (date(2025, 1, 15), date(2025, 1, 15)),
        (datetime(2025, 1, 15, 23, 59), date(2025, 1, 15)),
        ("", None),
        ("N/A", None),
        ("2025-13-40", None),
        (None, None),
        (20250115, None),
    ],
)
def test_coerce_date(value, expected):
    assert coerce_date(value) == expected


def test_is_after_is_strict():
    as_of = date(2024, 1, 1)

    assert is_after("2024-01-02", as_of) is True
    assert is_after("2024-01-01", as_of) is False
    assert is_after("garbage", as_of) is False
    assert is_after(None, as_of) is False
