from datetime import date

import pytest

from site_access.features.compliance.domain import ModuleDefinition, Outcome
from site_access.features.compliance.errors import GradingError, UnknownModuleError
from site_access.features.compliance.services.grading_service import (
    Attempt,
    GradingService,
    add_months,
)

RESULT_DATE = date(2023, 6, 20)


@pytest.fixture
def service():
    return GradingService()


def test_theory_only_module_passes_at_pass_mark(service):
    module = ModuleDefinition("RAC01", "Working at Height", validity_months=24)

    graded = service.grade(module, Attempt(attended=True, theory_score=70), RESULT_DATE)

    assert graded.outcome is Outcome.PASSED
    assert graded.expiry_date == date(2025, 6, 20)


def test_absent_attempt_fails(service):
    module = ModuleDefinition("RAC01", "Working at Height")

    graded = service.grade(module, Attempt(attended=False, theory_score=100), RESULT_DATE)

    assert graded.outcome is Outcome.FAILED
    assert graded.expiry_date is None
    assert graded.reason == "absent"


def test_license_module_requires_verified_license(service, license_gated_module):
    attempt = Attempt(attended=True, theory_score=90, practical_score=95, license_verified=False)

    graded = service.grade(license_gated_module, attempt, RESULT_DATE)

    assert graded.outcome is Outcome.FAILED
    assert graded.reason == "license_not_verified"


def test_practical_module_needs_both_scores(service, license_gated_module):
    low_practical = Attempt(attended=True, theory_score=90, practical_score=60, license_verified=True)
    low_theory = Attempt(attended=True, theory_score=65, practical_score=95, license_verified=True)
    passing = Attempt(attended=True, theory_score=90, practical_score=95, license_verified=True)

    assert service.grade(license_gated_module, low_practical, RESULT_DATE).reason == "practical_below_pass_mark"
    assert service.grade(license_gated_module, low_theory, RESULT_DATE).reason == "theory_below_pass_mark"
    assert service.grade(license_gated_module, passing, RESULT_DATE).outcome is Outcome.PASSED


def test_pass_mark_comes_from_settings(monkeypatch, service):
    from site_access.config import settings

    monkeypatch.setattr(settings, "PASS_MARK", 80)
    module = ModuleDefinition("RAC01", "Working at Height")

    graded = service.grade(module, Attempt(attended=True, theory_score=75), RESULT_DATE)

    assert graded.outcome is Outcome.FAILED


def test_out_of_range_scores_are_rejected(service):
    module = ModuleDefinition("RAC01", "Working at Height")

    with pytest.raises(GradingError):
        service.grade(module, Attempt(attended=True, theory_score=120), RESULT_DATE)


def test_grade_record_builds_training_record(service, catalog):
    record = service.grade_record(
        catalog, "e4", "RAC 01 - Working at Height", Attempt(attended=True, theory_score=88), RESULT_DATE
    )

    assert record.person_id == "e4"
    assert record.outcome == "Passed"
    assert record.expiry_date == date(2025, 6, 20)
    assert record.theory_score == 88


def test_grade_record_rejects_unknown_module(service, catalog):
    with pytest.raises(UnknownModuleError) as exc_info:
        service.grade_record(catalog, "e4", "RAC 99 - Unknown", Attempt(attended=True), RESULT_DATE)

    assert exc_info.value.code == "RAC99"


@pytest.mark.parametrize(
    ("start", "months", "expected"),
    [
        (date(2023, 1, 15), 24, date(2025, 1, 15)),
        (date(2023, 11, 30), 3, date(2024, 2, 29)),
        (date(2024, 2, 29), 12, date(2025, 2, 28)),
        (date(2023, 12, 1), 1, date(2024, 1, 1)),
    ],
)
def test_add_months(start, months, expected):
    assert add_months(start, months) == expected
