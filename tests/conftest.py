from datetime import date

import pytest

from site_access.config import settings
from site_access.features.compliance.domain import (
    ModuleDefinition,
    Person,
    RequirementProfile,
    TrainingRecord,
    standard_catalog,
)
from site_access.infrastructure.observability.logging import setup_logging

AS_OF = date(2024, 1, 1)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    setup_logging(settings.LOG_LEVEL)


@pytest.fixture
def as_of():
    return AS_OF


@pytest.fixture
def catalog():
    return standard_catalog()


@pytest.fixture
def make_person():
    def _build(person_id: str = "e1", **overrides) -> Person:
        defaults = {
            "is_active": True,
            "name": "Antonio Silva",
            "badge_id": f"BADGE-{person_id}",
            "license_expiry": "2099-01-01",
            "organization": "Vulcan Mining",
            "department": "Plant Maintenance",
            "site_id": "s1",
        }
        defaults.update(overrides)
        return Person(id=person_id, **defaults)

    return _build


@pytest.fixture
def make_profile():
    def _build(person_id: str = "e1", medical="2099-01-01", **required) -> RequirementProfile:
        return RequirementProfile(
            person_id=person_id,
            medical_clearance_expiry=medical,
            required_modules=dict(required),
        )

    return _build


@pytest.fixture
def make_record():
    def _build(
        person_id: str = "e1",
        descriptor: str = "RAC01",
        expiry="2030-01-01",
        outcome: str = "Passed",
        result_date="2023-01-01",
        attended: bool = True,
        **overrides,
    ) -> TrainingRecord:
        return TrainingRecord(
            person_id=person_id,
            descriptor=descriptor,
            outcome=outcome,
            result_date=result_date,
            expiry_date=expiry if outcome == "Passed" else None,
            attended=attended,
            **overrides,
        )

    return _build


@pytest.fixture
def license_gated_module():
    return ModuleDefinition("RAC02", "Vehicles", requires_practical=True, requires_license=True)
