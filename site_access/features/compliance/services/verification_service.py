"""
Gate verification service.

Resolves a scanned badge/QR identifier (or, failing that, a person id) to a
person and renders the evaluator's verdict. An unknown badge is its own
outward state ("NotFound"), never a NonCompliant verdict.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from site_access.infrastructure.observability.logging import get_logger

from ..api.schemas import VerificationResponse
from ..domain.dates import DateLike, coerce_date, is_after
from ..domain.models import Person, RequirementProfile, TrainingRecord, TrainingSession
from ..pipeline.evaluation.service import CatalogLike, requirement_evaluator
from .roster_service import module_details, report_unknown_modules

logger = get_logger(__name__)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize_badge_id(value: str | None) -> str:
    """Lowercase and drop separators so "VUL-9988" and "vul 9988" match."""
    if not value:
        return ""
    return _NON_ALNUM.sub("", value.lower())


class VerificationService:
    def find_person(self, badge_id: str, people: Iterable[Person]) -> Person | None:
        """Match on badge id first, then fall back to the person id itself."""
        wanted = normalize_badge_id(badge_id)
        if not wanted:
            return None
        people = list(people)
        for person in people:
            if normalize_badge_id(person.badge_id) == wanted:
                return person
        scanned = badge_id.strip()
        return next((person for person in people if person.id == scanned), None)

    def verify(
        self,
        badge_id: str,
        people: Iterable[Person],
        profiles: Iterable[RequirementProfile],
        catalog: CatalogLike | None,
        records: Iterable[TrainingRecord],
        as_of: DateLike,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> VerificationResponse:
        as_of = coerce_date(as_of)
        person = self.find_person(badge_id, people)
        if person is None:
            logger.warning("Badge not found", badge_id=badge_id)
            return VerificationResponse(status="NotFound", badge_id=badge_id)

        profile = next((p for p in profiles if p.person_id == person.id), None)
        result = requirement_evaluator.evaluate(person, profile, catalog, records, as_of, sessions)
        report_unknown_modules(result)

        logger.info(
            "Badge verified",
            badge_id=badge_id,
            person_id=person.id,
            verdict=result.overall.value,
        )

        return VerificationResponse(
            status="Found",
            badge_id=badge_id,
            access_granted=result.is_compliant,
            person_id=person.id,
            name=person.name,
            organization=person.organization,
            department=person.department,
            verdict=result.overall,
            medical_valid=result.medical_valid,
            medical_expiry=coerce_date(profile.medical_clearance_expiry) if profile else None,
            license_number=person.license_number,
            license_class=person.license_class,
            license_expiry=coerce_date(person.license_expiry),
            license_valid=is_after(person.license_expiry, as_of),
            modules=module_details(result),
        )


verification_service = VerificationService()


def verify_badge(
    badge_id: str,
    people: Iterable[Person],
    profiles: Iterable[RequirementProfile],
    catalog: CatalogLike | None,
    records: Iterable[TrainingRecord],
    as_of: DateLike,
    sessions: Mapping[str, TrainingSession] | None = None,
) -> VerificationResponse:
    return verification_service.verify(badge_id, people, profiles, catalog, records, as_of, sessions)
