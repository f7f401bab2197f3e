"""
Card eligibility.

A site access card is printed only for people who have passed at least one
module and who are Compliant today.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from site_access.infrastructure.observability.logging import get_logger

from ..domain.dates import DateLike
from ..domain.models import Person, RequirementProfile, TrainingRecord, TrainingSession
from ..pipeline.evaluation.service import CatalogLike, as_catalog, requirement_evaluator
from ..pipeline.resolution.resolver import RecordIndex

logger = get_logger(__name__)


class CardService:
    def eligible_for_card(
        self,
        person: Person,
        profile: RequirementProfile | None,
        catalog: CatalogLike | None,
        records: Iterable[TrainingRecord] | RecordIndex,
        as_of: DateLike,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> bool:
        if isinstance(records, RecordIndex):
            index = records
        else:
            index = RecordIndex((r for r in records if r.person_id == person.id), sessions)
        if not index.has_passed_record(person.id):
            return False
        result = requirement_evaluator.evaluate(person, profile, catalog, index, as_of)
        return result.is_compliant

    def card_eligible_people(
        self,
        people: Iterable[Person],
        profiles: Iterable[RequirementProfile],
        catalog: CatalogLike | None,
        records: Iterable[TrainingRecord],
        as_of: DateLike,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> list[Person]:
        catalog = as_catalog(catalog)
        profiles_by_id = {profile.person_id: profile for profile in profiles}
        index = RecordIndex(records, sessions)

        eligible = [
            person
            for person in people
            if self.eligible_for_card(person, profiles_by_id.get(person.id), catalog, index, as_of)
        ]
        logger.info("Card eligibility computed", eligible=len(eligible))
        return eligible


card_service = CardService()
