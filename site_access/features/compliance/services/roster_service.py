"""
Roster service - the site database view.

One evaluation per listed person; this module only formats the evaluator's
output into rows and reports data-quality problems it notices on the way.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from site_access.infrastructure.observability.logging import get_logger, log_data_quality

from ..api.schemas import ModuleDetail, RosterRow
from ..domain.dates import DateLike, coerce_date
from ..domain.models import ComplianceResult, Person, RequirementProfile, TrainingRecord, TrainingSession
from ..pipeline.aggregation.service import AggregateFilters, affiliation, matches_filters
from ..pipeline.evaluation.service import CatalogLike, as_catalog, requirement_evaluator
from ..pipeline.resolution.resolver import RecordIndex

logger = get_logger(__name__)


def module_details(result: ComplianceResult) -> list[ModuleDetail]:
    """Required modules of an evaluation, in catalog order."""
    return [
        ModuleDetail(
            code=code,
            state=status.state,
            expiry=status.governing_expiry,
            license_blocked=status.license_blocked,
        )
        for code, status in result.per_module.items()
        if status.required
    ]


def report_unknown_modules(result: ComplianceResult) -> None:
    for code in result.unknown_module_codes:
        log_data_quality(
            "required_module_not_in_catalog",
            person_id=result.person_id,
            module_code=code,
        )


class RosterService:
    def build_roster(
        self,
        people: Iterable[Person],
        profiles: Iterable[RequirementProfile],
        catalog: CatalogLike | None,
        records: Iterable[TrainingRecord],
        as_of: DateLike,
        filters: AggregateFilters | None = None,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> list[RosterRow]:
        catalog = as_catalog(catalog)
        profiles_by_id = {profile.person_id: profile for profile in profiles}
        index = RecordIndex(records, sessions)

        rows: list[RosterRow] = []
        for person in people:
            organization, department, site_id = affiliation(person)
            if filters is not None and not matches_filters(
                filters, organization, department, site_id
            ):
                continue

            profile = profiles_by_id.get(person.id)
            result = requirement_evaluator.evaluate(person, profile, catalog, index, as_of)
            report_unknown_modules(result)

            rows.append(
                RosterRow(
                    person_id=person.id,
                    name=person.name,
                    badge_id=person.badge_id,
                    organization=organization,
                    department=department,
                    site_id=site_id,
                    verdict=result.overall,
                    access_granted=result.is_compliant,
                    medical_valid=result.medical_valid,
                    medical_expiry=coerce_date(profile.medical_clearance_expiry) if profile else None,
                    license_expiry=coerce_date(person.license_expiry),
                    modules=module_details(result),
                )
            )

        logger.info(
            "Roster built",
            rows=len(rows),
            granted=sum(1 for row in rows if row.access_granted),
        )
        return rows


roster_service = RosterService()
