"""
Compliance aggregation service.

Builds the working population from profiles and training records, applies
organizational filters and evaluates every person exactly once. All counts
and rates are derived from that single list of evaluations so the headline
"compliant" figure and the per-module pass counts can never disagree.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from site_access.config import settings
from site_access.infrastructure.observability.logging import get_logger

from ...domain.dates import DateLike, coerce_date
from ...domain.models import (
    ComplianceResult,
    Person,
    RequirementProfile,
    Tenant,
    TrainingRecord,
    TrainingSession,
    Verdict,
)
from ..evaluation.service import CatalogLike, as_catalog, requirement_evaluator
from ..resolution.resolver import RecordIndex

logger = get_logger(__name__)


@dataclass(slots=True)
class AggregateFilters:
    """Optional dimensions; None matches everyone."""

    organization: str | None = None
    site_id: str | None = None
    department: str | None = None
    tenant: Tenant | None = None


@dataclass(slots=True)
class PersonEvaluation:
    person: Person
    result: ComplianceResult
    organization: str
    department: str
    site_id: str


@dataclass(slots=True)
class GroupRate:
    name: str
    total: int = 0
    compliant: int = 0

    @property
    def rate(self) -> float:
        return (self.compliant / self.total) * 100 if self.total else 0.0


@dataclass(slots=True)
class ModuleRollup:
    code: str
    required: int = 0
    passed: int = 0

    @property
    def failed(self) -> int:
        return self.required - self.passed

    @property
    def failure_rate(self) -> float:
        return (self.failed / self.required) * 100 if self.required else 0.0


@dataclass(slots=True)
class AggregateResult:
    evaluations: list[PersonEvaluation] = field(default_factory=list)
    compliant_count: int = 0
    non_compliant_count: int = 0
    inactive_count: int = 0
    by_organization: list[GroupRate] = field(default_factory=list)
    by_site: list[GroupRate] = field(default_factory=list)
    by_department: list[GroupRate] = field(default_factory=list)
    modules: list[ModuleRollup] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.evaluations)

    @property
    def compliance_rate(self) -> float:
        return (self.compliant_count / self.total) * 100 if self.total else 0.0

    @property
    def health_band(self) -> str:
        return settings.health_band(self.compliance_rate)

    def bottlenecks(self, limit: int | None = None) -> list[ModuleRollup]:
        """Modules ranked by failure rate, worst first."""
        limit = settings.BOTTLENECK_LIMIT if limit is None else limit
        return self.modules[:limit]

    def risk_departments(self, limit: int | None = None) -> list[GroupRate]:
        limit = settings.RISK_DEPARTMENT_LIMIT if limit is None else limit
        return self.by_department[:limit]


def matches_name(candidate: str | None, target: str | None) -> bool:
    """Exact match first, then a case-insensitive fallback for inconsistent data entry."""
    if candidate is None or target is None:
        return False
    if candidate == target:
        return True
    return candidate.strip().casefold() == target.strip().casefold()


def matches_tenant(organization: str | None, tenant: Tenant) -> bool:
    return any(
        matches_name(organization, name) for name in (tenant.name, *tenant.sub_organizations)
    )


def _bucket(value: str | None) -> str:
    if value is None or not value.strip():
        return settings.UNKNOWN_BUCKET
    return value


def affiliation(person: Person) -> tuple[str, str, str]:
    """(organization, department, site_id) with blanks mapped to the Unknown bucket."""
    return _bucket(person.organization), _bucket(person.department), _bucket(person.site_id)


def matches_filters(
    filters: AggregateFilters, organization: str, department: str, site_id: str
) -> bool:
    if filters.organization is not None and not matches_name(organization, filters.organization):
        return False
    if filters.tenant is not None and not matches_tenant(organization, filters.tenant):
        return False
    if filters.department is not None and department != filters.department:
        return False
    if filters.site_id is not None and site_id != filters.site_id:
        return False
    return True


class ComplianceAggregator:
    def aggregate(
        self,
        people: Iterable[Person] | Mapping[str, Person],
        profiles: Iterable[RequirementProfile],
        catalog: CatalogLike | None,
        records: Iterable[TrainingRecord],
        filters: AggregateFilters | None,
        as_of: DateLike,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> AggregateResult:
        """
        Evaluate a filtered population and derive rollup statistics.

        Args:
            people: Person rows (iterable or mapping keyed by id)
            profiles: Requirement profiles
            catalog: Module definitions
            records: Training records
            filters: Organization / site / department / tenant filters
            as_of: Evaluation date
            sessions: Optional session lookup for session-id descriptors

        Returns:
            AggregateResult whose counts reconcile exactly with the per-person
            evaluations it carries
        """
        as_of = coerce_date(as_of)
        filters = filters or AggregateFilters()
        catalog = as_catalog(catalog)
        people_by_id = dict(people) if isinstance(people, Mapping) else {p.id: p for p in people}
        profiles_by_id = {profile.person_id: profile for profile in profiles}
        index = RecordIndex(records, sessions)

        result = AggregateResult()
        for person_id in self._population(profiles_by_id, index):
            person = people_by_id.get(person_id) or Person(id=person_id)
            organization, department, site_id = affiliation(person)
            if not matches_filters(filters, organization, department, site_id):
                continue

            evaluation = requirement_evaluator.evaluate(
                person, profiles_by_id.get(person_id), catalog, index, as_of
            )
            result.evaluations.append(
                PersonEvaluation(
                    person=person,
                    result=evaluation,
                    organization=organization,
                    department=department,
                    site_id=site_id,
                )
            )

        self._derive(result)

        logger.info(
            "Compliance aggregated",
            population=result.total,
            compliant=result.compliant_count,
            non_compliant=result.non_compliant_count,
            inactive=result.inactive_count,
            organization=filters.organization,
            site_id=filters.site_id,
            department=filters.department,
            tenant=filters.tenant.name if filters.tenant else None,
        )
        return result

    @staticmethod
    def _population(
        profiles_by_id: dict[str, RequirementProfile], index: RecordIndex
    ) -> list[str]:
        population = dict.fromkeys(profiles_by_id)
        for person_id in index.person_ids:
            population.setdefault(person_id, None)
        return list(population)

    @staticmethod
    def _derive(result: AggregateResult) -> None:
        organizations: dict[str, GroupRate] = {}
        sites: dict[str, GroupRate] = {}
        departments: dict[str, GroupRate] = {}
        modules: dict[str, ModuleRollup] = {}

        for item in result.evaluations:
            verdict = item.result.overall
            if verdict is Verdict.COMPLIANT:
                result.compliant_count += 1
            elif verdict is Verdict.INACTIVE:
                result.inactive_count += 1
            else:
                result.non_compliant_count += 1

            compliant = verdict is Verdict.COMPLIANT
            for groups, name in (
                (organizations, item.organization),
                (sites, item.site_id),
                (departments, item.department),
            ):
                group = groups.setdefault(name, GroupRate(name=name))
                group.total += 1
                if compliant:
                    group.compliant += 1

            for code, status in item.result.per_module.items():
                if not status.required:
                    continue
                rollup = modules.setdefault(code, ModuleRollup(code=code))
                rollup.required += 1
                if status.valid:
                    rollup.passed += 1

        result.by_organization = sorted(
            organizations.values(), key=lambda group: (-group.rate, group.name)
        )
        result.by_site = sorted(sites.values(), key=lambda group: (-group.rate, group.name))
        # Worst performing departments first
        result.by_department = sorted(
            departments.values(), key=lambda group: (group.rate, group.name)
        )
        result.modules = sorted(
            modules.values(), key=lambda rollup: (-rollup.failure_rate, rollup.code)
        )


compliance_aggregator = ComplianceAggregator()


def aggregate(
    people: Iterable[Person] | Mapping[str, Person],
    profiles: Iterable[RequirementProfile],
    catalog: CatalogLike | None,
    records: Iterable[TrainingRecord],
    filters: AggregateFilters | None,
    as_of: DateLike,
    sessions: Mapping[str, TrainingSession] | None = None,
) -> AggregateResult:
    return compliance_aggregator.aggregate(
        people, profiles, catalog, records, filters, as_of, sessions
    )
