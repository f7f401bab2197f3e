"""
Requirement evaluator - folds medical clearance, training and license data
into one access verdict per person.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date

from site_access.infrastructure.observability.logging import get_logger

from ...domain.catalog import ModuleCatalog
from ...domain.codes import normalize_required_modules
from ...domain.dates import DateLike, coerce_date, is_after
from ...domain.models import (
    ComplianceResult,
    ModuleDefinition,
    ModuleState,
    ModuleStatus,
    Person,
    RequirementProfile,
    TrainingRecord,
    TrainingSession,
    Verdict,
)
from ..resolution.resolver import RecordIndex, is_currently_valid

logger = get_logger(__name__)

CatalogLike = ModuleCatalog | Iterable[ModuleDefinition]
RecordsLike = RecordIndex | Iterable[TrainingRecord]


def as_catalog(catalog: CatalogLike | None) -> ModuleCatalog:
    if isinstance(catalog, ModuleCatalog):
        return catalog
    return ModuleCatalog(catalog or ())


class RequirementEvaluator:
    def evaluate(
        self,
        person: Person,
        profile: RequirementProfile | None,
        catalog: CatalogLike | None,
        records: RecordsLike,
        as_of: DateLike,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> ComplianceResult:
        """
        Evaluate one person's site access as of ``as_of``.

        Args:
            person: The person under evaluation
            profile: Their requirement profile; None is treated as an empty profile
            catalog: Module definitions (a ModuleCatalog or any iterable of definitions)
            records: Training records, or a prebuilt RecordIndex for bulk callers
            as_of: Evaluation date; every expiry must be strictly after it
            sessions: Optional session lookup for records that reference a session id

        Returns:
            ComplianceResult. Never raises for well-formed input; missing or
            unparseable dates simply count as not valid.
        """
        as_of = coerce_date(as_of)
        catalog = as_catalog(catalog)
        if isinstance(records, RecordIndex):
            index = records
        else:
            index = RecordIndex(
                (record for record in records if record.person_id == person.id), sessions
            )

        if profile is None:
            profile = RequirementProfile(person_id=person.id)
        required = normalize_required_modules(profile.required_modules)

        medical_valid = is_after(profile.medical_clearance_expiry, as_of)
        license_valid = is_after(person.license_expiry, as_of)

        per_module: dict[str, ModuleStatus] = {}
        unknown_codes: list[str] = []
        for code in self._codes_to_report(catalog, required):
            if not required.get(code):
                per_module[code] = ModuleStatus(required=False)
                continue
            if code not in catalog:
                unknown_codes.append(code)
            per_module[code] = self._evaluate_module(
                index, person.id, catalog.definition_for(code), license_valid, as_of
            )

        all_modules_met = all(status.valid for status in per_module.values() if status.required)

        if not person.is_active:
            overall = Verdict.INACTIVE
        elif medical_valid and all_modules_met:
            overall = Verdict.COMPLIANT
        else:
            overall = Verdict.NON_COMPLIANT

        logger.debug(
            "Person evaluated",
            person_id=person.id,
            overall=overall.value,
            medical_valid=medical_valid,
            required=sum(1 for status in per_module.values() if status.required),
            unknown_modules=unknown_codes or None,
        )

        return ComplianceResult(
            person_id=person.id,
            overall=overall,
            medical_valid=medical_valid,
            per_module=per_module,
            unknown_module_codes=unknown_codes,
        )

    @staticmethod
    def _codes_to_report(catalog: ModuleCatalog, required: dict[str, bool]) -> list[str]:
        codes = catalog.codes
        seen = set(codes)
        for code in required:
            if code not in seen:
                seen.add(code)
                codes.append(code)
        return codes

    @staticmethod
    def _evaluate_module(
        index: RecordIndex,
        person_id: str,
        definition: ModuleDefinition,
        license_valid: bool,
        as_of: date,
    ) -> ModuleStatus:
        record = index.governing(person_id, definition.code)
        expiry = coerce_date(record.expiry_date) if record is not None else None

        if definition.requires_license and not license_valid:
            # An expired or missing license blocks the module even with current training
            return ModuleStatus(
                required=True,
                valid=False,
                governing_expiry=expiry,
                license_blocked=True,
                state=ModuleState.LICENSE_BLOCKED,
            )

        if is_currently_valid(record, as_of):
            state = ModuleState.VALID
        elif record is None:
            state = ModuleState.MISSING
        else:
            state = ModuleState.EXPIRED

        return ModuleStatus(
            required=True,
            valid=state is ModuleState.VALID,
            governing_expiry=expiry,
            state=state,
        )


requirement_evaluator = RequirementEvaluator()


def evaluate_person(
    person: Person,
    profile: RequirementProfile | None,
    catalog: CatalogLike | None,
    records: RecordsLike,
    as_of: DateLike,
    sessions: Mapping[str, TrainingSession] | None = None,
) -> ComplianceResult:
    return requirement_evaluator.evaluate(person, profile, catalog, records, as_of, sessions)
