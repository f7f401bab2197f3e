"""
Attempt grading - runs when a trainer saves session results, before any
record reaches the compliance engine.

This is the only place a module's validity period is used: a Passed attempt
is stamped with ``result_date + validity_months`` and from then on the
record's own expiry is authoritative.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from site_access.config import settings
from site_access.infrastructure.observability.logging import get_logger

from ..domain.codes import extract_module_code
from ..domain.catalog import ModuleCatalog
from ..domain.models import ModuleDefinition, Outcome, TrainingRecord
from ..errors import GradingError, UnknownModuleError

logger = get_logger(__name__)


@dataclass(slots=True)
class Attempt:
    attended: bool
    theory_score: float | None = None
    practical_score: float | None = None
    license_verified: bool = False


@dataclass(slots=True)
class GradeResult:
    outcome: Outcome
    expiry_date: date | None = None
    reason: str | None = None


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the last day of short months."""
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class GradingService:
    MAX_SCORE = 100

    def grade(self, module: ModuleDefinition, attempt: Attempt, result_date: date) -> GradeResult:
        self._validate_scores(attempt)
        pass_mark = settings.PASS_MARK

        if not attempt.attended:
            return GradeResult(Outcome.FAILED, reason="absent")
        if module.requires_license and not attempt.license_verified:
            return GradeResult(Outcome.FAILED, reason="license_not_verified")
        if (attempt.theory_score or 0) < pass_mark:
            return GradeResult(Outcome.FAILED, reason="theory_below_pass_mark")
        if module.requires_practical and (attempt.practical_score or 0) < pass_mark:
            return GradeResult(Outcome.FAILED, reason="practical_below_pass_mark")

        return GradeResult(
            Outcome.PASSED,
            expiry_date=add_months(result_date, module.validity_months),
        )

    def grade_record(
        self,
        catalog: ModuleCatalog,
        person_id: str,
        descriptor: str,
        attempt: Attempt,
        result_date: date,
    ) -> TrainingRecord:
        """Grade an attempt and build the training record to persist."""
        code = extract_module_code(descriptor)
        module = catalog.get(code)
        if module is None:
            raise UnknownModuleError(code)

        graded = self.grade(module, attempt, result_date)
        logger.info(
            "Attempt graded",
            person_id=person_id,
            module_code=code,
            outcome=graded.outcome.value,
            reason=graded.reason,
        )
        return TrainingRecord(
            person_id=person_id,
            descriptor=descriptor,
            outcome=graded.outcome.value,
            result_date=result_date,
            expiry_date=graded.expiry_date,
            attended=attempt.attended,
            theory_score=attempt.theory_score,
            practical_score=attempt.practical_score,
        )

    def _validate_scores(self, attempt: Attempt) -> None:
        for name, score in (
            ("theory_score", attempt.theory_score),
            ("practical_score", attempt.practical_score),
        ):
            if score is not None and not 0 <= score <= self.MAX_SCORE:
                raise GradingError(f"{name} must be between 0 and {self.MAX_SCORE}, got {score}")


grading_service = GradingService()
