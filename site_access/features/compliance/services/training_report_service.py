"""
Training attempt statistics for the reports screen.

Counts attempts, not people: every booking in the reporting window is one
row, whether it was passed, failed, or never attended. Compliance verdicts
live in the aggregator; this service answers "how are the courses going".
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Literal

from site_access.config import settings
from site_access.infrastructure.observability.logging import get_logger

from ..domain.codes import extract_module_code
from ..domain.dates import DateLike, coerce_date
from ..domain.models import Outcome, Person, TrainingRecord, TrainingSession
from ..pipeline.resolution.resolver import module_code_for
from .grading_service import add_months

logger = get_logger(__name__)

ReportPeriod = Literal["Weekly", "Monthly", "YTD", "Custom"]


@dataclass(slots=True)
class ModuleAttemptStats:
    code: str
    total: int = 0
    passed: int = 0
    failed: int = 0

    @property
    def failure_rate(self) -> float:
        return (self.failed / self.total) * 100 if self.total else 0.0


@dataclass(slots=True)
class NoShow:
    person_id: str
    name: str | None
    organization: str | None
    module_code: str
    attempt_date: date


@dataclass(slots=True)
class TrainingReport:
    start: date | None
    end: date | None
    total: int = 0
    passed: int = 0
    failed: int = 0
    attended: int = 0
    modules: list[ModuleAttemptStats] = field(default_factory=list)
    no_shows: list[NoShow] = field(default_factory=list)

    @property
    def pass_rate(self) -> float:
        return (self.passed / self.total) * 100 if self.total else 0.0

    @property
    def attendance_rate(self) -> float:
        return (self.attended / self.total) * 100 if self.total else 0.0

    def top_failing(self, limit: int | None = None) -> list[ModuleAttemptStats]:
        """Modules ranked by attempt failure rate, worst first."""
        limit = settings.FAILING_MODULE_LIMIT if limit is None else limit
        ranked = sorted(self.modules, key=lambda stats: stats.failure_rate, reverse=True)
        return ranked[:limit]


def period_bounds(
    period: ReportPeriod,
    as_of: DateLike,
    start: DateLike = None,
    end: DateLike = None,
) -> tuple[date | None, date | None]:
    """
    Inclusive reporting window ending on ``as_of``.

    Custom uses the given bounds as they are; either side may be open.
    """
    as_of = coerce_date(as_of)
    if period == "Weekly":
        return as_of - timedelta(days=7), as_of
    if period == "Monthly":
        return add_months(as_of, -1), as_of
    if period == "YTD":
        return date(as_of.year, 1, 1), as_of
    return coerce_date(start), coerce_date(end)


def attempt_date(
    record: TrainingRecord, sessions: Mapping[str, TrainingSession] | None = None
) -> date | None:
    """Result date when graded, otherwise the date of the booked session."""
    result_date = coerce_date(record.result_date)
    if result_date is not None:
        return result_date
    session = sessions.get(record.descriptor) if sessions else None
    return coerce_date(session.session_date) if session is not None else None


class TrainingReportService:
    def build(
        self,
        records: Iterable[TrainingRecord],
        people: Iterable[Person] | Mapping[str, Person],
        as_of: DateLike,
        period: ReportPeriod = "Monthly",
        start: DateLike = None,
        end: DateLike = None,
        department: str | None = None,
        module_code: str | None = None,
        sessions: Mapping[str, TrainingSession] | None = None,
    ) -> TrainingReport:
        """
        Summarize training attempts inside a reporting window.

        Args:
            records: Training records (one per booking)
            people: Person rows used for department filtering and no-show details
            as_of: Report date; the preset periods end on it
            period: Weekly, Monthly, YTD or Custom
            start: Custom window start (inclusive)
            end: Custom window end (inclusive)
            department: Only attempts by people in this department
            module_code: Only attempts for this module (any spelling)
            sessions: Optional session lookup for undated or session-id records

        Returns:
            TrainingReport with headline counts, per-module stats in first-seen
            order and no-shows newest first
        """
        window_start, window_end = period_bounds(period, as_of, start, end)
        people_by_id = dict(people) if isinstance(people, Mapping) else {p.id: p for p in people}
        wanted_code = extract_module_code(module_code) if module_code else None

        report = TrainingReport(start=window_start, end=window_end)
        modules: dict[str, ModuleAttemptStats] = {}
        for record in records:
            when = attempt_date(record, sessions)
            if when is None:
                continue
            if window_start is not None and when < window_start:
                continue
            if window_end is not None and when > window_end:
                continue

            person = people_by_id.get(record.person_id)
            if department is not None and (person is None or person.department != department):
                continue

            code = module_code_for(record, sessions)
            if wanted_code is not None and code != wanted_code:
                continue

            stats = modules.setdefault(code, ModuleAttemptStats(code=code))
            stats.total += 1
            report.total += 1
            if record.outcome == Outcome.PASSED:
                stats.passed += 1
                report.passed += 1
            elif record.outcome == Outcome.FAILED:
                stats.failed += 1
                report.failed += 1

            if record.attended:
                report.attended += 1
            else:
                report.no_shows.append(
                    NoShow(
                        person_id=record.person_id,
                        name=person.name if person else None,
                        organization=person.organization if person else None,
                        module_code=code,
                        attempt_date=when,
                    )
                )

        report.modules = list(modules.values())
        report.no_shows.sort(key=lambda item: item.attempt_date, reverse=True)

        logger.info(
            "Training report built",
            period=period,
            start=window_start.isoformat() if window_start else None,
            end=window_end.isoformat() if window_end else None,
            attempts=report.total,
            no_shows=len(report.no_shows),
        )
        return report


training_report_service = TrainingReportService()


def build_training_report(
    records: Iterable[TrainingRecord],
    people: Iterable[Person] | Mapping[str, Person],
    as_of: DateLike,
    period: ReportPeriod = "Monthly",
    **options,
) -> TrainingReport:
    return training_report_service.build(records, people, as_of, period, **options)
