"""
Governing-record resolution.

A person can hold several Passed records for the same module (a renewal
taken before the old certificate lapsed, an imported historical pass). The
one that reaches furthest into the future governs; the attempt date only
breaks ties between equal expiries.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from datetime import date

from ...domain.codes import extract_module_code
from ...domain.dates import DateLike, coerce_date, is_after
from ...domain.models import Outcome, TrainingRecord, TrainingSession


def module_code_for(
    record: TrainingRecord, sessions: Mapping[str, TrainingSession] | None = None
) -> str:
    """Normalized module code of a record, preferring the referenced session's label."""
    if sessions:
        session = sessions.get(record.descriptor)
        if session is not None:
            return extract_module_code(session.descriptor)
    return extract_module_code(record.descriptor)


def _is_passed(record: TrainingRecord) -> bool:
    return record.outcome == Outcome.PASSED


def _governing_key(record: TrainingRecord) -> tuple[date, date]:
    # Unparseable dates sort as the earliest possible day
    return (
        coerce_date(record.expiry_date) or date.min,
        coerce_date(record.result_date) or date.min,
    )


def select_governing(candidates: Iterable[TrainingRecord]) -> TrainingRecord | None:
    """Latest expiry wins; equal expiries go to the later result, then input order."""
    best: TrainingRecord | None = None
    best_key: tuple[date, date] | None = None
    for record in candidates:
        key = _governing_key(record)
        if best is None or key > best_key:
            best, best_key = record, key
    return best


def resolve_governing_record(
    records: Iterable[TrainingRecord],
    person_id: str,
    module_code: str,
    as_of: DateLike = None,
    sessions: Mapping[str, TrainingSession] | None = None,
) -> TrainingRecord | None:
    """
    Find the Passed record that governs ``person_id``'s validity for ``module_code``.

    Selection does not depend on ``as_of``: an expired governing record is
    still returned so callers can show "expired" rather than "missing".
    Use ``is_currently_valid`` for the validity check.
    """
    code = extract_module_code(module_code)
    if not code:
        return None
    return select_governing(
        record
        for record in records
        if record.person_id == person_id
        and _is_passed(record)
        and module_code_for(record, sessions) == code
    )


def is_currently_valid(record: TrainingRecord | None, as_of: DateLike) -> bool:
    """A record expiring on ``as_of`` itself is already invalid."""
    return record is not None and is_after(record.expiry_date, as_of)


class RecordIndex:
    """
    Passed records grouped by (person, module code).

    Built once per call so evaluating a whole population does not rescan the
    record list per person and module. Resolution goes through
    ``select_governing`` exactly like ``resolve_governing_record``.
    """

    def __init__(
        self,
        records: Iterable[TrainingRecord],
        sessions: Mapping[str, TrainingSession] | None = None,
    ):
        self._passed: defaultdict[tuple[str, str], list[TrainingRecord]] = defaultdict(list)
        self._person_ids: dict[str, None] = {}
        self._passed_people: set[str] = set()
        self._governing: dict[tuple[str, str], TrainingRecord | None] = {}

        for record in records:
            self._person_ids.setdefault(record.person_id, None)
            if not _is_passed(record):
                continue
            code = module_code_for(record, sessions)
            if code:
                self._passed[(record.person_id, code)].append(record)
                self._passed_people.add(record.person_id)

    @property
    def person_ids(self) -> list[str]:
        """Every person referenced by any record, in first-seen order."""
        return list(self._person_ids)

    def has_passed_record(self, person_id: str) -> bool:
        return person_id in self._passed_people

    def governing(self, person_id: str, module_code: str) -> TrainingRecord | None:
        key = (person_id, extract_module_code(module_code))
        if key not in self._governing:
            self._governing[key] = select_governing(self._passed.get(key, ()))
        return self._governing[key]

    def governing_for_person(self, person_id: str) -> dict[str, TrainingRecord]:
        """Governing record per module code for one person."""
        result: dict[str, TrainingRecord] = {}
        for pid, code in self._passed:
            if pid != person_id:
                continue
            record = self.governing(pid, code)
            if record is not None:
                result[code] = record
        return result
