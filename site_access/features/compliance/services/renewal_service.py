"""
Renewal watch - governing certificates that lapse soon.

Only governing records are considered, so a person who already renewed is
not flagged because of their older certificate.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from site_access.config import settings
from site_access.infrastructure.observability.logging import get_logger

from ..domain.dates import DateLike, coerce_date
from ..domain.models import TrainingRecord, TrainingSession
from ..pipeline.resolution.resolver import RecordIndex

logger = get_logger(__name__)


@dataclass(slots=True)
class ExpiringCertificate:
    person_id: str
    module_code: str
    expiry_date: date
    days_remaining: int
    record: TrainingRecord


def find_expiring(
    records: Iterable[TrainingRecord],
    as_of: DateLike,
    window_days: int | None = None,
    sessions: Mapping[str, TrainingSession] | None = None,
) -> list[ExpiringCertificate]:
    """Certificates still valid on ``as_of`` that expire within the window, soonest first."""
    as_of = coerce_date(as_of)
    window_days = settings.EXPIRY_WARNING_DAYS if window_days is None else window_days
    horizon = as_of + timedelta(days=window_days)
    index = RecordIndex(records, sessions)

    expiring: list[ExpiringCertificate] = []
    for person_id in index.person_ids:
        for code, record in index.governing_for_person(person_id).items():
            expiry = coerce_date(record.expiry_date)
            if expiry is None or not (as_of < expiry <= horizon):
                continue
            expiring.append(
                ExpiringCertificate(
                    person_id=person_id,
                    module_code=code,
                    expiry_date=expiry,
                    days_remaining=(expiry - as_of).days,
                    record=record,
                )
            )

    expiring.sort(key=lambda item: (item.expiry_date, item.person_id, item.module_code))
    logger.info("Renewal watch computed", window_days=window_days, expiring=len(expiring))
    return expiring
