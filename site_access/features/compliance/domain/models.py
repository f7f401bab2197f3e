"""
Domain models for the compliance feature.

These dataclasses describe the flat collections the engine consumes
(people, requirement profiles, training records, catalog entries) and the
results it produces. Storage, import and UI layers own the lifecycle of the
inputs; the engine only reads them.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .dates import DateLike


class Outcome(str, Enum):
    PASSED = "Passed"
    FAILED = "Failed"
    PENDING = "Pending"
    ATTENDED = "Attended"
    EXPIRED = "Expired"


class Verdict(str, Enum):
    COMPLIANT = "Compliant"
    NON_COMPLIANT = "NonCompliant"
    INACTIVE = "Inactive"


class ModuleState(str, Enum):
    """Display state of one module for one person."""

    VALID = "Valid"
    EXPIRED = "Expired"
    MISSING = "Missing"
    LICENSE_BLOCKED = "LicenseBlocked"
    NOT_REQUIRED = "NotRequired"


@dataclass(slots=True)
class Person:
    """A worker whose site access is being evaluated."""

    id: str
    is_active: bool = True
    name: str | None = None
    badge_id: str | None = None  # national / contractor record id printed on the card
    license_number: str | None = None
    license_class: str | None = None
    license_expiry: DateLike = None
    organization: str | None = None
    department: str | None = None
    site_id: str | None = None


@dataclass(slots=True)
class ModuleDefinition:
    """Catalog entry for one training module (RAC)."""

    code: str
    display_name: str
    validity_months: int = 24
    requires_practical: bool = False
    requires_license: bool = False


@dataclass(slots=True)
class RequirementProfile:
    """Per-person policy: medical clearance plus the modules they must hold."""

    person_id: str
    medical_clearance_expiry: DateLike = None
    required_modules: dict[str, bool] = field(default_factory=dict)


@dataclass(slots=True)
class TrainingRecord:
    """One graded training attempt (a booking)."""

    person_id: str
    descriptor: str  # "RAC 01 - Working at Height", "RAC02", or a session id
    outcome: str
    result_date: DateLike = None
    expiry_date: DateLike = None
    attended: bool = False
    theory_score: float | None = None
    practical_score: float | None = None
    record_id: str | None = None


@dataclass(slots=True)
class TrainingSession:
    """Scheduled session; records may reference it by id instead of by label."""

    id: str
    descriptor: str
    session_date: DateLike = None
    location: str | None = None
    instructor: str | None = None
    capacity: int | None = None


@dataclass(slots=True)
class Site:
    id: str
    name: str
    organization: str | None = None
    mandatory_modules: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Tenant:
    """Top-level client enterprise owning zero or more contractor companies."""

    name: str
    sub_organizations: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ModuleStatus:
    required: bool
    valid: bool = False
    governing_expiry: date | None = None
    license_blocked: bool = False
    state: ModuleState = ModuleState.NOT_REQUIRED


@dataclass(slots=True)
class ComplianceResult:
    person_id: str
    overall: Verdict
    medical_valid: bool
    per_module: dict[str, ModuleStatus] = field(default_factory=dict)
    unknown_module_codes: list[str] = field(default_factory=list)

    @property
    def is_compliant(self) -> bool:
        return self.overall is Verdict.COMPLIANT

    @property
    def required_codes(self) -> list[str]:
        return [code for code, status in self.per_module.items() if status.required]

    @property
    def failing_codes(self) -> list[str]:
        return [
            code
            for code, status in self.per_module.items()
            if status.required and not status.valid
        ]
