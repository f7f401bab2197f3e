# site_access/features/compliance/api/schemas.py
from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from ..domain.models import ModuleState, Verdict


class ModuleDetail(BaseModel):
    """Per-module line shown on gate and roster screens."""

    code: str
    state: ModuleState
    expiry: date | None = None
    license_blocked: bool = False


class VerificationResponse(BaseModel):
    """Result of scanning a badge at the gate."""

    status: Literal["Found", "NotFound"]
    badge_id: str
    access_granted: bool = False

    person_id: str | None = None
    name: str | None = None
    organization: str | None = None
    department: str | None = None
    verdict: Verdict | None = None

    medical_valid: bool | None = None
    medical_expiry: date | None = None
    license_number: str | None = None
    license_class: str | None = None
    license_expiry: date | None = None
    license_valid: bool | None = None

    modules: list[ModuleDetail] = Field(default_factory=list, description="Required modules only")


class RosterRow(BaseModel):
    """One line of the site database view."""

    person_id: str
    name: str | None = None
    badge_id: str | None = None
    organization: str
    department: str
    site_id: str
    verdict: Verdict
    access_granted: bool
    medical_valid: bool
    medical_expiry: date | None = None
    license_expiry: date | None = None
    modules: list[ModuleDetail] = Field(default_factory=list)


class ReportContext(BaseModel):
    """Statistics payload handed to the executive report generator."""

    role: str
    scope: str
    period: str = "Current Quarter"
    filters: dict[str, str]
    global_score: str
    health_band: Literal["good", "warning", "critical"]
    total_workforce: int
    compliant: int
    non_compliant: int
    inactive: int
    company_breakdown: list[str] = Field(default_factory=list)
    site_breakdown: list[str] = Field(default_factory=list)
    risk_departments: list[str] = Field(default_factory=list)
    training_bottlenecks: list[str] = Field(default_factory=list)
