"""
Domain layer for the compliance feature: input models, result models and
the module catalog.
"""

from .catalog import ModuleCatalog, standard_catalog
from .codes import extract_module_code
from .dates import coerce_date
from .models import (
    ComplianceResult,
    ModuleDefinition,
    ModuleState,
    ModuleStatus,
    Outcome,
    Person,
    RequirementProfile,
    Site,
    Tenant,
    TrainingRecord,
    TrainingSession,
    Verdict,
)

__all__ = [
    "ComplianceResult",
    "ModuleCatalog",
    "ModuleDefinition",
    "ModuleState",
    "ModuleStatus",
    "Outcome",
    "Person",
    "RequirementProfile",
    "Site",
    "Tenant",
    "TrainingRecord",
    "TrainingSession",
    "Verdict",
    "coerce_date",
    "extract_module_code",
    "standard_catalog",
]
