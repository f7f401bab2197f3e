"""
Site access compliance feature package.

This vertical slice keeps every layer of compliance resolution co-located
(domain models, the resolution pipeline, collaborator services and outward
payloads) so roster, gate, card and analytics callers share one evaluator
instead of each re-deriving access rules.
"""

# Re-export the primary building blocks for easy access.
from .domain import (  # noqa: F401
    ComplianceResult,
    ModuleCatalog,
    ModuleDefinition,
    Person,
    RequirementProfile,
    TrainingRecord,
    Verdict,
    standard_catalog,
)
from .pipeline.aggregation import AggregateFilters, aggregate  # noqa: F401
from .pipeline.evaluation import evaluate_person  # noqa: F401
from .pipeline.propagation import apply_mandatory_modules  # noqa: F401
from .pipeline.resolution import resolve_governing_record  # noqa: F401
