"""
Aggregation package.

Applies the requirement evaluator across a filtered population and rolls
the results up by organization, site, department and module.
"""

from .service import (
    AggregateFilters,
    AggregateResult,
    ComplianceAggregator,
    GroupRate,
    ModuleRollup,
    PersonEvaluation,
    affiliation,
    aggregate,
    compliance_aggregator,
    matches_filters,
    matches_name,
    matches_tenant,
)

__all__ = [
    "AggregateFilters",
    "AggregateResult",
    "ComplianceAggregator",
    "GroupRate",
    "ModuleRollup",
    "PersonEvaluation",
    "affiliation",
    "aggregate",
    "compliance_aggregator",
    "matches_filters",
    "matches_name",
    "matches_tenant",
]
