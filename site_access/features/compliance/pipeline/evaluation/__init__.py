"""
Requirement evaluation package.

Provides the single evaluator every caller (roster, gate verification,
card eligibility, analytics) uses to decide site access for one person.
"""

from .service import RequirementEvaluator, as_catalog, evaluate_person, requirement_evaluator

__all__ = ["RequirementEvaluator", "as_catalog", "evaluate_person", "requirement_evaluator"]
