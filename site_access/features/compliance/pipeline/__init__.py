"""
Pipeline components for compliance resolution.

Leaf-first: resolution (governing record), evaluation (per-person verdict),
aggregation (population rollups) and propagation (site policy onto
profiles). Subpackages expose the primary entry points other layers use.
"""

__all__ = ["resolution", "evaluation", "aggregation", "propagation"]
