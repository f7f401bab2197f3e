"""
Policy propagation package.

Pushes a site's mandatory-module policy onto the requirement profiles of
everyone affiliated with that site.
"""

from .service import (
    PolicyPropagator,
    apply_mandatory_modules,
    apply_site_policy,
    policy_propagator,
)

__all__ = [
    "PolicyPropagator",
    "apply_mandatory_modules",
    "apply_site_policy",
    "policy_propagator",
]
