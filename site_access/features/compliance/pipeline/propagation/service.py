"""
Site policy propagation.

Additive only: a site policy can turn modules on for its people but never
turns anything off, so a stricter per-person requirement survives a policy
being relaxed. Inputs are never mutated; callers persist the returned copies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from site_access.infrastructure.observability.logging import get_logger

from ...domain.codes import extract_module_code, normalize_required_modules
from ...domain.models import Person, RequirementProfile, Site

logger = get_logger(__name__)


class PolicyPropagator:
    def apply(
        self,
        site_id: str,
        mandatory_codes: Iterable[str],
        profiles: Iterable[RequirementProfile],
        people: Iterable[Person] | Mapping[str, Person],
    ) -> list[RequirementProfile]:
        """
        Require every mandatory code for each profile whose person works at ``site_id``.

        Args:
            site_id: Site whose policy is being pushed
            mandatory_codes: Module codes the site mandates (any spelling)
            profiles: Current requirement profiles
            people: Person rows used to resolve site affiliation

        Returns:
            A new list with one copy per input profile, in input order
        """
        codes = list(dict.fromkeys(c for c in map(extract_module_code, mandatory_codes) if c))
        people_by_id = dict(people) if isinstance(people, Mapping) else {p.id: p for p in people}

        updated: list[RequirementProfile] = []
        affected = 0
        newly_required = 0
        for profile in profiles:
            required = normalize_required_modules(profile.required_modules)
            person = people_by_id.get(profile.person_id)
            if person is not None and person.site_id == site_id:
                affected += 1
                for code in codes:
                    if required.get(code) is not True:
                        newly_required += 1
                    required[code] = True
            updated.append(
                RequirementProfile(
                    person_id=profile.person_id,
                    medical_clearance_expiry=profile.medical_clearance_expiry,
                    required_modules=required,
                )
            )

        logger.info(
            "Site policy propagated",
            site_id=site_id,
            mandatory_codes=codes,
            affected_profiles=affected,
            newly_required=newly_required,
        )
        return updated


policy_propagator = PolicyPropagator()


def apply_mandatory_modules(
    site_id: str,
    mandatory_codes: Iterable[str],
    profiles: Iterable[RequirementProfile],
    people: Iterable[Person] | Mapping[str, Person],
) -> list[RequirementProfile]:
    return policy_propagator.apply(site_id, mandatory_codes, profiles, people)


def apply_site_policy(
    site: Site,
    profiles: Iterable[RequirementProfile],
    people: Iterable[Person] | Mapping[str, Person],
) -> list[RequirementProfile]:
    return policy_propagator.apply(site.id, site.mandatory_modules, profiles, people)
