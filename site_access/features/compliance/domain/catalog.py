"""
Module catalog.

Holds the tenant's training-module definitions keyed by normalized code.
Lookups for codes that are not defined fall back to a permissive default
(no practical, no license gate) so evaluation never fails on catalog gaps.
"""

from collections.abc import Iterable, Iterator

from .models import ModuleDefinition
from .codes import extract_module_code

DEFAULT_VALIDITY_MONTHS = 24


class ModuleCatalog:
    def __init__(self, definitions: Iterable[ModuleDefinition] = ()):
        self._definitions: dict[str, ModuleDefinition] = {}
        for definition in definitions:
            code = extract_module_code(definition.code)
            if code:
                self._definitions[code] = definition

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and extract_module_code(code) in self._definitions

    def __iter__(self) -> Iterator[ModuleDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)

    @property
    def codes(self) -> list[str]:
        return list(self._definitions)

    def get(self, code: str) -> ModuleDefinition | None:
        return self._definitions.get(extract_module_code(code))

    def definition_for(self, code: str) -> ModuleDefinition:
        """Return the definition, or a no-extra-requirements stand-in for unknown codes."""
        normalized = extract_module_code(code)
        definition = self._definitions.get(normalized)
        if definition is not None:
            return definition
        return ModuleDefinition(
            code=normalized,
            display_name=normalized,
            validity_months=DEFAULT_VALIDITY_MONTHS,
        )


STANDARD_MODULES: tuple[ModuleDefinition, ...] = (
    ModuleDefinition("RAC01", "Working at Height"),
    ModuleDefinition(
        "RAC02",
        "Vehicles and Mobile Equipment",
        requires_practical=True,
        requires_license=True,
    ),
    ModuleDefinition("RAC03", "Mobile Equipment Lockout"),
    ModuleDefinition("RAC04", "Machine Guarding"),
    ModuleDefinition("RAC05", "Confined Space"),
    ModuleDefinition("RAC06", "Lifting Operations"),
    ModuleDefinition("RAC07", "Ground Stability"),
    ModuleDefinition("RAC08", "Electricity"),
    ModuleDefinition("RAC09", "Explosives"),
    ModuleDefinition("RAC10", "Liquid Metal"),
)


def standard_catalog() -> ModuleCatalog:
    """The ten critical-activity modules every site starts from."""
    return ModuleCatalog(STANDARD_MODULES)
