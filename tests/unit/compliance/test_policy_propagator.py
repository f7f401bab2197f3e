from site_access.features.compliance.domain import Site
from site_access.features.compliance.pipeline.propagation import (
    apply_mandatory_modules,
    apply_site_policy,
)


def _site_people(make_person):
    return [
        make_person("e1", site_id="s1"),
        make_person("e2", site_id="s1"),
        make_person("e3", site_id="s2"),
    ]


def test_opt_out_is_overridden(make_person, make_profile):
    profiles = [make_profile("e1", RAC05=False)]

    updated = apply_mandatory_modules("s1", ["RAC05"], profiles, _site_people(make_person))

    assert updated[0].required_modules["RAC05"] is True


def test_propagation_is_additive_only(make_person, make_profile):
    profiles = [make_profile("e1", RAC01=True, RAC08=True)]
    people = _site_people(make_person)

    first = apply_mandatory_modules("s1", ["RAC05"], profiles, people)
    second = apply_mandatory_modules("s1", [], first, people)

    assert second[0].required_modules == {"RAC01": True, "RAC08": True, "RAC05": True}


def test_only_site_personnel_are_updated(make_person, make_profile):
    profiles = [make_profile("e1"), make_profile("e3"), make_profile("unknown")]

    updated = apply_mandatory_modules("s1", ["RAC 01 - Working at Height"], profiles, _site_people(make_person))

    assert [p.person_id for p in updated] == ["e1", "e3", "unknown"]
    assert updated[0].required_modules == {"RAC01": True}
    assert updated[1].required_modules == {}
    assert updated[2].required_modules == {}


def test_inputs_are_not_mutated(make_person, make_profile):
    original = make_profile("e1", medical="2030-05-01", RAC02=False)

    updated = apply_mandatory_modules("s1", ["RAC02"], [original], _site_people(make_person))

    assert original.required_modules == {"RAC02": False}
    assert updated[0] is not original
    assert updated[0].medical_clearance_expiry == "2030-05-01"


def test_unchanged_profiles_are_still_copies(make_person, make_profile):
    original = make_profile("e3", RAC01=True)

    updated = apply_mandatory_modules("s1", ["RAC05"], [original], _site_people(make_person))

    assert updated[0] == original
    assert updated[0].required_modules is not original.required_modules


def test_apply_site_policy_uses_site_mandatory_list(make_person, make_profile):
    site = Site(id="s2", name="Port Terminal", mandatory_modules=["RAC02", "RAC06"])
    people = {person.id: person for person in _site_people(make_person)}

    updated = apply_site_policy(site, [make_profile("e3"), make_profile("e1")], people)

    assert updated[0].required_modules == {"RAC02": True, "RAC06": True}
    assert updated[1].required_modules == {}


def test_returned_profile_has_one_spelling_per_module(make_person, make_profile):
    profiles = [make_profile("e1", **{"RAC 05": False, "RAC 01 - Working at Height": True})]

    updated = apply_mandatory_modules("s1", ["RAC05"], profiles, _site_people(make_person))

    assert updated[0].required_modules == {"RAC05": True, "RAC01": True}
