"""
Tests for the role catalog.
"""

import pytest
from void_threat.core import (
    Faction, ActionKind, SpecialCondition, ROLES, UnknownRole,
    get_role, is_known_role, roles_by_faction, get_infiltrator_roles,
)
from void_threat.core.roles import FULL_ROLE_SET, INFILTRATOR_ROLE_OPTIONS


def test_catalog_size_by_faction():
    assert len(ROLES) == 26
    assert len(roles_by_faction(Faction.CREW)) == 17
    assert len(roles_by_faction(Faction.INFILTRATOR)) == 8
    assert roles_by_faction(Faction.INDEPENDENT) == ["predator"]


def test_catalog_order_starts_with_crew_member():
    assert list(ROLES)[:3] == ["crew_member", "bioscanner", "junior_scanner"]


def test_infiltrator_grades_are_negative():
    for key in get_infiltrator_roles():
        assert get_role(key).grade < 0


def test_infiltrator_options_cover_alien_team():
    assert set(INFILTRATOR_ROLE_OPTIONS) == set(get_infiltrator_roles())
    assert INFILTRATOR_ROLE_OPTIONS[0] == "alien"


def test_unknown_role_raises():
    with pytest.raises(UnknownRole) as exc_info:
        get_role("space_pirate")
    assert isinstance(exc_info.value, KeyError)
    assert "space_pirate" in str(exc_info.value)
    assert not is_known_role("space_pirate")


def test_allowed_actions():
    assert get_role("bioscanner").allowed_actions == frozenset({ActionKind.SCAN})
    assert ActionKind.COLLECTIVE_KILL in get_role("alien_pup").allowed_actions
    assert get_role("scientist").allowed_actions == frozenset({ActionKind.HEAL, ActionKind.KILL})
    assert not get_role("crew_member").has_night_action


def test_special_conditions():
    assert get_role("detective").has(SpecialCondition.ADJACENT_SCAN)
    assert get_role("humanoid_alien").has(SpecialCondition.FALSE_SCAN)
    assert get_role("false_positive").has(SpecialCondition.FALSE_SCAN)
    predator = get_role("predator")
    assert predator.has(SpecialCondition.ALIEN_HUNTER) and predator.has(SpecialCondition.SOLO_WIN)


def test_full_role_set_has_two_aliens():
    assert FULL_ROLE_SET["alien"] == 2
    assert sum(FULL_ROLE_SET.values()) == 27
