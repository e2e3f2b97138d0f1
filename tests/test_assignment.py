"""
Tests for role assignment, shuffling and seat binding.
"""

import math
import random

import pytest
from void_threat.core import (
    Faction, InvalidPlayerCount,
    assign_standard_roles, assign_custom_roles, shuffle_roles, bind_roles_to_seats,
    get_recommended_player_counts,
)
from void_threat.core.assignment import RoleAssignment
from void_threat.config.game_config import GameConfig


def test_eight_player_standard_set():
    result = assign_standard_roles(8)
    assert result.role_keys == [
        "bioscanner", "alien", "alien_pup", "junior_scanner",
        "dna_tracker", "crew_member", "false_positive", "crew_member",
    ]
    assert result.balance.crew_score == 15
    assert result.balance.infiltrator_score == 14
    assert result.balance.total_score == 1
    assert result.is_balanced
    assert result.player_count == 8


def test_five_player_standard_set():
    result = assign_standard_roles(5)
    assert result.role_keys == ["bioscanner", "alien", "alien_pup", "junior_scanner", "dna_tracker"]
    assert result.balance.total_score == 0


def test_too_few_players():
    with pytest.raises(InvalidPlayerCount) as exc_info:
        assign_standard_roles(4)
    assert exc_info.value.player_count == 4


@pytest.mark.parametrize("player_count", range(5, 26))
def test_standard_set_shape(player_count):
    result = assign_standard_roles(player_count)
    keys = result.role_keys

    assert len(keys) == player_count
    assert keys.count("bioscanner") == 1
    expected_aliens = max(1, math.floor(player_count * 0.3 + 0.5))
    assert sum(1 for entry in result.roles if entry.faction == Faction.INFILTRATOR) == expected_aliens

    # Only the filler role repeats
    for key in set(keys) - {"crew_member"}:
        assert keys.count(key) == 1


def test_standard_assignment_is_deterministic():
    assert assign_standard_roles(12).role_keys == assign_standard_roles(12).role_keys


def test_infiltrator_ratio_from_config():
    result = assign_standard_roles(10, GameConfig(infiltrator_ratio=0.1))
    assert [e.role for e in result.roles if e.faction == Faction.INFILTRATOR] == ["alien"]


def test_custom_roles():
    result = assign_custom_roles({"bioscanner": 1, "alien": 2, "crew_member": 3, "bogus": 4, "watchman": 0})
    assert result.role_keys == ["bioscanner", "alien", "alien", "crew_member", "crew_member", "crew_member"]
    assert result.balance.total_score == -2
    assert result.is_balanced
    assert result.role_counts() == {"bioscanner": 1, "alien": 2, "crew_member": 3}


def test_custom_role_counts_given_as_strings():
    result = assign_custom_roles({"bioscanner": "1", "alien": 1, "crew_member": "3"})
    assert result.role_keys == ["bioscanner", "alien", "crew_member", "crew_member", "crew_member"]


def test_custom_roles_allow_unbalanced_sets():
    result = assign_custom_roles({"alien_pup": 1, "humanoid_alien": 1, "crew_member": 3})
    assert not result.is_balanced
    assert result.balance.total_score == -14


def test_shuffle_keeps_multiset_and_input():
    roles = assign_standard_roles(10).roles
    original = list(roles)
    shuffled = shuffle_roles(roles, random.Random(7))

    assert roles == original
    assert sorted(e.role for e in shuffled) == sorted(e.role for e in roles)


def test_shuffle_is_reproducible_with_seed():
    roles = assign_standard_roles(12).roles
    first = shuffle_roles(roles, random.Random(99))
    second = shuffle_roles(roles, random.Random(99))
    assert [e.role for e in first] == [e.role for e in second]


def test_shuffle_differs_across_seeds():
    roles = assign_standard_roles(12).roles
    orderings = {tuple(e.role for e in shuffle_roles(roles, random.Random(seed))) for seed in range(10)}
    assert len(orderings) > 1


def test_bind_roles_to_seats():
    roles = [RoleAssignment.of(key) for key in ("bioscanner", "alien", "crew_member", "predator", "watchman")]
    players = bind_roles_to_seats(["a", "b", "c", "d", "e"], roles, names={"a": "Ada"})

    assert [p.position_order for p in players] == [1, 2, 3, 4, 5]
    assert players[0].label == "Ada"
    assert players[1].label == "Seat 2"
    assert players[1].faction == Faction.INFILTRATOR
    assert players[3].faction == Faction.INDEPENDENT
    assert all(p.is_alive for p in players)


def test_bind_rejects_length_mismatch():
    roles = [RoleAssignment.of("crew_member")] * 5
    with pytest.raises(InvalidPlayerCount):
        bind_roles_to_seats(["a", "b", "c", "d"], roles)


def test_bind_rejects_duplicate_ids():
    roles = [RoleAssignment.of("crew_member")] * 5
    with pytest.raises(ValueError):
        bind_roles_to_seats(["a", "b", "c", "d", "d"], roles)


def test_recommended_player_counts():
    counts = get_recommended_player_counts()
    assert counts["minimum"] == 5
    assert counts["maximum"] == 25
