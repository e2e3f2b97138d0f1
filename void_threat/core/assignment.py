"""
Role assignment: standard (auto-balanced) and custom role sets, seat shuffling and binding.
"""

import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Any

from .roles import (
    Faction,
    RoleDefinition,
    ROLES,
    CORE_INFO_ROLE,
    BASE_INFILTRATOR_ROLE,
    FILLER_ROLE,
    INFILTRATOR_ROLE_OPTIONS,
    get_role,
)
from .balance import BalanceScore, calculate_balance, grade_contribution
from .player import Player
from .exceptions import InvalidPlayerCount
from ..config.game_config import GameConfig, default_config


@dataclass(frozen=True)
class RoleAssignment:
    """One player slot of a generated role set."""
    role: str
    faction: Faction
    grade: int
    definition: RoleDefinition

    @classmethod
    def of(cls, role_key: str) -> "RoleAssignment":
        definition = get_role(role_key)
        return cls(
            role=definition.key,
            faction=definition.faction,
            grade=definition.grade,
            definition=definition,
        )


@dataclass
class AssignmentResult:
    """Generated role set with its balance."""
    roles: List[RoleAssignment]
    balance: BalanceScore
    is_balanced: bool
    player_count: int

    @property
    def role_keys(self) -> List[str]:
        return [entry.role for entry in self.roles]

    def role_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for entry in self.roles:
            counts[entry.role] = counts.get(entry.role, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "roles": self.role_keys,
            "balance": self.balance.to_dict(),
            "is_balanced": self.is_balanced,
            "player_count": self.player_count,
        }


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _result(assignments: List[RoleAssignment], tolerance: int) -> AssignmentResult:
    balance = calculate_balance(assignments)
    return AssignmentResult(
        roles=assignments,
        balance=balance,
        is_balanced=balance.is_balanced(tolerance),
        player_count=len(assignments),
    )


def assign_standard_roles(player_count: int, config: GameConfig = default_config) -> AssignmentResult:
    """
    Standard role assignment for balanced gameplay.

    Always seats the Bioscanner, then ~30% aliens, then greedily fills the
    remaining seats with whichever unused non-alien role (or the repeatable
    Crew Member) brings the total score closest to zero. Ties go to the
    earliest role in catalog order. The fill is locally greedy, not optimal,
    and its exact output is relied upon.
    """
    if player_count < config.min_players:
        raise InvalidPlayerCount(
            player_count,
            f"Minimum {config.min_players} players required (got {player_count})",
        )

    assignments: List[RoleAssignment] = [RoleAssignment.of(CORE_INFO_ROLE)]

    target_infiltrators = max(1, _round_half_up(player_count * config.infiltrator_ratio))
    for i in range(target_infiltrators):
        if i < len(INFILTRATOR_ROLE_OPTIONS):
            assignments.append(RoleAssignment.of(INFILTRATOR_ROLE_OPTIONS[i]))
        else:
            assignments.append(RoleAssignment.of(BASE_INFILTRATOR_ROLE))

    used = {entry.role for entry in assignments}
    candidates = [
        key for key, role in ROLES.items()
        if key == FILLER_ROLE or (key not in used and role.faction != Faction.INFILTRATOR)
    ]

    while len(assignments) < player_count:
        current = calculate_balance(assignments).total_score
        best_role: Optional[str] = None
        best_score = math.inf

        for role_key in candidates:
            if role_key != FILLER_ROLE and role_key in used:
                continue
            score = abs(current + grade_contribution(ROLES[role_key]))
            if score < best_score:
                best_score = score
                best_role = role_key

        if best_role is None:
            best_role = FILLER_ROLE

        assignments.append(RoleAssignment.of(best_role))
        if best_role != FILLER_ROLE:
            used.add(best_role)

    return _result(assignments, config.balance_tolerance)


def assign_custom_roles(role_counts: Dict[str, int], config: GameConfig = default_config) -> AssignmentResult:
    """
    Custom role assignment with specific role counts.

    Counts are coerced to int. Unknown roles and non-positive counts are
    skipped. No balance or alien-presence policy is enforced here; callers
    decide what to reject.
    """
    assignments: List[RoleAssignment] = []
    for role_key, count in role_counts.items():
        count = int(count)
        if role_key not in ROLES or count <= 0:
            continue
        assignments.extend(RoleAssignment.of(role_key) for _ in range(count))

    return _result(assignments, config.balance_tolerance)


def shuffle_roles(roles: Sequence[RoleAssignment], rng: Optional[random.Random] = None) -> List[RoleAssignment]:
    """
    Shuffle roles using Fisher-Yates.

    Returns a new list; the input order and the entries themselves are untouched.
    """
    rng = rng or random.Random()
    shuffled = list(roles)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randrange(i + 1)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def bind_roles_to_seats(player_ids: Sequence[str], roles: Sequence[RoleAssignment],
                        names: Optional[Dict[str, str]] = None) -> List[Player]:
    """Seat players 1..N in the given order and hand out roles in the given order."""
    if len(player_ids) != len(roles):
        raise InvalidPlayerCount(
            len(player_ids),
            f"{len(player_ids)} players cannot take {len(roles)} roles",
        )
    if len(set(player_ids)) != len(player_ids):
        raise ValueError("Player ids must be unique")

    names = names or {}
    return [
        Player.from_role(player_id, seat, entry.role, name=names.get(player_id))
        for seat, (player_id, entry) in enumerate(zip(player_ids, roles), start=1)
    ]


def get_recommended_player_counts() -> Dict[str, Any]:
    """Get recommended player count ranges."""
    return {
        "minimum": 5,
        "optimal_min": 8,
        "optimal_max": 12,
        "maximum": 25,
        "descriptions": {
            5: "Minimum viable game",
            8: "Good balance of roles",
            12: "Optimal experience",
            25: "Maximum supported",
        },
    }
