"""
Balance scoring for role multisets.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Union, TYPE_CHECKING

from .roles import Faction, RoleDefinition, ROLES, get_role

if TYPE_CHECKING:
    from .assignment import RoleAssignment


@dataclass(frozen=True)
class BalanceScore:
    """Three-part balance score. A total near zero is a fair game."""
    crew_score: int = 0  # Sum of crew grades
    infiltrator_score: int = 0  # Sum of absolute alien grades
    total_score: int = 0  # crew + independent - infiltrator

    def __add__(self, other: "BalanceScore") -> "BalanceScore":
        return BalanceScore(
            crew_score=self.crew_score + other.crew_score,
            infiltrator_score=self.infiltrator_score + other.infiltrator_score,
            total_score=self.total_score + other.total_score,
        )

    def is_balanced(self, tolerance: int = 2) -> bool:
        return abs(self.total_score) <= tolerance

    def to_dict(self) -> Dict[str, int]:
        return {
            "crew_score": self.crew_score,
            "infiltrator_score": self.infiltrator_score,
            "total_score": self.total_score,
        }


RoleLike = Union[str, RoleDefinition, "RoleAssignment"]


def _definition(role: RoleLike) -> RoleDefinition:
    if isinstance(role, RoleDefinition):
        return role
    if isinstance(role, str):
        return get_role(role)
    return role.definition


def grade_contribution(role: RoleDefinition) -> int:
    """How much a single role moves the total score."""
    if role.faction == Faction.INFILTRATOR:
        return -abs(role.grade)
    return role.grade


def calculate_balance(roles: Iterable[RoleLike]) -> BalanceScore:
    """
    Calculate the balance score for a set of roles.

    Accepts role keys, catalog definitions or assignment entries.
    An empty multiset scores all zeros.
    """
    crew_score = 0
    infiltrator_score = 0
    independent_score = 0

    for role in roles:
        definition = _definition(role)
        if definition.faction == Faction.CREW:
            crew_score += definition.grade
        elif definition.faction == Faction.INDEPENDENT:
            # Independents move the total but do not inflate the crew score
            independent_score += definition.grade
        else:
            infiltrator_score += abs(definition.grade)

    return BalanceScore(
        crew_score=crew_score,
        infiltrator_score=infiltrator_score,
        total_score=crew_score + independent_score - infiltrator_score,
    )


def score_role_counts(role_counts: Dict[str, int]) -> BalanceScore:
    """Score a {role_key: count} selection, skipping unknown roles and non-positive counts."""
    selected = []
    for role_key, count in role_counts.items():
        if role_key in ROLES and count > 0:
            selected.extend([ROLES[role_key]] * count)
    return calculate_balance(selected)
