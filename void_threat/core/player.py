"""
Player class representing a game participant, plus the links between players.
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
from enum import Enum

from .roles import Faction, RoleDefinition, get_role


class EliminationCause(Enum):
    """How a player left the game."""
    NONE = "none"
    NIGHT = "night"
    DAY = "day"


@dataclass
class Player:
    """Represents a player in the game."""
    player_id: str
    position_order: int  # Seat, used for adjacency
    role_key: str
    faction: Faction
    name: Optional[str] = None
    is_alive: bool = True
    eliminated_by: EliminationCause = EliminationCause.NONE
    eliminated_on: Optional[int] = None  # Night or day number

    def __str__(self) -> str:
        return f"Player {self.player_id} ({self.role_key})"

    @classmethod
    def from_role(cls, player_id: str, position_order: int, role_key: str,
                  name: Optional[str] = None) -> "Player":
        """Create a player whose faction is taken from the catalog."""
        role = get_role(role_key)
        return cls(
            player_id=player_id,
            position_order=position_order,
            role_key=role.key,
            faction=role.faction,
            name=name,
        )

    @property
    def role(self) -> RoleDefinition:
        return get_role(self.role_key)

    @property
    def label(self) -> str:
        """Name shown to other players in private results."""
        return self.name or f"Seat {self.position_order}"

    @property
    def is_infiltrator(self) -> bool:
        return self.faction == Faction.INFILTRATOR

    @property
    def is_crew(self) -> bool:
        return self.faction == Faction.CREW

    @property
    def is_independent(self) -> bool:
        return self.faction == Faction.INDEPENDENT

    def eliminate(self, cause: EliminationCause, sequence: Optional[int] = None) -> None:
        """Mark player as eliminated."""
        self.is_alive = False
        self.eliminated_by = cause
        self.eliminated_on = sequence

    def change_role(self, role_key: str) -> RoleDefinition:
        """Swap role; faction always follows the catalog."""
        role = get_role(role_key)
        self.role_key = role.key
        self.faction = role.faction
        return role

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "position_order": self.position_order,
            "name": self.name,
            "role": self.role_key,
            "faction": self.faction.value,
            "is_alive": self.is_alive,
            "eliminated_by": self.eliminated_by.value,
            "eliminated_on": self.eliminated_on,
        }


class LinkType(Enum):
    """Standing relationships created on night 1."""
    ROMANTIC_PAIR = "romantic_pair"
    CLONE = "clone"
    PARASYTE = "parasyte"


# Link kinds whose ends die together
DEATH_LINKS = (LinkType.ROMANTIC_PAIR, LinkType.PARASYTE)


@dataclass
class Link:
    """
    A link between two players.

    For clone links ``source_id`` is the Clone and ``target_id`` the player it
    copies; the other kinds are symmetric.
    """
    link_type: LinkType
    source_id: str
    target_id: str
    is_active: bool = True
    triggered_on: Optional[int] = None

    def involves(self, player_id: str) -> bool:
        return player_id in (self.source_id, self.target_id)

    def partner_of(self, player_id: str) -> Optional[str]:
        if player_id == self.source_id:
            return self.target_id
        if player_id == self.target_id:
            return self.source_id
        return None

    def trigger(self, sequence: int) -> None:
        """Consume the link. Links never reactivate."""
        self.is_active = False
        self.triggered_on = sequence

    def to_dict(self) -> Dict[str, Any]:
        return {
            "link_type": self.link_type.value,
            "source_id": self.source_id,
            "target_id": self.target_id,
            "is_active": self.is_active,
            "triggered_on": self.triggered_on,
        }


@dataclass(frozen=True)
class RoleChange:
    """A role/faction mutation, kept for logging and replay."""
    player_id: str
    from_role: str
    to_role: str
    from_faction: Faction
    to_faction: Faction
    reason: str  # "clone", "attack_transform", "succession"
    sequence: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "player_id": self.player_id,
            "from_role": self.from_role,
            "to_role": self.to_role,
            "from_faction": self.from_faction.value,
            "to_faction": self.to_faction.value,
            "reason": self.reason,
            "sequence": self.sequence,
        }
