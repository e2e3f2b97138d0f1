"""
Role definitions and abilities for the Void Threat game.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple
from dataclasses import dataclass, field

from .exceptions import UnknownRole


class Faction(Enum):
    """Player team affiliation."""
    CREW = "crew"
    INFILTRATOR = "infiltrator"  # The alien team
    INDEPENDENT = "independent"


class ActionKind(Enum):
    """Kinds of night action a role can submit."""
    SCAN = "scan"
    PROTECT = "protect"
    PROTECT_DAY = "protect_day"
    LINK = "link"
    SILENCE = "silence"
    KILL = "kill"
    HEAL = "heal"
    HUNT = "hunt"
    SILENT_CHECK = "silent_check"
    OBSERVE = "observe"
    DUAL_SCAN = "dual_scan"
    COLLECTIVE_KILL = "collective_kill"
    AWAKENING_CHECK = "awakening_check"


class SpecialCondition(Enum):
    """Capability flags checked explicitly by the resolvers."""
    INSTANT_KILL_ON_DEATH = "instant_kill_on_death"
    DEATH_LINK = "death_link"
    TRANSFORMATION = "transformation"
    TRANSFORMATION_ON_ATTACK = "transformation_on_attack"
    DOUBLE_KILL_ON_DEATH = "double_kill_on_death"
    BLOCK_NEXT_KILL = "block_next_kill"
    FALSE_SCAN = "false_scan"
    SOLO_WIN = "solo_win"
    ALIEN_HUNTER = "alien_hunter"
    SURVIVE_NIGHT_ATTACK = "survive_night_attack"
    DOUBLE_VOTE = "double_vote"
    DAY_ELIMINATION_IMMUNITY = "day_elimination_immunity"
    DELAYED_AWAKENING = "delayed_awakening"
    ADJACENT_SCAN = "adjacent_scan"
    ONCE_PER_GAME = "once_per_game"
    SUCCESSOR = "successor"


# Kinds that make no sense without a target
TARGETED_ACTIONS = frozenset({
    ActionKind.SCAN,
    ActionKind.PROTECT,
    ActionKind.PROTECT_DAY,
    ActionKind.LINK,
    ActionKind.SILENCE,
    ActionKind.KILL,
    ActionKind.HEAL,
    ActionKind.HUNT,
    ActionKind.DUAL_SCAN,
})

# Every infiltrator takes part in the collective kill
COLLECTIVE_ACTIONS = (ActionKind.COLLECTIVE_KILL, ActionKind.KILL)


@dataclass(frozen=True)
class RoleDefinition:
    """Immutable catalog entry for a role."""
    key: str
    name: str
    faction: Faction
    grade: int
    description: str
    night_action: Optional[ActionKind] = None
    special_conditions: FrozenSet[SpecialCondition] = field(default_factory=frozenset)
    extra_actions: Tuple[ActionKind, ...] = ()

    def __str__(self) -> str:
        return f"{self.name} (Team: {self.faction.value})"

    def has(self, condition: SpecialCondition) -> bool:
        """Check if role carries a special condition."""
        return condition in self.special_conditions

    @property
    def is_infiltrator(self) -> bool:
        """Check if role is part of the alien team."""
        return self.faction == Faction.INFILTRATOR

    @property
    def is_crew(self) -> bool:
        """Check if role is part of the crew."""
        return self.faction == Faction.CREW

    @property
    def has_night_action(self) -> bool:
        return bool(self.allowed_actions)

    @property
    def allowed_actions(self) -> FrozenSet[ActionKind]:
        """All action kinds this role may submit at night."""
        kinds = set(self.extra_actions)
        if self.night_action is not None:
            kinds.add(self.night_action)
        if self.is_infiltrator:
            kinds.update(COLLECTIVE_ACTIONS)
        return frozenset(kinds)


def _role(key: str, name: str, faction: Faction, grade: int, description: str,
          night_action: Optional[ActionKind] = None,
          conditions: Tuple[SpecialCondition, ...] = (),
          extra_actions: Tuple[ActionKind, ...] = ()) -> RoleDefinition:
    return RoleDefinition(
        key=key,
        name=name,
        faction=faction,
        grade=grade,
        description=description,
        night_action=night_action,
        special_conditions=frozenset(conditions),
        extra_actions=extra_actions,
    )


_CATALOG: Tuple[RoleDefinition, ...] = (
    # Crew (17 roles)
    _role("crew_member", "Crew Member", Faction.CREW, 1,
          "No special ability. Win condition: find and eliminate all aliens."),
    _role("bioscanner", "Bioscanner", Faction.CREW, 7,
          "Each night, scan 1 player. Learn: Alien or Crew. Deceived by disguised roles.",
          ActionKind.SCAN),
    _role("junior_scanner", "Junior Scanner", Faction.CREW, 4,
          "Called every night for mystery. Becomes Bioscanner if the original dies.",
          ActionKind.SILENT_CHECK, (SpecialCondition.SUCCESSOR,)),
    _role("dna_tracker", "DNA Tracker", Faction.CREW, 3,
          "Each night, scan 1 player. Learn: Alien or Crew. Deceived by disguised roles.",
          ActionKind.SCAN),
    _role("observer", "Observer", Faction.CREW, 2,
          "Night 1 only: sees who the Bioscanner is. Plain crew afterwards.",
          ActionKind.OBSERVE),
    _role("tragic_hero", "Tragic Hero", Faction.CREW, 3,
          "If eliminated, takes one player down. Day death kills instantly, "
          "night death kills at the start of the next day resolution.",
          conditions=(SpecialCondition.INSTANT_KILL_ON_DEATH,)),
    _role("scientist", "Scientist", Faction.CREW, 4,
          "Once per game: kill. Once per game: heal. Each night, choose an action.",
          ActionKind.HEAL, (SpecialCondition.ONCE_PER_GAME,), (ActionKind.KILL,)),
    _role("watchman", "Watchman", Faction.CREW, 3,
          "Each night, protect 1 player from alien kills. Can protect self. "
          "Different player each night.",
          ActionKind.PROTECT),
    _role("ship_captain", "Ship Captain", Faction.CREW, 2,
          "Vote counts twice during day elimination. Once per game only.",
          conditions=(SpecialCondition.DOUBLE_VOTE,)),
    _role("vip_passenger", "VIP Passenger", Faction.CREW, 3,
          "Cannot be eliminated by day votes. No protection from night kills.",
          conditions=(SpecialCondition.DAY_ELIMINATION_IMMUNITY,)),
    _role("ship_doctor", "Ship Doctor", Faction.CREW, 3,
          "Each night, protect 1 player from the next day elimination. "
          "Different player from the previous night.",
          ActionKind.PROTECT_DAY),
    _role("detective", "Detective", Faction.CREW, 3,
          "Each night, inspect 3 adjacent players. Learn: any alien among them?",
          ActionKind.SCAN, (SpecialCondition.ADJACENT_SCAN,)),
    _role("silencer", "Silencer", Faction.CREW, 1,
          "Each night, silence 1 player. Silenced player cannot speak or vote next day.",
          ActionKind.SILENCE),
    _role("soldier", "Soldier", Faction.CREW, 3,
          "Survives an alien attack at night, then must be eliminated the next day.",
          conditions=(SpecialCondition.SURVIVE_NIGHT_ATTACK,)),
    _role("clone", "Clone", Faction.CREW, -2,
          "Night 1: choose a target. If the target dies, Clone silently becomes the target.",
          ActionKind.LINK, (SpecialCondition.TRANSFORMATION,)),
    _role("false_positive", "False Positive", Faction.CREW, -1,
          "Appears as Alien to the Bioscanner and DNA Tracker. Wins with the crew.",
          conditions=(SpecialCondition.FALSE_SCAN,)),
    _role("quarantined_crew", "Quarantined Crew", Faction.CREW, 3,
          "If killed at night, aliens cannot kill the next night.",
          conditions=(SpecialCondition.BLOCK_NEXT_KILL,)),

    # Infiltrators (8 roles)
    _role("alien", "Alien (Infiltrator)", Faction.INFILTRATOR, -6,
          "Each night, collectively choose 1 crew member to kill.",
          ActionKind.COLLECTIVE_KILL),
    _role("alien_pup", "Alien Pup (Spawn)", Faction.INFILTRATOR, -8,
          "When killed, aliens get 2 kills the next night instead of 1.",
          conditions=(SpecialCondition.DOUBLE_KILL_ON_DEATH,)),
    _role("sleep_alien", "Sleep Alien", Faction.INFILTRATOR, -5,
          "Does not wake with other aliens until the first alien dies.",
          ActionKind.AWAKENING_CHECK, (SpecialCondition.DELAYED_AWAKENING,)),
    _role("rogue_alien", "Rogue Alien", Faction.INFILTRATOR, -5,
          "Kills with the collective. If all other aliens are dead, wins alone.",
          conditions=(SpecialCondition.SOLO_WIN,)),
    _role("alien_scanner", "Alien Scanner", Faction.INFILTRATOR, -3,
          "Each night, scan 1 player. Two questions: alien? Bioscanner?",
          ActionKind.DUAL_SCAN),
    _role("parasyte_alien", "Parasyte Alien", Faction.INFILTRATOR, -4,
          "Night 1: choose a companion. If either dies, the other dies too.",
          ActionKind.LINK, (SpecialCondition.DEATH_LINK,)),
    _role("humanoid_alien", "Humanoid Alien", Faction.INFILTRATOR, -9,
          "Appears as Crew to the Bioscanner and DNA Tracker.",
          conditions=(SpecialCondition.FALSE_SCAN,)),
    _role("infected_crewmember", "Infected Crewmember", Faction.INFILTRATOR, -3,
          "If attacked by aliens at night, transforms into an Alien and joins the kill.",
          conditions=(SpecialCondition.TRANSFORMATION_ON_ATTACK,)),

    # Independent (1 role)
    _role("predator", "Predator (Alien Hunter)", Faction.INDEPENDENT, 4,
          "Each night, hunt 1 target: aliens die, crew are untouched. "
          "Wins if all aliens are dead and only one crew member remains.",
          ActionKind.HUNT, (SpecialCondition.ALIEN_HUNTER, SpecialCondition.SOLO_WIN)),
)

ROLES: Dict[str, RoleDefinition] = {role.key: role for role in _CATALOG}

CORE_INFO_ROLE = "bioscanner"
BASE_INFILTRATOR_ROLE = "alien"
FILLER_ROLE = "crew_member"

# Order in which standard games draw distinct infiltrator roles
INFILTRATOR_ROLE_OPTIONS: Tuple[str, ...] = (
    "alien",
    "alien_pup",
    "sleep_alien",
    "rogue_alien",
    "alien_scanner",
    "parasyte_alien",
    "humanoid_alien",
    "infected_crewmember",
)

# Every role once, two base aliens
FULL_ROLE_SET: Dict[str, int] = {key: 1 for key in ROLES}
FULL_ROLE_SET[BASE_INFILTRATOR_ROLE] = 2


def get_role(role_key: str) -> RoleDefinition:
    """Look up a role definition, raising UnknownRole on a miss."""
    try:
        return ROLES[role_key]
    except KeyError:
        raise UnknownRole(role_key) from None


def is_known_role(role_key: str) -> bool:
    return role_key in ROLES


def roles_by_faction(faction: Faction) -> List[str]:
    """Get all role keys of a faction, in catalog order."""
    return [key for key, role in ROLES.items() if role.faction == faction]


def get_infiltrator_roles() -> List[str]:
    """Get all alien team roles."""
    return roles_by_faction(Faction.INFILTRATOR)
