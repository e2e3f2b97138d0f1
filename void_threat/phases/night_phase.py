"""
Night resolution: turns one night's submitted actions into a single outcome.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set, Any

from ..core.exceptions import ActionValidationError
from ..core.game_engine import GameState
from ..core.player import Player, Link, LinkType, RoleChange, EliminationCause
from ..core.roles import (
    ActionKind,
    SpecialCondition,
    CORE_INFO_ROLE,
    BASE_INFILTRATOR_ROLE,
    COLLECTIVE_ACTIONS,
)
from .actions import NightAction, validate_night_action, PROTECTIVE_ACTIONS, SPENDABLE_ACTIONS
from .cascade import EliminationCascade

# Scan answers
ALIEN = "ALIEN"
CREW = "CREW"
ALIEN_DETECTED = "ALIEN DETECTED"
NO_ALIENS = "NO ALIENS"
AWAKE = "AWAKE"
ASLEEP = "ASLEEP"
NO_BIOSCANNER = "NO BIOSCANNER"

# Where a nomination came from
COLLECTIVE = "collective"
SOLO_KILL = "kill"
HUNT = "hunt"


@dataclass
class ScanResult:
    """Private answer delivered to one actor."""
    result: str
    target_label: str
    detail: Dict[str, bool] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"result": self.result, "target_label": self.target_label, "detail": dict(self.detail)}


@dataclass
class NightResult:
    """Outcome of one night."""
    night_number: int
    scan_results: Dict[str, ScanResult] = field(default_factory=dict)  # {actor_id: result}
    eliminated: List[str] = field(default_factory=list)
    protected: Set[str] = field(default_factory=set)
    transformations: List[RoleChange] = field(default_factory=list)
    day_protected: Set[str] = field(default_factory=set)
    silenced: Set[str] = field(default_factory=set)
    marked_for_day: List[str] = field(default_factory=list)
    links_created: List[Link] = field(default_factory=list)
    fallen_heroes: List[str] = field(default_factory=list)
    kill_blocked: bool = False
    validation_errors: List[ActionValidationError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "night_number": self.night_number,
            "scan_results": {actor: scan.to_dict() for actor, scan in self.scan_results.items()},
            "eliminated": list(self.eliminated),
            "protected": sorted(self.protected),
            "transformations": [change.to_dict() for change in self.transformations],
            "day_protected": sorted(self.day_protected),
            "silenced": sorted(self.silenced),
            "marked_for_day": list(self.marked_for_day),
            "links_created": [link.to_dict() for link in self.links_created],
            "fallen_heroes": list(self.fallen_heroes),
            "kill_blocked": self.kill_blocked,
            "validation_errors": [error.to_dict() for error in self.validation_errors],
        }


class NightActionResolver:
    """
    Resolves a night in a fixed order:

    1. protections, 2. information actions, 3. kill nominations,
    4. protection filtering, 5. elimination cascade.

    Night 1 link actions are turned into links before step 1. Carried flags
    (kill block, double kill, sleeper, links) are read from and written back
    to the state.
    """

    def resolve(self, night_number: int, state: GameState, actions: Iterable[NightAction]) -> NightResult:
        result = NightResult(night_number=night_number)
        valid = self._validate(night_number, state, actions, result)

        if night_number == 1:
            self._create_links(state, valid, result)

        self._collect_protections(night_number, state, valid, result)
        self._resolve_information(state, valid, result)
        nominees = self._collect_nominees(state, valid, result)
        doomed = self._filter_nominees(night_number, state, nominees, result)

        outcome = EliminationCascade(state, EliminationCause.NIGHT, night_number).run(doomed, "night_kill")
        result.eliminated = outcome.eliminated
        result.transformations.extend(outcome.transformations)
        result.fallen_heroes = outcome.fallen_heroes
        state.pending_revenge.extend(outcome.fallen_heroes)

        state.day_protected = set(result.day_protected)
        state.silenced = set(result.silenced)

        if state.event_emitter:
            state.event_emitter.emit_night_resolution(result.to_dict())
        return result

    def _validate(self, night_number: int, state: GameState, actions: Iterable[NightAction],
                  result: NightResult) -> List[NightAction]:
        """Drop invalid, dead-actor and duplicate actions; the first action per actor stands."""
        valid = []
        seen: Set[str] = set()
        for action in actions:
            if action.actor_id in seen:
                result.validation_errors.append(ActionValidationError(
                    action.actor_id, "Duplicate action for this night", action.action_kind.value))
                continue
            try:
                actor = validate_night_action(action, state, night_number)
            except ActionValidationError as error:
                result.validation_errors.append(error)
                continue
            if actor is None:
                continue
            seen.add(action.actor_id)
            valid.append(action)
            state._log_action("night_action", action.to_dict())

        if state.event_emitter:
            for error in result.validation_errors:
                state.event_emitter.emit_validation_error(night_number, error.to_dict())
        return valid

    def _create_links(self, state: GameState, actions: List[NightAction], result: NightResult) -> None:
        for action in actions:
            if action.action_kind != ActionKind.LINK:
                continue
            role = state.get_player(action.actor_id).role
            if role.has(SpecialCondition.TRANSFORMATION):
                link_type = LinkType.CLONE
            elif role.has(SpecialCondition.DEATH_LINK):
                link_type = LinkType.PARASYTE
            else:
                continue
            link = Link(link_type=link_type, source_id=action.actor_id, target_id=action.target_id)
            state.add_link(link)
            result.links_created.append(link)

    def _collect_protections(self, night_number: int, state: GameState, actions: List[NightAction],
                             result: NightResult) -> None:
        for action in actions:
            kind = action.action_kind
            if kind in (ActionKind.PROTECT, ActionKind.HEAL):
                result.protected.add(action.target_id)
            elif kind == ActionKind.PROTECT_DAY:
                result.day_protected.add(action.target_id)
            elif kind == ActionKind.SILENCE:
                result.silenced.add(action.target_id)
            else:
                continue

            if kind in PROTECTIVE_ACTIONS:
                state.last_protect_targets[action.actor_id] = (night_number, action.target_id)
            if kind in SPENDABLE_ACTIONS:
                state.used_abilities.add((action.actor_id, kind.value))

    def _resolve_information(self, state: GameState, actions: List[NightAction], result: NightResult) -> None:
        for action in actions:
            actor = state.get_player(action.actor_id)
            kind = action.action_kind
            if kind == ActionKind.SCAN:
                target = state.get_player(action.target_id)
                if actor.role.has(SpecialCondition.ADJACENT_SCAN):
                    scan = self._adjacent_scan(state, target)
                else:
                    scan = self._binary_scan(target)
            elif kind == ActionKind.DUAL_SCAN:
                scan = self._dual_scan(state.get_player(action.target_id))
            elif kind == ActionKind.OBSERVE:
                scan = self._observe(state)
            elif kind == ActionKind.AWAKENING_CHECK:
                scan = ScanResult(result=AWAKE if state.sleeper_awake else ASLEEP, target_label=actor.label)
            else:
                continue
            result.scan_results[action.actor_id] = scan

    @staticmethod
    def _binary_scan(target: Player) -> ScanResult:
        """Alien or crew, inverted for disguised roles."""
        looks_alien = target.is_infiltrator
        if target.role.has(SpecialCondition.FALSE_SCAN):
            looks_alien = not looks_alien
        return ScanResult(
            result=ALIEN if looks_alien else CREW,
            target_label=target.label,
            detail={"alien": looks_alien},
        )

    @staticmethod
    def _adjacent_scan(state: GameState, target: Player) -> ScanResult:
        """Any alien among the target and its living neighbours?"""
        group = adjacent_players(state, target)
        found = any(p.is_infiltrator for p in group)
        return ScanResult(
            result=ALIEN_DETECTED if found else NO_ALIENS,
            target_label=target.label,
            detail={"alien": found},
        )

    @staticmethod
    def _dual_scan(target: Player) -> ScanResult:
        """Two separate answers: alien? Bioscanner?"""
        is_alien = target.is_infiltrator
        is_bioscanner = target.role_key == CORE_INFO_ROLE
        return ScanResult(
            result=f"ALIEN: {'YES' if is_alien else 'NO'} | BIOSCANNER: {'YES' if is_bioscanner else 'NO'}",
            target_label=target.label,
            detail={"alien": is_alien, "bioscanner": is_bioscanner},
        )

    @staticmethod
    def _observe(state: GameState) -> ScanResult:
        scanners = state.get_players_with_role(CORE_INFO_ROLE)
        if not scanners:
            return ScanResult(result=NO_BIOSCANNER, target_label="")
        labels = ", ".join(p.label for p in scanners)
        return ScanResult(result=f"BIOSCANNER: {labels}", target_label=labels)

    def _collect_nominees(self, state: GameState, actions: List[NightAction],
                          result: NightResult) -> Dict[str, Set[str]]:
        """Gather kill targets with where each nomination came from."""
        nominees: Dict[str, Set[str]] = {}
        collective: List[str] = []

        for action in actions:
            actor = state.get_player(action.actor_id)
            kind = action.action_kind
            if kind in COLLECTIVE_ACTIONS and actor.is_infiltrator:
                for target_id in action.targets:
                    if target_id not in collective:
                        collective.append(target_id)
            elif kind == ActionKind.KILL:
                nominees.setdefault(action.target_id, set()).add(SOLO_KILL)
                state.used_abilities.add((actor.player_id, kind.value))
            elif kind == ActionKind.HUNT:
                target = state.get_player(action.target_id)
                if actor.role.has(SpecialCondition.ALIEN_HUNTER) and target.is_infiltrator:
                    nominees.setdefault(target.player_id, set()).add(HUNT)

        blocked = state.kill_blocked_next_night
        state.kill_blocked_next_night = False
        state.double_kill_next_night = False

        if blocked:
            result.kill_blocked = bool(collective)
            return nominees

        for target_id in collective:
            nominees.setdefault(target_id, set()).add(COLLECTIVE)
        return nominees

    def _filter_nominees(self, night_number: int, state: GameState, nominees: Dict[str, Set[str]],
                         result: NightResult) -> List[str]:
        """Apply protections, night survivors and attack transformations; return who dies."""
        doomed = []
        for target_id, sources in nominees.items():
            if target_id in result.protected:
                continue
            target = state.get_player(target_id)
            if target is None or not target.is_alive:
                continue

            role = target.role
            if role.has(SpecialCondition.SURVIVE_NIGHT_ATTACK):
                state.marked_for_day.add(target_id)
                result.marked_for_day.append(target_id)
            elif role.has(SpecialCondition.TRANSFORMATION_ON_ATTACK) and sources == {COLLECTIVE}:
                result.transformations.append(
                    state.apply_role_change(target, BASE_INFILTRATOR_ROLE, "attack_transform", night_number)
                )
            else:
                doomed.append(target_id)
        return doomed


def adjacent_players(state: GameState, target: Player) -> List[Player]:
    """
    The target plus its left and right living neighbours by seat.

    Wraps around the ends of the living range; never lists anyone twice.
    """
    seated = sorted(state.get_alive_players(), key=lambda p: p.position_order)
    index = next((i for i, p in enumerate(seated) if p.player_id == target.player_id), None)
    if index is None:
        return []

    group = [seated[index]]
    for neighbour in (seated[index - 1], seated[(index + 1) % len(seated)]):
        if all(neighbour.player_id != p.player_id for p in group):
            group.append(neighbour)
    return group
