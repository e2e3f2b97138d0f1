"""
Night actions and their validation.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple, Dict, Any

from ..core.exceptions import ActionValidationError
from ..core.game_engine import GameState
from ..core.player import Player
from ..core.roles import (
    ActionKind,
    SpecialCondition,
    TARGETED_ACTIONS,
    COLLECTIVE_ACTIONS,
)

# Actions that only exist on the first night
FIRST_NIGHT_ONLY = (ActionKind.LINK, ActionKind.OBSERVE)

# Actions a once-per-game role can spend
SPENDABLE_ACTIONS = (ActionKind.KILL, ActionKind.HEAL)

PROTECTIVE_ACTIONS = (ActionKind.PROTECT, ActionKind.PROTECT_DAY)


@dataclass(frozen=True)
class NightAction:
    """An action submitted by one player for one night."""
    night_number: int
    role: str
    action_kind: ActionKind
    actor_id: str
    target_id: Optional[str] = None
    target_ids: Tuple[str, ...] = ()  # Collective kills may name several
    result: Optional[str] = None

    @property
    def targets(self) -> List[str]:
        """All named targets, single target first, without repeats."""
        ordered = []
        for target in ((self.target_id,) if self.target_id else ()) + tuple(self.target_ids):
            if target not in ordered:
                ordered.append(target)
        return ordered

    def to_dict(self) -> Dict[str, Any]:
        return {
            "night_number": self.night_number,
            "role": self.role,
            "action_kind": self.action_kind.value,
            "actor_id": self.actor_id,
            "target_id": self.target_id,
            "target_ids": list(self.target_ids),
            "result": self.result,
        }


def _reject(action: NightAction, reason: str) -> ActionValidationError:
    return ActionValidationError(action.actor_id, reason, action.action_kind.value)


def validate_night_action(action: NightAction, state: GameState, night_number: int) -> Optional[Player]:
    """
    Validate one action against the current roster.

    Returns the acting player, or None when the action should be silently
    ignored (the actor is dead). Raises ActionValidationError otherwise.
    """
    actor = state.get_player(action.actor_id)
    if actor is None:
        raise _reject(action, "Actor not found")

    if not actor.is_alive:
        return None

    if action.night_number != night_number:
        raise _reject(action, f"Submitted for night {action.night_number}, resolving night {night_number}")

    if action.role != actor.role_key:
        raise _reject(action, f"Actor holds role '{actor.role_key}', not '{action.role}'")

    role = actor.role
    kind = action.action_kind
    if kind not in role.allowed_actions:
        raise _reject(action, f"Role '{role.key}' cannot perform '{kind.value}'")

    if kind in FIRST_NIGHT_ONLY and night_number != 1:
        raise _reject(action, f"'{kind.value}' is only allowed on night 1")

    targets = action.targets
    if kind in TARGETED_ACTIONS and not action.target_id:
        raise _reject(action, f"'{kind.value}' requires a target")
    if kind == ActionKind.COLLECTIVE_KILL and not targets:
        raise _reject(action, "Collective kill requires a target")
    slots = 2 if state.double_kill_next_night else 1
    if kind in COLLECTIVE_ACTIONS and len(targets) > slots:
        raise _reject(action, f"Collective kill names {len(targets)} targets, {slots} allowed tonight")

    for target_id in targets:
        target = state.get_player(target_id)
        if target is None:
            raise _reject(action, f"Target {target_id} not found")
        if not target.is_alive:
            raise _reject(action, f"Target {target_id} is not alive")

    if kind == ActionKind.LINK and action.target_id == actor.player_id:
        raise _reject(action, "Cannot link to self")

    if role.has(SpecialCondition.ONCE_PER_GAME) and kind in SPENDABLE_ACTIONS:
        if (actor.player_id, kind.value) in state.used_abilities:
            raise _reject(action, f"'{kind.value}' already used this game")

    if kind in PROTECTIVE_ACTIONS:
        previous = state.last_protect_targets.get(actor.player_id)
        if previous == (night_number - 1, action.target_id):
            raise _reject(action, "Cannot protect the same player on consecutive nights")

    if (kind in COLLECTIVE_ACTIONS and role.has(SpecialCondition.DELAYED_AWAKENING)
            and not state.sleeper_awake):
        raise _reject(action, "Still asleep")

    return actor
