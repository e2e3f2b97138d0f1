"""
Dummy Agent implementation with seeded random behavior.
"""

import random
from typing import List, Optional, Set

from .base_agent import BaseAgent, AgentContext
from ..core import Player, ActionKind, SpecialCondition
from ..config.game_config import GameConfig, default_config
from ..phases.actions import NightAction


class DummyAgent(BaseAgent):
    """
    Simple dummy agent with random but reproducible behavior:
    - Aliens: join the collective kill on a random non-alien
    - Scanners, protectors, silencer, hunter: random living target
    - Clone/Parasyte: link to a random player on night 1
    - Scientist: heal or kill now and then, once each
    - Everyone: vote for a random living player; Tragic Heroes take a random victim
    """

    def __init__(self, player: Player, config: GameConfig = default_config):
        super().__init__(player, config)
        seed = config.random_seed
        if seed is not None:
            # Each seat gets different but reproducible randomness
            self.random = random.Random(seed + player.position_order)
        else:
            self.random = random.Random()
        self.checked_players: Set[str] = set()
        self.last_protected: Optional[str] = None

    def _others(self, context: AgentContext) -> List[Player]:
        return [
            p for p in context.game_state.get_alive_players()
            if p.player_id != self.player.player_id
        ]

    def _pick(self, candidates: List[Player]) -> Optional[str]:
        if not candidates:
            return None
        return self.random.choice(candidates).player_id

    def _action(self, context: AgentContext, kind: ActionKind,
                target_id: Optional[str] = None) -> NightAction:
        return NightAction(
            night_number=context.game_state.night_number,
            role=self.player.role_key,
            action_kind=kind,
            actor_id=self.player.player_id,
            target_id=target_id,
        )

    def get_night_action(self, context: AgentContext) -> Optional[NightAction]:
        if not context.available_actions:
            return None

        state = context.game_state
        role = self.player.role
        kind = role.night_action

        if self.player.is_infiltrator:
            return self._infiltrator_action(context)

        if kind in (ActionKind.SCAN, ActionKind.SILENCE, ActionKind.HUNT):
            unchecked = [p for p in self._others(context) if p.player_id not in self.checked_players]
            target = self._pick(unchecked) or self._pick(self._others(context))
            if target is None:
                return None
            if kind == ActionKind.SCAN:
                self.checked_players.add(target)
            return self._action(context, kind, target)

        if kind in (ActionKind.PROTECT, ActionKind.PROTECT_DAY):
            candidates = [p for p in state.get_alive_players() if p.player_id != self.last_protected]
            target = self._pick(candidates)
            self.last_protected = target
            return self._action(context, kind, target) if target else None

        if kind == ActionKind.LINK:
            if state.night_number != 1:
                return None
            target = self._pick(self._others(context))
            return self._action(context, kind, target) if target else None

        if kind == ActionKind.HEAL:
            return self._scientist_action(context)

        if kind == ActionKind.OBSERVE:
            return self._action(context, kind) if state.night_number == 1 else None

        if kind == ActionKind.SILENT_CHECK:
            return self._action(context, kind)

        return None

    def _infiltrator_action(self, context: AgentContext) -> Optional[NightAction]:
        state = context.game_state
        role = self.player.role

        if role.has(SpecialCondition.DELAYED_AWAKENING) and not state.sleeper_awake:
            return self._action(context, ActionKind.AWAKENING_CHECK)
        if role.night_action == ActionKind.LINK and state.night_number == 1:
            target = self._pick(self._others(context))
            if target:
                return self._action(context, ActionKind.LINK, target)
        if role.night_action == ActionKind.DUAL_SCAN and state.night_number % 2 == 0:
            target = self._pick([p for p in self._others(context) if not p.is_infiltrator])
            if target:
                return self._action(context, ActionKind.DUAL_SCAN, target)

        victims = [p for p in state.get_alive_players() if not p.is_infiltrator]
        target = self._pick(victims)
        return self._action(context, ActionKind.COLLECTIVE_KILL, target) if target else None

    def _scientist_action(self, context: AgentContext) -> Optional[NightAction]:
        used = context.game_state.used_abilities
        me = self.player.player_id
        roll = self.random.random()
        if roll < 0.25 and (me, ActionKind.HEAL.value) not in used:
            return self._action(context, ActionKind.HEAL,
                                self._pick(context.game_state.get_alive_players()))
        if roll > 0.85 and (me, ActionKind.KILL.value) not in used:
            target = self._pick(self._others(context))
            if target:
                return self._action(context, ActionKind.KILL, target)
        return None

    def get_vote_choice(self, context: AgentContext) -> Optional[str]:
        return self._pick(self._others(context))

    def get_revenge_target(self, context: AgentContext) -> Optional[str]:
        return self._pick(self._others(context))

    def wants_double_vote(self, context: AgentContext) -> bool:
        return self.random.random() < 0.5
