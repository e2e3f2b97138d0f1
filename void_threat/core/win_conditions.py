"""
Win condition evaluation.
"""

from enum import Enum
from typing import Iterable, Optional

from .player import Player
from .roles import SpecialCondition


class Winner(Enum):
    """Who won the game."""
    CREW = "crew"
    INFILTRATORS = "infiltrators"
    ROGUE_ALIEN = "rogue_alien"
    PREDATOR = "predator"


def _is_solo_hunter(player: Player) -> bool:
    role = player.role
    return role.has(SpecialCondition.ALIEN_HUNTER) and role.has(SpecialCondition.SOLO_WIN)


def evaluate_winner(players: Iterable[Player]) -> Optional[Winner]:
    """
    Check if the game has ended and return the winner.

    Pure and idempotent: call it after any elimination. Returns None if the
    game continues.
    """
    alive = [p for p in players if p.is_alive]
    alive_crew = [p for p in alive if p.is_crew]
    alive_infiltrators = [p for p in alive if p.is_infiltrator]

    # Crew wins once every alien is gone, unless the hunter has drawn level with the crew
    if not alive_infiltrators:
        if len(alive_crew) == 1 and any(_is_solo_hunter(p) for p in alive):
            return Winner.PREDATOR
        return Winner.CREW

    if len(alive_infiltrators) >= len(alive_crew):
        return Winner.INFILTRATORS

    if len(alive_infiltrators) == 1 and alive_infiltrators[0].role.has(SpecialCondition.SOLO_WIN):
        return Winner.ROGUE_ALIEN

    return None
