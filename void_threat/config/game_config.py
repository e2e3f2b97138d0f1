"""
Game configuration and constants.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict


@dataclass
class GameConfig:
    """Configuration for game parameters."""

    # Roster limits
    min_players: int = 5
    max_players: int = 25
    total_players: int = 8  # Used by the simulation CLI

    # Role assignment
    infiltrator_ratio: float = 0.3  # Share of seats given to aliens in standard games
    balance_tolerance: int = 2  # |total_score| at or below this counts as balanced
    custom_roles: Optional[Dict[str, int]] = field(default=None)  # {role_key: count}, overrides standard mode

    # Game settings
    max_rounds: int = 30  # Safety cap on night/day cycles in simulations
    random_seed: Optional[int] = None  # Seeds seat shuffling and dummy agents

    # Judge announcements
    use_judge_announcements: bool = True

    # Event recording
    record_events: bool = True
    runs_dir: str = "runs"


# Default configuration instance
default_config = GameConfig()
