"""
Night and day resolution.
"""

from .actions import NightAction, validate_night_action
from .cascade import EliminationCascade, CascadeOutcome
from .night_phase import NightActionResolver, NightResult, ScanResult, adjacent_players
from .day_phase import DayPhaseHandler, DayResult
from .voting import VotingHandler, VoteTally

__all__ = [
    'NightAction',
    'validate_night_action',
    'EliminationCascade',
    'CascadeOutcome',
    'NightActionResolver',
    'NightResult',
    'ScanResult',
    'adjacent_players',
    'DayPhaseHandler',
    'DayResult',
    'VotingHandler',
    'VoteTally',
]
