"""
Core game engine components: roles, balance, assignment, game state and rule enforcement.
"""

from .exceptions import InvalidPlayerCount, InvalidTransition, UnknownRole, ActionValidationError
from .roles import (
    Faction,
    ActionKind,
    SpecialCondition,
    RoleDefinition,
    ROLES,
    get_role,
    is_known_role,
    roles_by_faction,
    get_infiltrator_roles,
)
from .player import Player, EliminationCause, Link, LinkType, RoleChange
from .balance import BalanceScore, calculate_balance, score_role_counts
from .assignment import (
    RoleAssignment,
    AssignmentResult,
    assign_standard_roles,
    assign_custom_roles,
    shuffle_roles,
    bind_roles_to_seats,
    get_recommended_player_counts,
)
from .win_conditions import Winner, evaluate_winner
from .game_engine import GameState, GamePhase, PhaseStateMachine
from .judge import Judge

__all__ = [
    'InvalidPlayerCount',
    'InvalidTransition',
    'UnknownRole',
    'ActionValidationError',
    'Faction',
    'ActionKind',
    'SpecialCondition',
    'RoleDefinition',
    'ROLES',
    'get_role',
    'is_known_role',
    'roles_by_faction',
    'get_infiltrator_roles',
    'Player',
    'EliminationCause',
    'Link',
    'LinkType',
    'RoleChange',
    'BalanceScore',
    'calculate_balance',
    'score_role_counts',
    'RoleAssignment',
    'AssignmentResult',
    'assign_standard_roles',
    'assign_custom_roles',
    'shuffle_roles',
    'bind_roles_to_seats',
    'get_recommended_player_counts',
    'Winner',
    'evaluate_winner',
    'GameState',
    'GamePhase',
    'PhaseStateMachine',
    'Judge',
]
