"""
Exceptions raised by the rules engine.
"""

from typing import Optional


class InvalidPlayerCount(Exception):
    """Raised when a role assignment is requested for an unsupported roster size."""

    def __init__(self, player_count: int, message: str = ""):
        self.player_count = player_count
        self.message = message or f"Minimum 5 players required (got {player_count})"
        super().__init__(self.message)


class InvalidTransition(Exception):
    """Raised when the phase machine is advanced from a phase that cannot move on."""

    def __init__(self, phase: str, message: str = ""):
        self.phase = phase
        self.message = message or f"Cannot advance from phase '{phase}'"
        super().__init__(self.message)


class UnknownRole(KeyError):
    """Raised on a role catalog miss."""

    def __init__(self, role_key: str):
        self.role_key = role_key
        self.message = f"Unknown role: {role_key}"
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ActionValidationError(Exception):
    """
    A single submitted action was rejected.

    Never aborts a resolution: the resolver records it and moves on.
    """

    def __init__(self, actor_id: Optional[str], reason: str, action_kind: Optional[str] = None):
        self.actor_id = actor_id
        self.reason = reason
        self.action_kind = action_kind
        self.message = f"Action by {actor_id} rejected: {reason}"
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "actor_id": self.actor_id,
            "action_kind": self.action_kind,
            "reason": self.reason,
        }
