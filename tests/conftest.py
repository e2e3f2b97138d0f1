"""
Pytest fixtures for Void Threat engine tests.
"""

import pytest
from typing import Iterable, List, Optional

from void_threat.core import GameState, GamePhase, Judge, Player, ActionKind
from void_threat.config.game_config import GameConfig
from void_threat.phases import NightAction


def seat_players(roles: Iterable[str]) -> List[Player]:
    """Players p1..pN seated in order with the given roles."""
    return [Player.from_role(f"p{seat}", seat, role) for seat, role in enumerate(roles, start=1)]


@pytest.fixture
def game_config():
    """Test game configuration."""
    return GameConfig(
        use_judge_announcements=False,  # Disable for cleaner test output
        record_events=False,
        random_seed=1234,
    )


@pytest.fixture
def make_state():
    """Build a game seated with the given roles and advanced to night 1."""
    def _make(*roles: str, emitter=None) -> GameState:
        state = GameState(event_emitter=emitter)
        state.bind_players(seat_players(roles))
        state.advance_phase()
        return state
    return _make


@pytest.fixture
def act():
    """Build a night action for the current night, taking the actor's current role."""
    def _act(state: GameState, actor_id: str, kind: ActionKind, target_id: Optional[str] = None,
             target_ids: Iterable[str] = ()) -> NightAction:
        return NightAction(
            night_number=state.night_number,
            role=state.get_player(actor_id).role_key,
            action_kind=kind,
            actor_id=actor_id,
            target_id=target_id,
            target_ids=tuple(target_ids),
        )
    return _act


@pytest.fixture
def advance_to():
    """Advance a state until it reaches the given phase and counter."""
    def _advance(state: GameState, phase: GamePhase, number: int) -> GameState:
        def reached():
            if state.phase != phase:
                return False
            return (state.night_number if state.machine.is_night else state.day_number) == number
        while not reached():
            state.advance_phase()
        return state
    return _advance


@pytest.fixture
def judge(game_config):
    """Create a judge over an empty game."""
    return Judge(GameState(), game_config)


@pytest.fixture
def standard_state():
    """A basic six-seat game at night 1: Bioscanner, Alien, four Crew Members."""
    state = GameState()
    state.bind_players(seat_players([
        "bioscanner", "alien", "crew_member", "crew_member", "crew_member", "watchman",
    ]))
    state.advance_phase()
    return state
