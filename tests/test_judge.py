"""
Tests for the judge system.
"""

import random

import pytest
from unittest.mock import Mock
from void_threat.core import (
    GameState, GamePhase, Judge, Winner, ActionKind,
    InvalidPlayerCount, InvalidTransition, assign_standard_roles,
)
from void_threat.config.game_config import GameConfig
from void_threat.phases import NightAction

PLAYER_IDS = [f"p{seat}" for seat in range(1, 9)]


def test_setup_standard_game(judge):
    players = judge.setup_game(PLAYER_IDS)

    assert [p.position_order for p in players] == list(range(1, 9))
    assert sorted(p.role_key for p in players) == sorted(assign_standard_roles(8).role_keys)
    assert judge.game_state.phase == GamePhase.SETUP
    assert judge.assignment.is_balanced


def test_setup_is_reproducible_with_seed(game_config):
    first = Judge(GameState(), game_config).setup_game(PLAYER_IDS)
    second = Judge(GameState(), game_config).setup_game(PLAYER_IDS)
    assert [p.role_key for p in first] == [p.role_key for p in second]


def test_setup_with_explicit_rng(judge):
    players = judge.setup_game(PLAYER_IDS, rng=random.Random(3))
    assert len(players) == 8


def test_setup_custom_roles(game_config):
    game_config.custom_roles = {"bioscanner": 1, "alien": 1, "crew_member": 3}
    judge = Judge(GameState(), game_config)
    players = judge.setup_game(["a", "b", "c", "d", "e"], names={"a": "Ada"})

    assert sorted(p.role_key for p in players) == ["alien", "bioscanner", "crew_member", "crew_member", "crew_member"]
    assert judge.game_state.get_player("a").label == "Ada"


def test_setup_custom_roles_argument_overrides_config(judge):
    players = judge.setup_game(["a", "b", "c", "d", "e"], role_counts={"alien": 1, "crew_member": 4})
    assert sum(1 for p in players if p.is_infiltrator) == 1


def test_setup_rejects_wrong_counts(judge, game_config):
    with pytest.raises(InvalidPlayerCount):
        judge.setup_game(["a", "b", "c"])

    with pytest.raises(InvalidPlayerCount):
        Judge(GameState(), game_config).setup_game(["a", "b"], role_counts={"alien": 1, "crew_member": 4})

    game_config.max_players = 6
    with pytest.raises(InvalidPlayerCount):
        Judge(GameState(), game_config).setup_game(PLAYER_IDS)


def test_resolution_requires_matching_phase(judge):
    judge.setup_game(PLAYER_IDS)
    with pytest.raises(InvalidTransition):
        judge.resolve_night([])

    judge.advance_phase()
    with pytest.raises(InvalidTransition):
        judge.resolve_day()
    with pytest.raises(InvalidTransition):
        judge.tally_votes({})


def test_announcements_disabled(judge, capsys):
    judge.announce("Night falls.")
    assert judge.announcements == []
    assert capsys.readouterr().out == ""


def test_announcements_enabled(capsys):
    emitter = Mock()
    judge = Judge(GameState(), GameConfig(use_judge_announcements=True), event_emitter=emitter)
    judge.announce("Night falls.")

    assert judge.announcements == ["Night falls."]
    assert "[JUDGE] Night falls." in capsys.readouterr().out
    emitter.emit_announcement.assert_called_once_with("Night falls.", "setup", 0, 0)


def test_emitter_is_attached_to_state():
    emitter = Mock()
    state = GameState()
    Judge(state, GameConfig(use_judge_announcements=False), event_emitter=emitter)
    assert state.event_emitter is emitter


def test_night_kill_to_parity_ends_game(game_config):
    judge = Judge(GameState(), game_config)
    judge.setup_game(["a", "b", "c", "d", "e"], role_counts={"alien": 2, "crew_member": 3})
    judge.advance_phase()

    aliens = judge.game_state.get_infiltrator_players()
    crew = judge.game_state.get_crew_players()
    judge.resolve_night([NightAction(1, "alien", ActionKind.COLLECTIVE_KILL, aliens[0].player_id,
                                     crew[0].player_id)])

    assert judge.game_state.winner == Winner.INFILTRATORS
    assert judge.game_state.phase == GamePhase.ENDED
    with pytest.raises(InvalidTransition):
        judge.advance_phase()


def test_check_winner_is_stable_after_end(judge):
    judge.setup_game(PLAYER_IDS)
    judge.advance_phase()
    for player in judge.game_state.get_infiltrator_players():
        player.is_alive = False

    assert judge.check_winner() == Winner.CREW
    assert judge.check_winner() == Winner.CREW
    game_over = [e for e in judge.game_state.action_log if e["type"] == "game_over"]
    assert len(game_over) == 1


def test_end_without_winner(judge):
    judge.setup_game(PLAYER_IDS)
    judge.advance_phase()
    judge.end_without_winner("max_rounds")

    assert judge.game_state.phase == GamePhase.ENDED
    assert judge.game_state.winner is None
