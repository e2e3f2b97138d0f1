"""
Tests for day vote tallying.
"""

import pytest
from void_threat.core import GamePhase, EliminationCause
from void_threat.phases import VotingHandler


@pytest.fixture
def handler():
    return VotingHandler()


@pytest.fixture
def day_state(make_state, advance_to):
    state = make_state("ship_captain", "alien", "crew_member", "crew_member", "crew_member", "bioscanner")
    return advance_to(state, GamePhase.DAY1, 1)


def test_plurality(handler, day_state):
    tally = handler.tally(day_state, {"p1": "p2", "p3": "p2", "p4": "p5", "p2": "p4"})
    assert tally.counts == {"p2": 2, "p5": 1, "p4": 1}
    assert tally.elimination_target == "p2"
    assert not tally.is_tie


def test_tie_means_no_elimination(handler, day_state):
    tally = handler.tally(day_state, {"p1": "p2", "p3": "p4"})
    assert tally.is_tie
    assert tally.elimination_target is None
    assert sorted(tally.get_tied_players()) == ["p2", "p4"]


def test_empty_vote(handler, day_state):
    tally = handler.tally(day_state, {})
    assert tally.elimination_target is None
    assert not tally.is_tie


def test_silenced_and_dead_voters_are_ignored(handler, day_state):
    day_state.silenced = {"p3"}
    day_state.get_player("p4").eliminate(EliminationCause.NIGHT, 1)

    tally = handler.tally(day_state, {"p3": "p2", "p4": "p2", "p5": "p6", "ghost": "p2", "p6": "p4"})
    assert tally.counts == {"p6": 1}
    assert sorted(tally.ignored_voters) == ["ghost", "p3", "p4", "p6"]


def test_captain_double_vote_once_per_game(handler, day_state, advance_to):
    tally = handler.tally(day_state, {"p1": "p2", "p3": "p4", "p5": "p4"}, double_vote_by=["p1"])
    assert tally.counts == {"p2": 2, "p4": 2}
    assert tally.double_votes == ["p1"]

    advance_to(day_state, GamePhase.DAY2PLUS, 2)
    tally = handler.tally(day_state, {"p1": "p2", "p3": "p4"}, double_vote_by=["p1"])
    assert tally.counts == {"p2": 1, "p4": 1}
    assert tally.double_votes == []


def test_double_vote_needs_the_ability(handler, day_state):
    tally = handler.tally(day_state, {"p3": "p2", "p4": "p5"}, double_vote_by=["p3"])
    assert tally.counts == {"p2": 1, "p5": 1}
