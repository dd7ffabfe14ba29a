"""Tests for game state consistency checks."""

import copy

from burn_rate.engine.validation import (
    validate_game_phase,
    validate_game_state,
    validate_resources,
    validate_state_transition,
)
from burn_rate.models.economy import Resources
from burn_rate.models.fleet import FleetComposition
from burn_rate.models.game import GameState, determine_game_phase
from burn_rate.models.player import PlayerState


def create_game(turn=1) -> GameState:
    def player():
        return PlayerState(
            resources=Resources(metal=10000, energy=10000),
            home_fleet=FleetComposition(50, 20, 10),
        )

    return GameState(turn=turn, player=player(), ai=player(), phase=determine_game_phase(turn))


def test_valid_state_has_no_errors():
    assert validate_game_state(create_game()) == []


def test_phase_mismatch():
    assert validate_game_phase("early", 7) == ["Turn 7 should be in 'mid' phase, but is 'early'"]


def test_resources_below_floor():
    errors = validate_resources(Resources(metal=-200000, energy=0, energy_income=-60000))
    assert errors == [
        "Metal resources are unreasonably negative",
        "Energy income is unreasonably negative",
    ]


def test_side_errors_are_prefixed():
    game = create_game()
    game.ai.resources.metal = -200000
    game.player.intelligence.scan_accuracy = 2.0
    errors = validate_game_state(game)
    assert "AI: Metal resources are unreasonably negative" in errors
    assert "Player: Scan accuracy must be between 0 and 1" in errors


def test_mutated_terminal_fields_detected():
    game = create_game()
    game.winner = "player"
    assert "Winner and victory type must only be set when the game is over" in validate_game_state(game)


def test_normal_transition():
    previous = create_game(turn=5)
    current = copy.deepcopy(previous)
    current.advance_turn()
    assert validate_state_transition(previous, current) == []


def test_turn_must_advance_by_one():
    previous = create_game(turn=3)
    current = create_game(turn=5)
    assert validate_state_transition(previous, current) == ["Turn must increment by 1, got 3 -> 5"]


def test_turn_stays_when_game_ends():
    previous = create_game(turn=3)
    current = copy.deepcopy(previous)
    current.end_game("ai", "military")
    assert validate_state_transition(previous, current) == []


def test_game_cannot_restart_or_change_winner():
    previous = create_game(turn=3)
    previous.end_game("player", "economic")
    current = create_game(turn=4)
    errors = validate_state_transition(previous, current)
    assert "Game cannot become active after being over" in errors

    current = copy.deepcopy(previous)
    current.winner = "ai"
    assert "Winner cannot change once determined" in validate_state_transition(previous, current)


def test_phase_cannot_regress():
    previous = create_game(turn=16)
    current = create_game(turn=17)
    current.phase = "mid"
    assert "Game phase cannot regress from late to mid" in validate_state_transition(previous, current)
