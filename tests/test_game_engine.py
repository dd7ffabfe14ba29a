"""Tests for the public game engine API."""

import pytest

from burn_rate import GameConfig, GameEngine
from burn_rate.engine.combat import CombatFactors
from burn_rate.models.ai import Decision
from burn_rate.models.fleet import FleetComposition
from burn_rate.schemas import BuildAction

NEUTRAL = {"frigate": 1.0, "cruiser": 1.0, "battleship": 1.0}


def always_wait(game_state, ai_state, rng):
    return Decision.wait()


@pytest.fixture
def engine():
    """Seeded game against an AI that never acts."""
    game = GameEngine(GameConfig(ai_archetype="economist", seed=42))
    game.ai_engine.policy = always_wait
    return game


def test_initial_state():
    engine = GameEngine(GameConfig(seed=1))
    state = engine.get_game_state()
    assert state.turn == 1
    assert state.phase == "early"
    assert state.player.resources.metal == 10000
    assert state.player.resources.energy == 10000
    assert state.player.home_fleet == FleetComposition(50, 20, 10)
    assert state.ai.home_fleet == FleetComposition(50, 20, 10)
    assert not engine.is_game_over()
    assert engine.get_winner() is None
    assert engine.get_victory_type() is None
    assert engine.validate_game_state() == []


def test_build_ten_frigates_then_end_two_turns(engine):
    """Building costs are paid at once and quiet turns produce no battles."""
    result = engine.submit_action({"type": "build", "buildType": "frigate", "quantity": 10})
    assert result.success
    assert result.state_changed
    assert result.message == "Started building 10 frigate(s) for 40 metal, 20 energy"

    state = engine.get_game_state()
    assert state.player.resources.metal == 9960
    assert state.player.resources.energy == 9980

    first = engine.end_turn()
    second = engine.end_turn()
    assert first.success and second.success
    assert first.combat_events == []
    assert second.combat_events == []
    assert engine.get_current_turn() == 3
    assert engine.get_game_state().player.home_fleet.frigates == 60


def test_submit_action_model(engine):
    result = engine.submit_action(BuildAction(build_type="reactor", quantity=1))
    assert result.success
    assert engine.get_game_state().player.resources.metal == 9100
    assert len(engine.pending_actions) == 1

    engine.end_turn()
    assert engine.pending_actions == []
    assert engine.get_game_state().player.economy.reactors == 1


def test_malformed_action_rejected(engine):
    result = engine.submit_action({"type": "build", "buildType": "starbase", "quantity": 1})
    assert not result.success
    assert not result.state_changed
    assert result.message == "Invalid action"
    assert result.errors
    assert engine.pending_actions == []
    assert len(engine.error_log.by_type("user_input")) == 1


def test_unaffordable_build_rejected(engine):
    engine.state.player.resources.metal = 100
    result = engine.submit_action({"type": "build", "buildType": "mine", "quantity": 1})
    assert not result.success
    assert "Insufficient metal: need 1500, have 100" in result.errors
    assert engine.get_game_state().player.resources.metal == 100


def test_attack_launches_fleet(engine):
    result = engine.submit_action(
        {"type": "attack", "fleet": {"frigates": 10, "cruisers": 5}}
    )
    assert result.success
    assert result.message == "Fleet launched! 10F/5C/0B arrives turn 2, returns turn 4"
    state = engine.get_game_state()
    assert state.player.home_fleet == FleetComposition(40, 15, 10)
    assert state.player.movements[0].arrival_turn == 2


def test_attack_with_missing_ships_rejected(engine):
    result = engine.submit_action({"type": "attack", "fleet": {"frigates": 100}})
    assert not result.success
    assert result.errors == ["Insufficient frigates. Need: 100, Have: 50"]
    assert engine.get_game_state().player.movements == []


def test_empty_attack_rejected(engine):
    result = engine.submit_action({"type": "attack", "fleet": {}})
    assert not result.success
    assert any("Cannot send empty fleet" in error for error in result.errors)


def test_scan(engine):
    result = engine.submit_action({"type": "scan", "scanType": "deep"})
    assert result.success
    state = engine.get_game_state()
    assert state.player.resources.energy == 7500
    assert state.player.intelligence.last_scan_turn == 1


def test_unaffordable_scan(engine):
    engine.state.player.resources.energy = 500
    result = engine.submit_action({"type": "scan", "scanType": "deep"})
    assert not result.success
    assert result.errors == ["Insufficient energy for deep scan. Need: 2500, Have: 500"]


def test_snapshot_is_independent(engine):
    snapshot = engine.get_game_state()
    snapshot.player.resources.metal = 0
    snapshot.player.home_fleet = FleetComposition.empty()
    assert engine.get_game_state().player.resources.metal == 10000
    assert engine.get_game_state().player.home_fleet.total == 80


def test_full_attack_wins_military_victory(engine):
    """Wiping out the AI home fleet ends the game on the turn of the battle."""
    engine.combat_factors = CombatFactors(
        attacker_factors=NEUTRAL,
        defender_factors=NEUTRAL,
        attacker_loss_fraction=0.0,
        defender_loss_fraction=1.0,
    )
    result = engine.submit_action(
        {"type": "attack", "fleet": {"frigates": 50, "cruisers": 20, "battleships": 10}}
    )
    assert result.success

    first = engine.end_turn()
    assert first.combat_events == []
    assert not first.game_ended

    second = engine.end_turn()
    assert len(second.combat_events) == 1
    assert second.game_ended
    assert second.winner == "player"
    assert second.victory_type == "military"
    assert second.turn == 2
    assert engine.is_game_over()
    assert engine.get_combat_log()[0].defender_fleet == FleetComposition(50, 20, 10)


def test_actions_rejected_after_game_over(engine):
    engine.state.end_game("ai", "economic")
    result = engine.submit_action({"type": "scan", "scanType": "basic"})
    assert not result.success
    assert result.message == "Game is over"

    turn = engine.end_turn()
    assert not turn.success
    assert turn.errors == ["Game is already over"]
    assert turn.winner == "ai"


def test_failed_turn_is_reported(engine, monkeypatch):
    """A phase exception fails the turn but keeps earlier phase changes."""

    def explode(game_state, factors=None):
        raise RuntimeError("boom")

    monkeypatch.setattr(engine.executor, "execute_phase_combat", explode)
    result = engine.end_turn()
    assert not result.success
    assert result.errors == ["Turn processing failed: boom"]
    assert engine.get_current_turn() == 1
    assert engine.get_game_state().player.resources.metal == 19700
    assert len(engine.error_log.by_type("game_logic")) == 1


def test_seeded_games_are_deterministic():
    def play(seed):
        engine = GameEngine(GameConfig(ai_archetype="hybrid", seed=seed))
        for _ in range(6):
            engine.submit_action({"type": "build", "buildType": "frigate", "quantity": 2})
            engine.end_turn()
        return engine.get_game_statistics()

    assert play(7) == play(7)


def test_game_statistics(engine):
    engine.end_turn()
    stats = engine.get_game_statistics()
    assert stats["turn"] == 2
    assert stats["ai_archetype"] == "economist"
    assert stats["total_battles"] == 0
    assert stats["player"]["total_fleet"] == 80
    assert stats["player"]["net_metal_income"] == 9700


def test_reset_game(engine):
    engine.submit_action({"type": "build", "buildType": "frigate", "quantity": 10})
    engine.end_turn()
    engine.reset_game(GameConfig(ai_archetype="trickster", seed=3))
    assert engine.get_current_turn() == 1
    assert engine.ai_engine.archetype == "trickster"
    assert engine.get_game_state().player.resources.metal == 10000
    assert engine.pending_actions == []


@pytest.mark.parametrize("archetype", ["aggressor", "economist", "trickster", "hybrid"])
def test_games_run_without_errors(archetype):
    """Every archetype can play a stretch of turns without breaking the state."""
    engine = GameEngine(GameConfig(ai_archetype=archetype, seed=42))
    for _ in range(12):
        if engine.is_game_over():
            break
        result = engine.end_turn()
        assert result.success
        assert engine.validate_game_state() == []
    assert engine.error_log.by_type("validation") == []
