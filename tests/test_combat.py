"""Tests for combat resolution."""

import math

import pytest

from burn_rate.engine.combat import (
    CombatFactors,
    calculate_casualties,
    calculate_fleet_strength,
    calculate_unit_effectiveness,
    determine_battle_outcome,
    generate_random_factors,
    get_effectiveness,
    resolve_combat,
)
from burn_rate.models.fleet import FleetComposition
from burn_rate.utils.rng import GameRNG

NEUTRAL = {"frigate": 1.0, "cruiser": 1.0, "battleship": 1.0}


@pytest.mark.parametrize(
    "attacker, defender, expected",
    [
        ("frigate", "cruiser", 1.5),
        ("cruiser", "frigate", 0.7),
        ("cruiser", "battleship", 1.5),
        ("battleship", "cruiser", 0.7),
        ("battleship", "frigate", 1.5),
        ("frigate", "battleship", 0.7),
        ("frigate", "frigate", 1.0),
    ],
)
def test_effectiveness_cycle(attacker, defender, expected):
    """Each unit type beats one type and loses to another."""
    assert get_effectiveness(attacker, defender) == expected


def test_effectiveness_unknown_type():
    with pytest.raises(ValueError, match="Invalid unit types"):
        get_effectiveness("frigate", "dreadnought")


def test_unit_effectiveness_against_mixed_fleet():
    """Frigates against half cruisers, half battleships average 1.5 and 0.7."""
    enemy = FleetComposition(frigates=0, cruisers=5, battleships=5)
    assert calculate_unit_effectiveness("frigate", 10, enemy) == pytest.approx(1.1)


def test_unit_effectiveness_edge_cases():
    assert calculate_unit_effectiveness("frigate", 0, FleetComposition(1, 0, 0)) == 0.0
    assert calculate_unit_effectiveness("cruiser", 3, FleetComposition.empty()) == 1.0


def test_random_factors_in_range():
    rng = GameRNG(seed=42)
    for _ in range(20):
        factors = generate_random_factors(rng)
        assert set(factors) == {"frigate", "cruiser", "battleship"}
        assert all(0.8 <= value <= 1.2 for value in factors.values())


def test_empty_attacker_has_no_strength():
    assert calculate_fleet_strength(FleetComposition.empty(), FleetComposition(5, 5, 5), NEUTRAL) == 0.0


def test_empty_defender_counts_full_effectiveness():
    """Against an empty fleet every ship contributes 1.0 times its factor."""
    attacker = FleetComposition(frigates=10, cruisers=5, battleships=2)
    strength = calculate_fleet_strength(attacker, FleetComposition.empty(), NEUTRAL)
    assert strength == pytest.approx(17.0)


def test_fleet_strength_uses_matrix_and_factors():
    attacker = FleetComposition(frigates=10)
    defender = FleetComposition(cruisers=4)
    factors = {"frigate": 1.2, "cruiser": 1.0, "battleship": 1.0}
    # 10 frigates * (1.5 * 4 cruisers) * 1.2
    assert calculate_fleet_strength(attacker, defender, factors) == pytest.approx(72.0)


def test_fleet_strength_is_deterministic_with_seed():
    attacker = FleetComposition(10, 5, 2)
    defender = FleetComposition(8, 8, 1)
    first = calculate_fleet_strength(attacker, defender, rng=GameRNG(seed=7))
    second = calculate_fleet_strength(attacker, defender, rng=GameRNG(seed=7))
    assert first == second


@pytest.mark.parametrize(
    "attacker_strength, defender_strength, outcome",
    [
        (200.0, 100.0, "decisive_attacker"),
        (150.0, 100.0, "close_battle"),
        (66.7, 100.0, "close_battle"),
        (100.0, 100.0, "close_battle"),
        (50.0, 100.0, "decisive_defender"),
        (0.0, 100.0, "decisive_defender"),
        (10.0, 0.0, "decisive_attacker"),
        (0.0, 0.0, "decisive_defender"),
    ],
)
def test_determine_battle_outcome(attacker_strength, defender_strength, outcome):
    """A ratio of exactly 1.5 is still a close battle."""
    assert determine_battle_outcome(attacker_strength, defender_strength) == outcome


class TestCasualties:
    def test_floor_per_unit_type(self):
        fleet = FleetComposition(frigates=10, cruisers=5, battleships=3)
        report = calculate_casualties(fleet, "close_battle", False, loss_fraction=0.5)
        assert report.casualties == FleetComposition(5, 2, 1)
        assert report.survivors == FleetComposition(5, 3, 2)

    def test_drawn_fraction_within_range(self):
        """A decisive winner loses 10-30% of each unit type."""
        fleet = FleetComposition(frigates=100)
        rng = GameRNG(seed=3)
        for _ in range(20):
            report = calculate_casualties(fleet, "decisive_attacker", True, rng=rng)
            assert 10 <= report.casualties.frigates <= 30

    def test_decisive_loser_range(self):
        fleet = FleetComposition(cruisers=100)
        report = calculate_casualties(fleet, "decisive_attacker", False, rng=GameRNG(seed=1))
        assert 70 <= report.casualties.cruisers <= 90

    def test_invalid_fraction(self):
        with pytest.raises(ValueError, match="Invalid loss_fraction"):
            calculate_casualties(FleetComposition(1, 0, 0), "close_battle", False, loss_fraction=1.5)

    def test_empty_fleet(self):
        report = calculate_casualties(FleetComposition.empty(), "close_battle", False, 0.5)
        assert report.casualties.is_empty()
        assert report.survivors.is_empty()


class TestResolveCombat:
    def test_conservation_of_ships(self):
        """Survivors plus casualties always equal the original fleet."""
        rng = GameRNG(seed=11)
        attacker = FleetComposition(23, 7, 4)
        defender = FleetComposition(12, 19, 3)
        for _ in range(25):
            result = resolve_combat(attacker, defender, rng=rng)
            assert result.attacker_survivors + result.attacker_casualties == attacker
            assert result.defender_survivors + result.defender_casualties == defender

    def test_attack_on_empty_home(self):
        attacker = FleetComposition(frigates=5)
        result = resolve_combat(attacker, FleetComposition.empty(), rng=GameRNG(seed=1))
        assert result.outcome == "decisive_attacker"
        assert result.strength_ratio == math.inf
        assert result.defender_survivors.is_empty()

    def test_fixed_factors_reproduce_battle(self):
        factors = CombatFactors(
            attacker_factors=NEUTRAL,
            defender_factors=NEUTRAL,
            attacker_loss_fraction=0.2,
            defender_loss_fraction=0.8,
        )
        # 20 frigates vs 10 cruisers: 20 * 15 = 300 against 10 * 14 = 140
        result = resolve_combat(FleetComposition(frigates=20), FleetComposition(cruisers=10), factors)
        assert result.outcome == "decisive_attacker"
        assert result.attacker_strength == pytest.approx(300.0)
        assert result.defender_strength == pytest.approx(140.0)
        assert result.attacker_casualties == FleetComposition(frigates=4)
        assert result.defender_casualties == FleetComposition(cruisers=8)

    def test_counter_unit_wins(self):
        """Battleships crush an equal number of frigates."""
        factors = CombatFactors(attacker_factors=NEUTRAL, defender_factors=NEUTRAL)
        result = resolve_combat(
            FleetComposition(battleships=10), FleetComposition(frigates=10), factors, GameRNG(seed=5)
        )
        assert result.outcome == "decisive_attacker"
        assert result.strength_ratio == pytest.approx(1.5 / 0.7)
