"""Tests for scanning and intelligence ageing."""

import pytest

from burn_rate.engine.intelligence import (
    advanced_scan,
    age_intelligence,
    apply_misinformation,
    basic_scan,
    calculate_intelligence_gap,
    can_afford_scan,
    deep_scan,
    determine_strategic_intent,
    get_latest_scan,
    get_scan_cost,
    perform_scan,
)
from burn_rate.models.economy import Economy, Resources
from burn_rate.models.fleet import FleetComposition, FleetMovement
from burn_rate.models.player import PlayerState
from burn_rate.utils.rng import GameRNG


def create_player(fleet=None, energy=10000) -> PlayerState:
    return PlayerState(
        resources=Resources(metal=10000, energy=energy),
        home_fleet=fleet if fleet is not None else FleetComposition(50, 20, 10),
    )


def test_scan_costs():
    assert get_scan_cost("basic") == 1000
    assert get_scan_cost("deep") == 2500
    assert get_scan_cost("advanced") == 4000
    with pytest.raises(ValueError, match="Invalid scan type"):
        get_scan_cost("orbital")


def test_can_afford_scan():
    player = create_player(energy=2500)
    assert can_afford_scan(player, "deep")
    assert not can_afford_scan(player, "advanced")


def test_basic_scan_reports_noisy_total():
    target = create_player()
    rng = GameRNG(seed=42)
    for turn in range(1, 11):
        result = basic_scan(target, turn, rng)
        assert 32 <= result.fleet_estimate.frigates <= 80
        assert result.fleet_estimate.cruisers == 0
        assert result.accuracy == 0.7
        assert result.economic_data is None


def test_deep_scan_within_ten_percent():
    target = create_player()
    target.economy = Economy(reactors=2, mines=3)
    result = deep_scan(target, 4, GameRNG(seed=1))
    assert 45 <= result.fleet_estimate.frigates <= 55
    assert 18 <= result.fleet_estimate.cruisers <= 22
    assert 9 <= result.fleet_estimate.battleships <= 11
    assert result.economic_data.reactors == 2
    assert result.economic_data.mines == 3


def test_advanced_scan_fixed_split():
    target = create_player()
    result = advanced_scan(target, 3)
    assert result.fleet_estimate == FleetComposition(40, 24, 16)
    assert result.accuracy == 0.95
    assert result.strategic_intent == "Unclear intentions, balanced approach"


@pytest.mark.parametrize(
    "fleet, economy, income, intent",
    [
        (FleetComposition(frigates=150), Economy(), 0, "Preparing for major offensive operations"),
        (FleetComposition(frigates=50), Economy(reactors=2, mines=2), 0, "Focusing on economic expansion"),
        (
            FleetComposition(frigates=50),
            Economy(),
            30000,
            "Strong economic foundation, likely planning military buildup",
        ),
        (FleetComposition(frigates=10), Economy(), 0, "Defensive posture, limited military capability"),
    ],
)
def test_strategic_intent(fleet, economy, income, intent):
    target = create_player(fleet=fleet)
    target.economy = economy
    target.resources.metal_income = income
    assert determine_strategic_intent(target) == intent


def test_perform_scan_stores_result():
    scanner = create_player()
    target = create_player()
    result = perform_scan(scanner, target, "deep", 5, GameRNG(seed=3))
    assert scanner.resources.energy == 7500
    assert scanner.intelligence.last_scan_turn == 5
    assert scanner.intelligence.known_enemy_fleet == result.fleet_estimate
    assert get_latest_scan(scanner) is result


def test_perform_scan_unaffordable():
    scanner = create_player(energy=500)
    assert perform_scan(scanner, create_player(), "basic", 5, GameRNG(seed=3)) is None
    assert scanner.resources.energy == 500
    assert scanner.intelligence.scan_history == []


def test_scan_ignores_fleets_in_transit():
    """Only the home fleet is visible."""
    target = create_player(fleet=FleetComposition(frigates=10))
    target.movements.append(FleetMovement(FleetComposition(frigates=40), "player_home", 3, 5))
    result = advanced_scan(target, 2)
    assert result.fleet_estimate.total <= 10


def test_scan_history_capped():
    scanner = create_player(energy=20000)
    target = create_player()
    rng = GameRNG(seed=9)
    for turn in range(1, 13):
        perform_scan(scanner, target, "basic", turn, rng)
    history = scanner.intelligence.scan_history
    assert len(history) == 10
    assert history[0].turn == 3
    assert history[-1].turn == 12


def test_misinformation_halves_accuracy():
    result = advanced_scan(create_player(), 2)
    corrupted = apply_misinformation(result, 1.0, GameRNG(seed=4))
    assert corrupted.is_misinformation
    assert corrupted.accuracy == pytest.approx(0.475)


def test_no_misinformation_by_default():
    scanner = create_player()
    result = perform_scan(scanner, create_player(), "advanced", 2, GameRNG(seed=4))
    assert not result.is_misinformation


def test_age_intelligence_decays_accuracy():
    scanner = create_player()
    perform_scan(scanner, create_player(), "deep", 2, GameRNG(seed=2))
    age_intelligence(scanner, 5)
    scan = get_latest_scan(scanner)
    assert scan.data_age == 3
    assert scan.accuracy == pytest.approx(0.6)

    age_intelligence(scanner, 30)
    assert scan.accuracy == pytest.approx(0.1)


def test_intelligence_gap_without_scans():
    gap = calculate_intelligence_gap(create_player(), 4)
    assert gap.confidence == 0.0
    assert gap.last_scan_turn == 0
    assert gap.last_known_fleet.is_empty()


def test_intelligence_gap_after_stale_scan():
    scanner = create_player()
    perform_scan(scanner, create_player(), "advanced", 2)
    gap = calculate_intelligence_gap(scanner, 6)
    assert gap.last_scan_turn == 2
    assert gap.estimated_in_transit == 24
    assert gap.confidence == pytest.approx(0.6)
