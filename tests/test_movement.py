"""Tests for fleet movement timing."""

from burn_rate.engine.movement import (
    can_recall_fleet,
    check_fleet_elimination,
    create_fleet_movement,
    create_returning_fleet,
    get_counter_attack_window,
    is_fleet_in_transit,
    is_home_system_vulnerable,
    launch_fleet,
    process_fleet_movements,
    update_mission_phase,
    validate_fleet_launch,
    validate_fleet_movement,
)
from burn_rate.models.economy import Resources
from burn_rate.models.fleet import FleetComposition, FleetMovement
from burn_rate.models.player import PlayerState


def create_attack(turn=5) -> FleetMovement:
    return create_fleet_movement(FleetComposition(frigates=10, cruisers=5), "ai_home", turn)


def test_create_fleet_movement_timing():
    """A fleet launched on turn 5 fights on turn 6 and is home on turn 8."""
    movement = create_attack(turn=5)
    assert movement.arrival_turn == 6
    assert movement.return_turn == 8
    assert movement.mission_phase == "outbound"
    assert movement.target == "ai_home"


def test_in_transit_window():
    movement = create_attack(turn=5)
    assert [is_fleet_in_transit(movement, t) for t in (4, 5, 6, 7, 8)] == [
        False,
        True,
        True,
        True,
        False,
    ]


def test_cannot_recall_after_departure():
    movement = create_attack(turn=5)
    assert can_recall_fleet(movement, 4)
    assert not can_recall_fleet(movement, 5)


def test_update_mission_phase():
    movement = create_attack(turn=5)
    assert update_mission_phase(movement, 5) == "outbound"
    assert update_mission_phase(movement, 6) == "combat"
    assert update_mission_phase(movement, 7) == "returning"


def test_process_fleet_movements_partitions():
    outbound = create_attack(turn=5)
    arriving = create_attack(turn=4)
    home_now = FleetMovement(FleetComposition(frigates=3), "home", 6, 6, "returning")
    home_later = FleetMovement(FleetComposition(frigates=2), "home", 7, 7, "returning")

    partition = process_fleet_movements([outbound, arriving, home_now, home_later], 5)
    # arriving launched turn 4 arrives turn 5; home_now is due on turn 6
    assert partition.combat == [arriving]
    assert partition.returning == []
    assert partition.outbound == [outbound, home_now, home_later]

    partition = process_fleet_movements([home_now, home_later], 6)
    assert partition.returning == [home_now]
    assert partition.outbound == [home_later]


def test_returning_fleets_never_fight_again():
    returning = FleetMovement(FleetComposition(frigates=3), "home", 6, 6, "returning")
    for turn in (5, 6, 7):
        assert returning not in process_fleet_movements([returning], turn).combat


def test_create_returning_fleet():
    original = create_attack(turn=5)
    returning = create_returning_fleet(FleetComposition(frigates=7), original, 6)
    assert returning.mission_phase == "returning"
    assert returning.arrival_turn == 7
    assert returning.return_turn == 7
    assert returning.composition == FleetComposition(frigates=7)


def test_no_survivors_no_returning_fleet():
    assert create_returning_fleet(FleetComposition.empty(), create_attack(), 6) is None


def test_check_fleet_elimination():
    empty = FleetComposition.empty()
    assert check_fleet_elimination(empty, [])
    assert not check_fleet_elimination(FleetComposition(frigates=1), [])
    assert not check_fleet_elimination(empty, [create_attack()])


def test_validate_fleet_movement():
    movement = create_attack(turn=5)
    assert validate_fleet_movement(movement, 5) == []
    assert "Arrival turn must be in the future" in validate_fleet_movement(movement, 6)


def test_validate_fleet_launch_itemizes_shortfalls():
    available = FleetComposition(frigates=5, cruisers=1)
    errors = validate_fleet_launch(available, FleetComposition(frigates=8, cruisers=2))
    assert errors == [
        "Insufficient frigates. Need: 8, Have: 5",
        "Insufficient cruisers. Need: 2, Have: 1",
    ]


def test_validate_fleet_launch_empty():
    assert validate_fleet_launch(FleetComposition(5, 0, 0), FleetComposition.empty()) == [
        "Cannot send empty fleet"
    ]


def test_home_vulnerability_and_counter_window():
    movement = create_attack(turn=5)
    assert is_home_system_vulnerable([movement], 6)
    assert not is_home_system_vulnerable([movement], 8)
    window = get_counter_attack_window(movement)
    assert (window.start_turn, window.end_turn) == (5, 7)
    assert window.duration == 3


def test_launch_fleet_moves_ships_out_of_home():
    player = PlayerState(
        resources=Resources(metal=100, energy=100),
        home_fleet=FleetComposition(frigates=20, cruisers=5),
    )
    errors = launch_fleet(player, FleetComposition(frigates=10), "ai_home", 3)
    assert errors == []
    assert player.home_fleet == FleetComposition(frigates=10, cruisers=5)
    assert len(player.movements) == 1
    assert player.movements[0].arrival_turn == 4


def test_launch_fleet_rejected_leaves_state():
    player = PlayerState(
        resources=Resources(metal=100, energy=100),
        home_fleet=FleetComposition(frigates=2),
    )
    errors = launch_fleet(player, FleetComposition(frigates=10), "ai_home", 3)
    assert errors
    assert player.home_fleet == FleetComposition(frigates=2)
    assert player.movements == []
