"""Tests for the bounded error log."""

import pytest

from burn_rate.utils.error_log import ErrorLog, GameError, is_recoverable


@pytest.mark.parametrize(
    "error_type, severity, expected",
    [
        ("user_input", "high", True),
        ("user_input", "critical", False),
        ("runtime", "medium", True),
        ("runtime", "high", False),
        ("system", "low", True),
        ("system", "medium", False),
        ("validation", "medium", True),
        ("game_logic", "high", False),
    ],
)
def test_is_recoverable(error_type, severity, expected):
    assert is_recoverable(error_type, severity) is expected


def test_invalid_classification():
    with pytest.raises(ValueError, match="Invalid severity"):
        GameError(error_type="runtime", severity="fatal", message="boom")


def test_capacity_must_be_positive():
    with pytest.raises(ValueError, match="Invalid capacity"):
        ErrorLog(capacity=0)


def test_oldest_entries_evicted():
    log = ErrorLog(capacity=3)
    for i in range(5):
        log.record("validation", "low", f"error {i}")
    assert len(log) == 3
    assert [e.message for e in log.recent()] == ["error 2", "error 3", "error 4"]


def test_recent_limits_count():
    log = ErrorLog()
    for i in range(4):
        log.record("runtime", "low", f"error {i}")
    assert [e.message for e in log.recent(2)] == ["error 2", "error 3"]
    assert log.recent(0) == []


def test_critical_error_requires_restart():
    response = ErrorLog().handle_error("system", "critical", "state corrupted")
    assert not response.can_continue
    assert response.should_restart


def test_high_error_depends_on_recoverability():
    log = ErrorLog()
    assert log.handle_error("user_input", "high", "bad input").can_continue
    response = log.handle_error("runtime", "high", "crash")
    assert not response.can_continue
    assert response.should_restart


def test_medium_error_continues():
    response = ErrorLog().handle_error("validation", "medium", "odd state")
    assert response.can_continue
    assert response.user_message == "Warning: odd state"


def test_turn_processing_severity():
    log = ErrorLog()
    single = log.handle_turn_processing_error(["combat failed"], 4)
    assert single.can_continue
    multiple = log.handle_turn_processing_error(["combat failed", "victory failed"], 4)
    assert not multiple.can_continue
    assert log.recent(1)[0].context == {"turn": 4}
    assert log.recent(1)[0].severity == "high"


def test_by_type_and_clear():
    log = ErrorLog()
    log.record("user_input", "low", "a")
    log.record("runtime", "low", "b")
    assert [e.message for e in log.by_type("user_input")] == ["a"]
    log.clear()
    assert len(log) == 0
