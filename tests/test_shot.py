"""Tests for the shot controller."""

import pytest

from billiards.types import Vec2
from billiards.physics import new_state
from billiards.shot import advance_charge, press, release
from billiards import table


def test_press_on_resting_table_starts_charging():
    state = new_state()
    assert state.shot.phase == "idle"
    assert press(state, 0.0, 0.0) is True
    assert state.shot.charging is True
    assert state.shot.phase == "charging"


def test_charge_grows_linearly_and_saturates():
    """Progress follows dt / charge_time and never passes 1."""
    state = new_state()
    press(state, 0.0, 0.0)

    assert advance_charge(state.shot, 0.25, 1.0) == pytest.approx(0.25)
    assert advance_charge(state.shot, 0.25, 1.0) == pytest.approx(0.5)
    assert advance_charge(state.shot, 0.5, 2.0) == pytest.approx(0.75)
    for _ in range(5):
        advance_charge(state.shot, 0.5, 1.0)
    assert state.shot.progress == 1.0


def test_charge_idle_does_not_grow():
    state = new_state()
    assert advance_charge(state.shot, 0.5) == 0.0


def test_charge_time_must_be_positive():
    state = new_state()
    with pytest.raises(ValueError):
        advance_charge(state.shot, 0.1, 0.0)


def test_press_and_release_ignored_while_balls_move():
    """Any rolling ball makes both inputs no-ops."""
    state = new_state()
    state.balls[4].vel = Vec2(0.0, 0.02)
    state.shot.progress = 0.3

    assert press(state, 1.0, 1.0) is False
    assert state.shot.charging is False
    assert state.shot.progress == 0.3

    state.shot.charging = True
    assert release(state, 1.0, 1.0) is False
    assert state.shot.charging is True
    assert state.shot.progress == 0.3
    assert state.cue.vel.is_zero()
    assert state.balls[4].vel == Vec2(0.0, 0.02)
    assert state.shots_taken == 0


def test_charge_and_release_end_to_end():
    """Half a second of charge, released one unit east: cue speed 0.5 * 6."""
    state = new_state()
    cue = state.cue

    assert press(state, 0.0, 0.0)
    advance_charge(state.shot, 0.5, table.CHARGE_TIME)
    assert state.shot.progress == pytest.approx(0.5)

    assert release(state, cue.pos.x + 1.0, cue.pos.y)
    assert cue.vel.x == pytest.approx(3.0)
    assert cue.vel.y == pytest.approx(0.0)
    assert state.shot.charging is False
    assert state.shot.progress == 0.0
    assert state.shots_taken == 1


def test_release_direction_is_normalised():
    """Only the direction of the aim point matters, not its distance."""
    state = new_state()
    cue = state.cue
    press(state, 0.0, 0.0)
    state.shot.progress = 1.0

    release(state, cue.pos.x + 30.0, cue.pos.y + 40.0)

    assert cue.vel.magnitude() == pytest.approx(table.SHOT_POWER)
    assert cue.vel.x == pytest.approx(0.6 * table.SHOT_POWER)
    assert cue.vel.y == pytest.approx(0.8 * table.SHOT_POWER)


def test_release_on_cue_ball_discards_shot():
    """No aim direction: the charge is consumed and the cue ball stays put."""
    state = new_state()
    cue = state.cue
    press(state, 0.0, 0.0)
    state.shot.progress = 0.8

    assert release(state, cue.pos.x, cue.pos.y) is True
    assert cue.vel.is_zero()
    assert state.shot.charging is False
    assert state.shot.progress == 0.0
    assert state.shots_taken == 0


def test_release_without_charge_does_not_move_cue():
    state = new_state()
    assert release(state, 5.0, 0.0) is True
    assert state.cue.vel.is_zero()
    assert state.shots_taken == 0


def test_release_uses_given_power():
    state = new_state()
    cue = state.cue
    press(state, 0.0, 0.0)
    state.shot.progress = 0.5
    release(state, cue.pos.x, cue.pos.y - 2.0, power=10.0)
    assert cue.vel.y == pytest.approx(-5.0)
    assert cue.vel.x == pytest.approx(0.0)
