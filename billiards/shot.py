"""Shot controller: press to start charging, release to strike the cue ball.

Both inputs are ignored while any ball is still rolling. Charge builds
linearly with elapsed frame time and saturates at 1; it never fires on its
own.
"""

import logging

from billiards.physics import any_moving
from billiards.types import ShotState, SimulationState, Vec2
from billiards import table

logger = logging.getLogger(__name__)


def advance_charge(shot: ShotState, dt: float, charge_time: float = table.CHARGE_TIME) -> float:
    """Grow the charge while the button is held. Returns the current progress."""
    if charge_time <= 0:
        raise ValueError(f"charge_time must be positive, got {charge_time}")
    if shot.charging:
        shot.progress = min(shot.progress + dt / charge_time, 1.0)
    return shot.progress


def press(state: SimulationState, x: float, y: float) -> bool:
    """Start charging. Returns False if the input was ignored."""
    if any_moving(state):
        return False
    state.shot.charging = True
    return True


def release(state: SimulationState, x: float, y: float, power: float = table.SHOT_POWER) -> bool:
    """Strike the cue ball towards (x, y) with the accumulated charge.

    Returns False if the input was ignored because balls are moving. A
    release exactly on the cue ball has no direction; it consumes the charge
    and leaves the cue ball where it is.
    """
    if any_moving(state):
        return False

    shot = state.shot
    progress = shot.progress
    shot.charging = False
    shot.progress = 0.0

    cue = state.cue
    if cue.scored:
        return True
    aim = Vec2(x, y) - cue.pos
    length = aim.magnitude()
    if length < table.SEPARATION_EPSILON:
        logger.debug("Release on the cue ball at (%.3f, %.3f); shot discarded", x, y)
        return True

    cue.vel = aim * (progress * power / length)
    if cue.vel.is_zero():
        return True
    state.shots_taken += 1
    logger.debug("Shot %d: charge %.2f, velocity (%.3f, %.3f)",
                 state.shots_taken, progress, cue.vel.x, cue.vel.y)
    return True
