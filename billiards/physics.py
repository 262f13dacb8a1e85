"""Ball physics: cushion reflection, pocketing, ball-ball collisions, friction."""

import logging
from typing import Optional, Union

from billiards.types import (
    Ball,
    CollisionEvent,
    CushionEvent,
    PocketEvent,
    ShotState,
    SimulationState,
    Vec2,
)
from billiards.rules import terminal_reason
from billiards import table

logger = logging.getLogger(__name__)

Event = Union[CushionEvent, PocketEvent, CollisionEvent]


def new_state() -> SimulationState:
    """Return a fresh table in the starting layout."""
    state = SimulationState()
    reset_state(state)
    return state


def reset_state(state: SimulationState) -> SimulationState:
    """Put every ball back on its start spot and clear all cooldowns and charge."""
    state.balls = [Ball(pos=p.copy(), vel=Vec2()) for p in table.START_POSITIONS]
    n = table.BALL_COUNT
    state.cooldown = [[table.COOLDOWN_START] * n for _ in range(n)]
    state.shot = ShotState()
    state.t = 0.0
    state.shots_taken = 0
    return state


def any_moving(state: SimulationState) -> bool:
    return any(not b.vel.is_zero() for b in state.balls)


def _reflect_off_cushions(index: int, ball: Ball, t: float) -> list[CushionEvent]:
    """Flip the velocity component for every boundary the ball's edge is past.

    This is an edge-crossing test, not an approach test: a ball that is still
    past a boundary on the next frame is reflected again.
    """
    events: list[CushionEvent] = []
    r = table.BALL_RADIUS
    half_w = 0.5 * table.TABLE_WIDTH
    half_h = 0.5 * table.TABLE_HEIGHT

    if ball.pos.x + r > half_w:
        ball.vel.x = -ball.vel.x
        events.append(CushionEvent(ball=index, axis="x", t=t))
    if ball.pos.x < r - half_w:
        ball.vel.x = -ball.vel.x
        events.append(CushionEvent(ball=index, axis="x", t=t))
    if ball.pos.y + r > half_h:
        ball.vel.y = -ball.vel.y
        events.append(CushionEvent(ball=index, axis="y", t=t))
    if ball.pos.y < r - half_h:
        ball.vel.y = -ball.vel.y
        events.append(CushionEvent(ball=index, axis="y", t=t))
    return events


def _check_pockets(index: int, ball: Ball, t: float) -> Optional[PocketEvent]:
    """Score the ball in the first pocket whose mouth contains its centre."""
    if ball.scored:
        return None
    for k, pocket in enumerate(table.POCKET_POSITIONS):
        if (pocket - ball.pos).magnitude() < table.POCKET_RADIUS:
            ball.scored = True
            ball.vel = Vec2()
            return PocketEvent(ball=index, pocket=k, t=t)
    return None


def collide_pair(state: SimulationState, i: int, j: int) -> Optional[CollisionEvent]:
    """Resolve an equal-mass elastic collision between balls i and j.

    Both velocities are rotated into the frame whose x axis is the line of
    centres, the normal components are swapped, and the result is rotated
    back. The pair's cooldown counter must be at least COOLDOWN_READY for a
    response to fire, so two balls still overlapping after a bounce do not
    bounce again on the next frame.
    """
    if i >= j:
        return None
    a = state.balls[i]
    b = state.balls[j]
    if a.scored or b.scored:
        return None

    count = min(state.cooldown[i][j] + 1, table.COOLDOWN_CAP)
    state.cooldown[i][j] = state.cooldown[j][i] = count

    v = a.pos - b.pos
    dist = v.magnitude()
    if dist > 2 * table.BALL_RADIUS:
        return None
    if count < table.COOLDOWN_READY:
        return None
    if dist < table.SEPARATION_EPSILON:
        logger.debug("Balls %d and %d coincide; skipping collision response", i, j)
        return None

    c = v.x / dist
    s = v.y / dist
    x1 = a.vel.x * c + a.vel.y * s
    y1 = -a.vel.x * s + a.vel.y * c
    x2 = b.vel.x * c + b.vel.y * s
    y2 = -b.vel.x * s + b.vel.y * c

    # Equal masses: the normal components trade places, tangential ones stay
    x1, x2 = x2, x1

    a.vel = Vec2(x1 * c - y1 * s, x1 * s + y1 * c)
    b.vel = Vec2(x2 * c - y2 * s, x2 * s + y2 * c)
    state.cooldown[i][j] = state.cooldown[j][i] = 0
    return CollisionEvent(first=i, second=j, t=state.t)


def check_collisions(state: SimulationState) -> list[Event]:
    """Cushions, pockets, then pairs against higher-indexed balls, per ball in order."""
    events: list[Event] = []
    n = len(state.balls)
    for i, ball in enumerate(state.balls):
        if ball.scored:
            continue
        events.extend(_reflect_off_cushions(i, ball, state.t))
        pocketed = _check_pockets(i, ball, state.t)
        if pocketed is not None:
            events.append(pocketed)
        for j in range(i + 1, n):
            hit = collide_pair(state, i, j)
            if hit is not None:
                events.append(hit)
    return events


def integrate(state: SimulationState, dt: float) -> None:
    for ball in state.balls:
        if not ball.scored:
            ball.pos = ball.pos + ball.vel * dt
    state.t += dt


def apply_friction(state: SimulationState, friction: float = table.FRICTION) -> None:
    """Take a constant amount of speed off every ball, snapping to rest below it."""
    for ball in state.balls:
        speed = ball.vel.magnitude()
        if speed < friction:
            ball.vel = Vec2()
        else:
            ball.vel = ball.vel - ball.vel * (friction / speed)


def step(state: SimulationState, dt: float, friction: float = table.FRICTION) -> list[Event]:
    """Advance the table by one frame.

    The order is fixed: collisions are resolved on last frame's positions,
    then positions are integrated, then friction acts on the new velocities.
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    events = check_collisions(state)
    integrate(state, dt)
    apply_friction(state, friction)
    return events


def simulate(
    initial_state: SimulationState,
    dt: float = 1.0 / table.TARGET_FPS,
    max_time: float = 60.0,
    friction: float = table.FRICTION,
) -> tuple[list[SimulationState], list[Event]]:
    """Run the table headless from initial state until everything stops.

    Also stops on a terminal condition (cue ball or every object ball down)
    or after max_time. Returns (snapshots, events) where snapshots holds the
    state after every frame, starting with the initial state.
    """
    state = initial_state.copy()
    snapshots = [state.copy()]
    all_events: list[Event] = []
    steps = int(max_time / dt)

    for _ in range(steps):
        if not any_moving(state) or terminal_reason(state) is not None:
            break
        all_events.extend(step(state, dt, friction))
        snapshots.append(state.copy())

    return snapshots, all_events
