"""Game controller: owns the table state and drives it one frame at a time.

Each frame (``update(dt)``):
- If the game is over (cue ball down, or every object ball down), rack the
  table again and do nothing else this frame
- Grow the shot charge while the button is held and publish it
- Resolve collisions, integrate positions, apply friction (physics.step)
- Move every live ball mesh to its ball

Input handlers run between frames on the same thread as ``update``. Nothing
here locks: the host must never call them concurrently.
"""

import logging
from typing import Any, Optional

from billiards.types import GameOverEvent, PocketEvent, SimulationState
from billiards.physics import new_state, reset_state, step
from billiards.rules import Session, record_game, terminal_reason
from billiards.scene import HeadlessScene
from billiards import shot
from billiards import table

logger = logging.getLogger(__name__)


class Game:
    """One pool table with its meshes, shot controller and game tally."""

    def __init__(self, scene: Optional[HeadlessScene] = None, config: Optional[dict[str, Any]] = None):
        self.config = config or {}
        self.charge_time = self.config.get("charge_time", table.CHARGE_TIME)
        self.shot_power = self.config.get("shot_power", table.SHOT_POWER)
        self.friction = self.config.get("friction", table.FRICTION)
        self.target_fps = self.config.get("target_fps", table.TARGET_FPS)

        self.scene = scene if scene is not None else HeadlessScene()
        self.state: SimulationState = new_state()
        self.session = Session()
        self.pocket_meshes: list[int] = []

    # --- lifecycle ---------------------------------------------------------

    def init(self) -> "Game":
        """Set up the table background, pockets and a freshly racked set of balls.

        Calling it on a table that is already set up tears the old meshes down first.
        """
        if self.pocket_meshes or any(b.mesh is not None for b in self.state.balls):
            self.deinit()
        self.scene.setup_background(table.TABLE_WIDTH, table.TABLE_HEIGHT)
        for pos in table.POCKET_POSITIONS:
            handle = self.scene.create_pocket_mesh(table.POCKET_RADIUS)
            self.scene.place_mesh(handle, pos.x, pos.y, 0.0)
            self.pocket_meshes.append(handle)

        reset_state(self.state)
        for ball in self.state.balls:
            ball.mesh = self.scene.create_ball_mesh(table.BALL_RADIUS)
            self.scene.place_mesh(ball.mesh, ball.pos.x, ball.pos.y, 0.0)
        return self

    def deinit(self) -> None:
        """Destroy every mesh this game still owns."""
        for handle in self.pocket_meshes:
            self.scene.destroy_mesh(handle)
        self.pocket_meshes = []
        for i in range(len(self.state.balls)):
            self._release_ball_mesh(i)

    def reset(self, reason: str) -> None:
        self.session = record_game(self.session, self.state, reason)
        logger.info(
            "Game over (%s) after %d shots; %d won, %d lost",
            reason, self.state.shots_taken, self.session.wins, self.session.losses,
        )
        self.deinit()
        self.init()

    def _release_ball_mesh(self, index: int) -> None:
        ball = self.state.balls[index]
        if ball.mesh is None:
            return
        self.scene.destroy_mesh(ball.mesh)
        ball.mesh = None

    # --- frame -------------------------------------------------------------

    def update(self, dt: float) -> list:
        """Advance one frame. Returns the events that happened during it.

        Raises ValueError for a non-positive dt and leaves the game untouched.
        """
        if dt <= 0:
            raise ValueError(f"dt must be positive, got {dt}")
        reason = terminal_reason(self.state)
        if reason is not None:
            t = self.state.t
            self.reset(reason)
            return [GameOverEvent(reason=reason, t=t)]

        progress = shot.advance_charge(self.state.shot, dt, self.charge_time)
        self.scene.update_progress_bar(progress)

        events = step(self.state, dt, self.friction)
        for e in events:
            if isinstance(e, PocketEvent):
                logger.debug("Ball %d dropped in pocket %d", e.ball, e.pocket)
                self._release_ball_mesh(e.ball)

        for ball in self.state.balls:
            if ball.mesh is not None:
                self.scene.place_mesh(ball.mesh, ball.pos.x, ball.pos.y, 0.0)
        return events

    def is_over(self) -> bool:
        return terminal_reason(self.state) is not None

    # --- input -------------------------------------------------------------

    def mouse_pressed(self, x: float, y: float) -> bool:
        """Pointer down at world (x, y). Returns False if ignored."""
        return shot.press(self.state, x, y)

    def mouse_released(self, x: float, y: float) -> bool:
        """Pointer up at world (x, y). Returns False if ignored."""
        return shot.release(self.state, x, y, self.shot_power)
