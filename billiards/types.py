"""Core data types for the pool table simulation."""

import math
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Vec2:
    """2D vector for position and velocity, in table units."""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> "Vec2":
        return Vec2(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> "Vec2":
        return self.__mul__(scalar)

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y)

    def is_zero(self) -> bool:
        return self.x == 0 and self.y == 0

    def copy(self) -> "Vec2":
        return Vec2(self.x, self.y)


@dataclass
class Ball:
    """One ball on the table. Index 0 in the ball list is the cue ball."""
    pos: Vec2 = field(default_factory=Vec2)
    vel: Vec2 = field(default_factory=Vec2)
    scored: bool = False
    mesh: Optional[int] = None  # live visual handle, None once released

    def copy(self) -> "Ball":
        return Ball(pos=self.pos.copy(), vel=self.vel.copy(), scored=self.scored, mesh=self.mesh)


@dataclass
class ShotState:
    """Charge-and-release state of the shot controller."""
    charging: bool = False
    progress: float = 0.0  # 0..1

    @property
    def phase(self) -> str:
        return "charging" if self.charging else "idle"


@dataclass
class SimulationState:
    """Everything the engine mutates between frames."""
    balls: list = field(default_factory=list)     # list[Ball]
    cooldown: list = field(default_factory=list)  # 7x7 list[list[int]], symmetric
    shot: ShotState = field(default_factory=ShotState)
    t: float = 0.0
    shots_taken: int = 0

    @property
    def cue(self) -> Ball:
        return self.balls[0]

    def copy(self) -> "SimulationState":
        return SimulationState(
            balls=[b.copy() for b in self.balls],
            cooldown=[row[:] for row in self.cooldown],
            shot=ShotState(self.shot.charging, self.shot.progress),
            t=self.t,
            shots_taken=self.shots_taken,
        )


@dataclass
class MeshSpec:
    """A drawable circle held by a scene. The renderer switches on ``kind``."""
    kind: str  # "ball" or "pocket"
    radius: float
    color: tuple = (255, 255, 255)
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0


@dataclass
class CushionEvent:
    """A ball's edge crossed a table boundary and its velocity was reflected."""
    ball: int
    axis: str  # "x" or "y"
    t: float


@dataclass
class PocketEvent:
    """A ball dropped into a pocket."""
    ball: int
    pocket: int
    t: float


@dataclass
class CollisionEvent:
    """Two balls exchanged momentum along their line of centres."""
    first: int
    second: int
    t: float


@dataclass
class GameOverEvent:
    """The table was reset after a terminal condition."""
    reason: str  # "scratch" or "cleared"
    t: float
