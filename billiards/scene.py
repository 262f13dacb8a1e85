"""Visual representation of the table, as seen from the engine.

The engine only ever creates, places and destroys circles, sets the table
background once, and reports shot charge. ``HeadlessScene`` keeps those
meshes in an arena keyed by integer handles; a renderer (see
``sim.visualizer``) subclasses it and draws whatever the arena holds.
"""

from typing import Optional

from billiards.types import MeshSpec

BALL_COLOR = (255, 255, 255)
POCKET_COLOR = (255, 0, 0)


class HeadlessScene:
    """Mesh arena with no output. Used by tests and headless runs."""

    def __init__(self):
        self.meshes: dict[int, MeshSpec] = {}
        self.background: Optional[tuple[float, float]] = None
        self.progress = 0.0
        self._next_handle = 1

    def _create(self, spec: MeshSpec) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.meshes[handle] = spec
        return handle

    def create_ball_mesh(self, radius: float) -> int:
        return self._create(MeshSpec(kind="ball", radius=radius, color=BALL_COLOR))

    def create_pocket_mesh(self, radius: float) -> int:
        return self._create(MeshSpec(kind="pocket", radius=radius, color=POCKET_COLOR))

    def place_mesh(self, handle: int, x: float, y: float, angle: float = 0.0) -> None:
        spec = self.meshes[handle]
        spec.x, spec.y, spec.angle = x, y, angle

    def destroy_mesh(self, handle: int) -> None:
        """Free a mesh. Raises KeyError if the handle is unknown or already freed."""
        del self.meshes[handle]

    def setup_background(self, width: float, height: float) -> None:
        self.background = (width, height)

    def update_progress_bar(self, progress: float) -> None:
        self.progress = min(max(progress, 0.0), 1.0)

    def live(self, kind: str) -> list[MeshSpec]:
        """All live meshes of one kind, in creation order."""
        return [spec for _, spec in sorted(self.meshes.items()) if spec.kind == kind]
