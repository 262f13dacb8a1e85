"""Pygame visualizer: the playable table.

Hold the left mouse button to charge, release to strike the cue ball towards
the pointer. Q or closing the window quits.
"""

try:
    import pygame
except ImportError:
    pygame = None

from billiards.game import Game
from billiards.rules import CLEARED
from billiards.scene import HeadlessScene
from billiards.types import GameOverEvent, PocketEvent
from billiards import table
from sim.clock import FrameClock

# Window dimensions
WIN_W = 1280
WIN_H = 720
MARGIN = 40
BAR_H = 14

# Colors
BG_COLOR = (12, 12, 22)
TABLE_GREEN = (26, 102, 51)
RAIL_BROWN = (80, 50, 22)
CUE_TINT = (255, 255, 200)
BAR_MAGENTA = (255, 0, 255)
BAR_BG = (13, 13, 13)
TEXT_WHITE = (224, 224, 224)
TEXT_DIM = (136, 136, 136)


def _scale():
    """Pixels per world unit so the table fits the window with margins."""
    usable_w = WIN_W - 2 * MARGIN
    usable_h = WIN_H - 3 * MARGIN - BAR_H
    return min(usable_w / table.TABLE_WIDTH, usable_h / table.TABLE_HEIGHT)


def world_to_screen(x, y):
    s = _scale()
    cx = WIN_W / 2
    cy = MARGIN + table.TABLE_HEIGHT * s / 2
    return int(cx + x * s), int(cy - y * s)


def screen_to_world(px, py):
    s = _scale()
    cx = WIN_W / 2
    cy = MARGIN + table.TABLE_HEIGHT * s / 2
    return (px - cx) / s, (cy - py) / s


class PygameScene(HeadlessScene):
    """Arena that also knows how to paint itself onto a pygame surface."""

    def draw(self, surface, cue_mesh=None):
        s = _scale()
        surface.fill(BG_COLOR)

        if self.background is not None:
            w, h = self.background
            left, top = world_to_screen(-w / 2, h / 2)
            rect = pygame.Rect(left, top, int(w * s), int(h * s))
            pygame.draw.rect(surface, RAIL_BROWN, rect.inflate(16, 16))
            pygame.draw.rect(surface, TABLE_GREEN, rect)

        # pockets underneath balls
        for kind in ("pocket", "ball"):
            for handle, spec in sorted(self.meshes.items()):
                if spec.kind != kind:
                    continue
                color = CUE_TINT if handle == cue_mesh else spec.color
                pygame.draw.circle(surface, color, world_to_screen(spec.x, spec.y), max(1, int(spec.radius * s)))

        bar_w = WIN_W - 2 * MARGIN
        bar_y = WIN_H - MARGIN - BAR_H
        pygame.draw.rect(surface, BAR_BG, (MARGIN, bar_y, bar_w, BAR_H))
        pygame.draw.rect(surface, BAR_MAGENTA, (MARGIN, bar_y, int(bar_w * self.progress), BAR_H))


def run_visualizer(target_fps=table.TARGET_FPS):
    """Open the window and run the frame loop until the user quits."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return

    pygame.init()
    screen = pygame.display.set_mode((WIN_W, WIN_H))
    pygame.display.set_caption("Pool")
    font = pygame.font.SysFont("monospace", 14)

    scene = PygameScene()
    game = Game(scene=scene, config={"target_fps": target_fps}).init()
    clock = FrameClock(game.target_fps)
    status = "Hold the mouse button to charge, release to shoot"

    running = True
    while running:
        dt = clock.wait()

        # Input is drained between frames, never during update()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_q:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                game.mouse_pressed(*screen_to_world(*event.pos))
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                game.mouse_released(*screen_to_world(*event.pos))

        for e in game.update(dt):
            if isinstance(e, PocketEvent):
                status = "Cue ball down!" if e.ball == table.CUE_BALL else f"Ball {e.ball} down"
            elif isinstance(e, GameOverEvent):
                status = "Table cleared, you win!" if e.reason == CLEARED else "Scratch, re-racking"

        scene.draw(screen, cue_mesh=game.state.cue.mesh)
        s = game.session
        hud = f"{status}    shots: {game.state.shots_taken}   won: {s.wins}   lost: {s.losses}"
        screen.blit(font.render(hud, True, TEXT_WHITE), (MARGIN, WIN_H - MARGIN + 6))
        fps = font.render(f"{clock.target_fps} fps", True, TEXT_DIM)
        screen.blit(fps, (WIN_W - MARGIN - fps.get_width(), WIN_H - MARGIN + 6))
        pygame.display.flip()

    game.deinit()
    pygame.quit()
