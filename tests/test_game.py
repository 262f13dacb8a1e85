"""Tests for the game controller."""

import pytest

from billiards.game import Game
from billiards.rules import CLEARED, SCRATCH
from billiards.scene import HeadlessScene
from billiards.types import GameOverEvent, PocketEvent, Vec2
from billiards import table

DT = 1.0 / 60


class RecordingScene(HeadlessScene):
    """Headless scene that remembers every handle it destroyed."""

    def __init__(self):
        super().__init__()
        self.destroyed = []

    def destroy_mesh(self, handle):
        super().destroy_mesh(handle)
        self.destroyed.append(handle)


def _game():
    scene = RecordingScene()
    return Game(scene=scene).init(), scene


def _assert_racked(game):
    state = game.state
    for ball, start in zip(state.balls, table.START_POSITIONS):
        assert ball.pos == start
        assert ball.vel.is_zero()
        assert ball.scored is False
        assert ball.mesh is not None
    assert all(v == table.COOLDOWN_START for row in state.cooldown for v in row)
    assert state.shot.charging is False
    assert state.shot.progress == 0.0


def test_init_creates_table_meshes():
    """Six pockets and seven balls, each placed where it belongs."""
    game, scene = _game()
    assert scene.background == (table.TABLE_WIDTH, table.TABLE_HEIGHT)

    pockets = scene.live("pocket")
    balls = scene.live("ball")
    assert len(pockets) == 6
    assert len(balls) == table.BALL_COUNT
    assert [(p.x, p.y) for p in pockets] == [(p.x, p.y) for p in table.POCKET_POSITIONS]
    assert all(p.radius == table.POCKET_RADIUS for p in pockets)
    assert [(b.x, b.y) for b in balls] == [(p.x, p.y) for p in table.START_POSITIONS]
    assert all(b.radius == table.BALL_RADIUS for b in balls)
    _assert_racked(game)


def test_deinit_destroys_everything():
    game, scene = _game()
    game.deinit()
    assert scene.meshes == {}
    assert all(b.mesh is None for b in game.state.balls)


def test_update_moves_meshes_with_balls():
    game, scene = _game()
    cue = game.state.cue
    cue.vel = Vec2(1.2, 0.6)

    game.update(DT)

    spec = scene.meshes[cue.mesh]
    assert (spec.x, spec.y) == (cue.pos.x, cue.pos.y)
    assert cue.pos.x > table.START_POSITIONS[0].x


def test_charge_and_release_through_game():
    """Press, half a second of frames' worth of charge, release one unit east."""
    game, scene = _game()
    cue = game.state.cue

    assert game.mouse_pressed(0.0, 0.0)
    game.update(0.25)
    game.update(0.25)
    assert game.state.shot.progress == pytest.approx(0.5)
    assert scene.progress == pytest.approx(0.5)

    assert game.mouse_released(cue.pos.x + 1.0, cue.pos.y)
    assert cue.vel.x == pytest.approx(3.0)
    assert cue.vel.y == pytest.approx(0.0)
    assert game.state.shot.charging is False
    assert game.state.shot.progress == 0.0


def test_input_ignored_while_rolling():
    game, _ = _game()
    game.state.balls[2].vel = Vec2(0.5, 0.0)

    assert game.mouse_pressed(0.0, 0.0) is False
    assert game.state.shot.charging is False
    assert game.mouse_released(5.0, 0.0) is False
    assert game.state.cue.vel.is_zero()


def test_pocketed_ball_mesh_released_once():
    """The mesh goes the frame the ball drops and is never destroyed again."""
    game, scene = _game()
    ball = game.state.balls[3]
    handle = ball.mesh
    ball.pos = Vec2(0.0, -3.8)

    events = game.update(DT)

    assert [e.ball for e in events if isinstance(e, PocketEvent)] == [3]
    assert ball.scored is True
    assert ball.mesh is None
    assert handle not in scene.meshes
    assert scene.destroyed.count(handle) == 1

    for _ in range(5):
        game.update(DT)
    assert scene.destroyed.count(handle) == 1
    assert ball.pos == Vec2(0.0, -3.8)


def test_scratch_resets_table():
    """Cue ball down: the next update re-racks and does nothing else."""
    game, scene = _game()
    state = game.state
    state.balls[1].pos = Vec2(1.0, 1.0)
    state.balls[1].vel = Vec2(2.0, 0.0)
    state.cooldown[1][2] = state.cooldown[2][1] = 0
    state.cue.scored = True

    events = game.update(DT)

    assert len(events) == 1
    assert isinstance(events[0], GameOverEvent)
    assert events[0].reason == SCRATCH
    _assert_racked(game)
    assert game.session.losses == 1
    assert game.session.wins == 0
    assert len(scene.live("ball")) == table.BALL_COUNT
    assert len(scene.live("pocket")) == 6


def test_all_balls_down_resets_table():
    """Every ball down, cue ball included: re-racked on the next update."""
    game, scene = _game()
    for ball in game.state.balls:
        ball.scored = True
        ball.vel = Vec2()

    events = game.update(DT)
    assert isinstance(events[0], GameOverEvent)
    _assert_racked(game)
    assert len(scene.live("ball")) == table.BALL_COUNT


def test_clearing_object_balls_wins():
    """Every object ball down with the cue ball still up is a win."""
    game, _ = _game()
    for ball in game.state.balls[1:]:
        ball.scored = True
    game.state.shots_taken = 4

    events = game.update(DT)

    assert events[0].reason == CLEARED
    assert game.session.wins == 1
    record = game.session.history[-1]
    assert record.reason == CLEARED
    assert record.shots == 4
    assert record.pocketed == [1, 2, 3, 4, 5, 6]
    _assert_racked(game)


def test_game_not_over_at_start():
    game, _ = _game()
    assert game.is_over() is False
    assert game.update(DT) == []


def test_config_overrides_defaults():
    game = Game(config={"shot_power": 10.0, "charge_time": 2.0}).init()
    cue = game.state.cue
    game.mouse_pressed(0.0, 0.0)
    game.update(1.0)
    assert game.state.shot.progress == pytest.approx(0.5)
    game.mouse_released(cue.pos.x + 1.0, cue.pos.y)
    assert cue.vel.x == pytest.approx(5.0)


def test_init_twice_leaves_no_orphan_meshes():
    """A second init() replaces the table meshes instead of stacking them."""
    game, scene = _game()
    first_handles = set(scene.meshes)

    game.init()

    assert len(scene.live("pocket")) == 6
    assert len(scene.live("ball")) == table.BALL_COUNT
    assert first_handles.isdisjoint(scene.meshes)
    assert sorted(scene.destroyed) == sorted(first_handles)

    game.deinit()
    assert scene.meshes == {}


def test_bad_dt_leaves_charge_untouched():
    """A rejected frame must not eat into the charge already built up."""
    game, _ = _game()
    game.mouse_pressed(0.0, 0.0)
    game.update(0.3)
    assert game.state.shot.progress == pytest.approx(0.3)

    for bad in (0.0, -0.2):
        with pytest.raises(ValueError):
            game.update(bad)
        assert game.state.shot.progress == pytest.approx(0.3)
        assert game.state.shot.charging is True
        assert game.state.t == pytest.approx(0.3)
