import math

import pytest

from cubraycast.controls import (
    ANGLE_STEP,
    Action,
    CursorTracker,
    Key,
    MouseButton,
    handle_key,
    is_collision,
    mouse_action,
)
from cubraycast.game import CONST, Game, MapData, Player, Pos

CELL = 32
ENCLOSED = "11111" "10001" "10001" "10001" "11111"


def _make_game(grid=ENCLOSED, rows=5, cols=5, x=64.0, y=64.0, angle=0.0, quad=1):
    game = Game(
        map_data=MapData(rows=rows, cols=cols, grid=grid),
        player=Player(pos=Pos(x, y), angle=angle, angle_quad=quad),
        cell_size=CELL,
    )
    game.minimap_width = cols * CELL
    game.minimap_height = rows * CELL
    game.minimap_x_end = game.minimap_width
    game.minimap_y_end = game.minimap_height
    game.camera.pos = Pos(x + CONST // 2, y + CONST // 2)
    return game


def test_escape_press_requests_close():
    game = _make_game()
    assert handle_key(game, Key.ESCAPE, Action.PRESS) is True
    assert game.player.pos == Pos(64.0, 64.0)


def test_escape_release_does_not_close():
    game = _make_game()
    assert handle_key(game, Key.ESCAPE, Action.RELEASE) is False


def test_forward_moves_along_angle_and_updates_camera():
    game = _make_game()
    assert handle_key(game, Key.W, Action.PRESS) is False
    assert game.player.pos.x > 64.0
    assert game.player.pos.y == 64.0
    assert game.camera.pos.x == game.player.pos.x + CONST // 2
    assert game.camera.pos.y == game.player.pos.y + CONST // 2
    assert game.stats.startswith("Angle: ")


def test_forward_then_back_returns_to_start():
    game = _make_game()
    handle_key(game, Key.W, Action.REPEAT)
    handle_key(game, Key.S, Action.REPEAT)
    assert game.player.pos == Pos(64.0, 64.0)


def test_strafe_left_then_right_returns_to_start():
    game = _make_game()
    handle_key(game, Key.A, Action.PRESS)
    moved = Pos(game.player.pos.x, game.player.pos.y)
    handle_key(game, Key.D, Action.PRESS)
    assert moved != Pos(64.0, 64.0)
    assert game.player.pos == Pos(64.0, 64.0)


def test_release_does_not_move():
    game = _make_game()
    handle_key(game, Key.W, Action.RELEASE)
    assert game.player.pos == Pos(64.0, 64.0)
    assert game.stats is None


def test_wall_blocks_movement():
    game = _make_game(x=119.0)
    handle_key(game, Key.W, Action.PRESS)
    assert game.player.pos == Pos(119.0, 64.0)
    assert game.stats is None


def test_is_collision_detects_wall_cells():
    game = _make_game()
    assert is_collision(game, Pos(121.0, 64.0), game.player) is True
    assert is_collision(game, Pos(64.0, 64.0), game.player) is False


def test_position_is_clamped_to_minimap():
    game = _make_game(grid="0" * 9, rows=3, cols=3, x=0.0, y=40.0, angle=math.pi, quad=2)
    handle_key(game, Key.W, Action.PRESS)
    assert game.player.pos.x == 0.0
    assert game.player.pos.y == 40.0


def test_left_arrow_turns_counterclockwise():
    game = _make_game()
    handle_key(game, Key.LEFT, Action.PRESS)
    assert game.player.angle == pytest.approx(ANGLE_STEP)
    assert game.player.angle_quad == 1
    handle_key(game, Key.RIGHT, Action.PRESS)
    assert game.player.angle == pytest.approx(0.0, abs=1e-12)


def test_right_arrow_wraps_below_zero():
    game = _make_game()
    handle_key(game, Key.RIGHT, Action.PRESS)
    assert game.player.angle == pytest.approx(2 * math.pi - ANGLE_STEP)
    assert game.player.angle_quad == 4


def test_arrows_ignored_while_mouse_active():
    game = _make_game()
    game.is_mouse_active = True
    handle_key(game, Key.LEFT, Action.PRESS)
    assert game.player.angle == 0.0


def test_left_click_toggles_mouse_look():
    game = _make_game()
    mouse_action(game, MouseButton.LEFT, Action.PRESS)
    assert game.is_mouse_active is True
    mouse_action(game, MouseButton.LEFT, Action.PRESS)
    assert game.is_mouse_active is False


def test_other_clicks_do_not_toggle():
    game = _make_game()
    mouse_action(game, MouseButton.RIGHT, Action.PRESS)
    mouse_action(game, MouseButton.LEFT, Action.RELEASE)
    assert game.is_mouse_active is False


def test_cursor_turns_when_active_and_back():
    game = _make_game(angle=math.pi, quad=2)
    game.is_mouse_active = True
    tracker = CursorTracker()
    tracker.move(game, 100.0, 0.0)
    assert game.player.angle == math.pi
    tracker.move(game, 110.0, 0.0)
    assert game.player.angle < math.pi
    tracker.move(game, 100.0, 0.0)
    assert game.player.angle == pytest.approx(math.pi)


def test_cursor_small_motion_ignored():
    game = _make_game(angle=math.pi, quad=2)
    game.is_mouse_active = True
    tracker = CursorTracker()
    tracker.move(game, 100.0, 0.0)
    tracker.move(game, 100.5, 0.0)
    assert tracker.last_x == 100.0
    assert game.player.angle == math.pi


def test_cursor_inactive_tracks_without_turning():
    game = _make_game(angle=math.pi, quad=2)
    tracker = CursorTracker()
    tracker.move(game, 100.0, 0.0)
    tracker.move(game, 110.0, 0.0)
    assert tracker.last_x == 110.0
    assert game.player.angle == math.pi