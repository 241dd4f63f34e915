"""Keyboard and mouse handling: movement, collision and turning."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Dict, Tuple

from .game import (
    CONST,
    DISTANCE_PER_TURN,
    MOUSE_SENSITIVITY,
    PLAYER_SIZE,
    WALL,
    X_START,
    Y_START,
    Game,
    Player,
    Pos,
)
from .mathutil import determine_quad, normalize_angle
from .minimap import format_stats
from .raycast import get_block_index

_log = logging.getLogger(__name__)

ANGLE_STEP = 2 * math.pi / 100


class Key(IntEnum):
    """Key codes the game reacts to."""

    A = 65
    D = 68
    S = 83
    W = 87
    ESCAPE = 256
    RIGHT = 262
    LEFT = 263


class Action(IntEnum):
    """What happened to a key or mouse button."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class MouseButton(IntEnum):
    """Mouse buttons."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


def _c_round(value: float) -> float:
    """Round half away from zero."""
    if value >= 0:
        return float(math.floor(value + 0.5))
    return float(-math.floor(-value + 0.5))


def _step(value: float) -> float:
    return _c_round(value * DISTANCE_PER_TURN)


_MOVES: Dict[int, Callable[[float], Tuple[float, float]]] = {
    Key.W: lambda a: (_step(math.cos(a)), -_step(math.sin(a))),
    Key.S: lambda a: (-_step(math.cos(a)), _step(math.sin(a))),
    Key.A: lambda a: (-_step(math.sin(a)), -_step(math.cos(a))),
    Key.D: lambda a: (_step(math.sin(a)), _step(math.cos(a))),
}


def _is_wall(game: Game, pos: Pos, flag: int) -> bool:
    grid = game.map_data.grid
    index = get_block_index(game, pos, flag)
    return 0 <= index < len(grid) and grid[index] == WALL


def _refresh_stats(game: Game) -> None:
    game.stats = format_stats(game) if game.is_mmap else None


def _turn(game: Game, new_angle: float) -> None:
    new_angle = normalize_angle(new_angle)
    if new_angle != game.player.angle:
        quad = determine_quad(new_angle)
        if quad is not None:
            game.player.angle_quad = quad
        game.player.angle = new_angle
        _refresh_stats(game)


def is_collision(game: Game, new: Pos, player: Player) -> bool:
    """Whether the player's square at ``new`` would overlap a wall cell.

    The edges checked depend on the quadrant the player faces.
    """
    reach = PLAYER_SIZE * CONST - 1
    offsets = {1: (reach, 0), 2: (0, 0), 3: (0, reach), 4: (reach, reach)}
    x_offset, y_offset = offsets.get(player.angle_quad, (0, 0))
    for i in range(reach + 1):
        if _is_wall(game, Pos(new.x + x_offset, new.y + i), 0):
            return True
    for i in range(reach + 1):
        if _is_wall(game, Pos(new.x + i, new.y + y_offset), 1):
            return True
    return False


def _move(game: Game, key: int) -> None:
    player = game.player
    new = Pos(player.pos.x, player.pos.y)
    move = _MOVES.get(key)
    if move is not None:
        dx, dy = move(player.angle)
        new.x += dx
        new.y += dy
    if new.x == player.pos.x and new.y == player.pos.y:
        return
    new.x = min(max(new.x, X_START), X_START + game.minimap_width - CONST)
    new.y = min(max(new.y, Y_START), Y_START + game.minimap_height - CONST)
    if is_collision(game, new, player):
        _log.debug("collision at (%f, %f)", new.x, new.y)
        return
    player.pos = Pos(_c_round(new.x), _c_round(new.y))
    half = CONST // 2
    game.camera.pos = Pos(_c_round(player.pos.x + half), _c_round(player.pos.y + half))
    _refresh_stats(game)


def handle_key(game: Game, key: int, action: int) -> bool:
    """React to a key event; returns True when the game should close."""
    if key == Key.ESCAPE and action == Action.PRESS:
        _log.info("Player pressed ESC. Closing the game...")
        return True
    if action not in (Action.PRESS, Action.REPEAT):
        return False
    _move(game, key)
    new_angle = game.player.angle
    if not game.is_mouse_active:
        if key == Key.RIGHT:
            new_angle -= ANGLE_STEP
        elif key == Key.LEFT:
            new_angle += ANGLE_STEP
    _turn(game, new_angle)
    return False


@dataclass
class CursorTracker:
    """Turns the player by horizontal cursor motion while mouse look is on."""

    last_x: float = -1.0

    def move(self, game: Game, xpos: float, ypos: float) -> None:
        """Handle a cursor position; motions under one pixel are ignored."""
        delta = abs(xpos - self.last_x)
        if delta < 1.0:
            return
        speed = delta * MOUSE_SENSITIVITY
        if self.last_x != -1 and self.last_x != xpos and game.is_mouse_active:
            if xpos - self.last_x > 0:
                new_angle = game.player.angle - ANGLE_STEP * speed
            else:
                new_angle = game.player.angle + ANGLE_STEP * speed
            _turn(game, new_angle)
        self.last_x = xpos


def mouse_action(game: Game, button: int, action: int) -> None:
    """A left click toggles mouse look on and off."""
    if button == MouseButton.LEFT and action == Action.PRESS:
        game.is_mouse_active = not game.is_mouse_active
        if game.is_mouse_active:
            _log.info("mouse active, cursor hidden")
        else:
            _log.info("mouse inactive, cursor shown")