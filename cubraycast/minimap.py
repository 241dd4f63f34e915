"""The minimap overlay: grid, rays, player marker and the statistics line."""

from __future__ import annotations

import math

from .game import CONST, PLAYER_SIZE, SPACE, WALL, X_START, Y_START, Game, GameError, Pos
from .image import Image
from .mathutil import convert_to_mlx42_endian, distance_to_color
from .raycast import get_block_index
from .text import ftoa, itoa

GRID_LINE_COLOR = 0x777777FF
WALL_CELL_COLOR = 0x00F77650
SPACE_CELL_COLOR = 0x45454560
PLAYER_COLOR = 0xFFFFFFFF
DIRECTION_COLOR = 0xFF0000FF
_DIRECTION_STEP = 0.1


def _c_round(value: float) -> float:
    """Round half away from zero."""
    if value >= 0:
        return float(math.floor(value + 0.5))
    return float(-math.floor(-value + 0.5))


def _scene(game: Game) -> Image:
    if game.scene is None:
        raise GameError("no scene image to draw on")
    return game.scene


def draw_bresenham_ray(game: Game, start: Pos, end: Pos) -> None:
    """Draw a ray on the minimap, shaded by distance from its start.

    The end point itself is not drawn; drawing stops at the minimap's edge.
    """
    scene = _scene(game)
    x = int(_c_round(start.x))
    y = int(_c_round(start.y))
    end_x = int(_c_round(end.x))
    end_y = int(_c_round(end.y))
    abs_dx = abs(end_x - x)
    abs_dy = abs(end_y - y)
    step_x = -1 if end_x < x else 1
    step_y = -1 if end_y < y else 1
    x_major = abs_dx >= abs_dy
    if x_major:
        decision = 2 * abs_dy - abs_dx
    else:
        decision = 2 * abs_dx - abs_dy
    while True:
        if (
            (x == end_x and y == end_y)
            or x < X_START
            or x >= game.minimap_x_end
            or y < Y_START
            or y >= game.minimap_y_end
        ):
            return
        distance = int(math.sqrt((x - start.x) ** 2 + (y - start.y) ** 2))
        scene.put_pixel(x, y, distance_to_color(distance))
        if x_major:
            if decision >= 0:
                decision -= 2 * abs_dx
                y += step_y
            decision += 2 * abs_dy
            x += step_x
        else:
            if decision >= 0:
                decision -= 2 * abs_dy
                x += step_x
            decision += 2 * abs_dx
            y += step_y


def dda_ray(game: Game, start: Pos, end: Pos, color: int) -> None:
    """Draw a straight line from start to end inclusive in one colour."""
    scene = _scene(game)
    dx = end.x - start.x
    dy = end.y - start.y
    steps = max(abs(dx), abs(dy))
    x_increment = dx / steps if steps else 0.0
    y_increment = dy / steps if steps else 0.0
    x, y = start.x, start.y
    pixel_color = convert_to_mlx42_endian(color)
    for _ in range(int(math.floor(steps)) + 1):
        scene.put_pixel(int(_c_round(x)) - X_START, int(_c_round(y)) - Y_START, pixel_color)
        x += x_increment
        y += y_increment


def fill_cell(game: Game, row: int, col: int, kind: int) -> None:
    """Fill one map cell whose top-left pixel is (col, row).

    Kind 1 paints a wall, kind 2 a blank; negative coordinates are ignored.
    """
    if row < 0 or col < 0:
        return
    colors = {1: WALL_CELL_COLOR, 2: SPACE_CELL_COLOR}
    color = colors.get(kind)
    if color is None:
        return
    scene = _scene(game)
    size = game.cell_size
    for y in range(row, row + size):
        for x in range(col, col + size):
            scene.put_pixel(x, y, color)


def draw_grid(game: Game, rows: int, cols: int) -> None:
    """Draw the minimap's grid lines, then fill wall and blank cells."""
    if rows <= 0 or cols <= 0:
        return
    scene = _scene(game)
    size = game.cell_size
    for y in range(0, rows * size + 1, size):
        for x in range(X_START, X_START + cols * size):
            scene.put_pixel(x, Y_START + y, GRID_LINE_COLOR)
    for x in range(0, (cols + 1) * size, size):
        for y in range(Y_START, Y_START + rows * size):
            scene.put_pixel(X_START + x, y, GRID_LINE_COLOR)
    grid = game.map_data.grid
    for y in range(rows):
        for x in range(cols):
            cell = grid[y * cols + x]
            if cell == WALL:
                fill_cell(game, y * size, x * size, 1)
            elif cell == SPACE:
                fill_cell(game, y * size, x * size, 2)


def draw_player(game: Game) -> None:
    """Draw the player as a white square at its position."""
    scene = _scene(game)
    size = PLAYER_SIZE * CONST
    x = int(_c_round(game.player.pos.x))
    y = int(_c_round(game.player.pos.y))
    for i in range(size):
        for j in range(size):
            scene.put_pixel(x - X_START + i, y - Y_START + j, PLAYER_COLOR)


def draw_player_direction(game: Game, start: Pos, angle: float) -> None:
    """Draw a red line from start along angle up to the first wall cell.

    The line also stops if it leaves the map grid.
    """
    scene = _scene(game)
    grid = game.map_data.grid
    dx = math.cos(angle) * _DIRECTION_STEP
    dy = math.sin(angle) * _DIRECTION_STEP
    end_x, end_y = start.x, start.y
    while True:
        end_x += dx
        end_y -= dy
        index = get_block_index(game, Pos(end_x, end_y), 999)
        if not 0 <= index < len(grid) or grid[index] == WALL:
            return
        scene.put_pixel(int(end_x) - X_START, int(end_y) - Y_START, DIRECTION_COLOR)


def format_stats(game: Game) -> str:
    """The statistics line: angle in multiples of pi and position in player units."""
    angle = ftoa(game.player.angle / math.pi, 6)
    x = itoa((game.player.pos.x - X_START) / CONST)
    y = itoa((game.player.pos.y - Y_START) / CONST)
    return f"Angle: {angle}PI X: {x} Y: {y}"