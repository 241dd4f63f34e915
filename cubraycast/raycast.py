"""Grid lookups and ray casting against the map's walls."""

from __future__ import annotations

import math
import struct
from typing import Callable, Optional

from .game import (
    DEG_TO_RAD,
    FOV,
    MAX_RAY_LENGTH,
    OUT_OF_BOUNDS,
    SCREEN_WIDTH,
    WALL,
    X_START,
    Y_START,
    Game,
    Pos,
)
from .mathutil import determine_quad, normalize_angle

_FLT_MAX = 3.4028234663852886e38
_PLOT_STEP = 0.1


def _f32(value: float) -> float:
    """Round a value to single precision."""
    if math.isnan(value) or math.isinf(value):
        return value
    if abs(value) > _FLT_MAX:
        return math.copysign(math.inf, value)
    return struct.unpack("f", struct.pack("f", value))[0]


def _div(a: float, b: float) -> float:
    """Divide as IEEE floats do: division by zero gives infinity or NaN."""
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _trunc_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def _c_round(value: float) -> float:
    """Round half away from zero."""
    if value >= 0:
        return float(math.floor(value + 0.5))
    return float(-math.floor(-value + 0.5))


def _cell_at(game: Game, index: int) -> str:
    grid = game.map_data.grid
    if 0 <= index < len(grid):
        return grid[index]
    return ""


def _update_quad(game: Game) -> None:
    quad = determine_quad(game.ray.current_angle)
    if quad is not None:
        game.ray.angle_quad = quad


def _debug_pixel(game: Game, pos: Pos, color: int) -> None:
    if game.is_debug and game.scene is not None:
        game.scene.safe_put_pixel(int(pos.x), int(pos.y), color)


def _block_index(game: Game, pos: Pos, use_ceil_y: bool, use_ceil_x: bool) -> int:
    cell = game.cell_size
    block_x = int((math.floor(pos.x) - X_START) / cell)
    block_y = int((math.floor(pos.y) - Y_START) / cell)
    quad = game.ray.angle_quad
    if use_ceil_y and quad in (1, 2):
        block_y = _trunc_div(math.ceil(pos.y) - Y_START, cell)
    elif use_ceil_x and quad in (2, 3):
        block_x = _trunc_div(math.ceil(pos.x) - Y_START, cell)
    return block_y * game.map_data.cols + block_x


def get_block_index(game: Game, pos: Pos, flag: int) -> int:
    """Index into the map grid of the cell holding ``pos``.

    With flag 1 and a ray facing up the row is found by rounding y up; with
    flag 0 and a ray facing left the column is found by rounding x up. Any
    other flag uses plain flooring.
    """
    return _block_index(game, pos, flag == 1, not flag)


def get_block_index2(game: Game, pos: Pos, flag: int) -> int:
    """Like get_block_index, but any non-zero flag selects the vertical rule."""
    return _block_index(game, pos, bool(flag), not flag)


def get_distance(start: Pos, end: Pos) -> float:
    """Euclidean distance between two points."""
    return math.hypot(end.x - start.x, end.y - start.y)


def is_out_of_bounds(game: Game, position: Pos) -> bool:
    """Whether a point lies outside the map (non-finite points count as outside)."""
    if not (math.isfinite(position.x) and math.isfinite(position.y)):
        return True
    cell = game.cell_size
    return (
        position.y < 0
        or position.x < 0
        or position.y >= game.map_data.rows * cell
        or position.x >= game.map_data.cols * cell
    )


def is_wall_hit(game: Game, inter: Pos, flag: int) -> bool:
    """Whether the cell holding ``inter`` is a wall."""
    return _cell_at(game, get_block_index2(game, inter, flag)) == WALL


def horiz_intersect(game: Game) -> float:
    """Follow the current ray across horizontal grid lines to the first wall.

    Stores the hit in ``game.ray.h_hit`` and returns its distance, or
    OUT_OF_BOUNDS if the ray leaves the map first.
    """
    ray = game.ray
    cam = game.camera.pos
    cell = game.cell_size
    tan_a = math.tan(ray.current_angle)
    increase_x = _f32(_div(cell, tan_a))
    if ray.angle_quad in (3, 4):
        increase_y, delta_y = float(cell), cell
        increase_x = -increase_x
    else:
        increase_y, delta_y = float(-cell), -1
    y = math.floor((cam.y - Y_START) / cell) * cell + delta_y
    x = (cam.x - X_START) - _div(y - cam.y, tan_a)
    ray.intersect = Pos(x, y)
    while not is_out_of_bounds(game, ray.intersect) and not is_wall_hit(game, ray.intersect, 0):
        _debug_pixel(game, ray.intersect, 0xFF00FFFF)
        ray.intersect.y += increase_y
        ray.intersect.x += increase_x
    if is_out_of_bounds(game, ray.intersect):
        return float(OUT_OF_BOUNDS)
    _debug_pixel(game, ray.intersect, 0xFF00FFFF)
    ray.h_hit = Pos(ray.intersect.x, ray.intersect.y)
    return _f32(get_distance(cam, ray.h_hit))


def vertical_intersect(game: Game) -> float:
    """Follow the current ray across vertical grid lines to the first wall.

    An angle of exactly pi/2 or 3*pi/2 is nudged by 0.0001 first. Stores the
    hit in ``game.ray.v_hit`` and returns its distance, or OUT_OF_BOUNDS if
    the ray leaves the map first.
    """
    ray = game.ray
    cam = game.camera.pos
    cell = game.cell_size
    if ray.current_angle == math.pi / 2 or ray.current_angle == 3 * math.pi / 2:
        ray.current_angle += 0.0001
    tan_a = math.tan(ray.current_angle)
    increase_y = _f32(cell * tan_a)
    if ray.angle_quad in (1, 4):
        increase_x, delta_x = float(cell), cell
        increase_y = -increase_y
    else:
        increase_x, delta_x = float(-cell), -1
    x = math.floor(cam.x / cell) * cell + delta_x
    y = cam.y - (x - cam.x) * tan_a
    ray.intersect = Pos(x, y)
    while not is_out_of_bounds(game, ray.intersect) and not is_wall_hit(game, ray.intersect, 1):
        _debug_pixel(game, ray.intersect, 0xFFFF00FF)
        ray.intersect.y += increase_y
        ray.intersect.x += increase_x
    if is_out_of_bounds(game, ray.intersect):
        return float(OUT_OF_BOUNDS)
    _debug_pixel(game, ray.intersect, 0xFFFF00FF)
    ray.v_hit = Pos(ray.intersect.x, ray.intersect.y)
    return _f32(get_distance(cam, ray.v_hit))


def reach_nearest_wall_by_intersections(game: Game) -> None:
    """Pick the nearer of the horizontal and vertical hits as the ray's end."""
    ray = game.ray
    horizontal = horiz_intersect(game)
    vertical = vertical_intersect(game)
    if horizontal > vertical:
        ray.is_vertical_first = True
        ray.end = Pos(ray.v_hit.x, ray.v_hit.y)
    else:
        ray.is_vertical_first = False
        ray.end = Pos(ray.h_hit.x, ray.h_hit.y)
    ray.distance = _f32(get_distance(game.camera.pos, ray.end))


def reach_nearest_wall_by_plotting(game: Game, angle: float) -> None:
    """Walk along the ray in small steps until a wall cell is entered.

    Gives up, clearing ``wall_met``, once MAX_RAY_LENGTH has been travelled.
    """
    ray = game.ray
    cam = game.camera.pos
    angle = _f32(angle)
    dx = math.cos(angle) * _PLOT_STEP
    dy = math.sin(angle) * _PLOT_STEP
    ray.end = Pos(cam.x, cam.y)
    travelled = 0.0
    while travelled < MAX_RAY_LENGTH:
        ray.end.x += dx
        ray.end.y -= dy
        ray.distance = _f32(ray.distance + _PLOT_STEP)
        travelled += _PLOT_STEP
        if _cell_at(game, get_block_index2(game, ray.end, 99)) == WALL:
            ray.wall_met = True
            ray.distance = _f32(get_distance(cam, ray.end))
            cell = game.cell_size
            if int(_c_round(ray.end.x) - X_START) % cell == 0:
                ray.is_vertical_first = True
            if int(_c_round(ray.end.y) - Y_START) % cell == 0:
                ray.is_vertical_first = False
            return
    ray.wall_met = False


def cast_rays(game: Game, on_ray: Optional[Callable[[Game], None]] = None) -> None:
    """Cast the frame's rays across the field of view, left to right.

    One ray per screen column (a single ray in debug mode). After each ray
    its start and end are recorded and ``on_ray`` is called with the game.
    """
    ray = game.ray
    step = _f32(FOV * DEG_TO_RAD / SCREEN_WIDTH)
    ray.current_angle = normalize_angle(game.player.angle + (FOV / 2) * DEG_TO_RAD)
    _update_quad(game)
    ray.number_of_rays = 1 if game.is_debug else SCREEN_WIDTH
    for number in range(ray.number_of_rays):
        ray.ray_num = number
        reach_nearest_wall_by_intersections(game)
        cam = game.camera.pos
        ray.ray_start[number] = Pos(cam.x, cam.y)
        ray.ray_end[number] = Pos(ray.end.x, ray.end.y)
        if on_ray is not None:
            on_ray(game)
        ray.intersect = Pos()
        ray.current_angle = normalize_angle(ray.current_angle - step)
        _update_quad(game)
    ray.ray_num = ray.number_of_rays