"""Rendering of the 3D view: one textured wall slice per screen column."""

from __future__ import annotations

import logging
import math
import struct
from typing import Optional

from .game import (
    BASE_FRUSTUM_DISTANCE,
    MIN_RAY_DISTANCE,
    SCENE_BLOCK_SIZE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    Direction,
    Game,
    GameError,
)
from .image import Image, Texture
from .mathutil import convert_to_mlx42_endian, determine_quad, normalize_angle

_log = logging.getLogger(__name__)

_BLACK = 0x000000FF
_DIRECTION_TEXTURES = {
    "west": Direction.W,
    "north": Direction.N,
    "east": Direction.E,
    "south": Direction.S,
}


def _f32(value: float) -> float:
    """Round a finite value to single precision."""
    if not math.isfinite(value):
        return value
    return struct.unpack("f", struct.pack("f", value))[0]


def _scene(game: Game) -> Image:
    if game.scene is None:
        raise GameError("no scene image to draw on")
    return game.scene


def texture_x_offset(texture: Texture, game: Game) -> float:
    """Column of the texture to sample for the current ray's hit point.

    A horizontal hit samples along x, a vertical one along y. A hit point
    that is not finite gives -1, which draws as black.
    """
    factor = texture.width // SCENE_BLOCK_SIZE
    ray = game.ray
    coord = ray.end.x if not ray.is_vertical_first else ray.end.y
    scaled = _f32(coord * factor)
    if not math.isfinite(scaled):
        return -1.0
    return float(int(math.fmod(scaled, texture.width)))


def get_direction(game: Game) -> str:
    """Name of the wall face the current ray hit: west, east, north or south.

    Normalises the ray angle and refreshes its quadrant on the way.
    """
    ray = game.ray
    ray.current_angle = normalize_angle(ray.current_angle)
    quad = determine_quad(ray.current_angle)
    if quad is not None:
        ray.angle_quad = quad
    if ray.is_vertical_first == True:  # noqa: E712 - -1 means "unknown"
        if ray.angle_quad in (2, 3):
            return "west"
        if ray.angle_quad in (1, 4):
            return "east"
    elif ray.is_vertical_first == False:  # noqa: E712
        if ray.angle_quad in (1, 2):
            return "north"
        if ray.angle_quad in (3, 4):
            return "south"
    return "east"


def get_texture(game: Game) -> Optional[Texture]:
    """Texture of the wall face the current ray hit, or None if not loaded."""
    return game.textures.get(_DIRECTION_TEXTURES[get_direction(game)])


def draw_wall_slice(game: Game, slice_height: float, top_pixel: int, low_pixel: int) -> None:
    """Draw the textured wall between rows top_pixel (inclusive) and low_pixel."""
    texture = get_texture(game)
    if texture is None:
        _log.error("Texture not found.")
        return
    scene = _scene(game)
    scale_ratio = texture.height / slice_height
    horizontal = int(texture_x_offset(texture, game))
    vertical = (top_pixel - SCREEN_HEIGHT // 2 + slice_height / 2) * scale_ratio
    if vertical < 0:
        vertical = 0.0
    column = game.ray.ray_num
    for row in range(top_pixel, low_pixel):
        texel_y = int(vertical)
        if 0 <= texel_y < texture.height and 0 <= horizontal < texture.width:
            color = convert_to_mlx42_endian(texture.pixel(horizontal, texel_y))
        else:
            color = _BLACK
        scene.safe_put_pixel(column, row, color)
        vertical += scale_ratio


def draw_vertical_slice(game: Game) -> None:
    """Draw the current ray's screen column: ceiling, wall slice and floor."""
    ray = game.ray
    relative_angle = normalize_angle(ray.current_angle - game.player.angle)
    ray.corrected_distance = _f32(ray.distance * math.cos(relative_angle))
    if ray.corrected_distance < MIN_RAY_DISTANCE:
        ray.corrected_distance = MIN_RAY_DISTANCE
    aspect_ratio = _f32(SCREEN_WIDTH / SCREEN_HEIGHT)
    game.camera.frustum_plane_distance = _f32(BASE_FRUSTUM_DISTANCE * aspect_ratio)
    slice_height = _f32(
        _f32(SCENE_BLOCK_SIZE * game.camera.frustum_plane_distance)
        / (ray.corrected_distance + 0.1)
    )
    bottom_pixel = int(SCREEN_HEIGHT // 2 + slice_height / 2)
    top_pixel = int(SCREEN_HEIGHT // 2 - slice_height / 2)
    top_pixel = max(top_pixel, 0)
    bottom_pixel = min(bottom_pixel, SCREEN_HEIGHT)

    draw_wall_slice(game, slice_height, top_pixel, bottom_pixel)

    scene = _scene(game)
    column = ray.ray_num
    for row in range(bottom_pixel, SCREEN_HEIGHT):
        scene.safe_put_pixel(column, row, game.map_data.floor_color)
    for row in range(top_pixel - 1, -1, -1):
        scene.safe_put_pixel(column, row, game.map_data.ceiling_color)