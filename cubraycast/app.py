"""Argument checking, cell sizing and the per-frame drawing routine."""

from __future__ import annotations

from typing import NamedTuple, Sequence

from .game import SCREEN_HEIGHT, SCREEN_WIDTH, Game, GameError, Pos
from .image import Image
from .minimap import draw_bresenham_ray, draw_grid, draw_player, draw_player_direction
from .raycast import cast_rays
from .scene import draw_vertical_slice

LOG = 80


class Arguments(NamedTuple):
    """The scene file to load and whether debug mode is on."""

    path: str
    is_debug: bool


def _fail(message: str) -> GameError:
    return GameError(message[: LOG - 1])


def check_arguments(argv: Sequence[str]) -> Arguments:
    """Validate the command-line arguments (program name excluded).

    An optional leading ``-d`` turns on debug mode; exactly one `.cub` file
    must follow. Raises GameError otherwise.
    """
    args = list(argv)
    is_debug = bool(args) and args[0] == "-d"
    if is_debug:
        args = args[1:]
    if not args:
        raise _fail("Missing scene description file")
    if len(args) > 1:
        raise _fail("Too many arguments")
    path = args[0]
    dot = path.rfind(".")
    if dot < 0:
        raise _fail("Expected `.cub' extension")
    extension = path[dot:]
    if extension != ".cub":
        raise _fail(f"Unknown format `.{extension}'. Expected `.cub' extension")
    return Arguments(path, is_debug)


def compute_cell_size(rows: int, cols: int) -> int:
    """Largest square cell that fits the map into half the screen each way."""
    if rows <= 0 or cols <= 0:
        raise ValueError("map must have at least one row and one column")
    return min((SCREEN_WIDTH // 2) // cols, (SCREEN_HEIGHT // 2) // rows)


def draw_all(game: Game) -> None:
    """Draw one frame: the 3D view, then the minimap overlay if enabled."""
    game.scene = Image(SCREEN_WIDTH, SCREEN_HEIGHT)
    cast_rays(game, draw_vertical_slice)
    if not game.is_mmap:
        return
    draw_grid(game, game.map_data.rows, game.map_data.cols)
    game.ray.number_of_rays = 1 if game.is_debug else SCREEN_WIDTH
    for end in game.ray.ray_end[: game.ray.number_of_rays]:
        draw_bresenham_ray(game, game.camera.pos, end)
    draw_player(game)
    camera = game.camera.pos
    draw_player_direction(game, Pos(camera.x, camera.y), game.player.angle)