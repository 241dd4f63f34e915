"""Game state: map data, player, camera, ray state and start-up set-up."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from .image import Image, Texture, load_png
from .mathutil import MAX_RAY_DISTANCE

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
DEG_TO_RAD = math.pi / 180.0
MOUSE_SENSITIVITY = 0.1

EMPTY = "0"
WALL = "1"
SPACE = " "

CONST = 4
PIXELS_PER_BLOCK = 8
X_START = 0
Y_START = 0
MMAP_MAX_HEIGHT = SCREEN_HEIGHT // 4
MMAP_MAX_WIDTH = SCREEN_WIDTH // 4

PLAYER_SIZE = 2
PLAYER_DIRECTION_SIZE = 50

FOV = 60.0
NUMBER_OF_RAYS = 640
MAX_RAY_LENGTH = 400
DISTANCE_PER_TURN = 0.5 * CONST
OUT_OF_BOUNDS = 1000000000

SCENE_BLOCK_SIZE = 64
SCENE_WIDTH = 1920
SCENE_HEIGHT = 1080
BASE_FRUSTUM_DISTANCE = 300.0
MIN_RAY_DISTANCE = 5.0
FLOOR_COLOR = 0xFF8000FF

__all__ = [
    "GameError",
    "Direction",
    "Pos",
    "Player",
    "Camera",
    "RayState",
    "MapData",
    "Game",
    "MAX_RAY_DISTANCE",
]


class GameError(Exception):
    """A fatal error that ends the game with a message."""


class Direction(IntEnum):
    """Wall orientations, indexing the textures."""

    E = 0
    N = 1
    W = 2
    S = 3


def _round(value: float) -> float:
    """Round half away from zero."""
    if value >= 0:
        return float(math.floor(value + 0.5))
    return float(-math.floor(-value + 0.5))


@dataclass
class Pos:
    x: float = 0.0
    y: float = 0.0


@dataclass
class Player:
    """Player position (map cells before set-up, pixels after) and view angle."""

    pos: Pos = field(default_factory=Pos)
    angle: float = 0.0
    angle_quad: int = 1


@dataclass
class Camera:
    pos: Pos = field(default_factory=Pos)
    angle: float = 0.0
    frustum_plane_distance: float = 0.0


@dataclass
class RayState:
    """State of the ray being cast and the end points of every ray in a frame."""

    end: Pos = field(default_factory=Pos)
    intersect: Pos = field(default_factory=Pos)
    number_of_rays: int = 0
    ray_num: int = 0
    current_angle: float = 0.0
    angle_quad: int = 1
    wall_met: bool = False
    is_vertical_first: int = -1
    distance: float = 0.0
    corrected_distance: float = 0.0
    v_hit: Pos = field(default_factory=Pos)
    h_hit: Pos = field(default_factory=Pos)
    ray_start: List[Pos] = field(
        default_factory=lambda: [Pos() for _ in range(SCREEN_WIDTH)], repr=False
    )
    ray_end: List[Pos] = field(
        default_factory=lambda: [Pos() for _ in range(SCREEN_WIDTH)], repr=False
    )


@dataclass
class MapData:
    """The parsed map: a row-major grid string plus colours and texture paths."""

    rows: int
    cols: int
    grid: str
    floor_color: int = FLOOR_COLOR
    ceiling_color: int = 0
    texture_files: Dict[Direction, str] = field(default_factory=dict)


@dataclass
class Game:
    """All state of a running game."""

    map_data: MapData
    player: Player
    cell_size: int
    is_debug: bool = False
    is_mmap: bool = True
    is_mouse_active: bool = False
    camera: Camera = field(default_factory=Camera)
    ray: RayState = field(default_factory=RayState)
    scene: Optional[Image] = None
    stats: Optional[str] = None
    textures: Dict[Direction, Texture] = field(default_factory=dict)
    minimap_width: int = 0
    minimap_height: int = 0
    minimap_x_end: int = 0
    minimap_y_end: int = 0

    def initialise(self) -> None:
        """Turn the player's map cell into pixels, set up camera and minimap, load textures."""
        self.is_mmap = True
        self.is_mouse_active = False
        self.ray.is_vertical_first = -1
        self.ray.wall_met = False
        self.scene = None
        self.stats = None
        cell = self.cell_size
        half = CONST // 2
        self.player.pos = Pos(
            _round(X_START + (self.player.pos.x + 0.5) * cell - half),
            _round(Y_START + (self.player.pos.y + 0.5) * cell - half),
        )
        self.ray.intersect = Pos()
        offset = (PLAYER_SIZE + CONST) // 2
        self.camera.pos = Pos(
            _round(self.player.pos.x + offset), _round(self.player.pos.y + offset)
        )
        self.camera.frustum_plane_distance = SCREEN_WIDTH / 2 * math.tan(FOV * DEG_TO_RAD / 2)
        self.minimap_width = self.map_data.cols * cell
        self.minimap_height = self.map_data.rows * cell
        self.minimap_x_end = self.minimap_width
        self.minimap_y_end = self.minimap_height
        self.load_textures()

    def load_textures(self) -> None:
        """Load the four wall textures; raises GameError if one cannot be loaded."""
        for direction in Direction:
            path = self.map_data.texture_files.get(direction)
            if path is None:
                raise GameError(f"Unable to load .png texture `{path}'")
            try:
                self.textures[direction] = load_png(path)
            except OSError as exc:
                raise GameError(f"Unable to load .png texture `{path}'") from exc