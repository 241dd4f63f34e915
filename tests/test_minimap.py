import math

import pytest

from cubraycast.game import Game, GameError, MapData, Player, Pos
from cubraycast.image import Image
from cubraycast.mathutil import convert_to_mlx42_endian, distance_to_color
from cubraycast.minimap import (
    DIRECTION_COLOR,
    GRID_LINE_COLOR,
    PLAYER_COLOR,
    SPACE_CELL_COLOR,
    WALL_CELL_COLOR,
    dda_ray,
    draw_bresenham_ray,
    draw_grid,
    draw_player,
    draw_player_direction,
    fill_cell,
    format_stats,
)


def make_game(grid="111101111"):
    game = Game(map_data=MapData(3, 3, grid), player=Player(), cell_size=10)
    game.scene = Image(40, 40)
    game.minimap_width = game.minimap_x_end = 30
    game.minimap_height = game.minimap_y_end = 30
    return game


def test_grid_colors_walls_lines_and_blanks():
    game = make_game("11110 111")
    draw_grid(game, 3, 3)
    scene = game.scene
    assert scene.get_pixel(5, 5) == WALL_CELL_COLOR
    assert scene.get_pixel(5, 0) == WALL_CELL_COLOR
    assert scene.get_pixel(15, 10) == GRID_LINE_COLOR
    assert scene.get_pixel(30, 15) == GRID_LINE_COLOR
    assert scene.get_pixel(15, 30) == GRID_LINE_COLOR
    assert scene.get_pixel(15, 15) == 0
    assert scene.get_pixel(25, 15) == SPACE_CELL_COLOR


def test_grid_with_no_rows_draws_nothing():
    game = make_game()
    draw_grid(game, 0, 3)
    assert set(game.scene.pixels) == {0}


def test_fill_cell_negative_is_ignored():
    game = make_game()
    fill_cell(game, -1, 0, 1)
    assert set(game.scene.pixels) == {0}


def test_fill_cell_covers_one_cell():
    game = make_game()
    fill_cell(game, 10, 20, 2)
    assert game.scene.get_pixel(20, 10) == SPACE_CELL_COLOR
    assert game.scene.get_pixel(29, 19) == SPACE_CELL_COLOR
    assert game.scene.get_pixel(30, 19) == 0
    assert game.scene.pixels.count(SPACE_CELL_COLOR) == 100


def test_bresenham_shades_by_distance_and_skips_end():
    game = make_game()
    draw_bresenham_ray(game, Pos(15, 15), Pos(25, 15))
    scene = game.scene
    assert scene.get_pixel(15, 15) == distance_to_color(0)
    assert scene.get_pixel(20, 15) == distance_to_color(5)
    assert scene.get_pixel(24, 15) == distance_to_color(9)
    assert scene.get_pixel(25, 15) == 0


def test_bresenham_stops_at_minimap_edge():
    game = make_game()
    draw_bresenham_ray(game, Pos(15, 15), Pos(100, 15))
    assert game.scene.get_pixel(29, 15) == distance_to_color(14)
    assert game.scene.get_pixel(30, 15) == 0


def test_bresenham_steep_line_covers_each_row():
    game = make_game()
    draw_bresenham_ray(game, Pos(5, 2), Pos(8, 20))
    painted_rows = {i // 40 for i, value in enumerate(game.scene.pixels) if value}
    assert painted_rows == set(range(2, 20))


def test_dda_draws_inclusive_line():
    game = make_game()
    dda_ray(game, Pos(1, 1), Pos(5, 1), 0x11223344)
    expected = convert_to_mlx42_endian(0x11223344)
    assert [game.scene.get_pixel(x, 1) for x in range(1, 6)] == [expected] * 5
    assert game.scene.get_pixel(6, 1) == 0


def test_dda_zero_length_draws_one_pixel():
    game = make_game()
    dda_ray(game, Pos(3, 3), Pos(3, 3), 0xAABBCCDD)
    assert game.scene.get_pixel(3, 3) == convert_to_mlx42_endian(0xAABBCCDD)
    assert sum(1 for value in game.scene.pixels if value) == 1


def test_draw_player_square():
    game = make_game()
    game.player.pos = Pos(12.0, 12.0)
    draw_player(game)
    assert game.scene.get_pixel(12, 12) == PLAYER_COLOR
    assert game.scene.get_pixel(19, 19) == PLAYER_COLOR
    assert game.scene.get_pixel(20, 12) == 0
    assert game.scene.pixels.count(PLAYER_COLOR) == 64


def test_player_direction_stops_at_wall():
    game = make_game()
    draw_player_direction(game, Pos(15.0, 15.0), 0.0)
    assert game.scene.get_pixel(16, 15) == DIRECTION_COLOR
    assert game.scene.get_pixel(19, 15) == DIRECTION_COLOR
    assert game.scene.get_pixel(20, 15) != DIRECTION_COLOR
    assert game.scene.get_pixel(14, 15) == 0


def test_format_stats():
    game = make_game()
    game.player.angle = math.pi
    game.player.pos = Pos(40.0, 80.0)
    assert format_stats(game) == "Angle: 1.000000PI X: 10 Y: 20"


def test_format_stats_prefix():
    game = make_game()
    game.player.angle = 0.0
    assert format_stats(game).startswith("Angle: 0.")


def test_drawing_without_scene_raises():
    game = make_game()
    game.scene = None
    with pytest.raises(GameError):
        draw_player(game)