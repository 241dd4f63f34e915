# cubraycast

A grid-based ray caster for `.cub` scene descriptions. It splits scene
files into tokens, checks that a map is closed around the player, casts one
ray per screen column against the grid walls, and draws textured wall
slices with floor and ceiling colours into an in-memory image, together
with an optional top-down minimap.

## Scene files

A `.cub` file names four wall textures and two colours, followed by the map:

```
NO ./textures/north.png
SO ./textures/south.png
WE ./textures/west.png
EA ./textures/east.png
F 220,100,0
C 225,30,0

111111
100001
10N001
111111
```

Map cells are `0` (empty), `1` (wall) and spaces (void).

## Modules

- `cubraycast.lexer` – `scan_lines(lines)` and `lex_file(path)` turn scene
  text into `Token` objects. Each token has a `Category` (`SEPARATOR` for
  commas, `IDENTIFIER` for `NO`, `SO`, `WE`, `EA`, `F`, `C`, `LITERAL` for
  anything else), its zero-based `line` and `pos`, an `Identifier` for
  identifiers, and `valid_num` / `valid_map` flags for literals made only of
  digits or only of `01NSEW`. A file that cannot be opened raises `LexError`.
- `cubraycast.mathutil` – `determine_quad`, `normalize_angle`,
  `convert_to_mlx42_endian` (byte reversal of a 32-bit colour),
  `distance_to_color` and `parse_channel` (a decimal 0–255 colour channel,
  `ValueError` otherwise).
- `cubraycast.text` – `itoa` and `ftoa`, the number formatting used by the
  statistics line.
- `cubraycast.flood_fill` – `flood_fill_map(rows, cols, grid, start)` floods
  the empty cells reachable from `start` (x, y), returns the filled grid and
  raises `MapNotClosedError` when the flood reaches a void cell or the edge
  of the map.
- `cubraycast.game` – the `Game` state with `MapData`, `Player`, `Camera`,
  `RayState`, `Pos` and `Direction`. `Game.initialise()` turns the player's
  map cell into pixel coordinates, places the camera, sizes the minimap and
  calls `Game.load_textures()`, which loads the four wall textures and
  raises `GameError` if one is missing or unreadable.
- `cubraycast.image` – `Image`, an RGBA canvas (`put_pixel`,
  `safe_put_pixel`, `get_pixel`), and `Texture`, loaded from a PNG with
  `load_png` through Pillow.
- `cubraycast.raycast` – grid lookups (`get_block_index`,
  `is_out_of_bounds`, `is_wall_hit`), horizontal and vertical intersections,
  and `cast_rays(game, on_ray)`, which casts one ray per screen column (one
  in debug mode) and calls `on_ray(game)` after each.
- `cubraycast.scene` – `get_direction` and `get_texture` pick the wall face
  hit by the current ray; `draw_vertical_slice` draws its column.
- `cubraycast.minimap` – grid, cells, rays, player marker and direction
  line, and `format_stats`, e.g. `Angle: 0.500000PI X: 12 Y: 20`.
- `cubraycast.controls` – `handle_key(game, key, action)` moves the player
  with `W`/`S`/`A`/`D` (checked by `is_collision`), turns with the arrow keys
  while mouse look is off, and returns `True` when `Esc` is pressed.
  `mouse_action` toggles mouse look on a left click and
  `CursorTracker.move` turns the player by horizontal cursor motion.
- `cubraycast.app` – `check_arguments(argv)` accepts an optional `-d` debug
  flag and exactly one path ending in `.cub`, returning
  `Arguments(path, is_debug)` or raising `GameError`;
  `compute_cell_size(rows, cols)` and `draw_all(game)`, which renders one
  frame into a fresh `game.scene`.

## Example

```python
from cubraycast.app import check_arguments, compute_cell_size, draw_all
from cubraycast.flood_fill import flood_fill_map
from cubraycast.game import Direction, Game, MapData, Player, Pos
from cubraycast.lexer import lex_file

args = check_arguments(["-d", "maps/room.cub"])
tokens = lex_file(args.path)

grid = "111111" "100001" "100001" "111111"
flood_fill_map(4, 6, grid, (2, 2))   # raises MapNotClosedError if open

game = Game(
    map_data=MapData(
        rows=4,
        cols=6,
        grid=grid,
        texture_files={d: f"textures/{d.name}.png" for d in Direction},
    ),
    player=Player(pos=Pos(2, 2), angle=1.5707963),
    cell_size=compute_cell_size(4, 6),
    is_debug=args.is_debug,
)
game.initialise()
draw_all(game)
print(game.scene.get_pixel(0, 1079))
```

## What the package does not do

- It does not turn tokens into a `MapData`: reading the texture paths,
  colours, map rows and player start out of the token list is left to the
  caller.
- It opens no window and runs no event loop; frames are drawn into an
  in-memory `Image`, and key and mouse events must be passed to the
  `controls` functions by the caller.
- It installs no command.

## Requirements

Python 3.10 or later and Pillow for reading PNG textures.