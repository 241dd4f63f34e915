"""Check that the area reachable from the player is enclosed by walls."""

from __future__ import annotations

from collections import deque
from typing import Deque, Tuple

from .game import EMPTY, SPACE, WALL, GameError


class MapNotClosedError(GameError):
    """Raised when the player can reach a blank cell or the edge of the map."""


def flood_fill_map(rows: int, cols: int, grid: str, start: Tuple[float, float]) -> str:
    """Flood the empty cells reachable from ``start`` (x, y) in four directions.

    Every reached empty cell is turned into a wall and the filled grid is
    returned. Cells that are neither empty, wall nor blank stop the flood
    without filling. Raises MapNotClosedError when the flood reaches a blank
    cell or leaves the map, and ValueError when the grid size does not match.
    """
    if len(grid) != rows * cols:
        raise ValueError(f"grid holds {len(grid)} cells, expected {rows * cols}")
    cells = list(grid)
    queue: Deque[Tuple[int, int]] = deque([(int(start[0]), int(start[1]))])
    while queue:
        x, y = queue.popleft()
        if not (0 <= y < rows and 0 <= x < cols):
            raise MapNotClosedError("Non-closed map")
        index = y * cols + x
        if cells[index] == SPACE:
            raise MapNotClosedError("Non-closed map")
        if cells[index] == EMPTY:
            cells[index] = WALL
            queue.extend(((x, y - 1), (x - 1, y), (x + 1, y), (x, y + 1)))
    return "".join(cells)