from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional

from snakeclient.api.models import Map, SnakeInfo
from snakeclient.common.types import Coordinate, Direction, Position, TileKind

MOVEMENT_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

TRAVERSABLE_KINDS = frozenset({TileKind.EMPTY, TileKind.FOOD})


@dataclass(frozen=True)
class Tile:
    """Classification of one coordinate against a map.

    ``snake`` is set only for SNAKE_HEAD and SNAKE_BODY.
    """

    kind: TileKind
    coordinate: Coordinate
    snake: Optional[SnakeInfo] = None

    @property
    def traversable(self) -> bool:
        return self.kind in TRAVERSABLE_KINDS


def from_position(position: Position, width: int) -> Coordinate:
    x = position % width
    y = (position - x) // width
    return (x, y)


def to_position(coordinate: Coordinate, width: int) -> Position:
    x, y = coordinate
    return x + y * width


def translate_positions(positions: Iterable[Position], width: int) -> list[Coordinate]:
    return [from_position(p, width) for p in positions]


def movement_delta(direction: Direction) -> Coordinate:
    return MOVEMENT_DELTAS[direction]


def inside_map(game_map: Map, coordinate: Coordinate) -> bool:
    x, y = coordinate
    return 0 <= x < game_map.width and 0 <= y < game_map.height


def is_out_of_bounds(game_map: Map, coordinate: Coordinate) -> bool:
    return not inside_map(game_map, coordinate)


def classify(game_map: Map, coordinate: Coordinate) -> Tile:
    """Return the tile at ``coordinate``.

    Precedence: obstacle, food, snake, wall, empty. Membership is tested on
    the linear position, so the list checks run before the bounds check.
    """
    position = to_position(coordinate, game_map.width)

    if position in game_map.obstacle_positions:
        return Tile(TileKind.OBSTACLE, coordinate)
    if position in game_map.food_positions:
        return Tile(TileKind.FOOD, coordinate)
    snake = next((s for s in game_map.snake_infos if position in s.positions), None)
    if snake is not None:
        if position == snake.positions[0]:
            return Tile(TileKind.SNAKE_HEAD, coordinate, snake)
        return Tile(TileKind.SNAKE_BODY, coordinate, snake)
    if not inside_map(game_map, coordinate):
        return Tile(TileKind.WALL, coordinate)
    return Tile(TileKind.EMPTY, coordinate)


def is_traversable(game_map: Map, coordinate: Coordinate) -> bool:
    return classify(game_map, coordinate).traversable


def can_move(game_map: Map, snake: SnakeInfo, direction: Direction) -> bool:
    # Out-of-range destinations classify as WALL, so no bounds pre-check.
    x, y = from_position(snake.head, game_map.width)
    dx, dy = movement_delta(direction)
    return is_traversable(game_map, (x + dx, y + dy))


def manhattan_distance(a: Coordinate, b: Coordinate) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean_distance(a: Coordinate, b: Coordinate) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def is_within_square(coordinate: Coordinate, nw: Coordinate, se: Coordinate) -> bool:
    """Inclusive test against the rectangle spanned by its NW and SE corners."""
    x, y = coordinate
    return nw[0] <= x <= se[0] and nw[1] <= y <= se[1]
