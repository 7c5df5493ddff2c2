from __future__ import annotations

from enum import Enum
from typing import Tuple

Coordinate = Tuple[int, int]
Position = int


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class TileKind(str, Enum):
    WALL = "wall"
    FOOD = "food"
    OBSTACLE = "obstacle"
    EMPTY = "empty"
    SNAKE_HEAD = "snake_head"
    SNAKE_BODY = "snake_body"
