import pytest

from snakeclient.api.models import Map, SnakeInfo
from snakeclient.common.types import Direction, TileKind
from snakeclient.engine.geometry import (
    Tile,
    can_move,
    classify,
    euclidean_distance,
    from_position,
    is_traversable,
    is_within_square,
    manhattan_distance,
    movement_delta,
    to_position,
    translate_positions,
)

MAP_WIDTH = 3


def _snake_one() -> SnakeInfo:
    return SnakeInfo(
        id="1",
        name="1",
        points=0,
        positions=(to_position((1, 1), MAP_WIDTH), to_position((0, 1), MAP_WIDTH)),
    )


def _snake_two() -> SnakeInfo:
    return SnakeInfo(id="2", name="2", points=0, positions=(to_position((1, 2), MAP_WIDTH),))


def _test_map() -> Map:
    # yx012
    # 0  F
    # 1 11#
    # 2  2
    return Map(
        width=MAP_WIDTH,
        height=MAP_WIDTH,
        world_tick=0,
        snake_infos=(_snake_one(), _snake_two()),
        food_positions=(to_position((1, 0), MAP_WIDTH),),
        obstacle_positions=(to_position((2, 1), MAP_WIDTH),),
    )


@pytest.mark.parametrize("width,height", [(1, 1), (3, 3), (46, 34), (7, 2)])
def test_position_round_trip(width, height):
    for p in range(width * height):
        assert to_position(from_position(p, width), width) == p


def test_from_position_layout():
    assert from_position(0, 5) == (0, 0)
    assert from_position(4, 5) == (4, 0)
    assert from_position(5, 5) == (0, 1)
    assert from_position(13, 5) == (3, 2)


def test_movement_deltas_grow_down():
    assert movement_delta(Direction.UP) == (0, -1)
    assert movement_delta(Direction.DOWN) == (0, 1)
    assert movement_delta(Direction.LEFT) == (-1, 0)
    assert movement_delta(Direction.RIGHT) == (1, 0)


def test_tiles_classified():
    game_map = _test_map()
    one, two = _snake_one(), _snake_two()
    expected = [
        [Tile(TileKind.EMPTY, (0, 0)), Tile(TileKind.FOOD, (1, 0)), Tile(TileKind.EMPTY, (2, 0))],
        [
            Tile(TileKind.SNAKE_BODY, (0, 1), one),
            Tile(TileKind.SNAKE_HEAD, (1, 1), one),
            Tile(TileKind.OBSTACLE, (2, 1)),
        ],
        [Tile(TileKind.EMPTY, (0, 2)), Tile(TileKind.SNAKE_HEAD, (1, 2), two), Tile(TileKind.EMPTY, (2, 2))],
    ]
    for y in range(game_map.height):
        for x in range(game_map.width):
            assert classify(game_map, (x, y)) == expected[y][x]


def test_tiles_marked_traversable():
    game_map = _test_map()
    expected = [
        [True, True, True],
        [False, False, False],
        [True, False, True],
    ]
    for y in range(game_map.height):
        for x in range(game_map.width):
            assert is_traversable(game_map, (x, y)) is expected[y][x]


def test_obstacle_wins_over_food():
    game_map = Map(width=3, height=3, world_tick=0, food_positions=(4,), obstacle_positions=(4,))
    assert classify(game_map, (1, 1)).kind is TileKind.OBSTACLE


def test_food_wins_over_snake():
    snake = SnakeInfo(id="s", name="s", points=0, positions=(4,))
    game_map = Map(width=3, height=3, world_tick=0, snake_infos=(snake,), food_positions=(4,))
    assert classify(game_map, (1, 1)).kind is TileKind.FOOD


def test_out_of_bounds_is_wall():
    game_map = Map(width=3, height=3, world_tick=0)
    for coordinate in [(0, -1), (-1, 0), (0, 3), (1, 5)]:
        tile = classify(game_map, coordinate)
        assert tile.kind is TileKind.WALL
        assert tile.snake is None


def test_traversable_only_for_empty_and_food():
    snake = SnakeInfo(id="s", name="s", points=0, positions=(0, 1))
    game_map = Map(
        width=3,
        height=3,
        world_tick=0,
        snake_infos=(snake,),
        food_positions=(2,),
        obstacle_positions=(3,),
    )
    cases = {
        (0, 0): TileKind.SNAKE_HEAD,
        (1, 0): TileKind.SNAKE_BODY,
        (2, 0): TileKind.FOOD,
        (0, 1): TileKind.OBSTACLE,
        (1, 1): TileKind.EMPTY,
        (0, -1): TileKind.WALL,
    }
    for coordinate, kind in cases.items():
        assert classify(game_map, coordinate).kind is kind
        assert is_traversable(game_map, coordinate) is (kind in (TileKind.EMPTY, TileKind.FOOD))
    assert {kind for kind in cases.values()} == set(TileKind)


def test_can_move_identifies_correctly():
    game_map = _test_map()
    snake = game_map.get_snake_by_id("1")
    assert can_move(game_map, snake, Direction.UP) is True
    assert can_move(game_map, snake, Direction.DOWN) is False
    assert can_move(game_map, snake, Direction.LEFT) is False
    assert can_move(game_map, snake, Direction.RIGHT) is False


def test_can_not_move_into_walls():
    game_map = _test_map()
    snake = game_map.get_snake_by_id("2")
    assert can_move(game_map, snake, Direction.DOWN) is False


def test_corner_head_blocked_up_and_left():
    snake = SnakeInfo(id="s", name="s", points=0, positions=(0,))
    game_map = Map(width=3, height=3, world_tick=0, snake_infos=(snake,), obstacle_positions=(1,))
    assert can_move(game_map, snake, Direction.UP) is False
    assert can_move(game_map, snake, Direction.LEFT) is False
    assert can_move(game_map, snake, Direction.DOWN) is True
    assert can_move(game_map, snake, Direction.RIGHT) is False


def test_snake_found_by_id():
    game_map = _test_map()
    assert game_map.get_snake_by_id("2").positions == (7,)
    assert game_map.get_snake_by_id("missing") is None


def test_distance_helpers():
    assert manhattan_distance((0, 0), (3, 4)) == 7
    assert euclidean_distance((0, 0), (3, 4)) == pytest.approx(5.0)
    assert is_within_square((2, 2), (1, 1), (3, 3)) is True
    assert is_within_square((3, 3), (1, 1), (3, 3)) is True
    assert is_within_square((4, 2), (1, 1), (3, 3)) is False
    assert translate_positions([0, 4, 8], 3) == [(0, 0), (1, 1), (2, 2)]
