from __future__ import annotations

import logging

from snakeclient.api.models import Map
from snakeclient.common.types import Direction
from snakeclient.engine.geometry import can_move, translate_positions
from snakeclient.player.base import Player

logger = logging.getLogger(__name__)

# Tie-break order when several moves are legal.
DIRECTION_ORDER = (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)
FALLBACK_DIRECTION = Direction.DOWN


class GreedyPlayer(Player):
    """Take the first legal direction, or DOWN when boxed in."""

    def get_next_move(self, game_map: Map, player_id: str) -> Direction:
        snake = game_map.get_snake_by_id(player_id)
        if snake is None or not snake.alive:
            logger.debug("Snake %s not on the map, moving %s", player_id, FALLBACK_DIRECTION.value)
            return FALLBACK_DIRECTION

        logger.debug(
            "Food can be found at %s",
            translate_positions(game_map.food_positions, game_map.width),
        )
        logger.debug(
            "My snake positions are %s",
            translate_positions(snake.positions, game_map.width),
        )

        for direction in DIRECTION_ORDER:
            if can_move(game_map, snake, direction):
                logger.debug("Snake will move in direction %s", direction.value)
                return direction

        logger.debug("Snake cannot but will move %s", FALLBACK_DIRECTION.value)
        return FALLBACK_DIRECTION
