from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for everything that crosses the socket.

    Attributes are snake_case in Python and camelCase on the wire.
    Instances are frozen; a new map update always yields new objects.
    Validation is strict: values echoed back to the server must be the
    values it sent, so no coercion between JSON types.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        strict=True,
    )


class SnakeInfo(WireModel):
    id: str
    name: str
    points: int
    positions: Tuple[int, ...]
    tail_protected_for_game_ticks: int = 0

    @property
    def head(self) -> int:
        return self.positions[0]

    @property
    def alive(self) -> bool:
        return len(self.positions) > 0


class Map(WireModel):
    width: int
    height: int
    world_tick: int
    snake_infos: Tuple[SnakeInfo, ...] = Field(default_factory=tuple)
    food_positions: Tuple[int, ...] = Field(default_factory=tuple)
    obstacle_positions: Tuple[int, ...] = Field(default_factory=tuple)

    def get_snake_by_id(self, snake_id: str) -> Optional[SnakeInfo]:
        return next((s for s in self.snake_infos if s.id == snake_id), None)


class GameSettings(WireModel):
    max_noof_players: int = 5
    start_snake_length: int = 1
    time_in_ms_per_tick: int = 250
    obstacles_enabled: bool = True
    food_enabled: bool = True
    head_to_tail_consumes: bool = True
    tail_consume_grows: bool = False
    add_food_likelihood: int = 15
    remove_food_likelihood: int = 5
    spontaneous_growth_every_n_world_tick: int = 3
    training_game: bool = False
    points_per_length: int = 1
    points_per_food: int = 2
    points_per_caused_death: int = 5
    points_per_nibble: int = 10
    noof_rounds_tail_protected_after_nibble: int = 3


class GameResult(WireModel):
    points: int
    player_id: str
    name: str
