from __future__ import annotations

from typing import Any, Dict, Tuple

from pydantic import Field

from snakeclient.api import models
from snakeclient.api.models import GameSettings, Map, WireModel
from snakeclient.common.constants import REQUEST_TYPE_PREFIX
from snakeclient.common.types import Direction

# Server -> client. Discriminators look like
# "se.cygni.snake.api.event.MapUpdateEvent"; the class name is the last
# dotted segment with any "Event" suffix removed.


class InboundMessage(WireModel):
    pass


class PlayerRegistered(InboundMessage):
    name: str
    game_id: str
    game_mode: str
    receiving_player_id: str
    game_settings: GameSettings


class InvalidPlayerName(InboundMessage):
    reason_code: int


class GameStarting(InboundMessage):
    game_id: str
    receiving_player_id: str
    noof_players: int
    width: int
    height: int


class MapUpdate(InboundMessage):
    game_id: str
    game_tick: int
    receiving_player_id: str
    map: Map


class SnakeDead(InboundMessage):
    player_id: str
    x: int
    y: int
    game_id: str
    game_tick: int
    death_reason: str


class GameEnded(InboundMessage):
    receiving_player_id: str
    player_winner_id: str
    game_id: str
    game_tick: int
    map: Map


class TournamentEnded(InboundMessage):
    player_winner_id: str
    game_id: str
    game_result: Tuple[models.GameResult, ...]
    tournament_id: str
    tournament_name: str
    receiving_player_id: str


class GameLink(InboundMessage):
    receiving_player_id: str
    game_id: str
    url: str


class GameResult(InboundMessage):
    points: int
    player_id: str
    name: str


class HeartBeatResponse(InboundMessage):
    receiving_player_id: str


class UnrecognizedMessage(InboundMessage):
    """A well-formed record whose discriminator names no known kind."""

    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


INBOUND_KINDS: Dict[str, type[InboundMessage]] = {
    cls.__name__: cls
    for cls in (
        PlayerRegistered,
        InvalidPlayerName,
        GameStarting,
        MapUpdate,
        SnakeDead,
        GameEnded,
        TournamentEnded,
        GameLink,
        GameResult,
        HeartBeatResponse,
    )
}


# Client -> server.


class OutboundMessage(WireModel):
    @classmethod
    def wire_type(cls) -> str:
        return REQUEST_TYPE_PREFIX + cls.__name__


class ClientInfo(OutboundMessage):
    language: str
    language_version: str
    operating_system: str
    operating_system_version: str
    client_version: str


class RegisterPlayer(OutboundMessage):
    player_name: str
    game_settings: GameSettings = Field(default_factory=GameSettings)


class StartGame(OutboundMessage):
    pass


class RegisterMove(OutboundMessage):
    direction: Direction
    game_tick: int
    game_id: str
    receiving_player_id: str


class HeartBeatRequest(OutboundMessage):
    receiving_player_id: str
