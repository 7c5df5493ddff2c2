from __future__ import annotations

import asyncio
import logging
import platform
from dataclasses import dataclass
from enum import Enum
from importlib import metadata
from typing import Awaitable, Callable, Dict, List, Optional, Protocol, Union

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from snakeclient.api.codec import DecodeError, decode_inbound, encode_outbound
from snakeclient.api.messages import (
    ClientInfo,
    GameEnded,
    GameLink,
    GameResult,
    GameStarting,
    HeartBeatRequest,
    HeartBeatResponse,
    InvalidPlayerName,
    MapUpdate,
    OutboundMessage,
    PlayerRegistered,
    RegisterMove,
    RegisterPlayer,
    SnakeDead,
    StartGame,
    TournamentEnded,
    UnrecognizedMessage,
)
from snakeclient.common.config import Config
from snakeclient.common.constants import (
    CLIENT_DIST_NAME,
    CLIENT_LANGUAGE,
    FALLBACK_CLIENT_VERSION,
    HEARTBEAT_INTERVAL_SECONDS,
)
from snakeclient.player.base import Player

module_logger = logging.getLogger(__name__)


class TransportError(Exception):
    """The socket failed to send, receive or close."""


class HandshakeError(TransportError):
    """The session could not be established."""


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    REGISTERING = "registering"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


class EventKind(str, Enum):
    FRAME = "frame"
    HEARTBEAT = "heartbeat"
    CLOSED = "closed"


@dataclass(frozen=True)
class Event:
    kind: EventKind
    data: Optional[str] = None


HEARTBEAT_EVENT = Event(EventKind.HEARTBEAT)
CLOSED_EVENT = Event(EventKind.CLOSED)


class Transport(Protocol):
    async def send(self, message: str) -> None: ...

    async def recv(self) -> Union[str, bytes]: ...

    async def close(self) -> None: ...


def client_version() -> str:
    try:
        return metadata.version(CLIENT_DIST_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_CLIENT_VERSION


def build_client_info() -> ClientInfo:
    return ClientInfo(
        language=CLIENT_LANGUAGE,
        language_version=platform.python_version(),
        operating_system=platform.system(),
        operating_system_version=platform.release(),
        client_version=client_version(),
    )


class SnakeClient:
    """Drives one game server session from handshake to close.

    Socket frames and heartbeat ticks are funnelled into a single queue and
    handled one at a time by ``serve``, so the session state (player id,
    heartbeat timer) is only ever touched from that consumer.
    """

    def __init__(
        self,
        config: Config,
        player: Player,
        heartbeat_interval: float = HEARTBEAT_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.player = player
        self.heartbeat_interval = heartbeat_interval
        self.log = logger or module_logger
        self.state = ConnectionState.CONNECTING
        self.send_failures: List[TransportError] = []
        self._player_id: Optional[str] = None
        self._heartbeat: Optional[asyncio.TimerHandle] = None
        self._transport: Optional[Transport] = None
        self._events: Optional[asyncio.Queue[Event]] = None
        self._receive_error: Optional[BaseException] = None
        self._handlers: Dict[type, Callable[..., Awaitable[None]]] = {
            PlayerRegistered: self._on_player_registered,
            InvalidPlayerName: self._on_invalid_player_name,
            GameStarting: self._on_game_starting,
            GameLink: self._on_game_link,
            MapUpdate: self._on_map_update,
            SnakeDead: self._on_snake_dead,
            GameResult: self._on_game_result,
            GameEnded: self._on_game_ended,
            TournamentEnded: self._on_tournament_ended,
            HeartBeatResponse: self._on_heartbeat_response,
        }

    @property
    def heartbeat_pending(self) -> bool:
        return self._heartbeat is not None and not self._heartbeat.cancelled()

    async def run(self) -> None:
        """Connect to the configured server and serve until the socket closes."""
        url = self.config.url
        self.log.info("Connecting to %s", url)
        try:
            connection = await websockets.connect(url)
        except (OSError, asyncio.TimeoutError, WebSocketException) as exc:
            self.state = ConnectionState.CLOSED
            raise HandshakeError(f"Could not connect to {url}: {exc}") from exc
        async with connection:
            await self.serve(connection)

    async def serve(self, transport: Transport) -> None:
        self._transport = transport
        self._events = asyncio.Queue()
        try:
            await self._open()
        except TransportError as exc:
            self._shutdown()
            raise HandshakeError(f"Handshake failed: {exc}") from exc

        reader = asyncio.create_task(self._read_frames(transport))
        try:
            await self._consume()
            if self._receive_error is not None and self.state is not ConnectionState.CLOSING:
                raise TransportError(f"Connection lost: {self._receive_error}") from self._receive_error
        finally:
            reader.cancel()
            await asyncio.gather(reader, return_exceptions=True)
            self._shutdown()

    async def send(self, message: OutboundMessage) -> None:
        if self._transport is None or self.state is ConnectionState.CLOSED:
            raise TransportError(f"Cannot send {type(message).__name__}: not connected")
        text = encode_outbound(message)
        self.log.debug("Sending message: %s", text)
        try:
            await self._transport.send(text)
        except (OSError, WebSocketException) as exc:
            raise TransportError(f"Failed to send {type(message).__name__}: {exc}") from exc

    async def close(self) -> None:
        """Ask the transport to close. Teardown happens when the close lands."""
        if self.state in (ConnectionState.CLOSING, ConnectionState.CLOSED):
            return
        self.state = ConnectionState.CLOSING
        self.cancel_heartbeat()
        if self._transport is None:
            return
        try:
            await self._transport.close()
        except (OSError, WebSocketException) as exc:
            raise TransportError(f"Failed to close connection: {exc}") from exc

    def arm_heartbeat(self) -> asyncio.TimerHandle:
        # At most one timer: a new one always replaces the pending one.
        self.cancel_heartbeat()
        loop = asyncio.get_running_loop()
        self._heartbeat = loop.call_later(self.heartbeat_interval, self._heartbeat_due)
        return self._heartbeat

    def cancel_heartbeat(self) -> None:
        if self._heartbeat is not None:
            self._heartbeat.cancel()
            self._heartbeat = None

    async def handle_heartbeat(self) -> None:
        # Re-arm before sending so a failed send does not stop the heartbeats.
        self.arm_heartbeat()
        if self._player_id is not None:
            await self.send(HeartBeatRequest(receiving_player_id=self._player_id))

    async def handle_frame(self, raw: str) -> None:
        try:
            message = decode_inbound(raw)
        except DecodeError as exc:
            self.log.error("Dropping undecodable message: %s", exc)
            return
        self.log.debug("Received message: %r", message)
        self.player.on_message(message)
        if isinstance(message, UnrecognizedMessage):
            self.log.warning("Dropping message of unrecognized type %s", message.type)
            return
        handler = self._handlers.get(type(message))
        if handler is not None:
            await handler(message)

    async def _open(self) -> None:
        self.log.info("WebSocket opened")
        await self.send(build_client_info())
        await self.send(RegisterPlayer(player_name=self.config.display_name))
        self.state = ConnectionState.REGISTERING

    async def _read_frames(self, transport: Transport) -> None:
        assert self._events is not None
        try:
            while True:
                frame = await transport.recv()
                if isinstance(frame, bytes):
                    frame = frame.decode("utf-8", errors="replace")
                self._events.put_nowait(Event(EventKind.FRAME, frame))
        except ConnectionClosedOK as exc:
            self.log.info("WebSocket closed: %s", exc)
        except ConnectionClosed as exc:
            self._receive_error = exc
            self.log.error("WebSocket closed abnormally: %s", exc)
        except (OSError, WebSocketException) as exc:
            self._receive_error = exc
            self.log.exception("WebSocket receive failed")
        finally:
            self._events.put_nowait(CLOSED_EVENT)

    async def _consume(self) -> None:
        assert self._events is not None
        while True:
            event = await self._events.get()
            if event.kind is EventKind.CLOSED:
                return
            if self.state in (ConnectionState.CLOSING, ConnectionState.CLOSED):
                continue
            try:
                if event.kind is EventKind.HEARTBEAT:
                    await self.handle_heartbeat()
                else:
                    await self.handle_frame(event.data or "")
            except TransportError as exc:
                self.send_failures.append(exc)
                self.log.error("%s", exc)

    def _heartbeat_due(self) -> None:
        self._heartbeat = None
        if self._events is not None:
            self._events.put_nowait(HEARTBEAT_EVENT)

    def _shutdown(self) -> None:
        self.cancel_heartbeat()
        self.state = ConnectionState.CLOSED

    async def _on_player_registered(self, message: PlayerRegistered) -> None:
        self.log.info("Successfully registered player %s", message.name)
        self._player_id = message.receiving_player_id
        self.state = ConnectionState.ACTIVE
        try:
            if self.config.is_training:
                await self.send(StartGame())
        finally:
            self.arm_heartbeat()

    async def _on_invalid_player_name(self, message: InvalidPlayerName) -> None:
        self.log.info("Player name invalid (reason code %s)", message.reason_code)

    async def _on_game_starting(self, message: GameStarting) -> None:
        self.log.info("All snakes are ready to rock. Game is starting.")

    async def _on_game_link(self, message: GameLink) -> None:
        self.log.info("Watch game at: %s", message.url)

    async def _on_map_update(self, message: MapUpdate) -> None:
        self.log.debug("Game map updated, tick: %s", message.game_tick)
        direction = self.player.get_next_move(message.map, message.receiving_player_id)
        await self.send(
            RegisterMove(
                direction=direction,
                game_tick=message.game_tick,
                game_id=message.game_id,
                receiving_player_id=message.receiving_player_id,
            )
        )

    async def _on_snake_dead(self, message: SnakeDead) -> None:
        self.log.debug("The snake died, the reason was: %s", message.death_reason)

    async def _on_game_result(self, message: GameResult) -> None:
        self.log.info("Result for %s: %s points", message.name, message.points)

    async def _on_game_ended(self, message: GameEnded) -> None:
        self.log.info("Game ended, the winner is: %s", message.player_winner_id)
        if self.config.is_training:
            await self.close()

    async def _on_tournament_ended(self, message: TournamentEnded) -> None:
        self.log.info("Tournament ended, the winner is: %s", message.player_winner_id)
        await self.close()

    async def _on_heartbeat_response(self, message: HeartBeatResponse) -> None:
        return None
