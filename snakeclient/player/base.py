from __future__ import annotations

from abc import ABC, abstractmethod

from snakeclient.api.messages import InboundMessage
from snakeclient.api.models import Map
from snakeclient.common.types import Direction


class Player(ABC):
    """Decision logic plugged into the connection engine."""

    @abstractmethod
    def get_next_move(self, game_map: Map, player_id: str) -> Direction:
        """Pick the move for this tick.

        Called once per map update. The server enforces the tick budget, so
        a slow answer risks the snake being timed out.
        """
        raise NotImplementedError

    def on_message(self, message: InboundMessage) -> None:
        """Observe every decoded message before the engine handles it.

        Unrecognized kinds are passed here too, then dropped by the engine.
        """
        return None
