from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from websockets.exceptions import WebSocketException

from snakeclient.client.connection import SnakeClient, TransportError
from snakeclient.common.config import Config, Venue, settings
from snakeclient.player.greedy import GreedyPlayer

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snakeclient",
        description="Play on a snake game server with the greedy reference snake.",
    )
    parser.add_argument("-H", "--host", default=settings.host, help="The host to connect to")
    parser.add_argument("-p", "--port", type=int, default=settings.port, help="The port to connect to")
    parser.add_argument(
        "-v",
        "--venue",
        default=settings.venue,
        choices=[v.value for v in Venue],
        help="The venue (tournament or training)",
    )
    parser.add_argument("-n", "--snake-name", default=settings.snake_name, help="The name of the snake")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level (default: %(default)s)")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return Config(
        host=args.host,
        port=args.port,
        venue=Venue.parse(args.venue),
        display_name=args.snake_name,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = config_from_args(args)
    client = SnakeClient(config, GreedyPlayer())
    try:
        asyncio.run(client.run())
    except (TransportError, OSError, WebSocketException):
        logger.exception("Session with %s failed", config.url)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
