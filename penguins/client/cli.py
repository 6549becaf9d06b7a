"""Command line entry point: connect to the game server and play one game."""

import argparse
import logging
import sys
from functools import partial
from typing import Optional, Sequence

from penguins.client.config import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    EXECUTABLE_NAME,
    VERSION,
    ClientConfig,
)
from penguins.client.transport import SocketTransport
from penguins.core.exceptions import InvalidConfigError, PenguinsError
from penguins.logic.strategies import DEFAULT_STRATEGY, STRATEGIES, create_logic
from penguins.protocol.handler import GameHandler

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    # -h is taken by --host, so help is only available as --help
    parser = argparse.ArgumentParser(
        prog=EXECUTABLE_NAME, description=__doc__, add_help=False
    )
    parser.add_argument(
        "-h",
        "--host",
        default=DEFAULT_HOST,
        help=f"IP address or name of the host to connect to (default: {DEFAULT_HOST})",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"port used for the connection (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "-r", "--reservation", default=None, help="reservation code to join a prepared game"
    )
    parser.add_argument(
        "-s",
        "--strategy",
        default=DEFAULT_STRATEGY,
        help=f"strategy used for the game, one of: {', '.join(STRATEGIES)}",
    )
    parser.add_argument(
        "-t", "--timeout", type=float, default=None, help="read timeout in seconds"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log the raw protocol traffic"
    )
    parser.add_argument("--help", action="help", help="print this help message")
    parser.add_argument(
        "--version",
        action="version",
        version=f"{EXECUTABLE_NAME} version {VERSION}",
        help="print the version number",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ClientConfig(
            host=args.host,
            port=args.port,
            reservation=args.reservation,
            strategy=args.strategy,
            timeout=args.timeout,
        )
    except InvalidConfigError as exc:
        parser.error(str(exc))

    with SocketTransport(timeout=config.timeout) as transport:
        if not transport.connect(config.host, config.port):
            return 1

        handler = GameHandler(
            transport,
            partial(create_logic, config.strategy),
            reservation=config.reservation,
        )
        try:
            handler.handle_game()
        except PenguinsError as exc:
            logger.error("%s", exc)
            return 1

    logger.info("Terminating the client!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
