"""TCP connection to the game server"""

import logging
import socket
from typing import Optional, Self

from penguins.core.exceptions import TransportError

logger = logging.getLogger(__name__)

RECEIVE_BUFFER_SIZE = 4096


class SocketTransport:
    """Blocking TCP socket. Messages go out UTF-8 encoded, received chunks are handed over as raw bytes."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        self._socket: Optional[socket.socket] = None

    def connect(self, host: str, port: int) -> bool:
        """Returns False if the server cannot be reached"""
        try:
            self._socket = socket.create_connection((host, port), timeout=self.timeout)
        except OSError as exc:
            logger.error("Could not connect to %s:%d: %s", host, port, exc)
            return False
        logger.info("Connected to the game server at %s:%d", host, port)
        return True

    def send(self, message: str) -> None:
        connection = self._connection()
        logger.debug(">> %s", message)
        try:
            connection.sendall(message.encode("utf-8"))
        except OSError as exc:
            raise TransportError(f"Sending to the game server failed: {exc}") from exc

    def receive(self) -> bytes:
        """Block until the next chunk arrives"""
        connection = self._connection()
        try:
            data = connection.recv(RECEIVE_BUFFER_SIZE)
        except OSError as exc:
            raise TransportError(f"Receiving from the game server failed: {exc}") from exc
        if not data:
            raise TransportError("The game server closed the connection.")
        logger.debug("<< %s", data.decode("utf-8", errors="replace"))
        return data

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _connection(self) -> socket.socket:
        if self._socket is None:
            raise TransportError("Not connected to the game server.")
        return self._socket
