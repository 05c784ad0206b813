"""
Thin socket wrapper: one message per line.

The referee and the move servers only ever talk to a `Connection`. Tests swap in scripted in-memory versions.
"""

import logging
import socket
from typing import Iterator, Optional, Protocol

from src.core.exceptions import TransportError

logger = logging.getLogger(__name__)

ENCODING = "utf-8"


class Connection(Protocol):
    """What the sessions need from a connection"""

    peer: str

    def send(self, line: str) -> None:
        """Send a single line. Raises TransportError when the connection is gone."""
        ...

    def receive(self) -> Optional[str]:
        """Next line without the line ending. None when the other side closed the connection."""
        ...

    def close(self) -> None: ...


class LineConnection:
    """Line framing on top of a connected socket"""

    def __init__(self, sock: socket.socket, peer: str = "") -> None:
        self.sock = sock
        self.peer = peer or _describe_peer(sock)
        self._reader = sock.makefile("r", encoding=ENCODING, newline="\n")
        self._closed = False

    def __repr__(self) -> str:
        return f"LineConnection({self.peer})"

    def set_timeout(self, seconds: Optional[float]) -> None:
        self.sock.settimeout(seconds)

    def send(self, line: str) -> None:
        if self._closed:
            raise TransportError(f"Connection to {self.peer} is closed.")
        try:
            self.sock.sendall(f"{line}\n".encode(ENCODING))
        except OSError as e:
            raise TransportError(f"Could not send to {self.peer}: {e}") from e
        logger.debug("sent to %s: %s", self.peer, line)

    def receive(self) -> Optional[str]:
        if self._closed:
            return None
        try:
            line = self._reader.readline()
        except TimeoutError as e:
            raise TransportError(f"Timed out waiting for {self.peer}.") from e
        except (OSError, UnicodeDecodeError) as e:
            raise TransportError(f"Could not read from {self.peer}: {e}") from e

        if not line:
            return None
        line = line.rstrip("\r\n")
        logger.debug("received from %s: %s", self.peer, line)
        return line

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._reader.close()
            self.sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            # the other side might have hung up already
            pass
        finally:
            self.sock.close()


def connect(host: str, port: int, timeout: Optional[float] = None) -> LineConnection:
    """Open a connection to a listening move server."""
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        raise TransportError(f"Could not connect to {host}:{port}: {e}") from e
    sock.settimeout(None)
    return LineConnection(sock, peer=f"{host}:{port}")


def listen(host: str, port: int) -> socket.socket:
    """Listening socket for a move server. Failing here is fatal for the caller."""
    try:
        server = socket.create_server((host, port), reuse_port=False)
    except OSError as e:
        raise TransportError(f"Could not listen on {host}:{port}: {e}") from e
    return server


def accept_connections(server: socket.socket) -> Iterator[LineConnection]:
    """Accept loop: hand out one connection at a time, the next one only once the caller asks for it."""
    while True:
        try:
            sock, address = server.accept()
        except OSError as e:
            raise TransportError(f"Could not accept connections: {e}") from e
        yield LineConnection(sock, peer=f"{address[0]}:{address[1]}")


def _describe_peer(sock: socket.socket) -> str:
    try:
        host, port, *_ = sock.getpeername()
        return f"{host}:{port}"
    except (OSError, ValueError, TypeError):
        return "unknown peer"
