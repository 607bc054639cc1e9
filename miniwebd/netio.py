"""Socket setup and line reading helpers shared by the server and the client."""

from __future__ import annotations

import socket
from typing import BinaryIO

MAXLINE = 8192
LISTEN_BACKLOG = 1024


def readline(rfile: BinaryIO, maxlen: int = MAXLINE) -> bytes:
    """Read one line of at most ``maxlen - 1`` bytes, newline included.

    Returns ``b""`` at end of input.
    """
    if maxlen < 1:
        raise ValueError(f"maxlen must be at least 1, got {maxlen}")
    return rfile.readline(maxlen - 1)


def open_client(hostname: str, port: int) -> socket.socket:
    """Resolve ``hostname`` over IPv4 and return a connected TCP socket."""
    address = socket.gethostbyname(hostname)
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.connect((address, port))
    except OSError:
        sock.close()
        raise
    return sock


def open_listen(port: int) -> socket.socket:
    """Return a TCP socket listening on ``port`` on every local IPv4 address."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        # Avoid "address already in use" when restarting quickly.
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(("", port))
        sock.listen(LISTEN_BACKLOG)
    except OSError:
        sock.close()
        raise
    return sock