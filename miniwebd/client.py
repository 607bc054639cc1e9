"""A minimal HTTP client: send one GET request and print the response."""

from __future__ import annotations

import re
import socket
import sys
from typing import BinaryIO, TextIO

from miniwebd.netio import MAXLINE, open_client, readline

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _decode(line: bytes) -> str:
    return line.decode("utf-8", "replace")


def send_request(sock: socket.socket, filename: str, hostname: str | None = None) -> None:
    """Send a GET request for ``filename``; the host header defaults to this machine's name."""
    if hostname is None:
        hostname = socket.gethostname()
    request = f"GET {filename} HTTP/1.1\nhost: {hostname}\n\r\n"
    sock.sendall(request.encode("utf-8"))


def print_response(rfile: BinaryIO, out: TextIO | None = None) -> None:
    """Print each header line prefixed with ``Header:``, then the body as is."""
    if out is None:
        out = sys.stdout
    while True:
        line = readline(rfile, MAXLINE)
        if not line or line == b"\r\n":
            break
        out.write(f"Header: {_decode(line)}")
    while True:
        line = readline(rfile, MAXLINE)
        if not line:
            break
        out.write(_decode(line))
    out.flush()


def main(argv: list[str] | None = None) -> int:
    """Usage: client <host> <port> <filename>."""
    if argv is None:
        argv = sys.argv[1:]
    if len(argv) != 3:
        print("Usage: client <host> <port> <filename>", file=sys.stderr)
        return 1
    host, port_text, filename = argv
    with open_client(host, _atoi(port_text)) as sock:
        send_request(sock, filename)
        with sock.makefile("rb") as rfile:
            print_response(rfile)
    return 0


if __name__ == "__main__":
    sys.exit(main())