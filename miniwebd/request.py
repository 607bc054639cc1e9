"""Handling of a single HTTP/1.0 request: static files and CGI programs."""

from __future__ import annotations

import os
import socket
import stat
import subprocess
from typing import BinaryIO, NamedTuple

from miniwebd.netio import readline

MAXBUF = 8192
SERVER_NAME = "OSTEP WebServer"

_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class ParsedUri(NamedTuple):
    is_static: bool
    filename: str
    cgiargs: str


def _encode(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def send_error(wfile: BinaryIO, cause: str, errnum: str, shortmsg: str, longmsg: str) -> None:
    """Write a complete HTML error response."""
    body = _encode(
        "<!doctype html>\r\n"
        "<head>\r\n"
        f"  <title>{SERVER_NAME} Error</title>\r\n"
        "</head>\r\n"
        "<body>\r\n"
        f"  <h2>{errnum}: {shortmsg}</h2>\r\n"
        f"  <p>{longmsg}: {cause}</p>\r\n"
        "</body>\r\n"
        "</html>\r\n"
    )
    header = _encode(
        f"HTTP/1.0 {errnum} {shortmsg}\r\n"
        "Content-Type: text/html\r\n"
        f"Content-Length: {len(body)}\r\n\r\n"
    )
    wfile.write(header)
    wfile.write(body)


def read_headers(rfile: BinaryIO) -> None:
    """Read and discard header lines up to the blank line (or end of input)."""
    while True:
        line = readline(rfile, MAXBUF)
        if not line or line == b"\r\n":
            return


def parse_uri(uri: str) -> ParsedUri:
    """Split a request URI into a local filename and CGI arguments.

    URIs containing ``cgi`` are dynamic; everything else is served as a file.
    """
    if "cgi" not in uri:
        filename = f".{uri}"
        if uri.endswith("/"):
            filename += "index.html"
        return ParsedUri(True, filename, "")
    path, _, cgiargs = uri.partition("?")
    return ParsedUri(False, f".{path}", cgiargs)


def get_filetype(filename: str) -> str:
    """Guess a content type from the filename."""
    if ".html" in filename:
        return "text/html"
    if ".gif" in filename:
        return "image/gif"
    if ".jpg" in filename:
        return "image/jpeg"
    return "text/plain"


def serve_dynamic(conn: socket.socket, filename: str, cgiargs: str) -> None:
    """Run a CGI program with its output going straight to the connection.

    Only the status line and server header are written here; the program
    must finish the header itself.
    """
    conn.sendall(_encode(f"HTTP/1.0 200 OK\r\nServer: {SERVER_NAME}\r\n"))
    env = dict(os.environ, QUERY_STRING=cgiargs)
    subprocess.run([filename], stdout=conn.fileno(), env=env, check=False)


def serve_static(wfile: BinaryIO, filename: str, filesize: int) -> None:
    """Write a 200 response carrying the first ``filesize`` bytes of a file."""
    filetype = get_filetype(filename)
    with open(filename, "rb") as src:
        content = src.read(filesize)
    header = _encode(
        "HTTP/1.0 200 OK\r\n"
        f"Server: {SERVER_NAME}\r\n"
        f"Content-Length: {filesize}\r\n"
        f"Content-Type: {filetype}\r\n\r\n"
    )
    wfile.write(header)
    wfile.write(content)


def handle(conn: socket.socket) -> None:
    """Read one request from ``conn`` and write the response to it."""
    with conn.makefile("rb") as rfile, conn.makefile("wb") as wfile:
        request_line = readline(rfile, MAXBUF).decode(_ENCODING, _ERRORS)
        method, uri, version = (request_line.split() + ["", "", ""])[:3]
        print(f"method:{method} uri:{uri} version:{version}")

        if method.upper() != "GET":
            send_error(wfile, method, "501", "Not Implemented",
                       "server does not implement this method")
            return
        read_headers(rfile)

        is_static, filename, cgiargs = parse_uri(uri)
        try:
            info = os.stat(filename)
        except OSError:
            send_error(wfile, filename, "404", "Not found",
                       "server could not find this file")
            return

        regular = stat.S_ISREG(info.st_mode)
        if is_static:
            if not regular or not info.st_mode & stat.S_IRUSR:
                send_error(wfile, filename, "403", "Forbidden",
                           "server could not read this file")
                return
            serve_static(wfile, filename, info.st_size)
        else:
            if not regular or not info.st_mode & stat.S_IXUSR:
                send_error(wfile, filename, "403", "Forbidden",
                           "server could not run this CGI program")
                return
            wfile.flush()
            serve_dynamic(conn, filename, cgiargs)