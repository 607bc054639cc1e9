"""A CGI program that deliberately takes its time, for exercising the server."""

from __future__ import annotations

import os
import re
import sys
import time

DEFAULT_SECONDS = 4.0

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def spin(seconds: float) -> float:
    """Sleep in one-second steps until ``seconds`` have passed; return the time taken."""
    start = time.monotonic()
    while time.monotonic() - start < seconds:
        time.sleep(1)
    return time.monotonic() - start


def render_body(query: str | None, elapsed: float) -> str:
    """Build the HTML body reporting the query string and the time spent."""
    shown = "" if query is None else query
    return (
        f"<p>Welcome to the CGI program ({shown})</p>\r\n"
        "<p>My only purpose is to waste time on the server!</p>\r\n"
        f"<p>I spun for {elapsed:.2f} seconds</p>\r\n"
    )


def main(argv: list[str] | None = None) -> int:
    """Spin for ``QUERY_STRING`` seconds (default 4) and write a CGI response."""
    query = os.environ.get("QUERY_STRING")
    seconds = float(_atoi(query)) if query is not None else DEFAULT_SECONDS
    elapsed = spin(seconds)
    content = render_body(query, elapsed)
    length = len(content.encode("utf-8"))
    sys.stdout.write(f"Content-Length: {length}\r\n")
    sys.stdout.write("Content-Type: text/html\r\n\r\n")
    sys.stdout.write(content)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())