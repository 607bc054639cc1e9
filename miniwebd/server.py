"""A thread-pool HTTP server: the main thread accepts, workers serve requests."""

from __future__ import annotations

import getopt
import os
import re
import sys
import threading
import time
from typing import NamedTuple

from miniwebd import request
from miniwebd.netio import open_listen
from miniwebd.pool import BoundedBuffer

USAGE = "usage: wserver [-d basedir] [-p port] [-t # threads] [-b buffers-capacity]"
REQUEST_DELAY = 3.0

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


class _Options(NamedTuple):
    root_dir: str = "."
    port: int = 10000
    threads: int = 1
    buffer_capacity: int = 1


def parse_args(argv: list[str]) -> _Options:
    """Parse ``-d basedir -p port -t threads -b capacity``; exit with status 1 on bad options."""
    try:
        opts, _ = getopt.getopt(argv, "d:p:t:b:")
    except getopt.GetoptError:
        print(USAGE, file=sys.stderr)
        raise SystemExit(1) from None
    options = _Options()
    for flag, value in opts:
        if flag == "-d":
            options = options._replace(root_dir=value)
        elif flag == "-p":
            options = options._replace(port=_atoi(value))
        elif flag == "-t":
            options = options._replace(threads=_atoi(value))
        elif flag == "-b":
            options = options._replace(buffer_capacity=_atoi(value))
    return options


def worker(buffer: BoundedBuffer, delay: float = REQUEST_DELAY) -> None:
    """Serve connections taken from ``buffer`` until a ``None`` item arrives.

    Each request is held back by ``delay`` seconds before it is handled.
    """
    while True:
        conn = buffer.get()
        if conn is None:
            return
        with conn:
            if delay > 0:
                time.sleep(delay)
            try:
                request.handle(conn)
            except OSError as exc:
                print(f"request failed: {exc}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Start the server and accept connections until interrupted."""
    if argv is None:
        argv = sys.argv[1:]
    options = parse_args(argv)
    os.chdir(options.root_dir)

    with open_listen(options.port) as listener:
        buffer = BoundedBuffer(options.buffer_capacity)
        for _ in range(options.threads):
            threading.Thread(target=worker, args=(buffer,), daemon=True).start()
        try:
            while True:
                conn, _ = listener.accept()
                buffer.put(conn)
        except KeyboardInterrupt:
            return 0


if __name__ == "__main__":
    sys.exit(main())