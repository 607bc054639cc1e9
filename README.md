# miniwebd

A small HTTP/1.0 web server that serves static files and runs CGI programs.
The main thread accepts connections and puts them in a bounded buffer; a
fixed pool of worker threads takes them out and answers them. It comes with a
minimal command-line client and a CGI program that spins for a while, useful
for seeing the thread pool at work.

## Install

    pip install .

For the tests:

    pip install .[test]
    pytest

## Running the server

    miniwebd [-d basedir] [-p port] [-t threads] [-b buffer-capacity]

- `-d` directory to serve from (default: the current directory)
- `-p` port to listen on (default: 10000)
- `-t` number of worker threads (default: 1)
- `-b` capacity of the connection buffer (default: 1)

Numeric option values are read from their leading digits; text that is not a
number counts as 0. An unknown option prints the usage line and exits with
status 1. The server changes into the base directory, listens on every local
IPv4 address and runs until interrupted with Ctrl-C.

Each worker waits three seconds before handling a connection, so concurrency
is easy to observe. When the buffer is full, accepting new connections waits
until a worker takes one out.

### What is served

Only `GET` is answered (the method is matched without regard to case); any
other method gets `501 Not Implemented`. Request headers are read and ignored.

- A URI that does not contain `cgi` is a static file relative to the base
  directory. A trailing `/` serves `index.html`. The content type is chosen by
  what the filename contains: `.html` → `text/html`, `.gif` → `image/gif`,
  `.jpg` → `image/jpeg`, anything else → `text/plain`.
- A URI that contains `cgi` names an executable. The part after `?` is passed
  to it in the `QUERY_STRING` environment variable. The server writes only
  `HTTP/1.0 200 OK` and a `Server` header; the program's standard output goes
  straight to the client and must finish the header itself.

A missing file gives `404 Not found`. A file that is not a regular file, or
is not readable by its owner (static) or executable by its owner (CGI), gives
`403 Forbidden`. Each request line is printed to standard output as
`method:... uri:... version:...`.

## The client

    miniwebd-client <host> <port> <filename>

Connects over IPv4, sends one `GET` request with this machine's host name in
the `host` header, and prints each response header line prefixed with
`Header: `, followed by the body. With the wrong number of arguments it prints
a usage line and exits with status 1.

## The spin CGI program

    miniwebd-spin

Reads a whole number of seconds from `QUERY_STRING` (4 if the variable is not
set, 0 if it holds no number), sleeps in one-second steps until that much time
has passed, and writes `Content-Length` and `Content-Type` headers followed by
a small HTML body that repeats the query string and reports how long it spun.
To exercise the server with slow requests, put an executable wrapper that runs
it under a path containing `cgi` in the served directory.

## Library use

- `miniwebd.pool.BoundedBuffer(capacity)` – a thread-safe FIFO of fixed
  capacity: `put` blocks while full, `get` blocks while empty; `is_full()`,
  `is_empty()` and `len()` report its state.
- `miniwebd.request` – `parse_uri(uri)` returns a `ParsedUri(is_static,
  filename, cgiargs)`; `get_filetype`, `send_error`, `read_headers`,
  `serve_static`, `serve_dynamic` and `handle(conn)` answer a request on a
  connected socket.
- `miniwebd.server` – `parse_args(argv)` for the command-line options and
  `worker(buffer, delay=3.0)`, which serves sockets taken from a
  `BoundedBuffer` until it gets `None`.
- `miniwebd.client` – `send_request(sock, filename, hostname=None)` and
  `print_response(rfile, out=None)`.
- `miniwebd.netio` – `open_listen(port)`, `open_client(hostname, port)` and
  `readline(rfile, maxlen)`.

## What it does not do

The server speaks HTTP/1.0 only: one request per connection, no keep-alive,
no methods besides `GET`, no request bodies, no IPv6 and no TLS. It does not
decode percent-escapes in URIs or guard against paths that leave the base
directory.