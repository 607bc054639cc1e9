import io
import os
import socket

import pytest

from miniwebd.request import (
    get_filetype,
    handle,
    parse_uri,
    read_headers,
    send_error,
    serve_static,
)


def _split_response(data: bytes):
    head, _, body = data.partition(b"\r\n\r\n")
    lines = head.split(b"\r\n")
    headers = {}
    for line in lines[1:]:
        name, _, value = line.partition(b": ")
        headers[name] = value
    return lines[0], headers, body


def _exchange(request: bytes) -> bytes:
    server, client = socket.socketpair()
    with server, client:
        client.sendall(request)
        handle(server)
        server.shutdown(socket.SHUT_WR)
        chunks = []
        while True:
            chunk = client.recv(65536)
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks)


@pytest.mark.parametrize(
    "uri, expected",
    [
        ("/", (True, "./index.html", "")),
        ("/docs/", (True, "./docs/index.html", "")),
        ("/page.html", (True, "./page.html", "")),
        ("/spin.cgi?5", (False, "./spin.cgi", "5")),
        ("/spin.cgi", (False, "./spin.cgi", "")),
        ("/cgi-bin/run?a=1?b=2", (False, "./cgi-bin/run", "a=1?b=2")),
    ],
)
def test_parse_uri(uri, expected):
    assert tuple(parse_uri(uri)) == expected


def test_parse_uri_fields_are_named():
    parsed = parse_uri("/spin.cgi?3")
    assert parsed.is_static is False
    assert parsed.filename == "./spin.cgi"
    assert parsed.cgiargs == "3"


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("./a.html", "text/html"),
        ("./a.gif", "image/gif"),
        ("./a.jpg", "image/jpeg"),
        ("./a.txt", "text/plain"),
        ("./a.html.gif", "text/html"),
    ],
)
def test_get_filetype(filename, expected):
    assert get_filetype(filename) == expected


def test_send_error_format():
    wfile = io.BytesIO()
    send_error(wfile, "./missing", "404", "Not found", "server could not find this file")
    status, headers, body = _split_response(wfile.getvalue())
    assert status == b"HTTP/1.0 404 Not found"
    assert headers[b"Content-Type"] == b"text/html"
    assert int(headers[b"Content-Length"]) == len(body)
    assert b"<h2>404: Not found</h2>" in body
    assert b"<p>server could not find this file: ./missing</p>" in body
    assert body.startswith(b"<!doctype html>\r\n")


def test_read_headers_stops_at_blank_line():
    rfile = io.BytesIO(b"Host: a\r\nAccept: */*\r\n\r\nBODY")
    read_headers(rfile)
    assert rfile.read() == b"BODY"


def test_read_headers_stops_at_eof():
    rfile = io.BytesIO(b"Host: a\r\n")
    read_headers(rfile)
    assert rfile.read() == b""


def test_serve_static(tmp_path):
    path = tmp_path / "page.html"
    content = b"<p>hi</p>"
    path.write_bytes(content)
    wfile = io.BytesIO()
    serve_static(wfile, str(path), len(content))
    status, headers, body = _split_response(wfile.getvalue())
    assert status == b"HTTP/1.0 200 OK"
    assert headers[b"Server"] == b"OSTEP WebServer"
    assert headers[b"Content-Type"] == b"text/html"
    assert int(headers[b"Content-Length"]) == len(content)
    assert body == content


def test_handle_static_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = b"plain text body"
    (tmp_path / "notes.txt").write_bytes(content)
    response = _exchange(b"GET /notes.txt HTTP/1.0\r\nHost: x\r\n\r\n")
    status, headers, body = _split_response(response)
    assert status == b"HTTP/1.0 200 OK"
    assert headers[b"Content-Type"] == b"text/plain"
    assert body == content


def test_handle_directory_index(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "index.html").write_bytes(b"<h1>home</h1>")
    status, headers, body = _split_response(_exchange(b"GET / HTTP/1.0\r\n\r\n"))
    assert status == b"HTTP/1.0 200 OK"
    assert headers[b"Content-Type"] == b"text/html"
    assert body == b"<h1>home</h1>"


def test_handle_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    status, headers, body = _split_response(_exchange(b"GET /nope.html HTTP/1.0\r\n\r\n"))
    assert status == b"HTTP/1.0 404 Not found"
    assert b"./nope.html" in body
    assert int(headers[b"Content-Length"]) == len(body)


def test_handle_unsupported_method(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    status, _, body = _split_response(_exchange(b"POST /x HTTP/1.0\r\n\r\n"))
    assert status == b"HTTP/1.0 501 Not Implemented"
    assert b"server does not implement this method: POST" in body
    assert "method:POST uri:/x version:HTTP/1.0" in capsys.readouterr().out


def test_handle_method_is_case_insensitive(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "a.txt").write_bytes(b"ok")
    status, _, body = _split_response(_exchange(b"get /a.txt HTTP/1.0\r\n\r\n"))
    assert status == b"HTTP/1.0 200 OK"
    assert body == b"ok"


def test_handle_unreadable_file_is_forbidden(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "secret.txt"
    path.write_bytes(b"hidden")
    os.chmod(path, 0o200)
    try:
        status, _, body = _split_response(_exchange(b"GET /secret.txt HTTP/1.0\r\n\r\n"))
    finally:
        os.chmod(path, 0o600)
    assert status == b"HTTP/1.0 403 Forbidden"
    assert b"server could not read this file" in body


def test_handle_directory_is_forbidden(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "sub").mkdir()
    status, _, _ = _split_response(_exchange(b"GET /sub HTTP/1.0\r\n\r\n"))
    assert status == b"HTTP/1.0 403 Forbidden"


def test_handle_runs_cgi_program(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = tmp_path / "echo.cgi"
    script.write_text(
        "#!/bin/sh\n"
        "printf 'Content-Type: text/plain\\r\\n\\r\\nargs=%s' \"$QUERY_STRING\"\n"
    )
    os.chmod(script, 0o755)
    response = _exchange(b"GET /echo.cgi?7 HTTP/1.0\r\n\r\n")
    assert response.startswith(b"HTTP/1.0 200 OK\r\nServer: OSTEP WebServer\r\n")
    assert response.endswith(b"\r\n\r\nargs=7")


def test_handle_non_executable_cgi_is_forbidden(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = tmp_path / "plain.cgi"
    script.write_text("#!/bin/sh\necho hi\n")
    os.chmod(script, 0o644)
    status, _, body = _split_response(_exchange(b"GET /plain.cgi HTTP/1.0\r\n\r\n"))
    assert status == b"HTTP/1.0 403 Forbidden"
    assert b"server could not run this CGI program" in body