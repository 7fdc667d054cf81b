"""A small threaded HTTP server that answers every request with a fixed page."""

from __future__ import annotations

import contextlib
import functools
import socket
import sys
import threading
import time

from .parser import HttpRequest, parse_request
from .threads import ThreadPool

NOT_FOUND_RESPONSE = "HTTP/1.1 404 NOT FOUND\r\nConnection: close\r\n\r\n"
BAD_REQUEST_RESPONSE = "HTTP/1.1 400 BAD REQUEST\r\nConnection: close\r\n\r\n"
READ_TIMEOUT = 0.5
DEFAULT_WORKERS = 4
_POLL_INTERVAL = 0.01

_shutdown = threading.Event()


def request_shutdown() -> None:
    """Ask every running server and connection handler to stop."""
    _shutdown.set()


def reset_shutdown() -> None:
    """Clear a previous shutdown request."""
    _shutdown.clear()


def build_response(request: HttpRequest, keep_alive: bool) -> bytes:
    """Build the wire bytes of the reply to ``request``."""
    connection = "keep-alive" if keep_alive else "close"
    if request.path == "/favicon.ico":
        text = f"{NOT_FOUND_RESPONSE}\r\nConnection: {connection}\r\n\r\n"
    else:
        html = (
            "<html><head><title>jwhttp</title></head><body>"
            f"jwhttp's {request.method} response to {request.path}</body></html>"
        )
        text = (
            "HTTP/1.1 200 OK\r\n"
            "Content-Type: text/html; charset=UTF-8\r\n"
            f"Connection: {connection}\r\n"
            f"Content-Length: {len(html.encode())}\r\n"
            f"\r\n{html}\r\n\r\n"
        )
    return text.encode()


def _parse_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host or not port.isdigit() or int(port) > 65535:
        raise ValueError(f"invalid socket address: {address!r}")
    return host.strip("[]"), int(port)


class _LineReader:
    """Yields decoded lines from a socket, keeping unread bytes between requests."""

    def __init__(self, conn: socket.socket) -> None:
        self._conn = conn
        self._buffer = bytearray()
        self._eof = False

    def __iter__(self) -> _LineReader:
        return self

    def __next__(self) -> str:
        while True:
            end = self._buffer.find(b"\n")
            if end >= 0:
                raw = bytes(self._buffer[:end])
                del self._buffer[: end + 1]
                if raw.endswith(b"\r"):
                    raw = raw[:-1]
                return raw.decode("utf-8")
            if self._eof:
                if not self._buffer:
                    raise StopIteration
                raw = bytes(self._buffer)
                self._buffer.clear()
                return raw.decode("utf-8")
            chunk = self._conn.recv(4096)
            if chunk:
                self._buffer += chunk
            else:
                self._eof = True


def _read_head(reader: _LineReader) -> tuple[list[str], bool]:
    """Read header lines up to a blank line; report whether reading failed."""
    lines: list[str] = []
    try:
        for line in reader:
            if not line:
                break
            lines.append(line)
    except TimeoutError:
        return lines, False
    except (ConnectionAbortedError, BrokenPipeError):
        return lines, True
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Warning: Error reading request: {exc}", file=sys.stderr)
        return lines, True
    return lines, False


def _log(request: HttpRequest) -> None:
    elapsed_ms = (time.monotonic() - request.started) * 1000
    print("----------------------------------------------")
    print(f"{request.host} {request.method} {request.path} - 200 {elapsed_ms:.3f}ms")
    print(f"{request.version} {request.connection}")
    print(f"headers: {list(request.headers)}")
    print(f"params: {request.params}")
    print(f"accepts: {request.accept}")


class Server:
    """Listens on ``host:port`` and serves connections on a thread pool."""

    def __init__(self, address: str, workers: int = DEFAULT_WORKERS) -> None:
        host, port = _parse_address(address)
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        self.listener = socket.create_server((host, port), family=family)
        self.pool = ThreadPool(workers)
        self._closed = False
        print(f"Server started on http://{address}/")

    @property
    def address(self) -> tuple[str, int]:
        host, port = self.listener.getsockname()[:2]
        return host, port

    def listen(self) -> None:
        """Accept connections until a shutdown is requested."""
        self.listener.setblocking(False)
        while True:
            if _shutdown.is_set():
                print("Received shutdown signal, stopping server...")
                break
            try:
                conn, _ = self.listener.accept()
            except BlockingIOError:
                time.sleep(_POLL_INTERVAL)
                continue
            self.pool.execute(functools.partial(self._serve, conn))

    def _serve(self, conn: socket.socket) -> None:
        conn.setblocking(True)
        self.handle_client(conn)

    def handle_client(self, conn: socket.socket) -> None:
        """Serve requests on ``conn`` until it closes; the socket is closed after."""
        with conn:
            conn.settimeout(READ_TIMEOUT)
            reader = _LineReader(conn)
            while not _shutdown.is_set():
                lines, read_failed = _read_head(reader)
                request = parse_request(lines)

                if _shutdown.is_set():
                    return
                if read_failed or request.bad_request:
                    with contextlib.suppress(OSError):
                        conn.sendall(BAD_REQUEST_RESPONSE.encode())
                    return
                if not request.method:
                    return

                keep_alive = (
                    "keep-alive" in request.connection.lower() and not _shutdown.is_set()
                )
                try:
                    conn.sendall(build_response(request, keep_alive))
                except (ConnectionAbortedError, BrokenPipeError):
                    return
                except OSError as exc:
                    print(f"Warning: Failed to send response: {exc}", file=sys.stderr)
                    return

                _log(request)
                if not keep_alive:
                    return

    def close(self) -> None:
        """Wait for the workers to finish and release the listening socket."""
        if self._closed:
            return
        self._closed = True
        print("Server shutting down gracefully...")
        self.listener.close()
        self.pool.shutdown()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()