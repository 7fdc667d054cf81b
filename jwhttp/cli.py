"""Command-line entry point that runs the server until interrupted."""

from __future__ import annotations

import argparse
import contextlib
import signal
import sys
import threading
from collections.abc import Iterator, Sequence

from .server import Server, request_shutdown

DEFAULT_ADDRESS = "127.0.0.1:80"


def _on_interrupt(signum: int, frame: object) -> None:
    request_shutdown()


@contextlib.contextmanager
def _interrupt_requests_shutdown() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = signal.signal(signal.SIGINT, _on_interrupt)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="jwhttp", description="Answer every HTTP request with a small HTML page."
    )
    parser.add_argument(
        "address",
        nargs="?",
        default=DEFAULT_ADDRESS,
        help=f"host:port to listen on (default {DEFAULT_ADDRESS})",
    )
    args = parser.parse_args(argv)

    try:
        server = Server(args.address)
    except (OSError, ValueError) as exc:
        print(f"Failed to start server: {exc}", file=sys.stderr)
        return 1

    with _interrupt_requests_shutdown(), server:
        try:
            server.listen()
        except OSError as exc:
            print(f"Failed to listen on server: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())