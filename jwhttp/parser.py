"""Parsing of HTTP request heads into :class:`HttpRequest` records."""

from __future__ import annotations

import time
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class HttpRequest:
    """The parts of an HTTP request head that the server cares about.

    ``started`` is a :func:`time.monotonic` timestamp taken when parsing
    began, used to measure how long a request took to serve.
    """

    method: str = ""
    path: str = ""
    host: str = ""
    version: str = ""
    connection: str = ""
    accept: list[str] = field(default_factory=list)
    params: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    bad_request: bool = False
    started: float = field(default_factory=time.monotonic)


def parse_request(lines: Iterable[str]) -> HttpRequest:
    """Parse the request line and header lines of an HTTP request.

    A header line without a colon marks the request as bad. Parsing stops
    at a line consisting of exactly ``"\\r\\n"``.
    """
    request = HttpRequest()
    for index, line in enumerate(lines):
        if line == "\r\n":
            break
        if index == 0:
            _parse_request_line(request, line)
            continue

        key, sep, value = line.partition(":")
        if not sep:
            request.bad_request = True
            key = value = ""
        key = key.strip()
        value = value.strip()
        request.headers[key] = value

        if key == "Host":
            request.host = value
        elif key == "Connection":
            request.connection = value
        elif key == "Accept":
            request.accept = parse_accept(value)
    return request


def _parse_request_line(request: HttpRequest, line: str) -> None:
    parts = line.split()
    if parts:
        request.method = parts[0]
    if len(parts) > 1:
        path, _, query = parts[1].partition("?")
        request.path = path
        if query:
            request.params = parse_params(query)
    if len(parts) > 2:
        request.version = parts[2]


def parse_params(params_string: str) -> dict[str, str]:
    """Parse a ``key=value&key=value`` query string.

    Pairs whose key or value is empty after trimming are dropped; later
    duplicates replace earlier ones.
    """
    params: dict[str, str] = {}
    for param in params_string.split("&"):
        key, sep, value = param.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key and value:
            params[key] = value
    return params


def parse_accept(accept_string: str) -> list[str]:
    """Split an ``Accept`` header value on commas, keeping each item as is."""
    return accept_string.split(",")