# jwhttp

jwhttp is a small threaded HTTP/1.1 server. It parses each request, answers it
with a short HTML page that names the method and path, and prints a summary of
the request to standard output. Connections that send `Connection: keep-alive`
stay open, so several requests can be served over one connection. It has no
third-party dependencies.

## Installation

```
pip install .
```

## Running the server

```
jwhttp                   # listens on 127.0.0.1:80
jwhttp 127.0.0.1:8080    # listens on the given host:port
```

The server prints the address it listens on. On most systems, port 80 needs
elevated privileges. Press Ctrl+C to stop it; the server then finishes the
connections in progress and exits. If the address is malformed or cannot be
bound, the command prints `Failed to start server: ...` and exits with
status 1.

## Behaviour

- Every request path gets `200 OK` with an HTML body such as
  `jwhttp's GET response to /anything`; the query string is parsed but does
  not change the reply.
- `/favicon.ico` gets `404 NOT FOUND`.
- A header line without a `:`, or a request that cannot be read or decoded as
  UTF-8, gets `400 BAD REQUEST`, and the connection is closed.
- A connection that sends nothing for half a second is closed.
- Requests are handled by a pool of 4 worker threads.

## Using it as a library

`jwhttp.parser.parse_request` turns the lines of a request head into an
`HttpRequest` dataclass with `method`, `path`, `host`, `version`,
`connection`, `accept`, `params`, `headers` and `bad_request` fields:

```python
from jwhttp.parser import parse_request

request = parse_request([
    "GET /search?q=books&page=2 HTTP/1.1",
    "Host: localhost",
    "Accept: text/html,application/json",
])
print(request.path)    # /search
print(request.params)  # {'q': 'books', 'page': '2'}
print(request.accept)  # ['text/html', 'application/json']
```

`parse_params` and `parse_accept` are also available on their own. Query
pairs with an empty key or value are dropped.

A server can be started from code on any address. `request_shutdown()` makes
`listen()` return; `reset_shutdown()` clears the request so a server can run
again in the same process:

```python
from jwhttp.server import Server, request_shutdown

with Server("127.0.0.1:8080", workers=4) as server:
    server.listen()  # runs until request_shutdown() is called
```

`build_response(request, keep_alive)` returns the bytes the server would send
in reply to an `HttpRequest`.

`jwhttp.threads.ThreadPool` is the fixed-size worker pool the server uses. It
can run any callables; `shutdown()` (or leaving the `with` block) lets queued
jobs finish and joins the workers:

```python
from jwhttp.threads import ThreadPool

with ThreadPool(4) as pool:
    pool.execute(lambda: print("hello from a worker"))
```

## What it does not do

jwhttp does not serve files, route requests to handlers, read request bodies
or support TLS. Every request gets the same generated page.

## Tests

```
pip install ".[test]"
pytest
```