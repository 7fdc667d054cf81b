"""A small threaded HTTP/1.1 server, its request parser and its worker pool."""

__version__ = "0.1.0"
__all__ = ["cli", "parser", "server", "threads"]