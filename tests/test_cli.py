import signal
import socket

import pytest

from jwhttp.cli import main
from jwhttp.server import request_shutdown, reset_shutdown


@pytest.fixture(autouse=True)
def clear_shutdown():
    reset_shutdown()
    yield
    reset_shutdown()


def test_main_runs_until_shutdown(capsys):
    request_shutdown()
    assert main(["127.0.0.1:0"]) == 0
    out = capsys.readouterr().out
    assert "Server started on http://127.0.0.1:0/" in out
    assert "Received shutdown signal, stopping server..." in out
    assert "Server shutting down gracefully..." in out


def test_main_restores_interrupt_handler():
    before = signal.getsignal(signal.SIGINT)
    request_shutdown()
    assert main(["127.0.0.1:0"]) == 0
    assert signal.getsignal(signal.SIGINT) is before


def test_main_reports_bad_address(capsys):
    assert main(["not-an-address"]) == 1
    assert "Failed to start server" in capsys.readouterr().err


def test_main_reports_port_in_use(capsys):
    with socket.create_server(("127.0.0.1", 0)) as taken:
        port = taken.getsockname()[1]
        assert main([f"127.0.0.1:{port}"]) == 1
    assert "Failed to start server" in capsys.readouterr().err