"""The HTTP application and its serving loop."""

from __future__ import annotations

import os
import signal
import socketserver
import threading
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

import flask

from .config import APIConfig
from .logger import get_logger
from .middleware import install_request_logging
from .router import setup_routes

IDLE_TIMEOUT = 15.0
SHUTDOWN_TIMEOUT = 5.0
_POLL_INTERVAL = 0.2

_SHUTDOWN_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGQUIT") if hasattr(signal, name)
)


class _ThreadingServer(socketserver.ThreadingMixIn, WSGIServer):
    pass


class _QuietHandler(WSGIRequestHandler):
    timeout = IDLE_TIMEOUT

    def log_message(self, format: str, *args: Any) -> None:
        """Requests are logged by the application itself."""


def create_app(
    config: APIConfig, base_dir: str | os.PathLike[str] | None = None
) -> flask.Flask:
    """Flask application serving every endpoint of the configuration."""
    app = flask.Flask(__name__)
    install_request_logging(app)
    setup_routes(app, config, base_dir)
    return app


def _port_number(port: int | str | None) -> int:
    if port is None:
        port = os.environ.get("PORT", "")
    if isinstance(port, str):
        port = port.strip()
        return int(port) if port else 0
    return int(port)


def _install_signal_handlers(stop: threading.Event) -> dict[int, Any]:
    if threading.current_thread() is not threading.main_thread():
        return {}
    return {
        signum: signal.signal(signum, lambda *_: stop.set()) for signum in _SHUTDOWN_SIGNALS
    }


def _restore_signal_handlers(previous: dict[int, Any]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler if handler is not None else signal.SIG_DFL)


def run_server(
    config: APIConfig,
    port: int | str | None = None,
    base_dir: str | os.PathLike[str] | None = None,
) -> None:
    """Serve the configuration until SIGINT, SIGTERM or SIGQUIT arrives.

    Without a port, the PORT environment variable is used; an empty one
    lets the system choose.
    """
    log = get_logger()
    app = create_app(config, base_dir)
    number = _port_number(port)
    server = make_server(
        "0.0.0.0", number, app, server_class=_ThreadingServer, handler_class=_QuietHandler
    )

    stop = threading.Event()
    failures: list[BaseException] = []

    def serve() -> None:
        try:
            server.serve_forever(poll_interval=_POLL_INTERVAL)
        except Exception as exc:
            failures.append(exc)
        finally:
            stop.set()

    previous = _install_signal_handlers(stop)
    worker = threading.Thread(target=serve, name="mockpager-server", daemon=True)
    log.info("Server starting", {"port": server.server_port})
    worker.start()
    try:
        while not stop.wait(_POLL_INTERVAL):
            pass
    finally:
        _restore_signal_handlers(previous)
        if worker.is_alive():
            log.info("Server shutting down gracefully...")
            server.shutdown()
        worker.join(SHUTDOWN_TIMEOUT)
        server.server_close()

    if failures:
        raise RuntimeError(f"server failed: {failures[0]}") from failures[0]
    log.info("Server stopped")