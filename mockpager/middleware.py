"""Request logging for the Flask application."""

from __future__ import annotations

import time
from typing import Any

import flask

from .logger import get_logger


def _client_ip(request: Any) -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    real_ip = request.headers.get("X-Real-Ip", "").strip()
    if real_ip:
        return real_ip
    return request.remote_addr or ""


def install_request_logging(app: flask.Flask) -> None:
    """Log one "api executed" entry for every request the app handles."""

    def start_timer() -> None:
        flask.g._mockpager_start = time.perf_counter()

    def record_status(response: flask.Response) -> flask.Response:
        flask.g._mockpager_status = response.status_code
        return response

    def log_request(exc: BaseException | None) -> None:
        start = flask.g.get("_mockpager_start")
        latency = time.perf_counter() - start if start is not None else 0.0
        request = flask.request
        get_logger().info(
            "api executed",
            {
                "request_id": request.headers.get("X-Request-ID", ""),
                "user_id": request.headers.get("X-User-ID", ""),
                "status": flask.g.get("_mockpager_status", 500),
                "method": request.method,
                "path": request.path,
                "query": request.query_string.decode("utf-8", errors="replace"),
                "ip": _client_ip(request),
                "user-agent": request.headers.get("User-Agent", ""),
                "latency": latency,
                "errors": str(exc) if exc is not None else "",
            },
        )

    app.before_request(start_timer)
    app.after_request(record_status)
    app.teardown_request(log_request)