"""Paginator selection and registration of configured endpoints."""

from __future__ import annotations

import os
import threading
from typing import Any, Callable

import flask

from .config import APIConfig, Endpoint
from .link_paginator import create_link_paginator
from .offset_paginator import create_offset_paginator
from .page_paginator import create_page_paginator
from .paging import PaginationType, Paginator, PaginatorError

_FACTORIES: dict[PaginationType, Callable[..., Paginator]] = {
    PaginationType.PAGE: create_page_paginator,
    PaginationType.OFFSET: create_offset_paginator,
    PaginationType.LINK: create_link_paginator,
}

_SINGLE_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH"})
_ANY_METHODS = ["GET", "POST", "PUT", "PATCH", "HEAD", "OPTIONS", "DELETE", "CONNECT", "TRACE"]


class RouteSetupError(Exception):
    """The configured endpoints could not be registered."""

    def __init__(self, message: str = "failed to setup routes"):
        super().__init__(message)


def create_paginator(
    endpoint: Endpoint, base_dir: str | os.PathLike[str] | None = None
) -> Paginator:
    """Build the paginator named by the endpoint's pagination type."""
    try:
        kind = PaginationType(endpoint.pagination.type)
    except ValueError:
        kind = None
    factory = _FACTORIES.get(kind) if kind is not None else None
    if factory is None:
        raise PaginatorError(f"unsupported pagination type: {endpoint.pagination.type}")
    try:
        return factory(endpoint, base_dir)
    except PaginatorError as exc:
        raise PaginatorError(
            f"failed to create {kind.value} paginator for endpoint: {endpoint.path}"
        ) from exc


def _flask_rule(path: str) -> str:
    """Turn ':name' and '*name' path segments into Flask converters."""
    segments = []
    for segment in path.split("/"):
        if segment.startswith(":") and len(segment) > 1:
            segment = f"<{segment[1:]}>"
        elif segment.startswith("*") and len(segment) > 1:
            segment = f"<path:{segment[1:]}>"
        segments.append(segment)
    return "/".join(segments)


def _make_view(paginator: Paginator) -> Callable[..., Any]:
    lock = threading.Lock()

    def view(**_params: Any) -> Any:
        with lock:
            return paginator.paginate(flask.request)

    return view


def setup_routes(
    app: flask.Flask, config: APIConfig, base_dir: str | os.PathLike[str] | None = None
) -> None:
    """Register one paginated handler per configured endpoint."""
    for number, endpoint in enumerate(config.endpoints):
        try:
            paginator = create_paginator(endpoint, base_dir)
        except PaginatorError as exc:
            raise RouteSetupError(f"failed to setup routes\n{exc}") from exc

        methods = [endpoint.method] if endpoint.method in _SINGLE_METHODS else _ANY_METHODS
        try:
            app.add_url_rule(
                _flask_rule(endpoint.path),
                endpoint=f"mock_endpoint_{number}",
                view_func=_make_view(paginator),
                methods=methods,
            )
        except (ValueError, AssertionError) as exc:
            raise RouteSetupError(
                f"failed to setup routes\ninvalid route {endpoint.path!r}: {exc}"
            ) from exc