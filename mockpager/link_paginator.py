"""Link pagination: every page carries a link to the request that produced it."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl, quote, urlencode, urlunsplit

import flask

from .config import Endpoint
from .logger import get_logger
from .page_paginator import (
    _INTEGER,
    _endpoint_response_field,
    _fill_page,
    _json_response,
    _load_endpoint_response,
    _PageError,
)
from .paging import (
    DEFAULT_LINK_KEY,
    DEFAULT_PAGE_SIZE,
    PaginationParameters,
    Paginator,
    PaginatorError,
    load_pagination_parameters,
)

_PATH_SAFE = "/!$&'()*+,;=:@-._~"


def _page_size_from_query(request: Any, key: str) -> int:
    value = request.args.get(key, "") if key else ""
    if value and _INTEGER.fullmatch(value) and int(value) > 0:
        return int(value)
    return DEFAULT_PAGE_SIZE


def generate_page_link(request: Any) -> str:
    """Absolute URL of the request, with its query keys in sorted order."""
    secure = request.is_secure or request.headers.get("X-Forwarded-Proto") == "https"
    scheme = "https" if secure else "http"
    raw_query = request.query_string.decode("utf-8", errors="replace")
    pairs = sorted(parse_qsl(raw_query, keep_blank_values=True), key=lambda pair: pair[0])
    path = quote(request.path, safe=_PATH_SAFE)
    return urlunsplit((scheme, request.host, path, urlencode(pairs), ""))


@dataclass
class LinkPaginator(Paginator):
    """Serves a limited number of pages, each with a link field."""

    response_obj: dict[str, Any]
    response_field: str
    link_key: str = DEFAULT_LINK_KEY
    parameters: PaginationParameters = field(default_factory=PaginationParameters)

    def paginate(self, request: Any) -> flask.Response:
        params = self.parameters
        if params.page_sent_count >= params.total_page_count:
            return _json_response(404, {"error": "record not found"})

        size = _page_size_from_query(request, params.page_size_key)
        try:
            size = _fill_page(
                self.response_obj,
                self.response_field,
                size,
                params.sent_records_count,
                params.total_record_count,
            )
        except _PageError as exc:
            return _json_response(exc.status, {"error": exc.message})

        params.page_sent_count += 1
        params.sent_records_count += size
        self.response_obj[self.link_key] = generate_page_link(request)
        return _json_response(200, self.response_obj)


def create_link_paginator(
    endpoint: Endpoint, base_dir: str | os.PathLike[str] | None = None
) -> LinkPaginator:
    """Build a link paginator for the endpoint from its response file."""
    log = get_logger()
    response_obj = _load_endpoint_response(endpoint, base_dir)
    parameters = load_pagination_parameters(endpoint)

    link_key = DEFAULT_LINK_KEY
    configured = endpoint.pagination.options.get("linkKey")
    if isinstance(configured, str):
        if configured not in response_obj:
            message = f"invalid link key for the endpoint: {endpoint.path}"
            log.warn(message)
            raise PaginatorError(message)
        link_key = configured

    response_field = _endpoint_response_field(endpoint, response_obj)
    return LinkPaginator(
        response_obj=response_obj,
        response_field=response_field,
        link_key=link_key,
        parameters=parameters,
    )