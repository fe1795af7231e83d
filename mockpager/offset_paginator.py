"""Offset/limit pagination: every request gets a page, without end."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

import flask

from .config import Endpoint
from .logger import get_logger
from .page_paginator import (
    _endpoint_response_field,
    _fill_page,
    _json_response,
    _load_endpoint_response,
    _PageError,
    _parse_location,
    _requested_page_size,
)
from .paging import (
    PaginationParameters,
    Paginator,
    ParameterLocation,
    load_pagination_parameters,
)


@dataclass
class OffsetPaginator(Paginator):
    """Serves pages sized by the limit parameter of each request."""

    response_obj: dict[str, Any]
    response_field: str
    location: ParameterLocation | None = None
    parameters: PaginationParameters = field(default_factory=PaginationParameters)
    offset_key: str = ""
    limit_key: str = ""

    def paginate(self, request: Any) -> flask.Response:
        log = get_logger()
        log.info(
            "Paginate",
            {
                "offsetKey": self.offset_key,
                "limitKey": self.limit_key,
                "location": self.location.value if self.location else "",
            },
        )
        params = self.parameters
        try:
            size = _requested_page_size(request, self.location, self.limit_key)
            log.info("page value size", {"size": size})
            _fill_page(
                self.response_obj,
                self.response_field,
                size,
                params.sent_records_count,
                params.total_record_count,
            )
        except _PageError as exc:
            return _json_response(exc.status, {"error": exc.message})
        return _json_response(200, self.response_obj)


def create_offset_paginator(
    endpoint: Endpoint, base_dir: str | os.PathLike[str] | None = None
) -> OffsetPaginator:
    """Build an offset paginator for the endpoint from its response file."""
    get_logger().info("creating offset paginator", {"endpoint": endpoint.path})
    response_obj = _load_endpoint_response(endpoint, base_dir)
    parameters = load_pagination_parameters(endpoint)
    response_field = _endpoint_response_field(endpoint, response_obj)
    return OffsetPaginator(
        response_obj=response_obj,
        response_field=response_field,
        location=_parse_location(endpoint.pagination.location),
        parameters=parameters,
    )