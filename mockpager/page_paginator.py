"""Page-number pagination: a fixed number of pages, then 404."""

from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from typing import Any

import flask

from .config import Endpoint
from .logger import get_logger
from .paging import (
    DEFAULT_PAGE_SIZE,
    PaginationParameters,
    Paginator,
    PaginatorError,
    ParameterLocation,
    find_response_field,
    load_pagination_parameters,
    load_response_object,
)

_INTEGER = re.compile(r"[+-]?[0-9]+")


class _PageError(Exception):
    """A request that must be answered with an error status."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _parse_location(value: str) -> ParameterLocation | None:
    try:
        return ParameterLocation(value)
    except ValueError:
        return None


def _json_response(status: int, payload: Any) -> flask.Response:
    try:
        body = json.dumps(payload, separators=(",", ":"), sort_keys=True)
    except (TypeError, ValueError):
        status = 500
        body = json.dumps({"error": "failed to create response object"})
    return flask.Response(body, status=status, mimetype="application/json")


def _parse_json_body(request: Any) -> dict[str, Any]:
    try:
        data = json.loads(request.get_data(cache=True), parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError) as exc:
        raise _PageError(500, "Failed to parse request body") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise _PageError(500, "Failed to parse request body")
    return data


def _size_from_body(request: Any, key: str) -> int:
    body = _parse_json_body(request)
    if key not in body:
        return DEFAULT_PAGE_SIZE
    value = body[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _PageError(400, "size must be a number")
    try:
        return int(value)
    except (OverflowError, ValueError) as exc:
        raise _PageError(400, "size must be a number") from exc


def _size_from_header(request: Any, key: str) -> int:
    value = request.headers.get(key, "") if key else ""
    if value and _INTEGER.fullmatch(value) and int(value) > 0:
        return int(value)
    return DEFAULT_PAGE_SIZE


def _size_from_query(request: Any, key: str) -> int:
    value = request.args.get(key)
    if value is None:
        return DEFAULT_PAGE_SIZE
    if not _INTEGER.fullmatch(value):
        raise _PageError(500, "Failed to get sizeValue")
    return int(value)


def _requested_page_size(request: Any, location: ParameterLocation | None, key: str) -> int:
    """Page size asked for in the request, read from the configured location."""
    if location is ParameterLocation.BODY:
        return _size_from_body(request, key)
    if location is ParameterLocation.HEADER:
        return _size_from_header(request, key)
    if location is ParameterLocation.QUERY:
        return _size_from_query(request, key)
    return DEFAULT_PAGE_SIZE


def _fill_page(
    response_obj: dict[str, Any],
    response_field: str,
    page_size: int,
    sent_records: int,
    total_records: int,
) -> int:
    """Replace the records field with copies of its first record.

    Returns the number of records actually placed in the page.
    """
    records = response_obj.get(response_field)
    if not isinstance(records, list):
        raise _PageError(500, "invalid response field")
    if not records:
        raise _PageError(500, "no record to repeat")
    if page_size < 0:
        raise _PageError(500, "invalid page size")
    if sent_records + page_size > total_records:
        page_size = total_records - sent_records
    response_obj[response_field] = [records[0]] * max(page_size, 0)
    return page_size


@dataclass
class PagePaginator(Paginator):
    """Serves a limited number of pages of repeated records."""

    response_obj: dict[str, Any]
    response_field: str
    location: ParameterLocation | None = None
    parameters: PaginationParameters = field(default_factory=PaginationParameters)

    def paginate(self, request: Any) -> flask.Response:
        params = self.parameters
        if params.page_sent_count >= params.total_page_count:
            return _json_response(404, {"error": "record not found"})
        try:
            size = _requested_page_size(request, self.location, params.page_size_key)
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
        return _json_response(200, self.response_obj)


def _load_endpoint_response(
    endpoint: Endpoint, base_dir: str | os.PathLike[str] | None
) -> dict[str, Any]:
    log = get_logger()
    try:
        return load_response_object(endpoint.response_obj_file_path, base_dir)
    except PaginatorError as exc:
        message = f"invalid response file path for endpoint: {endpoint.path}"
        log.warn(message, exc)
        raise PaginatorError(f"{message}\n{exc}") from exc


def _endpoint_response_field(endpoint: Endpoint, response_obj: dict[str, Any]) -> str:
    try:
        return find_response_field(endpoint, response_obj)
    except PaginatorError as exc:
        get_logger().warn(str(exc))
        raise


def create_page_paginator(
    endpoint: Endpoint, base_dir: str | os.PathLike[str] | None = None
) -> PagePaginator:
    """Build a page paginator for the endpoint from its response file."""
    get_logger().info("creating page paginator", {"endpoint": endpoint.path})
    response_obj = _load_endpoint_response(endpoint, base_dir)
    parameters = load_pagination_parameters(endpoint)
    response_field = _endpoint_response_field(endpoint, response_obj)
    return PagePaginator(
        response_obj=response_obj,
        response_field=response_field,
        location=_parse_location(endpoint.pagination.location),
        parameters=parameters,
    )