"""Shared pagination types, defaults and response-file helpers."""

from __future__ import annotations

import enum
import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .config import Endpoint

DEFAULT_PAGE_KEY = "page"
DEFAULT_PAGE_SIZE_KEY = "pageSize"
DEFAULT_OFFSET_KEY = "offset"
DEFAULT_LIMIT_KEY = "limit"
DEFAULT_LINK_KEY = "link"
DEFAULT_PAGE_SIZE = 100
DEFAULT_PAGE_COUNT = 2
DEFAULT_TOTAL_RECORD_COUNT = 200


class PaginationType(str, enum.Enum):
    PAGE = "page"
    TOKEN = "token"
    NONE = "none"
    LINK = "link"
    OFFSET = "offset"


class ParameterLocation(str, enum.Enum):
    BODY = "body"
    QUERY = "query"
    HEADER = "header"


class PaginatorError(Exception):
    """A paginator could not be built for an endpoint."""


@dataclass
class PaginationParameters:
    total_page_count: int = DEFAULT_PAGE_COUNT
    total_record_count: int = DEFAULT_TOTAL_RECORD_COUNT
    page_key: str = DEFAULT_PAGE_KEY
    page_size_key: str = DEFAULT_PAGE_SIZE_KEY
    page_sent_count: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    sent_records_count: int = 0


class Paginator(ABC):
    """Serves successive pages of a mocked collection."""

    @abstractmethod
    def paginate(self, request: Any) -> Any:
        """Answer one request with the next page."""


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def load_pagination_parameters(endpoint: Endpoint) -> PaginationParameters:
    """Defaults overridden by the endpoint's pagination options."""
    options = endpoint.pagination.options
    params = PaginationParameters()

    if isinstance(options.get("pageKey"), str):
        params.page_key = options["pageKey"]
    if isinstance(options.get("pageSizeKey"), str):
        params.page_size_key = options["pageSizeKey"]
    if _is_int(options.get("pageSize")):
        params.page_size = options["pageSize"]
    if _is_int(options.get("pageCount")):
        params.total_page_count = options["pageCount"]
    if _is_int(options.get("totalRecordCount")):
        params.total_record_count = options["totalRecordCount"]
    return params


def load_response_object(
    path: str, base_dir: str | os.PathLike[str] | None = None
) -> dict[str, Any]:
    """Read a JSON object from ``path`` resolved under ``base_dir``.

    The base directory defaults to the parent of the working directory.
    """
    if not path:
        raise PaginatorError("empty file path")

    clean = os.path.normpath(path).lstrip("/\\")
    base = Path(base_dir) if base_dir is not None else Path(os.pardir)
    target = Path(os.path.normpath(base / clean))

    try:
        data = json.loads(target.read_text(encoding="utf-8"))
    except OSError as exc:
        raise PaginatorError(f"cannot read response file {target}: {exc}") from exc
    except ValueError as exc:
        raise PaginatorError(f"cannot decode response file {target}: {exc}") from exc

    if not isinstance(data, dict):
        raise PaginatorError(f"response file {target} does not hold a JSON object")
    return data


def find_response_field(endpoint: Endpoint, response_obj: dict[str, Any]) -> str:
    """Name of the array field that holds the paginated records."""
    if endpoint.response_field:
        if not isinstance(response_obj.get(endpoint.response_field), list):
            raise PaginatorError(f"invalid response field for endpoint: {endpoint.path}")
        return endpoint.response_field

    for key, value in response_obj.items():
        if isinstance(value, list):
            return key

    raise PaginatorError(
        f"response field not present in response object for endpoint: {endpoint.path}"
    )