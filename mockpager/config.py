"""Loading and validating the mock API configuration file."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Mapping

from .logger import get_logger


class ConfigError(Exception):
    """The configuration could not be read or is invalid."""


class InvalidConfigError(ConfigError):
    def __init__(self, message: str = "invalid configuration"):
        super().__init__(message)


class InvalidPathError(ConfigError):
    def __init__(self, message: str = "invalid endpoint path"):
        super().__init__(message)


class InvalidMethodError(ConfigError):
    def __init__(self, message: str = "invalid HTTP method for endpoint"):
        super().__init__(message)


def _typed(data: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(f"field {key!r} must be of type {kind.__name__}")
    return value


@dataclass
class PaginationConfig:
    type: str = ""
    location: str = ""
    options: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PaginationConfig:
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError("field 'pagination' must be an object")
        return cls(
            type=_typed(data, "type", str, ""),
            location=_typed(data, "location", str, ""),
            options=dict(_typed(data, "options", dict, {})),
        )


@dataclass
class Endpoint:
    path: str = ""
    method: str = ""
    headers: dict[str, Any] = field(default_factory=dict)
    query_params: dict[str, Any] = field(default_factory=dict)
    request_body: dict[str, Any] = field(default_factory=dict)
    rate_limit: int = 0
    pagination: PaginationConfig = field(default_factory=PaginationConfig)
    response_obj_file_path: str = ""
    response_field: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Endpoint:
        if not isinstance(data, Mapping):
            raise ConfigError("each endpoint must be an object")
        return cls(
            path=_typed(data, "path", str, ""),
            method=_typed(data, "method", str, ""),
            headers=dict(_typed(data, "headers", dict, {})),
            query_params=dict(_typed(data, "queryParams", dict, {})),
            request_body=dict(_typed(data, "requestBody", dict, {})),
            rate_limit=_typed(data, "rateLimit", int, 0),
            pagination=PaginationConfig.from_dict(data.get("pagination")),
            response_obj_file_path=_typed(data, "responseObjFilePath", str, ""),
            response_field=_typed(data, "responseField", str, ""),
        )


@dataclass
class APIConfig:
    endpoints: list[Endpoint] = field(default_factory=list)


def parse_config(data: Any) -> APIConfig:
    """Build an APIConfig from decoded JSON data."""
    if data is None:
        return APIConfig()
    if not isinstance(data, Mapping):
        raise ConfigError("configuration must be a JSON object")
    endpoints = _typed(data, "endpoints", list, [])
    return APIConfig(endpoints=[Endpoint.from_dict(item) for item in endpoints])


def validate_config(config: APIConfig | None) -> None:
    """Raise if the configuration or any endpoint is unusable."""
    log = get_logger()
    if config is None:
        err = InvalidConfigError()
        log.warn("provided config is nil", err)
        raise err
    for endpoint in config.endpoints:
        if not endpoint.path:
            err = InvalidPathError()
            log.warn("invalid endpoint path", err)
            raise err
        if not endpoint.method:
            err = InvalidMethodError()
            log.warn("invalid endpoint method", err)
            raise err


def load_config(path: str | os.PathLike[str] | None = None) -> APIConfig:
    """Read, parse and validate the configuration file.

    Without a path, the CONFIG_FILE_PATH environment variable is used.
    """
    log = get_logger()
    if path is None:
        path = os.environ.get("CONFIG_FILE_PATH", "")

    try:
        with open(path, encoding="utf-8") as handle:
            raw = json.load(handle)
    except OSError as exc:
        log.error("error opening config file", exc)
        raise
    except ValueError as exc:
        log.error("error decoding config file", exc)
        raise ConfigError(f"error decoding config file: {exc}") from exc

    try:
        config = parse_config(raw)
    except ConfigError as exc:
        log.error("error decoding config file", exc)
        raise

    try:
        validate_config(config)
    except ConfigError as exc:
        log.error("invalid config", exc)
        raise
    return config