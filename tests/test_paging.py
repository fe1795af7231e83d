import json

import pytest

from mockpager.config import Endpoint, PaginationConfig
from mockpager.paging import (
    PaginationParameters,
    PaginationType,
    Paginator,
    PaginatorError,
    ParameterLocation,
    find_response_field,
    load_pagination_parameters,
    load_response_object,
)


def _endpoint(options=None, response_field=""):
    return Endpoint(
        path="/items",
        method="GET",
        pagination=PaginationConfig("page", "query", options or {}),
        response_field=response_field,
    )


def test_default_parameters():
    params = load_pagination_parameters(_endpoint())
    assert params == PaginationParameters()
    assert params.total_page_count == 2
    assert params.total_record_count == 200
    assert params.page_size == 100
    assert params.page_key == "page"
    assert params.page_size_key == "pageSize"
    assert params.page_sent_count == 0
    assert params.sent_records_count == 0


def test_options_override_parameters():
    options = {
        "pageKey": "p",
        "pageSizeKey": "size",
        "pageSize": 7,
        "pageCount": 3,
        "totalRecordCount": 21,
    }
    params = load_pagination_parameters(_endpoint(options))
    assert params.page_key == "p"
    assert params.page_size_key == "size"
    assert params.page_size == 7
    assert params.total_page_count == 3
    assert params.total_record_count == 21


def test_non_integer_options_are_ignored():
    options = {"pageSize": 5.0, "pageCount": True, "pageKey": 3}
    params = load_pagination_parameters(_endpoint(options))
    assert params == PaginationParameters()


def test_enum_values():
    assert PaginationType("offset") is PaginationType.OFFSET
    assert ParameterLocation("header") is ParameterLocation.HEADER
    with pytest.raises(ValueError):
        ParameterLocation("cookie")


def test_load_response_object_round_trip(tmp_path):
    payload = {"items": [{"id": 1}], "meta": {"x": "y"}}
    (tmp_path / "data").mkdir()
    (tmp_path / "data" / "r.json").write_text(json.dumps(payload))
    assert load_response_object("data/r.json", tmp_path) == payload
    assert load_response_object("./data/../data/r.json", tmp_path) == payload
    assert load_response_object("/data/r.json", tmp_path) == payload


def test_load_response_object_empty_path(tmp_path):
    with pytest.raises(PaginatorError, match="empty file path"):
        load_response_object("", tmp_path)


def test_load_response_object_missing(tmp_path):
    with pytest.raises(PaginatorError) as info:
        load_response_object("absent.json", tmp_path)
    assert isinstance(info.value.__cause__, FileNotFoundError)


@pytest.mark.parametrize("content", ["[1, 2]", "{bad"])
def test_load_response_object_not_an_object(tmp_path, content):
    (tmp_path / "r.json").write_text(content)
    with pytest.raises(PaginatorError):
        load_response_object("r.json", tmp_path)


def test_find_explicit_field():
    obj = {"a": [], "b": [1]}
    assert find_response_field(_endpoint(response_field="b"), obj) == "b"


def test_find_explicit_field_must_be_list():
    with pytest.raises(PaginatorError, match="invalid response field for endpoint: /items"):
        find_response_field(_endpoint(response_field="meta"), {"meta": {}})


def test_find_first_array_field():
    obj = {"meta": {}, "records": [1], "other": [2]}
    assert find_response_field(_endpoint(), obj) == "records"


def test_find_no_array_field():
    with pytest.raises(PaginatorError, match="response field not present"):
        find_response_field(_endpoint(), {"meta": {}})


def test_paginator_is_abstract():
    with pytest.raises(TypeError):
        Paginator()

    class Echo(Paginator):
        def paginate(self, request):
            return request

    assert Echo().paginate("req") == "req"