import json
import logging

import pytest

from mockpager.logger import Logger, create_new_logger, get_logger


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    base = logging.getLogger("mockpager.tests.captured")
    base.setLevel(logging.DEBUG)
    base.propagate = False
    handler = _ListHandler()
    base.addHandler(handler)
    yield Logger(base), handler
    base.removeHandler(handler)


def test_info_carries_fields(captured):
    log, handler = captured
    log.info("hello", {"a": 1})
    record = handler.records[-1]
    assert record.getMessage() == "hello"
    assert record.levelno == logging.INFO
    assert record.fields == {"a": 1}


def test_warn_adds_error_field(captured):
    log, handler = captured
    log.warn("bad", ValueError("boom"), {"k": "v"})
    record = handler.records[-1]
    assert record.levelno == logging.WARNING
    assert record.fields == {"error": "boom", "k": "v"}


def test_error_level_and_field(captured):
    log, handler = captured
    log.error("fail", RuntimeError("oops"))
    record = handler.records[-1]
    assert record.levelno == logging.ERROR
    assert record.fields["error"] == "oops"


def test_with_fields_is_a_child(captured):
    log, handler = captured
    child = log.with_fields({"request": "r1"})
    child.debug("x", {"extra": True})
    assert handler.records[-1].fields == {"request": "r1", "extra": True}
    assert log.fields == {}
    assert child.fields == {"request": "r1"}


def test_production_level_filters_debug(monkeypatch):
    monkeypatch.setenv("LEVEL", "PRODUCTION")
    log = create_new_logger()
    assert log.base.level == logging.INFO
    assert not log.base.isEnabledFor(logging.DEBUG)


def test_development_level_enables_debug(monkeypatch):
    monkeypatch.setenv("LEVEL", "DEVELOPMENT")
    log = create_new_logger()
    assert log.base.isEnabledFor(logging.DEBUG)


def test_production_writes_json(monkeypatch, capsys):
    monkeypatch.setenv("LEVEL", "PRODUCTION")
    log = create_new_logger()
    log.info("started", {"port": "8080"})
    log.sync()
    line = capsys.readouterr().err.strip().splitlines()[-1]
    entry = json.loads(line)
    assert entry["msg"] == "started"
    assert entry["level"] == "INFO"
    assert entry["port"] == "8080"


def test_get_logger_is_shared(monkeypatch):
    monkeypatch.delenv("LEVEL", raising=False)
    created = create_new_logger()
    assert get_logger() is created
    assert get_logger() is get_logger()