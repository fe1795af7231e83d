import json

import pytest

from mockpager.cli import main


@pytest.fixture(autouse=True)
def development_logging(monkeypatch):
    monkeypatch.delenv("LEVEL", raising=False)


def write_config(tmp_path, endpoints, name="config.json"):
    path = tmp_path / name
    path.write_text(json.dumps({"endpoints": endpoints}), encoding="utf-8")
    return path


def test_missing_config_file(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "absent.json")]) == 1
    assert "Error loading config" in capsys.readouterr().err


def test_undecodable_config(tmp_path, capsys):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert main(["--config", str(path)]) == 1
    assert "Error loading config" in capsys.readouterr().err


def test_endpoint_without_method(tmp_path, capsys):
    path = write_config(tmp_path, [{"path": "/items"}])
    assert main(["--config", str(path)]) == 1
    assert "invalid HTTP method for endpoint" in capsys.readouterr().err


def test_config_from_environment_and_server_error(tmp_path, monkeypatch, capsys):
    path = write_config(
        tmp_path,
        [{"path": "/items", "method": "GET", "pagination": {"type": "token"}}],
    )
    monkeypatch.setenv("CONFIG_FILE_PATH", str(path))
    assert main(["--base-dir", str(tmp_path)]) == 1
    err = capsys.readouterr().err
    assert "config successfully loaded" in err
    assert "Server error" in err


def test_invalid_port_argument():
    with pytest.raises(SystemExit) as info:
        main(["--port", "abc"])
    assert info.value.code == 2