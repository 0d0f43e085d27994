"""CLI tests (Typer CliRunner, mock transport)."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from adapters import http_client
from cli import main as cli_main
from core import config

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config, "get_user_config_dir", lambda: tmp_path / "user")
    for key in ("REST_CLIENT_BASE_URI", "REST_CLIENT_AUTH_TOKEN", "REST_CLIENT_CLIENT_NAME"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


@pytest.fixture
def mock_api(monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.url.path.endswith("/missing"):
            return httpx.Response(404)
        return httpx.Response(200, json={"data": {"echo": request.method}})

    def fake_build(settings=None, **kwargs):
        return http_client.build_async_client(settings, transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(cli_main, "build_async_client", fake_build)
    return seen


def test_request_prints_json_envelope(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(
        cli_main.app,
        ["request", "get", "things", "--base-uri", "http://host/v1/", "--token", "abc", "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["success"] is True
    assert payload["status"] == 200
    assert payload["data"] == {"echo": "GET"}
    assert str(mock_api[0].url) == "http://host/v1/things"
    assert mock_api[0].headers["Authorization"] == "Bearer abc"


def test_request_with_body(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(
        cli_main.app,
        ["request", "POST", "/things", "--base-uri", "http://host/v1/", "--data", '{"name": "lamp"}', "--json"],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(mock_api[0].content) == {"name": "lamp"}
    assert str(mock_api[0].url) == "http://host/things"


def test_request_failure_exit_code(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(
        cli_main.app,
        ["request", "GET", "missing", "--base-uri", "http://host/v1/", "--json"],
    )

    assert result.exit_code == 1
    assert json.loads(result.stdout)["status"] == 404


def test_request_table_output(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(cli_main.app, ["request", "GET", "things", "--base-uri", "http://host/v1/"])

    assert result.exit_code == 0, result.output
    assert "Result" in result.stdout
    assert "200" in result.stdout


def test_request_rejects_invalid_base_uri(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(cli_main.app, ["request", "GET", "things", "--base-uri", "not a uri"])

    assert result.exit_code == 2
    assert mock_api == []


def test_request_rejects_empty_base_uri(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(cli_main.app, ["request", "GET", "things", "--base-uri", ""])

    assert result.exit_code == 2
    assert "base_uri" in result.output
    assert mock_api == []


def test_request_rejects_unknown_method(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(cli_main.app, ["request", "PATCH", "things", "--base-uri", "http://host/"])

    assert result.exit_code == 2


def test_request_rejects_invalid_json_body(mock_api: list[httpx.Request]) -> None:
    result = runner.invoke(
        cli_main.app,
        ["request", "POST", "things", "--base-uri", "http://host/", "--data", "{oops"],
    )

    assert result.exit_code == 2
    assert mock_api == []


def test_configure_writes_user_env(isolated_config: Path) -> None:
    result = runner.invoke(
        cli_main.app,
        ["configure"],
        input="https://api.example.com/v1/\nhouse\nsecret\n",
    )

    assert result.exit_code == 0, result.output
    text = (isolated_config / "user" / ".env").read_text(encoding="utf-8")
    assert "REST_CLIENT_BASE_URI=https://api.example.com/v1/" in text
    assert "REST_CLIENT_CLIENT_NAME=house" in text
    assert "REST_CLIENT_AUTH_TOKEN=secret" in text


def test_doctor_flags_invalid_base_uri(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REST_CLIENT_BASE_URI", "relative/path")

    result = runner.invoke(cli_main.app, ["doctor", "run"])

    assert result.exit_code == 1
    assert "FAIL" in result.stdout


def test_doctor_settings_masks_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REST_CLIENT_AUTH_TOKEN", "supersecret")

    result = runner.invoke(cli_main.app, ["doctor", "settings"])

    assert result.exit_code == 0, result.output
    assert "supersecret" not in result.stdout
