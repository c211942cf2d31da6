"""Tests for the command-line entry point."""

import json
import logging

import pytest

from minireq import cli
from minireq.models import Response


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger("minireq")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


@pytest.fixture
def fake_get(monkeypatch):
    calls = []

    def install(response):
        def fake(url, headers=None, cookie=None, *, params=None, config=None, transport=None):
            calls.append({"url": url, "headers": headers, "cookie": cookie, "params": params, "config": config})
            return response

        monkeypatch.setattr("minireq.cli.get", fake)
        return calls

    return install


def test_encode_command(capsys):
    assert cli.main(["encode", "a b#c"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "a+b%23c"


def test_decode_command(capsys):
    assert cli.main(["decode", "a+b%23c"]) == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "a b#c"


def test_decode_command_reports_malformed_input(capsys):
    """Malformed escapes produce an error exit code instead of a crash."""
    assert cli.main(["decode", "abc%2"]) == cli.EXIT_ERROR
    assert "Truncated escape" in capsys.readouterr().err


def test_get_command_prints_body(fake_get, capsys):
    calls = fake_get(Response(url="https://example.com/", status_code=200, content="hello"))

    exit_code = cli.main([
        "get", "https://example.com/",
        "-H", "X-Test: 1",
        "--cookie", "a=1",
        "--param", "q=a b",
    ])

    assert exit_code == cli.EXIT_OK
    assert capsys.readouterr().out.strip() == "hello"
    assert calls[0]["headers"] == {"X-Test": "1"}
    assert calls[0]["cookie"] == "a=1"
    assert calls[0]["params"] == {"q": "a b"}


def test_get_command_json_output(fake_get, capsys):
    fake_get(Response(url="https://example.com/", status_code=200, content="hello", elapsed=0.25))

    assert cli.main(["get", "https://example.com/", "--json"]) == cli.EXIT_OK
    payload = json.loads(capsys.readouterr().out)
    assert payload["status_code"] == 200
    assert payload["content"] == "hello"
    assert payload["elapsed"] == 0.25


def test_get_command_transfer_failure(fake_get, capsys):
    fake_get(Response(url="https://example.com/", reason="Connection refused"))

    assert cli.main(["get", "https://example.com/"]) == cli.EXIT_ERROR
    assert "Connection refused" in capsys.readouterr().err


def test_get_command_http_error_status(fake_get):
    fake_get(Response(url="https://example.com/", status_code=503, content="down"))

    assert cli.main(["get", "https://example.com/"]) == cli.EXIT_HTTP_ERROR


def test_get_command_rejects_bad_header(fake_get, capsys):
    calls = fake_get(Response(url="https://example.com/", status_code=200))

    assert cli.main(["get", "https://example.com/", "-H", "no-separator"]) == cli.EXIT_ERROR
    assert calls == []
    assert "Invalid header" in capsys.readouterr().err


def test_config_file_is_applied(fake_get, tmp_path):
    calls = fake_get(Response(url="https://example.com/", status_code=200))
    path = tmp_path / "minireq.yaml"
    path.write_text("user_agent: from-file/1.0\nmax_body_bytes: 64\n", encoding="utf-8")

    assert cli.main(["--config", str(path), "get", "https://example.com/"]) == cli.EXIT_OK
    assert calls[0]["config"].user_agent == "from-file/1.0"
    assert calls[0]["config"].max_body_bytes == 64
