"""
Tests for simplehttp_cli against a localhost server.
"""

import json

import pytest

from fixtures import unused_port
from simplehttp_cli.commands.request import parse_header_args
from simplehttp_cli.main import EXIT_HTTP_ERROR, EXIT_RUNTIME_ERROR, EXIT_SUCCESS, create_parser, main
from simplehttp.schemas import RequestBuildError


@pytest.fixture(autouse=True)
def _isolated(monkeypatch, tmp_path):
    """No stray config files or proxy settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    for name in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")


class TestParseHeaders:
    def test_repeated_names_keep_order(self):
        headers = parse_header_args(["X-Test: 1", "Accept: */*", "x-test: 2"])
        assert headers.get_all("X-Test") == ["1", "2"]

    def test_value_may_contain_colon(self):
        headers = parse_header_args(["Referer: http://example/a"])
        assert headers.get_all("Referer") == ["http://example/a"]

    def test_malformed(self):
        with pytest.raises(RequestBuildError):
            parse_header_args(["no-colon-here"])


class TestParser:
    def test_post_requires_body(self):
        parser = create_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["post", "http://example/echo"])

    def test_no_command(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR


class TestRequestCommands:
    def test_get(self, local_server, capsys):
        code = main(["get", f"{local_server.base_url}/ok"])
        captured = capsys.readouterr()
        assert code == EXIT_SUCCESS
        assert captured.out == "hello\n"
        assert "HTTP 200" in captured.err

    def test_get_not_found(self, local_server, capsys):
        code = main(["get", f"{local_server.base_url}/missing"])
        assert code == EXIT_HTTP_ERROR

    def test_post_json_async(self, local_server, capsys):
        code = main([
            "post", f"{local_server.base_url}/echo",
            "--data", "abc",
            "-H", "X-Test: 1",
            "-H", "X-Test: 2",
            "--async",
            "--json",
        ])
        summary = json.loads(capsys.readouterr().out)
        assert code == EXIT_SUCCESS
        assert summary["status_code"] == 200
        assert summary["sent_headers"]["X-Test"] == ["1", "2"]
        assert summary["sent_body_length"] == 3
        echoed = json.loads(summary["body"])
        assert echoed["headers"]["X-Test"] == ["1", "2"]
        assert echoed["body"] == "abc"

    def test_post_data_file(self, local_server, tmp_path, capsys):
        payload = tmp_path / "body.bin"
        payload.write_bytes(b"from-file")
        code = main(["post", f"{local_server.base_url}/echo", "--data-file", str(payload)])
        assert code == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["body"] == "from-file"

    def test_unreachable_json_error(self, capsys):
        code = main(["get", f"http://127.0.0.1:{unused_port()}/", "--json"])
        summary = json.loads(capsys.readouterr().out)
        assert code == EXIT_RUNTIME_ERROR
        assert summary["error"]["code"] in ("CONNECTION_FAILED", "TIMEOUT")


class TestConfigCommand:
    def test_init_and_show(self, tmp_path, capsys):
        path = tmp_path / "simplehttp.yaml"
        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS
        assert path.exists()
        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR
        capsys.readouterr()

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS
        shown = json.loads(capsys.readouterr().out)
        assert shown["timeout"] == 10.0
        assert shown["max_workers"] == 64

    def test_missing_config_file(self, tmp_path, capsys):
        assert main(["--config", str(tmp_path / "absent.yaml"), "config", "--show"]) == EXIT_RUNTIME_ERROR


class TestEnvironmentLoading:
    """The CLI, not the library, reads SIMPLEHTTP_* and .env."""

    def test_dotenv_in_working_directory(self, tmp_path, monkeypatch, capsys):
        # Registered so teardown removes what load_dotenv sets
        monkeypatch.setenv("SIMPLEHTTP_USER_AGENT", "unset")
        monkeypatch.delenv("SIMPLEHTTP_USER_AGENT")
        (tmp_path / ".env").write_text("SIMPLEHTTP_USER_AGENT=from-dotenv/1.0\n")

        assert main(["config", "--show"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["user_agent"] == "from-dotenv/1.0"

    def test_env_overrides_file(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "simplehttp.yaml"
        path.write_text("client:\n  timeout: 2.0\n")
        monkeypatch.setenv("SIMPLEHTTP_TIMEOUT", "7.5")

        assert main(["--config", str(path), "config", "--show"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["timeout"] == 7.5

    def test_malformed_variable_is_a_config_error(self, monkeypatch, capsys):
        monkeypatch.setenv("SIMPLEHTTP_TIMEOUT", "abc")

        assert main(["config", "--show"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err
