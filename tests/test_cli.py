import importlib

import httpx
import pytest
from unittest.mock import patch

from http_echo import cli
from http_echo.main import create_server

RealAsyncClient = httpx.AsyncClient


def asgi_client_factory(version: str):
    """AsyncClient replacement that talks to an in-process app"""
    app = create_server("localhost:3000", version).handler

    def factory(**kwargs):
        return RealAsyncClient(transport=httpx.ASGITransport(app=app), **kwargs)
    return factory


def failing_client_factory(**kwargs):
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)
    return RealAsyncClient(transport=httpx.MockTransport(refuse), **kwargs)


class TestProbe:
    def test_probe_prints_version(self, capsys):
        with patch("http_echo.cli.httpx.AsyncClient", side_effect=asgi_client_factory("9.9.9")):
            code = cli.main(["probe", "--url", "http://test/"])

        assert code == 0
        out = capsys.readouterr().out
        assert "9.9.9" in out
        assert "chatset=utf-8" in out

    def test_probe_connection_error(self, capsys):
        with patch("http_echo.cli.httpx.AsyncClient", side_effect=failing_client_factory):
            code = cli.main(["probe", "--url", "http://nowhere"])

        assert code == 1
        assert "Cannot connect" in capsys.readouterr().err

    def test_probe_non_200(self, capsys):
        def not_found(request):
            return httpx.Response(404)

        def factory(**kwargs):
            return RealAsyncClient(transport=httpx.MockTransport(not_found), **kwargs)

        with patch("http_echo.cli.httpx.AsyncClient", side_effect=factory):
            code = cli.main(["probe", "--url", "http://test"])

        assert code == 1
        assert "404" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "body, content_type",
        [
            (b"not json", "text/plain"),
            (b"[\"1.0.0\"]", "application/json"),
            (b"\"1.0.0\"", "application/json"),
        ],
    )
    def test_probe_body_not_json_object(self, capsys, body, content_type):
        def reply(request):
            return httpx.Response(200, content=body, headers={"Content-Type": content_type})

        def factory(**kwargs):
            return RealAsyncClient(transport=httpx.MockTransport(reply), **kwargs)

        with patch("http_echo.cli.httpx.AsyncClient", side_effect=factory):
            code = cli.main(["probe", "--url", "http://test"])

        assert code == 1
        assert "did not return a JSON object" in capsys.readouterr().err

    def test_probe_bad_env_port_without_url(self, capsys):
        with patch.object(cli.Config, "ECHO_PORT", "abc"):
            code = cli.main(["probe"])

        assert code == 1
        assert "ECHO_PORT" in capsys.readouterr().err


class TestServe:
    def test_serve_uses_arguments(self):
        with patch("http_echo.main.serve") as mock_serve:
            code = cli.main(["serve", "--addr", ":8081", "--version", "2.0.0", "--stdlib"])

        assert code == 0
        config = mock_serve.call_args[0][0]
        assert config.addr == ":8081"
        assert mock_serve.call_args[1]["stdlib"] is True

    def test_serve_defaults_from_config(self):
        with patch("http_echo.main.serve") as mock_serve, \
             patch.object(cli.Config, "ECHO_HOST", "0.0.0.0"), \
             patch.object(cli.Config, "ECHO_PORT", "5000"), \
             patch.object(cli.Config, "ECHO_VERSION", "from-env"):
            cli.main(["serve"])

        config = mock_serve.call_args[0][0]
        assert config.addr == "0.0.0.0:5000"
        assert mock_serve.call_args[1]["stdlib"] is False

    def test_serve_bind_error_exits_nonzero(self):
        with patch("http_echo.main.serve", side_effect=OSError("Address already in use")):
            code = cli.main(["serve", "--addr", "127.0.0.1:1"])
        assert code == 1

    def test_explicit_addr_ignores_bad_env_port(self):
        with patch("http_echo.main.serve") as mock_serve, \
             patch.object(cli.Config, "ECHO_PORT", "abc"):
            code = cli.main(["serve", "--addr", "127.0.0.1:8089"])

        assert code == 0
        assert mock_serve.call_args[0][0].addr == "127.0.0.1:8089"

    def test_bad_env_port_without_addr_exits_nonzero(self):
        with patch("http_echo.main.serve") as mock_serve, \
             patch.object(cli.Config, "ECHO_PORT", "abc"):
            code = cli.main(["serve"])

        assert code == 1
        mock_serve.assert_not_called()

    def test_malformed_addr_exits_nonzero(self):
        with patch("http_echo.main.uvicorn.run") as mock_run:
            code = cli.main(["serve", "--addr", "localhost"])

        assert code == 1
        mock_run.assert_not_called()


def test_main_module_imports_with_bad_env_port():
    import http_echo.main

    with patch.object(cli.Config, "ECHO_PORT", "abc"):
        module = importlib.reload(http_echo.main)

    assert module.app is not None


def test_command_required():
    with pytest.raises(SystemExit):
        cli.main([])
