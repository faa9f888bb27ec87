"""Unit tests for the launcher CLI."""

import webbrowser

from frameprint import cli


class TestParser:
    def test_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.port == 8080
        assert args.addr == "localhost"

    def test_overrides(self):
        args = cli.build_parser().parse_args(["--port", "9000", "--addr", "0.0.0.0", "--no-browser"])
        assert args.port == 9000
        assert args.addr == "0.0.0.0"
        assert args.no_browser is True


class TestMain:
    def test_runs_uvicorn_without_browser(self, monkeypatch):
        calls = {}

        def fake_run(target, **kwargs):
            calls["target"] = target
            calls.update(kwargs)

        monkeypatch.setattr(cli.uvicorn, "run", fake_run)
        cli.main(["--no-browser", "--port", "9123"])
        assert calls["target"] == "frameprint.main:app"
        assert calls["port"] == 9123
        assert calls["host"] == "localhost"


class TestOpenBrowser:
    def test_success(self, monkeypatch):
        monkeypatch.setattr(webbrowser, "open", lambda url: True)
        assert cli.open_browser("http://localhost:8080") is True

    def test_failure_logged(self, monkeypatch):
        def broken(url):
            raise webbrowser.Error("no browser")

        monkeypatch.setattr(webbrowser, "open", broken)
        assert cli.open_browser("http://localhost:8080") is False
