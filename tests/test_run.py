import pytest
import requests

from restwebapp import run

from .helpers import make_response


class TestMain:
    def test_overrides_reach_client(self, monkeypatch):
        seen = {}

        def fake_client(config):
            seen["config"] = config
            return 0

        monkeypatch.setattr(run, "_run_client", fake_client)
        monkeypatch.setenv("RESTWEBAPP_REQUEST_TIMEOUT_MS", "1500")
        with pytest.raises(SystemExit) as excinfo:
            run.main(["--mode", "client", "--port", "9999", "--host", "127.0.0.1"])

        assert excinfo.value.code == 0
        assert seen["config"].http_port == 9999
        assert seen["config"].server_host == "127.0.0.1"
        assert seen["config"].request_timeout_ms == 1500

    def test_mode_is_required(self):
        with pytest.raises(SystemExit) as excinfo:
            run.main([])
        assert excinfo.value.code == 2


class TestHttpOk:
    def test_ok(self, monkeypatch):
        monkeypatch.setattr(run.requests, "get", lambda url, timeout: make_response(200, "OK"))
        assert run._http_ok("http://localhost:8081/api/health")

    def test_wrong_body(self, monkeypatch):
        monkeypatch.setattr(run.requests, "get", lambda url, timeout: make_response(200, "FAIL"))
        assert not run._http_ok("http://localhost:8081/api/health")

    def test_unreachable(self, monkeypatch):
        def refuse(url, timeout):
            raise requests.ConnectionError("refused")

        monkeypatch.setattr(run.requests, "get", refuse)
        assert not run._http_ok("http://localhost:8081/api/health")

    def test_wait_times_out(self, monkeypatch):
        monkeypatch.setattr(run, "_http_ok", lambda url: False)
        with pytest.raises(RuntimeError, match="Timed out"):
            run._wait_for_http("http://localhost:8081/api/health", deadline_s=0.05, poll_s=0.01)


class TestLogLevel:
    def test_unknown_level_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            run.main(["--mode", "client", "--log-level", "LOUD"])
        assert excinfo.value.code == 2
        assert "--log-level" in capsys.readouterr().err

    def test_level_is_case_insensitive(self, monkeypatch):
        monkeypatch.setattr(run, "_run_client", lambda config: 0)
        with pytest.raises(SystemExit) as excinfo:
            run.main(["--mode", "client", "--log-level", "debug"])
        assert excinfo.value.code == 0
