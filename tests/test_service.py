import asyncio

import pytest
import requests

from restwebapp.client import ApiInfo, DataService, FetchError
from restwebapp.config import AppConfig, Environment
from restwebapp.models import create_sample_data

from .helpers import FakeSession, make_response

SAMPLE_PAYLOAD = {
    "id": "sample-001",
    "name": "Sample Data",
    "description": "This is a sample data instance created for demonstration purposes.",
}


class TestCheckHealth:
    def test_ok_body_is_healthy(self, make_service):
        assert asyncio.run(make_service(make_response(200, "OK")).check_health()) is True

    @pytest.mark.parametrize("body", ["FAIL", "ok", "OK\n", ""])
    def test_other_body_is_unhealthy(self, make_service, body):
        assert asyncio.run(make_service(make_response(200, body)).check_health()) is False

    def test_non_2xx_is_unhealthy(self, make_service):
        assert asyncio.run(make_service(make_response(503, "OK")).check_health()) is False

    @pytest.mark.parametrize(
        "exc",
        [
            requests.ConnectionError("connection refused"),
            requests.Timeout("timed out"),
            RuntimeError("unexpected"),
        ],
    )
    def test_transport_failure_never_raises(self, make_service, exc):
        assert asyncio.run(make_service(exc).check_health()) is False

    def test_requests_health_url_with_timeout(self, config):
        session = FakeSession(make_response(200, "OK"))
        service = DataService.from_config(config, session=session)
        asyncio.run(service.check_health())
        assert session.calls == [
            {"method": "GET", "url": "http://localhost:8081/api/health", "timeout": 5.0}
        ]


class TestFetchData:
    def test_sample_record(self, make_service):
        record = asyncio.run(make_service(make_response(200, SAMPLE_PAYLOAD)).fetch_data())
        assert record == create_sample_data()

    def test_network_error_is_chained(self, make_service):
        cause = requests.ConnectionError("Connection refused by backend")
        with pytest.raises(FetchError) as excinfo:
            asyncio.run(make_service(cause).fetch_data())
        err = excinfo.value
        assert "Connection refused by backend" in str(err)
        assert str(err).startswith("Failed to fetch dummy data: ")
        assert err.cause is cause
        assert err.__cause__ is cause
        assert err.status_code is None

    def test_non_2xx_sets_status_code(self, make_service):
        with pytest.raises(FetchError) as excinfo:
            asyncio.run(make_service(make_response(500, {"detail": "boom"})).fetch_data())
        assert excinfo.value.status_code == 500
        assert excinfo.value.url == "http://localhost:8081/api/dummy-data"

    def test_malformed_json(self, make_service):
        with pytest.raises(FetchError) as excinfo:
            asyncio.run(make_service(make_response(200, "not json")).fetch_data())
        assert isinstance(excinfo.value.cause, ValueError)

    def test_wrong_shape(self, make_service):
        with pytest.raises(FetchError, match="name"):
            asyncio.run(make_service(make_response(200, {"id": "x", "description": "d"})).fetch_data())

    def test_invalid_record_passes_by_default(self, make_service):
        payload = {"id": " ", "name": "n", "description": "d"}
        record = asyncio.run(make_service(make_response(200, payload)).fetch_data())
        assert not record.is_valid()

    def test_invalid_record_rejected_when_validating(self, make_service):
        payload = {"id": " ", "name": "n", "description": "d"}
        with pytest.raises(FetchError, match="invalid record"):
            asyncio.run(make_service(make_response(200, payload), validate=True).fetch_data())


class TestFetchInfo:
    def test_info(self, make_service):
        payload = {"name": "svc", "version": "1.0.0", "endpoints": ["/api/dummy-data", "/api/health"]}
        info = asyncio.run(make_service(make_response(200, payload)).fetch_info())
        assert info == ApiInfo("svc", "1.0.0", ["/api/dummy-data", "/api/health"])

    def test_info_missing_key(self, make_service):
        with pytest.raises(FetchError, match="api info"):
            asyncio.run(make_service(make_response(200, {"endpoints": []})).fetch_info())


class TestFromConfig:
    def test_uses_config_paths_and_timeout(self):
        config = AppConfig(server_host="backend", http_port=9000, request_timeout_ms=250, api_base_path="/v2")
        service = DataService.from_config(config)
        assert service.base_url == "http://backend:9000"
        assert service.timeout_s == 0.25
        assert service.dummy_data_path == "/v2/dummy-data"

    def test_production_override(self):
        env = Environment(kind="browser-prod", production_url_override="https://api.example.org")
        assert DataService.from_config(AppConfig(), env).base_url == "https://api.example.org"


class TestUnexpectedErrors:
    def test_unexpected_session_error_is_wrapped(self, make_service):
        cause = RuntimeError("socket blew up")
        with pytest.raises(FetchError) as excinfo:
            asyncio.run(make_service(cause).fetch_data())
        assert "socket blew up" in str(excinfo.value)
        assert excinfo.value.cause is cause
        assert excinfo.value.__cause__ is cause

    def test_unexpected_error_on_info_is_wrapped(self, make_service):
        with pytest.raises(FetchError, match="socket blew up"):
            asyncio.run(make_service(RuntimeError("socket blew up")).fetch_info())

    @pytest.mark.parametrize("field", ["name", "version"])
    def test_info_non_string_field_rejected(self, make_service, field):
        payload = {"name": "svc", "version": "1.0.0", "endpoints": []}
        payload[field] = None
        with pytest.raises(FetchError, match=field):
            asyncio.run(make_service(make_response(200, payload)).fetch_info())
