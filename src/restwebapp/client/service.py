"""
# Backend HTTP client

Thin wrapper around the backend routes:

- GET /api/health      -> "OK"
- GET /api/info        -> {"name", "version", "endpoints"}
- GET /api/dummy-data  -> {"id", "name", "description"}

## Usage
import asyncio
from restwebapp.client import DataService
from restwebapp.config import AppConfig

service = DataService.from_config(AppConfig())
print(asyncio.run(service.check_health()))
print(asyncio.run(service.fetch_data()))
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import requests

from ..config import AppConfig, Environment, resolve_backend_url
from ..models import Record

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """
    Raised when fetching from the backend fails.

    Transport errors, non-2xx responses, malformed bodies and any other failure
    while talking to the backend all end up here;
    `status_code` is only set for non-2xx responses.
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.status_code = status_code
        self.url = url
        if cause is not None:
            self.__cause__ = cause


class _StatusError(RuntimeError):
    """A non-2xx response, wrapped into FetchError by the public operations."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code
        self.url = url


@dataclass(frozen=True)
class ApiInfo:
    """
    Client-side representation of GET /api/info.
    """

    name: str
    version: str
    endpoints: List[str]

    @staticmethod
    def from_payload(payload: Any) -> "ApiInfo":
        """
        Build ApiInfo from a decoded JSON object.

        Raises:
            ValueError: If a field is missing or has the wrong type.
        """
        if not isinstance(payload, dict):
            raise ValueError(f"Expected JSON object for info, got: {type(payload).__name__}")
        for key in ("name", "version"):
            if not isinstance(payload.get(key), str):
                raise ValueError(f"Expected payload['{key}'] to be a string")
        endpoints = payload.get("endpoints")
        if not isinstance(endpoints, list) or not all(isinstance(e, str) for e in endpoints):
            raise ValueError("Expected payload['endpoints'] to be a list of strings")
        return ApiInfo(
            name=payload["name"],
            version=payload["version"],
            endpoints=list(endpoints),
        )


@dataclass(frozen=True)
class DataService:
    """
    Client for the backend endpoints.

    Attributes:
        base_url: Backend base URL, e.g. "http://localhost:8081"
        timeout_s: Request timeout in seconds.
        session: Optional requests.Session (or compatible) for connection reuse.
        validate: Reject records that fail Record.is_valid().
        health_path: Route of the health check.
        info_path: Route of the info endpoint.
        dummy_data_path: Route of the dummy-data endpoint.
    """

    base_url: str
    timeout_s: float = 5.0
    session: Optional[Any] = None
    validate: bool = False
    health_path: str = "/api/health"
    info_path: str = "/api/info"
    dummy_data_path: str = "/api/dummy-data"

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        environment: Optional[Environment] = None,
        *,
        session: Optional[Any] = None,
        validate: bool = False,
    ) -> "DataService":
        return cls(
            base_url=resolve_backend_url(config, environment or Environment()),
            timeout_s=config.request_timeout_s,
            session=session,
            validate=validate,
            health_path=config.health_endpoint,
            info_path=config.info_endpoint,
            dummy_data_path=config.dummy_data_endpoint,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}{path}"

    def _get(self, path: str) -> Any:
        """
        Perform a GET and return the response.

        Raises:
            _StatusError: If the server returns a non-2xx response.
            requests.RequestException: For network errors/timeouts.
        """
        url = self._url(path)
        sess = self.session or requests

        resp = sess.request(method="GET", url=url, timeout=self.timeout_s)
        if not (200 <= resp.status_code < 300):
            raise _StatusError(resp.status_code, url)
        return resp

    # -------------------------
    # Blocking calls
    # -------------------------

    def health(self) -> bool:
        """GET /api/health; never raises."""
        try:
            return self._get(self.health_path).text == "OK"
        except Exception as exc:
            logger.warning("Health check against %s failed: %s", self.base_url, exc)
            return False

    def dummy_data(self) -> Record:
        """
        GET /api/dummy-data, parsed into a Record.

        Raises:
            FetchError: On transport error, non-2xx status, malformed body or any
                other error raised while talking to the backend.
        """
        try:
            record = Record.from_dict(self._get(self.dummy_data_path).json())
        except Exception as exc:
            raise self._fetch_error("Failed to fetch dummy data", self.dummy_data_path, exc) from exc

        if self.validate and not record.is_valid():
            raise FetchError(
                f"Failed to fetch dummy data: invalid record {record!r}",
                url=self._url(self.dummy_data_path),
            )
        return record

    def info(self) -> ApiInfo:
        """
        GET /api/info, parsed into ApiInfo.

        Raises:
            FetchError: On transport error, non-2xx status, malformed body or any
                other error raised while talking to the backend.
        """
        try:
            return ApiInfo.from_payload(self._get(self.info_path).json())
        except Exception as exc:
            raise self._fetch_error("Failed to fetch api info", self.info_path, exc) from exc

    def _fetch_error(self, prefix: str, path: str, exc: BaseException) -> FetchError:
        logger.warning("%s from %s: %s", prefix, self.base_url, exc)
        status_code = exc.status_code if isinstance(exc, _StatusError) else None
        return FetchError(f"{prefix}: {exc}", cause=exc, status_code=status_code, url=self._url(path))

    # -------------------------
    # Async operations
    # -------------------------

    async def check_health(self) -> bool:
        return await asyncio.to_thread(self.health)

    async def fetch_data(self) -> Record:
        return await asyncio.to_thread(self.dummy_data)

    async def fetch_info(self) -> ApiInfo:
        return await asyncio.to_thread(self.info)
