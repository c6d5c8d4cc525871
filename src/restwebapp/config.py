"""
Configuration for the backend and the client.

Nothing here is a process-wide singleton: build an `AppConfig` (defaults,
`from_env()`, or `dataclasses.replace`) and pass it to `create_app()` or
`DataService.from_config()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Literal, Mapping, Optional

ENV_PREFIX = "RESTWEBAPP_"

PLACEHOLDER_BACKEND_URL = "PLACEHOLDER_BACKEND_URL"

EnvironmentKind = Literal["server", "browser-dev", "browser-prod"]


@dataclass(frozen=True)
class AppConfig:
    """
    Shared settings.

    Attributes:
        server_host: Host the backend listens on / the client talks to.
        http_port: Backend API port.
        frontend_port: Port of the front end development server.
        request_timeout_ms: Client request timeout in milliseconds.
        api_base_path: Prefix for every API route, e.g. "/api".
    """

    server_host: str = "localhost"
    http_port: int = 8081
    frontend_port: int = 8080
    request_timeout_ms: int = 5000
    api_base_path: str = "/api"

    @property
    def health_endpoint(self) -> str:
        return f"{self.api_prefix}/health"

    @property
    def info_endpoint(self) -> str:
        return f"{self.api_prefix}/info"

    @property
    def dummy_data_endpoint(self) -> str:
        return f"{self.api_prefix}/dummy-data"

    @property
    def local_backend_url(self) -> str:
        return f"http://{self.server_host}:{self.http_port}"

    @property
    def request_timeout_s(self) -> float:
        return self.request_timeout_ms / 1000.0

    @property
    def api_prefix(self) -> str:
        """Normalized base path: "/api" for "api/", "" for "/"."""
        base = self.api_base_path.strip("/")
        return f"/{base}" if base else ""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        """
        Load settings, letting RESTWEBAPP_<FIELD> variables override defaults.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Raises:
            ValueError: If an integer field cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            key = ENV_PREFIX + f.name.upper()
            raw = env.get(key)
            if raw is None:
                continue
            if f.type in (int, "int"):
                try:
                    values[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{key} must be an integer, got {raw!r}") from None
            else:
                values[f.name] = raw
        return cls(**values)


@dataclass(frozen=True)
class BuildInfo:
    """
    Build-time values. Production images set these through the environment.
    """

    backend_url: str = "http://localhost:8081"
    node_env: str = "development"
    build_time: str = "development"
    version: str = "1.0.0-dev"

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BuildInfo":
        env = os.environ if environ is None else environ
        default = cls()
        return cls(
            backend_url=env.get("BACKEND_URL", default.backend_url),
            node_env=env.get("NODE_ENV", default.node_env),
            build_time=env.get("BUILD_TIME", default.build_time),
            version=env.get("APP_VERSION", default.version),
        )


@dataclass(frozen=True)
class Environment:
    """Where the client runs, and the production URL it was built with."""

    kind: EnvironmentKind = "browser-dev"
    production_url_override: Optional[str] = None

    @classmethod
    def from_build(cls, build: BuildInfo) -> "Environment":
        if build.is_production:
            return cls(kind="browser-prod", production_url_override=build.backend_url)
        return cls(kind="browser-dev")


def resolve_backend_url(config: AppConfig, environment: Environment) -> str:
    """
    Resolve the backend base URL for the given environment.

    Raises:
        ValueError: On an unknown environment kind.
    """
    if environment.kind == "server":
        # The backend always talks to itself locally.
        return config.local_backend_url
    if environment.kind == "browser-dev":
        return config.local_backend_url
    if environment.kind == "browser-prod":
        override = (environment.production_url_override or "").strip()
        if override and override != PLACEHOLDER_BACKEND_URL:
            return override.rstrip("/")
        return config.local_backend_url
    raise ValueError(f"Unknown environment kind: {environment.kind!r}")
