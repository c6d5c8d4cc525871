#!/usr/bin/env python3
"""
REST Web App run script.

Modes:
- server: serve the API in-process with uvicorn
- client: probe health, fetch the record once, print the result
- all:    start the server as a subprocess, wait for it to become healthy,
          run the client, then shut the server down
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import os
import signal
import subprocess
import sys
import time
from dataclasses import dataclass
from typing import Optional

import requests

from restwebapp import __version__
from restwebapp.config import AppConfig, BuildInfo, Environment

logger = logging.getLogger("restwebapp.run")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class ProcSpec:
    """Subprocess specification."""
    name: str
    cmd: list[str]
    cwd: Optional[str] = None
    env: Optional[dict[str, str]] = None


def _project_env() -> dict[str, str]:
    """
    Build an env for subprocesses.

    Ensures unbuffered output so logs appear immediately.
    """
    env = dict(os.environ)
    env["PYTHONUNBUFFERED"] = "1"
    return env


def _popen(spec: ProcSpec) -> subprocess.Popen:
    env = _project_env()
    if spec.env:
        env.update(spec.env)

    # Inherit stdout/stderr so the server logs show up in the terminal.
    return subprocess.Popen(spec.cmd, cwd=spec.cwd, env=env)


def _http_ok(url: str, timeout_s: float = 1.5) -> bool:
    """
    Check if the health endpoint answers OK.

    \\param url URL to check.
    \\param timeout_s Timeout in seconds.
    \\return True if reachable and the body is "OK", else False.
    """
    try:
        resp = requests.get(url, timeout=timeout_s)
    except requests.RequestException:
        return False
    return resp.status_code == 200 and resp.text == "OK"


def _wait_for_http(url: str, deadline_s: float = 30.0, poll_s: float = 0.25) -> None:
    """
    Wait for an HTTP endpoint to become healthy.

    \\throws RuntimeError if deadline expires.
    """
    start = time.time()
    while time.time() - start < deadline_s:
        if _http_ok(url):
            return
        time.sleep(poll_s)
    raise RuntimeError(f"Timed out waiting for {url}")


def _terminate_process(proc: subprocess.Popen, name: str, grace_s: float = 6.0) -> None:
    """
    Terminate a process gracefully, then force kill if needed.
    """
    if proc.poll() is not None:
        return

    logger.info("Stopping %s (pid %d)", name, proc.pid)
    try:
        if os.name == "nt":
            proc.terminate()
        else:
            proc.send_signal(signal.SIGTERM)
    except ProcessLookupError:
        return

    try:
        proc.wait(timeout=grace_s)
    except subprocess.TimeoutExpired:
        logger.warning("%s did not exit within %.1fs; killing", name, grace_s)
        proc.kill()
        proc.wait()


def _run_server(config: AppConfig, log_level: str) -> int:
    import uvicorn

    from restwebapp.server import create_app

    logger.info("Starting REST Web App backend on %s:%d", config.server_host, config.http_port)
    uvicorn.run(
        create_app(config),
        host=config.server_host,
        port=config.http_port,
        log_level=log_level.lower(),
    )
    return 0


def _run_client(config: AppConfig) -> int:
    from restwebapp.client import run_console

    environment = Environment.from_build(BuildInfo.from_env())
    return asyncio.run(run_console(config, environment))


def _run_all(config: AppConfig, log_level: str) -> int:
    """
    Start the backend in a subprocess, run the client against it, stop the backend.
    """
    server_spec = ProcSpec(
        name="server",
        cmd=[
            sys.executable,
            "-m",
            "restwebapp.run",
            "--mode",
            "server",
            "--host",
            config.server_host,
            "--port",
            str(config.http_port),
            "--log-level",
            log_level,
        ],
    )
    server_proc = _popen(server_spec)

    try:
        health_url = f"{config.local_backend_url}{config.health_endpoint}"
        try:
            _wait_for_http(health_url, deadline_s=30.0)
        except RuntimeError as e:
            logger.error("Server failed to become healthy: %s", e)
            if server_proc.poll() is not None:
                logger.error("Server process exited early with code %s", server_proc.returncode)
            return 1

        # The client always talks to the locally started server here.
        from restwebapp.client import run_console

        return asyncio.run(run_console(config, Environment(kind="browser-dev")))
    except KeyboardInterrupt:
        logger.info("Ctrl+C received; shutting down...")
        return 0
    finally:
        _terminate_process(server_proc, server_spec.name)


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="REST Web App runner")
    parser.add_argument("--version", action="version", version=f"REST Web App {__version__}")
    parser.add_argument("--mode", choices=["server", "client", "all"], required=True, help="What to run")
    parser.add_argument("--host", type=str, default=None, help="Backend host (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="Backend port (overrides config)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="INFO",
        help="Logging level",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = AppConfig.from_env()
    if args.host is not None:
        config = dataclasses.replace(config, server_host=args.host)
    if args.port is not None:
        config = dataclasses.replace(config, http_port=args.port)

    if args.mode == "server":
        raise SystemExit(_run_server(config, args.log_level))
    if args.mode == "client":
        raise SystemExit(_run_client(config))
    raise SystemExit(_run_all(config, args.log_level))


if __name__ == "__main__":
    main()
