"""
Console front end for the fetch flow.

`FetchController` applies the UI policy on top of the state machine: the
fetch trigger is enabled only after a healthy health check and while no
fetch is in flight. The render helpers turn the current state into text.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ..config import AppConfig, Environment
from .service import DataService, FetchError
from .state import Error, FetchState, FetchStateMachine, Initial, Loading, Success

logger = logging.getLogger(__name__)

TITLE = "KMP REST Web App"
SUBTITLE = "REST API + state machine demo"
PROMPT = "Click the button to fetch data from the backend"


class FetchController:
    """One UI session: a fetch state machine plus the health flag."""

    def __init__(self, service: DataService) -> None:
        self.service = service
        self.machine = FetchStateMachine()
        self.healthy = False

    @property
    def state(self) -> FetchState:
        return self.machine.state

    @property
    def can_fetch(self) -> bool:
        return self.healthy and not isinstance(self.state, Loading)

    async def refresh_health(self) -> bool:
        self.healthy = await self.service.check_health()
        return self.healthy

    async def fetch(self) -> bool:
        """
        Run one gated fetch.

        Returns:
            False if the trigger was disabled and nothing happened, else True.
        """
        if not self.can_fetch:
            logger.debug("fetch ignored (healthy=%s, state=%s)", self.healthy, self.state.kind.value)
            return False

        self.machine.begin_fetch()
        try:
            record = await self.service.fetch_data()
        except FetchError as exc:
            self.machine.on_failure(str(exc))
        except Exception as exc:
            # A fetch always resolves; never leave the session in Loading.
            logger.warning("fetch failed with unexpected %s: %s", type(exc).__name__, exc)
            self.machine.on_failure(str(exc) or type(exc).__name__)
        else:
            self.machine.on_success(record)
        return True


def button_label(state: FetchState) -> str:
    if isinstance(state, Loading):
        return "Loading..."
    if isinstance(state, (Initial, Success, Error)):
        return "Fetch Data from Backend"
    raise TypeError(f"Unknown fetch state: {state!r}")


def render_state(state: FetchState) -> List[str]:
    if isinstance(state, Initial):
        return [PROMPT]
    if isinstance(state, Loading):
        return ["Loading..."]
    if isinstance(state, Success):
        record = state.record
        return [
            "Fetched Data",
            f"  ID: {record.id}",
            f"  Name: {record.name}",
            f"  Description: {record.description}",
        ]
    if isinstance(state, Error):
        return ["Error", f"  {state.message}"]
    raise TypeError(f"Unknown fetch state: {state!r}")


def render(controller: FetchController) -> str:
    button = button_label(controller.state)
    if not controller.can_fetch:
        button += " (disabled)"
    lines = [
        TITLE,
        SUBTITLE,
        f"Backend: {controller.service.base_url}",
        f"Health: {'OK' if controller.healthy else 'UNAVAILABLE'}",
        f"[ {button} ]",
        "",
    ]
    lines.extend(render_state(controller.state))
    return "\n".join(lines)


async def run_console(
    config: AppConfig,
    environment: Optional[Environment] = None,
    *,
    service: Optional[DataService] = None,
) -> int:
    """
    Probe health, run one fetch if allowed, print the view.

    Returns:
        0 when the final state is Success, 1 otherwise.
    """
    controller = FetchController(service or DataService.from_config(config, environment))
    await controller.refresh_health()
    await controller.fetch()
    print(render(controller))
    return 0 if isinstance(controller.state, Success) else 1
