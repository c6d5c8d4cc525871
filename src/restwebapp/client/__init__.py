from .app import FetchController, render, run_console
from .service import ApiInfo, DataService, FetchError
from .state import (
    Error,
    FetchState,
    FetchStateKind,
    FetchStateMachine,
    Initial,
    InvalidTransitionError,
    Loading,
    Success,
)

__all__ = [
    "ApiInfo",
    "DataService",
    "Error",
    "FetchController",
    "FetchError",
    "FetchState",
    "FetchStateKind",
    "FetchStateMachine",
    "Initial",
    "InvalidTransitionError",
    "Loading",
    "Success",
    "render",
    "run_console",
]
