"""
Fetch state machine.

    Initial --begin_fetch--> Loading --on_success--> Success(record)
                                     --on_failure--> Error(message)
    Success/Error --begin_fetch--> Loading

Nothing leads back to Initial, and begin_fetch is rejected while Loading: the
machine does not queue or coalesce overlapping fetches, callers must not start
one while another is in flight.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Set, Union

from ..models import Record

logger = logging.getLogger(__name__)


class FetchStateKind(str, Enum):
    INITIAL = "initial"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Initial:
    kind = FetchStateKind.INITIAL


@dataclass(frozen=True)
class Loading:
    kind = FetchStateKind.LOADING


@dataclass(frozen=True)
class Success:
    record: Record
    kind = FetchStateKind.SUCCESS


@dataclass(frozen=True)
class Error:
    message: str
    kind = FetchStateKind.ERROR


FetchState = Union[Initial, Loading, Success, Error]

_ALLOWED: Dict[FetchStateKind, Set[FetchStateKind]] = {
    FetchStateKind.INITIAL: {FetchStateKind.LOADING},
    FetchStateKind.LOADING: {FetchStateKind.SUCCESS, FetchStateKind.ERROR},
    FetchStateKind.SUCCESS: {FetchStateKind.LOADING},
    FetchStateKind.ERROR: {FetchStateKind.LOADING},
}


class InvalidTransitionError(RuntimeError):
    """
    Raised when a transition is not allowed from the current state.
    """

    def __init__(self, current: FetchStateKind, target: FetchStateKind) -> None:
        super().__init__(f"Cannot move from {current.value} to {target.value}")
        self.current = current
        self.target = target


class FetchStateMachine:
    """Holds the single active FetchState of one UI session."""

    def __init__(self) -> None:
        self._state: FetchState = Initial()

    @property
    def state(self) -> FetchState:
        return self._state

    def can_transition(self, target: FetchStateKind) -> bool:
        return target in _ALLOWED[self._state.kind]

    def can_begin_fetch(self) -> bool:
        return self.can_transition(FetchStateKind.LOADING)

    def begin_fetch(self) -> FetchState:
        return self._move(Loading())

    def on_success(self, record: Record) -> FetchState:
        return self._move(Success(record))

    def on_failure(self, message: str) -> FetchState:
        return self._move(Error(message))

    def _move(self, target: FetchState) -> FetchState:
        if not self.can_transition(target.kind):
            raise InvalidTransitionError(self._state.kind, target.kind)
        logger.debug("fetch state %s -> %s", self._state.kind.value, target.kind.value)
        self._state = target
        return target
