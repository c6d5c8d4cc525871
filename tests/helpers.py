from __future__ import annotations

import json
from typing import Any, List, Optional, Union

import requests


def make_response(status_code: int = 200, body: Union[str, Any] = "", url: str = "") -> requests.Response:
    """Build a real requests.Response with the given status and body."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.url = url
    if not isinstance(body, str):
        body = json.dumps(body)
    resp._content = body.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """
    requests.Session stand-in.

    Each entry in `outcomes` is either a Response to return or an exception
    to raise, consumed in order; the last one repeats.
    """

    def __init__(self, *outcomes: Union[requests.Response, BaseException]) -> None:
        self.outcomes = list(outcomes)
        self.calls: List[dict] = []

    def request(self, method: str, url: str, timeout: Optional[float] = None, **kwargs: Any):
        self.calls.append({"method": method, "url": url, "timeout": timeout})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
