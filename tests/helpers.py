"""Shared test helpers for neocities_cli tests."""

from __future__ import annotations

from typing import Any

import httpx


def json_response(status_code: int, body: Any) -> httpx.Response:
    """Build a JSON response."""
    return httpx.Response(status_code, json=body)


class RecordingHandler:
    """httpx.MockTransport handler that serves queued responses.

    Every request is recorded; when the queue is empty a plain success
    body is returned.
    """

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def queue(self, *responses: httpx.Response | Exception) -> None:
        self.responses.extend(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return json_response(200, {"result": "success"})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]
