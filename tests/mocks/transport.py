"""Mock HTTP transport for testing"""

import json
from typing import Any, Dict, List, Optional, Union

from roteiro.providers.transport import HttpResponse, HttpTransport


def json_response(data: Any, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, body=json.dumps(data).encode("utf-8"))


def text_response(text: str, status: int = 200) -> HttpResponse:
    return HttpResponse(status=status, body=text.encode("utf-8"))


class MockTransport(HttpTransport):
    """
    Replays queued responses and records every request.

    Queue HttpResponse objects or exceptions; an exception is raised
    instead of returning. Running past the queue is a test bug and fails
    loudly.
    """

    def __init__(self, responses: Optional[List[Union[HttpResponse, Exception]]] = None):
        self.calls: List[Dict[str, Any]] = []
        self.responses: List[Union[HttpResponse, Exception]] = list(responses or [])
        self.closed = False

    def add_response(self, response: Union[HttpResponse, Exception]):
        self.responses.append(response)

    def add_json(self, data: Any, status: int = 200):
        self.responses.append(json_response(data, status))

    async def request(self, method, url, *, headers=None, params=None, json=None) -> HttpResponse:
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "params": params,
            "json": json,
        })
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    async def close(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def last_call(self) -> Dict[str, Any]:
        return self.calls[-1]
