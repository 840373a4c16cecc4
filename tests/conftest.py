"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pagerduty_events.client import EventClient
from pagerduty_events.event import EventPayload
from pagerduty_events.exceptions import TransportError
from pagerduty_events.transport import Transport, TransportResponse

SERVICE_KEY = "12345678901234567890123456789012"


@dataclass
class RecordedRequest:
    url: str
    headers: dict[str, str]
    body: bytes
    timeout: float | None

    @property
    def json(self) -> Any:
        return json.loads(self.body)


@dataclass
class FakeTransport(Transport):
    """In-memory transport that returns a canned response and records requests."""

    status_code: int = 200
    body: bytes = b'{"status": "success", "message": "Event processed"}'
    error: str | None = None
    requests: list[RecordedRequest] = field(default_factory=list)

    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
        timeout: float | None,
    ) -> TransportResponse:
        self.requests.append(
            RecordedRequest(url=url, headers=dict(headers), body=body, timeout=timeout)
        )
        if self.error is not None:
            raise TransportError(self.error)
        return TransportResponse(status_code=self.status_code, body=self.body)


@pytest.fixture
def service_key() -> str:
    return SERVICE_KEY


@pytest.fixture
def transport() -> FakeTransport:
    """Provide a transport answering 200 with a minimal success body."""
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> EventClient:
    """Provide a client wired to the fake transport."""
    return EventClient(api_url="https://events.example.test/create_event.json", transport=transport)


@pytest.fixture
def trigger_payload(service_key: str) -> EventPayload:
    """Provide a payload with the fields a trigger requires."""
    return EventPayload().set_service_key(service_key).set_description("desc")
