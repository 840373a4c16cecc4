"""Unit tests for the events client (fake transport, no network)."""

from __future__ import annotations

import pytest

from pagerduty_events.client import DEFAULT_API_URL, EventClient
from pagerduty_events.config import EventsSettings
from pagerduty_events.event import EventPayload, EventType
from pagerduty_events.exceptions import (
    HttpStatusError,
    PreconditionError,
    ResponseFormatError,
    TransportError,
)
from pagerduty_events.transport import RequestsTransport


def test_client_defaults() -> None:
    client = EventClient()

    assert client.api_url == DEFAULT_API_URL
    assert client.timeout == 10
    assert client.dry_run is False


def test_client_rejects_negative_timeout() -> None:
    with pytest.raises(ValueError):
        EventClient(timeout=-1)


def test_trigger_requires_service_key(client, transport) -> None:
    with pytest.raises(PreconditionError) as exc_info:
        client.trigger(EventPayload().set_description("desc"))

    assert exc_info.value.field == "service_key"
    assert "triggering" in str(exc_info.value)
    assert transport.requests == []


def test_trigger_requires_description(client, transport, service_key: str) -> None:
    with pytest.raises(PreconditionError) as exc_info:
        client.trigger(EventPayload().set_service_key(service_key))

    assert exc_info.value.field == "description"
    assert transport.requests == []


@pytest.mark.parametrize("method", ["acknowledge", "resolve"])
def test_acknowledge_and_resolve_require_service_key(client, transport, method: str) -> None:
    with pytest.raises(PreconditionError) as exc_info:
        getattr(client, method)(EventPayload().set_incident_key("ikey"))

    assert exc_info.value.field == "service_key"
    assert transport.requests == []


@pytest.mark.parametrize("method", ["acknowledge", "resolve"])
def test_acknowledge_and_resolve_require_incident_key(
    client, transport, service_key: str, method: str
) -> None:
    with pytest.raises(PreconditionError) as exc_info:
        getattr(client, method)(EventPayload().set_service_key(service_key).set_incident_key(""))

    assert exc_info.value.field == "incident_key"
    assert transport.requests == []


def test_dry_run_trigger_returns_empty_mapping(transport, trigger_payload) -> None:
    client = EventClient(transport=transport, dry_run=True)

    assert client.trigger(trigger_payload) == {}
    assert transport.requests == []


@pytest.mark.parametrize("method", ["acknowledge", "resolve"])
def test_dry_run_acknowledge_and_resolve(transport, service_key: str, method: str) -> None:
    client = EventClient(transport=transport, dry_run=True)
    payload = EventPayload().set_service_key(service_key).set_incident_key("ikey")

    assert getattr(client, method)(payload) == {}
    assert transport.requests == []


def test_dry_run_still_checks_preconditions(transport) -> None:
    client = EventClient(transport=transport, dry_run=True)

    with pytest.raises(PreconditionError):
        client.trigger(EventPayload())


def test_trigger_posts_json_body(client, transport, trigger_payload, service_key: str) -> None:
    trigger_payload.set_client("nagios").set_detail("host", "srv01")

    response = client.trigger(trigger_payload)

    assert response == {"status": "success", "message": "Event processed"}
    assert len(transport.requests) == 1
    request = transport.requests[0]
    assert request.url == "https://events.example.test/create_event.json"
    assert request.headers == {"Content-type": "application/json"}
    assert request.timeout == 10
    assert request.json == {
        "service_key": service_key,
        "event_type": "trigger",
        "description": "desc",
        "details": {"host": "srv01"},
        "client": "nagios",
    }


@pytest.mark.parametrize(
    ("method", "event_type"),
    [("acknowledge", "acknowledge"), ("resolve", "resolve")],
)
def test_acknowledge_and_resolve_post_event_type(
    client, transport, service_key: str, method: str, event_type: str
) -> None:
    payload = EventPayload().set_service_key(service_key).set_incident_key("ikey")
    payload.set_client("ignored for non-trigger events")

    getattr(client, method)(payload)

    assert transport.requests[0].json == {
        "service_key": service_key,
        "event_type": event_type,
        "incident_key": "ikey",
    }


def test_zero_timeout_means_no_timeout(transport, trigger_payload) -> None:
    client = EventClient(timeout=0, transport=transport)

    client.trigger(trigger_payload)

    assert client.timeout == 0
    assert transport.requests[0].timeout is None


def test_trigger_writes_back_incident_key(client, transport, trigger_payload) -> None:
    transport.body = (
        b'{"status":"success","message":"Event processed","incident_key":"srv01/HTTP"}'
    )

    response = client.trigger(trigger_payload)

    assert response["incident_key"] == "srv01/HTTP"
    assert trigger_payload.incident_key == "srv01/HTTP"


def test_server_assigned_incident_key_allows_follow_up_acknowledge(
    client, transport, trigger_payload
) -> None:
    transport.body = b'{"status":"success","message":"Event processed","incident_key":"abc"}'

    client.trigger(trigger_payload)
    client.acknowledge(trigger_payload)

    assert transport.requests[1].json["event_type"] == "acknowledge"
    assert transport.requests[1].json["incident_key"] == "abc"


def test_response_without_incident_key_keeps_existing_one(
    client, transport, trigger_payload
) -> None:
    trigger_payload.set_incident_key("mine")

    client.trigger(trigger_payload)

    assert trigger_payload.incident_key == "mine"


@pytest.mark.parametrize("status_code", [400, 403, 500])
def test_non_200_status_raises(client, transport, trigger_payload, status_code: int) -> None:
    transport.status_code = status_code
    transport.body = b'{"status":"invalid event","message":"Event object is invalid"}'

    with pytest.raises(HttpStatusError) as exc_info:
        client.trigger(trigger_payload)

    assert exc_info.value.status_code == status_code
    assert "Event object is invalid" in exc_info.value.body
    assert str(status_code) in str(exc_info.value)


def test_400_raises_for_resolve(client, transport, service_key: str) -> None:
    transport.status_code = 400

    with pytest.raises(HttpStatusError) as exc_info:
        client.resolve(EventPayload().set_service_key(service_key).set_incident_key("ikey"))

    assert exc_info.value.status_code == 400


@pytest.mark.parametrize(
    "body",
    [b"", b"not json", b"{}", b"[]", b"0", b"false", b"null", b'""', b"[1, 2]"],
)
def test_invalid_response_body_raises(client, transport, trigger_payload, body: bytes) -> None:
    transport.body = body

    with pytest.raises(ResponseFormatError) as exc_info:
        client.trigger(trigger_payload)

    assert exc_info.value.body == body.decode()


def test_transport_error_propagates(client, transport, trigger_payload) -> None:
    transport.error = "Connection refused"

    with pytest.raises(TransportError, match="Connection refused"):
        client.trigger(trigger_payload)


def test_send_accepts_event_type_strings(client, transport, trigger_payload) -> None:
    client.send(trigger_payload, "trigger")

    assert transport.requests[0].json["event_type"] == EventType.TRIGGER.value


def test_from_settings(transport) -> None:
    settings = EventsSettings(
        _env_file=None,
        api_url="https://events.example.test/",
        timeout=3,
        dry_run=True,
    )

    client = EventClient.from_settings(settings, transport=transport)

    assert client.api_url == "https://events.example.test/"
    assert client.timeout == 3
    assert client.dry_run is True


def test_default_transport_is_requests_based() -> None:
    client = EventClient()

    assert isinstance(client._transport, RequestsTransport)
