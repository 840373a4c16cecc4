"""Client for sending events to the PagerDuty generic Events API.

Example response for every event type::

    {
        "status": "success",
        "message": "Event processed",
        "incident_key": "srv01/HTTP"
    }
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pagerduty_events.event import EventPayload, EventType
from pagerduty_events.exceptions import HttpStatusError, PreconditionError, ResponseFormatError
from pagerduty_events.transport import RequestsTransport, Transport

if TYPE_CHECKING:
    from pagerduty_events.config import EventsSettings

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://events.pagerduty.com/generic/2010-04-15/create_event.json"
DEFAULT_TIMEOUT = 10.0

_VERBS: dict[EventType, str] = {
    EventType.TRIGGER: "triggering",
    EventType.ACKNOWLEDGE: "acknowledging",
    EventType.RESOLVE: "resolving",
}


class EventClient:
    """Sends trigger, acknowledge and resolve events.

    Each call makes exactly one POST request and blocks until it completes.
    Nothing is retried; callers own retry policy.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float | None = DEFAULT_TIMEOUT,
        *,
        transport: Transport | None = None,
        dry_run: bool = False,
    ) -> None:
        """Initialize the client.

        Args:
            api_url: Events endpoint to POST to.
            timeout: Seconds allowed for the whole exchange, connection included;
                0 or None disables the limit.
            transport: HTTP transport; defaults to a `RequestsTransport`.
            dry_run: Render payloads but skip the request and return ``{}``.

        Raises:
            ValueError: If timeout is negative.
        """
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be >= 0")

        self._api_url = api_url
        self._timeout = timeout or None
        self._transport = transport or RequestsTransport()
        self._dry_run = dry_run

    @classmethod
    def from_settings(
        cls,
        settings: EventsSettings,
        *,
        transport: Transport | None = None,
    ) -> EventClient:
        return cls(
            api_url=settings.api_url,
            timeout=settings.timeout,
            transport=transport,
            dry_run=settings.dry_run,
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def timeout(self) -> float:
        """Configured timeout in seconds; 0 means no timeout."""

        return self._timeout or 0

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def trigger(self, payload: EventPayload) -> dict[str, Any]:
        """Trigger a new incident or add to an open one with the same incident key."""

        return self.send(payload, EventType.TRIGGER)

    def acknowledge(self, payload: EventPayload) -> dict[str, Any]:
        """Acknowledge the incident identified by the payload's incident key."""

        return self.send(payload, EventType.ACKNOWLEDGE)

    def resolve(self, payload: EventPayload) -> dict[str, Any]:
        """Resolve the incident identified by the payload's incident key."""

        return self.send(payload, EventType.RESOLVE)

    def send(self, payload: EventPayload, event_type: EventType | str) -> dict[str, Any]:
        """Check preconditions for ``event_type`` and send the event.

        If the response carries an ``incident_key`` it is written back to
        ``payload.incident_key``, so a trigger without a key can be followed by
        an acknowledge or resolve on the same payload.

        Returns:
            The decoded response object (``{}`` in dry-run mode).

        Raises:
            PreconditionError: A required field is missing. Raised before any I/O.
            TransportError: The request could not be completed.
            HttpStatusError: The API answered with a status other than 200.
            ResponseFormatError: The body is not a non-empty JSON object.
        """
        kind = EventType(event_type)
        _check_preconditions(payload, kind)

        data = payload.to_dict(kind)
        if self._dry_run:
            logger.info("Dry run; event not sent", extra={"event_type": kind.value})
            return {}

        logger.debug("Sending event", extra={"event_type": kind.value, "url": self._api_url})
        resp = self._transport.post(
            self._api_url,
            headers={"Content-type": "application/json"},
            body=json.dumps(data).encode("utf-8"),
            timeout=self._timeout,
        )

        if resp.status_code != 200:
            raise HttpStatusError(resp.status_code, resp.text)

        result = _decode_response(resp.text)
        incident_key = result.get("incident_key")
        if incident_key is not None:
            payload.incident_key = incident_key

        logger.info(
            "Event sent",
            extra={
                "event_type": kind.value,
                "status": result.get("status"),
                "incident_key": payload.incident_key,
            },
        )
        return result


def _check_preconditions(payload: EventPayload, event_type: EventType) -> None:
    verb = _VERBS[event_type]
    if not payload.service_key:
        raise PreconditionError(
            "service_key", f"A service_key must be provided before {verb} an event"
        )

    if event_type is EventType.TRIGGER:
        if not payload.description:
            raise PreconditionError(
                "description", f"A description must be provided before {verb} an event"
            )
    elif not payload.incident_key:
        raise PreconditionError(
            "incident_key", f"An incident_key must be provided before {verb} an event"
        )


def _decode_response(text: str) -> dict[str, Any]:
    try:
        decoded = json.loads(text)
    except ValueError as exc:
        raise ResponseFormatError(text) from exc

    # Any falsy document ({}, [], 0, false, null) counts as malformed.
    if not decoded or not isinstance(decoded, dict):
        raise ResponseFormatError(text)
    return decoded
