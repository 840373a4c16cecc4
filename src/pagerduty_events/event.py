"""Event payload for the PagerDuty generic Events API.

An `EventPayload` holds the fields of one alert event and renders the minimal
JSON body for a given `EventType`. Validation happens when a field is
assigned, so a payload that exists is always well-formed; whether it is
complete enough for a particular event type is checked by the client.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pagerduty_events.exceptions import ValidationError

SERVICE_KEY_LENGTH = 32
MAX_DESCRIPTION_LENGTH = 1024

_FIELDS: tuple[str, ...] = (
    "service_key",
    "description",
    "incident_key",
    "client",
    "client_url",
    "details",
)


class EventType(str, Enum):
    TRIGGER = "trigger"
    ACKNOWLEDGE = "acknowledge"
    RESOLVE = "resolve"


class EventPayload:
    """One trigger/acknowledge/resolve event.

    Fields:
        service_key: The 32 character GUID of a "Generic API" service. Required
            for every event type.
        description: Short description of the problem, used in phone calls,
            SMS messages, alert emails and the incidents table. Required for
            trigger. At most 1024 characters.
        incident_key: De-duplication key. Required for acknowledge and
            resolve; optional for trigger, where the API assigns one if absent.
        client: Name of the monitoring client triggering the event (trigger only).
        client_url: URL of the monitoring client (trigger only).
        details: Arbitrary JSON-serializable data included in the incident log.

    Setters return the payload itself so configuration can be chained::

        payload = EventPayload().set_service_key(key).set_description("disk full")
    """

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._service_key: str | None = None
        self._description: str | None = None
        self._incident_key: Any = None
        self._client: Any = None
        self._client_url: Any = None
        self._details: dict[str, Any] = {}

        if initial is None:
            return
        if not isinstance(initial, Mapping):
            raise ValidationError("Expected a mapping")

        for name in _FIELDS:
            value = initial.get(name)
            if value is not None:
                setattr(self, name, value)

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{name}={getattr(self, name)!r}" for name in _FIELDS if getattr(self, name)
        )
        return f"{type(self).__name__}({fields})"

    @property
    def service_key(self) -> str | None:
        return self._service_key

    @service_key.setter
    def service_key(self, key: str) -> None:
        if not isinstance(key, str) or len(key) != SERVICE_KEY_LENGTH:
            raise ValidationError(
                f"Service key must be a {SERVICE_KEY_LENGTH} character GUID string"
            )
        self._service_key = key

    @property
    def description(self) -> str | None:
        return self._description

    @description.setter
    def description(self, description: str) -> None:
        if not isinstance(description, str) or len(description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                "Description must be a string of at most "
                f"{MAX_DESCRIPTION_LENGTH} characters"
            )
        self._description = description

    @property
    def incident_key(self) -> Any:
        return self._incident_key

    @incident_key.setter
    def incident_key(self, key: Any) -> None:
        self._incident_key = key

    @property
    def client(self) -> Any:
        return self._client

    @client.setter
    def client(self, client: Any) -> None:
        self._client = client

    @property
    def client_url(self) -> Any:
        return self._client_url

    @client_url.setter
    def client_url(self, url: Any) -> None:
        self._client_url = url

    @property
    def details(self) -> dict[str, Any]:
        return self._details

    @details.setter
    def details(self, details: Mapping[str, Any] | None) -> None:
        if details is None:
            self._details = {}
            return
        if not isinstance(details, Mapping):
            raise ValidationError("Details must be a mapping")
        self._details = dict(details)

    def set_service_key(self, key: str) -> EventPayload:
        self.service_key = key
        return self

    def set_description(self, description: str) -> EventPayload:
        self.description = description
        return self

    def set_incident_key(self, key: Any) -> EventPayload:
        self.incident_key = key
        return self

    def set_client(self, client: Any) -> EventPayload:
        self.client = client
        return self

    def set_client_url(self, url: Any) -> EventPayload:
        self.client_url = url
        return self

    def set_details(self, details: Mapping[str, Any] | None) -> EventPayload:
        """Replace the whole detail bag."""

        self.details = details
        return self

    def set_detail(self, key: str, value: Any) -> EventPayload:
        self._details[key] = value
        return self

    def get_detail(self, key: str, default: Any = None) -> Any:
        return self._details.get(key, default)

    def to_dict(self, event_type: EventType | str | None = None) -> dict[str, Any]:
        """Return the minimal mapping that expresses this event to the API.

        Args:
            event_type: Event type to embed as ``event_type``. When omitted the
                key is left out and trigger-only fields are never rendered.

        Returns:
            A new dict. ``service_key`` is always present, even when unset;
            every other field is included only when it has a value.
        """

        kind = EventType(event_type) if event_type is not None else None

        data: dict[str, Any] = {"service_key": self._service_key}
        if kind is not None:
            data["event_type"] = kind.value
        if self._description:
            data["description"] = self._description
        if self._incident_key:
            data["incident_key"] = self._incident_key
        if self._details:
            data["details"] = dict(self._details)

        if kind is EventType.TRIGGER:
            if self._client:
                data["client"] = self._client
            if self._client_url:
                data["client_url"] = self._client_url

        return data
