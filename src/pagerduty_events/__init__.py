"""Client for the PagerDuty generic Events API.

Build an `EventPayload`, then trigger, acknowledge or resolve it with an
`EventClient`.
"""

__version__ = "0.1.0"

from pagerduty_events.client import DEFAULT_API_URL, EventClient
from pagerduty_events.event import EventPayload, EventType
from pagerduty_events.exceptions import (
    EventError,
    HttpStatusError,
    PreconditionError,
    ResponseFormatError,
    TransportError,
    ValidationError,
)
from pagerduty_events.transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "__version__",
    "DEFAULT_API_URL",
    "EventClient",
    "EventError",
    "EventPayload",
    "EventType",
    "HttpStatusError",
    "PreconditionError",
    "RequestsTransport",
    "ResponseFormatError",
    "Transport",
    "TransportError",
    "TransportResponse",
    "ValidationError",
]
