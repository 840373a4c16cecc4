#!/usr/bin/env python3
"""Programmatic incident lifecycle example.

This demonstrates using the library directly:

* load settings from `.env`
* trigger an incident without an incident key
* acknowledge and resolve it using the key assigned by the API
"""

from __future__ import annotations

import argparse
from typing import Sequence

from pagerduty_events import EventClient, EventError, EventPayload
from pagerduty_events.config import EventsSettings
from pagerduty_events.logging import configure_logging


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trigger, acknowledge and resolve an incident.")
    parser.add_argument("--service-key", required=True, help="32 character service key")
    parser.add_argument("--description", required=True, help="Incident description")
    parser.add_argument("--host", default="", help="Host name to attach as a detail (optional)")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = EventsSettings()
    configure_logging(settings.log_level)

    client = EventClient.from_settings(settings)
    event = EventPayload().set_service_key(args.service_key).set_description(args.description)
    if args.host:
        event.set_detail("host", args.host)

    try:
        client.trigger(event)
        print(f"Triggered incident: {event.incident_key}")
        client.acknowledge(event)
        print("Acknowledged")
        client.resolve(event)
        print("Resolved")
    except EventError as exc:
        print(f"Failed: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
