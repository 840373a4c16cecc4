"""CLI entrypoint: send one trigger, acknowledge or resolve event."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from pagerduty_events import __version__
from pagerduty_events.client import EventClient
from pagerduty_events.config import EventsSettings
from pagerduty_events.event import EventPayload, EventType
from pagerduty_events.exceptions import EventError
from pagerduty_events.logging import configure_logging
from pagerduty_events.transport import Transport

logger = logging.getLogger(__name__)


def _parse_detail(value: str) -> tuple[str, str]:
    key, sep, detail = value.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {value!r}")
    return key.strip(), detail


def _non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a number, got {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pagerduty-event",
        description="Send an event to the PagerDuty generic Events API",
    )
    parser.add_argument(
        "--version", action="version", version=f"pagerduty-events {__version__}"
    )

    # Shared by every subcommand so options can follow the event type.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--service-key",
        default=None,
        help="32 character service key (defaults to PAGERDUTY_SERVICE_KEY)",
    )
    common.add_argument("--incident-key", default=None, help="Incident de-duplication key")
    common.add_argument(
        "--detail",
        dest="details",
        action="append",
        type=_parse_detail,
        default=[],
        metavar="KEY=VALUE",
        help="Detail entry to attach to the event (repeatable)",
    )
    common.add_argument("--api-url", default=None, help="Override the events endpoint")
    common.add_argument(
        "--timeout",
        type=_non_negative_float,
        default=None,
        help="Request timeout in seconds (0 means no timeout)",
    )
    common.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and render the event without sending it",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    trigger = subparsers.add_parser(
        EventType.TRIGGER.value, parents=[common], help="Trigger an incident"
    )
    trigger.add_argument("--description", required=True, help="Short problem description")
    trigger.add_argument("--client", default=None, help="Name of the monitoring client")
    trigger.add_argument("--client-url", default=None, help="URL of the monitoring client")

    subparsers.add_parser(
        EventType.ACKNOWLEDGE.value, parents=[common], help="Acknowledge an incident"
    )
    subparsers.add_parser(EventType.RESOLVE.value, parents=[common], help="Resolve an incident")

    return parser


def _build_payload(args: argparse.Namespace, settings: EventsSettings) -> EventPayload:
    payload = EventPayload()

    service_key = args.service_key or settings.service_key
    if service_key is not None:
        payload.set_service_key(service_key)
    if getattr(args, "description", None) is not None:
        payload.set_description(args.description)

    payload.set_incident_key(args.incident_key)
    payload.set_client(getattr(args, "client", None))
    payload.set_client_url(getattr(args, "client_url", None))
    for key, value in args.details:
        payload.set_detail(key, value)
    return payload


def main(
    argv: Sequence[str] | None = None,
    *,
    settings: EventsSettings | None = None,
    transport: Transport | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if settings is None:
        try:
            settings = EventsSettings()
        except ValidationError as e:
            # Logging isn't configured yet; keep it simple and actionable.
            print("Configuration error (check PAGERDUTY_* variables and .env):", file=sys.stderr)
            print(e, file=sys.stderr)
            return 2

    overrides: dict[str, Any] = {}
    if args.api_url is not None:
        overrides["api_url"] = args.api_url
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.dry_run:
        overrides["dry_run"] = True
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings.log_level)

    client = EventClient.from_settings(settings, transport=transport)
    try:
        payload = _build_payload(args, settings)
        response = client.send(payload, args.command)
    except EventError as exc:
        logger.error("Event not sent", extra={"event_type": args.command, "error": str(exc)})
        return 1

    print(json.dumps(response, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
