"""HTTP transport used by the events client.

The client only needs "POST these bytes, give me back a status code and a
body". Keeping that behind a small interface lets tests substitute an
in-memory transport instead of touching the network.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import TracebackType

import requests

from pagerduty_events import __version__
from pagerduty_events.exceptions import TransportError

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024


@dataclass(frozen=True, slots=True)
class TransportResponse:
    """Raw HTTP response returned by a transport."""

    status_code: int
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport(ABC):
    """Abstract base class for HTTP transports."""

    @abstractmethod
    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
        timeout: float | None,
    ) -> TransportResponse:
        """Send a single POST request.

        Args:
            url: Target URL.
            headers: Request headers.
            body: Encoded request body.
            timeout: Seconds allowed for the whole exchange, from connecting
                to reading the last byte of the response; ``None`` means no
                limit.

        Returns:
            Status code and raw body of the response, whatever the status.

        Raises:
            TransportError: If no complete HTTP response was received in time.
        """
        pass


class RequestsTransport(Transport):
    """Transport backed by a `requests.Session`.

    The timeout bounds the connection and every socket read, and the response
    body is streamed against an overall deadline so a server that trickles
    bytes cannot hold the call past ``timeout`` seconds in total.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        user_agent: str = f"pagerduty-events/{__version__}",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._session = session
        self._owns_session = session is None
        self._user_agent = user_agent
        self._clock = clock

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def post(
        self,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes,
        timeout: float | None,
    ) -> TransportResponse:
        request_headers = {"User-Agent": self._user_agent, **headers}
        request_timeout = None if timeout is None else (timeout, timeout)
        deadline = None if timeout is None else self._clock() + timeout

        try:
            resp = self.session.post(
                url,
                data=body,
                headers=request_headers,
                timeout=request_timeout,
                stream=True,
            )
            try:
                chunks: list[bytes] = []
                self._check_deadline(deadline, timeout)
                for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                    chunks.append(chunk)
                    self._check_deadline(deadline, timeout)
                status_code = resp.status_code
            finally:
                resp.close()
        except requests.RequestException as exc:
            logger.debug("HTTP request failed", extra={"url": url, "error": str(exc)})
            raise TransportError(str(exc)) from exc

        return TransportResponse(status_code=status_code, body=b"".join(chunks))

    def _check_deadline(self, deadline: float | None, timeout: float | None) -> None:
        if deadline is not None and self._clock() > deadline:
            raise TransportError(f"Operation timed out after {timeout} seconds")

    def close(self) -> None:
        """Close the underlying session if this transport created it."""

        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> RequestsTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
