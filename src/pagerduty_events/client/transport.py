"""
HTTP transports for the Events API v2 clients.

A transport performs exactly one POST and reports the response status.
Failures before a response is received, including timeouts and headers
that cannot be encoded, are raised as ``TransportError``;
status codes are left for the caller to classify.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, Optional

import aiohttp
import httpx
import structlog

from .errors import TransportError

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 300.0


class Transport(ABC):
    """Blocking transport."""

    @abstractmethod
    def post(self, url: str, body: bytes, headers: Dict[str, str]) -> int:
        """POST ``body`` to ``url`` and return the response status."""
        ...


class AsyncTransport(ABC):
    """Non-blocking transport."""

    @abstractmethod
    async def post(self, url: str, body: bytes, headers: Dict[str, str]) -> int:
        """POST ``body`` to ``url`` and return the response status."""
        ...


class HttpxTransport(Transport):
    """
    Blocking transport backed by ``httpx``.

    Uses the given client if one is supplied, otherwise opens a short-lived
    client for each request. The calling thread blocks until a response
    arrives or the timeout elapses.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the transport.

        Args:
            client: Caller-owned httpx client to send requests with
            timeout_seconds: Request timeout for per-request clients
        """
        self._client = client
        self.timeout_seconds = timeout_seconds

    def post(self, url: str, body: bytes, headers: Dict[str, str]) -> int:
        try:
            if self._client is not None:
                response = self._client.post(url, content=body, headers=headers)
            else:
                with httpx.Client(timeout=self.timeout_seconds) as client:
                    response = client.post(url, content=body, headers=headers)
        except (httpx.HTTPError, UnicodeEncodeError, ValueError) as e:
            logger.error("HTTP request failed", url=url, error=str(e))
            raise TransportError(f"Request to {url} failed: {str(e)}", original_error=e)

        return response.status_code


class AiohttpTransport(AsyncTransport):
    """
    Non-blocking transport backed by ``aiohttp``.

    Uses the given session if one is supplied, otherwise opens a short-lived
    session for each request. No timeout is imposed; cancel the calling task
    to abandon a request.
    """

    def __init__(self, session: Optional[aiohttp.ClientSession] = None):
        self._session = session

    async def post(self, url: str, body: bytes, headers: Dict[str, str]) -> int:
        try:
            if self._session is not None:
                return await self._send(self._session, url, body, headers)

            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=None)
            ) as session:
                return await self._send(session, url, body, headers)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("HTTP request failed", url=url, error=str(e))
            raise TransportError(f"Request to {url} failed: {str(e)}", original_error=e)

    async def _send(
        self,
        session: aiohttp.ClientSession,
        url: str,
        body: bytes,
        headers: Dict[str, str],
    ) -> int:
        async with session.post(url, data=body, headers=headers) as response:
            return response.status
