"""HTTP transport used by every provider client"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import aiohttp

from roteiro.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class HttpResponse:
    """Status and raw body of a completed HTTP exchange"""
    status: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON; raises ValueError on invalid JSON"""
        return json.loads(self.body.decode("utf-8"))


class HttpTransport(ABC):
    """
    Abstract HTTP transport.

    Provider clients never open connections themselves; they go through a
    transport so a single call can be observed and replaced in tests.
    """

    @abstractmethod
    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        """
        Perform exactly one HTTP request.

        Returns:
            HttpResponse for any status code the server answered with

        Raises:
            TransportError: If no response was received (connection, timeout)
        """
        pass

    async def close(self) -> None:
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()


class AiohttpTransport(HttpTransport):
    """HttpTransport backed by a shared aiohttp.ClientSession"""

    def __init__(self, timeout: float = 120.0):
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session"""
        if self.session is None or self.session.closed:
            self.session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
        return self.session

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        session = await self._get_session()
        logger.debug(f"{method} {url}")

        try:
            async with session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
            ) as response:
                body = await response.read()
                logger.debug(f"{method} {url} -> {response.status} ({len(body)} bytes)")
                return HttpResponse(
                    status=response.status,
                    body=body,
                    headers=dict(response.headers),
                )
        except asyncio.TimeoutError as e:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    async def close(self) -> None:
        if self.session is not None and not self.session.closed:
            await self.session.close()
        self.session = None
