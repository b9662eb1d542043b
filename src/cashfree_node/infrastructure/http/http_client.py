from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Type
from types import TracebackType

import httpx

from ... import __version__

logger = logging.getLogger(__name__)

USER_AGENT = f"cashfree-node/{__version__}"


class AsyncHttpClient:
    """Thin asynchronous HTTP client wrapper around httpx.AsyncClient.

    - Normalizes base URLs and paths.
    - Sends the package ``User-Agent`` and JSON ``Accept`` on every request.
    - Raises for non-successful responses.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        default_headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        default_headers.update(headers or {})
        self._client = httpx.AsyncClient(
            timeout=timeout, headers=default_headers, transport=transport
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, path: str) -> str:
        if path.startswith("http://") or path.startswith("https://"):
            return path
        return f"{self._base_url}/{path.lstrip('/')}"

    def _checked(self, resp: httpx.Response) -> httpx.Response:
        logger.debug(
            "%s %s -> %d", resp.request.method, resp.request.url.path, resp.status_code
        )
        resp.raise_for_status()
        return resp

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return self._checked(await self._client.get(self._url(path), **kwargs))

    async def post(
        self,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        return self._checked(
            await self._client.post(self._url(path), json=json, **kwargs)
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
