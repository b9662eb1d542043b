from __future__ import annotations

import logging
from typing import Any, Optional, Type
from types import TracebackType

import httpx
from pydantic import ValidationError as PydanticValidationError

from ...application.dtos import (
    AuthorizeResponseDTO,
    CreateCashgramRequestDTO,
    DeactivateCashgramRequestDTO,
)
from ...domain.credentials import Environment
from ...domain.errors import AuthorizationError
from ..http.http_client import AsyncHttpClient
from .endpoints import (
    AUTHORIZE_PATH,
    CREATE_CASHGRAM_PATH,
    DEACTIVATE_CASHGRAM_PATH,
    payout_base_url,
)
from .responses import json_body, operation_error

logger = logging.getLogger(__name__)


class AsyncPayoutClient:
    """Asynchronous client for the Cashfree payout API.

    Methods are bound to the payout DTOs; HTTP failures are translated into
    domain errors.
    """

    def __init__(
        self,
        environment: Environment,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._http = AsyncHttpClient(
            payout_base_url(environment), timeout=timeout, transport=transport
        )

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def authorize(
        self, client_id: str, client_secret: str, signature: str
    ) -> AuthorizeResponseDTO:
        headers = {
            "X-Client-Id": client_id,
            "X-Client-Secret": client_secret,
            "X-Cf-Signature": signature,
        }
        try:
            resp = await self._http.post(AUTHORIZE_PATH, headers=headers)
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            body = e.response.text
            raise AuthorizationError(
                f"Authorization failed with HTTP {status_code}: {body}",
                status_code=status_code,
                body=body,
            ) from e

        try:
            return AuthorizeResponseDTO.from_http(resp.text, resp.status_code)
        except (ValueError, PydanticValidationError) as e:
            raise AuthorizationError(
                f"Unexpected authorization response: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

    async def create_cashgram(
        self, token: str, dto: CreateCashgramRequestDTO
    ) -> dict[str, Any]:
        logger.info("Creating cashgram %s", dto.cashgram_id)
        try:
            resp = await self._http.post(
                CREATE_CASHGRAM_PATH,
                json=dto.to_body(),
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPStatusError as e:
            raise operation_error("createCashgram", e) from e
        return json_body("createCashgram", resp)

    async def deactivate_cashgram(
        self, token: str, dto: DeactivateCashgramRequestDTO
    ) -> dict[str, Any]:
        logger.info("Deactivating cashgram %s", dto.cashgram_id)
        try:
            resp = await self._http.post(
                DEACTIVATE_CASHGRAM_PATH,
                json=dto.to_body(),
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPStatusError as e:
            raise operation_error("deactivateCashgram", e) from e
        return json_body("deactivateCashgram", resp)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncPayoutClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
