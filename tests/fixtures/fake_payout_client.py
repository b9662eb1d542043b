"""In-memory implementation of PayoutClientProtocol for unit testing."""

from __future__ import annotations

import json
from typing import Any, Optional, Type
from types import TracebackType

from cashfree_node.application.dtos import (
    AuthorizeResponseDTO,
    CreateCashgramRequestDTO,
    DeactivateCashgramRequestDTO,
)
from cashfree_node.domain.credentials import Environment


class FakePayoutClient:
    """Configurable payout client that records every call.

    Responses default to a successful authorization with token ``abc123``
    and ``{"status": "SUCCESS"}`` for cashgram calls.
    """

    def __init__(self, environment: Environment = Environment.SANDBOX) -> None:
        self.environment = environment
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

        self._authorize_response = AuthorizeResponseDTO.from_http(
            json.dumps({"status": "SUCCESS", "data": {"token": "abc123"}}), 200
        )
        self._cashgram_response: dict[str, Any] = {"status": "SUCCESS"}
        self._should_raise: Optional[Exception] = None

    # Configuration methods

    def set_authorize_response(self, body: dict[str, Any]) -> None:
        self._authorize_response = AuthorizeResponseDTO.from_http(json.dumps(body), 200)

    def set_cashgram_response(self, body: dict[str, Any]) -> None:
        self._cashgram_response = body

    def set_error(self, error: Exception) -> None:
        """Raise ``error`` from the next cashgram call."""
        self._should_raise = error

    # Protocol implementation

    @property
    def base_url(self) -> str:
        return f"https://{self.environment.value}.payout.test"

    async def authorize(
        self, client_id: str, client_secret: str, signature: str
    ) -> AuthorizeResponseDTO:
        self.calls.append(
            (
                "authorize",
                {
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "signature": signature,
                },
            )
        )
        return self._authorize_response

    async def create_cashgram(
        self, token: str, dto: CreateCashgramRequestDTO
    ) -> dict[str, Any]:
        self.calls.append(("create_cashgram", {"token": token, "body": dto.to_body()}))
        if self._should_raise is not None:
            raise self._should_raise
        return self._cashgram_response

    async def deactivate_cashgram(
        self, token: str, dto: DeactivateCashgramRequestDTO
    ) -> dict[str, Any]:
        self.calls.append(
            ("deactivate_cashgram", {"token": token, "body": dto.to_body()})
        )
        if self._should_raise is not None:
            raise self._should_raise
        return self._cashgram_response

    async def aclose(self) -> None:
        self.closed = True

    async def __aenter__(self) -> "FakePayoutClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()

    # Helpers

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]
