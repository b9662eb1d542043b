"""Protocol interface for payout client implementations.

Services depend on this protocol so tests can substitute an in-memory client
for the HTTP one.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Type
from types import TracebackType

from ..domain.credentials import Environment
from .dtos import (
    AuthorizeResponseDTO,
    CreateCashgramRequestDTO,
    DeactivateCashgramRequestDTO,
)


class PayoutClientProtocol(Protocol):
    """Contract of a client bound to one payout host."""

    @property
    def base_url(self) -> str: ...

    async def authorize(
        self, client_id: str, client_secret: str, signature: str
    ) -> AuthorizeResponseDTO:
        """Exchange client credentials and a signature for a token response.

        Raises:
            AuthorizationError: On non-success HTTP status or an undecodable body.
        """
        ...

    async def create_cashgram(
        self, token: str, dto: CreateCashgramRequestDTO
    ) -> dict[str, Any]:
        """Create a cashgram and return the upstream JSON unchanged.

        Raises:
            OperationError: On non-success HTTP status.
        """
        ...

    async def deactivate_cashgram(
        self, token: str, dto: DeactivateCashgramRequestDTO
    ) -> dict[str, Any]:
        """Deactivate a cashgram and return the upstream JSON unchanged.

        Raises:
            OperationError: On non-success HTTP status.
        """
        ...

    async def aclose(self) -> None: ...

    async def __aenter__(self: "PayoutClientProtocol") -> "PayoutClientProtocol": ...

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None: ...


# A fresh client per invocation; the connection is closed when the
# context manager exits.
PayoutClientFactory = Callable[[Environment], PayoutClientProtocol]
