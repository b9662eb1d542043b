"""Use cases for cashgram payout operations."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ...domain.credentials import Credentials
from ...domain.errors import ValidationError
from ..payout_client_protocol import PayoutClientFactory
from ..dtos import CreateCashgramRequestDTO, DeactivateCashgramRequestDTO
from .authorization import TokenProvider, token_provider_for

logger = logging.getLogger(__name__)


class PayoutService:
    """Authorizes and invokes payout endpoints for one credential set.

    Each call runs validate -> obtain token -> send request -> translate
    response, stopping at the first failure. Nothing is compensated when a
    request fails after a successful authorization.
    """

    def __init__(
        self,
        credentials: Credentials,
        payout_client_factory: PayoutClientFactory,
        *,
        token_provider: Optional[TokenProvider] = None,
    ):
        self.credentials = credentials
        self.payout_client_factory = payout_client_factory
        self.token_provider = token_provider or token_provider_for(
            credentials.auth_mode
        )

    async def create_transfer(self, dto: CreateCashgramRequestDTO) -> dict[str, Any]:
        """Create a cashgram and return the upstream response unchanged."""
        if not dto.cashgram_id.strip():
            raise ValidationError("cashgram_id", "Cashgram ID is required")
        async with self.payout_client_factory(self.credentials.environment) as client:
            token = await self.token_provider.get_token(self.credentials, client)
            result = await client.create_cashgram(token.token, dto)
        logger.info("Cashgram %s created", dto.cashgram_id)
        return result

    async def deactivate_transfer(self, cashgram_id: str) -> dict[str, Any]:
        """Deactivate a cashgram and return the upstream response unchanged."""
        if not isinstance(cashgram_id, str):
            raise ValidationError("cashgram_id", "Cashgram ID must be a string")
        if not cashgram_id.strip():
            raise ValidationError("cashgram_id", "Cashgram ID is required")
        dto = DeactivateCashgramRequestDTO(cashgram_id=cashgram_id)
        async with self.payout_client_factory(self.credentials.environment) as client:
            token = await self.token_provider.get_token(self.credentials, client)
            result = await client.deactivate_cashgram(token.token, dto)
        logger.info("Cashgram %s deactivated", cashgram_id)
        return result
