"""Use cases for payment gateway operations (orders, links, refunds)."""

from __future__ import annotations

from typing import Any, Callable

from ...domain.credentials import Credentials
from ...domain.errors import ValidationError
from ...infrastructure.cashfree.gateway_client import AsyncGatewayClient
from ..dtos import (
    CreateOrderRequestDTO,
    CreatePaymentLinkRequestDTO,
    CreateRefundRequestDTO,
)

GatewayClientFactory = Callable[[Credentials], AsyncGatewayClient]


def _require_id(field: str, value: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(field, f"{field} must be a string")
    if not value.strip():
        raise ValidationError(field, f"{field} is required")
    return value.strip()


class GatewayService:
    """Forwards gateway operations; responses are returned unchanged."""

    def __init__(
        self,
        credentials: Credentials,
        gateway_client_factory: GatewayClientFactory = AsyncGatewayClient,
    ):
        self.credentials = credentials
        self.gateway_client_factory = gateway_client_factory

    async def verify_credentials(self) -> None:
        """Raise when Cashfree rejects the configured gateway credentials."""
        async with self.gateway_client_factory(self.credentials) as client:
            await client.verify_credentials()

    async def create_order(self, dto: CreateOrderRequestDTO) -> Any:
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.create_order(dto)

    async def create_payment_link(self, dto: CreatePaymentLinkRequestDTO) -> Any:
        # Notes are parsed before the client is opened so bad JSON costs no call.
        dto.parsed_notes()
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.create_payment_link(dto)

    async def cancel_payment_link(self, link_id: str) -> Any:
        link_id = _require_id("link_id", link_id)
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.cancel_payment_link(link_id)

    async def fetch_payment_link(self, link_id: str) -> Any:
        link_id = _require_id("link_id", link_id)
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.fetch_payment_link(link_id)

    async def get_orders_for_payment_link(self, link_id: str) -> Any:
        link_id = _require_id("link_id", link_id)
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.get_orders_for_payment_link(link_id)

    async def create_refund(self, dto: CreateRefundRequestDTO) -> Any:
        _require_id("order_id", dto.order_id)
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.create_refund(dto)

    async def get_refunds_for_order(self, order_id: str) -> Any:
        order_id = _require_id("order_id", order_id)
        async with self.gateway_client_factory(self.credentials) as client:
            return await client.get_refunds_for_order(order_id)
