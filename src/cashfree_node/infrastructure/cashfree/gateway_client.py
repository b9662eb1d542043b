from __future__ import annotations

import logging
from typing import Any, Optional, Type
from types import TracebackType

import httpx

from ...application.dtos import (
    CreateOrderRequestDTO,
    CreatePaymentLinkRequestDTO,
    CreateRefundRequestDTO,
)
from ...domain.credentials import Credentials
from ..http.http_client import AsyncHttpClient
from .endpoints import gateway_base_url
from .responses import json_body, operation_error

logger = logging.getLogger(__name__)


class AsyncGatewayClient:
    """Asynchronous client for the Cashfree payment gateway (``/pg``) API.

    Every request carries the client id, secret and API version headers.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: float = 10.0,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        client_id, client_secret = credentials.require_gateway_fields()
        headers = {
            "x-api-version": credentials.api_version,
            "x-client-id": client_id,
            "x-client-secret": client_secret,
        }
        self._http = AsyncHttpClient(
            gateway_base_url(credentials.environment),
            timeout=timeout,
            headers=headers,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._http.base_url

    async def _post(
        self, operation: str, path: str, body: Optional[dict[str, Any]] = None
    ) -> Any:
        try:
            resp = await self._http.post(path, json=body)
        except httpx.HTTPStatusError as e:
            raise operation_error(operation, e) from e
        return json_body(operation, resp)

    async def _get(self, operation: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._http.get(path, **kwargs)
        except httpx.HTTPStatusError as e:
            raise operation_error(operation, e) from e
        return json_body(operation, resp)

    async def verify_credentials(self) -> None:
        """Fetch a single order to confirm the gateway accepts the credentials.

        Raises:
            OperationError: Cashfree rejected the request.
        """
        await self._get("verifyCredentials", "/orders", params={"limit": 1})
        logger.info("Gateway credentials verified against %s", self.base_url)

    async def create_order(self, dto: CreateOrderRequestDTO) -> Any:
        return await self._post("createOrder", "/orders", dto.to_body())

    async def create_payment_link(self, dto: CreatePaymentLinkRequestDTO) -> Any:
        logger.info("Creating payment link %s", dto.link_id)
        return await self._post("createPaymentLink", "/links", dto.to_body())

    async def cancel_payment_link(self, link_id: str) -> Any:
        return await self._post("cancelPaymentLink", f"/links/{link_id}/cancel")

    async def fetch_payment_link(self, link_id: str) -> Any:
        return await self._get("fetchPaymentLinkDetails", f"/links/{link_id}")

    async def get_orders_for_payment_link(self, link_id: str) -> Any:
        return await self._get("getOrdersForPaymentLink", f"/links/{link_id}/orders")

    async def create_refund(self, dto: CreateRefundRequestDTO) -> Any:
        logger.info("Creating refund %s for order %s", dto.refund_id, dto.order_id)
        return await self._post(
            "createRefund", f"/orders/{dto.order_id}/refunds", dto.to_body()
        )

    async def get_refunds_for_order(self, order_id: str) -> Any:
        return await self._get("getAllRefundsForOrder", f"/orders/{order_id}/refunds")

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "AsyncGatewayClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.aclose()
