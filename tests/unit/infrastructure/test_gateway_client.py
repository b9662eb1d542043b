"""Wire-level tests for the payment gateway HTTP client."""

from __future__ import annotations

import json
from functools import partial

import httpx
import pytest

from cashfree_node.application.dtos import (
    CreateOrderRequestDTO,
    CreatePaymentLinkRequestDTO,
    CreateRefundRequestDTO,
)
from cashfree_node.application.use_cases.gateway import GatewayService
from cashfree_node.domain.credentials import Credentials, Environment
from cashfree_node.domain.errors import OperationError, ValidationError
from cashfree_node.infrastructure.cashfree.gateway_client import AsyncGatewayClient
from tests.fixtures import RecordingTransport


def _ok(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"path": request.url.path})


@pytest.fixture
def transport() -> RecordingTransport:
    paths = [
        "/pg/orders",
        "/pg/links",
        "/pg/links/L1",
        "/pg/links/L1/cancel",
        "/pg/links/L1/orders",
        "/pg/orders/O1/refunds",
    ]
    return RecordingTransport({path: _ok for path in paths})


class TestGatewayClient:
    def test_requires_client_id_and_secret(self, credentials: Credentials) -> None:
        with pytest.raises(ValidationError, match="client_id"):
            AsyncGatewayClient(credentials.model_copy(update={"client_id": " "}))

    @pytest.mark.asyncio
    async def test_create_order_headers_and_body(
        self, credentials: Credentials, transport: RecordingTransport
    ) -> None:
        dto = CreateOrderRequestDTO(
            order_amount=100.5, customer_id="cust_1", customer_phone="9999999999"
        )
        async with AsyncGatewayClient(credentials, transport=transport) as client:
            result = await client.create_order(dto)

        assert result == {"path": "/pg/orders"}
        [request] = transport.requests
        assert str(request.url) == "https://sandbox.cashfree.com/pg/orders"
        assert request.headers["x-client-id"] == "CF_CLIENT"
        assert request.headers["x-client-secret"] == "cf_secret"
        assert request.headers["x-api-version"] == "2023-08-01"
        assert json.loads(request.content) == {
            "order_currency": "INR",
            "order_amount": 100.5,
            "customer_details": {
                "customer_id": "cust_1",
                "customer_phone": "9999999999",
            },
        }

    @pytest.mark.asyncio
    async def test_production_host(
        self, credentials: Credentials, transport: RecordingTransport
    ) -> None:
        creds = credentials.model_copy(update={"environment": Environment.PRODUCTION})
        async with AsyncGatewayClient(creds, transport=transport) as client:
            await client.fetch_payment_link("L1")

        [request] = transport.requests
        assert str(request.url) == "https://api.cashfree.com/pg/links/L1"
        assert request.method == "GET"

    @pytest.mark.asyncio
    async def test_link_and_refund_paths(
        self, credentials: Credentials, transport: RecordingTransport
    ) -> None:
        async with AsyncGatewayClient(credentials, transport=transport) as client:
            await client.cancel_payment_link("L1")
            await client.get_orders_for_payment_link("L1")
            await client.get_refunds_for_order("O1")
            await client.create_refund(
                CreateRefundRequestDTO(order_id="O1", refund_amount=5, refund_id="R1")
            )

        assert [(r.method, r.url.path) for r in transport.requests] == [
            ("POST", "/pg/links/L1/cancel"),
            ("GET", "/pg/links/L1/orders"),
            ("GET", "/pg/orders/O1/refunds"),
            ("POST", "/pg/orders/O1/refunds"),
        ]
        assert json.loads(transport.requests[-1].content) == {
            "refund_amount": 5,
            "refund_id": "R1",
            "refund_note": "",
            "refund_speed": "STANDARD",
        }

    @pytest.mark.asyncio
    async def test_payment_link_body(
        self, credentials: Credentials, transport: RecordingTransport
    ) -> None:
        dto = CreatePaymentLinkRequestDTO(
            link_id="L1",
            link_amount=100,
            link_purpose="Invoice 42",
            customer_phone="9999999999",
            link_notes='{"invoice": "42"}',
            send_sms=True,
        )
        async with AsyncGatewayClient(credentials, transport=transport) as client:
            await client.create_payment_link(dto)

        body = json.loads(transport.requests[0].content)
        assert body["link_notes"] == {"invoice": "42"}
        assert body["link_notify"] == {"send_email": False, "send_sms": True}
        assert "link_expiry_time" not in body
        assert "link_minimum_partial_amount" not in body

    @pytest.mark.asyncio
    async def test_error_status_is_operation_error(self, credentials: Credentials) -> None:
        transport = RecordingTransport(
            {"/pg/orders": httpx.Response(401, json={"message": "authentication Failed"})}
        )
        dto = CreateOrderRequestDTO(order_amount=1, customer_id="c", customer_phone="p")

        async with AsyncGatewayClient(credentials, transport=transport) as client:
            with pytest.raises(OperationError) as exc_info:
                await client.create_order(dto)

        assert exc_info.value.status_code == 401
        assert "authentication Failed" in str(exc_info.value)


class TestVerifyCredentials:
    @pytest.mark.asyncio
    async def test_fetches_one_order(
        self, credentials: Credentials, transport: RecordingTransport
    ) -> None:
        service = GatewayService(
            credentials, partial(AsyncGatewayClient, transport=transport)
        )

        await service.verify_credentials()

        [request] = transport.requests
        assert request.method == "GET"
        assert request.url.path == "/pg/orders"
        assert request.url.params["limit"] == "1"
        assert request.headers["x-client-id"] == "CF_CLIENT"

    @pytest.mark.asyncio
    async def test_rejected_credentials_raise(self, credentials: Credentials) -> None:
        transport = RecordingTransport(
            {"/pg/orders": httpx.Response(401, json={"message": "authentication Failed"})}
        )
        service = GatewayService(
            credentials, partial(AsyncGatewayClient, transport=transport)
        )

        with pytest.raises(OperationError, match="verifyCredentials failed with HTTP 401"):
            await service.verify_credentials()


class TestGatewayServiceIds:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("order_id", [12345, None, {"id": "O1"}])
    async def test_non_string_id_is_validation_error(
        self, credentials: Credentials, transport: RecordingTransport, order_id
    ) -> None:
        service = GatewayService(
            credentials, partial(AsyncGatewayClient, transport=transport)
        )

        with pytest.raises(ValidationError, match="order_id must be a string"):
            await service.get_refunds_for_order(order_id)
        assert transport.requests == []
