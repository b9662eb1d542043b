"""Batch executor binding host-runtime items to Cashfree operations."""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial
from typing import Any, Awaitable, Callable, Iterable, Optional, TypeVar

import httpx
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from ..application.dtos import (
    CreateCashgramRequestDTO,
    CreateOrderRequestDTO,
    CreatePaymentLinkRequestDTO,
    CreateRefundRequestDTO,
)
from ..application.use_cases.authorization import token_provider_for
from ..application.use_cases.gateway import GatewayClientFactory, GatewayService
from ..application.use_cases.payout import PayoutService
from ..domain.credentials import Credentials
from ..domain.errors import CashfreeError, ValidationError
from ..application.payout_client_protocol import PayoutClientFactory
from ..env import Settings
from ..infrastructure.cashfree.gateway_client import AsyncGatewayClient
from ..infrastructure.cashfree.payout_client import AsyncPayoutClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Operation(str, Enum):
    CREATE_ORDER = "createOrder"
    CREATE_PAYMENT_LINK = "createPaymentLink"
    CANCEL_PAYMENT_LINK = "cancelPaymentLink"
    FETCH_PAYMENT_LINK_DETAILS = "fetchPaymentLinkDetails"
    GET_ORDERS_FOR_PAYMENT_LINK = "getOrdersForPaymentLink"
    CREATE_REFUND = "createRefund"
    GET_ALL_REFUNDS_FOR_ORDER = "getAllRefundsForOrder"
    CREATE_CASHGRAM = "createCashgram"
    DEACTIVATE_CASHGRAM = "deactivateCashgram"


class NodeItem(BaseModel):
    """One input item: the operation to run and its resolved parameters."""

    operation: str
    parameters: dict[str, Any] = Field(default_factory=dict)


def _build(model: type[ModelT], **values: Any) -> ModelT:
    try:
        return model.model_validate(values)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(field, f"Invalid parameter {field}: {first['msg']}") from e


def _param(params: dict[str, Any], name: str, default: Any = None) -> Any:
    value = params.get(name, default)
    if value is None:
        raise ValidationError(name, f"Missing required parameter: {name}")
    return value


def _path_id(params: dict[str, Any], name: str) -> str:
    # Expressions may resolve ids to numbers; they are sent as their text.
    value = _param(params, name)
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValidationError(name, f"Invalid parameter {name}: expected a string id")
    return str(value)


class CashfreeNode:
    """Runs Cashfree operations for a batch of items.

    Items are processed one at a time; each item's authorize-then-invoke
    cycle completes before the next starts. The credentials object is shared
    read-only across items.
    """

    def __init__(
        self,
        credentials: Credentials,
        *,
        payout_client_factory: Optional[PayoutClientFactory] = None,
        gateway_client_factory: Optional[GatewayClientFactory] = None,
        http_timeout: float = 10.0,
        token_cache_ttl_seconds: float = 0.0,
    ) -> None:
        self.credentials = credentials
        self.payouts = PayoutService(
            credentials,
            payout_client_factory
            or partial(AsyncPayoutClient, timeout=http_timeout),
            token_provider=token_provider_for(
                credentials.auth_mode, token_cache_ttl_seconds
            ),
        )
        self.gateway = GatewayService(
            credentials,
            gateway_client_factory or partial(AsyncGatewayClient, timeout=http_timeout),
        )
        self._handlers: dict[
            Operation, Callable[[dict[str, Any]], Awaitable[Any]]
        ] = {
            Operation.CREATE_ORDER: self._create_order,
            Operation.CREATE_PAYMENT_LINK: self._create_payment_link,
            Operation.CANCEL_PAYMENT_LINK: self._cancel_payment_link,
            Operation.FETCH_PAYMENT_LINK_DETAILS: self._fetch_payment_link_details,
            Operation.GET_ORDERS_FOR_PAYMENT_LINK: self._get_orders_for_payment_link,
            Operation.CREATE_REFUND: self._create_refund,
            Operation.GET_ALL_REFUNDS_FOR_ORDER: self._get_all_refunds_for_order,
            Operation.CREATE_CASHGRAM: self._create_cashgram,
            Operation.DEACTIVATE_CASHGRAM: self._deactivate_cashgram,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "CashfreeNode":
        logging.getLogger("cashfree_node").setLevel(settings.log_level)
        return cls(
            settings.to_credentials(),
            http_timeout=settings.http_timeout,
            token_cache_ttl_seconds=settings.token_cache_ttl_seconds,
        )

    async def run_item(self, item: NodeItem) -> Any:
        try:
            operation = Operation(item.operation)
        except ValueError:
            raise ValidationError(
                "operation", f"Unknown operation: {item.operation}"
            ) from None
        return await self._handlers[operation](item.parameters)

    async def execute(
        self,
        items: Iterable[NodeItem],
        *,
        continue_on_fail: bool = False,
    ) -> list[Any]:
        """Run every item in order and return one result per item.

        With ``continue_on_fail`` a failed item yields ``{"error": message}``
        and the batch continues; otherwise the first failure is raised and
        the remaining items are skipped.
        """
        results: list[Any] = []
        for index, item in enumerate(items):
            try:
                results.append(await self.run_item(item))
            except (CashfreeError, httpx.HTTPError) as e:
                if not continue_on_fail:
                    raise
                logger.warning("Item %d (%s) failed: %s", index, item.operation, e)
                results.append({"error": str(e)})
        return results

    # Gateway operations

    async def _create_order(self, params: dict[str, Any]) -> Any:
        dto = _build(
            CreateOrderRequestDTO,
            order_amount=_param(params, "orderAmount"),
            order_currency=params.get("orderCurrency", "INR"),
            customer_id=_param(params, "customerId"),
            customer_phone=_param(params, "customerPhone"),
        )
        return await self.gateway.create_order(dto)

    async def _create_payment_link(self, params: dict[str, Any]) -> Any:
        fields = {
            name: params[name]
            for name in CreatePaymentLinkRequestDTO.model_fields
            if name in params and params[name] is not None
        }
        if "linkNotes" in params:
            fields["link_notes"] = params["linkNotes"]
        dto = _build(CreatePaymentLinkRequestDTO, **fields)
        return await self.gateway.create_payment_link(dto)

    async def _cancel_payment_link(self, params: dict[str, Any]) -> Any:
        return await self.gateway.cancel_payment_link(
            _path_id(params, "cancel_link_id")
        )

    async def _fetch_payment_link_details(self, params: dict[str, Any]) -> Any:
        return await self.gateway.fetch_payment_link(
            _path_id(params, "fetch_details_link_id")
        )

    async def _get_orders_for_payment_link(self, params: dict[str, Any]) -> Any:
        return await self.gateway.get_orders_for_payment_link(
            _path_id(params, "get_orders_link_id")
        )

    async def _create_refund(self, params: dict[str, Any]) -> Any:
        dto = _build(
            CreateRefundRequestDTO,
            order_id=_param(params, "refund_order_id"),
            refund_amount=_param(params, "refund_amount"),
            refund_id=_param(params, "refund_id"),
            refund_note=params.get("refund_note", ""),
            refund_speed=params.get("refund_speed", "STANDARD"),
        )
        return await self.gateway.create_refund(dto)

    async def _get_all_refunds_for_order(self, params: dict[str, Any]) -> Any:
        return await self.gateway.get_refunds_for_order(
            _path_id(params, "get_refunds_order_id")
        )

    # Payout operations

    async def _create_cashgram(self, params: dict[str, Any]) -> Any:
        dto = _build(
            CreateCashgramRequestDTO,
            cashgram_id=_param(params, "cashgram_id"),
            amount=_param(params, "cashgram_amount"),
            name=_param(params, "cashgram_name"),
            email=_param(params, "cashgram_email"),
            phone=_param(params, "cashgram_phone"),
            link_expiry=_param(params, "cashgram_link_expiry"),
            remarks=params.get("cashgram_remarks", ""),
            notify_customer=params.get("cashgram_notify_customer", True),
        )
        return await self.payouts.create_transfer(dto)

    async def _deactivate_cashgram(self, params: dict[str, Any]) -> Any:
        return await self.payouts.deactivate_transfer(
            _path_id(params, "deactivate_cashgram_id")
        )
