"""Data Transfer Objects for Cashfree operations."""

from __future__ import annotations

import json
from typing import Annotated, Any, Optional, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_validator,
)

from ..domain.errors import ValidationError


def _numeric_amount(v: Any) -> Any:
    if isinstance(v, str):
        try:
            float(v)
        except ValueError:
            raise ValueError("amount must be a number") from None
    return v


# Amounts are forwarded exactly as supplied; numeric text stays text.
Amount = Annotated[Union[int, float, str], AfterValidator(_numeric_amount)]


# Payout DTOs
class CreateCashgramRequestDTO(BaseModel):
    """Payload for creating a cashgram payout link."""

    model_config = ConfigDict(
        frozen=True, populate_by_name=True, coerce_numbers_to_str=True
    )

    cashgram_id: str = Field(alias="cashgramId")
    amount: Amount
    name: str
    email: str
    phone: str
    link_expiry: str = Field(alias="linkExpiry")
    remarks: str = ""
    notify_customer: bool = Field(default=True, alias="notifyCustomer")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class DeactivateCashgramRequestDTO(BaseModel):
    """Payload for deactivating a cashgram."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    cashgram_id: str = Field(alias="cashgramId")

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class AuthorizeDataDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: Optional[str] = None
    expiry: Optional[int] = None


class AuthorizeResponseDTO(BaseModel):
    """Body returned by the payout authorize endpoint.

    The HTTP client attaches the undecoded body and status so failures can
    report exactly what the endpoint sent.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: Optional[str] = None
    sub_code: Optional[str] = Field(default=None, alias="subCode")
    message: Optional[str] = None
    data: Optional[AuthorizeDataDTO] = None

    _raw_body: Optional[str] = PrivateAttr(default=None)
    _http_status: Optional[int] = PrivateAttr(default=None)

    @field_validator("sub_code", mode="before")
    @classmethod
    def coerce_sub_code(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) else v

    @classmethod
    def from_http(cls, text: str, status_code: int) -> "AuthorizeResponseDTO":
        """Parse ``text`` and keep it alongside ``status_code``.

        Raises:
            ValueError: The body is not JSON.
            pydantic.ValidationError: The JSON does not fit this model.
        """
        response = cls.model_validate(json.loads(text))
        response._raw_body = text
        response._http_status = status_code
        return response

    @property
    def raw_body(self) -> Optional[str]:
        return self._raw_body

    @property
    def http_status(self) -> Optional[int]:
        return self._http_status


# Payment gateway DTOs
class CreateOrderRequestDTO(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    order_amount: Amount
    order_currency: str = "INR"
    customer_id: str
    customer_phone: str

    def to_body(self) -> dict[str, Any]:
        return {
            "order_currency": self.order_currency,
            "order_amount": self.order_amount,
            "customer_details": {
                "customer_id": self.customer_id,
                "customer_phone": self.customer_phone,
            },
        }


class CreatePaymentLinkRequestDTO(BaseModel):
    """Payment link fields; ``link_notes`` arrives as JSON text."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    link_id: str
    link_amount: Amount
    link_purpose: str
    link_currency: str = "INR"
    customer_email: str = ""
    customer_name: str = ""
    customer_phone: str = ""
    link_expiry_time: str = ""
    link_auto_reminders: bool = False
    link_partial_payments: bool = False
    link_minimum_partial_amount: Optional[Amount] = None
    notify_url: str = ""
    return_url: str = ""
    upi_intent: bool = False
    link_notes: str = "{}"
    send_email: bool = False
    send_sms: bool = False

    def parsed_notes(self) -> dict[str, Any]:
        try:
            notes = json.loads(self.link_notes or "{}")
        except json.JSONDecodeError as e:
            raise ValidationError(
                "link_notes", f"Invalid JSON in Link Notes: {e.msg}"
            ) from e
        if not isinstance(notes, dict):
            raise ValidationError("link_notes", "Link Notes must be a JSON object")
        return notes

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "customer_details": {
                "customer_email": self.customer_email,
                "customer_name": self.customer_name,
                "customer_phone": self.customer_phone,
            },
            "link_amount": self.link_amount,
            "link_currency": self.link_currency,
            "link_id": self.link_id,
            "link_purpose": self.link_purpose,
            "link_expiry_time": self.link_expiry_time,
            "link_auto_reminders": self.link_auto_reminders,
            "link_partial_payments": self.link_partial_payments,
            "link_minimum_partial_amount": self.link_minimum_partial_amount,
            "link_meta": {
                "notify_url": self.notify_url,
                "return_url": self.return_url,
                "upi_intent": self.upi_intent,
            },
            "link_notes": self.parsed_notes(),
            "link_notify": {
                "send_email": self.send_email,
                "send_sms": self.send_sms,
            },
        }
        if not body["link_expiry_time"]:
            del body["link_expiry_time"]
        if body["link_minimum_partial_amount"] is None:
            del body["link_minimum_partial_amount"]
        return body


class CreateRefundRequestDTO(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    order_id: str
    refund_amount: Amount
    refund_id: str
    refund_note: str = ""
    refund_speed: str = "STANDARD"

    @field_validator("refund_speed")
    @classmethod
    def validate_refund_speed(cls, v: str) -> str:
        if v not in {"STANDARD", "INSTANT"}:
            raise ValueError("refund_speed must be STANDARD or INSTANT")
        return v

    def to_body(self) -> dict[str, Any]:
        return {
            "refund_amount": self.refund_amount,
            "refund_id": self.refund_id,
            "refund_note": self.refund_note,
            "refund_speed": self.refund_speed,
        }
