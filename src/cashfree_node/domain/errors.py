"""Domain-specific exceptions."""

from __future__ import annotations

from typing import Optional


class CashfreeError(Exception):
    """Base class for every failure surfaced by a Cashfree operation."""


class ValidationError(CashfreeError):
    """Raised when a required credential or parameter is empty or malformed.

    Raised before any network call is attempted.
    """

    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(message or f"Missing required credential: {field}")


class SignatureError(CashfreeError):
    """Raised when the public key cannot be parsed or encryption fails."""


class AuthorizationError(CashfreeError):
    """Raised when the payout authorize endpoint rejects the request."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        api_message: Optional[str] = None,
        sub_code: Optional[str] = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.api_message = api_message
        self.sub_code = sub_code
        super().__init__(message)


class OperationError(CashfreeError):
    """Raised when a gateway or payout endpoint returns a non-success status."""

    def __init__(
        self,
        operation: str,
        status_code: int,
        body: str,
        *,
        reason: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.status_code = status_code
        self.body = body
        detail = reason or f"failed with HTTP {status_code}"
        super().__init__(f"{operation} {detail}: {body}")
