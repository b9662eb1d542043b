"""Credential and environment types shared by every operation."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .errors import ValidationError

DEFAULT_API_VERSION = "2023-08-01"


class Environment(str, Enum):
    SANDBOX = "sandbox"
    PRODUCTION = "production"


class AuthMode(str, Enum):
    """How payout calls obtain their bearer token."""

    SIGNED_EXCHANGE = "signed_exchange"
    PRE_ISSUED_TOKEN = "pre_issued_token"


class Credentials(BaseModel):
    """Caller credentials for a single operation invocation.

    Passed explicitly to every service; never stored globally.
    """

    model_config = ConfigDict(frozen=True)

    environment: Environment = Environment.SANDBOX
    auth_mode: AuthMode = AuthMode.SIGNED_EXCHANGE
    client_id: str = ""
    client_secret: str = Field(default="", repr=False)
    public_key: str = Field(default="", repr=False)
    payout_auth_token: str = Field(default="", repr=False)
    api_version: str = DEFAULT_API_VERSION

    def require_signing_fields(self) -> tuple[str, str, str]:
        """Return trimmed (client_id, client_secret, public_key).

        Raises ValidationError naming the first empty field.
        """
        client_id = self.client_id.strip()
        client_secret = self.client_secret.strip()
        public_key = self.public_key.strip()
        if not client_id:
            raise ValidationError("client_id")
        if not client_secret:
            raise ValidationError("client_secret")
        if not public_key:
            raise ValidationError("public_key")
        return client_id, client_secret, public_key

    def require_gateway_fields(self) -> tuple[str, str]:
        client_id = self.client_id.strip()
        client_secret = self.client_secret.strip()
        if not client_id:
            raise ValidationError("client_id")
        if not client_secret:
            raise ValidationError("client_secret")
        return client_id, client_secret
