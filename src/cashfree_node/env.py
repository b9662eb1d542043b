from __future__ import annotations

import logging
import os

from pydantic import BaseModel, field_validator

from .domain.credentials import (
    DEFAULT_API_VERSION,
    AuthMode,
    Credentials,
    Environment,
)


class Settings(BaseModel):
    """Typed settings built from environment variables."""

    environment: Environment = Environment.SANDBOX
    auth_mode: AuthMode = AuthMode.SIGNED_EXCHANGE
    client_id: str = ""
    client_secret: str = ""
    public_key_pem: str = ""
    payout_auth_token: str = ""
    api_version: str = DEFAULT_API_VERSION

    http_timeout: float = 10.0
    token_cache_ttl_seconds: float = 0.0
    log_level: str = "INFO"

    @field_validator("http_timeout")
    @classmethod
    def validate_http_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP timeout must be positive")
        return v

    @field_validator("token_cache_ttl_seconds")
    @classmethod
    def validate_token_cache_ttl(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Token cache TTL cannot be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    def to_credentials(self) -> Credentials:
        return Credentials(
            environment=self.environment,
            auth_mode=self.auth_mode,
            client_id=self.client_id,
            client_secret=self.client_secret,
            public_key=self.public_key_pem,
            payout_auth_token=self.payout_auth_token,
            api_version=self.api_version,
        )


def get_settings() -> Settings:
    """Return typed settings instance sourced from env vars."""
    return Settings(
        environment=os.environ.get("CASHFREE_ENVIRONMENT", "sandbox").lower(),
        auth_mode=os.environ.get("CASHFREE_AUTH_MODE", "signed_exchange").lower(),
        client_id=os.environ.get("CASHFREE_CLIENT_ID", ""),
        client_secret=os.environ.get("CASHFREE_CLIENT_SECRET", ""),
        public_key_pem=os.environ.get("CASHFREE_PUBLIC_KEY_PEM", ""),
        payout_auth_token=os.environ.get("CASHFREE_PAYOUT_AUTH_TOKEN", ""),
        api_version=os.environ.get("CASHFREE_API_VERSION", DEFAULT_API_VERSION),
        http_timeout=float(os.environ.get("CASHFREE_HTTP_TIMEOUT", "10.0")),
        token_cache_ttl_seconds=float(
            os.environ.get("CASHFREE_TOKEN_CACHE_TTL_SECONDS", "0")
        ),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
    )

