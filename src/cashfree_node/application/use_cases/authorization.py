"""Bearer token acquisition for payout operations."""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ...crypto.signing import build_signing_subject, sign_subject
from ...domain.credentials import AuthMode, Credentials
from ...domain.errors import AuthorizationError, ValidationError
from ..payout_client_protocol import PayoutClientProtocol
from ...middleware.timing import log_timing

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthToken:
    token: str
    # Upstream expiry as unix epoch seconds, when the endpoint reports one.
    expires_at: Optional[float] = None


@log_timing("exchange_auth_token")
async def exchange_auth_token(
    credentials: Credentials, client: PayoutClientProtocol
) -> AuthToken:
    """Sign a fresh subject and exchange it for a bearer token.

    Credential fields are validated before any network call. No retries are
    attempted; every failure surfaces as a single domain error.

    Raises:
        ValidationError: A required credential field is empty.
        SignatureError: The public key could not be used.
        AuthorizationError: The authorize endpoint rejected the request.
    """
    client_id, client_secret, public_key = credentials.require_signing_fields()

    subject = build_signing_subject(client_id)
    signature = sign_subject(subject, public_key)

    logger.debug("Requesting payout token from %s", client.base_url)
    response = await client.authorize(client_id, client_secret, signature)

    if response.status == "SUCCESS" and response.data and response.data.token:
        return AuthToken(token=response.data.token, expires_at=response.data.expiry)
    if response.status == "ERROR":
        raise AuthorizationError(
            f"Cashfree API error: {response.message} (subCode: {response.sub_code})",
            status_code=response.http_status,
            api_message=response.message,
            sub_code=response.sub_code,
        )
    raw = response.raw_body
    if raw is None:
        raw = response.model_dump_json(by_alias=True, exclude_none=True)
    raise AuthorizationError(
        f"Unexpected authorization response: {raw}",
        status_code=response.http_status,
        body=raw,
    )


async def get_auth_token(
    credentials: Credentials, client: PayoutClientProtocol
) -> str:
    return (await exchange_auth_token(credentials, client)).token


class TokenProvider(Protocol):
    async def get_token(
        self, credentials: Credentials, client: PayoutClientProtocol
    ) -> AuthToken: ...


class SignedExchangeTokenProvider:
    """Runs the full sign-and-exchange roundtrip on every call."""

    async def get_token(
        self, credentials: Credentials, client: PayoutClientProtocol
    ) -> AuthToken:
        return await exchange_auth_token(credentials, client)


class PreIssuedTokenProvider:
    """Uses the operator-supplied payout token verbatim."""

    async def get_token(
        self, credentials: Credentials, client: PayoutClientProtocol
    ) -> AuthToken:
        token = credentials.payout_auth_token.strip()
        if not token:
            raise ValidationError("payout_auth_token")
        return AuthToken(token=token)


class CachingTokenProvider:
    """Reuses tokens from ``inner`` for at most ``ttl_seconds``.

    Entries are keyed by credential identity and also expire
    ``expiry_margin_seconds`` before any upstream-reported expiry, so a stale
    token is never handed out.
    """

    def __init__(
        self,
        inner: TokenProvider,
        ttl_seconds: float,
        *,
        expiry_margin_seconds: float = 30.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._inner = inner
        self._ttl_seconds = ttl_seconds
        self._expiry_margin_seconds = expiry_margin_seconds
        self._clock = clock
        self._entries: dict[tuple[str, ...], tuple[AuthToken, float]] = {}

    @staticmethod
    def _key(credentials: Credentials) -> tuple[str, ...]:
        secret_digest = hashlib.sha256(
            credentials.client_secret.strip().encode("utf-8")
        ).hexdigest()
        return (
            credentials.environment.value,
            credentials.auth_mode.value,
            credentials.client_id.strip(),
            secret_digest,
        )

    def _valid_until(self, token: AuthToken, now: float) -> float:
        valid_until = now + self._ttl_seconds
        if token.expires_at is not None:
            valid_until = min(valid_until, token.expires_at - self._expiry_margin_seconds)
        return valid_until

    async def get_token(
        self, credentials: Credentials, client: PayoutClientProtocol
    ) -> AuthToken:
        key = self._key(credentials)
        cached = self._entries.get(key)
        if cached is not None:
            token, valid_until = cached
            if self._clock() < valid_until:
                return token
            del self._entries[key]

        token = await self._inner.get_token(credentials, client)
        now = self._clock()
        valid_until = self._valid_until(token, now)
        if valid_until > now:
            self._entries[key] = (token, valid_until)
        return token

    def clear(self) -> None:
        self._entries.clear()


def token_provider_for(
    auth_mode: AuthMode, cache_ttl_seconds: float = 0.0
) -> TokenProvider:
    if auth_mode == AuthMode.PRE_ISSUED_TOKEN:
        return PreIssuedTokenProvider()
    if cache_ttl_seconds > 0:
        return CachingTokenProvider(SignedExchangeTokenProvider(), cache_ttl_seconds)
    return SignedExchangeTokenProvider()
