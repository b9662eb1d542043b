"""Pytest fixtures for payout use case tests."""

from __future__ import annotations

from functools import partial

import httpx
import pytest

from cashfree_node.application.use_cases.payout import PayoutService
from cashfree_node.domain.credentials import Credentials
from cashfree_node.infrastructure.cashfree.payout_client import AsyncPayoutClient
from tests.fixtures import (
    AUTHORIZED,
    CASHGRAM_CREATED,
    CASHGRAM_DEACTIVATED,
    RecordingTransport,
)


@pytest.fixture
def payout_transport() -> RecordingTransport:
    """Fake payout backend answering authorize and both cashgram endpoints."""
    return RecordingTransport(
        {
            "/payout/v1/authorize": httpx.Response(200, json=AUTHORIZED),
            "/payout/v1/createCashgram": httpx.Response(200, json=CASHGRAM_CREATED),
            "/payout/v1/deactivateCashgram": httpx.Response(
                200, json=CASHGRAM_DEACTIVATED
            ),
        }
    )


@pytest.fixture
def payout_service(
    credentials: Credentials, payout_transport: RecordingTransport
) -> PayoutService:
    return PayoutService(
        credentials, partial(AsyncPayoutClient, transport=payout_transport)
    )
