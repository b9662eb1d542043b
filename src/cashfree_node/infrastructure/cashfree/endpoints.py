"""Cashfree hosts per environment.

Only the host differs between sandbox and production; paths and headers
are identical.
"""

from __future__ import annotations

from ...domain.credentials import Environment

PAYOUT_BASE_URLS = {
    Environment.SANDBOX: "https://payout-gamma.cashfree.com",
    Environment.PRODUCTION: "https://payout-api.cashfree.com",
}

GATEWAY_BASE_URLS = {
    Environment.SANDBOX: "https://sandbox.cashfree.com/pg",
    Environment.PRODUCTION: "https://api.cashfree.com/pg",
}

AUTHORIZE_PATH = "/payout/v1/authorize"
CREATE_CASHGRAM_PATH = "/payout/v1/createCashgram"
DEACTIVATE_CASHGRAM_PATH = "/payout/v1/deactivateCashgram"


def payout_base_url(environment: Environment) -> str:
    return PAYOUT_BASE_URLS[Environment(environment)]


def gateway_base_url(environment: Environment) -> str:
    return GATEWAY_BASE_URLS[Environment(environment)]
