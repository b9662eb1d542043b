"""Test doubles and canned payloads for payout and gateway clients."""

from .fake_payout_client import FakePayoutClient
from .payloads import AUTHORIZED, CASHGRAM_CREATED, CASHGRAM_DEACTIVATED
from .recording_transport import RecordingTransport

__all__ = [
    "AUTHORIZED",
    "CASHGRAM_CREATED",
    "CASHGRAM_DEACTIVATED",
    "FakePayoutClient",
    "RecordingTransport",
]
