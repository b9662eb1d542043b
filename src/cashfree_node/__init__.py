"""Cashfree payment gateway and payout actions for workflow automation."""

__version__ = "1.0.0"
