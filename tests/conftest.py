"""Shared pytest fixtures for signing and payout tests."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from cashfree_node.domain.credentials import AuthMode, Credentials, Environment


def _public_pem(public_key) -> str:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    """Generate an RSA key pair once per test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def rsa_public_key_pem(rsa_private_key: rsa.RSAPrivateKey) -> str:
    return _public_pem(rsa_private_key.public_key())


@pytest.fixture(scope="session")
def ec_public_key_pem() -> str:
    return _public_pem(ec.generate_private_key(ec.SECP256R1()).public_key())


@pytest.fixture
def credentials(rsa_public_key_pem: str) -> Credentials:
    return Credentials(
        environment=Environment.SANDBOX,
        auth_mode=AuthMode.SIGNED_EXCHANGE,
        client_id="CF_CLIENT",
        client_secret="cf_secret",
        public_key=rsa_public_key_pem,
    )
