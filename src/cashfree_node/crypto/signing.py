from __future__ import annotations

import base64
import binascii
import re
import time
from typing import NewType

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..domain.errors import SignatureError
from ..middleware.timing import log_timing

SigningSubject = NewType("SigningSubject", str)
SignatureB64 = NewType("SignatureB64", str)

_PEM_ARMOR = re.compile(r"-----(BEGIN|END) PUBLIC KEY-----")
_WHITESPACE = re.compile(r"\s+")

# The authorize endpoint decrypts with RSA/ECB/OAEPWithSHA-1AndMGF1Padding.
_OAEP_SHA1 = padding.OAEP(
    mgf=padding.MGF1(algorithm=hashes.SHA1()),
    algorithm=hashes.SHA1(),
    label=None,
)


def build_signing_subject(identifier: str) -> SigningSubject:
    """Return ``<identifier>.<unix-epoch-seconds>`` using the current clock."""
    return SigningSubject(f"{identifier}.{int(time.time())}")


def strip_pem_armor(key_material: str) -> str:
    """Remove PEM delimiter lines and whitespace, leaving the base64 DER body."""
    return _WHITESPACE.sub("", _PEM_ARMOR.sub("", key_material))


def load_rsa_public_key(key_material: str) -> rsa.RSAPublicKey:
    """Load an RSA public key from PEM text (SubjectPublicKeyInfo)."""
    body = strip_pem_armor(key_material)
    try:
        der = base64.b64decode(body, validate=True)
        public_key = serialization.load_der_public_key(der)
    except (binascii.Error, ValueError, UnsupportedAlgorithm) as e:
        raise SignatureError(f"Invalid public key: {e}") from e
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise SignatureError(
            f"Public key must be RSA, got {type(public_key).__name__}"
        )
    return public_key


def encrypt_oaep_sha1(public_key: rsa.RSAPublicKey, data: bytes) -> bytes:
    try:
        return public_key.encrypt(data, _OAEP_SHA1)
    except ValueError as e:
        raise SignatureError(f"RSA encryption failed: {e}") from e


@log_timing("sign_subject")
def sign_subject(subject: str, key_material: str) -> SignatureB64:
    """Encrypt the subject under the public key and return base64 ciphertext.

    Raises SignatureError for malformed keys, non-RSA keys or encryption
    failures.
    """
    public_key = load_rsa_public_key(key_material)
    ciphertext = encrypt_oaep_sha1(public_key, subject.encode("utf-8"))
    return SignatureB64(base64.b64encode(ciphertext).decode("utf-8"))
