"""Common cryptographic utilities.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import TYPE_CHECKING

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.rsa import (
        RSAPrivateKey,
        RSAPublicKey,
    )

    from licenser.common.models import License


class SignatureDecodeError(ValueError):
    """Signature text is not valid base64."""


class CryptoUtils:
    """Utility class for cryptographic operations."""

    @staticmethod
    def canonical_json(license: License) -> bytes:
        """Serialize license content to the exact bytes covered by a signature."""
        return json.dumps(
            license.wire_dict(), separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")

    @staticmethod
    def encode_signature(signature: bytes) -> str:
        return base64.b64encode(signature).decode("ascii")

    @staticmethod
    def decode_signature(signature: str) -> bytes:
        try:
            return base64.b64decode(signature.encode("ascii"), validate=True)
        except (binascii.Error, UnicodeEncodeError) as err:
            msg = "signature is not valid base64"
            raise SignatureDecodeError(msg) from err

    @staticmethod
    def sign_bytes(private_key: RSAPrivateKey, data: bytes) -> bytes:
        """Sign data with RSA PKCS#1 v1.5 over its SHA-256 digest."""
        return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())

    @staticmethod
    def verify_bytes(public_key: RSAPublicKey, data: bytes, signature: bytes) -> bool:
        try:
            public_key.verify(signature, data, padding.PKCS1v15(), hashes.SHA256())
        except (InvalidSignature, ValueError):
            return False
        return True
