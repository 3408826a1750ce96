"""
Signing and verification of license content.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from licenser.common.crypto import CryptoUtils, SignatureDecodeError
from licenser.common.exceptions import ModeError

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.rsa import (
        RSAPrivateKey,
        RSAPublicKey,
    )

    from licenser.common.models import License


class LicenseSigner:
    """Signs license content and checks signatures against a public key."""

    def __init__(
        self,
        public_key: RSAPublicKey,
        private_key: RSAPrivateKey | None = None,
    ):
        self.public_key = public_key
        self.private_key = private_key
        self.logger = logging.getLogger(__name__)

    def sign(self, license: License) -> str:
        """Return the base64 signature over the canonical content bytes."""
        if self.private_key is None:
            raise ModeError
        data = CryptoUtils.canonical_json(license)
        return CryptoUtils.encode_signature(
            CryptoUtils.sign_bytes(self.private_key, data)
        )

    def verify(self, license: License, signature: str) -> bool:
        """Check a signature; every kind of failure returns False."""
        try:
            raw_signature = CryptoUtils.decode_signature(signature)
        except SignatureDecodeError:
            self.logger.debug("Signature for %r could not be decoded", license.app_id)
            return False

        data = CryptoUtils.canonical_json(license)
        if not CryptoUtils.verify_bytes(self.public_key, data, raw_signature):
            self.logger.debug("Signature for %r does not match", license.app_id)
            return False
        return True
