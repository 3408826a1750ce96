"""
RSA key material: resolution, parsing, export and generation.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from licenser.common.config import Config
from licenser.common.exceptions import (
    InvalidKeySizeError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    NoPublicKeyError,
)
from licenser.common.interfaces import ILicenseStorage, PathLike  # noqa: TC001
from licenser.common.models import ManagerConfig  # noqa: TC001
from licenser.manager.persistence import LicenseStorage

logger = logging.getLogger(__name__)


class KeyPair(NamedTuple):
    """Private and public key; ``private_key`` is None for validation only."""

    private_key: rsa.RSAPrivateKey | None
    public_key: rsa.RSAPublicKey

    @property
    def can_sign(self) -> bool:
        return self.private_key is not None


def _pem_bytes(pem_data: str | bytes) -> bytes:
    return pem_data.encode("utf-8") if isinstance(pem_data, str) else pem_data


def generate_private_key(key_size: int | None = None) -> rsa.RSAPrivateKey:
    """
    Generate a fresh RSA private key.

    Raises:
        InvalidKeySizeError: the key size is rejected by the backend.
    """
    config = Config()
    key_size = key_size or config.DEFAULT_KEY_SIZE
    try:
        return rsa.generate_private_key(
            public_exponent=config.PUBLIC_EXPONENT, key_size=key_size
        )
    except ValueError as err:
        raise InvalidKeySizeError(key_size, str(err)) from err


def parse_private_key_pem(pem_data: str | bytes) -> rsa.RSAPrivateKey:
    """Parse an unencrypted RSA private key from PEM (PKCS#1 or PKCS#8)."""
    try:
        key = serialization.load_pem_private_key(_pem_bytes(pem_data), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        raise InvalidPrivateKeyError from err
    if not isinstance(key, rsa.RSAPrivateKey):
        msg = f"invalid private key: expected RSA, got {type(key).__name__}"
        raise InvalidPrivateKeyError(msg)
    return key


def parse_public_key_pem(pem_data: str | bytes) -> rsa.RSAPublicKey:
    """Parse an RSA public key from PEM (PKIX)."""
    try:
        key = serialization.load_pem_public_key(_pem_bytes(pem_data))
    except (ValueError, TypeError, UnsupportedAlgorithm) as err:
        raise InvalidPublicKeyError from err
    if not isinstance(key, rsa.RSAPublicKey):
        msg = f"invalid public key: expected RSA, got {type(key).__name__}"
        raise InvalidPublicKeyError(msg)
    return key


def load_private_key_file(
    path: PathLike, storage: ILicenseStorage | None = None
) -> rsa.RSAPrivateKey:
    return parse_private_key_pem((storage or LicenseStorage()).read_bytes(path))


def load_public_key_file(
    path: PathLike, storage: ILicenseStorage | None = None
) -> rsa.RSAPublicKey:
    return parse_public_key_pem((storage or LicenseStorage()).read_bytes(path))


def export_private_key_pem(private_key: rsa.RSAPrivateKey) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


def export_public_key_pem(public_key: rsa.RSAPublicKey) -> str:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("ascii")


def resolve_key_pair(
    config: ManagerConfig, storage: ILicenseStorage | None = None
) -> KeyPair:
    """
    Resolve the key pair described by a manager configuration.

    In generator mode the private key comes from PEM text, else from a file,
    else it is freshly generated; its public half is used for verification.
    A separately configured public key (PEM text first, then file) replaces
    the verification key in either mode.

    Raises:
        InvalidPrivateKeyError: private key PEM is malformed or not RSA.
        InvalidPublicKeyError: public key PEM is malformed or not RSA.
        InvalidKeySizeError: a fresh key of the configured size cannot be made.
        NoPublicKeyError: no public key could be resolved.
        LicenseIOError: a key file could not be read.
    """
    storage = storage or LicenseStorage()
    private_key: rsa.RSAPrivateKey | None = None
    public_key: rsa.RSAPublicKey | None = None

    if config.generator_mode:
        if config.private_key_pem:
            logger.debug("Using private key from PEM data")
            private_key = parse_private_key_pem(config.private_key_pem)
        elif config.private_key_path:
            logger.debug("Loading private key from %s", config.private_key_path)
            private_key = load_private_key_file(config.private_key_path, storage)
        else:
            key_size = config.key_size or Config().DEFAULT_KEY_SIZE
            logger.info("Generating %s-bit RSA key pair", key_size)
            private_key = generate_private_key(key_size)
        public_key = private_key.public_key()

    if config.public_key_pem:
        logger.debug("Using public key from PEM data")
        public_key = parse_public_key_pem(config.public_key_pem)
    elif config.public_key_path:
        logger.debug("Loading public key from %s", config.public_key_path)
        public_key = load_public_key_file(config.public_key_path, storage)

    if public_key is None:
        raise NoPublicKeyError

    return KeyPair(private_key=private_key, public_key=public_key)


class KeyGenerator:
    """Key generator for creating RSA signing keys."""

    def __init__(
        self,
        keys_dir: Path | None = None,
        key_size: int | None = None,
        storage: ILicenseStorage | None = None,
    ):
        config = Config()
        self.keys_dir = keys_dir or config.KEYS_DIR
        self.key_size = key_size or config.DEFAULT_KEY_SIZE
        self.private_key_filename = config.PRIVATE_KEY_FILENAME
        self.public_key_filename = config.PUBLIC_KEY_FILENAME
        self.storage = storage or LicenseStorage()

    @property
    def private_key_path(self) -> Path:
        return Path(self.keys_dir) / self.private_key_filename

    @property
    def public_key_path(self) -> Path:
        return Path(self.keys_dir) / self.public_key_filename

    def generate_keys(self) -> KeyPair:
        """Generate and save a private/public key pair."""
        logger.info("Generating %s-bit RSA keys...", self.key_size)

        private_key = generate_private_key(self.key_size)
        public_key = private_key.public_key()

        Path(self.keys_dir).mkdir(parents=True, exist_ok=True)
        self.storage.write_bytes(
            self.private_key_path, export_private_key_pem(private_key).encode("ascii")
        )
        self.storage.write_bytes(
            self.public_key_path, export_public_key_pem(public_key).encode("ascii")
        )

        logger.info("Keys generated and saved:")
        logger.info("  Private: %s", self.private_key_path)
        logger.info("  Public: %s", self.public_key_path)
        logger.info("Keep the private key secure!")
        return KeyPair(private_key=private_key, public_key=public_key)
