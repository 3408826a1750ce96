import time
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from licenser.common.models import License, ManagerConfig, Service
from licenser.manager.core import LicenseManager


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    """One RSA key for the whole session, key generation is slow."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_pem(private_key: rsa.RSAPrivateKey) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_pem(private_key: rsa.RSAPrivateKey) -> str:
    return (
        private_key.public_key()
        .public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode()
    )


@pytest.fixture
def keys_dir(tmp_path: Path, private_pem: str, public_pem: str) -> Path:
    """Temporary directory holding private.pem and public.pem."""
    keys_dir = tmp_path / "keys"
    keys_dir.mkdir()
    (keys_dir / "private.pem").write_text(private_pem)
    (keys_dir / "public.pem").write_text(public_pem)
    return keys_dir


@pytest.fixture
def generator(private_pem: str) -> LicenseManager:
    return LicenseManager(ManagerConfig(private_key_pem=private_pem, generator_mode=True))


@pytest.fixture
def validator(public_pem: str) -> LicenseManager:
    return LicenseManager(ManagerConfig(public_key_pem=public_pem))


@pytest.fixture
def sample_license() -> License:
    return License(
        customer="Test Customer",
        app_id="test-app",
        services=[Service(id="test", name="Test")],
        limits={"users": 10},
        features={"premium": True},
        issued_at=int(time.time()),
        expires_at=int(time.time()) + 3600,
    )
