import stat
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey, RSAPublicKey

from licenser.manager.keys import KeyGenerator


def test_key_generator_generate_keys(tmp_path: Path) -> None:
    """Test key generation with temporary directory."""
    keygen = KeyGenerator(keys_dir=tmp_path, key_size=2048)

    key_pair = keygen.generate_keys()

    private_path = tmp_path / "private.pem"
    public_path = tmp_path / "public.pem"
    assert private_path.exists()
    assert public_path.exists()
    assert key_pair.can_sign

    private_pem = private_path.read_bytes()
    assert b"BEGIN RSA PRIVATE KEY" in private_pem
    private_key = serialization.load_pem_private_key(private_pem, password=None)
    assert isinstance(private_key, RSAPrivateKey)
    assert private_key.key_size == 2048  # noqa: PLR2004

    public_pem = public_path.read_bytes()
    assert b"BEGIN PUBLIC KEY" in public_pem
    assert isinstance(serialization.load_pem_public_key(public_pem), RSAPublicKey)


def test_key_generator_directory_creation(tmp_path: Path) -> None:
    """Test that directory is created if it doesn't exist."""
    keys_dir = tmp_path / "nested" / "keys"
    keygen = KeyGenerator(keys_dir=keys_dir)

    keygen.generate_keys()

    assert keys_dir.exists()
    assert (keys_dir / "private.pem").exists()
    assert (keys_dir / "public.pem").exists()


def test_key_generator_restricts_permissions(tmp_path: Path) -> None:
    keygen = KeyGenerator(keys_dir=tmp_path)
    keygen.generate_keys()

    mode = stat.S_IMODE((tmp_path / "private.pem").stat().st_mode)
    assert mode == 0o600
