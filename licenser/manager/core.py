"""
License manager: generation, validation and persistence of signed licenses.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from licenser.common import setup_logger
from licenser.common.config import Config
from licenser.common.exceptions import LicenseExpiredError, ModeError
from licenser.common.helpers import (
    calculate_remaining_time,
    format_duration,
    timestamp_to_datetime,
)
from licenser.common.models import (
    LICENSE_EXPIRED,
    LICENSE_NEVER_EXPIRES,
    STATUS_ACTIVE,
    STATUS_EXPIRED,
    LicenseInfo,
    ManagerConfig,
    SignedLicense,
)
from licenser.manager.builder import check_required_fields
from licenser.manager.keys import (
    export_private_key_pem,
    export_public_key_pem,
    resolve_key_pair,
)
from licenser.manager.license_validator import LicenseValidator
from licenser.manager.persistence import (
    LicenseStorage,
    decode_license,
    encode_license,
)
from licenser.manager.signer import LicenseSigner

if TYPE_CHECKING:
    from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey

    from licenser.common.interfaces import Clock, ILicenseStorage, PathLike
    from licenser.common.models import License, ValidationResult


class LicenseManager:
    """
    Generates and validates signed licenses.

    The operating mode is fixed at construction: with ``generator_mode`` the
    manager holds a private key and can sign; otherwise it only verifies with
    a public key. Key material is resolved once and never changes, so one
    manager can be shared between threads.
    """

    def __init__(
        self,
        config: ManagerConfig | None = None,
        clock: Clock | None = None,
        storage: ILicenseStorage | None = None,
    ):
        self.config = config or ManagerConfig()
        self.settings = Config()
        self.clock: Clock = clock or time.time
        self.storage: ILicenseStorage = storage or LicenseStorage()

        self.logger = logging.getLogger(__name__)
        if self.config.log_level is not None:
            setup_logger(self.logger, self.config.log_level)

        self.key_pair = resolve_key_pair(self.config, self.storage)
        self.signer = LicenseSigner(
            public_key=self.key_pair.public_key,
            private_key=self.key_pair.private_key,
        )
        self.validator = LicenseValidator(self.signer, self.clock)
        self.logger.debug(
            "License manager ready (generator_mode=%s)", self.is_generator
        )

    @property
    def is_generator(self) -> bool:
        return self.key_pair.can_sign

    @property
    def public_key(self) -> RSAPublicKey:
        return self.key_pair.public_key

    def _now(self) -> int:
        return int(self.clock())

    def generate_license(self, license: License) -> SignedLicense:
        """
        Sign license content.

        The caller's record is left untouched; if ``issued_at`` is unset the
        signed copy is stamped with the current time.

        Raises:
            ModeError: the manager has no private key.
            ValidationError: customer, app ID or services are missing.
        """
        if not self.is_generator:
            raise ModeError
        check_required_fields(license)

        content = license.model_copy(deep=True)
        if content.issued_at == 0:
            content.issued_at = self._now()

        signature = self.signer.sign(content)
        self.logger.info(
            "Generated license for %r (app %r)", content.customer, content.app_id
        )
        return SignedLicense(
            data=content,
            signature=signature,
            algorithm=self.settings.SIGNATURE_ALGORITHM,
            created_at=self._now(),
        )

    def validate_license(self, signed_license: SignedLicense) -> ValidationResult:
        return self.validator.validate(signed_license, now=self._now())

    def save_license(self, signed_license: SignedLicense, path: PathLike) -> None:
        self.storage.write_bytes(path, encode_license(signed_license))
        self.logger.debug("Saved license to %s", path)

    def load_license(self, path: PathLike) -> SignedLicense:
        """
        Read and decode a license file.

        Raises:
            LicenseIOError: the file cannot be read.
            LicenseFormatError: the content is not a signed license.
        """
        return decode_license(self.storage.read_bytes(path), path)

    def load_and_validate_license(
        self, path: PathLike
    ) -> tuple[SignedLicense, ValidationResult]:
        signed_license = self.load_license(path)
        return signed_license, self.validate_license(signed_license)

    def export_private_key(self) -> str:
        if self.key_pair.private_key is None:
            raise ModeError
        return export_private_key_pem(self.key_pair.private_key)

    def export_public_key(self) -> str:
        return export_public_key_pem(self.key_pair.public_key)

    def export_keys(self) -> tuple[str, str]:
        """Return (private, public) PEM strings."""
        return self.export_private_key(), self.export_public_key()

    def save_keys(self, private_key_path: PathLike, public_key_path: PathLike) -> None:
        private_pem, public_pem = self.export_keys()
        self.storage.write_bytes(private_key_path, private_pem.encode("ascii"))
        self.storage.write_bytes(public_key_path, public_pem.encode("ascii"))
        self.logger.info("Saved keys to %s and %s", private_key_path, public_key_path)

    def save_public_key(self, path: PathLike) -> None:
        self.storage.write_bytes(path, self.export_public_key().encode("ascii"))

    def is_expired(self, license: License) -> bool:
        return license.expires_at > 0 and self._now() > license.expires_at

    def is_active(self, license: License) -> bool:
        return not self.is_expired(license)

    def check_expiration(self, license: License) -> None:
        if self.is_expired(license):
            raise LicenseExpiredError

    def get_license_info(self, license: License) -> LicenseInfo:
        expires_at = None
        if license.expires_at > 0:
            expires_at = timestamp_to_datetime(license.expires_at)
            if self.is_expired(license):
                status, time_until_expiry = STATUS_EXPIRED, LICENSE_EXPIRED
            else:
                remaining = calculate_remaining_time(license.expires_at, self.clock())
                status, time_until_expiry = STATUS_ACTIVE, format_duration(remaining)
        else:
            status, time_until_expiry = STATUS_ACTIVE, LICENSE_NEVER_EXPIRES

        return LicenseInfo(
            customer=license.customer,
            app_id=license.app_id,
            issued_at=timestamp_to_datetime(license.issued_at),
            expires_at=expires_at,
            status=status,
            time_until_expiry=time_until_expiry,
            services=[service.model_copy(deep=True) for service in license.services],
            limits=dict(license.limits),
            features=dict(license.features),
            metadata=dict(license.metadata),
            version=license.version,
            environment=license.environment,
        )
