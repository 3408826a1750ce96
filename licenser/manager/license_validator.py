"""
License validation utilities.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from licenser.common.models import ValidationResult

if TYPE_CHECKING:
    from licenser.common.interfaces import Clock
    from licenser.common.models import SignedLicense
    from licenser.manager.signer import LicenseSigner

ERR_SIGNATURE = "signature verification failed"
ERR_EXPIRED = "license has expired"
ERR_CUSTOMER = "customer is required"
ERR_APP_ID = "app ID is required"
ERR_SERVICES = "at least one service is required"


class LicenseValidator:
    """Runs every license check and collects the failures."""

    def __init__(self, signer: LicenseSigner, clock: Clock | None = None):
        self.signer = signer
        self.clock = clock or time.time
        self.logger = logging.getLogger(__name__)

    def validate(
        self, signed_license: SignedLicense, now: int | None = None
    ) -> ValidationResult:
        """
        Validate a signed license without modifying it.

        All checks run even after one fails, so the result lists every
        problem in a fixed order: signature, expiry, customer, app ID,
        services.
        """
        lic = signed_license.data
        now = int(self.clock()) if now is None else now
        result = ValidationResult()

        if not self.signer.verify(lic, signed_license.signature):
            result.add_error(ERR_SIGNATURE)

        if lic.expires_at > 0 and now > lic.expires_at:
            self.logger.debug(
                "License for %r expired at %s (now=%s)", lic.app_id, lic.expires_at, now
            )
            result.add_error(ERR_EXPIRED)

        if not lic.customer:
            result.add_error(ERR_CUSTOMER)

        if not lic.app_id:
            result.add_error(ERR_APP_ID)

        if not lic.services:
            result.add_error(ERR_SERVICES)

        if result.valid:
            self.logger.debug("License for %r valid", lic.app_id)
        else:
            self.logger.info(
                "License for %r invalid: %s", lic.app_id, "; ".join(result.errors)
            )
        return result
