"""
Fluent builder for license content.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta  # noqa: TC003

from licenser.common.exceptions import ValidationError
from licenser.common.models import License, Service


def check_required_fields(lic: License) -> None:
    """Raise a ValidationError for the first missing required field."""
    if not lic.customer:
        raise ValidationError.customer_required()
    if not lic.app_id:
        raise ValidationError.app_id_required()
    if not lic.services:
        raise ValidationError.no_services()


class LicenseBuilder:
    """Builds a License step by step.

    A builder holds one work-in-progress license and is meant to be used by a
    single owner; ``build()`` hands out an independent copy.
    """

    def __init__(self) -> None:
        self._license = License()

    def with_customer(self, customer: str) -> LicenseBuilder:
        self._license.customer = customer
        return self

    def with_app_id(self, app_id: str) -> LicenseBuilder:
        self._license.app_id = app_id
        return self

    def with_service(
        self,
        service: Service | str,
        name: str = "",
        description: str = "",
        metadata: dict[str, str] | None = None,
    ) -> LicenseBuilder:
        """Add a service, either as a Service or by its ID and details."""
        if not isinstance(service, Service):
            service = Service(
                id=service,
                name=name,
                description=description,
                metadata=metadata or {},
            )
        self._license.services.append(service)
        return self

    def with_services(self, services: list[Service]) -> LicenseBuilder:
        self._license.services = list(services)
        return self

    def with_limit(self, key: str, value: int) -> LicenseBuilder:
        self._license.limits[key] = value
        return self

    def with_feature(self, key: str, enabled: bool = True) -> LicenseBuilder:  # noqa: FBT001, FBT002
        self._license.features[key] = enabled
        return self

    def with_expiration(self, expires_at: int) -> LicenseBuilder:
        self._license.expires_at = expires_at
        return self

    def with_expiration_time(self, expires_at: datetime) -> LicenseBuilder:
        self._license.expires_at = int(expires_at.timestamp())
        return self

    def with_expiration_duration(self, duration: timedelta) -> LicenseBuilder:
        self._license.expires_at = int(time.time() + duration.total_seconds())
        return self

    def with_metadata(self, key: str, value: str) -> LicenseBuilder:
        self._license.metadata[key] = value
        return self

    def with_version(self, version: str) -> LicenseBuilder:
        self._license.version = version
        return self

    def with_environment(self, environment: str) -> LicenseBuilder:
        self._license.environment = environment
        return self

    def build(self) -> License:
        """Return the built license, stamping issued_at if it is unset."""
        if self._license.issued_at == 0:
            self._license.issued_at = int(time.time())
        return self._license.model_copy(deep=True)

    def validate(self) -> None:
        check_required_fields(self._license)
