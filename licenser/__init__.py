# Offline license signing and verification

from licenser.common.decorators import requires_active_license, requires_service
from licenser.common.exceptions import (
    ConfigurationError,
    ErrorKind,
    InvalidKeySizeError,
    InvalidPrivateKeyError,
    InvalidPublicKeyError,
    LicenseExpiredError,
    LicenseFormatError,
    LicenseIOError,
    LicenseRejectedError,
    LicenserError,
    ModeError,
    NoPublicKeyError,
    ValidationError,
)
from licenser.common.helpers import (
    calculate_remaining_time,
    format_expiry,
    format_time_until_expiry,
    get_license_status,
    has_service,
    has_service_by_id,
    has_service_by_name,
    is_expiring_soon,
    timestamp_to_datetime,
)
from licenser.common.models import (
    License,
    LicenseInfo,
    ManagerConfig,
    Service,
    SignedLicense,
    ValidationResult,
)
from licenser.manager import KeyGenerator, KeyPair, LicenseBuilder, LicenseManager

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "InvalidKeySizeError",
    "InvalidPrivateKeyError",
    "InvalidPublicKeyError",
    "KeyGenerator",
    "KeyPair",
    "License",
    "LicenseBuilder",
    "LicenseExpiredError",
    "LicenseFormatError",
    "LicenseIOError",
    "LicenseInfo",
    "LicenseManager",
    "LicenseRejectedError",
    "LicenserError",
    "ManagerConfig",
    "ModeError",
    "NoPublicKeyError",
    "Service",
    "SignedLicense",
    "ValidationError",
    "ValidationResult",
    "calculate_remaining_time",
    "format_expiry",
    "format_time_until_expiry",
    "get_license_status",
    "has_service",
    "has_service_by_id",
    "has_service_by_name",
    "is_expiring_soon",
    "requires_active_license",
    "requires_service",
    "timestamp_to_datetime",
]
