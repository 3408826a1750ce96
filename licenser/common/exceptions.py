"""
Custom exceptions for the license system.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path  # noqa: TC003


class ErrorKind(str, Enum):
    """Closed set of error kinds raised by the library."""

    INVALID_PRIVATE_KEY = "invalid_private_key"
    INVALID_PUBLIC_KEY = "invalid_public_key"
    NO_PUBLIC_KEY = "no_public_key"
    INVALID_KEY_SIZE = "invalid_key_size"
    GENERATOR_MODE_REQUIRED = "generator_mode_required"
    CUSTOMER_REQUIRED = "customer_required"
    APP_ID_REQUIRED = "app_id_required"
    NO_SERVICES = "no_services"
    LICENSE_EXPIRED = "license_expired"
    IO = "io"
    FORMAT = "format"
    LICENSE_REJECTED = "license_rejected"


class LicenserError(Exception):
    """Base exception for all library errors."""

    kind: ErrorKind

    def __init__(self, message: str, kind: ErrorKind) -> None:
        super().__init__(message)
        self.kind = kind


class ConfigurationError(LicenserError):
    """Key material could not be resolved; the manager is not created."""


class NoPublicKeyError(ConfigurationError):
    def __init__(self, message: str = "no public key provided") -> None:
        super().__init__(message, ErrorKind.NO_PUBLIC_KEY)


class InvalidPrivateKeyError(ConfigurationError):
    def __init__(self, message: str = "invalid private key") -> None:
        super().__init__(message, ErrorKind.INVALID_PRIVATE_KEY)


class InvalidPublicKeyError(ConfigurationError):
    def __init__(self, message: str = "invalid public key") -> None:
        super().__init__(message, ErrorKind.INVALID_PUBLIC_KEY)


class InvalidKeySizeError(ConfigurationError):
    """A key of the requested size cannot be generated."""

    def __init__(self, key_size: int, reason: str = "") -> None:
        message = f"invalid key size: {key_size}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, ErrorKind.INVALID_KEY_SIZE)
        self.key_size = key_size


class ModeError(LicenserError):
    """Operation needs generator mode but the manager only validates."""

    def __init__(self, message: str = "generator mode is required") -> None:
        super().__init__(message, ErrorKind.GENERATOR_MODE_REQUIRED)


class ValidationError(LicenserError):
    """Exception for license content missing a required field."""

    def __init__(self, message: str, kind: ErrorKind, field: str) -> None:
        super().__init__(message, kind)
        self.field = field

    @classmethod
    def customer_required(cls) -> ValidationError:
        return cls("customer name is required", ErrorKind.CUSTOMER_REQUIRED, "customer")

    @classmethod
    def app_id_required(cls) -> ValidationError:
        return cls("application ID is required", ErrorKind.APP_ID_REQUIRED, "app_id")

    @classmethod
    def no_services(cls) -> ValidationError:
        return cls(
            "at least one service must be allowed", ErrorKind.NO_SERVICES, "services"
        )


class LicenseExpiredError(LicenserError):
    def __init__(self, message: str = "license has expired") -> None:
        super().__init__(message, ErrorKind.LICENSE_EXPIRED)


class LicenseIOError(LicenserError):
    """A file could not be read or written."""

    def __init__(self, message: str, path: Path | str) -> None:
        super().__init__(f"{message}: {path}", ErrorKind.IO)
        self.path = path


class LicenseFormatError(LicenserError):
    """Bytes do not decode as a signed license."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message, ErrorKind.FORMAT)
        self.path = path


class LicenseRejectedError(LicenserError):
    """Raised by guard decorators when a license does not allow a call."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message, ErrorKind.LICENSE_REJECTED)
        self.errors = list(errors or [])
