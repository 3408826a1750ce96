"""License decorators for function protection.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

from licenser.common.exceptions import LicenseRejectedError
from licenser.common.helpers import has_service
from licenser.common.models import SignedLicense

logger = logging.getLogger(__name__)


def _resolve_license(
    license_source: SignedLicense | Callable[[], SignedLicense] | str,
    args: tuple[Any, ...],
) -> SignedLicense:
    """Get the license directly, from a callable, or from an attribute of self."""
    if isinstance(license_source, SignedLicense):
        return license_source
    if isinstance(license_source, str):
        if not args:
            msg = f"Cannot get license attribute '{license_source}' without self"
            raise ValueError(msg)
        return getattr(args[0], license_source)
    return license_source()


def requires_active_license(
    manager: Any,
    license_source: SignedLicense | Callable[[], SignedLicense] | str,
    error_message: str = "License is not valid",
    *,
    raise_exception: bool = True,
) -> Callable:
    """Decorator that runs the function only when the license validates.

    Args:
        manager: LicenseManager used to validate the license
        license_source: SignedLicense, callable returning one, or the name of
            an attribute on ``self`` holding one
        error_message: Message to use when the license is rejected
        raise_exception: Whether to raise LicenseRejectedError or return None

    Returns:
        Decorated function that only executes with a valid license
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            signed_license = _resolve_license(license_source, args)
            result = manager.validate_license(signed_license)
            if not result.valid:
                if raise_exception:
                    raise LicenseRejectedError(error_message, result.errors)
                logger.warning(
                    "License check failed: %s (%s)",
                    error_message,
                    "; ".join(result.errors),
                )
                return None
            return func(*args, **kwargs)

        return wrapper

    return decorator


def requires_service(
    license_source: SignedLicense | Callable[[], SignedLicense] | str,
    service: str,
    error_message: str | None = None,
    *,
    raise_exception: bool = True,
) -> Callable:
    """Decorator that runs the function only when the license grants a service.

    The service is matched by ID or name. Signature and expiry are not
    checked here; combine with requires_active_license for that.
    """
    message = error_message or f"License does not include service '{service}'"

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            signed_license = _resolve_license(license_source, args)
            if not has_service(signed_license.data, service):
                if raise_exception:
                    raise LicenseRejectedError(message)
                logger.warning("License check failed: %s", message)
                return None
            return func(*args, **kwargs)

        return wrapper

    return decorator
