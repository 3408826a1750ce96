"""
Convenience predicates and formatting helpers for license content.
"""

from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from licenser.common.models import (
    LICENSE_EXPIRED,
    LICENSE_NEVER_EXPIRES,
    STATUS_ACTIVE,
    STATUS_EXPIRED,
)

if TYPE_CHECKING:
    from licenser.common.models import License


def _now(now: float | None) -> float:
    return time.time() if now is None else now


# Whole seconds representable by a timedelta
_MAX_SECONDS = timedelta.max // timedelta(seconds=1)


def timestamp_to_datetime(timestamp: float) -> datetime:
    """
    Convert a unix timestamp to an aware local datetime.

    Timestamps past what the platform or ``datetime`` can represent map to
    ``datetime.max`` (or ``datetime.min``) in UTC.
    """
    try:
        return datetime.fromtimestamp(timestamp).astimezone()
    except (OverflowError, OSError, ValueError):
        limit = datetime.min if timestamp < 0 else datetime.max
        return limit.replace(tzinfo=timezone.utc)


def has_service(license: License, identifier: str) -> bool:
    """Check if a license includes a service by ID or name."""
    return any(
        service.id == identifier or service.name == identifier
        for service in license.services
    )


def has_service_by_id(license: License, service_id: str) -> bool:
    return any(service.id == service_id for service in license.services)


def has_service_by_name(license: License, service_name: str) -> bool:
    return any(service.name == service_name for service in license.services)


def calculate_remaining_time(expires_at: int, now: float | None = None) -> timedelta:
    """
    Calculate the time left before a license expires.

    Returns a zero timedelta both for perpetual licenses (``expires_at == 0``)
    and for licenses that have already expired.
    """
    if expires_at == 0:
        return timedelta(0)
    remaining = expires_at - int(_now(now))
    if remaining < 0:
        return timedelta(0)
    if remaining > _MAX_SECONDS:
        return timedelta.max
    return timedelta(seconds=remaining)


def is_expiring_soon(
    license: License, within: timedelta, now: float | None = None
) -> bool:
    """Check if a license expires within the given window.

    Already expired licenses count as expiring soon; perpetual ones never do.
    """
    if license.expires_at == 0:
        return False
    return calculate_remaining_time(license.expires_at, now) <= within


def format_duration(duration: timedelta) -> str:
    if duration < timedelta(0):
        return LICENSE_EXPIRED

    total_minutes = duration // timedelta(minutes=1)
    days, rest = divmod(total_minutes, 24 * 60)
    hours, minutes = divmod(rest, 60)

    parts = []
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")

    if not parts:
        return "Less than 1 minute"
    return " ".join(parts)


def format_time_until_expiry(expires_at: int, now: float | None = None) -> str:
    """Format the time remaining until expiration as a short human string."""
    if expires_at == 0:
        return LICENSE_NEVER_EXPIRES

    remaining = calculate_remaining_time(expires_at, now)
    if remaining == timedelta(0):
        return LICENSE_EXPIRED
    return format_duration(remaining)


def format_expiry(expires_at: int) -> str:
    """Format an expiration timestamp in local time."""
    if expires_at == 0:
        return LICENSE_NEVER_EXPIRES
    return timestamp_to_datetime(expires_at).strftime("%Y-%m-%d %H:%M:%S %Z")


def get_license_status(license: License, now: float | None = None) -> str:
    if license.expires_at == 0:
        return STATUS_ACTIVE
    if int(_now(now)) > license.expires_at:
        return STATUS_EXPIRED
    return STATUS_ACTIVE
