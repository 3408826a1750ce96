from datetime import datetime, timedelta, timezone

import pytest

from licenser.common.helpers import (
    calculate_remaining_time,
    format_duration,
    format_expiry,
    format_time_until_expiry,
    get_license_status,
    has_service,
    has_service_by_id,
    has_service_by_name,
    is_expiring_soon,
    timestamp_to_datetime,
)
from licenser.common.models import License, Service

NOW = 1_700_000_000


@pytest.fixture
def lic() -> License:
    return License(
        services=[
            Service(id="service-1", name="Service One"),
            Service(id="service-2", name="Service Two"),
        ]
    )


def test_has_service_matches_id_or_name(lic: License) -> None:
    assert has_service(lic, "service-1")
    assert has_service(lic, "Service Two")
    assert not has_service(lic, "service-3")


def test_has_service_is_case_sensitive(lic: License) -> None:
    assert not has_service(lic, "SERVICE-1")
    assert not has_service(lic, "service one")


def test_has_service_empty_list() -> None:
    assert not has_service(License(), "")
    assert not has_service(License(), "anything")


def test_has_service_by_id_and_name(lic: License) -> None:
    assert has_service_by_id(lic, "service-1")
    assert not has_service_by_id(lic, "Service One")
    assert has_service_by_name(lic, "Service One")
    assert not has_service_by_name(lic, "service-1")


def test_duplicate_names_match_any() -> None:
    lic = License(services=[Service(id="a", name="Same"), Service(id="b", name="Same")])
    assert has_service_by_name(lic, "Same")


def test_is_expiring_soon() -> None:
    lic = License(expires_at=NOW + 10 * 86400)
    assert not is_expiring_soon(lic, timedelta(days=5), now=NOW)
    assert is_expiring_soon(lic, timedelta(days=10), now=NOW)
    assert is_expiring_soon(lic, timedelta(days=30), now=NOW)


def test_is_expiring_soon_for_expired_and_perpetual() -> None:
    assert is_expiring_soon(License(expires_at=NOW - 1), timedelta(0), now=NOW)
    assert not is_expiring_soon(License(), timedelta(days=100_000), now=NOW)


def test_calculate_remaining_time() -> None:
    assert calculate_remaining_time(0, now=NOW) == timedelta(0)
    assert calculate_remaining_time(NOW - 5, now=NOW) == timedelta(0)
    assert calculate_remaining_time(NOW + 90, now=NOW) == timedelta(seconds=90)


@pytest.mark.parametrize(
    ("duration", "expected"),
    [
        (timedelta(days=3, hours=4, minutes=5), "3d 4h 5m"),
        (timedelta(days=1), "1d"),
        (timedelta(hours=2, minutes=30), "2h 30m"),
        (timedelta(seconds=59), "Less than 1 minute"),
        (timedelta(seconds=-1), "License expired"),
    ],
)
def test_format_duration(duration: timedelta, expected: str) -> None:
    assert format_duration(duration) == expected


def test_format_time_until_expiry() -> None:
    assert format_time_until_expiry(0, now=NOW) == "License never expired"
    assert format_time_until_expiry(NOW - 1, now=NOW) == "License expired"
    assert format_time_until_expiry(NOW + 3660, now=NOW) == "1h 1m"


def test_format_expiry() -> None:
    assert format_expiry(0) == "License never expired"
    expected = datetime.fromtimestamp(NOW).astimezone().strftime("%Y-%m-%d %H:%M:%S")
    assert format_expiry(NOW).startswith(expected)


def test_get_license_status() -> None:
    assert get_license_status(License(), now=NOW) == "active"
    assert get_license_status(License(expires_at=NOW + 1), now=NOW) == "active"
    assert get_license_status(License(expires_at=NOW - 1), now=NOW) == "expired"


# First second of year 10000
YEAR_10000 = 253402300800


@pytest.mark.parametrize("expires_at", [YEAR_10000, 2**62, 2**63 - 1])
def test_far_future_expiry(expires_at: int) -> None:
    lic = License(expires_at=expires_at)
    assert calculate_remaining_time(expires_at, now=NOW) > timedelta(days=365 * 7000)
    assert not is_expiring_soon(lic, timedelta(days=30), now=NOW)
    assert "d " in format_time_until_expiry(expires_at, now=NOW)
    assert format_expiry(expires_at).startswith("9999-12-31")
    assert get_license_status(lic, now=NOW) == "active"


def test_timestamp_to_datetime_limits() -> None:
    assert timestamp_to_datetime(NOW) == datetime.fromtimestamp(NOW).astimezone()
    assert timestamp_to_datetime(2**63 - 1) == datetime.max.replace(tzinfo=timezone.utc)
    assert timestamp_to_datetime(-(2**63)) == datetime.min.replace(tzinfo=timezone.utc)


def test_remaining_time_clamps_to_timedelta_max() -> None:
    assert calculate_remaining_time(2**63 - 1, now=NOW) == timedelta.max
    assert format_duration(timedelta.max) == "999999999d 23h 59m"
    assert calculate_remaining_time(YEAR_10000, now=NOW) == timedelta(
        seconds=YEAR_10000 - NOW
    )
