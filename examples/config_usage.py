"""
Configuration example: reuse existing keys and issue several license types.

Run basic_usage.py first so that examples/output/keys exists.
"""

import logging
import sys
from datetime import timedelta
from pathlib import Path

# Add the project root to the path to import licenser
sys.path.insert(0, str(Path(__file__).parent.parent))

from licenser import (
    LicenseBuilder,
    LicenseManager,
    LicenserError,
    ManagerConfig,
    Service,
    calculate_remaining_time,
    has_service,
    has_service_by_name,
    is_expiring_soon,
)

OUTPUT_DIR = Path(__file__).parent / "output"
KEYS_DIR = OUTPUT_DIR / "keys"
LICENSES_DIR = OUTPUT_DIR / "licenses"


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    try:
        manager = LicenseManager(
            ManagerConfig(
                private_key_path=KEYS_DIR / "private.pem",
                public_key_path=KEYS_DIR / "public.pem",
                generator_mode=True,
            )
        )
    except LicenserError:
        logger.exception("Failed to create license manager")
        sys.exit(1)

    licenses = {
        "basic": LicenseBuilder()
        .with_customer("Small Business")
        .with_app_id("basic-app")
        .with_service(Service(id="basic", name="Basic Service"))
        .with_limit("users", 5)
        .with_expiration_duration(timedelta(days=30))
        .build(),
        "premium": LicenseBuilder()
        .with_customer("Enterprise Corp")
        .with_app_id("premium-app")
        .with_service(Service(id="api", name="API Service"))
        .with_service(Service(id="analytics", name="Analytics Service"))
        .with_limit("users", 1000)
        .with_limit("api_calls", 100000)
        .with_feature("reporting", True)
        .with_feature("backup", True)
        .with_expiration_duration(timedelta(days=365))
        .build(),
        # No expiration: perpetual license
        "perpetual": LicenseBuilder()
        .with_customer("Lifetime Customer")
        .with_app_id("lifetime-app")
        .with_service(Service(id="all", name="All Services"))
        .with_feature("everything", True)
        .build(),
    }

    LICENSES_DIR.mkdir(parents=True, exist_ok=True)
    for name, lic in licenses.items():
        path = LICENSES_DIR / f"{name}-license.json"
        try:
            manager.save_license(manager.generate_license(lic), path)
        except LicenserError:
            logger.exception("Failed to generate %s license", name)
            continue
        logger.info("Generated and saved %s license to %s", name, path)

    for name in licenses:
        path = LICENSES_DIR / f"{name}-license.json"
        try:
            signed_license, result = manager.load_and_validate_license(path)
        except LicenserError:
            logger.exception("Failed to load %s license", name)
            continue
        if not result.valid:
            logger.error("%s license validation failed: %s", name, result.errors)
            continue
        info = manager.get_license_info(signed_license.data)
        logger.info(
            "%s license - customer: %s, status: %s, expires: %s",
            name,
            info.customer,
            info.status,
            info.time_until_expiry,
        )

    premium, _ = manager.load_and_validate_license(LICENSES_DIR / "premium-license.json")
    if has_service(premium.data, "api"):
        logger.info("Premium license includes API service")
    if has_service_by_name(premium.data, "Analytics Service"):
        logger.info("Premium license includes Analytics service by name")
    logger.info(
        "Premium license has %s remaining",
        calculate_remaining_time(premium.data.expires_at),
    )
    if is_expiring_soon(premium.data, timedelta(days=30)):
        logger.warning("Premium license expires within 30 days")
    else:
        logger.info("Premium license has plenty of time remaining")

    private_pem, public_pem = manager.export_keys()
    logger.info("Private key length: %d bytes", len(private_pem))
    logger.info("Public key length: %d bytes", len(public_pem))


if __name__ == "__main__":
    main()
