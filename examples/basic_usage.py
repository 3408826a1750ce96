"""
Basic usage example of LicenseManager.

This example creates a generator-mode manager with fresh keys, saves the keys,
builds and signs a license, writes it to disk and validates it again.
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
    ManagerConfig,
    Service,
    has_service_by_id,
    is_expiring_soon,
)

OUTPUT_DIR = Path(__file__).parent / "output"
KEYS_DIR = OUTPUT_DIR / "keys"
LICENSES_DIR = OUTPUT_DIR / "licenses"


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    try:
        manager = LicenseManager(ManagerConfig(key_size=2048, generator_mode=True))
        logger.info("License manager created")

        KEYS_DIR.mkdir(parents=True, exist_ok=True)
        LICENSES_DIR.mkdir(parents=True, exist_ok=True)
        manager.save_keys(KEYS_DIR / "private.pem", KEYS_DIR / "public.pem")
        logger.info("Keys saved to %s", KEYS_DIR)

        lic = (
            LicenseBuilder()
            .with_customer("Acme Corporation")
            .with_app_id("acme-web-app-v1")
            .with_service(
                Service(
                    id="web-api",
                    name="Web API Service",
                    description="REST API access for web application",
                )
            )
            .with_service(
                Service(
                    id="database",
                    name="Database Service",
                    description="Database access and operations",
                )
            )
            .with_limit("api_calls", 10000)
            .with_limit("users", 100)
            .with_limit("storage_gb", 50)
            .with_feature("analytics", True)
            .with_feature("reporting", False)
            .with_feature("backup", True)
            .with_expiration_duration(timedelta(days=365))
            .with_environment("production")
            .with_version("1.0.0")
            .build()
        )

        signed_license = manager.generate_license(lic)
        license_path = LICENSES_DIR / "acme-corp.json"
        manager.save_license(signed_license, license_path)
        logger.info("License saved to %s", license_path)

        loaded, result = manager.load_and_validate_license(license_path)
        if not result.valid:
            logger.error("License validation failed: %s", result.errors)
            sys.exit(1)
        if result.warnings:
            logger.warning("License validation warnings: %s", result.warnings)

        info = manager.get_license_info(loaded.data)
        logger.info("Customer: %s", info.customer)
        logger.info("App ID: %s", info.app_id)
        logger.info("Status: %s", info.status)
        logger.info("Environment: %s, version: %s", info.environment, info.version)
        logger.info(
            "Services: %d, features: %d, limits: %d",
            len(info.services),
            len(info.features),
            len(info.limits),
        )
        logger.info("Expires: %s", info.time_until_expiry)

        for service_id in ("web-api", "database"):
            logger.info(
                "Service %s licensed: %s",
                service_id,
                has_service_by_id(loaded.data, service_id),
            )
        logger.info("Features: %s", loaded.data.features)
        logger.info("Limits: %s", loaded.data.limits)

        if is_expiring_soon(loaded.data, timedelta(days=30)):
            logger.warning("License expires within 30 days")
        else:
            logger.info("License has sufficient time remaining")
    except Exception:
        logger.exception("Error")
        sys.exit(1)


if __name__ == "__main__":
    main()
