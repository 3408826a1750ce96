"""
Validation-only example, as it would run inside a shipped product.

Only the public key is available; run basic_usage.py first to create it and
the license file.
"""

import logging
import sys
from pathlib import Path

# Add the project root to the path to import licenser
sys.path.insert(0, str(Path(__file__).parent.parent))

from licenser import LicenseManager, LicenserError, ManagerConfig, has_service

OUTPUT_DIR = Path(__file__).parent / "output"


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    logger = logging.getLogger(__name__)

    try:
        manager = LicenseManager(
            ManagerConfig(public_key_path=OUTPUT_DIR / "keys" / "public.pem")
        )
        signed_license, result = manager.load_and_validate_license(
            OUTPUT_DIR / "licenses" / "acme-corp.json"
        )
    except LicenserError:
        logger.exception("Failed to load or validate license")
        sys.exit(1)

    if not result.valid:
        logger.error("License validation failed: %s", result.errors)
        sys.exit(1)
    logger.info("License is valid")

    info = manager.get_license_info(signed_license.data)
    logger.info("Customer: %s", info.customer)
    logger.info("App ID: %s", info.app_id)
    logger.info("Status: %s", info.status)
    logger.info("Expires: %s", info.time_until_expiry)

    if has_service(signed_license.data, "web-api"):
        logger.info("Web API service is available")
    if signed_license.data.features.get("analytics"):
        logger.info("Analytics feature is enabled")
    else:
        logger.info("Analytics feature is disabled")


if __name__ == "__main__":
    main()
