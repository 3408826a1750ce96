"""
Configuration settings for the licensing library.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from licenser.common.logging_utils import resolve_log_level


def _log_level_from_env(value: str | None, default: int) -> int:
    if not value:
        return default
    try:
        return resolve_log_level(int(value) if value.isdigit() else value)
    except ValueError:
        return default


class Config:
    """Central configuration class for all library settings."""

    def __init__(self) -> None:
        # Key settings
        self.DEFAULT_KEY_SIZE: int = int(os.getenv("LICENSER_KEY_SIZE", "2048"))
        self.PUBLIC_EXPONENT: int = 65537
        self.SIGNATURE_ALGORITHM: str = "RS256"

        # Files holding keys or licenses are owner read/write only
        self.FILE_MODE: int = 0o600

        # File paths
        self.KEYS_DIR: Path = Path(
            os.getenv("LICENSER_KEYS_DIR", str(Path.cwd() / "keys"))
        )
        self.PRIVATE_KEY_FILENAME: str = "private.pem"
        self.PUBLIC_KEY_FILENAME: str = "public.pem"
        self.PRIVATE_KEY_PATH: Path = self.KEYS_DIR / self.PRIVATE_KEY_FILENAME
        self.PUBLIC_KEY_PATH: Path = self.KEYS_DIR / self.PUBLIC_KEY_FILENAME
        self.LICENSE_FILE_PATH: Path = Path(
            os.getenv("LICENSER_LICENSE_FILE", "license.json")
        )

        # Logging
        self.LOG_LEVEL: int = _log_level_from_env(
            os.getenv("LICENSER_LOG_LEVEL"), logging.INFO
        )
