"""
Data persistence utilities.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from licenser.common.config import Config
from licenser.common.exceptions import LicenseFormatError, LicenseIOError
from licenser.common.interfaces import PathLike  # noqa: TC001
from licenser.common.models import ManagerConfig, SignedLicense


class LicenseStorage:
    """Reads and writes whole files on the local filesystem."""

    def __init__(self, file_mode: int | None = None) -> None:
        self.file_mode = file_mode if file_mode is not None else Config().FILE_MODE

    def read_bytes(self, path: PathLike) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as err:
            msg = "failed to read file"
            raise LicenseIOError(msg, path) from err

    def write_bytes(self, path: PathLike, data: bytes) -> None:
        """Replace the file content, restricting access to the owner."""
        file_path = Path(path)
        try:
            fd = os.open(file_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.file_mode)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            file_path.chmod(self.file_mode)
        except OSError as err:
            msg = "failed to write file"
            raise LicenseIOError(msg, path) from err


def encode_license(signed_license: SignedLicense) -> bytes:
    return json.dumps(
        signed_license.wire_dict(), indent=2, ensure_ascii=False
    ).encode("utf-8")


def decode_license(data: bytes, path: PathLike | None = None) -> SignedLicense:
    """Decode the license wire format, reporting any failure as a format error."""
    try:
        return SignedLicense.model_validate_json(data)
    except PydanticValidationError as err:
        msg = "failed to decode license"
        raise LicenseFormatError(msg, path) from err


def load_manager_config(
    path: PathLike, storage: LicenseStorage | None = None
) -> ManagerConfig:
    """Load a ManagerConfig from a JSON file."""
    data = (storage or LicenseStorage()).read_bytes(path)
    try:
        return ManagerConfig.model_validate_json(data)
    except PydanticValidationError as err:
        msg = "failed to decode manager config"
        raise LicenseFormatError(msg, path) from err
