"""
Interfaces and protocols for dependency injection.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, Union

PathLike = Union[str, Path]

# Wall-clock source returning unix seconds
Clock = Callable[[], float]


class ILicenseStorage(Protocol):
    """Protocol for reading and writing license and key files."""

    def read_bytes(self, path: PathLike) -> bytes: ...

    def write_bytes(self, path: PathLike, data: bytes) -> None: ...
