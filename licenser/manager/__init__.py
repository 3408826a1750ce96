"""
License generation and validation.
"""

from .builder import LicenseBuilder
from .core import LicenseManager
from .keys import KeyGenerator, KeyPair

__all__ = ["KeyGenerator", "KeyPair", "LicenseBuilder", "LicenseManager"]
