# Common utilities
from licenser.common.crypto import CryptoUtils as CryptoUtils
from licenser.common.logging_utils import setup_logger as setup_logger

__all__ = ["CryptoUtils", "setup_logger"]
