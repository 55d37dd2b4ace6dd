"""Utils package exports."""

from pinhash.utils.logger import get_logger, setup_logging
from pinhash.utils.security import PinHasher, hash_pin, needs_rehash, verify_pin

__all__ = ["hash_pin", "verify_pin", "needs_rehash", "PinHasher", "get_logger", "setup_logging"]
