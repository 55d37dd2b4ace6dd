"""Argon2 PIN hashing and verification."""

from pinhash.errors import EncodingFailure, HashingError, MalformedInput, RandomnessUnavailable
from pinhash.utils.phc import EncodedHash, HashParameters
from pinhash.utils.security import PinHasher, hash_pin, needs_rehash, verify_pin

__all__ = [
    "EncodedHash",
    "EncodingFailure",
    "HashParameters",
    "HashingError",
    "MalformedInput",
    "PinHasher",
    "RandomnessUnavailable",
    "hash_pin",
    "needs_rehash",
    "verify_pin",
]
