"""Errors raised by PIN hashing and verification."""


class HashingError(Exception):
    """Base error for hashing operations."""


class MalformedInput(HashingError, ValueError):
    """Raised when an encoded hash cannot be parsed into a usable record."""


class EncodingFailure(HashingError):
    """Raised when hash parameters cannot be encoded or derivation fails."""


class RandomnessUnavailable(HashingError):
    """Raised when the secure random source cannot provide a salt."""
