"""Security helpers for PIN hashing and verification."""

from __future__ import annotations

import hmac
import secrets
from functools import lru_cache

from argon2.exceptions import HashingError as Argon2HashingError
from argon2.low_level import Type, hash_secret_raw

from pinhash.config import Settings, get_settings
from pinhash.errors import EncodingFailure, MalformedInput, RandomnessUnavailable
from pinhash.utils.phc import EncodedHash, HashParameters

Secret = str | bytes

_ARGON2_TYPES = {"argon2id": Type.ID, "argon2i": Type.I, "argon2d": Type.D}


def _secret_bytes(secret: Secret) -> bytes:
    if isinstance(secret, str):
        return secret.encode("utf-8")
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)
    raise TypeError("secret must be str or bytes")


def _random_salt(length: int) -> bytes:
    try:
        return secrets.token_bytes(length)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessUnavailable("secure random source is unavailable") from exc


def _derive(secret: bytes, salt: bytes, params: HashParameters) -> bytes:
    return hash_secret_raw(
        secret=secret,
        salt=salt,
        time_cost=params.time_cost,
        memory_cost=params.memory_cost,
        parallelism=params.parallelism,
        hash_len=params.hash_len,
        type=_ARGON2_TYPES[params.variant],
        version=params.version,
    )


class PinHasher:
    """Derives and verifies Argon2 PIN hashes.

    Instances hold only an immutable parameter set and are safe to share
    between threads. Verification always uses the parameters embedded in the
    stored hash, so changing ``params`` never invalidates existing hashes.
    """

    def __init__(self, params: HashParameters | None = None) -> None:
        self.params = params or HashParameters()

    @classmethod
    def from_settings(cls, settings: Settings) -> PinHasher:
        return cls(
            HashParameters(
                variant=settings.argon2_variant,
                memory_cost=settings.argon2_memory_cost,
                time_cost=settings.argon2_time_cost,
                parallelism=settings.argon2_parallelism,
                hash_len=settings.argon2_hash_len,
                salt_len=settings.argon2_salt_len,
            )
        )

    def hash(self, secret: Secret) -> str:
        """Hash a PIN with a fresh random salt and return the PHC string."""

        data = _secret_bytes(secret)
        try:
            self.params.validate()
        except ValueError as exc:
            raise EncodingFailure(f"invalid hash parameters: {exc}") from exc

        salt = _random_salt(self.params.salt_len)
        try:
            digest = _derive(data, salt, self.params)
        except Argon2HashingError as exc:
            raise EncodingFailure("argon2 derivation failed") from exc

        return EncodedHash(
            variant=self.params.variant,
            version=self.params.version,
            memory_cost=self.params.memory_cost,
            time_cost=self.params.time_cost,
            parallelism=self.params.parallelism,
            salt=salt,
            digest=digest,
        ).to_string()

    def verify(self, secret: Secret, encoded: str) -> bool:
        """Verify a PIN against a stored hash.

        A wrong PIN returns False. ``MalformedInput`` means the stored hash
        itself is unusable.
        """

        data = _secret_bytes(secret)
        record = EncodedHash.parse(encoded)
        try:
            candidate = _derive(data, record.salt, record.params)
        except Argon2HashingError as exc:
            raise MalformedInput("stored hash parameters are not usable") from exc
        return hmac.compare_digest(candidate, record.digest)

    def needs_rehash(self, encoded: str) -> bool:
        """Return True if the hash was not produced with the current parameters."""

        return EncodedHash.parse(encoded).params != self.params


@lru_cache(maxsize=1)
def get_hasher() -> PinHasher:
    """Return hasher configured from cached settings."""

    return PinHasher.from_settings(get_settings())


def hash_pin(pin: Secret) -> str:
    """Hash a PIN with Argon2 and a random salt."""

    return get_hasher().hash(pin)


def verify_pin(pin: Secret, pin_hash: str) -> bool:
    """Verify a PIN against a stored hash."""

    return get_hasher().verify(pin, pin_hash)


def needs_rehash(pin_hash: str) -> bool:
    """Return True if a stored hash should be replaced with one using current costs."""

    return get_hasher().needs_rehash(pin_hash)
