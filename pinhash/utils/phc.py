"""PHC string codec for Argon2 hashes.

Encoded form::

    $argon2id$v=19$m=19456,t=2,p=1$<salt>$<digest>

Salt and digest use standard base64 without padding. The ``v=`` segment is
optional when parsing; strings without it are read as version 0x13.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from pinhash.errors import EncodingFailure, MalformedInput

VARIANTS = ("argon2id", "argon2i", "argon2d")
VERSION_10 = 0x10
VERSION_13 = 0x13
VERSIONS = (VERSION_10, VERSION_13)

MIN_SALT_LEN = 8
MIN_HASH_LEN = 4
MAX_UINT32 = 2**32 - 1
MAX_PARALLELISM = 2**24 - 1

_COST_KEYS = ("m", "t", "p")


def encode_b64(raw: bytes) -> str:
    """Encode bytes as unpadded standard base64."""

    return base64.b64encode(raw).decode("ascii").rstrip("=")


def decode_b64(text: str) -> bytes:
    """Strictly decode unpadded standard base64."""

    if not text or "=" in text or len(text) % 4 == 1:
        raise MalformedInput("invalid base64 field")
    try:
        raw = base64.b64decode(text + "=" * (-len(text) % 4), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedInput("invalid base64 field") from exc
    # Reject encodings with stray bits set in the final character.
    if encode_b64(raw) != text:
        raise MalformedInput("non-canonical base64 field")
    return raw


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True, slots=True)
class HashParameters:
    """Argon2 algorithm identity and tunables."""

    variant: str = "argon2id"
    version: int = VERSION_13
    memory_cost: int = 19456
    time_cost: int = 2
    parallelism: int = 1
    hash_len: int = 32
    salt_len: int = 16

    def validate(self) -> None:
        """Raise ``ValueError`` if any field is outside Argon2 bounds."""

        if self.variant not in VARIANTS:
            raise ValueError(f"unknown algorithm: {self.variant!r}")
        for name in ("version", "memory_cost", "time_cost", "parallelism", "hash_len", "salt_len"):
            if not _is_int(getattr(self, name)):
                raise ValueError(f"{name} must be an integer")
        if self.version not in VERSIONS:
            raise ValueError(f"unsupported version: {self.version}")
        if not 1 <= self.time_cost <= MAX_UINT32:
            raise ValueError("time_cost must be between 1 and 2**32 - 1")
        if not 1 <= self.parallelism <= MAX_PARALLELISM:
            raise ValueError("parallelism out of range")
        if not 8 * self.parallelism <= self.memory_cost <= MAX_UINT32:
            raise ValueError("memory_cost must be between 8 * parallelism and 2**32 - 1")
        if not MIN_HASH_LEN <= self.hash_len <= MAX_UINT32:
            raise ValueError(f"hash_len must be between {MIN_HASH_LEN} and 2**32 - 1")
        if not MIN_SALT_LEN <= self.salt_len <= MAX_UINT32:
            raise ValueError(f"salt_len must be between {MIN_SALT_LEN} and 2**32 - 1")


@dataclass(frozen=True, slots=True)
class EncodedHash:
    """Parsed form of a PHC-encoded Argon2 hash."""

    variant: str
    version: int
    memory_cost: int
    time_cost: int
    parallelism: int
    salt: bytes
    digest: bytes

    def __repr__(self) -> str:
        return (
            f"EncodedHash(variant={self.variant!r}, version={self.version}, "
            f"m={self.memory_cost}, t={self.time_cost}, p={self.parallelism})"
        )

    @property
    def params(self) -> HashParameters:
        return HashParameters(
            variant=self.variant,
            version=self.version,
            memory_cost=self.memory_cost,
            time_cost=self.time_cost,
            parallelism=self.parallelism,
            hash_len=len(self.digest),
            salt_len=len(self.salt),
        )

    def to_string(self) -> str:
        """Render as a PHC string, raising ``EncodingFailure`` on invalid fields."""

        if not isinstance(self.salt, bytes) or not isinstance(self.digest, bytes):
            raise EncodingFailure("salt and digest must be bytes")
        try:
            self.params.validate()
        except ValueError as exc:
            raise EncodingFailure(f"cannot encode hash parameters: {exc}") from exc
        return (
            f"${self.variant}$v={self.version}"
            f"$m={self.memory_cost},t={self.time_cost},p={self.parallelism}"
            f"${encode_b64(self.salt)}${encode_b64(self.digest)}"
        )

    @classmethod
    def parse(cls, text: str) -> EncodedHash:
        """Parse a PHC string, raising ``MalformedInput`` on any defect."""

        if not isinstance(text, str):
            raise MalformedInput("encoded hash must be a string")

        parts = text.split("$")
        if parts[0] != "" or len(parts) not in (5, 6):
            raise MalformedInput("encoded hash has wrong structure")

        variant = parts[1]
        if variant not in VARIANTS:
            raise MalformedInput(f"unknown algorithm: {variant!r}")

        if len(parts) == 6:
            version = _parse_version(parts[2])
            costs, salt_b64, digest_b64 = parts[3:]
        else:
            version = VERSION_13
            costs, salt_b64, digest_b64 = parts[2:]

        memory_cost, time_cost, parallelism = _parse_costs(costs)
        record = cls(
            variant=variant,
            version=version,
            memory_cost=memory_cost,
            time_cost=time_cost,
            parallelism=parallelism,
            salt=decode_b64(salt_b64),
            digest=decode_b64(digest_b64),
        )
        try:
            record.params.validate()
        except ValueError as exc:
            raise MalformedInput(str(exc)) from exc
        return record


def _parse_int(value: str) -> int:
    # PHC decimals: ASCII digits, no sign, no leading zeros.
    if not value or not value.isascii() or not value.isdigit():
        raise MalformedInput("parameter value is not a decimal integer")
    if len(value) > 1 and value.startswith("0"):
        raise MalformedInput("parameter value has leading zeros")
    if len(value) > 10:
        raise MalformedInput("parameter value out of range")
    return int(value)


def _parse_version(segment: str) -> int:
    key, sep, value = segment.partition("=")
    if key != "v" or not sep:
        raise MalformedInput("missing version field")
    version = _parse_int(value)
    if version not in VERSIONS:
        raise MalformedInput(f"unsupported version: {version}")
    return version


def _parse_costs(segment: str) -> tuple[int, int, int]:
    fields = segment.split(",")
    if len(fields) != len(_COST_KEYS):
        raise MalformedInput("expected m, t and p parameters")
    values = []
    for expected, field in zip(_COST_KEYS, fields):
        key, sep, value = field.partition("=")
        if key != expected or not sep:
            raise MalformedInput(f"expected parameter {expected!r}")
        values.append(_parse_int(value))
    return values[0], values[1], values[2]
