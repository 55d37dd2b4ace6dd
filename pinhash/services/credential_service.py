"""Async PIN hashing workflows."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

from pinhash.errors import HashingError
from pinhash.utils.logger import get_logger
from pinhash.utils.security import PinHasher, Secret


@dataclass(slots=True)
class CredentialService:
    """Runs Argon2 hashing and verification off the event loop.

    Both operations are CPU and memory bound, so they are executed in worker
    threads. PINs and digests never reach the logger.
    """

    hasher: PinHasher
    logger: Any = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if self.logger is None:
            self.logger = get_logger(__name__)

    async def hash(self, pin: Secret) -> str:
        """Hash a PIN and return the encoded hash."""

        try:
            encoded = await asyncio.to_thread(self.hasher.hash, pin)
        except HashingError as exc:
            self.logger.warning("pin_hash_failed", error=type(exc).__name__)
            raise

        params = self.hasher.params
        self.logger.info(
            "pin_hash_created",
            algorithm=params.variant,
            memory_cost=params.memory_cost,
            time_cost=params.time_cost,
            parallelism=params.parallelism,
        )
        return encoded

    async def verify(self, pin: Secret, pin_hash: str) -> bool:
        """Check a PIN against a stored hash."""

        try:
            ok = await asyncio.to_thread(self.hasher.verify, pin, pin_hash)
        except HashingError as exc:
            self.logger.warning("pin_verify_failed", error=type(exc).__name__)
            raise

        self.logger.info("pin_verified", ok=ok)
        return ok

    async def verify_and_rehash(self, pin: Secret, pin_hash: str) -> tuple[bool, str | None]:
        """Verify a PIN and return a replacement hash when the stored one is outdated.

        The replacement is only produced after a successful match; callers
        persist it in place of ``pin_hash``.
        """

        ok = await self.verify(pin, pin_hash)
        if not ok or not self.hasher.needs_rehash(pin_hash):
            return ok, None

        new_hash = await self.hash(pin)
        self.logger.info("pin_hash_upgraded", algorithm=self.hasher.params.variant)
        return ok, new_hash
