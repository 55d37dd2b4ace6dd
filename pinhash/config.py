"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global settings container."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PINHASH_",
        extra="ignore",
    )

    # Changing these only affects new hashes; stored hashes carry their own costs.
    argon2_variant: Literal["argon2id", "argon2i", "argon2d"] = "argon2id"
    argon2_memory_cost: int = Field(19456, ge=8, le=2**32 - 1)
    argon2_time_cost: int = Field(2, ge=1, le=2**32 - 1)
    argon2_parallelism: int = Field(1, ge=1, le=2**24 - 1)
    argon2_hash_len: int = Field(32, ge=4, le=2**32 - 1)
    argon2_salt_len: int = Field(16, ge=8, le=2**32 - 1)

    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "json"
    log_file_path: str = ""

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return str(value).strip().upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()
