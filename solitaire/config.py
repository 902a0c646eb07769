"""Runtime configuration for the command line and fingerprinting."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

__all__ = ["LOG_LEVELS", "SolitaireConfig", "load_config"]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Length tokens meaning "print the whole digest".
_FULL_DIGEST_TOKENS = frozenset({"0", "full", "none"})


class SolitaireConfig(BaseModel):
    """Settings that may vary between hosts without changing cipher output."""

    model_config = ConfigDict(frozen=True)

    fingerprint_algorithm: str = Field(default="sha256", min_length=1)
    fingerprint_length: Optional[int] = Field(default=16, gt=0)
    log_level: str = Field(default="WARNING")

    @field_validator("fingerprint_length", mode="before")
    @classmethod
    def full_digest_tokens(cls, value: object) -> object:
        if isinstance(value, str):
            token = value.strip().lower()
            return None if token in _FULL_DIGEST_TOKENS else token
        return value

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level


def _describe(exc: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return f"Invalid configuration: {problems}"


@lru_cache(maxsize=1)
def load_config() -> SolitaireConfig:
    """Build the configuration from ``SOLITAIRE_*`` environment variables.

    A ``.env`` file is loaded first when present; variables already set in the
    environment win. Invalid values raise :class:`ConfigurationError`.
    """

    load_dotenv()

    try:
        return SolitaireConfig(
            fingerprint_algorithm=os.getenv("SOLITAIRE_FINGERPRINT_ALGORITHM", "sha256"),
            fingerprint_length=os.getenv("SOLITAIRE_FINGERPRINT_LENGTH") or 16,
            log_level=os.getenv("SOLITAIRE_LOG_LEVEL") or "WARNING",
        )
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc)) from exc
