"""
Configuration for sha256crypt.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from .base import bounded
from .sha256_crypt import DEFAULT_ROUNDS, MAX_ROUNDS, MIN_ROUNDS, SHA256, Sha256Definition

logger = logging.getLogger(__name__)

ROUNDS_ENV = "SHA256_CRYPT_ROUNDS"


def get_rounds(env_value: Optional[str]) -> int:
    """
    Read the rounds setting from an environment value.
    
    Missing or non-integer values give ``DEFAULT_ROUNDS``; values outside
    ``[MIN_ROUNDS, MAX_ROUNDS]`` are clamped. Both cases log a warning.
    """
    if env_value is None or not env_value.strip():
        return DEFAULT_ROUNDS
    
    try:
        rounds = int(env_value)
    except ValueError:
        logger.warning(
            "%s is not an integer; using default %d", ROUNDS_ENV, DEFAULT_ROUNDS
        )
        return DEFAULT_ROUNDS
    
    if not MIN_ROUNDS <= rounds <= MAX_ROUNDS:
        clamped = bounded(MIN_ROUNDS, rounds, MAX_ROUNDS)
        logger.warning(
            "%s must be between %d and %d; using %d",
            ROUNDS_ENV, MIN_ROUNDS, MAX_ROUNDS, clamped,
        )
        return clamped
    return rounds


@dataclass
class Config:
    """Hashing configuration."""
    
    # Cost used for new hashes
    ROUNDS: int = DEFAULT_ROUNDS
    
    @classmethod
    def from_env(cls) -> "Config":
        """Build a config from ``SHA256_CRYPT_ROUNDS``."""
        return cls(ROUNDS=get_rounds(os.getenv(ROUNDS_ENV)))
    
    @property
    def definition(self) -> Sha256Definition:
        """Scheme definition carrying the configured cost."""
        return SHA256.with_options({"rounds": self.ROUNDS})


# Global config instance
config = Config.from_env()
