"""
SHA256-CRYPT (``$5$``) password hashing, compatible with glibc crypt(3).

Handles:
- The SHA256-CRYPT transform and its output permutation
- h64 encoding of digests
- Parsing and formatting ``$5$`` strings
- An explicit registry for plugging schemes together
"""

from .base import Crypter, Definition
from .config import Config, config
from .exceptions import CryptError, MalformedRecord, NotRecognized
from .registry import Registry, default_registry
from .sha256_crypt import SHA256, Sha256Crypt, Sha256Definition

__all__ = [
    "Crypter",
    "Definition",
    "Config",
    "config",
    "CryptError",
    "MalformedRecord",
    "NotRecognized",
    "Registry",
    "default_registry",
    "SHA256",
    "Sha256Crypt",
    "Sha256Definition",
]
