"""
SHA256-CRYPT, the ``$5$`` scheme of glibc's crypt(3).

The transform follows Ulrich Drepper's "Unix crypt using SHA-256 and SHA-512"
description byte for byte. Any change in the mixing order, the output
permutation or the h64 grouping yields hashes other implementations reject.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional, Union

from cryptography.hazmat.primitives import constant_time

from . import h64
from .base import Crypter, Definition, Password, bounded, to_bytes
from .exceptions import CryptError, MalformedRecord, NotRecognized
from .mixing import digest, dispatch, mixer, multiply_bytes, repeat_bytes

logger = logging.getLogger(__name__)

PREFIX = "$5$"
ROUNDS_KEY = "rounds="

MIN_ROUNDS = 1000
MAX_ROUNDS = 999_999_999
DEFAULT_ROUNDS = 5000

SALT_LEN = 16
DIGEST_LEN = 43

# Output order of the final digest bytes; h64 then reads them in groups of 3.
PERMUTATION = (
    20, 10, 0,
    11, 1, 21,
    2, 22, 12,
    23, 13, 3,
    14, 4, 24,
    5, 25, 15,
    26, 16, 6,
    17, 7, 27,
    8, 28, 18,
    29, 19, 9,
    30, 31,
)


def compute(password: bytes, salt: bytes, rounds: int) -> bytes:
    """
    Run the SHA256-CRYPT transform.
    
    Args:
        password: Password bytes (may be empty)
        salt: Salt bytes, at most 16
        rounds: Number of rounds, already bounded
    
    Returns:
        The 32 permuted digest bytes, ready for h64 encoding
    """
    pwd_len = len(password)
    
    sum_b = digest(password, salt, password)
    sum_a = digest(password, salt, repeat_bytes(sum_b, pwd_len), *mixer(pwd_len, sum_b, password))
    
    p_bytes = repeat_bytes(digest(*multiply_bytes(password, pwd_len)), pwd_len)
    s_bytes = repeat_bytes(digest(*multiply_bytes(salt, 16 + sum_a[0])), len(salt))
    
    sum_c = sum_a
    for i in range(rounds):
        sum_c = digest(*dispatch(i, sum_c, p_bytes, s_bytes))
    
    return bytes(sum_c[k] for k in PERMUTATION)


def _to_text(value: bytes) -> str:
    return value.decode("utf-8", "surrogateescape")


def _clean_salt(salt: bytes) -> bytes:
    salt = salt.split(b"$", 1)[0][:SALT_LEN]
    if salt.startswith(ROUNDS_KEY.encode()):
        raise CryptError(f"Salt must not start with {ROUNDS_KEY!r}")
    return salt


def _parse_rounds(raw: str) -> int:
    if not (raw.isascii() and raw.isdigit()):
        raise MalformedRecord(f"Invalid rounds value: {raw!r}")
    return bounded(MIN_ROUNDS, int(raw), MAX_ROUNDS)


@dataclass(frozen=True)
class Sha256Crypt(Crypter):
    """
    One SHA256-CRYPT record: rounds, salt and encoded digest.
    
    Instances are frozen. ``with_salt``, ``with_digest`` and ``compute_from``
    return new records, so a template record can be shared freely.
    """
    rounds: int = DEFAULT_ROUNDS
    salt: bytes = b""
    digest: bytes = b""
    
    def __post_init__(self):
        rounds = bounded(MIN_ROUNDS, self.rounds, MAX_ROUNDS)
        if rounds != self.rounds:
            object.__setattr__(self, "rounds", rounds)
        object.__setattr__(self, "salt", _clean_salt(to_bytes(self.salt)))
        object.__setattr__(self, "digest", to_bytes(self.digest)[:DIGEST_LEN])
    
    def with_salt(self, salt: Optional[Password] = None) -> "Sha256Crypt":
        """
        Return a copy using ``salt``.
        
        An empty or missing salt is replaced by 16 random h64 characters.
        Like glibc, the salt stops at the first ``$`` and is cut to 16 bytes.
        The digest is kept as is, even though it no longer matches the new
        salt.
        
        Raises:
            CryptError: If the salt starts with ``rounds=``, which no $5$
                string could carry unambiguously
        """
        raw = to_bytes(salt)
        if not raw:
            raw = h64.random_salt(SALT_LEN)
        return replace(self, salt=raw)
    
    def with_digest(self, digest: Optional[Password]) -> "Sha256Crypt":
        return replace(self, digest=to_bytes(digest)[:DIGEST_LEN])
    
    def compute_from(self, password: Password) -> "Sha256Crypt":
        """
        Return a copy whose digest is computed from ``password``.
        
        Raises:
            UnicodeEncodeError: If a ``str`` password holds a lone surrogate
                outside U+DC80-U+DCFF
        """
        hashed = compute(to_bytes(password), self.salt, self.rounds)
        return replace(self, digest=h64.encode(hashed))
    
    def verify(self, password: Password) -> bool:
        """
        Check ``password`` against the stored digest.
        
        An empty password never matches, nor does a ``str`` that cannot be
        encoded as UTF-8. The comparison runs in constant time.
        """
        try:
            pwd = to_bytes(password)
        except UnicodeEncodeError:
            return False
        if not pwd:
            return False
        
        hashed = h64.encode(compute(pwd, self.salt, self.rounds))
        return constant_time.bytes_eq(hashed, self.digest)
    
    def format(self) -> str:
        salt = _to_text(self.salt)
        hashed = _to_text(self.digest)
        if self.rounds == DEFAULT_ROUNDS:
            return f"{PREFIX}{salt}${hashed}"
        return f"{PREFIX}{ROUNDS_KEY}{self.rounds}${salt}${hashed}"
    
    @classmethod
    def parse(cls, value: Union[str, bytes]) -> "Sha256Crypt":
        """
        Read a ``$5$`` string.
        
        Args:
            value: The encoded crypt string
        
        Returns:
            The parsed record, digest filled in but never recomputed
        
        Raises:
            NotRecognized: If ``value`` does not start with ``$5$``
            MalformedRecord: If the rounds segment or field count is wrong
        """
        text = _to_text(value) if isinstance(value, bytes) else value
        if not text.startswith(PREFIX):
            raise NotRecognized(PREFIX)
        
        rest = text[len(PREFIX):]
        if not rest:
            return cls()
        
        fields = rest.split("$", 2)
        if fields[-1] == "":
            fields.pop()
        
        rounds = DEFAULT_ROUNDS
        if fields and fields[0].startswith(ROUNDS_KEY):
            rounds = _parse_rounds(fields.pop(0)[len(ROUNDS_KEY):])
        
        if len(fields) > 2 or any("$" in field for field in fields):
            raise MalformedRecord(f"Too many fields in {PREFIX} string")
        
        salt = to_bytes(fields[0]) if fields else b""
        if salt.startswith(ROUNDS_KEY.encode()):
            raise MalformedRecord(f"Salt must not start with {ROUNDS_KEY!r}")
        hashed = to_bytes(fields[1]) if len(fields) > 1 else b""
        return cls(rounds=rounds, salt=salt, digest=hashed)
    
    def options(self) -> dict[str, Any]:
        return self.definition().options()
    
    def definition(self) -> "Sha256Definition":
        return Sha256Definition(self.rounds)


@dataclass(frozen=True)
class Sha256Definition(Definition):
    """Cost settings for SHA256-CRYPT and a factory for its records."""
    
    prefix = PREFIX
    
    rounds: int = DEFAULT_ROUNDS
    
    def __post_init__(self):
        object.__setattr__(self, "rounds", bounded(MIN_ROUNDS, self.rounds, MAX_ROUNDS))
    
    def options(self) -> dict[str, Any]:
        return {"rounds": self.rounds}
    
    def with_options(self, options: Optional[Mapping[str, Any]]) -> "Sha256Definition":
        """
        Apply ``options`` and return the resulting definition.
        
        Only ``rounds`` is understood. A missing or non-integer value leaves
        the definition unchanged; out-of-range values are clamped into
        ``[1000, 999999999]`` rather than rejected.
        """
        if not options or "rounds" not in options:
            return self
        
        value = options["rounds"]
        if isinstance(value, bool) or not isinstance(value, int):
            logger.debug("Ignoring non-integer rounds option of type %s", type(value).__name__)
            return self
        
        rounds = bounded(MIN_ROUNDS, value, MAX_ROUNDS)
        if rounds != value:
            logger.debug("Clamped rounds %d to %d", value, rounds)
        return Sha256Definition(rounds)
    
    def default_record(self) -> Sha256Crypt:
        return Sha256Crypt(rounds=self.rounds)
    
    def try_parse(self, value: Union[str, bytes]) -> Optional[Sha256Crypt]:
        """
        Parse ``value`` if it belongs to this scheme.
        
        Returns:
            The record, or None when the prefix is not ``$5$``
        
        Raises:
            MalformedRecord: If the prefix matches but the record is invalid
        """
        try:
            return Sha256Crypt.parse(value)
        except NotRecognized:
            return None
    
    def __str__(self) -> str:
        return "{SHA256-CRYPT}"


# Ready-made definition with the default cost.
SHA256 = Sha256Definition()
