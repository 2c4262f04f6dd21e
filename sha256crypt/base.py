"""
Interfaces shared by crypt schemes.

A scheme is a pair of types: a ``Definition`` holding the cost settings and
acting as a factory, and a ``Crypter`` holding one salted hash. Both are
immutable; every "setter" returns a new instance.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

Password = Union[str, bytes]


def bounded(low: int, value: int, high: int) -> int:
    """Clamp ``value`` into ``[low, high]``."""
    return max(low, min(value, high))


def to_bytes(value: Optional[Password]) -> bytes:
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8", "surrogateescape")
    return bytes(value)


class Crypter(ABC):
    """One hashed password under a given scheme."""
    
    @abstractmethod
    def with_salt(self, salt: Optional[Password]) -> "Crypter":
        ...
    
    @abstractmethod
    def with_digest(self, digest: Optional[Password]) -> "Crypter":
        ...
    
    @abstractmethod
    def compute_from(self, password: Password) -> "Crypter":
        ...
    
    @abstractmethod
    def verify(self, password: Password) -> bool:
        ...
    
    @abstractmethod
    def format(self) -> str:
        ...
    
    @classmethod
    @abstractmethod
    def parse(cls, value: Union[str, bytes]) -> "Crypter":
        ...
    
    @abstractmethod
    def options(self) -> dict[str, Any]:
        ...
    
    @abstractmethod
    def definition(self) -> "Definition":
        ...
    
    def __str__(self) -> str:
        return self.format()
    
    def __bytes__(self) -> bytes:
        return to_bytes(self.format())


class Definition(ABC):
    """Cost settings of a scheme and a factory for its crypters."""
    
    prefix: str = ""
    
    @abstractmethod
    def options(self) -> dict[str, Any]:
        ...
    
    @abstractmethod
    def with_options(self, options: Optional[Mapping[str, Any]]) -> "Definition":
        ...
    
    @abstractmethod
    def default_record(self) -> Crypter:
        ...
    
    @abstractmethod
    def try_parse(self, value: Union[str, bytes]) -> Optional[Crypter]:
        ...
    
    def hash(
        self,
        password: Password,
        salt: Optional[Password] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """
        Hash ``password`` and return the encoded crypt string.
        
        Args:
            password: The password to hash
            salt: Optional salt; a random one is drawn when empty or None
            options: Optional scheme options applied before hashing
        
        Returns:
            The formatted crypt string
        """
        record = self.with_options(options).default_record()
        return record.with_salt(salt).compute_from(password).format()
