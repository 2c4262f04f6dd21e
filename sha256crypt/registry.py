"""
Explicit registry of crypt schemes.

The registry is filled once at start-up and then frozen; lookups afterwards
only read it, so it can be shared between threads without locking.
"""

import logging
import threading
from typing import Iterable, Optional, Union

from .base import Crypter, Definition, Password
from .config import config

logger = logging.getLogger(__name__)


class Registry:
    """Maps crypt prefixes to scheme definitions."""
    
    def __init__(self, definitions: Iterable[Definition] = ()):
        self._definitions: dict[str, Definition] = {}
        self._frozen = False
        for definition in definitions:
            self.register(definition)
    
    @property
    def is_frozen(self) -> bool:
        return self._frozen
    
    def register(self, definition: Definition) -> Definition:
        """
        Add a scheme definition.
        
        Args:
            definition: The definition to add, keyed by its prefix
        
        Returns:
            The same definition, so callers can register and keep it in one step
        
        Raises:
            RuntimeError: If the registry is already frozen
            ValueError: If another definition owns the same prefix
        """
        if self._frozen:
            raise RuntimeError("Registry is frozen")
        if not definition.prefix:
            raise ValueError(f"{definition} has no prefix")
        if definition.prefix in self._definitions:
            raise ValueError(f"Prefix {definition.prefix!r} is already registered")
        
        self._definitions[definition.prefix] = definition
        logger.debug("Registered %s for prefix %s", definition, definition.prefix)
        return definition
    
    def freeze(self) -> "Registry":
        self._frozen = True
        return self
    
    def definitions(self) -> tuple[Definition, ...]:
        return tuple(self._definitions.values())
    
    def find(self, value: Union[str, bytes]) -> Optional[Crypter]:
        """
        Parse ``value`` with the first scheme that recognises it.
        
        Returns:
            The parsed crypter, or None when no registered prefix matches
        """
        for definition in self._definitions.values():
            crypter = definition.try_parse(value)
            if crypter is not None:
                return crypter
        return None
    
    def verify(self, password: Password, value: Union[str, bytes]) -> bool:
        """Verify ``password`` against a stored crypt string of any registered scheme."""
        crypter = self.find(value)
        if crypter is None:
            logger.warning("No registered scheme recognises the stored hash")
            return False
        return crypter.verify(password)


_default_registry: Optional[Registry] = None
_default_lock = threading.Lock()


def default_registry() -> Registry:
    """
    Process-wide frozen registry, built once.
    
    SHA256-CRYPT is registered with the cost from ``config``, so its
    definition carries the rounds set by ``SHA256_CRYPT_ROUNDS``.
    """
    global _default_registry
    
    with _default_lock:
        if _default_registry is None:
            _default_registry = Registry([config.definition]).freeze()
        return _default_registry
