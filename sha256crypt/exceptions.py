"""
Errors raised while reading crypt strings.
"""


class CryptError(ValueError):
    """Base class for all sha256crypt errors."""


class NotRecognized(CryptError):
    """The string does not carry this scheme's prefix."""
    
    def __init__(self, prefix: str):
        super().__init__(f"Not a {prefix} crypt string")
        self.prefix = prefix


class MalformedRecord(CryptError):
    """The prefix matched but the rest of the string is not a valid record."""
