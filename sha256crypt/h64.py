"""
The crypt(3) "h64" alphabet encoding.

Not standard base64: the alphabet starts with ``./`` and every 3-byte group is
read little-endian, emitting its least significant 6 bits first.
"""

import secrets

ALPHABET = b"./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"


def encode(data: bytes) -> bytes:
    """
    Encode ``data`` with the h64 alphabet.
    
    Full 3-byte groups give 4 characters; a trailing group of 2 bytes gives 3
    and a single trailing byte gives 2, so a 32-byte digest becomes 43
    characters.
    
    Args:
        data: Raw bytes, already in output order
    
    Returns:
        The encoded characters as ASCII bytes
    """
    out = bytearray()
    for start in range(0, len(data), 3):
        chunk = data[start:start + 3]
        value = int.from_bytes(chunk, "little")
        for _ in range(len(chunk) + 1):
            out.append(ALPHABET[value & 0x3F])
            value >>= 6
    return bytes(out)


def random_salt(length: int = 16) -> bytes:
    """Random salt made of h64 characters, safe to embed in a crypt string."""
    return bytes(secrets.choice(ALPHABET) for _ in range(length))
