"""
Byte-mixing primitives for the SHA-crypt family.

Every helper works on plain byte spans so the same building blocks could feed
a different digest size.
"""

from cryptography.hazmat.primitives import hashes


def digest(*spans: bytes) -> bytes:
    """SHA-256 over the concatenation of ``spans``."""
    ctx = hashes.Hash(hashes.SHA256())
    for span in spans:
        ctx.update(span)
    return ctx.finalize()


def repeat_bytes(data: bytes, length: int) -> bytes:
    """
    Cycle ``data`` until it is exactly ``length`` bytes long.
    
    Args:
        data: Source bytes (a digest, in practice)
        length: Target length
    
    Returns:
        ``data`` repeated and truncated to ``length`` bytes
    """
    if length <= 0 or not data:
        return b""
    count, rest = divmod(length, len(data))
    return data * count + data[:rest]


def multiply_bytes(data: bytes, count: int) -> list[bytes]:
    return [data] * count


def mixer(length: int, alt: bytes, password: bytes) -> list[bytes]:
    """
    Walk the bits of ``length`` from the least significant one.
    
    Each set bit contributes ``alt``, each clear bit ``password``, until the
    remaining value is zero.
    """
    spans = []
    while length:
        spans.append(alt if length & 1 else password)
        length >>= 1
    return spans


def dispatch(index: int, previous: bytes, p_bytes: bytes, s_bytes: bytes) -> list[bytes]:
    """
    Build the input of round ``index``.
    
    The closing span is always the opposite of the opening one: odd rounds
    open with the password sequence and close with the previous digest, even
    rounds the other way around.
    """
    odd = index & 1
    spans = [p_bytes if odd else previous]
    if index % 3:
        spans.append(s_bytes)
    if index % 7:
        spans.append(p_bytes)
    spans.append(previous if odd else p_bytes)
    return spans
