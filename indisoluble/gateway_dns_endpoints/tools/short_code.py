#!/usr/bin/env python3

"""Deterministic short codes for generated DNS labels.

Hashes arbitrary strings with SHA-224 and encodes the digest in lowercase
base36 so the result is usable inside a DNS label.
"""

from cryptography.hazmat.primitives import hashes


_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"

SHORT_CODE_LENGTH = 6


def _to_base36(raw: bytes) -> str:
    value = int.from_bytes(raw, "big")

    digits = []
    while value > 0:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])

    # Leading zero bytes are kept as leading zeros
    for byte in raw:
        if byte != 0:
            break
        digits.append(_BASE36_ALPHABET[0])

    return "".join(reversed(digits))


def to_base36_hash(value: str) -> str:
    """Return the lowercase base36 encoding of the SHA-224 digest of value."""
    digest = hashes.Hash(hashes.SHA224())
    digest.update(value.encode("utf-8"))

    return _to_base36(digest.finalize())


def short_code(value: str, length: int = SHORT_CODE_LENGTH) -> str:
    """Return the first length characters of the base36 hash of value."""
    return to_base36_hash(value)[:length]
