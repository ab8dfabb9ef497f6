# VaultSync Hashing Utilities
# Content fingerprints for change detection

import hashlib

ROLLING = "rolling"

SUPPORTED_ALGORITHMS = frozenset({ROLLING} | hashlib.algorithms_guaranteed) - {"shake_128", "shake_256"}


def _rolling_hash(content: str) -> str:
    """31-multiplier string hash over UTF-16 code units, as computed by the sync server."""
    data = content.encode("utf-16-le")
    value = 0
    for low, high in zip(data[::2], data[1::2]):
        value = (value * 31 + (high << 8 | low)) & 0xFFFFFFFF

    if value & 0x80000000:
        value -= 1 << 32

    return format(abs(value), "08x") * 4


def fingerprint(content: str | bytes, *, algorithm: str = ROLLING) -> str:
    """
    Calculate the fingerprint of file content.

    Not a security primitive: equal content gives equal fingerprints,
    and each algorithm has a fixed output length.

    Args:
        content: String or bytes content.
        algorithm: "rolling" (server compatible, default) or a hashlib name.

    Returns:
        Hex fingerprint string.

    Raises:
        ValueError: If the algorithm is not supported.
    """
    if algorithm not in SUPPORTED_ALGORITHMS:
        raise ValueError(f"Unsupported fingerprint algorithm: {algorithm}")

    if algorithm == ROLLING:
        if isinstance(content, bytes):
            content = content.decode("utf-8")
        return _rolling_hash(content)

    if isinstance(content, str):
        content = content.encode("utf-8")

    hasher = hashlib.new(algorithm)
    hasher.update(content)
    return hasher.hexdigest()


def fingerprint_length(algorithm: str = ROLLING) -> int:
    """Length of fingerprints produced by an algorithm."""
    return len(fingerprint("", algorithm=algorithm))
