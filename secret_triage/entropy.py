"""Shannon entropy scoring for prioritizing likely secrets."""

import math
from collections import Counter

MAX_ENTROPY = 8.0  # log2(256): every byte value equally likely


def get_entropy(data: bytes | str) -> float:
    """Return the byte-level Shannon entropy of data, in bits.

    Strings are scored on their UTF-8 encoding. Empty input scores 0.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    if not data:
        return 0.0

    length = len(data)
    entropy = 0.0
    for count in Counter(data).values():
        px = count / length
        entropy -= px * math.log2(px)

    # Float error can push a uniform distribution a hair past the bound
    return min(max(entropy, 0.0), MAX_ENTROPY)


def get_max_line_entropy(data: bytes | str) -> float:
    """Return the highest entropy of any single line in data."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return max((get_entropy(line.strip()) for line in data.splitlines()), default=0.0)
