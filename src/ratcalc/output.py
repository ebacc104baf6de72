"""Render evaluated values as text or packed binary."""

from fractions import Fraction

import numpy as np

from .errors import OutputError


# element width in bytes → little-endian dtype
DTYPES = {
    1: np.dtype(np.uint8),
    2: np.dtype('<u2'),
    4: np.dtype('<u4'),
}


def format_value(value):
    """``Fraction`` → ``16`` / ``-17/7``; list → ``{1, {2, 3}}``."""
    parts = []
    # (is_value, item); text items are emitted as-is
    stack = [(True, value)]
    while stack:
        is_value, item = stack.pop()
        if not is_value:
            parts.append(item)
        elif isinstance(item, list):
            stack.append((False, '}'))
            for i, v in enumerate(reversed(item)):
                if i:
                    stack.append((False, ', '))
                stack.append((True, v))
            stack.append((False, '{'))
        else:
            parts.append(str(item))
    return ''.join(parts)


def flatten(value):
    """Yield the numbers of a value tree in order."""
    stack = [value]
    while stack:
        item = stack.pop()
        if isinstance(item, list):
            stack.extend(reversed(item))
        else:
            yield item


def pack_bytes(value, width=1):
    """Pack an integer value tree as little-endian unsigned elements.

    Args:
        value: ``Fraction`` or nested list of them.
        width: Element size in bytes (1, 2 or 4).

    Returns:
        bytes: ``width * count`` bytes.

    Raises:
        OutputError on non-integer or out-of-range elements.
    """
    if width not in DTYPES:
        raise OutputError(f"Element width must be 1, 2 or 4, got {width}")
    dtype = DTYPES[width]
    limit = np.iinfo(dtype).max

    ints = []
    for i, v in enumerate(flatten(value)):
        v = Fraction(v)
        if v.denominator != 1:
            raise OutputError(f"Element {i} is not an integer: {v}")
        if not 0 <= v.numerator <= limit:
            raise OutputError(
                f"Element {i} out of range for {width}-byte output: {v}")
        ints.append(v.numerator)

    return np.array(ints, dtype=dtype).tobytes()
