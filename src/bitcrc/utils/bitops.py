# src/bitcrc/utils/bitops.py
from __future__ import annotations

import numpy as np


SUPPORTED_WIDTHS = (8, 16, 32, 64)


def _check(value: int, width: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"reverse{width}: value must be int")
    if not (0 <= value < (1 << width)):
        raise ValueError(f"reverse{width}: value out of range for {width} bits")
    return value


def reverse8(value: int) -> int:
    v = _check(value, 8)
    v = ((v & 0xF0) >> 4) | ((v & 0x0F) << 4)
    v = ((v & 0xCC) >> 2) | ((v & 0x33) << 2)
    v = ((v & 0xAA) >> 1) | ((v & 0x55) << 1)
    return v


def reverse16(value: int) -> int:
    v = _check(value, 16)
    v = ((v & 0xFF00) >> 8) | ((v & 0x00FF) << 8)
    v = ((v & 0xF0F0) >> 4) | ((v & 0x0F0F) << 4)
    v = ((v & 0xCCCC) >> 2) | ((v & 0x3333) << 2)
    v = ((v & 0xAAAA) >> 1) | ((v & 0x5555) << 1)
    return v


def reverse32(value: int) -> int:
    v = _check(value, 32)
    v = ((v & 0xFFFF0000) >> 16) | ((v & 0x0000FFFF) << 16)
    v = ((v & 0xFF00FF00) >> 8) | ((v & 0x00FF00FF) << 8)
    v = ((v & 0xF0F0F0F0) >> 4) | ((v & 0x0F0F0F0F) << 4)
    v = ((v & 0xCCCCCCCC) >> 2) | ((v & 0x33333333) << 2)
    v = ((v & 0xAAAAAAAA) >> 1) | ((v & 0x55555555) << 1)
    return v


def reverse64(value: int) -> int:
    v = _check(value, 64)
    v = ((v & 0xFFFFFFFF00000000) >> 32) | ((v & 0x00000000FFFFFFFF) << 32)
    v = ((v & 0xFFFF0000FFFF0000) >> 16) | ((v & 0x0000FFFF0000FFFF) << 16)
    v = ((v & 0xFF00FF00FF00FF00) >> 8) | ((v & 0x00FF00FF00FF00FF) << 8)
    v = ((v & 0xF0F0F0F0F0F0F0F0) >> 4) | ((v & 0x0F0F0F0F0F0F0F0F) << 4)
    v = ((v & 0xCCCCCCCCCCCCCCCC) >> 2) | ((v & 0x3333333333333333) << 2)
    v = ((v & 0xAAAAAAAAAAAAAAAA) >> 1) | ((v & 0x5555555555555555) << 1)
    return v


_REVERSE = {
    8: reverse8,
    16: reverse16,
    32: reverse32,
    64: reverse64,
}


def reverser(width: int):
    """Return the bit-reversal function for `width` (8, 16, 32 or 64)."""
    try:
        return _REVERSE[width]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported width: {width!r} (expected one of {SUPPORTED_WIDTHS})") from None


def reverse(value: int, width: int) -> int:
    return reverser(width)(value)


# ----------------------------
# numpy variant
# ----------------------------

# (dtype, [(high_mask, shift), ...]) per width, halves first
_ARRAY_STEPS = {
    8: (np.uint8, [(0xF0, 4), (0xCC, 2), (0xAA, 1)]),
    16: (np.uint16, [(0xFF00, 8), (0xF0F0, 4), (0xCCCC, 2), (0xAAAA, 1)]),
    32: (
        np.uint32,
        [(0xFFFF0000, 16), (0xFF00FF00, 8), (0xF0F0F0F0, 4), (0xCCCCCCCC, 2), (0xAAAAAAAA, 1)],
    ),
    64: (
        np.uint64,
        [
            (0xFFFFFFFF00000000, 32),
            (0xFFFF0000FFFF0000, 16),
            (0xFF00FF00FF00FF00, 8),
            (0xF0F0F0F0F0F0F0F0, 4),
            (0xCCCCCCCCCCCCCCCC, 2),
            (0xAAAAAAAAAAAAAAAA, 1),
        ],
    ),
}


def reverse_array(values: np.ndarray, width: int) -> np.ndarray:
    """
    Element-wise bit reversal of an unsigned numpy array.

    The array dtype must be the unsigned type of exactly `width` bits;
    narrower values are not zero-extended for you, since reversing in a
    wider register moves the bits to a different place.
    Returns a new array, the input is not modified.
    """
    if width not in _ARRAY_STEPS:
        raise ValueError(f"unsupported width: {width!r} (expected one of {SUPPORTED_WIDTHS})")
    dtype, steps = _ARRAY_STEPS[width]

    arr = np.asarray(values)
    if arr.dtype != dtype:
        raise TypeError(f"reverse_array: expected dtype {np.dtype(dtype).name}, got {arr.dtype.name}")

    all_ones = dtype((1 << width) - 1)
    out = arr.copy()
    for high, shift in steps:
        hi = dtype(high)
        lo = dtype(high ^ int(all_ones))
        s = dtype(shift)
        out = ((out & hi) >> s) | ((out & lo) << s)
    return out
