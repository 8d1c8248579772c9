"""Deterministic seed derivation from party identifiers."""

from __future__ import annotations


HASH_MULTIPLIER = 31
_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN_BIT = 0x80000000


def _to_int32(value: int) -> int:
    value &= _UINT32_MASK
    if value & _INT32_SIGN_BIT:
        value -= 1 << 32
    return value


def _utf16_code_units(text: str) -> list[int]:
    encoded = text.encode("utf-16-le", errors="surrogatepass")
    return [encoded[i] | (encoded[i + 1] << 8) for i in range(0, len(encoded), 2)]


def derive_seed(identifier: str) -> int:
    """Map an identifier to a non-negative seed via a 32-bit rolling hash.

    Each UTF-16 code unit is folded in as ``hash * 31 + unit`` and the
    accumulator wraps like a signed 32-bit integer after every step. The
    absolute value of the final accumulator is returned, so ``-2**31``
    becomes ``2**31``.
    """
    acc = 0
    for unit in _utf16_code_units(identifier):
        acc = _to_int32(acc * HASH_MULTIPLIER + unit)
    return abs(acc)
