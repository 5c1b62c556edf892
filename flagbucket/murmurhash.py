"""32-bit MurmurHash3 (x86 variant)."""

import struct

_MASK = 0xFFFFFFFF
_C1 = 0xCC9E2D51
_C2 = 0x1B873593


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _scramble(k: int) -> int:
    k = (k * _C1) & _MASK
    k = _rotl(k, 15)
    return (k * _C2) & _MASK


def murmurhash_v3(data: str | bytes, seed: int) -> int:
    """Return the unsigned 32-bit MurmurHash3 of ``data`` (UTF-8 for text)."""
    key = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    h = seed & _MASK
    block_end = len(key) - len(key) % 4

    for (k,) in struct.iter_unpack("<I", key[:block_end]):
        h ^= _scramble(k)
        h = _rotl(h, 13)
        h = (h * 5 + 0xE6546B64) & _MASK

    tail = key[block_end:]
    if tail:
        h ^= _scramble(int.from_bytes(tail, "little"))

    h ^= len(key)
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h