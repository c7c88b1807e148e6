"""Arithmetic in the prime field used by the OPRF, plus a seeded field sampler."""

from __future__ import annotations

import os
from collections.abc import Iterable

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

F = 115792089237316195423570985008687907853269984665640564039457584007913129606561
"""Exponent of the pseudorandom function; the field order minus one is F * 2**128."""

P = (F << 128) + 1
"""The 384-bit prime modulus."""

P_LEN = 384
"""Bit length used to encode field elements."""

P_BYTES = P_LEN // 8

_BLOCK = 16


def bit_decompose(num: int, size: int = P_LEN) -> list[bool]:
    """Return the lowest ``size`` bits of ``num``, least significant first."""
    if num < 0:
        raise ValueError("cannot decompose a negative number")
    if size < 0:
        raise ValueError("size must not be negative")
    return [bool((num >> i) & 1) for i in range(size)]


def bit_compose(bits: Iterable[bool]) -> int:
    """Rebuild an integer from bits given least significant first."""
    return sum(1 << i for i, bit in enumerate(bits) if bit)


def inverse(value: int) -> int:
    """Multiplicative inverse of ``value`` modulo P."""
    try:
        return pow(value, -1, P)
    except ValueError as exc:
        raise ZeroDivisionError(f"{value} has no inverse modulo P") from exc


def raise_to_f(value: int) -> int:
    """Compute ``value ** F`` modulo P."""
    return pow(value, F, P)


def generate_coeff(epsilon: int) -> list[int]:
    """Binomial coefficients C(2**epsilon, i) modulo P for i in 0..2**epsilon."""
    if epsilon < 0:
        raise ValueError("epsilon must not be negative")
    count = 1 << epsilon
    coeffs = []
    acc_up = 1
    acc_down = 1
    for i in range(count + 1):
        coeffs.append(acc_up * inverse(acc_down) % P)
        acc_up = acc_up * (count - i) % P
        acc_down = acc_down * (i + 1) % P
    return coeffs


def to_bytes(num: int) -> bytes:
    """Encode a field element as 48 little-endian bytes."""
    if num < 0:
        raise ValueError("cannot encode a negative number")
    if num.bit_length() > P_LEN:
        raise ValueError(f"number does not fit in {P_LEN} bits")
    return num.to_bytes(P_BYTES, "little")


def from_bytes(data: bytes) -> int:
    """Decode 48 little-endian bytes into an integer."""
    if len(data) != P_BYTES:
        raise ValueError(f"expected {P_BYTES} bytes, got {len(data)}")
    return int.from_bytes(data, "little")


class FieldPRG:
    """Pseudorandom generator of uniform elements of the field modulo P.

    Output blocks are AES-128 encryptions of a running counter under the seed.
    """

    def __init__(self, seed: bytes | None = None) -> None:
        self.reseed(os.urandom(_BLOCK) if seed is None else seed)

    def reseed(self, seed: bytes) -> None:
        """Restart the generator from ``seed`` (16 bytes)."""
        seed = bytes(seed)
        if len(seed) != _BLOCK:
            raise ValueError(f"seed must be {_BLOCK} bytes, got {len(seed)}")
        self._encryptor = Cipher(algorithms.AES(seed), modes.ECB()).encryptor()
        self._counter = 0

    def _random_blocks(self, count: int) -> bytes:
        counters = b"".join(
            (self._counter + i).to_bytes(_BLOCK, "little") for i in range(count)
        )
        self._counter += count
        return self._encryptor.update(counters)

    def sample(self) -> int:
        """Draw a uniform element of [0, P) by rejection sampling."""
        while True:
            value = int.from_bytes(self._random_blocks(3), "little")
            if value < P:
                return value