"""Kyber parameter sets and generation of the public matrix A from a seed."""

from __future__ import annotations

import hashlib
from collections.abc import Iterator
from dataclasses import dataclass

N = 256
"""Number of coefficients in a polynomial."""

Q = 7681
"""Modulus of the coefficient ring."""

SYMBYTES = 32
"""Size in bytes of shared keys, hashes and seeds."""

SHAKE128_RATE = 168
"""Block size of SHAKE128 output in bytes."""

_INITIAL_BLOCKS = 4
_COEFF_MASK = 0x1FFF

_ETA = {2: 5, 3: 4, 4: 3}
_NAMES = {2: "Kyber512", 3: "Kyber768", 4: "Kyber1024"}

Polynomial = list[int]
Matrix = list[list[Polynomial]]


@dataclass(frozen=True)
class KyberParams:
    """Sizes and constants of one Kyber security level."""

    k: int
    eta: int
    n: int = N
    q: int = Q
    symbytes: int = SYMBYTES
    polybytes: int = 416
    polycompressedbytes: int = 96

    @property
    def name(self) -> str:
        return _NAMES[self.k]

    @property
    def polyvecbytes(self) -> int:
        return self.k * self.polybytes

    @property
    def polyveccompressedbytes(self) -> int:
        return self.k * 352

    @property
    def indcpa_msgbytes(self) -> int:
        return self.symbytes

    @property
    def indcpa_publickeybytes(self) -> int:
        return self.polyveccompressedbytes + self.symbytes

    @property
    def indcpa_secretkeybytes(self) -> int:
        return self.polyvecbytes

    @property
    def indcpa_bytes(self) -> int:
        return self.polyveccompressedbytes + self.polycompressedbytes

    @property
    def publickeybytes(self) -> int:
        return self.indcpa_publickeybytes

    @property
    def secretkeybytes(self) -> int:
        return (
            self.indcpa_secretkeybytes
            + self.indcpa_publickeybytes
            + 2 * self.symbytes
        )

    @property
    def ciphertextbytes(self) -> int:
        return self.indcpa_bytes


def params_for(k: int = 3) -> KyberParams:
    """Return the parameter set for module rank ``k`` (2, 3 or 4)."""
    if k not in _ETA:
        raise ValueError("k must be one of 2, 3, 4")
    return KyberParams(k=k, eta=_ETA[k])


def _candidates(buf: bytes) -> Iterator[int]:
    for pos in range(0, len(buf) - 1, 2):
        yield (buf[pos] | (buf[pos + 1] << 8)) & _COEFF_MASK


def rej_sample(buf: bytes) -> Polynomial:
    """Parse a polynomial from uniform bytes by rejection sampling.

    Each little-endian 16-bit word is masked to 13 bits and kept when it is
    below Q. Raises ValueError if the buffer runs out before N coefficients.
    """
    coeffs: Polynomial = []
    for value in _candidates(bytes(buf)):
        if value < Q:
            coeffs.append(value)
            if len(coeffs) == N:
                return coeffs
    raise ValueError(
        f"buffer of {len(buf)} bytes yields only {len(coeffs)} of {N} coefficients"
    )


def _sample_entry(extseed: bytes) -> Polynomial:
    length = SHAKE128_RATE * _INITIAL_BLOCKS
    while True:
        stream = hashlib.shake_128(extseed).digest(length)
        try:
            return rej_sample(stream)
        except ValueError:
            length += SHAKE128_RATE


def gen_matrix(seed: bytes, transposed: bool = False, k: int = 3) -> Matrix:
    """Generate the k-by-k matrix A, entry a[i][j] = Parse(SHAKE128(seed|j|i)).

    With ``transposed`` the indices are appended as seed|i|j, giving A^T.
    """
    params = params_for(k)
    seed = bytes(seed)
    if len(seed) != params.symbytes:
        raise ValueError(f"seed must be {params.symbytes} bytes, got {len(seed)}")
    matrix: Matrix = []
    for i in range(params.k):
        row = []
        for j in range(params.k):
            suffix = bytes((i, j)) if transposed else bytes((j, i))
            row.append(_sample_entry(seed + suffix))
        matrix.append(row)
    return matrix