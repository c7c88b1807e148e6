"""Local linear code (LPN) expansion of VOLE correlations over GF(2**61 - 1)."""

from __future__ import annotations

import struct
from collections.abc import Sequence

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

PR = (1 << 61) - 1
"""The Mersenne prime 2**61 - 1 that all values are reduced by."""

D = 10
"""Number of pre-values added into every output entry."""

_LANE_BITS = 64
_LANE_MASK = (1 << _LANE_BITS) - 1
_BLOCK = 16
_GROUP = 4


def _make_block(high: int, low: int) -> bytes:
    return (low & _LANE_MASK).to_bytes(8, "little") + (high & _LANE_MASK).to_bytes(
        8, "little"
    )


def _split(value: int) -> tuple[int, int]:
    return (value >> _LANE_BITS) & _LANE_MASK, value & _LANE_MASK


class LpnFp:
    """Expand n output correlations from k pre-correlations with a sparse matrix.

    Every output row ``i`` has ``D`` column indices into the pre-values, derived
    by encrypting counter blocks built from ``i`` with AES under ``seed``. The
    sender's keys are single field elements; each receiver entry packs the
    value in its high 64 bits and the MAC in its low 64 bits, and each half is
    updated independently.

    Rows are split into ``threads + 1`` chunks of ``n // (threads + 1)`` rows;
    rows past the last whole chunk are left as they are.
    """

    def __init__(
        self, n: int, k: int, seed: bytes = bytes(_BLOCK), threads: int = 1
    ) -> None:
        if n <= 0 or k <= 0:
            raise ValueError("n and k must be positive")
        if threads < 0:
            raise ValueError("threads must not be negative")
        seed = bytes(seed)
        if len(seed) != _BLOCK:
            raise ValueError(f"seed must be {_BLOCK} bytes, got {len(seed)}")
        self.n = n
        self.k = k
        self.seed = seed
        self.threads = threads
        mask = 1
        while mask < k:
            mask = (mask << 1) | 1
        self._k_mask = mask
        self._encryptor = Cipher(algorithms.AES(seed), modes.ECB()).encryptor()

    def _reduce_index(self, raw: int) -> int:
        index = raw & self._k_mask
        return index - self.k if index >= self.k else index

    def _permuted_words(self, row: int, blocks: int) -> tuple[int, ...]:
        data = b"".join(_make_block(row, m) for m in range(blocks))
        encrypted = self._encryptor.update(data)
        return struct.unpack(f"<{blocks * 4}I", encrypted)

    def _indices_group(self, row: int) -> list[list[int]]:
        words = [self._reduce_index(w) for w in self._permuted_words(row, D)]
        return [words[offset::_GROUP] for offset in range(_GROUP)]

    def _indices_single(self, row: int) -> list[int]:
        words = self._permuted_words(row, 3)
        return [self._reduce_index(w) for w in words[:D]]

    def _row_indices(self) -> dict[int, list[int]]:
        width = self.n // (self.threads + 1)
        rows: dict[int, list[int]] = {}
        for chunk in range(self.threads + 1):
            start = chunk * width
            end = min((chunk + 1) * width, self.n)
            row = start
            while row < end - _GROUP:
                for offset, indices in enumerate(self._indices_group(row)):
                    rows[row + offset] = indices
                row += _GROUP
            while row < end:
                rows[row] = self._indices_single(row)
                row += 1
        return rows

    def _check_lengths(self, outputs: Sequence[int], pre: Sequence[int]) -> None:
        if len(outputs) != self.n:
            raise ValueError(f"expected {self.n} output entries, got {len(outputs)}")
        if len(pre) != self.k:
            raise ValueError(f"expected {self.k} pre-values, got {len(pre)}")

    def compute_send(self, keys: Sequence[int], pre_keys: Sequence[int]) -> list[int]:
        """Return the sender's expanded keys."""
        self._check_lengths(keys, pre_keys)
        pre = [value & _LANE_MASK for value in pre_keys]
        result = list(keys)
        for row, indices in self._row_indices().items():
            total = (result[row] & _LANE_MASK) + sum(pre[i] for i in indices)
            result[row] = total % PR
        return result

    def compute_recv(self, macs: Sequence[int], pre_macs: Sequence[int]) -> list[int]:
        """Return the receiver's expanded (value, MAC) entries, packed as 128 bits."""
        self._check_lengths(macs, pre_macs)
        pre = [_split(value) for value in pre_macs]
        result = list(macs)
        for row, indices in self._row_indices().items():
            high, low = _split(result[row])
            high = (high + sum(pre[i][0] for i in indices)) % PR
            low = (low + sum(pre[i][1] for i in indices)) % PR
            result[row] = (high << _LANE_BITS) | low
        return result