"""Correlated oblivious product evaluation (COPE) over the OPRF field.

Both parties hold ``m`` PRG seeds obtained by base oblivious transfer. The
sender's seeds are picked by the bits of a secret ``delta``. The receiver's
seeds are the full pairs. After an extension the receiver holds
``(u, w)`` and the sender holds ``v`` such that ``w = delta * u + v``
modulo P.

The ``io`` object given to a party needs three methods:
``send_data(data: bytes)``, ``recv_data(size: int) -> bytes`` and
``flush()``.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Protocol

from proprf.field import P, P_BYTES, P_LEN, FieldPRG, bit_decompose, from_bytes, to_bytes


class Party(IntEnum):
    """Role of a participant: ALICE sends COPE values, BOB receives them."""

    ALICE = 1
    BOB = 2


class _Channel(Protocol):
    def send_data(self, data: bytes) -> None: ...

    def recv_data(self, size: int) -> bytes: ...

    def flush(self) -> None: ...


def _make_prgs(seeds: Sequence[bytes], m: int, label: str) -> list[FieldPRG]:
    if len(seeds) != m:
        raise ValueError(f"expected {m} {label}, got {len(seeds)}")
    return [FieldPRG(seed) for seed in seeds]


class OprfCope:
    """One side of the COPE protocol over the field modulo P."""

    def __init__(self, party: Party | int, io: _Channel, m: int = P_LEN) -> None:
        if m <= 0:
            raise ValueError("m must be positive")
        self.party = Party(party)
        self.io = io
        self.m = m
        self.delta: int | None = None
        self.delta_bits: list[bool] = []
        self._g0: list[FieldPRG] = []
        self._g1: list[FieldPRG] = []

    def initialize_sender(self, delta: int, seeds: Sequence[bytes]) -> None:
        """Set up the sender with ``delta`` and the seeds its bits selected."""
        if not 0 <= delta < P:
            raise ValueError("delta must lie in [0, P)")
        self._g0 = _make_prgs(seeds, self.m, "seeds")
        self.delta = delta
        self.delta_bits = bit_decompose(delta, self.m)

    def initialize_receiver(
        self, seeds0: Sequence[bytes], seeds1: Sequence[bytes]
    ) -> None:
        """Set up the receiver with both seeds of every transfer."""
        g0 = _make_prgs(seeds0, self.m, "first seeds")
        g1 = _make_prgs(seeds1, self.m, "second seeds")
        self._g0, self._g1 = g0, g1

    def extend_sender(self, size: int) -> list[int]:
        """Produce ``size`` sender values ``v`` from the receiver's message."""
        if self.delta is None or not self._g0:
            raise RuntimeError("sender is not initialized")
        if size < 0:
            raise ValueError("size must not be negative")
        w = [prg.sample() for prg in self._g0 for _ in range(size)]
        total = size * self.m * P_BYTES
        data = self.io.recv_data(total)
        if len(data) != total:
            raise ValueError(f"expected {total} bytes, got {len(data)}")
        for pos in range(len(w)):
            if self.delta_bits[pos // size]:
                chunk = data[pos * P_BYTES : (pos + 1) * P_BYTES]
                w[pos] = (w[pos] + from_bytes(chunk)) % P
        return self.prm2pr(w, size)

    def extend_receiver(self, u: Sequence[int]) -> list[int]:
        """Send the correction for inputs ``u`` and return the values ``w``."""
        if not self._g0 or not self._g1:
            raise RuntimeError("receiver is not initialized")
        size = len(u)
        w0: list[int] = []
        tau = bytearray()
        for g0, g1 in zip(self._g0, self._g1):
            for value in u:
                sample = g0.sample()
                w0.append(sample)
                w1 = P - (g1.sample() + value) % P
                tau += to_bytes((sample + w1) % P)
        self.io.send_data(bytes(tau))
        self.io.flush()
        return self.prm2pr(w0, size)

    def prm2pr(self, values: Sequence[int], size: int) -> list[int]:
        """Combine ``m`` rows of ``size`` values as sum of ``row_i * 2**i`` mod P."""
        if size < 0:
            raise ValueError("size must not be negative")
        if len(values) != self.m * size:
            raise ValueError(
                f"expected {self.m * size} values, got {len(values)}"
            )
        result = [0] * size
        for pos, value in enumerate(values):
            row, col = divmod(pos, size)
            result[col] += value << row
        return [value % P for value in result]

    def check_triple(self, a: Sequence[int], b: Sequence[int]) -> int:
        """Reveal and verify ``b = delta * a + c`` for every triple.

        ALICE sends ``delta`` and her values ``b``; BOB receives them and
        checks his values. Both return ``delta``. BOB raises ValueError on
        the first triple that does not hold.
        """
        if self.party is Party.ALICE:
            if self.delta is None:
                raise RuntimeError("sender is not initialized")
            self.io.send_data(to_bytes(self.delta))
            self.io.flush()
            for value in b:
                self.io.send_data(to_bytes(value))
                self.io.flush()
            return self.delta

        if len(a) != len(b):
            raise ValueError("a and b must have the same length")
        delta = from_bytes(self.io.recv_data(P_BYTES))
        self.delta = delta
        for index, (x, y) in enumerate(zip(a, b)):
            c = from_bytes(self.io.recv_data(P_BYTES))
            if (delta * x + c) % P != y:
                raise ValueError(f"wrong triple at index {index}")
        return delta