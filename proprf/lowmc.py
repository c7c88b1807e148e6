"""The LowMC block cipher with 64-bit blocks and 128-bit keys."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

NUM_SBOXES = 15
BLOCK_SIZE = 64
KEY_SIZE = 128
ROUNDS = 11
IDENTITY_SIZE = BLOCK_SIZE - 3 * NUM_SBOXES

_SBOX_MASK = (1 << (3 * NUM_SBOXES)) - 1


def _constant_bits(count: int, stream: Iterator[int]) -> list[int]:
    return [next(stream) for _ in range(count)]


def _bit_stream() -> Iterator[int]:
    """Low bits of the bytes of AES-128 counter output under the all-zero key."""
    encryptor = Cipher(algorithms.AES(bytes(16)), modes.ECB()).encryptor()
    counter = 0
    while True:
        block = encryptor.update(counter.to_bytes(16, "little"))
        counter += 1
        for byte in block:
            yield byte & 1


def _to_int(bits: Sequence[int]) -> int:
    return sum(1 << i for i, bit in enumerate(bits) if bit)


def _to_bits(value: int, size: int) -> list[bool]:
    return [bool((value >> i) & 1) for i in range(size)]


def _rows(bits: list[int], width: int) -> list[int]:
    return [_to_int(bits[i : i + width]) for i in range(0, len(bits), width)]


def _substitute(state: int) -> int:
    out = state & ~_SBOX_MASK
    for box in range(NUM_SBOXES):
        shift = 3 * box
        x0 = (state >> shift) & 1
        x1 = (state >> (shift + 1)) & 1
        x2 = (state >> (shift + 2)) & 1
        a = x0 ^ (x1 & x2)
        b = x0 ^ x1 ^ (x0 & x2)
        c = x0 ^ x1 ^ x2 ^ (x0 & x1)
        out |= (a | (b << 1) | (c << 2)) << shift
    return out


def _multiply(rows: list[int], state: int) -> int:
    out = 0
    for i, row in enumerate(rows):
        if (state >> i) & 1:
            out ^= row
    return out


class LowMC:
    """LowMC with 15 S-boxes and 11 rounds.

    The linear layers, round constants and key matrices are drawn from a
    fixed pseudorandom stream, so every instance shares them; only the round
    keys depend on the key. Bits are given and returned as sequences of
    booleans, least significant first.
    """

    def __init__(self, key: Sequence[bool]) -> None:
        if len(key) != KEY_SIZE:
            raise ValueError(f"key must have {KEY_SIZE} bits, got {len(key)}")
        stream = _bit_stream()
        lin_bits = _constant_bits(ROUNDS * BLOCK_SIZE * BLOCK_SIZE, stream)
        const_bits = _constant_bits(ROUNDS * BLOCK_SIZE, stream)
        key_bits = _constant_bits((ROUNDS + 1) * BLOCK_SIZE * KEY_SIZE, stream)

        lin_rows = _rows(lin_bits, BLOCK_SIZE)
        self._lin_matrices = [
            lin_rows[r * BLOCK_SIZE : (r + 1) * BLOCK_SIZE] for r in range(ROUNDS)
        ]
        self._round_constants = _rows(const_bits, BLOCK_SIZE)

        key_value = _to_int(key)
        key_rows = _rows(key_bits, KEY_SIZE)
        self._round_keys = []
        for r in range(ROUNDS + 1):
            matrix = key_rows[r * BLOCK_SIZE : (r + 1) * BLOCK_SIZE]
            round_key = 0
            for i, row in enumerate(matrix):
                round_key |= (bin(row & key_value).count("1") & 1) << i
            self._round_keys.append(round_key)

    def _encrypt_int(self, state: int) -> int:
        state ^= self._round_keys[0]
        for r in range(ROUNDS):
            state = _substitute(state)
            state = _multiply(self._lin_matrices[r], state)
            state ^= self._round_constants[r]
            state ^= self._round_keys[r + 1]
        return state

    def encrypt_block(self, block: Sequence[bool]) -> list[bool]:
        """Encrypt one 64-bit block."""
        if len(block) != BLOCK_SIZE:
            raise ValueError(f"block must have {BLOCK_SIZE} bits, got {len(block)}")
        return _to_bits(self._encrypt_int(_to_int(block)), BLOCK_SIZE)

    def encrypt(self, message: Sequence[bool]) -> list[bool]:
        """Encrypt consecutive 64-bit blocks independently."""
        if len(message) % BLOCK_SIZE:
            raise ValueError(
                f"message length {len(message)} is not a multiple of {BLOCK_SIZE}"
            )
        out: list[bool] = []
        for start in range(0, len(message), BLOCK_SIZE):
            out.extend(self.encrypt_block(message[start : start + BLOCK_SIZE]))
        return out