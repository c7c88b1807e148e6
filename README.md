# proprf

Building blocks for a two-party pseudorandom oblivious PRF over a 384-bit
prime field, plus a few related primitives.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `proprf.field`: arithmetic modulo the prime `P = (F << 128) + 1`, where `F`
  is a 256-bit number. It has `inverse` (raises `ZeroDivisionError` for zero),
  `raise_to_f` (exponentiation by `F` modulo `P`), `generate_coeff(epsilon)`
  (the binomial coefficients `C(2**epsilon, i)` modulo `P`), `bit_decompose`
  and `bit_compose` (bits least significant first), the 48-byte little-endian
  encoding `to_bytes` / `from_bytes`, and `FieldPRG`, which samples uniform
  elements of `[0, P)` from a 16-byte seed using AES-128 in counter fashion
  with rejection sampling.
- `proprf.floats`: `float_to_int62(value, s)` and `int62_to_float(value, s)`
  convert between 32-bit IEEE floats and 62-bit fixed-point integers with `s`
  fractional bits. Both truncate rather than round; negative values wrap
  modulo `2**61 - 1`.
- `proprf.genmatrix`: Kyber parameter sets (`KyberParams`, `params_for(k)` for
  `k` in 2, 3, 4), `rej_sample(buf)` which parses 256 coefficients below
  `Q = 7681` from uniform bytes, and `gen_matrix(seed, transposed, k)` which
  builds the public `k`-by-`k` matrix from a 32-byte seed with SHAKE128.
- `proprf.kyber`: `return_seed(pk, k)` and `set_seed(pk, seed, k)` read and
  replace the 32-byte seed stored after the polynomial vector in a packed
  public key.
- `proprf.lpn`: `LpnFp(n, k, seed, threads)` expands `n` correlations from `k`
  pre-correlations over `GF(2**61 - 1)`, adding ten pseudorandomly chosen
  pre-values into each entry. `compute_send` works on the sender's keys;
  `compute_recv` on the receiver's entries, which pack a value in the high
  64 bits and a MAC in the low 64 bits.
- `proprf.lowmc`: `LowMC(key)`, the LowMC block cipher with 64-bit blocks,
  a 128-bit key, 15 S-boxes and 11 rounds. Its matrices and constants come
  from a fixed pseudorandom stream; only the round keys depend on the key.
  `encrypt_block` takes one 64-bit block, `encrypt` a multiple of 64 bits.
- `proprf.cope`: `OprfCope` and `Party`, the correlated oblivious product
  evaluation between a sender (`Party.ALICE`), holding `delta`, and a
  receiver (`Party.BOB`). After `extend_sender(size)` and
  `extend_receiver(u)` the values satisfy `w = delta * u + v` modulo `P`;
  `check_triple` reveals `delta` and verifies the triples, raising
  `ValueError` on a wrong one.

## Example

```python
from proprf.field import P, FieldPRG, from_bytes, inverse, raise_to_f, to_bytes

prg = FieldPRG(bytes(16))
x = prg.sample()
assert from_bytes(to_bytes(x)) == x
assert x == 0 or x * inverse(x) % P == 1
y = raise_to_f(x)
```

```python
from proprf.lowmc import LowMC

cipher = LowMC([False] * 128)
ciphertext = cipher.encrypt([True, False] * 32)
assert len(ciphertext) == 64
```

## What the package does not do

- There is no networking. `OprfCope` talks through any object with
  `send_data(data)`, `recv_data(size)` and `flush()` methods that the caller
  supplies.
- There is no oblivious transfer. The seeds for `initialize_sender` and
  `initialize_receiver` must be produced by the caller.
- There is no complete OPRF evaluation, zero-knowledge proof system or
  command-line program; the modules are the building blocks only.
- The Kyber support covers parameters, matrix generation and the seed inside
  a packed public key. There is no key generation, encryption or decryption.