import math

import pytest

from proprf.field import (
    F,
    P,
    P_LEN,
    FieldPRG,
    bit_compose,
    bit_decompose,
    from_bytes,
    generate_coeff,
    inverse,
    raise_to_f,
    to_bytes,
)


def test_modulus_structure():
    assert P == F * (1 << 128) + 1
    assert P.bit_length() == P_LEN


def test_raise_of_p_minus_ten_has_order_dividing_2_128():
    y = raise_to_f(P - 10)
    assert 0 < y < P
    assert pow(y, 1 << 128, P) == 1


def test_raise_is_multiplicative():
    a, b = P - 10, 123456789
    assert raise_to_f(a * b % P) == raise_to_f(a) * raise_to_f(b) % P


def test_raise_fixed_points():
    assert raise_to_f(0) == 0
    assert raise_to_f(1) == 1


@pytest.mark.parametrize("value", [1, 2, P - 10, 123456789, P - 1])
def test_inverse(value):
    assert value * inverse(value) % P == 1


def test_inverse_of_zero_raises():
    with pytest.raises(ZeroDivisionError):
        inverse(0)


def test_bit_round_trip():
    value = P - 10
    bits = bit_decompose(value)
    assert len(bits) == P_LEN
    assert bit_compose(bits) == value


def test_bit_decompose_order():
    assert bit_decompose(6, 4) == [False, True, True, False]


def test_bit_decompose_negative_raises():
    with pytest.raises(ValueError):
        bit_decompose(-1, 8)


def test_generate_coeff_binomials():
    coeffs = generate_coeff(3)
    assert coeffs == [math.comb(8, i) for i in range(9)]


def test_generate_coeff_sum():
    assert sum(generate_coeff(5)) % P == pow(2, 32, P)


def test_bytes_layout():
    assert to_bytes(1) == b"\x01" + bytes(47)
    assert to_bytes(0) == bytes(48)


def test_bytes_round_trip():
    value = P - 10
    encoded = to_bytes(value)
    assert len(encoded) == 48
    assert from_bytes(encoded) == value


def test_to_bytes_too_large():
    with pytest.raises(ValueError):
        to_bytes(1 << P_LEN)


def test_from_bytes_wrong_length():
    with pytest.raises(ValueError):
        from_bytes(bytes(47))


def test_prg_deterministic_and_in_range():
    seed = bytes(range(16))
    first = FieldPRG(seed)
    second = FieldPRG(seed)
    a = [first.sample() for _ in range(5)]
    b = [second.sample() for _ in range(5)]
    assert a == b
    assert all(0 <= x < P for x in a)
    assert len(set(a)) == 5


def test_prg_reseed_restarts():
    seed = bytes(16)
    prg = FieldPRG(seed)
    x = prg.sample()
    prg.sample()
    prg.reseed(seed)
    assert prg.sample() == x


def test_prg_different_seeds_differ():
    assert FieldPRG(bytes(16)).sample() != FieldPRG(b"\x01" * 16).sample()


def test_prg_bad_seed():
    with pytest.raises(ValueError):
        FieldPRG(b"short")